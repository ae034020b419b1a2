import asyncio

import pytest

from src.application.services.quote_batch_fetcher import QuoteBatchFetcher
from src.application.use_cases.get_market_overview import GetMarketOverviewUseCase
from src.application.use_cases.get_market_pulse import GetMarketPulseUseCase
from src.application.use_cases.get_stock_detail import GetStockDetailUseCase
from src.domain.entities.instrument import CapBand, Instrument
from tests.fakes import FakeQuoteSource, failing_source, make_chart, no_sleep

INSTRUMENTS = [
    Instrument("A.KL", "ALPHA", "Finance", CapBand.LARGE),
    Instrument("B.KL", "BETA", "Finance", CapBand.MID),
    Instrument("C.KL", "GAMMA", "Energy", CapBand.SMALL),
]


def overview_use_case(source, instruments=INSTRUMENTS):
    fetcher = QuoteBatchFetcher(source, sleep=no_sleep)
    return GetMarketOverviewUseCase(source, fetcher, instruments=instruments, index_symbol="^KLSE")


def test_partial_outage_keeps_the_quotes_that_succeeded():
    source = FakeQuoteSource(
        charts={
            "^KLSE": make_chart("^KLSE", price=1600.0, previous_close=1590.0),
            "A.KL": make_chart("A.KL"),
            "B.KL": make_chart("B.KL"),
        },
        errors=failing_source("C.KL"),
    )

    overview = asyncio.run(overview_use_case(source).execute())

    assert sorted(q.symbol for q in overview.quotes) == ["A.KL", "B.KL"]
    assert overview.instruments == INSTRUMENTS
    assert overview.index.price == 1600.0
    assert overview.status == "partial"


def test_index_failure_is_isolated_from_quotes():
    source = FakeQuoteSource(
        charts={i.symbol: make_chart(i.symbol) for i in INSTRUMENTS},
        errors=failing_source("^KLSE"),
    )

    overview = asyncio.run(overview_use_case(source).execute())

    assert overview.index is None
    assert len(overview.quotes) == 3
    assert overview.status == "ok"


def test_total_outage_is_a_valid_overview():
    source = FakeQuoteSource(errors=failing_source("^KLSE", "A.KL", "B.KL", "C.KL"))

    overview = asyncio.run(overview_use_case(source).execute())

    assert overview.quotes == []
    assert overview.index is None
    assert overview.status == "unavailable"


def test_empty_registry_is_unconfigured():
    overview = asyncio.run(overview_use_case(FakeQuoteSource(), instruments=[]).execute())

    assert overview.status == "unconfigured"


def test_pulse_ranks_sectors_and_movers():
    source = FakeQuoteSource(
        charts={
            "A.KL": make_chart("A.KL", price=11.0, previous_close=10.0),
            "B.KL": make_chart("B.KL", price=10.5, previous_close=10.0),
            "C.KL": make_chart("C.KL", price=9.0, previous_close=10.0),
        }
    )
    overview = asyncio.run(overview_use_case(source).execute())

    pulse = GetMarketPulseUseCase().execute(overview)

    assert [s.sector for s in pulse.sectors] == ["Energy", "Finance"]
    assert pulse.sectors[1].average_change_percent == pytest.approx(7.5)
    assert [n.sector for n in pulse.sector_cloud] == ["Energy", "Finance"]
    assert [m.symbol for m in pulse.movers.gainers] == ["A.KL", "B.KL"]
    assert [m.symbol for m in pulse.movers.losers] == ["C.KL"]


def test_stock_detail_normalises_symbol_and_looks_up_registry():
    source = FakeQuoteSource(charts={"1155.KL": make_chart("1155.KL")})

    detail = asyncio.run(GetStockDetailUseCase(QuoteBatchFetcher(source)).execute(" 1155.kl "))

    assert detail.quote.symbol == "1155.KL"
    assert detail.instrument.display_name == "MAYBANK"
    assert detail.chart.timestamps == [1, 2, 3]


def test_stock_detail_rejects_blank_symbol():
    use_case = GetStockDetailUseCase(QuoteBatchFetcher(FakeQuoteSource()))

    with pytest.raises(ValueError):
        asyncio.run(use_case.execute("  "))
