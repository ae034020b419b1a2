from src.domain.entities.instrument import CapBand, Instrument
from src.domain.entities.quote import QuoteSnapshot
from src.domain.services.movers import rank_movers

INSTRUMENTS = [
    Instrument("A.KL", "ALPHA", "Finance", CapBand.LARGE),
    Instrument("B.KL", "BETA", "Energy", CapBand.MID),
    Instrument("C.KL", "GAMMA", "Technology", CapBand.SMALL),
    Instrument("D.KL", "DELTA", "Telecom", CapBand.SMALL),
]


def quote(symbol, pct, volume=100.0, average=None, market_cap=None):
    return QuoteSnapshot(
        symbol=symbol,
        display_name=symbol,
        price=1.0,
        price_change=0.0,
        price_change_percent=pct,
        volume=volume,
        currency="MYR",
        average_volume_3_month=average,
        market_cap=market_cap,
    )


def test_gainers_losers_and_volume_leaders():
    quotes = [
        quote("A.KL", 1.5, volume=200, average=100),
        quote("B.KL", 4.0, volume=500, average=100),
        quote("C.KL", -2.0, volume=100, average=None),
        quote("D.KL", -0.5, volume=100, average=100),
    ]

    movers = rank_movers(quotes, INSTRUMENTS)

    assert [m.symbol for m in movers.gainers] == ["B.KL", "A.KL"]
    assert [m.symbol for m in movers.losers] == ["C.KL", "D.KL"]
    assert [m.symbol for m in movers.volume_leaders] == ["B.KL", "A.KL", "D.KL"]
    assert movers.volume_leaders[0].move_type == "Speculative"
    assert movers.gainers[1].name == "ALPHA"


def test_flat_quotes_are_neither_gainers_nor_losers():
    movers = rank_movers([quote("A.KL", 0.0)], INSTRUMENTS)

    assert movers.gainers == []
    assert movers.losers == []


def test_cap_band_prefers_market_cap_then_registry():
    quotes = [quote("A.KL", 1.0, market_cap=500_000_000), quote("B.KL", 2.0)]

    bands = {m.symbol: m.cap_band for m in rank_movers(quotes, INSTRUMENTS).gainers}

    assert bands == {"A.KL": CapBand.SMALL, "B.KL": CapBand.MID}


def test_limit_truncates_each_list():
    quotes = [quote(f"X{i}.KL", float(i + 1)) for i in range(8)]

    movers = rank_movers(quotes, INSTRUMENTS, limit=3)

    assert [m.change_percent for m in movers.gainers] == [8.0, 7.0, 6.0]
    assert movers.gainers[0].sector == "Unknown"
