import asyncio
from types import SimpleNamespace

import pandas as pd
import pytest

from src.domain.errors import SymbolNotFoundError, UpstreamQuoteError
from src.infrastructure.config import Settings
from src.infrastructure.entrypoints.composition import build_quote_source
from src.infrastructure.quote_data import yfinance_adapter
from src.infrastructure.quote_data.yahoo_chart_adapter import YahooChartQuoteSource
from src.infrastructure.quote_data.yfinance_adapter import YFinanceQuoteSource

HISTORY = pd.DataFrame(
    {
        "Open": [10.0, 10.1],
        "High": [10.2, 10.3],
        "Low": [9.9, 10.0],
        "Close": [10.1, 10.25],
        "Volume": [1000, float("nan")],
    },
    index=pd.to_datetime(["2024-01-02", "2024-01-03"]).tz_localize("Asia/Kuala_Lumpur"),
)


class FakeTicker:
    def __init__(self, history: pd.DataFrame, fast_info=None, error: Exception = None) -> None:
        self._history = history
        self._error = error
        self.fast_info = fast_info or SimpleNamespace(
            last_price=10.25, previous_close=10.0, last_volume=5000, currency="MYR", shares=None
        )
        self.calls = []

    def history(self, period: str, interval: str) -> pd.DataFrame:
        self.calls.append((period, interval))
        if self._error is not None:
            raise self._error
        return self._history


def use_ticker(monkeypatch, ticker: FakeTicker) -> None:
    monkeypatch.setattr(yfinance_adapter.yf, "Ticker", lambda symbol: ticker)


def test_fetch_chart_maps_history_and_fast_info(monkeypatch):
    ticker = FakeTicker(HISTORY)
    use_ticker(monkeypatch, ticker)

    raw = asyncio.run(YFinanceQuoteSource().fetch_chart("1155.KL", "1d", "5d"))

    assert ticker.calls == [("5d", "1d")]
    assert raw.regular_market_price == 10.25
    assert raw.previous_close == 10.0
    assert raw.regular_market_volume == 5000.0
    assert raw.shares_outstanding is None
    assert raw.series.close == [10.1, 10.25]
    assert raw.series.volume == [1000.0, None]
    assert len(raw.series.timestamps) == 2


def test_empty_history_is_symbol_not_found(monkeypatch):
    use_ticker(monkeypatch, FakeTicker(HISTORY.iloc[0:0]))

    with pytest.raises(SymbolNotFoundError):
        asyncio.run(YFinanceQuoteSource().fetch_chart("NOPE.KL", "1d", "5d"))


def test_library_failure_is_upstream_error(monkeypatch):
    use_ticker(monkeypatch, FakeTicker(HISTORY, error=RuntimeError("rate limited")))

    with pytest.raises(UpstreamQuoteError):
        asyncio.run(YFinanceQuoteSource().fetch_chart("1155.KL", "1d", "5d"))


def test_quote_provider_selects_adapter():
    assert isinstance(build_quote_source(Settings(quote_provider="yfinance")), YFinanceQuoteSource)
    assert isinstance(build_quote_source(Settings()), YahooChartQuoteSource)
