"""
Infrastructure adapter: yfinance -> IQuoteSource.
All yfinance-specific details (Ticker.history(), fast_info, info) are confined
here. yfinance is synchronous, so each fetch runs in a worker thread.
"""

import asyncio
from typing import Any, Optional

import yfinance as yf

from src.domain.entities.quote import ChartSeries, RawChart
from src.domain.errors import QuoteDataError, SymbolNotFoundError, UpstreamQuoteError
from src.domain.ports.quote_source_port import IQuoteSource


def _round(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    # pandas NaN compares unequal to itself
    return None if number != number else round(number, 4)


class YFinanceQuoteSource(IQuoteSource):
    """Fetches chart data from Yahoo Finance via the yfinance library."""

    async def fetch_chart(self, symbol: str, interval: str, range_: str) -> RawChart:
        try:
            return await asyncio.to_thread(self._fetch_chart_sync, symbol, interval, range_)
        except QuoteDataError:
            raise
        except Exception as exc:
            raise UpstreamQuoteError(f"yfinance fetch failed for {symbol}: {exc}") from exc

    def _fetch_chart_sync(self, symbol: str, interval: str, range_: str) -> RawChart:
        ticker = yf.Ticker(symbol)
        history = ticker.history(period=range_, interval=interval)
        if history.empty:
            raise SymbolNotFoundError(symbol)

        fast_info = ticker.fast_info
        current_price = getattr(fast_info, "last_price", None)
        if current_price is None:
            current_price = history["Close"].iloc[-1]

        return RawChart(
            symbol=symbol,
            display_name=symbol,
            currency=getattr(fast_info, "currency", None) or "MYR",
            regular_market_price=_round(current_price),
            previous_close=_round(getattr(fast_info, "previous_close", None)),
            regular_market_volume=_round(getattr(fast_info, "last_volume", None)),
            fifty_two_week_high=_round(getattr(fast_info, "year_high", None)),
            fifty_two_week_low=_round(getattr(fast_info, "year_low", None)),
            shares_outstanding=_round(getattr(fast_info, "shares", None)),
            exchange_name=getattr(fast_info, "exchange", None),
            series=ChartSeries(
                timestamps=[int(ts.timestamp()) for ts in history.index],
                open=[_round(v) for v in history["Open"]],
                high=[_round(v) for v in history["High"]],
                low=[_round(v) for v in history["Low"]],
                close=[_round(v) for v in history["Close"]],
                volume=[_round(v) for v in history["Volume"]],
            ),
        )
