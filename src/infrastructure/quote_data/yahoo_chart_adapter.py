"""
Infrastructure adapter: Yahoo Finance v8 chart endpoint (httpx) -> IQuoteSource.
All Yahoo-specific details (URL, headers, the chart.result[0] envelope, meta
field names) are confined here; the rest of the codebase sees RawChart only.

A fresh AsyncClient is opened per request, so no connection outlives a call.
"""

from typing import Any, Optional

import httpx

from src.domain.entities.quote import ChartSeries, RawChart
from src.domain.errors import MalformedPayloadError, SymbolNotFoundError, UpstreamQuoteError
from src.domain.ports.quote_source_port import IQuoteSource

_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"


def _optional_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _mapping(value: Any, what: str, symbol: str) -> dict:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise MalformedPayloadError(f"Chart {what} for {symbol!r} is not an object")
    return value


def _sequence(value: Any, what: str, symbol: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise MalformedPayloadError(f"Chart {what} for {symbol!r} is not a list")
    return value


def parse_chart_payload(symbol: str, payload: Any) -> RawChart:
    """Map a v8 chart JSON document onto RawChart.

    Raises:
        SymbolNotFoundError:   the envelope holds no result for *symbol*.
        MalformedPayloadError: the document is not a chart envelope, or a
                               section of it has the wrong shape.
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("chart"), dict):
        raise MalformedPayloadError(f"Unexpected chart payload for {symbol!r}")
    results = _sequence(payload["chart"].get("result"), "result", symbol)
    if not results or results[0] is None:
        raise SymbolNotFoundError(symbol)

    result = _mapping(results[0], "result", symbol)
    meta = _mapping(result.get("meta"), "meta", symbol)
    indicators = _mapping(result.get("indicators"), "indicators", symbol)
    quote_blocks = _sequence(indicators.get("quote"), "indicators.quote", symbol)
    quotes = _mapping(quote_blocks[0] if quote_blocks else None, "indicators.quote[0]", symbol)

    def series(key: str) -> list[Optional[float]]:
        return [_optional_float(v) for v in _sequence(quotes.get(key), key, symbol)]

    return RawChart(
        symbol=symbol,
        display_name=meta.get("shortName") or meta.get("symbol") or symbol,
        currency=meta.get("currency") or "MYR",
        regular_market_price=_optional_float(meta.get("regularMarketPrice")),
        previous_close=_optional_float(
            meta.get("chartPreviousClose") or meta.get("previousClose")
        ),
        regular_market_volume=_optional_float(meta.get("regularMarketVolume")),
        fifty_two_week_high=_optional_float(meta.get("fiftyTwoWeekHigh")),
        fifty_two_week_low=_optional_float(meta.get("fiftyTwoWeekLow")),
        shares_outstanding=_optional_float(meta.get("sharesOutstanding")),
        exchange_name=meta.get("exchangeName"),
        series=ChartSeries(
            timestamps=list(_sequence(result.get("timestamp"), "timestamp", symbol)),
            open=series("open"),
            high=series("high"),
            low=series("low"),
            close=series("close"),
            volume=series("volume"),
        ),
    )


class YahooChartQuoteSource(IQuoteSource):
    """Fetches chart data from query2.finance.yahoo.com over HTTP."""

    BASE_URL = "https://query2.finance.yahoo.com/v8/finance/chart"

    def __init__(
        self,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Args:
            timeout:   Per-request timeout in seconds (transport default policy).
            transport: Optional httpx transport, e.g. httpx.MockTransport in tests.
        """
        self._timeout = timeout
        self._transport = transport

    async def fetch_chart(self, symbol: str, interval: str, range_: str) -> RawChart:
        params = {"interval": interval, "range": range_, "includePrePost": "false"}
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                headers={"User-Agent": _USER_AGENT},
                transport=self._transport,
            ) as client:
                response = await client.get(f"{self.BASE_URL}/{symbol}", params=params)
        except httpx.HTTPError as exc:
            raise UpstreamQuoteError(f"Chart fetch failed for {symbol}: {exc}") from exc

        if response.status_code == 404:
            raise SymbolNotFoundError(symbol)
        if response.is_error:
            raise UpstreamQuoteError(
                f"Chart fetch failed for {symbol}: {response.status_code} - {response.text[:200]}"
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise MalformedPayloadError(f"Chart response for {symbol!r} is not JSON") from exc
        return parse_chart_payload(symbol, payload)
