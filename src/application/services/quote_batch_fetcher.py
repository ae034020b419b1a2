"""
Application service: batched, partial-failure-tolerant quote retrieval.

Business decisions owned here:
  - BATCH_SIZE / BATCH_PAUSE_SECONDS: how hard we lean on the upstream service.
  - Overview window: one-day bars over five days, enough for a volume average.
  - Failure policy: a failed symbol is dropped from a batch overview, but a
    failed single-symbol detail fetch is raised to the caller.

Depends only on Domain ports and services; the quote source is injected.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional, Sequence

from src.domain.entities.quote import QuoteSnapshot, RawChart
from src.domain.errors import MalformedPayloadError, SymbolNotFoundError
from src.domain.ports.quote_source_port import IQuoteSource
from src.domain.services.metrics import enrich_quote

logger = logging.getLogger(__name__)


class QuoteBatchFetcher:
    BATCH_SIZE: int = 5
    BATCH_PAUSE_SECONDS: float = 0.2
    OVERVIEW_INTERVAL: str = "1d"
    OVERVIEW_RANGE: str = "5d"

    def __init__(
        self,
        source: IQuoteSource,
        batch_size: int = BATCH_SIZE,
        pause_seconds: float = BATCH_PAUSE_SECONDS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """
        Args:
            source:        IQuoteSource implementation.
            batch_size:    Symbols fetched concurrently per batch.
            pause_seconds: Delay inserted between consecutive batches.
            sleep:         Awaitable sleep; injectable so tests need not wait.
        """
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        self._source = source
        self._batch_size = batch_size
        self._pause_seconds = pause_seconds
        self._sleep = sleep

    async def fetch_quotes(self, symbols: Sequence[str]) -> list[QuoteSnapshot]:
        """Fetch and enrich quotes for *symbols*, dropping any that fail.

        Returns between 0 and len(symbols) snapshots. Order is not significant;
        consumers index by symbol. An empty result is a valid outcome (every
        fetch failed), not an error.
        """
        results: list[QuoteSnapshot] = []
        for start in range(0, len(symbols), self._batch_size):
            if start:
                await self._sleep(self._pause_seconds)
            batch = symbols[start : start + self._batch_size]
            settled = await asyncio.gather(*(self._fetch_one(s) for s in batch))
            results.extend(q for q in settled if q is not None)

        if symbols and not results:
            logger.warning("All %d quote fetches failed this cycle", len(symbols))
        return results

    async def _fetch_one(self, symbol: str) -> Optional[QuoteSnapshot]:
        try:
            raw = await self._source.fetch_chart(
                symbol, self.OVERVIEW_INTERVAL, self.OVERVIEW_RANGE
            )
            return enrich_quote(raw)
        except Exception as exc:
            logger.warning("Failed to fetch %s: %s", symbol, exc)
            return None

    async def fetch_detail(
        self, symbol: str, interval: str = "5m", range_: str = "1d"
    ) -> tuple[QuoteSnapshot, RawChart]:
        """Fetch one symbol's intraday chart and its enriched quote.

        Raises:
            SymbolNotFoundError: if upstream has no usable chart for *symbol*.
            UpstreamQuoteError:  on transport or status failure.
        """
        raw = await self._source.fetch_chart(symbol, interval, range_)
        try:
            quote = enrich_quote(raw)
        except MalformedPayloadError as exc:
            raise SymbolNotFoundError(symbol) from exc
        return quote, raw
