"""
Use-case: assemble one MarketOverview for the static instrument registry.
Depends only on Domain ports and entities and the QuoteBatchFetcher service.

The benchmark index fetch and the quote batch run concurrently and fail
independently: a failed index fetch leaves ``index`` empty, a total quote
outage leaves ``quotes`` empty, and neither raises.
"""

import asyncio
import logging
from typing import Optional, Sequence

from src.application.services.quote_batch_fetcher import QuoteBatchFetcher
from src.domain.entities.instrument import Instrument
from src.domain.entities.market import MarketOverview
from src.domain.entities.quote import IndexSnapshot
from src.domain.ports.quote_source_port import IQuoteSource
from src.domain.registry import BENCHMARK_INDEX_SYMBOL, BURSA_INSTRUMENTS
from src.domain.services.metrics import index_snapshot

logger = logging.getLogger(__name__)


class GetMarketOverviewUseCase:
    def __init__(
        self,
        source: IQuoteSource,
        fetcher: QuoteBatchFetcher,
        instruments: Sequence[Instrument] = BURSA_INSTRUMENTS,
        index_symbol: str = BENCHMARK_INDEX_SYMBOL,
    ) -> None:
        self._source = source
        self._fetcher = fetcher
        self._instruments = list(instruments)
        self._index_symbol = index_symbol

    async def execute(self) -> MarketOverview:
        index, quotes = await asyncio.gather(
            self._fetch_index(),
            self._fetcher.fetch_quotes([i.symbol for i in self._instruments]),
        )
        overview = MarketOverview(index=index, quotes=quotes, instruments=list(self._instruments))
        logger.info(
            "Market overview: %d/%d quotes, index=%s, status=%s",
            len(quotes),
            len(self._instruments),
            "yes" if index else "no",
            overview.status,
        )
        return overview

    async def _fetch_index(self) -> Optional[IndexSnapshot]:
        try:
            raw = await self._source.fetch_chart(
                self._index_symbol,
                QuoteBatchFetcher.OVERVIEW_INTERVAL,
                QuoteBatchFetcher.OVERVIEW_RANGE,
            )
            return index_snapshot(raw)
        except Exception as exc:
            logger.warning("Failed to fetch index %s: %s", self._index_symbol, exc)
            return None
