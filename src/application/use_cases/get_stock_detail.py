"""
Use-case: quote, intraday chart and registry entry for a single symbol.
Depends only on Domain ports and entities and the QuoteBatchFetcher service.
"""

from src.application.services.quote_batch_fetcher import QuoteBatchFetcher
from src.domain.entities.quote import StockDetail
from src.domain.registry import find_instrument


class GetStockDetailUseCase:
    def __init__(self, fetcher: QuoteBatchFetcher) -> None:
        self._fetcher = fetcher

    async def execute(self, symbol: str, interval: str = "5m", range_: str = "1d") -> StockDetail:
        """Fetch detail for *symbol* (uppercased).

        Unlike the batch overview there is nothing to fall back on here, so
        upstream failures propagate.

        Raises:
            ValueError:          if *symbol* is blank.
            SymbolNotFoundError: if upstream has no data for *symbol*.
            UpstreamQuoteError:  on transport or status failure.
        """
        if not symbol or not symbol.strip():
            raise ValueError("symbol must be a non-empty string")
        normalized = symbol.upper().strip()
        quote, raw = await self._fetcher.fetch_detail(normalized, interval, range_)
        return StockDetail(
            quote=quote,
            chart=raw.series,
            instrument=find_instrument(normalized),
        )
