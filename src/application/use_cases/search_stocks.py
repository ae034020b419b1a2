"""
Use-case: find Bursa Malaysia instruments matching a free-text query.
Depends only on Domain ports and entities.
"""

import logging

from src.domain.entities.search import SymbolMatch
from src.domain.errors import QuoteDataError
from src.domain.ports.quote_source_port import IQuoteSource
from src.domain.ports.symbol_search_port import ISymbolSearch

logger = logging.getLogger(__name__)

BURSA_SUFFIX = ".KL"


def is_bursa_match(match: SymbolMatch) -> bool:
    return (
        match.symbol.endswith(BURSA_SUFFIX)
        or match.exchange == "KLS"
        or "Kuala Lumpur" in match.exchange
    )


class SearchStocksUseCase:
    def __init__(self, symbol_search: ISymbolSearch, quote_source: IQuoteSource) -> None:
        self._symbol_search = symbol_search
        self._quote_source = quote_source

    async def execute(self, query: str) -> list[SymbolMatch]:
        """Search for *query*; blank queries return no results.

        When the search service finds no Bursa listing, the query is tried as a
        bare stock code (e.g. "1155" -> "1155.KL") against the quote source.

        Raises:
            SearchUnavailableError: if the search service fails.
        """
        if not query or not query.strip():
            return []
        matches = [m for m in await self._symbol_search.search(query.strip()) if is_bursa_match(m)]
        if matches:
            return matches

        code = query.strip().upper()
        symbol = code if code.endswith(BURSA_SUFFIX) else code + BURSA_SUFFIX
        try:
            raw = await self._quote_source.fetch_chart(symbol, "1d", "1d")
        except QuoteDataError as exc:
            logger.debug("Direct lookup for %s failed: %s", symbol, exc)
            return []
        return [
            SymbolMatch(
                symbol=raw.symbol,
                name=raw.display_name,
                exchange=raw.exchange_name or "Bursa Malaysia",
            )
        ]
