"""
Infrastructure adapter: Yahoo Finance search endpoints (httpx) -> ISymbolSearch.
The v1 search endpoint is tried first; if it answers with an error status the
older v6 autocomplete endpoint is used instead.
"""

from typing import Any, Optional

import httpx

from src.domain.entities.search import SymbolMatch
from src.domain.errors import SearchUnavailableError
from src.domain.ports.symbol_search_port import ISymbolSearch

_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"


class YahooSymbolSearch(ISymbolSearch):
    SEARCH_URL = "https://query2.finance.yahoo.com/v1/finance/search"
    AUTOCOMPLETE_URL = "https://query2.finance.yahoo.com/v6/finance/autocomplete"

    def __init__(
        self,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._timeout = timeout
        self._transport = transport

    async def search(self, query: str) -> list[SymbolMatch]:
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                headers={"User-Agent": _USER_AGENT},
                transport=self._transport,
            ) as client:
                response = await client.get(
                    self.SEARCH_URL,
                    params={
                        "q": query,
                        "quotesCount": 25,
                        "newsCount": 0,
                        "enableFuzzyQuery": "true",
                        "quotesQueryId": "tss_match_phrase_query",
                        "region": "MY",
                    },
                )
                if response.is_success:
                    return self._from_search(response.json())

                fallback = await client.get(
                    self.AUTOCOMPLETE_URL,
                    params={"query": query, "lang": "en", "region": "MY"},
                )
                if not fallback.is_success:
                    raise SearchUnavailableError(f"Search failed: {response.status_code}")
                return self._from_autocomplete(fallback.json())
        except httpx.HTTPError as exc:
            raise SearchUnavailableError(f"Search failed: {exc}") from exc
        except ValueError as exc:
            raise SearchUnavailableError(f"Search returned invalid JSON: {exc}") from exc

    @staticmethod
    def _from_search(payload: Any) -> list[SymbolMatch]:
        quotes = payload.get("quotes") or [] if isinstance(payload, dict) else []
        return [
            SymbolMatch(
                symbol=q["symbol"],
                name=q.get("shortname") or q.get("longname") or q["symbol"],
                exchange=q.get("exchDisp") or q.get("exchange") or "Bursa Malaysia",
                type=q.get("quoteType") or "EQUITY",
                sector=q.get("sector") or "",
                industry=q.get("industry") or "",
            )
            for q in quotes
            if isinstance(q, dict) and q.get("symbol")
        ]

    @staticmethod
    def _from_autocomplete(payload: Any) -> list[SymbolMatch]:
        result_set = payload.get("ResultSet") or {} if isinstance(payload, dict) else {}
        return [
            SymbolMatch(
                symbol=r["symbol"],
                name=r.get("name") or r["symbol"],
                exchange=r.get("exchDisp") or "Bursa Malaysia",
                type=r.get("typeDisp") or "Equity",
            )
            for r in result_set.get("Result") or []
            if isinstance(r, dict) and r.get("symbol")
        ]
