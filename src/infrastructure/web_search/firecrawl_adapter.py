"""
Infrastructure adapter: Firecrawl API (httpx) -> IWebSearch and IPageScraper.
Search results are scraped to markdown so downstream prompts get page text,
not just titles. Single pages are scraped with a short render wait because the
Bursa pages build their tables client-side.
"""

import logging
from typing import Any, Optional

import httpx

from src.domain.entities.search import NewsArticle, ScrapedPage
from src.domain.errors import SearchUnavailableError
from src.domain.ports.page_scraper_port import IPageScraper
from src.domain.ports.web_search_port import IWebSearch

logger = logging.getLogger(__name__)

# Firecrawl's time-based search filter values
_RECENCY_TBS = {"day": "qdr:d", "week": "qdr:w", "month": "qdr:m"}


class FirecrawlWebSearch(IWebSearch, IPageScraper):
    SEARCH_URL = "https://api.firecrawl.dev/v1/search"
    SCRAPE_URL = "https://api.firecrawl.dev/v1/scrape"
    SCRAPE_WAIT_MS = 3000

    def __init__(
        self,
        api_key: Optional[str],
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport

    async def search(
        self, query: str, limit: int = 10, recency: Optional[str] = None
    ) -> list[NewsArticle]:
        body: dict = {
            "query": query,
            "limit": limit,
            "scrapeOptions": {"formats": ["markdown"]},
        }
        if recency:
            body["tbs"] = _RECENCY_TBS[recency]

        payload = await self._post(self.SEARCH_URL, body, "search")
        items = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(items, list):
            logger.warning("Firecrawl search for %r returned no data list", query)
            return []
        return [
            NewsArticle(
                title=item.get("title") or item.get("url") or "",
                url=item.get("url") or "",
                description=item.get("description") or "",
                markdown=item.get("markdown") or "",
            )
            for item in items
            if isinstance(item, dict)
        ]

    async def scrape(self, url: str) -> ScrapedPage:
        body = {
            "url": url,
            "formats": ["markdown"],
            "onlyMainContent": True,
            "waitFor": self.SCRAPE_WAIT_MS,
        }
        payload = await self._post(self.SCRAPE_URL, body, "scrape")
        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, dict):
            raise SearchUnavailableError(f"Firecrawl scrape of {url} returned no page")
        metadata = data.get("metadata")
        title = metadata.get("title") if isinstance(metadata, dict) else None
        markdown = data.get("markdown")
        return ScrapedPage(
            url=url,
            title=title if isinstance(title, str) else "",
            markdown=markdown if isinstance(markdown, str) else "",
        )

    async def _post(self, endpoint: str, body: dict, action: str) -> Any:
        if not self._api_key:
            raise SearchUnavailableError("Firecrawl not configured (FIRECRAWL_API_KEY)")
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(
                    endpoint,
                    json=body,
                    headers={"Authorization": f"Bearer {self._api_key}"},
                )
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as exc:
            raise SearchUnavailableError(f"Firecrawl {action} failed: {exc}") from exc
        except ValueError as exc:
            raise SearchUnavailableError(f"Firecrawl returned invalid JSON: {exc}") from exc
