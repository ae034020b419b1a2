"""
Use-case: recent Bursa Malaysia market news from the web search collaborator.
"""

from typing import Optional

from src.domain.entities.search import NewsArticle
from src.domain.ports.web_search_port import IWebSearch

DEFAULT_NEWS_QUERY = "Bursa Malaysia stock market news today"


class GetMarketNewsUseCase:
    NEWS_LIMIT: int = 10

    def __init__(self, web_search: IWebSearch) -> None:
        self._web_search = web_search

    async def execute(self, query: Optional[str] = None) -> list[NewsArticle]:
        """Return up to NEWS_LIMIT articles from the last 24 hours.

        Raises:
            SearchUnavailableError: if the web search collaborator fails.
        """
        search_query = query.strip() if query and query.strip() else DEFAULT_NEWS_QUERY
        return await self._web_search.search(search_query, limit=self.NEWS_LIMIT, recency="day")
