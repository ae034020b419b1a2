"""
Port (interface) for web search / scraping services used for news and
ownership research.
"""

from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities.search import NewsArticle


class IWebSearch(ABC):
    @abstractmethod
    async def search(
        self, query: str, limit: int = 10, recency: Optional[str] = None
    ) -> list[NewsArticle]:
        """Search the web and return scraped results.

        Args:
            query:   Free-text search query.
            limit:   Maximum number of results.
            recency: Time window filter ("day", "week", "month") or None.

        Raises:
            SearchUnavailableError: on transport failure or missing credentials.
        """
        ...
