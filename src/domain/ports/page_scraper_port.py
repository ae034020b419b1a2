"""
Port (interface) for single-page scraping services.
Infrastructure adapters (e.g. FirecrawlWebSearch) must implement this interface.
"""

from abc import ABC, abstractmethod

from src.domain.entities.search import ScrapedPage


class IPageScraper(ABC):
    @abstractmethod
    async def scrape(self, url: str) -> ScrapedPage:
        """Fetch *url* and return its main content as markdown.

        Raises:
            SearchUnavailableError: on transport failure, an unusable reply or
                                    missing credentials.
        """
        ...
