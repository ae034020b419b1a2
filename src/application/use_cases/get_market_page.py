"""
Use-case: scrape one of the fixed Bursa market pages to markdown.

Only the pages named in PAGES can be fetched; the scraper is never pointed at
a caller-supplied URL.
"""

from src.domain.entities.search import ScrapedPage
from src.domain.ports.page_scraper_port import IPageScraper

PAGES = {
    "announcements": "https://www.bursamalaysia.com/market_information/announcements/company_announcement",
    "screener": "https://www.klsescreener.com/v2/screener/quote_results",
}


class GetMarketPageUseCase:
    def __init__(self, scraper: IPageScraper) -> None:
        self._scraper = scraper

    async def execute(self, page: str) -> ScrapedPage:
        """Scrape the page registered under *page*.

        Raises:
            ValueError:             if *page* is not one of PAGES.
            SearchUnavailableError: if the scraper fails.
        """
        key = (page or "").strip().lower()
        if key not in PAGES:
            raise ValueError(f"Unknown page {page!r}; expected one of {', '.join(sorted(PAGES))}")
        return await self._scraper.scrape(PAGES[key])
