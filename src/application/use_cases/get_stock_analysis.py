"""
Use-case: AI opportunity/risk analysis of a single symbol.

Steps:
  1. Fetch the symbol's five-day quote (failures propagate, as for stock detail).
  2. Gather recent headlines; a search failure only thins the prompt.
  3. Ask the language model for a StockAnalysis and validate the reply.

A model failure or an unreadable reply never raises: the report carries a
FALLBACK_DEFAULT analysis instead.
"""

import json
import logging
from typing import Optional

from src.application.research.json_completion import JsonCompletion
from src.application.research.prompts import (
    ANALYSIS_CARD_CATEGORIES,
    ANALYSIS_CARD_TEMPLATE,
    NO_NEWS_CONTEXT,
    STOCK_ANALYSIS_PROMPT,
    STOCK_NEWS_QUERY,
)
from src.application.services.intelligence_payload import parse_stock_analysis
from src.application.services.quote_batch_fetcher import QuoteBatchFetcher
from src.domain.entities.analysis import StockAnalysis, StockAnalysisReport
from src.domain.entities.instrument import Instrument
from src.domain.entities.payload import PayloadResult
from src.domain.entities.quote import QuoteSnapshot
from src.domain.entities.search import NewsArticle
from src.domain.errors import IntelligenceUnavailableError, SearchUnavailableError
from src.domain.ports.web_search_port import IWebSearch
from src.domain.registry import find_instrument
from src.domain.services.metrics import classify_cap, format_volume_ratio, volume_ratio

logger = logging.getLogger(__name__)


def stock_data(quote: QuoteSnapshot, instrument: Optional[Instrument]) -> dict:
    """The quote fields the analyst prompt is allowed to see."""
    ratio = volume_ratio(quote.volume, quote.average_volume_3_month)
    return {
        "symbol": quote.symbol,
        "name": instrument.display_name if instrument else quote.display_name,
        "sector": instrument.sector if instrument else "Unknown",
        "capBand": (instrument.cap_band if instrument else classify_cap(quote.market_cap)).value,
        "price": quote.price,
        "change": round(quote.price_change, 4),
        "changePercent": round(quote.price_change_percent, 2),
        "volume": quote.volume,
        "volumeRatio": format_volume_ratio(ratio),
        "fiftyTwoWeekHigh": quote.fifty_two_week_high,
        "fiftyTwoWeekLow": quote.fifty_two_week_low,
        "currency": quote.currency,
    }


class GetStockAnalysisUseCase:
    NEWS_LIMIT: int = 5
    NEWS_EXCERPT_CHARS: int = 300

    def __init__(
        self,
        fetcher: QuoteBatchFetcher,
        web_search: IWebSearch,
        completion: JsonCompletion,
    ) -> None:
        self._fetcher = fetcher
        self._web_search = web_search
        self._completion = completion

    async def execute(self, symbol: str) -> StockAnalysisReport:
        """Analyze *symbol* (uppercased).

        Raises:
            ValueError:          if *symbol* is blank.
            SymbolNotFoundError: if upstream has no data for *symbol*.
            UpstreamQuoteError:  on transport or status failure.
        """
        if not symbol or not symbol.strip():
            raise ValueError("symbol must be a non-empty string")
        normalized = symbol.upper().strip()
        quote, _ = await self._fetcher.fetch_detail(
            normalized, QuoteBatchFetcher.OVERVIEW_INTERVAL, QuoteBatchFetcher.OVERVIEW_RANGE
        )
        instrument = find_instrument(normalized)
        articles = await self._recent_news(quote, instrument)

        prompt = STOCK_ANALYSIS_PROMPT.format(
            stock_data=json.dumps(stock_data(quote, instrument), indent=2),
            news_context=self._news_context(articles),
            cards=",\n".join(ANALYSIS_CARD_TEMPLATE.format(category=c) for c in ANALYSIS_CARD_CATEGORIES),
        )
        analysis = await self._analyze(prompt, normalized)
        return StockAnalysisReport(
            quote=quote,
            instrument=instrument,
            analysis=analysis,
            news_count=len(articles),
        )

    async def _recent_news(
        self, quote: QuoteSnapshot, instrument: Optional[Instrument]
    ) -> list[NewsArticle]:
        name = instrument.display_name if instrument else quote.display_name
        query = STOCK_NEWS_QUERY.format(name=name, code=quote.symbol.split(".")[0])
        try:
            return await self._web_search.search(query, limit=self.NEWS_LIMIT, recency="week")
        except SearchUnavailableError as exc:
            logger.warning("News for %s unavailable: %s", quote.symbol, exc)
            return []

    def _news_context(self, articles: list[NewsArticle]) -> str:
        if not articles:
            return NO_NEWS_CONTEXT
        return "\n".join(
            f"- {a.title}: {(a.description or a.markdown)[: self.NEWS_EXCERPT_CHARS]}"
            for a in articles
        )

    async def _analyze(self, prompt: str, symbol: str) -> PayloadResult[StockAnalysis]:
        try:
            reply = await self._completion.complete(
                prompt, "stock_analysis", metadata={"symbol": symbol}
            )
        except IntelligenceUnavailableError as exc:
            return PayloadResult.fallback(StockAnalysis(), str(exc))
        return parse_stock_analysis(reply, symbol)
