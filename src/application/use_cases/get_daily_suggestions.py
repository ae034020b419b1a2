"""
Use-case: AI watchlist for the day, drawn from one MarketOverview.

Takes the overview as input, like GetMarketPulseUseCase, so callers decide
whether to reuse a polled snapshot or fetch a fresh one. With no quotes there
is nothing to reason about and the language model is not called.
"""

import json
import logging

from src.application.research.json_completion import JsonCompletion
from src.application.research.prompts import DAILY_SUGGESTIONS_PROMPT
from src.application.services.intelligence_payload import parse_daily_suggestions
from src.application.use_cases.get_stock_analysis import stock_data
from src.domain.entities.analysis import DailySuggestions
from src.domain.entities.market import MarketOverview
from src.domain.entities.payload import PayloadResult
from src.domain.errors import IntelligenceUnavailableError

logger = logging.getLogger(__name__)


class GetDailySuggestionsUseCase:
    def __init__(self, completion: JsonCompletion) -> None:
        self._completion = completion

    async def execute(self, overview: MarketOverview) -> PayloadResult[DailySuggestions]:
        if not overview.quotes:
            reason = f"No market data (overview {overview.status})"
            logger.warning("Skipping daily suggestions: %s", reason)
            return PayloadResult.fallback(DailySuggestions(), reason)

        instruments = {i.symbol: i for i in overview.instruments}
        market_data = [stock_data(q, instruments.get(q.symbol)) for q in overview.quotes]
        prompt = DAILY_SUGGESTIONS_PROMPT.format(market_data=json.dumps(market_data, indent=2))
        try:
            reply = await self._completion.complete(
                prompt, "daily_suggestions", metadata={"quotes": len(market_data)}
            )
        except IntelligenceUnavailableError as exc:
            return PayloadResult.fallback(DailySuggestions(), str(exc))
        return parse_daily_suggestions(reply)
