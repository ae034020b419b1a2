"""
Use-case: AI outlook on the global macro factors moving Bursa Malaysia.

The caller may steer the analysis with free-text context. When a web search
collaborator is wired, the day's headlines are added to the prompt; a search
failure only drops them.
"""

import logging
from typing import Optional

from src.application.research.json_completion import JsonCompletion
from src.application.research.prompts import (
    DEFAULT_MACRO_CONTEXT,
    MACRO_ANALYSIS_PROMPT,
    MACRO_NEWS_QUERY,
    NO_NEWS_CONTEXT,
)
from src.application.services.intelligence_payload import parse_macro_analysis
from src.domain.entities.analysis import MacroAnalysis
from src.domain.entities.payload import PayloadResult
from src.domain.errors import IntelligenceUnavailableError, SearchUnavailableError
from src.domain.ports.web_search_port import IWebSearch

logger = logging.getLogger(__name__)


class GetMacroAnalysisUseCase:
    HEADLINE_LIMIT: int = 5

    def __init__(self, completion: JsonCompletion, web_search: Optional[IWebSearch] = None) -> None:
        self._completion = completion
        self._web_search = web_search

    async def execute(self, context: Optional[str] = None) -> PayloadResult[MacroAnalysis]:
        context = context.strip() if context and context.strip() else DEFAULT_MACRO_CONTEXT
        prompt = MACRO_ANALYSIS_PROMPT.format(context=context, headlines=await self._headlines())
        try:
            reply = await self._completion.complete(prompt, "macro_analysis")
        except IntelligenceUnavailableError as exc:
            return PayloadResult.fallback(MacroAnalysis(), str(exc))
        return parse_macro_analysis(reply)

    async def _headlines(self) -> str:
        if self._web_search is None:
            return NO_NEWS_CONTEXT
        try:
            articles = await self._web_search.search(
                MACRO_NEWS_QUERY, limit=self.HEADLINE_LIMIT, recency="day"
            )
        except SearchUnavailableError as exc:
            logger.warning("Macro headlines unavailable: %s", exc)
            return NO_NEWS_CONTEXT
        return "\n".join(f"- {a.title}" for a in articles if a.title) or NO_NEWS_CONTEXT
