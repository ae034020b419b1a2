"""
Application service: research a corporate entity's ownership structure.
Implements IOwnershipSource by composing two injected collaborators:

  1. IWebSearch finds recent pages about the entity's shareholders,
     subsidiaries and directors;
  2. ILanguageModel extracts a ForensicRecord-shaped JSON object from them.

The reply is returned raw; validation belongs to parse_forensic_payload.
"""

import logging
from typing import Any, Optional

from langchain_core.messages import HumanMessage

from src.application.research.prompts import (
    FORENSIC_EXTRACTION_PROMPT,
    FORENSIC_SEARCH_QUERY,
)
from src.domain.errors import OwnershipSourceError
from src.domain.ports.llm_port import ILanguageModel
from src.domain.ports.observability_port import IObservabilityHandler
from src.domain.ports.ownership_source_port import IOwnershipSource
from src.domain.ports.web_search_port import IWebSearch

logger = logging.getLogger(__name__)


class ForensicResearchService(IOwnershipSource):
    SEARCH_LIMIT: int = 8
    SOURCES_IN_PROMPT: int = 5
    SOURCE_EXCERPT_CHARS: int = 800

    def __init__(
        self,
        web_search: IWebSearch,
        llm: ILanguageModel,
        observability: Optional[IObservabilityHandler] = None,
    ) -> None:
        self._web_search = web_search
        self._llm = llm
        self._observability = observability

    async def fetch_forensic_payload(self, entity: str) -> Any:
        try:
            articles = await self._web_search.search(
                FORENSIC_SEARCH_QUERY.format(entity=entity),
                limit=self.SEARCH_LIMIT,
                recency="month",
            )
        except Exception as exc:
            raise OwnershipSourceError(f"Ownership search failed for {entity!r}: {exc}") from exc

        logger.info("Ownership search for %r returned %d sources", entity, len(articles))
        sources = "\n---\n".join(
            f"Source: {a.url}\n{(a.markdown or a.description)[: self.SOURCE_EXCERPT_CHARS]}"
            for a in articles[: self.SOURCES_IN_PROMPT]
        )
        prompt = FORENSIC_EXTRACTION_PROMPT.format(
            entity=entity, sources=sources or "No sources found."
        )

        config = None
        if self._observability is not None:
            config = self._observability.run_config(
                "forensic_extraction", metadata={"entity": entity}
            )
        try:
            return await self._llm.ainvoke([HumanMessage(content=prompt)], config=config)
        except Exception as exc:
            raise OwnershipSourceError(f"Ownership extraction failed for {entity!r}: {exc}") from exc
