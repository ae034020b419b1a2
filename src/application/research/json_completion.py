"""
Application service: one bounded, traced prompt/reply round trip with the
language model.

Shared by the intelligence use cases. Every failure mode (provider error,
timeout) surfaces as IntelligenceUnavailableError so callers can degrade to a
fallback result with one except clause.
"""

import asyncio
import logging
from typing import Optional

from langchain_core.messages import HumanMessage

from src.domain.errors import IntelligenceUnavailableError
from src.domain.ports.llm_port import ILanguageModel
from src.domain.ports.observability_port import IObservabilityHandler

logger = logging.getLogger(__name__)


class JsonCompletion:
    TIMEOUT_SECONDS: float = 30.0

    def __init__(
        self,
        llm: ILanguageModel,
        observability: Optional[IObservabilityHandler] = None,
        timeout_seconds: float = TIMEOUT_SECONDS,
    ) -> None:
        self._llm = llm
        self._observability = observability
        self._timeout_seconds = timeout_seconds

    async def complete(self, prompt: str, run_name: str, metadata: Optional[dict] = None) -> str:
        """Send *prompt* and return the raw reply text.

        Raises:
            IntelligenceUnavailableError: if the model fails or exceeds the timeout.
        """
        config = None
        if self._observability is not None:
            config = self._observability.run_config(run_name, metadata=metadata)
        try:
            return await asyncio.wait_for(
                self._llm.ainvoke([HumanMessage(content=prompt)], config=config),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError as exc:
            raise IntelligenceUnavailableError(
                f"{run_name} timed out after {self._timeout_seconds:g}s"
            ) from exc
        except Exception as exc:
            logger.warning("%s failed: %s", run_name, exc)
            raise IntelligenceUnavailableError(f"{run_name} failed: {exc}") from exc
