"""
Port (interface) for LLM tracing handlers.
Infrastructure adapters (e.g. LangfuseObservabilityHandler) must implement this
interface; callers merge run_config() into the config passed to ILanguageModel.
"""

from abc import ABC, abstractmethod
from typing import Optional


class IObservabilityHandler(ABC):
    @abstractmethod
    def run_config(self, run_name: str, metadata: Optional[dict] = None) -> dict:
        """Return a LangChain runnable config carrying the tracing callback."""
        ...

    @abstractmethod
    def flush(self) -> None:
        """Flush any buffered telemetry data to the remote backend."""
        ...
