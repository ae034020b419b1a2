"""
Infrastructure adapter: Langfuse -> IObservabilityHandler.

Traces the forensic extraction calls made through ILanguageModel. The langfuse
package reads LANGFUSE_* from the environment on first use, so it is imported
inside the methods, after the secrets bootstrap has had a chance to run.
"""

from typing import Optional

from src.domain.ports.observability_port import IObservabilityHandler

DEFAULT_TAGS = ("bursa-intel",)


class LangfuseObservabilityHandler(IObservabilityHandler):
    """Builds runnable configs around one shared Langfuse CallbackHandler."""

    def __init__(self, tags: Optional[list[str]] = None) -> None:
        from langfuse.langchain import CallbackHandler

        self._callback = CallbackHandler()
        self._tags = list(tags or DEFAULT_TAGS)

    def run_config(self, run_name: str, metadata: Optional[dict] = None) -> dict:
        return {
            "callbacks": [self._callback],
            "run_name": run_name,
            "metadata": {**(metadata or {}), "langfuse_tags": self._tags},
        }

    def flush(self) -> None:
        from langfuse import get_client

        get_client().flush()
