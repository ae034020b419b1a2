"""
Port (interface) for language model providers.
Infrastructure adapters (e.g. BedrockChatAdapter) must implement this interface.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class ILanguageModel(ABC):
    @abstractmethod
    async def ainvoke(self, messages: list[Any], config: Optional[dict] = None) -> str:
        """Invoke the model and return the text content of its reply.

        Args:
            messages: LangChain message objects.
            config:   Optional runnable config (callbacks, metadata, tags).
        """
        ...
