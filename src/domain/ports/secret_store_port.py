"""
Port (interface) for secret stores.
Used at process start to pull API keys (Firecrawl, Langfuse) into the
environment before any adapter that reads them is constructed.
"""

from abc import ABC, abstractmethod


class ISecretStore(ABC):
    @abstractmethod
    def get_secret(self, secret_id: str) -> dict:
        """Fetch and deserialize a JSON secret. Returns its key-value pairs."""
        ...

    @abstractmethod
    def load_into_env(self, secret_id: str, overwrite: bool = False) -> list[str]:
        """Export the secret's pairs as environment variables; return the keys set."""
        ...
