"""
Port (interface) for ticker symbol lookup services.
"""

from abc import ABC, abstractmethod

from src.domain.entities.search import SymbolMatch


class ISymbolSearch(ABC):
    @abstractmethod
    async def search(self, query: str) -> list[SymbolMatch]:
        """Return candidate instruments for a free-text *query* (any exchange)."""
        ...
