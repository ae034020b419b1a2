"""
Port (interface) for upstream quote services.
Infrastructure adapters (e.g. YahooChartQuoteSource, YFinanceQuoteSource) must
implement this interface.
"""

from abc import ABC, abstractmethod

from src.domain.entities.quote import RawChart


class IQuoteSource(ABC):
    @abstractmethod
    async def fetch_chart(self, symbol: str, interval: str, range_: str) -> RawChart:
        """Fetch chart metadata and series for *symbol*.

        Raises:
            SymbolNotFoundError:   upstream has no chart for the symbol.
            UpstreamQuoteError:    network failure or non-success status.
            MalformedPayloadError: the response does not have the chart shape.
        """
        ...
