"""
Domain exceptions.
Adapters translate transport-specific failures (httpx, yfinance) into these so
that use cases and entrypoints never need to know which library failed.
"""


class QuoteDataError(Exception):
    """Base class for quote retrieval failures."""


class SymbolNotFoundError(QuoteDataError, LookupError):
    """The upstream service has no data for the requested symbol."""

    def __init__(self, symbol: str) -> None:
        super().__init__(f"No data found for symbol: {symbol!r}")
        self.symbol = symbol


class UpstreamQuoteError(QuoteDataError):
    """The upstream quote service failed (network error or non-success status)."""


class MalformedPayloadError(QuoteDataError, ValueError):
    """The upstream response did not have the expected shape."""


class OwnershipSourceError(Exception):
    """The ownership/forensic collaborator could not produce a payload."""


class SearchUnavailableError(Exception):
    """A search collaborator (symbol or web search) failed or is not configured."""


class IntelligenceUnavailableError(Exception):
    """The language model failed, timed out or is not configured."""
