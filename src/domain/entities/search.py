"""
Domain entities for symbol search and news search results.
Zero external dependencies: pure Python dataclasses only.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SymbolMatch:
    symbol: str
    name: str
    exchange: str = "Bursa Malaysia"
    type: str = "EQUITY"
    sector: str = ""
    industry: str = ""


@dataclass(frozen=True)
class NewsArticle:
    title: str
    url: str
    description: str = ""
    markdown: str = ""


@dataclass(frozen=True)
class ScrapedPage:
    url: str
    title: str = ""
    markdown: str = ""
