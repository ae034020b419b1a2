"""
Domain entities for quote and chart data.
Zero external dependencies: pure Python dataclasses only.

RawChart is what a quote source hands back for one (symbol, interval, range)
request; QuoteSnapshot and IndexSnapshot are the enriched values derived from it
by src.domain.services.metrics.
"""

from dataclasses import dataclass, field
from typing import Optional

from src.domain.entities.instrument import Instrument


@dataclass(frozen=True)
class ChartSeries:
    timestamps: list[int] = field(default_factory=list)
    open: list[Optional[float]] = field(default_factory=list)
    high: list[Optional[float]] = field(default_factory=list)
    low: list[Optional[float]] = field(default_factory=list)
    close: list[Optional[float]] = field(default_factory=list)
    volume: list[Optional[float]] = field(default_factory=list)


@dataclass(frozen=True)
class RawChart:
    symbol: str
    display_name: str
    currency: str
    regular_market_price: Optional[float]
    previous_close: Optional[float]
    regular_market_volume: Optional[float] = None
    fifty_two_week_high: Optional[float] = None
    fifty_two_week_low: Optional[float] = None
    shares_outstanding: Optional[float] = None
    exchange_name: Optional[str] = None
    series: ChartSeries = field(default_factory=ChartSeries)


@dataclass(frozen=True)
class QuoteSnapshot:
    symbol: str
    display_name: str
    price: float
    price_change: float
    price_change_percent: float
    volume: float
    currency: str
    average_volume_3_month: Optional[float] = None
    market_cap: Optional[float] = None
    fifty_two_week_high: Optional[float] = None
    fifty_two_week_low: Optional[float] = None


@dataclass(frozen=True)
class IndexSnapshot:
    price: float
    change: float
    change_percent: float


@dataclass(frozen=True)
class StockDetail:
    quote: QuoteSnapshot
    chart: ChartSeries
    instrument: Optional[Instrument]
