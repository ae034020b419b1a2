"""
Domain entities for the market-wide views: overview, sector summaries, movers.
Zero external dependencies: pure Python dataclasses only.
"""

from dataclasses import dataclass
from typing import Optional

from src.domain.entities.instrument import CapBand, Instrument
from src.domain.entities.quote import IndexSnapshot, QuoteSnapshot


@dataclass(frozen=True)
class MarketOverview:
    """One refresh cycle's snapshot.

    ``quotes`` is a best-effort subset of ``instruments``: a missing quote for a
    known instrument means its upstream fetch failed, not that the overview is
    invalid.
    """

    index: Optional[IndexSnapshot]
    quotes: list[QuoteSnapshot]
    instruments: list[Instrument]

    @property
    def status(self) -> str:
        if not self.instruments:
            return "unconfigured"
        if not self.quotes:
            return "unavailable"
        if len(self.quotes) < len(self.instruments):
            return "partial"
        return "ok"


@dataclass(frozen=True)
class SectorSummary:
    sector: str
    average_change_percent: float
    member_count: int
    top_volume_instrument: str


@dataclass(frozen=True)
class SectorCloudNode:
    sector: str
    x: float
    y: float
    average_change_percent: float


@dataclass(frozen=True)
class MarketMover:
    symbol: str
    name: str
    sector: str
    change_percent: float
    volume_ratio: Optional[float]
    cap_band: CapBand
    move_type: str


@dataclass(frozen=True)
class MarketMovers:
    gainers: list[MarketMover]
    losers: list[MarketMover]
    volume_leaders: list[MarketMover]
