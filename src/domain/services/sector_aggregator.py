"""
Sector momentum: group enriched quotes by registry sector, average their
change %, and rank sectors by magnitude of movement.

Summaries are recomputed from scratch on every call; nothing is accumulated
across refresh cycles.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from src.domain.entities.instrument import Instrument
from src.domain.entities.market import SectorCloudNode, SectorSummary
from src.domain.entities.quote import QuoteSnapshot
from src.domain.services.layout import radial_position

UNKNOWN_SECTOR = "Unknown"

# Number of ring slots in the sector cloud around the market node.
SECTOR_CLOUD_SLOTS = 5


@dataclass
class _SectorAccumulator:
    change_sum: float = 0.0
    count: int = 0
    top_symbol: str = ""
    top_volume: float = float("-inf")


def aggregate_sectors(
    quotes: Iterable[QuoteSnapshot], instruments: Iterable[Instrument]
) -> list[SectorSummary]:
    """One SectorSummary per distinct sector, including the Unknown bucket."""
    sector_by_symbol = {i.symbol: i.sector for i in instruments}
    buckets: dict[str, _SectorAccumulator] = {}

    for quote in quotes:
        sector = (sector_by_symbol.get(quote.symbol) or "").strip() or UNKNOWN_SECTOR
        acc = buckets.setdefault(sector, _SectorAccumulator())
        acc.change_sum += quote.price_change_percent
        acc.count += 1
        # strict comparison: the first instrument seen wins a volume tie
        if quote.volume > acc.top_volume:
            acc.top_volume = quote.volume
            acc.top_symbol = quote.symbol

    return [
        SectorSummary(
            sector=sector,
            average_change_percent=acc.change_sum / acc.count,
            member_count=acc.count,
            top_volume_instrument=acc.top_symbol,
        )
        for sector, acc in buckets.items()
    ]


def rank_sectors(
    summaries: Iterable[SectorSummary], limit: Optional[int] = None
) -> list[SectorSummary]:
    """Known sectors sorted by absolute average move, largest first."""
    ranked = sorted(
        (s for s in summaries if s.sector != UNKNOWN_SECTOR),
        key=lambda s: abs(s.average_change_percent),
        reverse=True,
    )
    return ranked if limit is None else ranked[:limit]


def sector_cloud(
    summaries: Iterable[SectorSummary], slots: int = SECTOR_CLOUD_SLOTS
) -> list[SectorCloudNode]:
    top = rank_sectors(summaries, limit=slots)
    nodes = []
    for index, summary in enumerate(top):
        x, y = radial_position(index, len(top))
        nodes.append(
            SectorCloudNode(
                sector=summary.sector,
                x=x,
                y=y,
                average_change_percent=summary.average_change_percent,
            )
        )
    return nodes
