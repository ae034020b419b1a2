"""
Use-case: derive sector momentum and market movers from an overview.
Pure computation over a MarketOverview the caller already holds; no I/O.
"""

from dataclasses import dataclass

from src.domain.entities.market import (
    MarketMovers,
    MarketOverview,
    SectorCloudNode,
    SectorSummary,
)
from src.domain.services.movers import DEFAULT_MOVERS_LIMIT, rank_movers
from src.domain.services.sector_aggregator import (
    SECTOR_CLOUD_SLOTS,
    aggregate_sectors,
    rank_sectors,
    sector_cloud,
)


@dataclass(frozen=True)
class MarketPulse:
    sectors: list[SectorSummary]
    sector_cloud: list[SectorCloudNode]
    movers: MarketMovers


class GetMarketPulseUseCase:
    def __init__(
        self,
        movers_limit: int = DEFAULT_MOVERS_LIMIT,
        cloud_slots: int = SECTOR_CLOUD_SLOTS,
    ) -> None:
        self._movers_limit = movers_limit
        self._cloud_slots = cloud_slots

    def execute(self, overview: MarketOverview) -> MarketPulse:
        summaries = aggregate_sectors(overview.quotes, overview.instruments)
        return MarketPulse(
            sectors=rank_sectors(summaries),
            sector_cloud=sector_cloud(summaries, slots=self._cloud_slots),
            movers=rank_movers(overview.quotes, overview.instruments, limit=self._movers_limit),
        )
