"""
Use-case: acquire an entity's ownership record and lay it out as a graph.
"""

from dataclasses import dataclass

from src.application.use_cases.acquire_forensic_record import AcquireForensicRecordUseCase
from src.domain.entities.ownership import ForensicRecord, GraphFilter, OwnershipGraph
from src.domain.entities.payload import PayloadResult
from src.domain.services.ownership_graph import build_ownership_graph


@dataclass(frozen=True)
class OwnershipView:
    record: PayloadResult[ForensicRecord]
    graph: OwnershipGraph


class BuildOwnershipGraphUseCase:
    def __init__(self, acquire: AcquireForensicRecordUseCase) -> None:
        self._acquire = acquire

    async def execute(self, entity: str, graph_filter: GraphFilter = GraphFilter.ALL) -> OwnershipView:
        """Return the (possibly degraded) record and its filtered graph.

        Raises:
            ValueError: if *entity* is blank.
        """
        record = await self._acquire.execute(entity)
        return OwnershipView(
            record=record,
            graph=build_ownership_graph(record.value, graph_filter),
        )
