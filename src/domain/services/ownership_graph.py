"""
Ownership graph construction: ForensicRecord -> positioned nodes and edges.

Layout is deterministic and stateless: shareholders are spread along a band
near the top, subsidiaries along a band near the bottom, up to four directors
on the sides, the entity itself in the centre. Filtering keeps the centre,
selects nodes by kind / listing, and keeps only edges whose both endpoints
survive, so no edge ever dangles.
"""

from typing import Callable

from src.domain.entities.ownership import (
    ForensicRecord,
    GraphEdge,
    GraphFilter,
    GraphNode,
    NodeKind,
    OwnershipGraph,
)
from src.domain.services.layout import band_position, director_position

CENTER_NODE_ID = "center"
CENTER_POSITION = (50.0, 50.0)
SHAREHOLDER_BAND_Y = 15.0
SUBSIDIARY_BAND_Y = 80.0
MAJOR_SHAREHOLDER_THRESHOLD = 20.0
MAX_RENDERED_DIRECTORS = 4


def _format_pct(value: float) -> str:
    return f"{value:g}%"


def _shareholder_kind(percentage: float) -> NodeKind:
    if percentage > MAJOR_SHAREHOLDER_THRESHOLD:
        return NodeKind.MAJOR_SHAREHOLDER
    return NodeKind.MINOR_SHAREHOLDER


_FILTER_PREDICATES: dict[GraphFilter, Callable[[GraphNode], bool]] = {
    GraphFilter.ALL: lambda node: True,
    GraphFilter.LISTED: lambda node: node.is_listed,
    GraphFilter.RISK: lambda node: (
        node.kind is NodeKind.MAJOR_SHAREHOLDER
        or (node.kind is NodeKind.SUBSIDIARY and not node.is_listed)
    ),
    GraphFilter.SHAREHOLDERS: lambda node: node.kind
    in (NodeKind.MAJOR_SHAREHOLDER, NodeKind.MINOR_SHAREHOLDER),
    GraphFilter.SUBSIDIARIES: lambda node: node.kind is NodeKind.SUBSIDIARY,
}


def layout_ownership_graph(record: ForensicRecord) -> OwnershipGraph:
    """Build the unfiltered graph for ``record``."""
    entity = record.entity
    nodes = [
        GraphNode(
            id=CENTER_NODE_ID,
            label=entity.name,
            kind=NodeKind.CENTER,
            x=CENTER_POSITION[0],
            y=CENTER_POSITION[1],
            is_listed=entity.is_listed,
            stock_code=entity.stock_code,
        )
    ]
    edges: list[GraphEdge] = []

    count = len(record.shareholders)
    for index, holder in enumerate(record.shareholders):
        node_id = f"shareholder-{index}"
        x, y = band_position(index, count, SHAREHOLDER_BAND_Y)
        nodes.append(
            GraphNode(
                id=node_id,
                label=holder.name,
                kind=_shareholder_kind(holder.percentage),
                x=x,
                y=y,
                is_listed=holder.is_listed,
                percentage=holder.percentage,
                stock_code=holder.stock_code,
            )
        )
        edges.append(
            GraphEdge(
                from_node_id=node_id,
                to_node_id=CENTER_NODE_ID,
                label=f"{_format_pct(holder.percentage)} {holder.type}",
                percentage=holder.percentage,
            )
        )

    count = len(record.subsidiaries)
    for index, subsidiary in enumerate(record.subsidiaries):
        node_id = f"subsidiary-{index}"
        x, y = band_position(index, count, SUBSIDIARY_BAND_Y)
        nodes.append(
            GraphNode(
                id=node_id,
                label=subsidiary.name,
                kind=NodeKind.SUBSIDIARY,
                x=x,
                y=y,
                is_listed=subsidiary.is_listed,
                percentage=subsidiary.percentage,
                stock_code=subsidiary.stock_code,
            )
        )
        edges.append(
            GraphEdge(
                from_node_id=CENTER_NODE_ID,
                to_node_id=node_id,
                label=_format_pct(subsidiary.percentage),
                percentage=subsidiary.percentage,
            )
        )

    # display-density cap; the full director list stays on the record
    for slot, director in enumerate(record.directors[:MAX_RENDERED_DIRECTORS]):
        node_id = f"director-{slot}"
        x, y = director_position(slot)
        nodes.append(
            GraphNode(id=node_id, label=director.name, kind=NodeKind.DIRECTOR, x=x, y=y)
        )
        edges.append(
            GraphEdge(
                from_node_id=node_id,
                to_node_id=CENTER_NODE_ID,
                label=director.position,
            )
        )

    return OwnershipGraph(nodes=nodes, edges=edges)


def filter_graph(graph: OwnershipGraph, graph_filter: GraphFilter) -> OwnershipGraph:
    """Return the subgraph induced by the nodes ``graph_filter`` keeps."""
    predicate = _FILTER_PREDICATES[graph_filter]
    kept = [n for n in graph.nodes if n.kind is NodeKind.CENTER or predicate(n)]
    kept_ids = {n.id for n in kept}
    edges = [
        e
        for e in graph.edges
        if e.from_node_id in kept_ids and e.to_node_id in kept_ids
    ]
    return OwnershipGraph(nodes=kept, edges=edges)


def build_ownership_graph(
    record: ForensicRecord, graph_filter: GraphFilter = GraphFilter.ALL
) -> OwnershipGraph:
    return filter_graph(layout_ownership_graph(record), graph_filter)
