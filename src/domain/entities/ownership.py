"""
Domain entities for corporate ownership records and the graphs built from them.
Zero external dependencies: pure Python dataclasses and enums only.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class ForensicEntity:
    name: str
    stock_code: Optional[str] = None
    is_listed: bool = False
    country: str = "Malaysia"
    market_cap: Optional[str] = None


@dataclass(frozen=True)
class Shareholder:
    name: str
    percentage: float = 0.0
    type: str = "Unknown"
    is_listed: bool = False
    stock_code: Optional[str] = None


@dataclass(frozen=True)
class Subsidiary:
    name: str
    percentage: float = 0.0
    is_listed: bool = False
    stock_code: Optional[str] = None


@dataclass(frozen=True)
class Director:
    name: str
    position: str = ""
    other_directorships: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ForensicRecord:
    entity: ForensicEntity
    shareholders: list[Shareholder] = field(default_factory=list)
    subsidiaries: list[Subsidiary] = field(default_factory=list)
    directors: list[Director] = field(default_factory=list)
    risk_flags: list[str] = field(default_factory=list)
    sources: list[str] = field(default_factory=list)


class NodeKind(str, Enum):
    CENTER = "center"
    MAJOR_SHAREHOLDER = "major_shareholder"
    MINOR_SHAREHOLDER = "minor_shareholder"
    SUBSIDIARY = "subsidiary"
    DIRECTOR = "director"


class GraphFilter(str, Enum):
    ALL = "all"
    LISTED = "listed"
    RISK = "risk"
    SHAREHOLDERS = "shareholders"
    SUBSIDIARIES = "subsidiaries"


@dataclass(frozen=True)
class GraphNode:
    id: str
    label: str
    kind: NodeKind
    x: float
    y: float
    is_listed: bool = False
    percentage: Optional[float] = None
    stock_code: Optional[str] = None


@dataclass(frozen=True)
class GraphEdge:
    from_node_id: str
    to_node_id: str
    label: str
    percentage: Optional[float] = None


@dataclass(frozen=True)
class OwnershipGraph:
    nodes: list[GraphNode]
    edges: list[GraphEdge]
