"""
Knowledge Graph (Data Model)
============================
Immutable description of the nodes and edges that the visualizer draws.

Why is this file needed?
------------------------
1. Validation: A graph is checked once, at construction. An edge pointing at a
   node that does not exist is rejected here instead of silently vanishing
   from the drawing later.
2. Immutability: Nodes, edges and the graph itself are frozen dataclasses
   holding tuples. Only the view transform changes during a session.

Classes:
    Category: Closed set of node categories (drives the fill color).
    RelationType: Closed set of edge types (drives the stroke color).
    Position3D: Authored 3-D coordinate of a node.
    Node, Edge: Graph elements.
    KnowledgeGraph: Validated container with id lookup.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
import logging
import math
from typing import Optional, TYPE_CHECKING

import numpy as np

from knowledgegraph3d.config import COORDINATE_BOUND

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


class GraphValidationError(ValueError):
    """Raised when graph data violates one of the model invariants."""


# ------------------------------------------------------------------------------
# Enums
# ------------------------------------------------------------------------------
class Category(StrEnum):
    FOUNDATION = "foundation"
    CORE = "core"
    ADVANCED = "advanced"
    TECHNICAL = "technical"
    AI = "ai"

    @classmethod
    def parse(cls, value: str) -> Category:
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(c.value for c in cls)
            raise GraphValidationError(f"Unknown node category '{value}' (expected one of: {allowed}).") from None


class RelationType(StrEnum):
    PREREQUISITE = "prerequisite"
    RELATED = "related"
    ADVANCED = "advanced"

    @classmethod
    def parse(cls, value: str) -> RelationType:
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(r.value for r in cls)
            raise GraphValidationError(f"Unknown edge type '{value}' (expected one of: {allowed}).") from None


# ------------------------------------------------------------------------------
# Data Structures
# ------------------------------------------------------------------------------
@dataclass(frozen=True)
class Position3D:
    x: float
    y: float
    z: float


@dataclass(frozen=True)
class Node:
    """A single knowledge topic."""
    id: str
    label: str
    category: Category
    level: int
    position: Position3D
    mastery: float = 0.0
    # Neighbor ids shown in the details panel. Edges are authoritative for drawing.
    connections: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.id:
            raise GraphValidationError("Node id must be a non-empty string.")
        if not isinstance(self.category, Category):
            object.__setattr__(self, "category", Category.parse(self.category))
        if not isinstance(self.level, int) or isinstance(self.level, bool) or self.level < 1:
            raise GraphValidationError(f"Node '{self.id}': level must be a positive integer, got {self.level!r}.")
        if not 0.0 <= self.mastery <= 100.0:
            raise GraphValidationError(f"Node '{self.id}': mastery must be within [0, 100], got {self.mastery}.")
        p = self.position
        for axis, value in (("x", p.x), ("y", p.y), ("z", p.z)):
            if not math.isfinite(value):
                raise GraphValidationError(f"Node '{self.id}': position.{axis} must be a finite number, got {value}.")
        radius = math.hypot(p.x, p.y, p.z)
        if radius > COORDINATE_BOUND:
            raise GraphValidationError(
                f"Node '{self.id}': position ({p.x:g}, {p.y:g}, {p.z:g}) lies {radius:.1f} from the origin, "
                f"outside the authored radius {COORDINATE_BOUND:g}."
            )
        object.__setattr__(self, "connections", tuple(self.connections))

    @property
    def mastery_fraction(self) -> float:
        return self.mastery / 100.0


@dataclass(frozen=True)
class Edge:
    """A directed relation between two topics."""
    source: str
    target: str
    strength: float
    relation: RelationType

    def __post_init__(self) -> None:
        if not isinstance(self.relation, RelationType):
            object.__setattr__(self, "relation", RelationType.parse(self.relation))
        if not 0.0 < self.strength <= 1.0:
            raise GraphValidationError(
                f"Edge '{self.source}' -> '{self.target}': strength must be within (0, 1], got {self.strength}."
            )


@dataclass(frozen=True)
class KnowledgeGraph:
    """
    Validated, read-only graph.

    Node order is preserved; it is the order used for drawing and for breaking
    hit-test ties.
    """
    nodes: tuple[Node, ...]
    edges: tuple[Edge, ...] = ()
    _index: dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "nodes", tuple(self.nodes))
        object.__setattr__(self, "edges", tuple(self.edges))

        index: dict[str, int] = {}
        for i, node in enumerate(self.nodes):
            if node.id in index:
                raise GraphValidationError(f"Duplicate node id '{node.id}'.")
            index[node.id] = i

        for edge in self.edges:
            missing = [end for end in (edge.source, edge.target) if end not in index]
            if missing:
                raise GraphValidationError(
                    f"Edge '{edge.source}' -> '{edge.target}' references unknown node id(s): "
                    + ", ".join(f"'{m}'" for m in missing)
                )

        object.__setattr__(self, "_index", index)
        logger.debug(f"Graph built with {len(self.nodes)} nodes and {len(self.edges)} edges.")

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._index

    def node(self, node_id: str) -> Node:
        """Return the node with the given id. Raises KeyError if absent."""
        return self.nodes[self._index[node_id]]

    def get(self, node_id: str) -> Optional[Node]:
        i = self._index.get(node_id)
        return None if i is None else self.nodes[i]

    def index_of(self, node_id: str) -> int:
        return self._index[node_id]

    def positions(self) -> npt.NDArray[np.float64]:
        """(N, 3) array of node positions in graph order."""
        if not self.nodes:
            return np.empty((0, 3), dtype=np.float64)
        return np.array([(n.position.x, n.position.y, n.position.z) for n in self.nodes], dtype=np.float64)

    def levels(self) -> npt.NDArray[np.int_]:
        return np.array([n.level for n in self.nodes], dtype=np.int_)

    def resolved_connections(self, node_id: str) -> list[Node]:
        """Neighbors listed on the node that exist in this graph. Unknown ids are skipped."""
        return [n for n in (self.get(c) for c in self.node(node_id).connections) if n is not None]
