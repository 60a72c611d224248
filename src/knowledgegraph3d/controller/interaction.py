"""
Pointer interaction: hit testing and the current node selection.
"""
from __future__ import annotations

import logging
from typing import Optional, TYPE_CHECKING

import numpy as np
from PySide6.QtCore import QObject, Signal

from knowledgegraph3d.config import HIT_MARGIN, NODE_BASE_RADIUS, NODE_LEVEL_RADIUS
from knowledgegraph3d.model.projection import project_points

if TYPE_CHECKING:
    from knowledgegraph3d.model.graph import KnowledgeGraph, Node
    from knowledgegraph3d.model.view_transform import ViewTransform

logger = logging.getLogger(__name__)


def hit_test(
    pointer_x: float,
    pointer_y: float,
    graph: KnowledgeGraph,
    view: ViewTransform,
    center: tuple[float, float],
) -> Optional[str]:
    """
    Resolve a pointer position to a node id.

    Every node is projected exactly as the renderer projects it. Among the
    nodes whose center lies strictly within their hit radius, the nearest one
    wins; exact distance ties go to the node that comes first in graph order.

    Returns:
        The id of the hit node, or None.
    """
    if not graph.nodes:
        return None

    screen = project_points(graph.positions(), center, view)
    distances = np.hypot(screen[:, 0] - pointer_x, screen[:, 1] - pointer_y)
    # Drawn radius plus a forgiving margin
    radii = NODE_BASE_RADIUS + HIT_MARGIN + graph.levels() * NODE_LEVEL_RADIUS

    eligible = np.flatnonzero(distances < radii)
    if eligible.size == 0:
        return None

    # argmin returns the first minimum, which keeps graph order on ties
    best = int(eligible[np.argmin(distances[eligible])])
    return graph.nodes[best].id


class Selection(QObject):
    """Currently selected node. Missed clicks never clear it; `clear()` does."""
    selection_changed = Signal(object)  # Node | None

    def __init__(self, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._node: Optional[Node] = None

    @property
    def node(self) -> Optional[Node]:
        return self._node

    @property
    def node_id(self) -> Optional[str]:
        return None if self._node is None else self._node.id

    def select(self, node: Node) -> None:
        if self._node is not None and self._node.id == node.id:
            return
        self._node = node
        logger.info(f"Selected node '{node.id}'.")
        self.selection_changed.emit(node)

    def clear(self) -> None:
        if self._node is None:
            return
        self._node = None
        self.selection_changed.emit(None)

    def handle_click(
        self,
        x: float,
        y: float,
        graph: KnowledgeGraph,
        view: ViewTransform,
        center: tuple[float, float],
    ) -> Optional[str]:
        """Hit-test a click and select the result. Returns the hit id, if any."""
        node_id = hit_test(x, y, graph, view, center)
        if node_id is not None:
            self.select(graph.node(node_id))
        return node_id
