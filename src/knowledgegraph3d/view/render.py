"""
Render Pipeline
===============
Paints one frame of the knowledge graph onto a 2-D drawing surface.

Draw order (later items paint over earlier ones):
    1. background
    2. all edges
    3. per node, in graph order: disc, mastery ring, label

Node discs keep a fixed screen radius; only their centers go through the
perspective projection.
"""
from __future__ import annotations

import logging
import math
from typing import Optional, Protocol, TYPE_CHECKING

from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtGui import QBrush, QColor, QFont, QFontMetricsF, QLinearGradient, QPainter, QPen

from knowledgegraph3d.config import (
    EDGE_OPACITY, EDGE_WIDTH_FACTOR, LABEL_BASE_OFFSET, MASTERY_RING_GAP, MASTERY_RING_WIDTH,
    NODE_BASE_RADIUS, NODE_LEVEL_RADIUS,
)
from knowledgegraph3d.model.palette import (
    BACKGROUND_BOTTOM_RIGHT, BACKGROUND_TOP_LEFT, LABEL_COLOR, MASTERY_RING_COLOR,
    category_color, relation_color,
)
from knowledgegraph3d.model.projection import project_points

if TYPE_CHECKING:
    from PySide6.QtGui import QPaintDevice
    from knowledgegraph3d.model.graph import KnowledgeGraph
    from knowledgegraph3d.model.view_transform import ViewTransform

logger = logging.getLogger(__name__)

LABEL_FONT_PX = 12


class DrawingSurface(Protocol):
    """Minimal 2-D canvas the pipeline draws on. Angles are radians, clockwise on screen."""
    def width(self) -> int: ...
    def height(self) -> int: ...
    def clear(self) -> None: ...
    def draw_line(self, x1: float, y1: float, x2: float, y2: float, color: str, width: float, opacity: float) -> None: ...
    def fill_circle(self, x: float, y: float, radius: float, color: str) -> None: ...
    def stroke_arc(self, x: float, y: float, radius: float, start: float, span: float, color: str, width: float) -> None: ...
    def draw_text(self, x: float, y: float, text: str, color: str) -> None: ...


def node_radius(level: int) -> float:
    return NODE_BASE_RADIUS + level * NODE_LEVEL_RADIUS


def label_offset(level: int) -> float:
    return LABEL_BASE_OFFSET + level * NODE_LEVEL_RADIUS


class QPainterSurface:
    """DrawingSurface backed by an active QPainter on a widget, image or pixmap."""

    def __init__(self, painter: QPainter, device: QPaintDevice) -> None:
        self.painter = painter
        self.device = device
        self.painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        font = QFont("sans-serif")
        font.setPixelSize(LABEL_FONT_PX)
        self.painter.setFont(font)
        self._metrics = QFontMetricsF(font)

    def width(self) -> int:
        return self.device.width() if self.painter.isActive() else 0

    def height(self) -> int:
        return self.device.height() if self.painter.isActive() else 0

    def clear(self) -> None:
        w, h = self.width(), self.height()
        gradient = QLinearGradient(0, 0, w, h)
        gradient.setColorAt(0.0, QColor(BACKGROUND_TOP_LEFT))
        gradient.setColorAt(1.0, QColor(BACKGROUND_BOTTOM_RIGHT))
        self.painter.fillRect(QRectF(0, 0, w, h), QBrush(gradient))

    def draw_line(self, x1: float, y1: float, x2: float, y2: float, color: str, width: float, opacity: float) -> None:
        self.painter.save()
        self.painter.setOpacity(opacity)
        self.painter.setPen(QPen(QColor(color), width, Qt.PenStyle.SolidLine, Qt.PenCapStyle.FlatCap))
        self.painter.drawLine(QPointF(x1, y1), QPointF(x2, y2))
        self.painter.restore()

    def fill_circle(self, x: float, y: float, radius: float, color: str) -> None:
        self.painter.setPen(Qt.PenStyle.NoPen)
        self.painter.setBrush(QColor(color))
        self.painter.drawEllipse(QPointF(x, y), radius, radius)

    def stroke_arc(self, x: float, y: float, radius: float, start: float, span: float, color: str, width: float) -> None:
        self.painter.setPen(QPen(QColor(color), width))
        self.painter.setBrush(Qt.BrushStyle.NoBrush)
        rect = QRectF(x - radius, y - radius, 2 * radius, 2 * radius)
        # Qt measures angles counter-clockwise in 1/16th of a degree
        self.painter.drawArc(rect, round(-math.degrees(start) * 16), round(-math.degrees(span) * 16))

    def draw_text(self, x: float, y: float, text: str, color: str) -> None:
        self.painter.setPen(QColor(color))
        advance = self._metrics.horizontalAdvance(text)
        self.painter.drawText(QPointF(x - advance / 2.0, y), text)


class RenderPipeline:
    """Frame painter. Reads the graph and view; writes only the surface and its own counters."""

    def __init__(self) -> None:
        self.frames_rendered = 0
        self.frames_skipped = 0

    def render(self, surface: Optional[DrawingSurface], graph: KnowledgeGraph, view: ViewTransform) -> bool:
        """
        Paint one frame.

        Returns:
            False if the surface is missing or has no area (the frame is skipped
            and the next tick simply tries again), True otherwise.
        """
        if surface is None:
            self.frames_skipped += 1
            logger.debug("No drawing surface attached, skipping frame.")
            return False

        # Re-queried every frame: the host layout may have resized the surface
        width, height = surface.width(), surface.height()
        if width <= 0 or height <= 0:
            self.frames_skipped += 1
            logger.debug(f"Surface has no area ({width}x{height}), skipping frame.")
            return False

        center = (width / 2.0, height / 2.0)
        screen = project_points(graph.positions(), center, view)

        surface.clear()
        self._draw_edges(surface, graph, screen)
        self._draw_nodes(surface, graph, screen)

        self.frames_rendered += 1
        return True

    # ---- layers ----

    @staticmethod
    def _draw_edges(surface: DrawingSurface, graph: KnowledgeGraph, screen) -> None:
        for edge in graph.edges:
            sx, sy = screen[graph.index_of(edge.source), :2]
            tx, ty = screen[graph.index_of(edge.target), :2]
            surface.draw_line(
                float(sx), float(sy), float(tx), float(ty),
                color=relation_color(edge.relation),
                width=edge.strength * EDGE_WIDTH_FACTOR,
                opacity=EDGE_OPACITY,
            )

    @staticmethod
    def _draw_nodes(surface: DrawingSurface, graph: KnowledgeGraph, screen) -> None:
        for i, node in enumerate(graph.nodes):
            x, y = float(screen[i, 0]), float(screen[i, 1])
            radius = node_radius(node.level)
            surface.fill_circle(x, y, radius, category_color(node.category))
            surface.stroke_arc(
                x, y, radius + MASTERY_RING_GAP,
                start=0.0,
                span=node.mastery_fraction * 2.0 * math.pi,
                color=MASTERY_RING_COLOR,
                width=MASTERY_RING_WIDTH,
            )
            surface.draw_text(x, y + label_offset(node.level), node.label, LABEL_COLOR)
