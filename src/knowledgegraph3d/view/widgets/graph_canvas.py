"""
Knowledge Graph Canvas
======================
The QWidget that shows the rotating graph.

Why is this file needed?
------------------------
1. Ownership: It creates and owns the session's ViewTransform, AnimationLoop
   and Selection, and hands them explicitly to the renderer and hit-tester.
2. Qt glue: paintEvent runs the RenderPipeline on a QPainter, mousePressEvent
   runs the hit-test, closeEvent stops the animation loop.
"""
from __future__ import annotations

import logging
from typing import Optional, TYPE_CHECKING

from PySide6.QtCore import QSize, Qt, Signal
from PySide6.QtGui import QCloseEvent, QImage, QMouseEvent, QPainter, QPaintEvent, QResizeEvent
from PySide6.QtWidgets import QSizePolicy, QWidget

from knowledgegraph3d.controller.animation import AnimationLoop, TickSource
from knowledgegraph3d.controller.interaction import Selection
from knowledgegraph3d.model.view_transform import ViewTransform
from knowledgegraph3d.view.render import QPainterSurface, RenderPipeline
from knowledgegraph3d.view.widgets.legend import LegendWidget

if TYPE_CHECKING:
    from knowledgegraph3d.model.graph import KnowledgeGraph

logger = logging.getLogger(__name__)

LEGEND_MARGIN = 16


class GraphCanvas(QWidget):
    zoom_changed = Signal(float)
    rotation_speed_changed = Signal(float)

    def __init__(
        self,
        graph: KnowledgeGraph,
        parent: Optional[QWidget] = None,
        tick_source: Optional[TickSource] = None,
    ) -> None:
        super().__init__(parent)
        self.graph: KnowledgeGraph = graph

        self.view = ViewTransform()
        self.pipeline = RenderPipeline()
        self.selection = Selection(self)
        self.animation = AnimationLoop(self.view, on_frame=self.update, tick_source=tick_source, parent=self)

        self.setMinimumSize(QSize(400, 384))
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setCursor(Qt.CursorShape.PointingHandCursor)

        self.legend = LegendWidget(self)
        self._place_legend()

        self.animation.start()

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def set_graph(self, graph: KnowledgeGraph) -> None:
        """Swap in a new graph. Selection is cleared, the view is kept."""
        self.graph = graph
        self.selection.clear()
        logger.info(f"Canvas now showing {len(graph.nodes)} nodes.")
        self.update()

    def center(self) -> tuple[float, float]:
        return self.width() / 2.0, self.height() / 2.0

    def zoom_in(self) -> None:
        self._emit_zoom(self.view.zoom_in())

    def zoom_out(self) -> None:
        self._emit_zoom(self.view.zoom_out())

    def set_rotation_speed(self, value: float) -> None:
        applied = self.view.set_rotation_speed(value)
        self.rotation_speed_changed.emit(applied)

    def reset_rotation(self) -> None:
        self.animation.reset_rotation()
        self.update()

    def toggle_playback(self) -> None:
        self.animation.toggle()

    def shutdown(self) -> None:
        """Stop the animation loop. Called on close; safe to call again."""
        self.animation.shutdown()

    def render_to_image(self, width: Optional[int] = None, height: Optional[int] = None) -> QImage:
        """Paint the current frame into an offscreen image (for export)."""
        image = QImage(width or self.width(), height or self.height(), QImage.Format.Format_ARGB32)
        image.fill(Qt.GlobalColor.transparent)
        painter = QPainter(image)
        try:
            self.pipeline.render(QPainterSurface(painter, image), self.graph, self.view)
        finally:
            painter.end()
        return image

    # ------------------------------------------------------------------------------
    # Qt events
    # ------------------------------------------------------------------------------

    def paintEvent(self, event: QPaintEvent) -> None:
        painter = QPainter(self)
        try:
            self.pipeline.render(QPainterSurface(painter, self), self.graph, self.view)
        finally:
            painter.end()

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if event.button() != Qt.MouseButton.LeftButton:
            super().mousePressEvent(event)
            return
        pos = event.position()
        node_id = self.selection.handle_click(pos.x(), pos.y(), self.graph, self.view, self.center())
        logger.debug(f"Click at ({pos.x():.0f}, {pos.y():.0f}) -> {node_id}")
        event.accept()

    def resizeEvent(self, event: QResizeEvent) -> None:
        super().resizeEvent(event)
        self._place_legend()

    def closeEvent(self, event: QCloseEvent) -> None:
        self.shutdown()
        event.accept()

    # --- HELPERS ---

    def _place_legend(self) -> None:
        self.legend.adjustSize()
        self.legend.move(self.width() - self.legend.width() - LEGEND_MARGIN, LEGEND_MARGIN)

    def _emit_zoom(self, zoom: float) -> None:
        self.zoom_changed.emit(zoom)
        self.update()
