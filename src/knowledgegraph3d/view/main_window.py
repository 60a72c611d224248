"""
Main Application Window
=======================
The primary GUI container that holds the menu bar, the side panels and the
graph canvas.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Routing: It connects global actions (File -> Open, Export) to the canvas
   and persists user preferences between sessions.
"""
import logging
import os
from typing import Optional

from PySide6.QtCore import QSettings, Qt
from PySide6.QtGui import QAction, QCloseEvent
from PySide6.QtWidgets import (
    QFileDialog, QMainWindow, QMessageBox, QSplitter, QVBoxLayout, QWidget
)

from knowledgegraph3d.application import VISIBLE_APP_NAME
from knowledgegraph3d.controller.animation import TickSource
from knowledgegraph3d.model.graph import GraphValidationError, KnowledgeGraph
from knowledgegraph3d.model.io import GraphIO
from knowledgegraph3d.view.panels.controls import ControlPanel
from knowledgegraph3d.view.panels.node_details import NodeDetailsPanel
from knowledgegraph3d.view.widgets.graph_canvas import GraphCanvas

logger = logging.getLogger(__name__)

SETTINGS_LAST_GRAPH = "graph/last_path"
SETTINGS_ROTATION_SPEED = "view/rotation_speed"


class MainWindow(QMainWindow):
    def __init__(
        self,
        graph: KnowledgeGraph,
        graph_path: Optional[str] = None,
        tick_source: Optional[TickSource] = None,
    ) -> None:
        super().__init__()
        self.graph_path: Optional[str] = graph_path

        self.update_window_title()
        self.resize(1200, 760)

        # --- SPLITTER (CONTENT AREA) ---
        splitter = QSplitter(Qt.Orientation.Horizontal)
        self.setCentralWidget(splitter)

        # --- RIGHT SIDE: Graph canvas (created first, the panels bind to it) ---
        self.canvas = GraphCanvas(graph, tick_source=tick_source)

        # --- LEFT SIDE: Controls + selected node ---
        side = QWidget()
        side_layout = QVBoxLayout(side)
        self.control_panel = ControlPanel(self.canvas)
        self.details_panel = NodeDetailsPanel(self.canvas)
        side_layout.addWidget(self.control_panel)
        side_layout.addWidget(self.details_panel, 1)

        splitter.addWidget(side)
        splitter.addWidget(self.canvas)
        splitter.setStretchFactor(0, 0)
        splitter.setStretchFactor(1, 1)
        splitter.setSizes([300, 900])

        # --- ACTIONS & MENUS ---
        self._create_actions()
        self._create_menus()

        self._restore_settings()

    def _create_actions(self) -> None:
        self.act_open = QAction("Open Graph...", self)
        self.act_open.setShortcut("Ctrl+O")
        self.act_open.triggered.connect(self.on_file_open)

        self.act_export = QAction("Export Frame as PNG...", self)
        self.act_export.setShortcut("Ctrl+E")
        self.act_export.triggered.connect(self.on_export_frame)

        self.act_exit = QAction("Exit", self)
        self.act_exit.triggered.connect(self.close)

        self.act_toggle_play = QAction("Play / Pause", self)
        self.act_toggle_play.setShortcut("Space")
        self.act_toggle_play.triggered.connect(self.canvas.toggle_playback)

        self.act_reset = QAction("Reset Rotation", self)
        self.act_reset.setShortcut("R")
        self.act_reset.triggered.connect(self.canvas.reset_rotation)

        self.act_zoom_in = QAction("Zoom In", self)
        self.act_zoom_in.setShortcut("Ctrl++")
        self.act_zoom_in.triggered.connect(self.canvas.zoom_in)

        self.act_zoom_out = QAction("Zoom Out", self)
        self.act_zoom_out.setShortcut("Ctrl+-")
        self.act_zoom_out.triggered.connect(self.canvas.zoom_out)

        self.act_clear_selection = QAction("Clear Selection", self)
        self.act_clear_selection.setShortcut("Esc")
        self.act_clear_selection.triggered.connect(self.canvas.selection.clear)

    def _create_menus(self) -> None:
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("&File")
        file_menu.addAction(self.act_open)
        file_menu.addAction(self.act_export)
        file_menu.addSeparator()
        file_menu.addAction(self.act_exit)

        view_menu = menu_bar.addMenu("&View")
        view_menu.addAction(self.act_toggle_play)
        view_menu.addAction(self.act_reset)
        view_menu.addSeparator()
        view_menu.addAction(self.act_zoom_in)
        view_menu.addAction(self.act_zoom_out)
        view_menu.addSeparator()
        view_menu.addAction(self.act_clear_selection)

    # --- HELPER METHODS ---

    def update_window_title(self) -> None:
        name = os.path.basename(self.graph_path) if self.graph_path else "Sample"
        self.setWindowTitle(f"{VISIBLE_APP_NAME} - [{name}]")

    def load_graph_file(self, filepath: str) -> bool:
        """Load a graph file into the canvas. On failure the current graph stays."""
        try:
            graph = GraphIO.load_graph(filepath)
        except (OSError, GraphValidationError) as e:
            logger.exception(f"Failed to open graph '{filepath}'")
            QMessageBox.critical(self, "Cannot open graph", str(e))
            return False

        self.canvas.set_graph(graph)
        self.graph_path = filepath
        self.update_window_title()
        QSettings().setValue(SETTINGS_LAST_GRAPH, filepath)
        return True

    def _restore_settings(self) -> None:
        speed = QSettings().value(SETTINGS_ROTATION_SPEED, None)
        if speed is not None:
            try:
                self.canvas.set_rotation_speed(float(speed))
            except (TypeError, ValueError):
                logger.warning(f"Ignoring invalid stored rotation speed: {speed!r}")

    def _save_settings(self) -> None:
        QSettings().setValue(SETTINGS_ROTATION_SPEED, self.canvas.view.rotation_speed)

    # --- FILE SLOTS ---

    def on_file_open(self) -> None:
        filepath, _ = QFileDialog.getOpenFileName(
            self, "Open Knowledge Graph", "", "Graph JSON (*.json);;All Files (*)"
        )
        if filepath:
            self.load_graph_file(filepath)

    def on_export_frame(self) -> None:
        filepath, _ = QFileDialog.getSaveFileName(self, "Export Frame", "graph.png", "PNG Image (*.png)")
        if not filepath:
            return
        if not self.canvas.render_to_image().save(filepath, "PNG"):
            QMessageBox.critical(self, "Export failed", f"Could not write '{filepath}'.")
            return
        logger.info(f"Frame exported to: {filepath}")

    def closeEvent(self, event: QCloseEvent) -> None:
        self._save_settings()
        self.canvas.shutdown()
        event.accept()
