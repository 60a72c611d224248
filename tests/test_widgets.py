"""Offscreen tests for the canvas, panels and main window."""
import json

import pytest
from PySide6.QtCore import QPointF, QEvent, QSettings, Qt
from PySide6.QtGui import QCloseEvent, QMouseEvent
from PySide6.QtWidgets import QMessageBox

from knowledgegraph3d.controller.animation import ManualTickSource
from knowledgegraph3d.model.projection import project
from knowledgegraph3d.view.main_window import SETTINGS_LAST_GRAPH, SETTINGS_ROTATION_SPEED, MainWindow
from knowledgegraph3d.view.panels.controls import ControlPanel
from knowledgegraph3d.view.panels.node_details import NodeDetailsPanel
from knowledgegraph3d.view.widgets.graph_canvas import GraphCanvas


def _left_click(widget, x, y):
    pos = QPointF(x, y)
    event = QMouseEvent(
        QEvent.Type.MouseButtonPress, pos, pos,
        Qt.MouseButton.LeftButton, Qt.MouseButton.LeftButton, Qt.KeyboardModifier.NoModifier,
    )
    widget.mousePressEvent(event)


@pytest.fixture
def canvas(qapp, two_node_graph):
    source = ManualTickSource()
    widget = GraphCanvas(two_node_graph, tick_source=source)
    widget.resize(400, 400)
    widget.ticks = source
    yield widget
    widget.shutdown()
    widget.deleteLater()


def test_canvas_runs_animation_on_ticks(canvas):
    assert canvas.animation.is_playing
    canvas.ticks.fire(10)
    assert canvas.view.rotation_y > 0
    assert canvas.animation.tick_count == 10


def test_canvas_click_selects_node(canvas, two_node_graph):
    canvas.view.rotation_y = 0.4
    b = project(two_node_graph.node("B").position, canvas.center(), canvas.view)
    _left_click(canvas, b.x, b.y)
    assert canvas.selection.node_id == "B"

    _left_click(canvas, 1, 1)
    assert canvas.selection.node_id == "B"


def test_canvas_render_to_image(canvas):
    image = canvas.render_to_image()
    assert (image.width(), image.height()) == (400, 400)
    assert canvas.pipeline.frames_rendered == 1

    small = canvas.render_to_image(120, 80)
    assert (small.width(), small.height()) == (120, 80)


def test_canvas_close_stops_loop(canvas):
    canvas.closeEvent(QCloseEvent())
    assert not canvas.animation.is_running
    assert canvas.ticks.fire(5) == 0


def test_set_graph_clears_selection(canvas, sample_graph):
    canvas.selection.select(canvas.graph.node("A"))
    canvas.set_graph(sample_graph)
    assert canvas.selection.node is None
    assert canvas.graph is sample_graph


def test_control_panel_zoom_label(canvas):
    panel = ControlPanel(canvas)
    assert panel.zoom_text == "100%"
    panel.btn_zoom_in.click()
    assert panel.zoom_text == "110%"
    for _ in range(20):
        panel.btn_zoom_out.click()
    assert panel.zoom_text == "50%"
    assert canvas.view.zoom == 0.5


def test_control_panel_play_button(canvas):
    panel = ControlPanel(canvas)
    assert panel.btn_play.text() == "Pause"
    panel.btn_play.click()
    assert not canvas.animation.is_playing
    assert panel.btn_play.text() == "Play"

    canvas.ticks.fire(5)
    assert canvas.view.rotation == (0.0, 0.0)


def test_control_panel_speed_slider(canvas):
    panel = ControlPanel(canvas)
    assert panel.lbl_speed.text() == "0.5x"
    panel.slider_speed.setValue(15)
    assert canvas.view.rotation_speed == pytest.approx(1.5)
    assert panel.lbl_speed.text() == "1.5x"

    canvas.set_rotation_speed(0.2)
    assert panel.slider_speed.value() == 2


def test_details_panel_follows_selection(canvas, two_node_graph):
    panel = NodeDetailsPanel(canvas)
    assert not panel.lbl_empty.isHidden()
    assert panel.details.isHidden()

    canvas.selection.select(two_node_graph.node("B"))
    assert panel.details.isVisibleTo(panel)
    assert panel.lbl_title.text() == "B"
    assert panel.lbl_level.text() == "Level 1"
    assert panel.progress_mastery.value() == 50
    # "ghost" does not exist in the graph and is left out
    assert panel.connection_labels == ["A"]
    assert panel.lbl_connections.text() == "A"

    canvas.selection.clear()
    assert panel.details.isHidden()


def test_details_panel_without_connections(canvas, two_node_graph):
    panel = NodeDetailsPanel(canvas)
    canvas.selection.select(two_node_graph.node("A"))
    assert panel.lbl_connections.text() == "none"


# --- Main window ---

@pytest.fixture
def window(qapp, two_node_graph):
    source = ManualTickSource()
    win = MainWindow(two_node_graph, tick_source=source)
    yield win
    win.canvas.shutdown()
    win.deleteLater()


def test_window_title(window):
    assert window.windowTitle() == "Knowledge Graph 3D - [Sample]"


def test_load_graph_file_success(window, tmp_path, sample_graph):
    from knowledgegraph3d.model.io import GraphIO
    path = tmp_path / "course.json"
    path.write_text(json.dumps(GraphIO.to_dict(sample_graph)))

    assert window.load_graph_file(str(path)) is True
    assert len(window.canvas.graph.nodes) == 6
    assert window.windowTitle().endswith("[course.json]")
    assert QSettings().value(SETTINGS_LAST_GRAPH) == str(path)


def test_load_graph_file_failure_keeps_graph(window, tmp_path, monkeypatch):
    errors = []
    monkeypatch.setattr(QMessageBox, "critical", lambda *args: errors.append(args[2]))
    path = tmp_path / "broken.json"
    path.write_text(json.dumps({"nodes": [], "edges": [{"from": "x", "to": "y", "strength": 1, "type": "related"}]}))
    original = window.canvas.graph

    assert window.load_graph_file(str(path)) is False
    assert window.canvas.graph is original
    assert len(errors) == 1 and "'x'" in errors[0]

    assert window.load_graph_file(str(tmp_path / "missing.json")) is False
    assert window.canvas.graph is original


def test_close_saves_speed_and_stops_loop(window):
    window.canvas.set_rotation_speed(1.2)
    window.closeEvent(QCloseEvent())
    assert not window.canvas.animation.is_running
    assert float(QSettings().value(SETTINGS_ROTATION_SPEED)) == pytest.approx(1.2)


def test_menu_actions_drive_canvas(window):
    window.act_zoom_in.trigger()
    assert window.control_panel.zoom_text == "110%"
    window.act_toggle_play.trigger()
    assert not window.canvas.animation.is_playing


def test_legend_lists_every_category(canvas):
    from knowledgegraph3d.model.graph import Category
    assert set(canvas.legend.swatches) == set(Category)


def test_load_unreadable_graph_shows_message(window, tmp_path, monkeypatch):
    errors = []
    monkeypatch.setattr(QMessageBox, "critical", lambda *args: errors.append(args[2]))
    path = tmp_path / "binary.json"
    path.write_bytes(b'{"nodes": [{"id": "\xff"}]}')
    original = window.canvas.graph

    assert window.load_graph_file(str(path)) is False
    assert window.load_graph_file(str(tmp_path)) is False
    assert window.canvas.graph is original
    assert len(errors) == 2
