"""Shared fixtures: offscreen Qt application, sample graphs, a recording surface."""
import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PySide6.QtCore import QCoreApplication, QSettings
from PySide6.QtWidgets import QApplication

from knowledgegraph3d.model.graph import Category, Edge, KnowledgeGraph, Node, Position3D, RelationType


@pytest.fixture(scope="session")
def qapp(tmp_path_factory):
    """One QApplication for the whole run, with settings redirected to a temp dir."""
    QCoreApplication.setOrganizationName("knowledgegraph3d-tests")
    QCoreApplication.setApplicationName("knowledgegraph3d-tests")
    QSettings.setDefaultFormat(QSettings.Format.IniFormat)
    QSettings.setPath(
        QSettings.Format.IniFormat,
        QSettings.Scope.UserScope,
        str(tmp_path_factory.mktemp("settings")),
    )
    app = QApplication.instance() or QApplication([])
    yield app


def make_node(node_id, x=0.0, y=0.0, z=0.0, level=1, category=Category.CORE, mastery=50.0, connections=()):
    return Node(
        id=node_id,
        label=node_id.upper(),
        category=category,
        level=level,
        position=Position3D(x, y, z),
        mastery=mastery,
        connections=tuple(connections),
    )


@pytest.fixture
def two_node_graph():
    """A at the origin and B 100 units to the right, both level 1."""
    return KnowledgeGraph(
        nodes=(make_node("A"), make_node("B", x=100.0, connections=("A", "ghost"))),
        edges=(Edge("A", "B", 0.5, RelationType.RELATED),),
    )


@pytest.fixture
def sample_graph():
    from knowledgegraph3d.model.io import GraphIO
    return GraphIO.load_sample()


class RecordingSurface:
    """DrawingSurface that records every call instead of painting."""

    def __init__(self, width=400, height=400):
        self._width = width
        self._height = height
        self.calls = []

    def width(self):
        return self._width

    def height(self):
        return self._height

    def resize(self, width, height):
        self._width, self._height = width, height

    def clear(self):
        self.calls.append(("clear",))

    def draw_line(self, x1, y1, x2, y2, color, width, opacity):
        self.calls.append(("line", x1, y1, x2, y2, color, width, opacity))

    def fill_circle(self, x, y, radius, color):
        self.calls.append(("circle", x, y, radius, color))

    def stroke_arc(self, x, y, radius, start, span, color, width):
        self.calls.append(("arc", x, y, radius, start, span, color, width))

    def draw_text(self, x, y, text, color):
        self.calls.append(("text", x, y, text, color))

    def kinds(self):
        return [c[0] for c in self.calls]


@pytest.fixture
def surface():
    return RecordingSurface()
