"""
Selected Node Details Panel
"""
from __future__ import annotations

from typing import Optional, TYPE_CHECKING

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QFormLayout, QGroupBox, QLabel, QProgressBar, QVBoxLayout, QWidget

from knowledgegraph3d.model.palette import CATEGORY_DISPLAY_NAMES, category_color

if TYPE_CHECKING:
    from knowledgegraph3d.model.graph import Node
    from knowledgegraph3d.view.widgets.graph_canvas import GraphCanvas


class NodeDetailsPanel(QGroupBox):
    """Shows the topic picked on the canvas. Hidden content until a node is selected."""

    def __init__(self, canvas: GraphCanvas, parent: Optional[QWidget] = None) -> None:
        super().__init__("Selected topic", parent)
        self.canvas = canvas

        layout = QVBoxLayout(self)

        self.lbl_empty = QLabel("Click a node in the graph to see its details.")
        self.lbl_empty.setWordWrap(True)
        self.lbl_empty.setStyleSheet("color: gray;")
        layout.addWidget(self.lbl_empty)

        self.details = QWidget()
        form = QFormLayout(self.details)
        form.setContentsMargins(0, 0, 0, 0)

        self.lbl_title = QLabel()
        self.lbl_title.setStyleSheet("font-weight: bold; font-size: 14px;")
        self.lbl_title.setWordWrap(True)
        form.addRow(self.lbl_title)

        self.lbl_category = QLabel()
        form.addRow("Category:", self.lbl_category)

        self.progress_mastery = QProgressBar()
        self.progress_mastery.setRange(0, 100)
        self.progress_mastery.setTextVisible(True)
        self.progress_mastery.setFormat("%p%")
        form.addRow("Mastery:", self.progress_mastery)

        self.lbl_level = QLabel()
        form.addRow("Difficulty:", self.lbl_level)

        self.lbl_connections = QLabel()
        self.lbl_connections.setWordWrap(True)
        self.lbl_connections.setTextFormat(Qt.TextFormat.PlainText)
        form.addRow("Related topics:", self.lbl_connections)

        layout.addWidget(self.details)
        layout.addStretch()

        self.canvas.selection.selection_changed.connect(self.show_node)
        self.show_node(self.canvas.selection.node)

    def show_node(self, node: Optional[Node]) -> None:
        if node is None:
            self.details.setVisible(False)
            self.lbl_empty.setVisible(True)
            return

        self.lbl_empty.setVisible(False)
        self.details.setVisible(True)

        self.lbl_title.setText(node.label)
        self.lbl_category.setText(
            f"<span style='color: {category_color(node.category)};'>&#9679;</span> "
            f"{CATEGORY_DISPLAY_NAMES[node.category]}"
        )
        self.progress_mastery.setValue(round(node.mastery))
        self.lbl_level.setText(f"Level {node.level}")

        related = self.canvas.graph.resolved_connections(node.id) if node.id in self.canvas.graph else []
        if related:
            self.lbl_connections.setText(", ".join(n.label for n in related))
        else:
            self.lbl_connections.setText("none")

    @property
    def connection_labels(self) -> list[str]:
        node = self.canvas.selection.node
        if node is None or node.id not in self.canvas.graph:
            return []
        return [n.label for n in self.canvas.graph.resolved_connections(node.id)]
