"""
Category legend overlay shown in the top-right corner of the canvas.
"""
from __future__ import annotations

from typing import Optional

from PySide6.QtWidgets import QFrame, QHBoxLayout, QLabel, QVBoxLayout, QWidget

from knowledgegraph3d.model.graph import Category
from knowledgegraph3d.model.palette import CATEGORY_DISPLAY_NAMES, category_color

SWATCH_PX = 12


class LegendWidget(QFrame):
    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setObjectName("legend")
        self.setStyleSheet("""
            QFrame#legend { background-color: rgba(255, 255, 255, 230); border-radius: 6px; border: 1px solid #ddd; }
            QLabel { background: transparent; font-size: 11px; }
        """)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(8, 6, 8, 6)
        layout.setSpacing(3)

        title = QLabel("Legend")
        title.setStyleSheet("font-weight: bold;")
        layout.addWidget(title)

        self.swatches: dict[Category, QLabel] = {}
        for category in Category:
            row = QHBoxLayout()
            row.setSpacing(6)

            swatch = QLabel()
            swatch.setFixedSize(SWATCH_PX, SWATCH_PX)
            swatch.setStyleSheet(
                f"background-color: {category_color(category)}; border-radius: {SWATCH_PX // 2}px;"
            )
            row.addWidget(swatch)
            row.addWidget(QLabel(CATEGORY_DISPLAY_NAMES[category]))
            row.addStretch()

            layout.addLayout(row)
            self.swatches[category] = swatch

        self.adjustSize()
