"""
Playback & View Control Panel
"""
from __future__ import annotations

from typing import Optional, TYPE_CHECKING

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QFormLayout, QGroupBox, QHBoxLayout, QLabel, QPushButton, QSlider, QStyle, QVBoxLayout, QWidget
)

from knowledgegraph3d.config import ROTATION_SPEED_MAX, ROTATION_SPEED_MIN, ROTATION_SPEED_STEP

if TYPE_CHECKING:
    from knowledgegraph3d.view.widgets.graph_canvas import GraphCanvas

# The slider works in integer ticks of ROTATION_SPEED_STEP
SPEED_TICKS_PER_UNIT = round(1 / ROTATION_SPEED_STEP)


class ControlPanel(QWidget):
    def __init__(self, canvas: GraphCanvas, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.canvas = canvas

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        # --- Playback ---
        grp_play = QGroupBox("Playback")
        hbox_play = QHBoxLayout(grp_play)

        self.btn_play = QPushButton()
        self.btn_play.setToolTip("Play / pause rotation")
        self.btn_play.clicked.connect(self.canvas.toggle_playback)
        hbox_play.addWidget(self.btn_play)

        self.btn_reset = QPushButton()
        self.btn_reset.setIcon(self.style().standardIcon(QStyle.StandardPixmap.SP_BrowserReload))
        self.btn_reset.setToolTip("Reset rotation")
        self.btn_reset.clicked.connect(self.canvas.reset_rotation)
        hbox_play.addWidget(self.btn_reset)
        hbox_play.addStretch()

        layout.addWidget(grp_play)

        # --- View ---
        grp_view = QGroupBox("View")
        form = QFormLayout(grp_view)

        hbox_speed = QHBoxLayout()
        self.slider_speed = QSlider(Qt.Orientation.Horizontal)
        self.slider_speed.setRange(
            round(ROTATION_SPEED_MIN * SPEED_TICKS_PER_UNIT),
            round(ROTATION_SPEED_MAX * SPEED_TICKS_PER_UNIT),
        )
        self.slider_speed.setSingleStep(1)
        self.slider_speed.setValue(round(self.canvas.view.rotation_speed * SPEED_TICKS_PER_UNIT))
        self.slider_speed.valueChanged.connect(self.on_speed_slider_changed)
        hbox_speed.addWidget(self.slider_speed)

        self.lbl_speed = QLabel()
        self.lbl_speed.setMinimumWidth(36)
        hbox_speed.addWidget(self.lbl_speed)
        form.addRow("Rotation speed:", hbox_speed)

        hbox_zoom = QHBoxLayout()
        self.btn_zoom_out = QPushButton("-")
        self.btn_zoom_out.setToolTip("Zoom out")
        self.btn_zoom_out.clicked.connect(self.canvas.zoom_out)
        hbox_zoom.addWidget(self.btn_zoom_out)

        self.lbl_zoom = QLabel()
        self.lbl_zoom.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.lbl_zoom.setMinimumWidth(48)
        hbox_zoom.addWidget(self.lbl_zoom)

        self.btn_zoom_in = QPushButton("+")
        self.btn_zoom_in.setToolTip("Zoom in")
        self.btn_zoom_in.clicked.connect(self.canvas.zoom_in)
        hbox_zoom.addWidget(self.btn_zoom_in)
        form.addRow("Zoom:", hbox_zoom)

        layout.addWidget(grp_view)

        # --- Sync with canvas ---
        self.canvas.animation.playback_changed.connect(self.on_playback_changed)
        self.canvas.zoom_changed.connect(self.on_zoom_changed)
        self.canvas.rotation_speed_changed.connect(self.on_speed_changed)

        self.on_playback_changed(self.canvas.animation.is_playing)
        self.on_zoom_changed(self.canvas.view.zoom)
        self.on_speed_changed(self.canvas.view.rotation_speed)

    # --- PROPERTIES ---

    @property
    def zoom_text(self) -> str:
        return self.lbl_zoom.text()

    # --- SLOTS ---

    def on_speed_slider_changed(self, value: int) -> None:
        self.canvas.set_rotation_speed(value / SPEED_TICKS_PER_UNIT)

    def on_speed_changed(self, speed: float) -> None:
        self.lbl_speed.setText(f"{speed:.1f}x")
        ticks = round(speed * SPEED_TICKS_PER_UNIT)
        if self.slider_speed.value() != ticks:
            self.slider_speed.blockSignals(True)
            self.slider_speed.setValue(ticks)
            self.slider_speed.blockSignals(False)

    def on_playback_changed(self, playing: bool) -> None:
        icon = QStyle.StandardPixmap.SP_MediaPause if playing else QStyle.StandardPixmap.SP_MediaPlay
        self.btn_play.setIcon(self.style().standardIcon(icon))
        self.btn_play.setText("Pause" if playing else "Play")

    def on_zoom_changed(self, zoom: float) -> None:
        self.lbl_zoom.setText(f"{self.canvas.view.zoom_percent}%")
