"""
View Transform
==============
The only mutable state of a rendering session: rotation angles, zoom and
rotation speed. Renderer, animation loop and hit-tester all receive the same
instance explicitly; nothing reads it from a global.
"""
from __future__ import annotations

from dataclasses import dataclass

from knowledgegraph3d.config import (
    ZOOM_DEFAULT, ZOOM_MIN, ZOOM_MAX, ZOOM_STEP,
    ROTATION_SPEED_DEFAULT, ROTATION_SPEED_MIN, ROTATION_SPEED_MAX,
)


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


@dataclass
class ViewTransform:
    rotation_x: float = 0.0
    rotation_y: float = 0.0
    zoom: float = ZOOM_DEFAULT
    rotation_speed: float = ROTATION_SPEED_DEFAULT

    def __post_init__(self) -> None:
        self.zoom = clamp(self.zoom, ZOOM_MIN, ZOOM_MAX)
        self.rotation_speed = clamp(self.rotation_speed, ROTATION_SPEED_MIN, ROTATION_SPEED_MAX)

    # --- Zoom ---

    def set_zoom(self, value: float) -> float:
        """Set zoom, clamped to [ZOOM_MIN, ZOOM_MAX]. Returns the applied value."""
        # Rounding keeps repeated 0.1 steps from drifting (1.0 + 10 * 0.1 == 2.0)
        self.zoom = clamp(round(value, 6), ZOOM_MIN, ZOOM_MAX)
        return self.zoom

    def zoom_in(self, step: float = ZOOM_STEP) -> float:
        return self.set_zoom(self.zoom + step)

    def zoom_out(self, step: float = ZOOM_STEP) -> float:
        return self.set_zoom(self.zoom - step)

    @property
    def zoom_percent(self) -> int:
        return round(self.zoom * 100)

    # --- Rotation ---

    def set_rotation_speed(self, value: float) -> float:
        self.rotation_speed = clamp(value, ROTATION_SPEED_MIN, ROTATION_SPEED_MAX)
        return self.rotation_speed

    def rotate(self, dx: float, dy: float) -> None:
        self.rotation_x += dx
        self.rotation_y += dy

    def reset_rotation(self) -> None:
        self.rotation_x = 0.0
        self.rotation_y = 0.0

    @property
    def rotation(self) -> tuple[float, float]:
        return self.rotation_x, self.rotation_y
