"""
3D -> 2D Projection
===================
Rotates authored node coordinates by the current view angles and applies a
fixed-distance perspective divide.

Both the renderer and the hit-tester go through `project_points`, so what is
drawn and what is clickable can never disagree.
"""
from __future__ import annotations

from typing import NamedTuple, TYPE_CHECKING

import numpy as np

from knowledgegraph3d.config import CAMERA_DISTANCE
from knowledgegraph3d.model.graph import Position3D

if TYPE_CHECKING:
    import numpy.typing as npt
    from knowledgegraph3d.model.view_transform import ViewTransform


class ScreenPoint(NamedTuple):
    x: float
    y: float
    scale: float


def project_points(
    points: npt.ArrayLike,
    center: tuple[float, float],
    view: ViewTransform,
    distance: float = CAMERA_DISTANCE,
) -> npt.NDArray[np.float64]:
    """
    Project an (N, 3) array of points to screen space.

    Args:
        points: (N, 3) array of x, y, z coordinates.
        center: Screen coordinates of the viewport center.
        view: Current rotation and zoom.
        distance: Camera distance D of the perspective divide.

    Returns:
        (N, 3) array with columns screen_x, screen_y, scale.
    """
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 3)
    x, y, z = pts[:, 0], pts[:, 1], pts[:, 2]

    cos_x, sin_x = np.cos(view.rotation_x), np.sin(view.rotation_x)
    cos_y, sin_y = np.cos(view.rotation_y), np.sin(view.rotation_y)

    # Rotate around Y axis
    x1 = x * cos_y - z * sin_y
    z1 = x * sin_y + z * cos_y

    # Rotate around X axis
    y2 = y * cos_x - z1 * sin_x
    z2 = y * sin_x + z1 * cos_x

    scale = (distance / (distance + z2)) * view.zoom

    cx, cy = center
    return np.column_stack((cx + x1 * scale, cy + y2 * scale, scale))


def project(point: Position3D, center: tuple[float, float], view: ViewTransform) -> ScreenPoint:
    """Project a single point. Thin wrapper over `project_points`."""
    sx, sy, scale = project_points((point.x, point.y, point.z), center, view)[0]
    return ScreenPoint(float(sx), float(sy), float(scale))
