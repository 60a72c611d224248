"""
Configuration & Path Management
===============================
This module serves as the central registry for file paths and global constants.

Why is this file needed?
------------------------
1. Abstraction: It prevents hardcoded paths and magic numbers scattered
   throughout the renderer, the animation loop and the controls.
2. Deployment: It handles the logic required by PyInstaller (sys._MEIPASS) to
   find assets (sample graph JSON) when the app is frozen into an .exe.

Exports:
    ASSETS_PATH (str): Absolute path to the assets directory.
    SAMPLE_GRAPH_PATH (str): Absolute path to the bundled sample graph.
"""
import logging
import os
import sys
from pathlib import Path

logger = logging.getLogger(__name__)


def get_resource_path(relative_path: str) -> str:
    """
    Get absolute path to resource, works for dev and for PyInstaller.
    """
    if hasattr(sys, '_MEIPASS'):
        # PyInstaller temp folder
        base_path: str = getattr(sys, '_MEIPASS')
        return os.path.join(base_path, relative_path)

    # Development or installed: assets ship inside the package,
    # next to this file (src/knowledgegraph3d/assets)
    package_root: Path = Path(__file__).parent
    return os.path.join(str(package_root), relative_path)


# Paths
ASSETS_PATH: str = get_resource_path("assets")
SAMPLE_GRAPH_PATH: str = os.path.join(ASSETS_PATH, "knowledge_graph_sample.json")

# Projection
CAMERA_DISTANCE: float = 300.0
# Maximum distance of an authored node from the origin. Rotation preserves
# that distance, so CAMERA_DISTANCE + z stays >= 100 under any rotation.
COORDINATE_BOUND: float = 200.0

# Zoom
ZOOM_DEFAULT: float = 1.0
ZOOM_MIN: float = 0.5
ZOOM_MAX: float = 2.0
ZOOM_STEP: float = 0.1

# Rotation
ROTATION_SPEED_DEFAULT: float = 0.5
ROTATION_SPEED_MIN: float = 0.0
ROTATION_SPEED_MAX: float = 2.0
ROTATION_SPEED_STEP: float = 0.1
ROTATION_STEP_X: float = 0.01
ROTATION_STEP_Y: float = 0.005

# Animation
FRAME_INTERVAL_MS: int = 16  # ~60 FPS

# Node geometry (screen units)
NODE_BASE_RADIUS: float = 20.0
NODE_LEVEL_RADIUS: float = 5.0
MASTERY_RING_GAP: float = 5.0
MASTERY_RING_WIDTH: float = 3.0
HIT_MARGIN: float = 5.0
LABEL_BASE_OFFSET: float = 35.0

# Edges
EDGE_WIDTH_FACTOR: float = 3.0
EDGE_OPACITY: float = 0.6

if not os.path.exists(ASSETS_PATH):
    logger.warning(f"Assets path not found at {ASSETS_PATH}")
