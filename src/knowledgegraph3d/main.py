"""
Application Initialization
==========================
This module constructs the model, the main window and starts the Qt event loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Sets up logging.
2. Loads the Graph Model (last opened file, else the bundled sample).
3. Passes the graph into the Main Window.
"""
import logging
import os
import sys
from typing import Optional

from PySide6.QtCore import QSettings

from knowledgegraph3d.application import create_app
from knowledgegraph3d.config import SAMPLE_GRAPH_PATH
from knowledgegraph3d.logging_config import setup_logging
from knowledgegraph3d.model.graph import GraphValidationError, KnowledgeGraph
from knowledgegraph3d.model.io import GraphIO
from knowledgegraph3d.view.main_window import SETTINGS_LAST_GRAPH, MainWindow

logger = logging.getLogger(__name__)


def load_initial_graph(preferred: Optional[str]) -> tuple[KnowledgeGraph, Optional[str]]:
    """Try the preferred file first; fall back to the bundled sample."""
    if preferred and os.path.exists(preferred):
        try:
            return GraphIO.load_graph(preferred), preferred
        except (OSError, GraphValidationError) as e:
            logger.warning(f"Could not load '{preferred}' ({e}), falling back to the sample graph.")
    return GraphIO.load_graph(SAMPLE_GRAPH_PATH), None


def main() -> None:
    # 1. Setup Logging (Console + Optional File)
    setup_logging(level=os.environ.get("KNOWLEDGEGRAPH3D_LOG_LEVEL", "INFO"))

    # 2. Create the Qt Application
    app = create_app()

    # 3. Initialize the Data Model (command line path wins over the last session)
    preferred = sys.argv[1] if len(sys.argv) > 1 else QSettings().value(SETTINGS_LAST_GRAPH, None)
    graph, graph_path = load_initial_graph(preferred)

    # 4. Initialize the Main Window, passing the model
    window = MainWindow(graph, graph_path=graph_path)
    window.show()

    # 5. Start Event Loop
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
