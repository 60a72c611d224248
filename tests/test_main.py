"""Tests for startup helpers: initial graph choice and logging setup."""
import logging

from knowledgegraph3d.logging_config import PACKAGE_LOGGER, setup_logging
from knowledgegraph3d.main import load_initial_graph


def test_initial_graph_defaults_to_sample():
    graph, path = load_initial_graph(None)
    assert path is None
    assert len(graph.nodes) == 6


def test_initial_graph_uses_preferred_file(tmp_path):
    path = tmp_path / "one.json"
    path.write_text('{"nodes": [{"id": "solo", "label": "Solo", "category": "core", "level": 2, '
                    '"position": {"x": 0, "y": 0, "z": 0}}], "edges": []}')
    graph, used = load_initial_graph(str(path))
    assert used == str(path)
    assert [n.id for n in graph.nodes] == ["solo"]


def test_invalid_preferred_file_falls_back(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text('{"nodes": [{"id": "x"}]}')
    graph, used = load_initial_graph(str(path))
    assert used is None
    assert len(graph.nodes) == 6


def test_missing_preferred_file_falls_back(tmp_path):
    graph, used = load_initial_graph(str(tmp_path / "gone.json"))
    assert used is None
    assert len(graph.edges) == 5


def test_setup_logging_accepts_level_names(tmp_path):
    log_file = tmp_path / "app.log"
    logger = setup_logging("debug", log_file=str(log_file), capture_qt=False)
    try:
        assert logger.name == PACKAGE_LOGGER
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 2

        logging.getLogger(f"{PACKAGE_LOGGER}.model").info("hello from a child logger")
        for handler in logger.handlers:
            handler.flush()
        assert "hello from a child logger" in log_file.read_text(encoding="utf-8")

        # Re-running replaces handlers instead of stacking them
        setup_logging("nonsense", capture_qt=False)
        assert len(logger.handlers) == 1
        assert logger.level == logging.INFO
    finally:
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)


def test_directory_as_preferred_file_falls_back(tmp_path):
    graph, used = load_initial_graph(str(tmp_path))
    assert used is None
    assert len(graph.nodes) == 6


def test_non_utf8_preferred_file_falls_back(tmp_path):
    path = tmp_path / "binary.json"
    path.write_bytes(b"\xff\xfe\x00garbage")
    graph, used = load_initial_graph(str(path))
    assert used is None
    assert len(graph.nodes) == 6
