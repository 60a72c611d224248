"""
Input/Output Manager (JSON)
Builds a KnowledgeGraph from the JSON graph format used by the bundled sample.
"""
import json
import logging
import os
from typing import Any, Optional

from knowledgegraph3d.config import SAMPLE_GRAPH_PATH
from knowledgegraph3d.model.graph import (
    Category, Edge, GraphValidationError, KnowledgeGraph, Node, Position3D, RelationType
)

logger = logging.getLogger(__name__)


class GraphIO:

    @staticmethod
    def load_graph(filepath: str) -> KnowledgeGraph:
        """
        Read a graph JSON file.

        Raises:
            GraphValidationError: If the file is not valid JSON or violates a model invariant.
            OSError: If the file does not exist or cannot be read.
        """
        logger.info(f"Loading graph from: {filepath}")
        with open(filepath, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                msg = f"File '{os.path.basename(filepath)}' is not valid UTF-8 JSON: {e}"
                logger.error(msg)
                raise GraphValidationError(msg) from e

        try:
            graph = GraphIO.from_dict(data)
        except GraphValidationError as e:
            logger.error(f"Invalid graph in '{filepath}': {e}")
            raise

        logger.info(f"Loaded {len(graph.nodes)} nodes and {len(graph.edges)} edges.")
        return graph

    @staticmethod
    def load_sample(filepath: Optional[str] = None) -> KnowledgeGraph:
        return GraphIO.load_graph(filepath or SAMPLE_GRAPH_PATH)

    @staticmethod
    def from_dict(data: dict[str, Any]) -> KnowledgeGraph:
        if not isinstance(data, dict):
            raise GraphValidationError("Graph document must be a JSON object with 'nodes' and 'edges'.")
        raw_nodes = data.get("nodes", [])
        raw_edges = data.get("edges", [])
        for key, value in (("nodes", raw_nodes), ("edges", raw_edges)):
            if not isinstance(value, list):
                raise GraphValidationError(f"'{key}' must be a JSON array, got {type(value).__name__}.")

        nodes = [GraphIO._node_from_dict(i, raw) for i, raw in enumerate(raw_nodes)]
        edges = [GraphIO._edge_from_dict(i, raw) for i, raw in enumerate(raw_edges)]
        return KnowledgeGraph(nodes=tuple(nodes), edges=tuple(edges))

    @staticmethod
    def to_dict(graph: KnowledgeGraph) -> dict[str, Any]:
        return {
            "nodes": [
                {
                    "id": n.id,
                    "label": n.label,
                    "category": n.category.value,
                    "level": n.level,
                    "mastery": n.mastery,
                    "position": {"x": n.position.x, "y": n.position.y, "z": n.position.z},
                    "connections": list(n.connections),
                }
                for n in graph.nodes
            ],
            "edges": [
                {"from": e.source, "to": e.target, "strength": e.strength, "type": e.relation.value}
                for e in graph.edges
            ],
        }

    # --- HELPERS ---

    @staticmethod
    def _node_from_dict(i: int, raw: dict[str, Any]) -> Node:
        try:
            pos = raw["position"]
            level = raw["level"]
            if isinstance(level, float) and level.is_integer():
                level = int(level)
            return Node(
                id=str(raw["id"]),
                label=str(raw.get("label", raw["id"])),
                category=Category.parse(raw["category"]),
                level=level,
                position=Position3D(float(pos["x"]), float(pos["y"]), float(pos.get("z", 0.0))),
                mastery=float(raw.get("mastery", 0.0)),
                connections=tuple(str(c) for c in raw.get("connections", [])),
            )
        except GraphValidationError:
            raise
        except (KeyError, TypeError, AttributeError, ValueError) as e:
            raise GraphValidationError(f"Node #{i}: missing or malformed field {e}.") from e

    @staticmethod
    def _edge_from_dict(i: int, raw: dict[str, Any]) -> Edge:
        try:
            return Edge(
                source=str(raw["from"]),
                target=str(raw["to"]),
                strength=float(raw["strength"]),
                relation=RelationType.parse(raw["type"]),
            )
        except GraphValidationError:
            raise
        except (KeyError, TypeError, AttributeError, ValueError) as e:
            raise GraphValidationError(f"Edge #{i}: missing or malformed field {e}.") from e
