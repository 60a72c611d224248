"""Interactive 3-D knowledge graph viewer."""
