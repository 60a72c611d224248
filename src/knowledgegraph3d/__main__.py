"""Run with: python -m knowledgegraph3d [graph.json]"""
from knowledgegraph3d.main import main

if __name__ == "__main__":
    main()
