"""Engine domain: read-only queries over the social graph."""

from socialgraph.engine.queries import QueryEngine

__all__ = ["QueryEngine"]
