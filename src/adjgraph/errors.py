from __future__ import annotations

"""Exceptions raised by adjgraph."""


class GraphError(Exception):
    """Base exception for graph failures that cannot be reported as a result."""
    pass


class VertexNotFoundError(GraphError, KeyError):
    """Raised when an operation that has no sentinel result names an absent vertex."""

    def __init__(self, key: object) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"vertex {self.key!r} is not in the graph"


__all__ = ["GraphError", "VertexNotFoundError"]
