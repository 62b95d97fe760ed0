"""Structural errors raised by the graph stores."""

from __future__ import annotations


class GraphError(Exception):
    """Base class for graph store failures."""


class MissingNodeError(GraphError, KeyError):
    def __init__(self, node_id: int) -> None:
        super().__init__(node_id)
        self.node_id = node_id

    def __str__(self) -> str:
        return f"Missing node {self.node_id}"


class DuplicateNodeError(GraphError):
    def __init__(self, node_id: int) -> None:
        super().__init__(node_id)
        self.node_id = node_id

    def __str__(self) -> str:
        return f"Duplicate node {self.node_id}"


__all__ = ["GraphError", "MissingNodeError", "DuplicateNodeError"]
