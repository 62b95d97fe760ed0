"""Core graph data structures."""

from .dirty_graph import GENERATION_LIMIT, DirtyGraph, canonical_edge
from .errors import DuplicateNodeError, GraphError, MissingNodeError
from .node import Node
from .rgg_graph import RggGraph
from .types import Bindings, NodeId, PatternId
from .value import Value, ValueType, ValueTypeError

__all__ = [
    "DirtyGraph",
    "GENERATION_LIMIT",
    "canonical_edge",
    "GraphError",
    "MissingNodeError",
    "DuplicateNodeError",
    "Node",
    "RggGraph",
    "NodeId",
    "PatternId",
    "Bindings",
    "Value",
    "ValueType",
    "ValueTypeError",
]
