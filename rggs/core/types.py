"""Identifier types.

Graph node ids and pattern-local ids are both plain integers at runtime;
keeping them as distinct ``NewType`` aliases lets type checkers catch a
pattern id being used where a graph id is expected.
"""

from typing import Dict, NewType

NodeId = NewType("NodeId", int)
PatternId = NewType("PatternId", int)

# A mapping from pattern-local ids to the graph nodes they were bound to.
Bindings = Dict[PatternId, NodeId]

__all__ = ["NodeId", "PatternId", "Bindings"]
