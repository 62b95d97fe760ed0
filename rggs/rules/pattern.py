"""Left-hand side patterns: pattern nodes plus required edges."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from rggs.core.node import Node
from rggs.core.types import PatternId
from rggs.rules.condition import Condition
from rggs.utils.validation import ValidationError


@dataclass
class FromNode:
    """A pattern node.

    Attributes:
        id: Pattern-local id, chosen by the rule author
        name: Required node name, or None to accept any
        values: Attribute conditions; only consulted when matching is asked
            to check values (see ``match_node``)
    """

    id: PatternId
    name: Optional[str] = None
    values: dict[str, Condition] = field(default_factory=dict)

    def match_node(self, node: Node, check_values: bool = False) -> bool:
        if self.name is not None and self.name != node.name:
            return False
        if not check_values:
            return True
        for key, condition in self.values.items():
            value = node.values.get(key)
            if value is None or not condition.check(value):
                return False
        return True


@dataclass
class NodeSet:
    """Pattern nodes in declaration order and the edges between them."""

    nodes: list[FromNode] = field(default_factory=list)
    edges: list[tuple[PatternId, PatternId]] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.edges = [tuple(e) for e in self.edges]  # type: ignore[misc]
        seen: set[int] = set()
        for node in self.nodes:
            if node.id in seen:
                raise ValidationError(
                    "duplicate_pattern_id",
                    f"Pattern id {node.id} declared twice",
                    pattern_id=node.id,
                )
            seen.add(node.id)
        for a, b in self.edges:
            for endpoint in (a, b):
                if endpoint not in seen:
                    raise ValidationError(
                        "unknown_pattern_id",
                        f"Pattern edge references undeclared id {endpoint}",
                        edge=(a, b),
                        pattern_id=endpoint,
                    )

    def ids(self) -> list[PatternId]:
        return [n.id for n in self.nodes]

    def edge_set(self) -> set[frozenset]:
        """Undirected edges as frozensets of pattern ids."""
        return {frozenset(e) for e in self.edges}


__all__ = ["FromNode", "NodeSet"]
