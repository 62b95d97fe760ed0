"""Graph structure plus per-node attributes, kept in lock-step."""

from __future__ import annotations

import hashlib
import json
from typing import Iterator

from rggs.core.dirty_graph import DirtyGraph
from rggs.core.errors import MissingNodeError
from rggs.core.node import Node
from rggs.core.types import NodeId


class RggGraph:
    """A DirtyGraph and its ``node id -> Node`` attribute store.

    Every node id in ``graph`` has exactly one entry in ``values`` and vice
    versa. Creation and removal go through this class so both sides change
    together; callers may read ``graph`` and ``values`` directly.
    """

    def __init__(self) -> None:
        self.graph = DirtyGraph()
        self.values: dict[NodeId, Node] = {}

    def __repr__(self) -> str:
        return f"RggGraph(order={self.order()}, size={self.graph.size()})"

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.values

    def __len__(self) -> int:
        return len(self.values)

    def insert_node(self) -> NodeId:
        """Insert an unnamed node without attributes."""
        return self.insert_node_with(Node())

    def insert_node_with(self, node: Node) -> NodeId:
        node_id = self.graph.add_node()
        self.values[node_id] = node
        return node_id

    def insert_node_at(self, node_id: int, node: Node) -> NodeId:
        """Insert ``node`` under an explicit id (raises DuplicateNodeError)."""
        self.graph.add_node_with(node_id)
        self.values[NodeId(node_id)] = node
        return NodeId(node_id)

    def remove_node(self, node_id: int) -> int:
        removed = self.graph.remove_node(node_id)
        self.values.pop(node_id, None)
        return removed

    def replace_node(self, node_id: int, node: Node) -> None:
        """Swap the attributes of an existing node, leaving its edges alone."""
        if node_id not in self.values:
            raise MissingNodeError(node_id)
        self.values[NodeId(node_id)] = node

    def get_node(self, node_id: int) -> Node:
        try:
            return self.values[node_id]  # type: ignore[index]
        except KeyError:
            raise MissingNodeError(node_id) from None

    def add_edge(self, a: int, b: int) -> None:
        self.graph.add_edge(a, b)

    def order(self) -> int:
        return self.graph.order()

    def neighbors(self, node_id: int) -> Iterator[NodeId]:
        return self.graph.neighbors(node_id)

    # ---------- diagnostics ----------

    def hierarchy_order(self) -> list[NodeId]:
        """Node ids walked depth-first over the ancestor forest.

        Roots come in ascending id order, each followed by its descendants
        (children ascending).
        """
        ordered: list[NodeId] = []
        seen: set[NodeId] = set()
        stack: list[NodeId] = list(reversed(self.graph.roots()))
        while stack:
            node_id = stack.pop()
            if node_id in seen or not self.graph.has_node(node_id):
                continue
            seen.add(node_id)
            ordered.append(node_id)
            stack.extend(reversed(self.graph.get_children(node_id)))
        # Cycles in the overlay leave nodes unreachable from any root.
        ordered.extend(n for n in self.graph.nodes() if n not in seen)
        return ordered

    def as_dot_string(self) -> str:
        lines = ["graph {"]
        for node_id in self.hierarchy_order():
            name = self.values[node_id].name.replace('"', '\\"')
            lines.append(f'    {node_id} [label="{name}"];')
        for a, b in self.graph.edges():
            lines.append(f"    {a} -- {b};")
        for node_id in self.hierarchy_order():
            parent = self.graph.get_ancestor(node_id)
            if parent is not None:
                lines.append(f"    {parent} -- {node_id} [style=dashed];")
        lines.append("}")
        return "\n".join(lines)

    def compute_fingerprint(self, iterations: int = 3) -> str:
        """Weisfeiler-Lehman hash over node names, values and adjacency."""

        def digest(payload: str) -> str:
            return hashlib.sha256(payload.encode("utf-8")).hexdigest()[:16]

        labels: dict[NodeId, str] = {}
        for node_id, node in self.values.items():
            labels[node_id] = digest(json.dumps(
                [node.name, sorted((k, v.kind.value, v.to_plain()) for k, v in node.values.items())],
                separators=(",", ":"),
            ))
        for _ in range(max(0, iterations)):
            labels = {
                node_id: digest(label + "|" + ",".join(sorted(labels[n] for n in self.graph.neighbors(node_id))))
                for node_id, label in labels.items()
            }
        summary = sorted(labels.values())
        return digest(f"{self.order()}:{self.graph.size()}:" + ",".join(summary))


__all__ = ["RggGraph"]
