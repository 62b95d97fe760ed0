"""Undirected graph store with generation stamps and an ancestor overlay.

The store keeps three independent pieces of state:

- the graph proper: a node set, canonical ``(min, max)`` edge set and a
  symmetric adjacency list,
- a generation stamp per node and per edge, compared against a global
  counter to tell whether something was touched during the current tick,
- an ancestor/children forest used only by hierarchy-aware consumers.

Whether dirtiness gates matching is left to the caller; the store only
records and reports stamps.
"""

from __future__ import annotations

from typing import Iterator, Optional

from rggs.core.errors import DuplicateNodeError, MissingNodeError
from rggs.core.types import NodeId

# Stamps are stored as unsigned bytes; the counter wraps before reaching this.
GENERATION_LIMIT = 255


def canonical_edge(a: int, b: int) -> tuple[int, int]:
    return (a, b) if a <= b else (b, a)


class DirtyGraph:
    """Undirected graph with per-node/per-edge generation tracking."""

    def __init__(self) -> None:
        self._nodes: set[NodeId] = set()
        self._edges: set[tuple[NodeId, NodeId]] = set()
        self._adjacency: dict[NodeId, list[NodeId]] = {}
        self._ancestors: dict[NodeId, NodeId] = {}
        self._children: dict[NodeId, set[NodeId]] = {}
        self._node_generation: dict[NodeId, int] = {}
        self._edge_generation: dict[tuple[NodeId, NodeId], int] = {}
        self._next_node = 0
        self.next_generation = 1

    def __repr__(self) -> str:
        return f"DirtyGraph(order={self.order()}, size={self.size()}, generation={self.next_generation})"

    # ---------- queries ----------

    def is_empty(self) -> bool:
        return not self._nodes

    def order(self) -> int:
        return len(self._nodes)

    def size(self) -> int:
        return len(self._edges)

    def nodes(self) -> Iterator[NodeId]:
        """Node ids in ascending order."""
        return iter(sorted(self._nodes))

    def edges(self) -> Iterator[tuple[NodeId, NodeId]]:
        return iter(sorted(self._edges))

    def has_node(self, node_id: int) -> bool:
        return node_id in self._nodes

    def neighbors(self, node_id: int) -> Iterator[NodeId]:
        if node_id not in self._nodes:
            raise MissingNodeError(node_id)
        return iter(tuple(self._adjacency[node_id]))

    def degree(self, node_id: int) -> int:
        if node_id not in self._nodes:
            raise MissingNodeError(node_id)
        return len(self._adjacency[node_id])

    def has_edge(self, a: int, b: int) -> bool:
        return canonical_edge(a, b) in self._edges

    # ---------- mutation ----------

    def add_node(self) -> NodeId:
        """Add a node with the next free id and return it."""
        while self._next_node in self._nodes:
            self._next_node += 1
        node_id = NodeId(self._next_node)
        self.add_node_with(node_id)
        self._next_node += 1
        return node_id

    def add_node_with(self, node_id: int) -> None:
        if node_id in self._nodes:
            raise DuplicateNodeError(node_id)
        node_id = NodeId(node_id)
        self._nodes.add(node_id)
        self._node_generation[node_id] = self.next_generation
        self._adjacency[node_id] = []

    def add_edge(self, a: int, b: int) -> None:
        """Insert the undirected edge ``a -- b``.

        Re-adding an existing edge leaves the edge set alone but restamps
        the edge with the current generation.
        """
        for endpoint in (a, b):
            if endpoint not in self._nodes:
                raise MissingNodeError(endpoint)
        edge = canonical_edge(NodeId(a), NodeId(b))
        if edge not in self._edges:
            self._edges.add(edge)
            self._adjacency[edge[0]].append(edge[1])
            if edge[0] != edge[1]:
                self._adjacency[edge[1]].append(edge[0])
        self._edge_generation[edge] = self.next_generation

    def remove_edge(self, a: int, b: int) -> int:
        edge = canonical_edge(a, b)
        if edge not in self._edges:
            return 0
        self._edges.discard(edge)
        self._edge_generation.pop(edge, None)
        self._adjacency[edge[0]].remove(edge[1])
        if edge[0] != edge[1]:
            self._adjacency[edge[1]].remove(edge[0])
        return 1

    def remove_edges_with(self, node_id: int) -> int:
        incident = [e for e in self._edges if node_id in e]
        return sum(self.remove_edge(*e) for e in incident)

    def remove_node(self, node_id: int) -> int:
        """Remove a node and its incident edges. Returns 1, or 0 if absent."""
        if node_id not in self._nodes:
            return 0
        self.remove_edges_with(node_id)
        self.remove_children(node_id)
        self.remove_ancestor(node_id)
        self._node_generation.pop(node_id, None)
        self._adjacency.pop(node_id, None)
        self._nodes.discard(node_id)
        return 1

    # ---------- generations ----------

    def advance_generation(self) -> None:
        """Start a new tick; stamps wrap back to 0 before overflowing a byte."""
        self.next_generation += 1
        if self.next_generation == GENERATION_LIMIT:
            for key in self._node_generation:
                self._node_generation[key] = 0
            for key in self._edge_generation:
                self._edge_generation[key] = 0
            self.next_generation = 1

    def set_node_dirty(self, node_id: int) -> bool:
        if node_id not in self._nodes:
            return False
        self._node_generation[node_id] = self.next_generation
        return True

    def node_is_dirty(self, node_id: int) -> bool:
        if node_id not in self._nodes:
            return False
        return self._node_generation.get(node_id, 0) >= self.next_generation

    def set_edge_dirty(self, a: int, b: int) -> bool:
        edge = canonical_edge(a, b)
        if edge not in self._edges:
            return False
        self._edge_generation[edge] = self.next_generation
        return True

    def edge_is_dirty(self, a: int, b: int) -> bool:
        edge = canonical_edge(a, b)
        if edge not in self._edges:
            return False
        return self._edge_generation.get(edge, 0) >= self.next_generation

    def node_generation(self, node_id: int) -> Optional[int]:
        return self._node_generation.get(node_id)

    # ---------- ancestor overlay ----------

    def add_ancestor(self, child: int, parent: int) -> None:
        """Set (or overwrite) the single parent of ``child``."""
        previous = self._ancestors.get(child)
        if previous is not None and previous != parent:
            self._discard_child(previous, child)
        self._ancestors[NodeId(child)] = NodeId(parent)
        self._children.setdefault(NodeId(parent), set()).add(NodeId(child))

    def remove_ancestor(self, child: int) -> None:
        parent = self._ancestors.pop(child, None)
        if parent is not None:
            self._discard_child(parent, child)

    def _discard_child(self, parent: int, child: int) -> None:
        siblings = self._children.get(parent)
        if siblings is None:
            return
        siblings.discard(child)
        if not siblings:
            del self._children[parent]

    def remove_children(self, node_id: int, remap: Optional[int] = None) -> None:
        """Detach all children of ``node_id``.

        Children move to ``remap`` when given, else to ``node_id``'s own
        ancestor, else they become roots.
        """
        new_parent = remap if remap is not None else self.get_ancestor(node_id)
        for child in self.get_children(node_id):
            if new_parent is None or new_parent == child:
                self.remove_ancestor(child)
            else:
                self.add_ancestor(child, new_parent)
        self._children.pop(node_id, None)

    def get_ancestor(self, node_id: int) -> Optional[NodeId]:
        return self._ancestors.get(node_id)

    def get_children(self, node_id: int) -> list[NodeId]:
        return sorted(self._children.get(node_id, ()))

    def roots(self) -> list[NodeId]:
        """Nodes without an ancestor, ascending."""
        return [n for n in sorted(self._nodes) if n not in self._ancestors]


__all__ = ["DirtyGraph", "GENERATION_LIMIT", "canonical_edge"]
