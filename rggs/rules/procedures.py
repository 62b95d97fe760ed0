"""Graph mutation primitives executed once per match.

Each procedure is parameterized by pattern ids and resolves them through
the bindings of the match being applied. Procedures that consume a node
(Delete, Merge) drop its pattern id from the bindings so later procedures
of the same match see it as gone.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Optional

from rggs.core.rgg_graph import RggGraph
from rggs.core.types import Bindings, NodeId, PatternId
from rggs.rules.results import ApplyResult
from rggs.rules.to_node import ToNode


class Procedure:
    """Base class for rule right-hand side operations."""

    kind = "procedure"

    def references(self) -> list[PatternId]:
        raise NotImplementedError

    def targets_exist(self, bindings: Bindings, graph: Optional[RggGraph] = None) -> bool:
        """True when every referenced pattern id is bound (and, given a graph, still present)."""
        for pattern_id in self.references():
            node_id = bindings.get(pattern_id)
            if node_id is None:
                return False
            if graph is not None and node_id not in graph:
                return False
        return True

    def apply(self, graph: RggGraph, bindings: Bindings, rng: Optional[random.Random] = None) -> ApplyResult:
        raise NotImplementedError


def _resolve(graph: RggGraph, bindings: Bindings, pattern_id: PatternId) -> Optional[NodeId]:
    node_id = bindings.get(pattern_id)
    if node_id is None or node_id not in graph:
        return None
    return node_id


@dataclass
class Delete(Procedure):
    target: PatternId

    kind = "delete"

    def references(self) -> list[PatternId]:
        return [self.target]

    def apply(self, graph: RggGraph, bindings: Bindings, rng: Optional[random.Random] = None) -> ApplyResult:
        node_id = _resolve(graph, bindings, self.target)
        if node_id is None:
            logging.warning(f"Delete: pattern node {self.target} is not bound to a live node in {bindings}")
            return ApplyResult.failed()
        graph.remove_node(node_id)
        del bindings[self.target]
        return ApplyResult.removed([node_id])


@dataclass
class Replace(Procedure):
    target: PatternId
    replacement: ToNode

    kind = "replace"

    def references(self) -> list[PatternId]:
        return [self.target]

    def apply(self, graph: RggGraph, bindings: Bindings, rng: Optional[random.Random] = None) -> ApplyResult:
        node_id = _resolve(graph, bindings, self.target)
        if node_id is None:
            logging.warning(f"Replace: pattern node {self.target} is not bound to a live node in {bindings}")
            return ApplyResult.failed()
        new_node = self.replacement.eval(graph.values[node_id], rng=rng)
        graph.replace_node(node_id, new_node)
        graph.graph.set_node_dirty(node_id)
        return ApplyResult.modified(node_id)


@dataclass
class Add(Procedure):
    """Create a node connected to every listed neighbor.

    The first neighbor becomes the new node's ancestor and provides the
    variables for the template's expressions.
    """

    neighbors: list[PatternId]
    new_node: ToNode

    kind = "add"

    def references(self) -> list[PatternId]:
        return list(self.neighbors)

    def apply(self, graph: RggGraph, bindings: Bindings, rng: Optional[random.Random] = None) -> ApplyResult:
        resolved: list[NodeId] = []
        for pattern_id in self.neighbors:
            node_id = _resolve(graph, bindings, pattern_id)
            if node_id is None:
                logging.warning(f"Add: could not find neighbor {pattern_id} in bindings {bindings}")
                return ApplyResult.failed()
            resolved.append(node_id)

        ancestor = resolved[0] if resolved else None
        base = graph.values[ancestor] if ancestor is not None else None
        node_id = graph.insert_node_with(self.new_node.eval(base, rng=rng))
        for neighbor in resolved:
            graph.add_edge(node_id, neighbor)
        if ancestor is not None:
            graph.graph.add_ancestor(node_id, ancestor)
        return ApplyResult.added(node_id)


@dataclass
class Merge(Procedure):
    """Collapse several matched nodes into ``final_node``.

    The survivor inherits the union of the merged nodes' neighbors, the
    children of every removed node, and the first ancestor found among the
    targets.
    """

    targets: list[PatternId]
    final_node: PatternId

    kind = "merge"

    def references(self) -> list[PatternId]:
        refs = list(dict.fromkeys(self.targets))
        if self.final_node not in refs:
            refs.append(self.final_node)
        return refs

    def apply(self, graph: RggGraph, bindings: Bindings, rng: Optional[random.Random] = None) -> ApplyResult:
        members: list[tuple[PatternId, NodeId]] = []
        for pattern_id in self.references():
            node_id = _resolve(graph, bindings, pattern_id)
            if node_id is None:
                logging.warning(f"Merge: pattern node {pattern_id} is not bound to a live node in {bindings}")
                return ApplyResult.failed()
            members.append((pattern_id, node_id))

        survivor = bindings[self.final_node]
        merged_ids = {node_id for _, node_id in members}
        neighbors: dict[NodeId, None] = {}
        ancestor: Optional[NodeId] = None
        for _, node_id in members:
            for neighbor in graph.neighbors(node_id):
                if neighbor not in merged_ids:
                    neighbors[neighbor] = None
            if ancestor is None:
                candidate = graph.graph.get_ancestor(node_id)
                if candidate is not None and candidate not in merged_ids:
                    ancestor = candidate

        removed: list[NodeId] = []
        for pattern_id, node_id in members:
            if node_id == survivor:
                continue
            graph.graph.remove_children(node_id, remap=survivor)
            graph.remove_node(node_id)
            bindings.pop(pattern_id, None)
            removed.append(node_id)

        for neighbor in neighbors:
            graph.add_edge(survivor, neighbor)
        if ancestor is not None:
            graph.graph.add_ancestor(survivor, ancestor)
        graph.graph.set_node_dirty(survivor)
        return ApplyResult.removed(removed)


__all__ = ["Procedure", "Delete", "Replace", "Add", "Merge"]
