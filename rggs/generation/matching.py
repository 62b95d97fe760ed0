"""Backtracking subgraph matcher.

MatchingState enumerates every injective binding of pattern nodes to graph
nodes such that each graph node satisfies its pattern node and every
pattern edge exists between the bound graph nodes. The search is an
explicit-state iterator: each ``next()`` resumes exactly where the previous
call stopped, and once exhausted it stays exhausted.

Candidates are scanned over a snapshot of the graph's node ids (ascending)
taken at construction. Pattern nodes are bound in declaration order.
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional

from rggs.core.rgg_graph import RggGraph
from rggs.core.types import Bindings, NodeId, PatternId
from rggs.rules.pattern import FromNode, NodeSet


def _node_signature(node: FromNode, match_values: bool) -> tuple:
    if not match_values:
        return (node.name,)
    return (node.name, tuple(sorted(node.values.items(), key=lambda kv: kv[0])))


def pattern_automorphisms(pattern: NodeSet, match_values: bool = False) -> list[dict[PatternId, PatternId]]:
    """All permutations of pattern ids preserving node constraints and edges.

    The identity is always first.
    """
    nodes = pattern.nodes
    ids = [n.id for n in nodes]
    signatures = {n.id: _node_signature(n, match_values) for n in nodes}
    edges = pattern.edge_set()
    adjacent: dict[PatternId, set[PatternId]] = {pid: set() for pid in ids}
    for a, b in pattern.edges:
        adjacent[a].add(b)
        adjacent[b].add(a)

    found: list[dict[PatternId, PatternId]] = []
    perm: dict[PatternId, PatternId] = {}

    def extend(index: int) -> None:
        if index == len(ids):
            found.append(dict(perm))
            return
        pid = ids[index]
        used = set(perm.values())
        for candidate in ids:
            if candidate in used or signatures[candidate] != signatures[pid]:
                continue
            if len(adjacent[candidate]) != len(adjacent[pid]):
                continue
            consistent = all(
                (frozenset((candidate, perm[other])) in edges) == (frozenset((pid, other)) in edges)
                for other in perm
            )
            if (frozenset((candidate,)) in edges) != (frozenset((pid,)) in edges):
                consistent = False
            if not consistent:
                continue
            perm[pid] = candidate
            extend(index + 1)
            del perm[pid]

    extend(0)
    return found


class MatchingState:
    """Resumable enumerator of pattern -> graph bindings.

    Args:
        pattern: The rule's left-hand side
        graph: Graph searched; edges are always checked against the live graph
        match_values: Also require attribute Conditions to hold
        symmetry_breaking: Only yield the first binding of each orbit under
            the pattern's automorphisms, so a symmetric pattern reports each
            occurrence once
    """

    def __init__(
        self,
        pattern: NodeSet,
        graph: RggGraph,
        *,
        match_values: bool = False,
        symmetry_breaking: bool = True,
    ) -> None:
        self.pattern = pattern
        self.graph = graph
        self.match_values = match_values
        self._snapshot: list[NodeId] = list(graph.graph.nodes())
        self._cursor = 0
        self._bindings: Bindings = {}
        self._resume: dict[int, int] = {0: 0}
        self._exhausted = False
        self._symmetries: list[dict[PatternId, PatternId]] = []
        if symmetry_breaking:
            # Drop the identity; only non-trivial symmetries can reject a binding.
            self._symmetries = pattern_automorphisms(pattern, match_values)[1:]

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    def __iter__(self) -> Iterator[Bindings]:
        return self

    def __next__(self) -> Bindings:
        solution = self.next_match()
        if solution is None:
            raise StopIteration
        return solution

    def next_match(self) -> Optional[Bindings]:
        """Return the next verified binding, or None once the search is over."""
        nodes = self.pattern.nodes
        while not self._exhausted:
            if self._cursor < 0:
                self._finish()
                break
            if self._cursor == len(nodes):
                accepted = self._check_edges() and self._is_canonical()
                solution = dict(self._bindings) if accepted else None
                self._cursor -= 1
                if solution is not None:
                    logging.debug(f"Matched {solution}")
                    return solution
                continue
            self._continue_search(nodes[self._cursor])
        return None

    def _finish(self) -> None:
        self._exhausted = True
        self._bindings = {}
        self._resume = {}

    def _continue_search(self, pattern_node: FromNode) -> None:
        """Bind ``pattern_node`` to its next candidate, or backtrack one level."""
        start = self._resume.get(self._cursor, 0)
        self._bindings.pop(pattern_node.id, None)
        taken = set(self._bindings.values())
        for index in range(start, len(self._snapshot)):
            node_id = self._snapshot[index]
            if node_id in taken:
                continue
            node = self.graph.values.get(node_id)
            if node is None:
                continue
            if pattern_node.match_node(node, check_values=self.match_values):
                self._bindings[pattern_node.id] = node_id
                self._resume[self._cursor] = index + 1
                self._cursor += 1
                return

        self._resume.pop(self._cursor, None)
        if self._cursor == 0:
            logging.debug("Search space exhausted")
            self._finish()
            return
        self._cursor -= 1

    def _check_edges(self) -> bool:
        live = self.graph.graph
        for a, b in self.pattern.edges:
            if not live.has_edge(self._bindings[a], self._bindings[b]):
                return False
        return True

    def _is_canonical(self) -> bool:
        order = [n.id for n in self.pattern.nodes]
        current = tuple(self._bindings[pid] for pid in order)
        for sigma in self._symmetries:
            if tuple(self._bindings[sigma[pid]] for pid in order) < current:
                return False
        return True


def find_subgraph_matches(
    graph: RggGraph,
    pattern: NodeSet,
    *,
    match_values: bool = False,
    symmetry_breaking: bool = True,
    limit: Optional[int] = None,
) -> list[Bindings]:
    """Collect matches of ``pattern`` in ``graph`` (at most ``limit``)."""
    matcher = MatchingState(pattern, graph, match_values=match_values, symmetry_breaking=symmetry_breaking)
    matches: list[Bindings] = []
    for bindings in matcher:
        matches.append(bindings)
        if limit is not None and len(matches) >= limit:
            break
    return matches


__all__ = ["MatchingState", "find_subgraph_matches", "pattern_automorphisms"]
