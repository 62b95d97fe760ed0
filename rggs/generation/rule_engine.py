"""Rule application passes: match everything first, then mutate."""

from __future__ import annotations

import logging
import random
from typing import Callable, Iterable, Optional

from rggs.core.rgg_graph import RggGraph
from rggs.core.types import Bindings
from rggs.rules.results import RuleResult
from rggs.rules.rule import Rule
from rggs.utils.rng_manager import RNGManager


def apply_rule(
    rule: Rule,
    graph: RggGraph,
    rng: Optional[random.Random] = None,
    match_filter: Optional[Callable[[Bindings], bool]] = None,
) -> RuleResult:
    """Apply ``rule`` to every match in ``graph``.

    All matches are collected against the unmodified graph before any
    procedure runs. A match whose procedures reference nodes consumed by an
    earlier match of the same pass is skipped as a whole.
    """
    matches = [b for b in rule.matches(graph) if match_filter is None or match_filter(b)]
    logging.debug(f"Rule {rule.rule_id}: {len(matches)} match(es)")

    result = RuleResult()
    for bindings in matches:
        if not all(p.targets_exist(bindings, graph) for p in rule.rhs):
            logging.debug(f"Rule {rule.rule_id}: skipping stale match {bindings}")
            continue
        for procedure in rule.rhs:
            result.record(procedure.apply(graph, bindings, rng=rng))
    if not result.is_empty():
        logging.info(f"Rule {rule.rule_id}: {result.summary()}")
    return result


class RuleEngine:
    """Applies rules to one graph, optionally ignoring freshly touched nodes.

    Args:
        graph: Graph being rewritten
        rng_manager: Source of per-rule random streams for ``rand()``
        skip_dirty: Ignore matches that bind any node stamped with the
            current generation
    """

    def __init__(self, graph: RggGraph, rng_manager: Optional[RNGManager] = None,
                 skip_dirty: bool = False) -> None:
        self.graph = graph
        self.rng_manager = rng_manager
        self.skip_dirty = skip_dirty

    def _is_clean(self, bindings: Bindings) -> bool:
        return not any(self.graph.graph.node_is_dirty(n) for n in bindings.values())

    def apply_rule(self, rule: Rule) -> RuleResult:
        rng = self.rng_manager.get_rng_for_rule(rule.rule_id) if self.rng_manager is not None else None
        match_filter = self._is_clean if self.skip_dirty else None
        return apply_rule(rule, self.graph, rng=rng, match_filter=match_filter)

    def apply_rules(self, rules: Iterable[Rule]) -> RuleResult:
        """Apply each rule once, in order, merging the results."""
        result = RuleResult()
        for rule in rules:
            result.add(self.apply_rule(rule))
        return result


def apply_rules(rules: Iterable[Rule], graph: RggGraph, rng_manager: Optional[RNGManager] = None) -> RuleResult:
    return RuleEngine(graph, rng_manager=rng_manager).apply_rules(rules)


__all__ = ["apply_rule", "apply_rules", "RuleEngine"]
