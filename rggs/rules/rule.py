"""Rule: a left-hand side pattern and an ordered list of procedures."""

from __future__ import annotations

import random
import uuid
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Optional

from rggs.core.rgg_graph import RggGraph
from rggs.core.types import Bindings
from rggs.rules.pattern import NodeSet
from rggs.rules.procedures import Procedure
from rggs.rules.results import RuleResult

if TYPE_CHECKING:  # pragma: no cover
    from rggs.generation.matching import MatchingState


@dataclass
class Rule:
    """Reusable rewriting rule. Applying it never mutates the rule.

    Attributes:
        lhs: Pattern searched for in the graph
        rhs: Procedures run, in order, for every match
        rule_id: Identity used in logs and for per-rule random streams
        match_values: Also evaluate the attribute Conditions of pattern
            nodes; off by default, so only names are matched
        symmetry_breaking: Yield one mapping per occurrence instead of one
            per automorphism of the pattern
    """

    lhs: NodeSet
    rhs: list[Procedure] = field(default_factory=list)
    rule_id: Any = field(default_factory=uuid.uuid4)
    match_values: bool = False
    symmetry_breaking: bool = True

    def matches(self, graph: RggGraph) -> "MatchingState":
        from rggs.generation.matching import MatchingState

        return MatchingState(
            self.lhs,
            graph,
            match_values=self.match_values,
            symmetry_breaking=self.symmetry_breaking,
        )

    def apply(
        self,
        graph: RggGraph,
        rng: Optional[random.Random] = None,
        match_filter: Optional[Callable[[Bindings], bool]] = None,
    ) -> RuleResult:
        from rggs.generation.rule_engine import apply_rule

        return apply_rule(self, graph, rng=rng, match_filter=match_filter)


__all__ = ["Rule"]
