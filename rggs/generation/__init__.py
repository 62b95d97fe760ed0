"""Matching and rule application for RGGS."""

from .growth import GrowthHistory, grow  # noqa: F401
from .matching import MatchingState, find_subgraph_matches, pattern_automorphisms  # noqa: F401
from .rule_engine import RuleEngine, apply_rule, apply_rules  # noqa: F401

__all__ = [
    'MatchingState',
    'find_subgraph_matches',
    'pattern_automorphisms',
    'RuleEngine',
    'apply_rule',
    'apply_rules',
    'GrowthHistory',
    'grow',
]
