"""Growth driver: repeated rule passes over a graph.

Implements:
- GrowthHistory: fingerprints, per-tick results and metrics
- grow: applies every rule once per tick until an iteration or size limit
  is reached, or a tick changes nothing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from rggs.config import DEFAULT_GROWTH_CONFIG
from rggs.core.rgg_graph import RggGraph
from rggs.generation.rule_engine import RuleEngine
from rggs.rules.results import RuleResult
from rggs.rules.rule import Rule
from rggs.utils.rng_manager import RNGManager


@dataclass
class GrowthHistory:
    """Tracks graph evolution during growth."""

    fingerprints: list[str] = field(default_factory=list)
    results: list[RuleResult] = field(default_factory=list)
    metrics: list[dict[str, Any]] = field(default_factory=list)

    def add_fingerprint(self, fingerprint: str) -> None:
        self.fingerprints.append(fingerprint)

    def add_result(self, result: RuleResult) -> None:
        self.results.append(result)

    def add_metrics(self, metrics: dict[str, Any]) -> None:
        self.metrics.append(dict(metrics))


def grow(rules: Iterable[Rule], axiom: RggGraph, config: Optional[dict] = None,
         rng_manager: Optional[RNGManager] = None):
    """Grow a graph from ``axiom`` by applying ``rules`` tick after tick.

    Args:
        rules: Rules applied in order, each once per tick.
        axiom: Starting graph (deep-copied, never modified).
        config: See ``rggs.config.DEFAULT_GROWTH_CONFIG`` for keys.
        rng_manager: Source of random streams for ``rand()`` expressions.

    Returns:
        (graph, growth_metrics)
    """
    import copy
    import logging

    cfg = {**DEFAULT_GROWTH_CONFIG, **(config or {})}
    rules = list(rules)
    graph = copy.deepcopy(axiom)
    engine = RuleEngine(graph, rng_manager=rng_manager, skip_dirty=bool(cfg.get('skip_dirty_matches')))
    history = GrowthHistory()
    total = RuleResult()

    max_iterations = int(cfg.get('max_iterations', 10))
    max_order = cfg.get('max_order')
    iteration_count = 0

    if cfg.get('record_fingerprints'):
        history.add_fingerprint(graph.compute_fingerprint())

    while iteration_count < max_iterations:
        if max_order is not None and graph.order() >= int(max_order):
            logging.info(f"Graph reached {graph.order()} nodes (max_order={max_order}). Stopping.")
            break

        # Nodes created during the previous tick stop counting as dirty here.
        if cfg.get('advance_generation'):
            graph.graph.advance_generation()

        result = engine.apply_rules(rules)
        if result.is_empty() and cfg.get('stop_on_quiescence'):
            logging.info('Quiescence: no rule changed the graph')
            break

        iteration_count += 1
        total.add(result)
        history.add_result(result)
        if cfg.get('record_fingerprints'):
            history.add_fingerprint(graph.compute_fingerprint())
        history.add_metrics({
            'iteration': iteration_count,
            'num_nodes': graph.order(),
            'num_edges': graph.graph.size(),
            **result.summary(),
        })

    growth_metrics = {
        'iterations': iteration_count,
        'final_nodes': graph.order(),
        'final_edges': graph.graph.size(),
        'generation': graph.graph.next_generation,
        'added': len(total.added),
        'removed': len(total.removed),
        'modified': len(total.modified),
        'failures': total.failures,
        'history': history,
    }
    return graph, growth_metrics


__all__ = [
    'GrowthHistory',
    'grow',
]
