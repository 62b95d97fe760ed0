"""Seeded random number sources for reproducible rule application."""

from __future__ import annotations

import hashlib
import random
from typing import Any


class RNGManager:
    """Hands out independent ``random.Random`` streams keyed by context.

    Each context derives its seed from the manager seed and the context name,
    so the order in which contexts are requested does not change their draws.
    """

    def __init__(self, seed: int | None = None) -> None:
        self.seed = seed if seed is not None else random.randrange(2**32)
        self._contexts: dict[str, random.Random] = {}

    def _derive_seed(self, context: str) -> int:
        digest = hashlib.sha256(f"{self.seed}:{context}".encode("utf-8")).digest()
        return int.from_bytes(digest[:8], "big")

    def get_context_rng(self, context: str) -> random.Random:
        rng = self._contexts.get(context)
        if rng is None:
            rng = random.Random(self._derive_seed(context))
            self._contexts[context] = rng
        return rng

    def get_rng_for_rule(self, rule_id: Any) -> random.Random:
        return self.get_context_rng(f"rule:{rule_id}")

    def get_state(self) -> dict[str, Any]:
        return {
            "seed": self.seed,
            "contexts": {name: rng.getstate() for name, rng in self._contexts.items()},
        }

    def set_state(self, state: dict[str, Any]) -> None:
        self.seed = state["seed"]
        self._contexts = {}
        for name, rng_state in state.get("contexts", {}).items():
            rng = random.Random()
            rng.setstate(rng_state)
            self._contexts[name] = rng


__all__ = ["RNGManager"]
