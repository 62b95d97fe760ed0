"""Outcome records for procedures and whole rule passes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

from rggs.core.types import NodeId


class ApplyKind(Enum):
    REMOVED = "removed"
    ADDED = "added"
    MODIFIED = "modified"
    FAILED = "failed"
    NONE = "none"


@dataclass(frozen=True)
class ApplyResult:
    """What one procedure did to the graph."""

    kind: ApplyKind
    ids: tuple[NodeId, ...] = ()

    @classmethod
    def removed(cls, ids: Iterable[NodeId]) -> "ApplyResult":
        return cls(ApplyKind.REMOVED, tuple(ids))

    @classmethod
    def added(cls, node_id: NodeId) -> "ApplyResult":
        return cls(ApplyKind.ADDED, (node_id,))

    @classmethod
    def modified(cls, node_id: NodeId) -> "ApplyResult":
        return cls(ApplyKind.MODIFIED, (node_id,))

    @classmethod
    def failed(cls) -> "ApplyResult":
        return cls(ApplyKind.FAILED)

    @classmethod
    def none(cls) -> "ApplyResult":
        return cls(ApplyKind.NONE)

    @property
    def ok(self) -> bool:
        return self.kind is not ApplyKind.FAILED


@dataclass
class RuleResult:
    """Node ids touched by one or more rule passes."""

    removed: list[NodeId] = field(default_factory=list)
    added: list[NodeId] = field(default_factory=list)
    modified: list[NodeId] = field(default_factory=list)
    failures: int = 0

    def record(self, result: ApplyResult) -> None:
        if result.kind is ApplyKind.REMOVED:
            self.removed.extend(result.ids)
        elif result.kind is ApplyKind.ADDED:
            self.added.extend(result.ids)
        elif result.kind is ApplyKind.MODIFIED:
            self.modified.extend(result.ids)
        elif result.kind is ApplyKind.FAILED:
            self.failures += 1

    def add(self, other: "RuleResult") -> None:
        self.removed.extend(other.removed)
        self.added.extend(other.added)
        self.modified.extend(other.modified)
        self.failures += other.failures

    def is_empty(self) -> bool:
        return not (self.removed or self.added or self.modified)

    def summary(self) -> dict[str, int]:
        return {
            "removed": len(self.removed),
            "added": len(self.added),
            "modified": len(self.modified),
            "failures": self.failures,
        }


__all__ = ["ApplyKind", "ApplyResult", "RuleResult"]
