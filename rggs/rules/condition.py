"""Predicates over attribute Values used by pattern nodes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from rggs.core.value import Value

Number = Union[int, float, Value]


class ConditionKind(Enum):
    EQUALS = "eq"
    LESS_THAN = "lt"
    GREATER_THAN = "gt"
    LESS_OR_EQUAL = "lte"
    GREATER_OR_EQUAL = "gte"
    RANGE = "range"


def _number(value: Number) -> float:
    if isinstance(value, Value):
        return value.as_number()
    if isinstance(value, float):
        # Bounds are stored at single precision; read plain floats the same way.
        try:
            return Value.float(value).as_number()
        except OverflowError:
            return value
    return value


@dataclass(frozen=True)
class Condition:
    """Comparison of a scalar against one bound, or two for RANGE.

    RANGE is inclusive at both ends: ``low <= v <= high``.
    """

    kind: ConditionKind
    bound: Value
    upper: Optional[Value] = None

    def __post_init__(self) -> None:
        if self.kind is ConditionKind.RANGE and self.upper is None:
            raise ValueError("RANGE condition requires an upper bound")
        if self.kind is not ConditionKind.RANGE and self.upper is not None:
            raise ValueError(f"{self.kind.name} condition takes a single bound")

    @classmethod
    def equals(cls, value: Number) -> "Condition":
        return cls(ConditionKind.EQUALS, Value.from_number(value))

    @classmethod
    def less_than(cls, value: Number) -> "Condition":
        return cls(ConditionKind.LESS_THAN, Value.from_number(value))

    @classmethod
    def greater_than(cls, value: Number) -> "Condition":
        return cls(ConditionKind.GREATER_THAN, Value.from_number(value))

    @classmethod
    def less_or_equal(cls, value: Number) -> "Condition":
        return cls(ConditionKind.LESS_OR_EQUAL, Value.from_number(value))

    @classmethod
    def greater_or_equal(cls, value: Number) -> "Condition":
        return cls(ConditionKind.GREATER_OR_EQUAL, Value.from_number(value))

    @classmethod
    def range(cls, low: Number, high: Number) -> "Condition":
        return cls(ConditionKind.RANGE, Value.from_number(low), Value.from_number(high))

    def check(self, value: Number) -> bool:
        v = _number(value)
        bound = self.bound.as_number()
        if self.kind is ConditionKind.EQUALS:
            return v == bound
        if self.kind is ConditionKind.LESS_THAN:
            return v < bound
        if self.kind is ConditionKind.GREATER_THAN:
            return v > bound
        if self.kind is ConditionKind.LESS_OR_EQUAL:
            return v <= bound
        if self.kind is ConditionKind.GREATER_OR_EQUAL:
            return v >= bound
        return bound <= v <= self.upper.as_number()  # type: ignore[union-attr]


__all__ = ["Condition", "ConditionKind"]
