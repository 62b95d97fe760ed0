"""Tagged numeric scalar stored in node attributes.

A Value is either a 32-bit signed integer or a 32-bit float. Floats are
rounded to single precision on construction so that equality (tag plus raw
bits) behaves the same regardless of how the number was produced.
"""

from __future__ import annotations

import struct
from enum import Enum
from typing import Union

_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


class ValueType(Enum):
    INT = "int"
    FLOAT = "float"


class ValueTypeError(TypeError):
    """A Value was read back as a type other than the one it stores."""


def _to_f32(number: float) -> float:
    return struct.unpack("<f", struct.pack("<f", float(number)))[0]


def _f32_bits(number: float) -> int:
    return struct.unpack("<I", struct.pack("<f", number))[0]


class Value:
    """Immutable ``Int(i32) | Float(f32)`` scalar."""

    __slots__ = ("_kind", "_raw")

    def __init__(self, kind: ValueType, raw: Union[int, float]) -> None:
        if kind is ValueType.INT:
            if isinstance(raw, float) and not raw.is_integer():
                raise ValueError(f"Integer value expected, got {raw!r}")
            raw = int(raw)
            if not _I32_MIN <= raw <= _I32_MAX:
                raise ValueError(f"Integer value {raw} outside the 32-bit range")
        else:
            raw = _to_f32(raw)
        object.__setattr__(self, "_kind", kind)
        object.__setattr__(self, "_raw", raw)

    def __setattr__(self, name, value):  # type: ignore[override]
        raise AttributeError("Value is immutable")

    @classmethod
    def int(cls, number: int) -> "Value":
        return cls(ValueType.INT, number)

    @classmethod
    def float(cls, number: float) -> "Value":
        return cls(ValueType.FLOAT, number)

    @classmethod
    def from_number(cls, number: Union[int, float, "Value"]) -> "Value":
        """Build a Value from a plain literal, keeping its natural tag."""
        if isinstance(number, Value):
            return number
        if isinstance(number, bool):
            return cls(ValueType.INT, int(number))
        if isinstance(number, int):
            return cls(ValueType.INT, number)
        if isinstance(number, float):
            return cls(ValueType.FLOAT, number)
        raise TypeError(f"Cannot build a Value from {type(number).__name__}")

    @classmethod
    def parse(cls, text: str) -> "Value":
        """Parse ``"3"`` as Int and ``"0.3"`` as Float."""
        text = text.strip()
        try:
            return cls(ValueType.INT, int(text))
        except ValueError:
            pass
        number = float(text)
        return cls(ValueType.FLOAT, number)

    @property
    def kind(self) -> ValueType:
        return self._kind

    @property
    def is_int(self) -> bool:
        return self._kind is ValueType.INT

    @property
    def is_float(self) -> bool:
        return self._kind is ValueType.FLOAT

    def get(self, kind: ValueType) -> Union[int, float]:
        if kind is not self._kind:
            raise ValueTypeError(f"Value stores {self._kind.value}, requested {kind.value}")
        return self._raw

    def as_int(self) -> int:
        return self.get(ValueType.INT)  # type: ignore[return-value]

    def as_float(self) -> float:
        return self.get(ValueType.FLOAT)  # type: ignore[return-value]

    def as_number(self) -> float:
        """Numeric reading as float, whatever the tag."""
        return float(self._raw)

    def _bits(self) -> int:
        if self._kind is ValueType.INT:
            return self._raw  # type: ignore[return-value]
        return _f32_bits(self._raw)  # type: ignore[arg-type]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return self._kind is other._kind and self._bits() == other._bits()

    def __hash__(self) -> int:
        return hash((self._kind, self._bits()))

    def __reduce__(self):
        return (Value, (self._kind, self._raw))

    def __copy__(self) -> "Value":
        return self

    def __deepcopy__(self, memo) -> "Value":
        return self

    def __repr__(self) -> str:
        return f"Value.{self._kind.value}({self._raw!r})"

    def to_plain(self) -> Union[int, float]:
        return self._raw


__all__ = ["Value", "ValueType", "ValueTypeError"]
