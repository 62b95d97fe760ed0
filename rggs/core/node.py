"""Named graph entity carrying a map of attribute Values."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Union

from rggs.core.value import Value


@dataclass
class Node:
    """Attributes attached to one graph node.

    Attributes:
        name: Node kind used by pattern matching (e.g. ``"stem"``)
        values: Attribute name to Value
    """

    name: str = ""
    values: dict[str, Value] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, name: str, values: Mapping[str, Union[int, float, Value]] | None = None) -> "Node":
        """Build a Node from plain numbers, keeping int/float tags."""
        return cls(name=name, values={k: Value.from_number(v) for k, v in (values or {}).items()})

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)

    def copy(self) -> "Node":
        return Node(name=self.name, values=dict(self.values))

    def to_plain(self) -> dict[str, Any]:
        return {"name": self.name, "values": {k: v.to_plain() for k, v in self.values.items()}}


__all__ = ["Node"]
