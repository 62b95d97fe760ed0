"""Rule definitions: patterns, templates, procedures and results."""

from .condition import Condition, ConditionKind
from .pattern import FromNode, NodeSet
from .procedures import Add, Delete, Merge, Procedure, Replace
from .results import ApplyKind, ApplyResult, RuleResult
from .rule import Rule
from .serialization import (
    deserialize_condition,
    deserialize_node,
    deserialize_procedure,
    deserialize_rule,
    deserialize_rules,
    deserialize_value,
    serialize_rule,
    serialize_rules,
)
from .to_node import ToNode

__all__ = [
    "Condition",
    "ConditionKind",
    "FromNode",
    "NodeSet",
    "Procedure",
    "Delete",
    "Replace",
    "Add",
    "Merge",
    "ApplyKind",
    "ApplyResult",
    "RuleResult",
    "Rule",
    "ToNode",
    "deserialize_value",
    "deserialize_condition",
    "deserialize_node",
    "deserialize_procedure",
    "deserialize_rule",
    "deserialize_rules",
    "serialize_rule",
    "serialize_rules",
]
