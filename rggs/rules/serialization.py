"""Rule definitions to and from plain Python data.

Input is already-decoded data (dicts, lists, numbers and strings, as a YAML
or JSON decoder would produce); reading files or text is up to the caller.
Everything is validated here so the engine only ever sees well-formed
rules.

Shapes::

    rule:       {"from": node_set, "to": [procedure, ...]}
    node_set:   {"nodes": [{"id": 0, "name": "stem", "values": {...}}], "edges": [[0, 1]]}
    condition:  ["eq", 3] | ["lt", 2.0] | ["gt", ...] | ["lte", ...] | ["gte", ...] | ["range", 0, 2]
    procedure:  {"delete": 0}
                {"replace": {"target": 0, "with": node_template}}
                {"add": {"neighbors": [0, 1], "node": node_template}}
                {"merge": [final, other, ...]}
    node_template: {"name": "stem", "values": {"dir": "dir + 1"}}
"""

from __future__ import annotations

from typing import Any, Dict, List, Union

from rggs.core.node import Node
from rggs.core.types import PatternId
from rggs.core.value import Value
from rggs.rules.condition import Condition, ConditionKind
from rggs.rules.pattern import FromNode, NodeSet
from rggs.rules.procedures import Add, Delete, Merge, Procedure, Replace
from rggs.rules.rule import Rule
from rggs.rules.to_node import ToNode
from rggs.utils.validation import ValidationError

_DESIGNATORS = {kind.value: kind for kind in ConditionKind}


def _check_fields(data: Dict[str, Any], allowed: set[str], what: str, strict: bool) -> None:
    if not strict:
        return
    extras = set(data.keys()) - allowed
    if extras:
        raise ValidationError(
            "unknown_field",
            f"Unknown fields in {what}: {sorted(extras)}",
            extras=sorted(extras),
        )


def _require_mapping(data: Any, what: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise ValidationError("invalid_" + what, f"{what} must be a mapping", value=data)
    return data


def _pattern_id(value: Any, what: str) -> PatternId:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("invalid_procedure", f"{what} must be an integer pattern id", value=value)
    return PatternId(value)


# ----------------- values and conditions -----------------

def deserialize_value(data: Union[int, float, str, Value]) -> Value:
    if isinstance(data, Value):
        return data
    if isinstance(data, bool):
        raise ValidationError("invalid_value", "Booleans are not numeric values", value=data)
    if isinstance(data, (int, float)):
        try:
            return Value.from_number(data)
        except (ValueError, OverflowError) as exc:
            raise ValidationError("invalid_value", str(exc), value=data) from exc
    if isinstance(data, str):
        try:
            return Value.parse(data)
        except (ValueError, OverflowError) as exc:
            raise ValidationError("invalid_value", f"Not an int or float: {data!r}", value=data) from exc
    raise ValidationError("invalid_value", f"Unsupported value type {type(data).__name__}", value=data)


def deserialize_condition(data: Any) -> Condition:
    if not isinstance(data, (list, tuple)) or not data:
        raise ValidationError(
            "invalid_condition",
            "A condition is a designator followed by one or two values",
            value=data,
        )
    designator = data[0]
    kind = _DESIGNATORS.get(designator)
    if kind is None:
        raise ValidationError("unknown_condition", f"Unknown designator {designator!r}", designator=designator)
    expected = 3 if kind is ConditionKind.RANGE else 2
    if len(data) != expected:
        raise ValidationError(
            "invalid_condition",
            f"{designator!r} takes {expected - 1} value(s)",
            designator=designator,
            value=list(data),
        )
    if kind is ConditionKind.RANGE:
        return Condition(kind, deserialize_value(data[1]), deserialize_value(data[2]))
    return Condition(kind, deserialize_value(data[1]))


def serialize_condition(condition: Condition) -> List[Any]:
    out: List[Any] = [condition.kind.value, condition.bound.to_plain()]
    if condition.upper is not None:
        out.append(condition.upper.to_plain())
    return out


# ----------------- nodes -----------------

def deserialize_node(data: Any, *, strict: bool = False) -> Node:
    data = _require_mapping(data, "node")
    _check_fields(data, {"name", "values"}, "node", strict)
    values = data.get("values") or {}
    return Node(
        name=str(data.get("name", "")),
        values={str(k): deserialize_value(v) for k, v in _require_mapping(values, "node").items()},
    )


def serialize_node(node: Node) -> Dict[str, Any]:
    return node.to_plain()


def deserialize_to_node(data: Any, *, strict: bool = False) -> ToNode:
    data = _require_mapping(data, "node")
    _check_fields(data, {"name", "values"}, "node template", strict)
    if "name" not in data:
        raise ValidationError("invalid_node", "Node template requires a name", value=data)
    values = _require_mapping(data.get("values") or {}, "node")
    template = ToNode(name=str(data["name"]), values={str(k): str(v) for k, v in values.items()})
    template.validate()
    return template


def serialize_to_node(template: ToNode) -> Dict[str, Any]:
    return {"name": template.name, "values": dict(template.values)}


# ----------------- patterns -----------------

def deserialize_from_node(data: Any, *, strict: bool = False) -> FromNode:
    data = _require_mapping(data, "node")
    _check_fields(data, {"id", "name", "values"}, "pattern node", strict)
    if "id" not in data:
        raise ValidationError("invalid_node", "Pattern node requires an id", value=data)
    name = data.get("name")
    conditions = _require_mapping(data.get("values") or {}, "node")
    return FromNode(
        id=_pattern_id(data["id"], "Pattern node id"),
        name=None if name is None else str(name),
        values={str(k): deserialize_condition(v) for k, v in conditions.items()},
    )


def deserialize_node_set(data: Any, *, strict: bool = False) -> NodeSet:
    data = _require_mapping(data, "pattern")
    _check_fields(data, {"nodes", "edges"}, "pattern", strict)
    edges = []
    for edge in data.get("edges") or []:
        if not isinstance(edge, (list, tuple)) or len(edge) != 2:
            raise ValidationError("invalid_pattern", "Pattern edges are pairs of pattern ids", edge=edge)
        edges.append((_pattern_id(edge[0], "Edge endpoint"), _pattern_id(edge[1], "Edge endpoint")))
    return NodeSet(
        nodes=[deserialize_from_node(n, strict=strict) for n in data.get("nodes") or []],
        edges=edges,
    )


def serialize_node_set(node_set: NodeSet) -> Dict[str, Any]:
    nodes = []
    for n in node_set.nodes:
        item: Dict[str, Any] = {"id": n.id}
        if n.name is not None:
            item["name"] = n.name
        if n.values:
            item["values"] = {k: serialize_condition(c) for k, c in n.values.items()}
        nodes.append(item)
    return {"nodes": nodes, "edges": [list(e) for e in node_set.edges]}


# ----------------- procedures -----------------

def deserialize_procedure(data: Any, *, strict: bool = False) -> Procedure:
    if not isinstance(data, dict) or len(data) != 1:
        raise ValidationError(
            "invalid_procedure",
            "A procedure is a mapping with exactly one of delete/replace/add/merge",
            value=data,
        )
    (kind, body), = data.items()
    if kind == "delete":
        return Delete(target=_pattern_id(body, "delete target"))
    if kind == "replace":
        body = _require_mapping(body, "procedure")
        _check_fields(body, {"target", "with", "replace"}, "replace", strict)
        template = body.get("with", body.get("replace"))
        if "target" not in body or template is None:
            raise ValidationError("invalid_procedure", "replace requires 'target' and 'with'", value=body)
        return Replace(
            target=_pattern_id(body["target"], "replace target"),
            replacement=deserialize_to_node(template, strict=strict),
        )
    if kind == "add":
        body = _require_mapping(body, "procedure")
        _check_fields(body, {"neighbors", "node"}, "add", strict)
        if "node" not in body:
            raise ValidationError("invalid_procedure", "add requires 'node'", value=body)
        return Add(
            neighbors=[_pattern_id(n, "add neighbor") for n in body.get("neighbors") or []],
            new_node=deserialize_to_node(body["node"], strict=strict),
        )
    if kind == "merge":
        if isinstance(body, dict):
            _check_fields(body, {"targets", "final_node"}, "merge", strict)
            final_node = _pattern_id(body.get("final_node"), "merge final node")
            targets = [_pattern_id(t, "merge target") for t in body.get("targets") or []]
        else:
            if not isinstance(body, (list, tuple)) or len(body) < 2:
                raise ValidationError(
                    "invalid_procedure",
                    "merge takes at least 2 pattern ids, the survivor first",
                    value=body,
                )
            ids = [_pattern_id(t, "merge target") for t in body]
            final_node, targets = ids[0], ids[1:]
        return Merge(targets=targets, final_node=final_node)
    raise ValidationError("unknown_procedure", f"Unknown procedure {kind!r}", procedure=kind)


def serialize_procedure(procedure: Procedure) -> Dict[str, Any]:
    if isinstance(procedure, Delete):
        return {"delete": procedure.target}
    if isinstance(procedure, Replace):
        return {"replace": {"target": procedure.target, "with": serialize_to_node(procedure.replacement)}}
    if isinstance(procedure, Add):
        return {"add": {"neighbors": list(procedure.neighbors), "node": serialize_to_node(procedure.new_node)}}
    if isinstance(procedure, Merge):
        return {"merge": [procedure.final_node, *procedure.targets]}
    raise ValidationError("unknown_procedure", f"Cannot serialize {type(procedure).__name__}")


# ----------------- rules -----------------

def deserialize_rule(data: Any, *, strict: bool = False) -> Rule:
    data = _require_mapping(data, "rule")
    _check_fields(data, {"id", "from", "to", "match_values", "symmetry_breaking"}, "rule", strict)
    if "from" not in data:
        raise ValidationError("invalid_rule", "Rule requires a 'from' pattern", value=data)
    lhs = deserialize_node_set(data["from"], strict=strict)
    rhs = [deserialize_procedure(p, strict=strict) for p in data.get("to") or []]

    declared = set(lhs.ids())
    for procedure in rhs:
        for pattern_id in procedure.references():
            if pattern_id not in declared:
                raise ValidationError(
                    "unknown_pattern_id",
                    f"{procedure.kind} references pattern id {pattern_id} not declared in 'from'",
                    pattern_id=pattern_id,
                    procedure=procedure.kind,
                )

    kwargs: Dict[str, Any] = {
        "match_values": bool(data.get("match_values", False)),
        "symmetry_breaking": bool(data.get("symmetry_breaking", True)),
    }
    if "id" in data:
        kwargs["rule_id"] = data["id"]
    return Rule(lhs=lhs, rhs=rhs, **kwargs)


def serialize_rule(rule: Rule) -> Dict[str, Any]:
    return {
        "id": str(rule.rule_id),
        "from": serialize_node_set(rule.lhs),
        "to": [serialize_procedure(p) for p in rule.rhs],
        "match_values": rule.match_values,
        "symmetry_breaking": rule.symmetry_breaking,
    }


def deserialize_rules(data: List[Any], *, strict: bool = False) -> List[Rule]:
    """Deserialize a list of rule mappings, e.g. a decoded rule file."""
    if not isinstance(data, list):
        raise ValidationError("invalid_rule", "Rule collection must be a list", value=type(data).__name__)
    return [deserialize_rule(item, strict=strict) for item in data]


def serialize_rules(rules: List[Rule]) -> List[Dict[str, Any]]:
    return [serialize_rule(rule) for rule in rules]


__all__ = [
    "deserialize_value",
    "deserialize_condition",
    "serialize_condition",
    "deserialize_node",
    "serialize_node",
    "deserialize_to_node",
    "serialize_to_node",
    "deserialize_from_node",
    "deserialize_node_set",
    "serialize_node_set",
    "deserialize_procedure",
    "serialize_procedure",
    "deserialize_rule",
    "serialize_rule",
    "deserialize_rules",
    "serialize_rules",
]
