import pytest

from rggs.core.node import Node
from rggs.core.rgg_graph import RggGraph
from rggs.core.value import Value
from rggs.rules.condition import Condition, ConditionKind
from rggs.rules.procedures import Add, Delete, Merge, Replace
from rggs.rules.serialization import (
    deserialize_condition,
    deserialize_node,
    deserialize_node_set,
    deserialize_procedure,
    deserialize_rule,
    deserialize_rules,
    deserialize_value,
    serialize_rule,
)
from rggs.utils.validation import ExpressionError, ValidationError

SPROUT = {
    "from": {"nodes": [{"id": 0, "name": "stem", "values": {"sprouted": ["eq", 0]}}]},
    "to": [
        {"replace": {"target": 0, "with": {"name": "stem", "values": {"sprouted": 1, "dir": "dir"}}}},
        {"add": {"neighbors": [0], "node": {"name": "shoot", "values": {"rotation": "90 * dir"}}}},
    ],
    "match_values": True,
}


def test_values_keep_their_literal_type():
    assert deserialize_value(3) == Value.int(3)
    assert deserialize_value("3") == Value.int(3)
    assert deserialize_value("0.3") == Value.float(0.3)
    assert deserialize_value(2.5) == Value.float(2.5)


@pytest.mark.parametrize("data", [True, "dir", 2**40, None])
def test_invalid_values(data):
    with pytest.raises(ValidationError) as exc:
        deserialize_value(data)
    assert exc.value.code == "invalid_value"


def test_conditions():
    assert deserialize_condition(["eq", 0]) == Condition.equals(0)
    cond = deserialize_condition(["range", 0, "2.5"])
    assert cond.kind is ConditionKind.RANGE
    assert cond.upper == Value.float(2.5)


@pytest.mark.parametrize(
    "data, code",
    [
        (["approx", 1], "unknown_condition"),
        (["range", 1], "invalid_condition"),
        (["eq", 1, 2], "invalid_condition"),
        ("eq", "invalid_condition"),
    ],
)
def test_invalid_conditions(data, code):
    with pytest.raises(ValidationError) as exc:
        deserialize_condition(data)
    assert exc.value.code == code


def test_node():
    assert deserialize_node({"name": "stem", "values": {"dir": 0}}) == Node.from_mapping("stem", {"dir": 0})


def test_procedures():
    assert deserialize_procedure({"delete": 2}) == Delete(2)
    assert deserialize_procedure({"merge": [3, 1, 2]}) == Merge(targets=[1, 2], final_node=3)
    assert deserialize_procedure({"merge": {"targets": [1, 2], "final_node": 1}}) == Merge([1, 2], 1)
    replace = deserialize_procedure({"replace": {"target": 0, "replace": {"name": "x", "values": {"a": 1}}}})
    assert isinstance(replace, Replace)
    assert replace.replacement.values == {"a": "1"}
    add = deserialize_procedure({"add": {"neighbors": [0, 1], "node": {"name": "leaf"}}})
    assert isinstance(add, Add)
    assert add.neighbors == [0, 1]


@pytest.mark.parametrize(
    "data, code",
    [
        ({"grow": 0}, "unknown_procedure"),
        ({"merge": [1]}, "invalid_procedure"),
        ({"delete": "0"}, "invalid_procedure"),
        ({"replace": {"target": 0}}, "invalid_procedure"),
        ({"delete": 0, "add": {}}, "invalid_procedure"),
    ],
)
def test_invalid_procedures(data, code):
    with pytest.raises(ValidationError) as exc:
        deserialize_procedure(data)
    assert exc.value.code == code


def test_bad_expressions_are_rejected_at_load():
    with pytest.raises(ExpressionError):
        deserialize_procedure({"add": {"neighbors": [0], "node": {"name": "x", "values": {"a": "dir +"}}}})


def test_pattern_ids_are_checked():
    with pytest.raises(ValidationError) as exc:
        deserialize_rule({"from": {"nodes": [{"id": 0}]}, "to": [{"delete": 1}]})
    assert exc.value.code == "unknown_pattern_id"

    with pytest.raises(ValidationError) as exc:
        deserialize_node_set({"nodes": [{"id": 0}, {"id": 0}]})
    assert exc.value.code == "duplicate_pattern_id"

    with pytest.raises(ValidationError) as exc:
        deserialize_node_set({"nodes": [{"id": 0}], "edges": [[0, 1]]})
    assert exc.value.code == "unknown_pattern_id"


def test_strict_mode_rejects_unknown_fields():
    data = dict(SPROUT, colour="green")
    deserialize_rule(data)
    with pytest.raises(ValidationError) as exc:
        deserialize_rule(data, strict=True)
    assert exc.value.code == "unknown_field"


def test_loaded_rule_runs():
    rule = deserialize_rule(SPROUT)
    assert rule.match_values
    g = RggGraph()
    g.insert_node_with(Node.from_mapping("stem", {"sprouted": 0, "dir": 0}))

    result = rule.apply(g)
    assert result.modified == [0]
    assert result.added == [1]
    assert g.values[0].values["sprouted"] == Value.float(1.0)
    assert g.values[1].name == "shoot"
    assert g.values[1].values["rotation"] == Value.float(0.0)

    assert rule.apply(g).is_empty()


def test_serialized_rule_loads_back():
    rule = deserialize_rule(dict(SPROUT, id="sprout"))
    data = serialize_rule(rule)
    assert data["id"] == "sprout"
    assert data["to"][0] == {"replace": {"target": 0, "with": {"name": "stem", "values": {"sprouted": "1", "dir": "dir"}}}}
    assert serialize_rule(deserialize_rule(data)) == data


def test_rule_collections():
    rules = deserialize_rules([SPROUT, {"from": {"nodes": [{"id": 0}]}, "to": [{"delete": 0}]}])
    assert len(rules) == 2
    with pytest.raises(ValidationError) as exc:
        deserialize_rules(SPROUT)
    assert exc.value.code == "invalid_rule"
