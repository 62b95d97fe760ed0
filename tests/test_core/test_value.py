import copy

import pytest

from rggs.core.node import Node
from rggs.core.value import Value, ValueType, ValueTypeError


def test_value_keeps_literal_tag():
    assert Value.from_number(3).kind is ValueType.INT
    assert Value.from_number(3.0).kind is ValueType.FLOAT
    assert Value.from_number(3).as_int() == 3
    assert Value.from_number(0.5).as_float() == 0.5


def test_float_is_stored_as_single_precision():
    v = Value.float(0.3)
    assert v.as_float() == pytest.approx(0.3)
    assert v.as_float() != 0.3
    assert v == Value.float(0.30000001192092896)


def test_equality_compares_tag_without_coercion():
    assert Value.int(1) == Value.int(1)
    assert Value.int(1) != Value.float(1.0)
    assert Value.float(2.5) == Value.float(2.5)
    assert hash(Value.float(2.5)) == hash(Value.float(2.5))


def test_accessor_mismatch_is_checked():
    with pytest.raises(ValueTypeError):
        Value.int(1).as_float()
    with pytest.raises(ValueTypeError):
        Value.float(1.0).get(ValueType.INT)
    assert Value.int(4).as_number() == 4.0


def test_int_range_is_32_bit():
    Value.int(2**31 - 1)
    with pytest.raises(ValueError):
        Value.int(2**31)
    with pytest.raises(ValueError):
        Value.int(1.5)


def test_parse_prefers_int_then_float():
    assert Value.parse("3") == Value.int(3)
    assert Value.parse(" -3 ") == Value.int(-3)
    assert Value.parse("0.3") == Value.float(0.3)
    with pytest.raises(ValueError):
        Value.parse("dir + 1")


def test_value_is_immutable_and_copyable():
    v = Value.int(7)
    with pytest.raises(AttributeError):
        v._raw = 8
    assert copy.deepcopy(v) == v
    assert copy.copy(v) is v


def test_node_from_mapping_and_copy():
    node = Node.from_mapping("stem", {"dir": 0, "length": 1.5})
    assert node.values["dir"] == Value.int(0)
    assert node.values["length"] == Value.float(1.5)
    clone = node.copy()
    clone.values["dir"] = Value.int(9)
    assert node.values["dir"] == Value.int(0)
    assert node.to_plain() == {"name": "stem", "values": {"dir": 0, "length": 1.5}}
