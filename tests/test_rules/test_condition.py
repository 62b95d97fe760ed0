import pytest

from rggs.core.value import Value
from rggs.rules.condition import Condition, ConditionKind


def test_range_is_inclusive_at_both_ends():
    cond = Condition.range(0, 2)
    assert cond.check(0)
    assert cond.check(2)
    assert cond.check(Value.float(1.5))
    assert not cond.check(-1)
    assert not cond.check(3)


@pytest.mark.parametrize(
    "condition, accepted, rejected",
    [
        (Condition.equals(3), 3, 4),
        (Condition.less_than(2.0), 1.5, 2.0),
        (Condition.greater_than(2), 3, 2),
        (Condition.less_or_equal(2), 2, 3),
        (Condition.greater_or_equal(2), 2, 1),
    ],
)
def test_single_bound_conditions(condition, accepted, rejected):
    assert condition.check(accepted)
    assert not condition.check(rejected)


def test_comparison_is_numeric_across_tags():
    assert Condition.equals(0).check(Value.float(0.0))
    assert Condition.less_than(Value.float(0.5)).check(Value.int(0))


def test_bounds_must_match_kind():
    with pytest.raises(ValueError):
        Condition(ConditionKind.RANGE, Value.int(0))
    with pytest.raises(ValueError):
        Condition(ConditionKind.EQUALS, Value.int(0), Value.int(1))


def test_upper_bound_is_tight():
    cond = Condition.range(0, 2)
    assert cond.check(2.0)
    assert not cond.check(2.0001)


def test_plain_floats_compare_at_bound_precision():
    assert Condition.equals(0.1).check(0.1)
    assert Condition.range(0.1, 1).check(0.1)
    assert Condition.greater_or_equal(0.1).check(0.1)
    assert not Condition.less_than(0.1).check(0.1)
    assert Condition.less_than(1.0).check(1e300) is False
