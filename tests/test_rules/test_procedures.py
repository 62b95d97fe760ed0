import logging

from rggs.core.node import Node
from rggs.core.rgg_graph import RggGraph
from rggs.rules.procedures import Add, Delete, Merge, Replace
from rggs.rules.results import ApplyKind, ApplyResult
from rggs.rules.to_node import ToNode


def _triangle():
    g = RggGraph()
    for _ in range(3):
        g.insert_node_with(Node("node"))
    g.add_edge(0, 1)
    g.add_edge(1, 2)
    g.add_edge(0, 2)
    return g


def test_add_wires_every_neighbor_and_sets_ancestor():
    g = _triangle()
    bindings = {2: 0, 1: 1, 0: 2}
    result = Add([0, 1], ToNode("newnode")).apply(g, bindings)
    assert result == ApplyResult.added(3)
    assert g.order() == 4
    assert g.values[3].name == "newnode"
    assert sorted(g.neighbors(3)) == [1, 2]
    assert g.graph.get_ancestor(3) == 2


def test_add_without_neighbors_creates_a_root():
    g = _triangle()
    result = Add([], ToNode("seed")).apply(g, {})
    assert result.kind is ApplyKind.ADDED
    assert list(g.neighbors(3)) == []
    assert g.graph.get_ancestor(3) is None


def test_add_with_unbound_neighbor_fails_without_mutating(caplog):
    g = _triangle()
    with caplog.at_level(logging.WARNING):
        result = Add([0, 5], ToNode("newnode")).apply(g, {0: 0})
    assert result.kind is ApplyKind.FAILED
    assert not result.ok
    assert g.order() == 3
    assert "could not find neighbor 5" in caplog.text


def test_delete_removes_bound_node():
    g = _triangle()
    bindings = {2: 0, 1: 1, 0: 2}
    result = Delete(0).apply(g, bindings)
    assert result == ApplyResult.removed([2])
    assert g.order() == 2
    assert len(g.values) == 2
    assert 0 not in bindings
    assert g.graph.size() == 1


def test_delete_of_absent_target_fails():
    g = _triangle()
    bindings = {0: 2}
    Delete(0).apply(g, bindings)
    assert Delete(0).apply(g, bindings).kind is ApplyKind.FAILED
    assert Delete(0).apply(g, {0: 2}).kind is ApplyKind.FAILED
    assert g.order() == 2


def test_replace_swaps_attributes_in_place():
    g = _triangle()
    g.replace_node(1, Node.from_mapping("stem", {"sprouted": 0, "dir": 2}))
    template = ToNode("stem", {"sprouted": "1", "dir": "dir"})
    result = Replace(0, template).apply(g, {0: 1})
    assert result == ApplyResult.modified(1)
    assert g.values[1].values["sprouted"].as_float() == 1.0
    assert g.values[1].values["dir"].as_float() == 2.0
    assert sorted(g.neighbors(1)) == [0, 2]
    assert g.graph.node_is_dirty(1)


def test_replace_of_unbound_target_fails():
    g = _triangle()
    assert Replace(3, ToNode("x")).apply(g, {0: 1}).kind is ApplyKind.FAILED


def test_merge_unions_neighbors_and_hierarchy():
    g = RggGraph()
    for _ in range(5):
        g.insert_node_with(Node("n"))
    g.add_edge(0, 1)
    g.add_edge(1, 2)
    g.add_edge(2, 3)
    g.add_edge(1, 4)
    g.graph.add_ancestor(2, 0)
    g.graph.add_ancestor(3, 2)

    bindings = {0: 1, 1: 2}
    result = Merge(targets=[0, 1], final_node=0).apply(g, bindings)

    assert result == ApplyResult.removed([2])
    assert 2 not in g
    assert sorted(g.neighbors(1)) == [0, 3, 4]
    assert g.graph.get_ancestor(1) == 0
    assert g.graph.get_ancestor(3) == 1
    assert bindings == {0: 1}


def test_merge_with_missing_member_fails():
    g = _triangle()
    result = Merge(targets=[0, 1], final_node=0).apply(g, {0: 0})
    assert result.kind is ApplyKind.FAILED
    assert g.order() == 3


def test_targets_exist():
    g = _triangle()
    add = Add([0, 1], ToNode("x"))
    assert add.targets_exist({0: 0, 1: 1})
    assert not add.targets_exist({0: 0})
    g.remove_node(1)
    assert add.targets_exist({0: 0, 1: 1})
    assert not add.targets_exist({0: 0, 1: 1}, g)
    assert Merge(targets=[1], final_node=0).references() == [1, 0]
