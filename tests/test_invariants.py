import pytest

from scciter.core import invariants
from scciter.core.graph import build_graph
from scciter.core.scc import FINALIZED, Component, iter_sccs


def build_chain():
    return build_graph([("A", "B"), ("B", "C")], entry="A")


def test_emitted_order_passes_all_checks():
    graph = build_graph([("A", "B"), ("B", "C"), ("C", "A"), ("D", "A"), ("C", "E")], entry="D")
    invariants.assert_invariants(graph, list(iter_sccs(graph)))


def test_reachable_nodes_follow_entry():
    graph = build_graph([("A", "B"), ("C", "A")], entry="A")
    assert invariants.reachable_nodes(graph) == {"A", "B"}


def test_ordering_violation_on_forward_order():
    graph = build_chain()
    with pytest.raises(invariants.OrderingViolation):
        invariants.validate_reverse_topological(graph, [("A",), ("B",), ("C",)])


def test_partition_violations():
    graph = build_chain()
    with pytest.raises(invariants.PartitionViolation):
        invariants.validate_partition(graph, [("C",), ("B", "C"), ("A",)])
    with pytest.raises(invariants.PartitionViolation):
        invariants.validate_partition(graph, [("C",), ("B",)])
    with pytest.raises(invariants.PartitionViolation):
        invariants.validate_partition(graph, [("C",), ("B",), ("A",), ("Q",)])


def test_loop_flag_violation():
    graph = build_graph([("X", "X"), ("X", "Y")], entry="X")
    invariants.validate_loop_flags(graph, [Component(("Y",), False), Component(("X",), True)])
    with pytest.raises(invariants.LoopFlagViolation):
        invariants.validate_loop_flags(graph, [Component(("Y",), True)])


def test_traversal_state_checks():
    visit_numbers = {"A": 1, "B": 2, "C": FINALIZED}
    invariants.check_traversal_state(["A", "B"], [1, 1], ["A", "B"], visit_numbers, FINALIZED)
    with pytest.raises(invariants.TraversalStateError):
        invariants.check_traversal_state(["A", "B"], [1], ["A", "B"], visit_numbers, FINALIZED)
    with pytest.raises(invariants.TraversalStateError):
        invariants.check_traversal_state(["A"], [1], ["B", "A"], visit_numbers, FINALIZED)
    with pytest.raises(invariants.TraversalStateError):
        invariants.check_traversal_state(["A"], [1], ["A"], visit_numbers, FINALIZED)
    with pytest.raises(invariants.TraversalStateError):
        invariants.check_traversal_state(["B"], [3], ["A", "B"], visit_numbers, FINALIZED)
