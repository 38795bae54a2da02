"""Contract errors and invariant checks for SCC enumeration."""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Hashable, Iterable, List, Mapping, Sequence, Set

from .graph import GraphTraits

if TYPE_CHECKING:  # pragma: no cover
    from .scc import Component


class PreconditionViolation(AssertionError):
    """Base error for caller misuse of the enumerator."""


class ExhaustedIteratorError(PreconditionViolation):
    """Raised when the current SCC of an exhausted enumerator is requested."""


class UntrackedNodeError(PreconditionViolation):
    """Raised when a node substitution names a node the enumerator never saw."""


class NodeCollisionError(PreconditionViolation):
    """Raised when a node substitution would overwrite another tracked node."""


class InvariantViolation(RuntimeError):
    """Base error for invariant violations."""


class PartitionViolation(InvariantViolation):
    """Raised when emitted SCCs overlap or do not cover the reachable nodes."""


class OrderingViolation(InvariantViolation):
    """Raised when an SCC is emitted before an SCC it has an edge into."""


class LoopFlagViolation(InvariantViolation):
    """Raised when a component's loop flag disagrees with its edges."""


class TraversalStateError(InvariantViolation):
    """Raised when the enumerator's internal stacks fall out of step."""


def reachable_nodes(graph: GraphTraits) -> Set[Hashable]:
    """Return every node reachable from the graph's entry node."""

    entry = graph.entry_node()
    if entry is None:
        return set()
    seen = {entry}
    todo = [entry]
    while todo:
        node = todo.pop()
        for child in graph.children(node):
            if child not in seen:
                seen.add(child)
                todo.append(child)
    return seen


def _component_index(sccs: Sequence[Iterable[Hashable]]) -> Dict[Hashable, int]:
    index: Dict[Hashable, int] = {}
    for position, scc in enumerate(sccs):
        for node in scc:
            if node in index:
                raise PartitionViolation(f"node {node!r} emitted in SCC #{index[node]} and SCC #{position}")
            index[node] = position
    return index


def validate_partition(graph: GraphTraits, sccs: Sequence[Iterable[Hashable]]) -> None:
    """Ensure the SCCs are disjoint and cover exactly the reachable nodes."""

    emitted = set(_component_index(sccs))
    reachable = reachable_nodes(graph)
    missing = reachable - emitted
    if missing:
        raise PartitionViolation(f"reachable nodes never emitted: {sorted(map(repr, missing))}")
    extra = emitted - reachable
    if extra:
        raise PartitionViolation(f"unreachable nodes emitted: {sorted(map(repr, extra))}")


def validate_reverse_topological(graph: GraphTraits, sccs: Sequence[Iterable[Hashable]]) -> None:
    """Check that every cross-SCC edge points at an earlier-emitted SCC."""

    index = _component_index(sccs)
    for node, position in index.items():
        for child in graph.children(node):
            child_position = index.get(child)
            if child_position is None:
                raise PartitionViolation(f"child {child!r} of {node!r} was never emitted")
            if child_position > position:
                raise OrderingViolation(
                    f"edge {node!r} -> {child!r} runs from SCC #{position} to later SCC #{child_position}"
                )


def validate_loop_flags(graph: GraphTraits, components: Iterable["Component"]) -> None:
    """Ensure ``has_loop`` matches the size/self-edge rule for every component."""

    for component in components:
        nodes = component.nodes
        expected = len(nodes) > 1 or any(child == nodes[0] for child in graph.children(nodes[0]))
        if component.has_loop != expected:
            raise LoopFlagViolation(f"component {nodes!r} reports has_loop={component.has_loop}, expected {expected}")


def check_traversal_state(
    frame_nodes: Sequence[Hashable],
    low_links: Sequence[int],
    pending: Sequence[Hashable],
    visit_numbers: Mapping[Hashable, int],
    finalized: int,
) -> None:
    """Verify the enumerator's stacks against each other and the visit map."""

    if len(frame_nodes) != len(low_links):
        raise TraversalStateError(f"{len(frame_nodes)} frames but {len(low_links)} low-link entries")
    previous = 0
    for node in pending:
        number = visit_numbers.get(node)
        if number is None or number == finalized:
            raise TraversalStateError(f"pending node {node!r} is not an active visit record")
        if number <= previous:
            raise TraversalStateError(f"pending stack out of discovery order at {node!r}")
        previous = number
    active = [node for node, number in visit_numbers.items() if number != finalized]
    if len(active) != len(pending) or set(active) != set(pending):
        raise TraversalStateError("pending stack does not match the unfinalized visit records")
    on_pending = set(pending)
    for node, low in zip(frame_nodes, low_links):
        if node not in on_pending:
            raise TraversalStateError(f"frame node {node!r} is not on the pending stack")
        if low > visit_numbers[node]:
            raise TraversalStateError(f"frame node {node!r} has low-link {low} above its discovery number")


def assert_invariants(graph: GraphTraits, components: Sequence["Component"]) -> None:
    """Run all output checks."""

    sccs: List[Sequence[Hashable]] = [component.nodes for component in components]
    validate_partition(graph, sccs)
    validate_reverse_topological(graph, sccs)
    validate_loop_flags(graph, components)
