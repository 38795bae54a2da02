"""Strongly connected component enumeration.

``SCCIterator`` finds the SCCs of a graph in O(N+E) time using Tarjan's DFS
algorithm, handing them out one at a time. If a node in SCC S1 has an edge
to a node in SCC S2, S1 is produced *after* S2 (reverse topological order of
the SCC DAG). Run it over ``Inverse(graph)`` to get forward order instead.

The DFS keeps its call chain on explicit stacks, so graph depth is bounded
by memory rather than by the interpreter's recursion limit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Generic, Hashable, Iterator, List, Optional, Tuple, TypeVar

from ..config import check_state_enabled, trace_enabled
from .graph import GraphTraits
from .invariants import (
    ExhaustedIteratorError,
    NodeCollisionError,
    UntrackedNodeError,
    check_traversal_state,
)

LOGGER = logging.getLogger(__name__)

NodeT = TypeVar("NodeT", bound=Hashable)

# Visit number of a node whose SCC has already been emitted.
FINALIZED = -1

_EXHAUSTED = object()


@dataclass
class Frame(Generic[NodeT]):
    """Suspended DFS activation: a node and the cursor over its remaining children."""

    node: NodeT
    cursor: Iterator[NodeT]


@dataclass(frozen=True)
class Component(Generic[NodeT]):
    """One emitted SCC together with its loop flag."""

    nodes: Tuple[NodeT, ...]
    has_loop: bool

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[NodeT]:
        return iter(self.nodes)

    def __contains__(self, node: object) -> bool:
        return node in self.nodes


class SCCIterator(Generic[NodeT]):
    """Enumerate the SCCs of a directed graph in reverse topological order.

    The iterator is forward-only: once an SCC has been left behind it cannot
    be revisited. A freshly built iterator is already positioned on the first
    SCC; ``advance`` moves to the next one and ``at_end`` reports exhaustion.
    """

    def __init__(self, graph: GraphTraits[NodeT], entry: Optional[NodeT] = None) -> None:
        self.graph = graph
        # Global discovery counter; per-node numbers double as DFS flags.
        self._visit_num = 0
        self._visit_numbers: Dict[NodeT, int] = {}
        # Nodes of SCCs still being assembled.
        self._scc_node_stack: List[NodeT] = []
        self._current: List[NodeT] = []
        self._visit_stack: List[Frame[NodeT]] = []
        # Minimum reachable visit number for each frame on the visit stack.
        self._min_visit_stack: List[int] = []
        # Substituted identities, so cursors created before a swap resolve to the new node.
        self._replaced: Dict[NodeT, NodeT] = {}
        self._trace = trace_enabled()
        self._check_state = check_state_enabled()
        if entry is not None:
            self._visit_one(entry)
            self.advance()

    @classmethod
    def begin(cls, graph: GraphTraits[NodeT]) -> "SCCIterator[NodeT]":
        return cls(graph, graph.entry_node())

    @classmethod
    def end(cls, graph: GraphTraits[NodeT]) -> "SCCIterator[NodeT]":
        return cls(graph)

    def _visit_one(self, node: NodeT) -> None:
        self._visit_num += 1
        self._visit_numbers[node] = self._visit_num
        self._scc_node_stack.append(node)
        self._min_visit_stack.append(self._visit_num)
        self._visit_stack.append(Frame(node, iter(self.graph.children(node))))
        if self._trace:
            LOGGER.debug("visit node %r discovery=%d", node, self._visit_num)

    def _visit_children(self) -> None:
        while True:
            frame = self._visit_stack[-1]
            child = next(frame.cursor, _EXHAUSTED)
            if child is _EXHAUSTED:
                return
            child = self._replaced.get(child, child)
            child_num = self._visit_numbers.get(child)
            if child_num is None:
                self._visit_one(child)
                continue
            if child_num == FINALIZED:
                continue
            if self._min_visit_stack[-1] > child_num:
                self._min_visit_stack[-1] = child_num

    def advance(self) -> None:
        """Run the DFS until the next complete SCC is found or the graph is exhausted."""

        self._current = []
        while self._visit_stack:
            self._visit_children()
            frame = self._visit_stack.pop()
            min_visit = self._min_visit_stack.pop()
            if self._min_visit_stack and self._min_visit_stack[-1] > min_visit:
                self._min_visit_stack[-1] = min_visit
            if self._trace:
                LOGGER.debug(
                    "pop node %r low=%d discovery=%d",
                    frame.node,
                    min_visit,
                    self._visit_numbers[frame.node],
                )
            if min_visit != self._visit_numbers[frame.node]:
                continue

            # A full SCC sits on top of the node stack, ending at frame.node.
            while True:
                node = self._scc_node_stack.pop()
                self._visit_numbers[node] = FINALIZED
                self._current.append(node)
                if node == frame.node:
                    break
            LOGGER.debug("completed SCC of %d node(s) rooted at %r", len(self._current), frame.node)
            break
        if self._check_state:
            check_traversal_state(
                [frame.node for frame in self._visit_stack],
                self._min_visit_stack,
                self._scc_node_stack,
                self._visit_numbers,
                FINALIZED,
            )

    def at_end(self) -> bool:
        """Direct termination test, cheaper than comparing with ``end``."""

        return not self._current

    def current(self) -> Tuple[NodeT, ...]:
        if not self._current:
            raise ExhaustedIteratorError("current() called on an exhausted SCC iterator")
        return tuple(self._current)

    def has_loop(self) -> bool:
        """
        Test if the current SCC has a loop.

        Any SCC with more than one node is cyclic. A single node is cyclic
        only if it has an edge back to itself.
        """

        if not self._current:
            raise ExhaustedIteratorError("has_loop() called on an exhausted SCC iterator")
        if len(self._current) > 1:
            return True
        node = self._current[0]
        return any(self._replaced.get(child, child) == node for child in self.graph.children(node))

    def notify_node_replaced(self, old: NodeT, new: NodeT) -> None:
        """
        Tell the iterator that the graph now uses ``new`` in place of ``old``.

        The visit record of ``old`` (discovery number or finalized) moves to
        ``new``. References on the traversal stacks and in the current SCC are
        rewritten too; an active frame keeps its child cursor, and
        any cursor that still yields ``old`` resolves it to ``new``.
        """

        if old not in self._visit_numbers:
            raise UntrackedNodeError(f"node {old!r} is not tracked by this SCC iterator")
        if new == old:
            return
        if new in self._visit_numbers:
            raise NodeCollisionError(f"node {new!r} is already tracked by this SCC iterator")
        self._visit_numbers[new] = self._visit_numbers.pop(old)
        for stale, target in self._replaced.items():
            if target == old:
                self._replaced[stale] = new
        self._replaced.pop(new, None)
        self._replaced[old] = new
        for frame in self._visit_stack:
            if frame.node == old:
                frame.node = new
        self._scc_node_stack = [new if node == old else node for node in self._scc_node_stack]
        self._current = [new if node == old else node for node in self._current]

    def __iter__(self) -> Iterator[Tuple[NodeT, ...]]:
        while self._current:
            yield self.current()
            self.advance()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SCCIterator):
            return NotImplemented
        return [frame.node for frame in self._visit_stack] == [
            frame.node for frame in other._visit_stack
        ] and self._current == other._current

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        state = "end" if self.at_end() else f"current={self.current()!r}"
        return f"SCCIterator({state}, depth={len(self._visit_stack)})"


def scc_begin(graph: GraphTraits[NodeT]) -> SCCIterator[NodeT]:
    """Construct the begin iterator for ``graph``."""

    return SCCIterator.begin(graph)


def scc_end(graph: GraphTraits[NodeT]) -> SCCIterator[NodeT]:
    """Construct the end iterator for ``graph``."""

    return SCCIterator.end(graph)


def iter_sccs(graph: GraphTraits[NodeT]) -> Iterator[Component[NodeT]]:
    """Yield every SCC reachable from the entry node with its loop flag."""

    it = scc_begin(graph)
    while not it.at_end():
        yield Component(nodes=it.current(), has_loop=it.has_loop())
        it.advance()


def strongly_connected_components(graph: GraphTraits[NodeT]) -> List[Tuple[NodeT, ...]]:
    """Return the SCCs reachable from the entry node in emission order."""

    return list(scc_begin(graph))
