"""Graph capabilities consumed by the SCC enumerator."""

from __future__ import annotations

from typing import Dict, Generic, Hashable, Iterable, Iterator, Optional, Protocol, Tuple, TypeVar, runtime_checkable

NodeT = TypeVar("NodeT", bound=Hashable)


@runtime_checkable
class GraphTraits(Protocol[NodeT]):
    """Anything that can name an entry node and list a node's successors.

    ``children`` may return any finite iterable. The enumerator calls ``iter``
    on it exactly once and resumes that iterator across ``advance`` calls, so
    a generator is fine as long as it is not shared between callers.
    ``entry_node`` returns ``None`` for an empty graph.
    """

    def entry_node(self) -> Optional[NodeT]:
        ...

    def children(self, node: NodeT) -> Iterable[NodeT]:
        ...


@runtime_checkable
class BidirectionalGraph(GraphTraits[NodeT], Protocol[NodeT]):
    """Graph that can also list a node's predecessors."""

    def parents(self, node: NodeT) -> Iterable[NodeT]:
        ...


class AdjacencyGraph(Generic[NodeT]):
    """Insertion-ordered directed graph.

    Node and edge order is the order of insertion, which makes child
    enumeration (and therefore SCC emission order) deterministic.
    """

    def __init__(self, entry: Optional[NodeT] = None) -> None:
        self._succ: Dict[NodeT, Dict[NodeT, None]] = {}
        self._pred: Dict[NodeT, Dict[NodeT, None]] = {}
        self._entry: Optional[NodeT] = None
        if entry is not None:
            self.add_node(entry)
            self._entry = entry

    def _ensure(self, node: NodeT) -> None:
        if node is None:
            raise ValueError("None cannot be used as a graph node")
        if node not in self._succ:
            self._succ[node] = {}
            self._pred[node] = {}

    def add_node(self, node: NodeT) -> None:
        if node in self._succ:
            raise ValueError(f"node {node!r} already exists")
        self._ensure(node)

    def add_edge(self, u: NodeT, v: NodeT) -> None:
        self._ensure(u)
        self._ensure(v)
        self._succ[u][v] = None
        self._pred[v][u] = None

    def set_entry(self, node: NodeT) -> None:
        if node not in self._succ:
            raise KeyError(f"unknown entry node {node!r}")
        self._entry = node

    def entry_node(self) -> Optional[NodeT]:
        if self._entry is not None:
            return self._entry
        return next(iter(self._succ), None)

    def children(self, node: NodeT) -> Tuple[NodeT, ...]:
        return tuple(self._succ.get(node, ()))

    def parents(self, node: NodeT) -> Tuple[NodeT, ...]:
        return tuple(self._pred.get(node, ()))

    def iter_nodes(self) -> Iterator[NodeT]:
        return iter(self._succ)

    def edges(self) -> Iterator[Tuple[NodeT, NodeT]]:
        for src, targets in self._succ.items():
            for dst in targets:
                yield src, dst

    def replace_node(self, old: NodeT, new: NodeT) -> None:
        """
        Substitute ``new`` for ``old`` everywhere in the graph.

        Edge order and the entry node are preserved. Callers running an
        ``SCCIterator`` over this graph must follow up with
        ``notify_node_replaced(old, new)``.
        """

        if old not in self._succ:
            raise KeyError(f"unknown node {old!r}")
        if new is None:
            raise ValueError("None cannot be used as a graph node")
        if new in self._succ:
            raise ValueError(f"node {new!r} already exists")

        def swap(node: NodeT) -> NodeT:
            return new if node == old else node

        self._succ = {swap(src): {swap(dst): None for dst in targets} for src, targets in self._succ.items()}
        self._pred = {swap(dst): {swap(src): None for src in sources} for dst, sources in self._pred.items()}
        if self._entry == old:
            self._entry = new

    def __contains__(self, node: object) -> bool:
        return node in self._succ

    def __len__(self) -> int:
        return len(self._succ)

    def __repr__(self) -> str:
        edge_count = sum(len(targets) for targets in self._succ.values())
        return f"AdjacencyGraph(nodes={len(self)}, edges={edge_count}, entry={self.entry_node()!r})"


class Inverse(Generic[NodeT]):
    """View of a bidirectional graph with every edge reversed.

    Enumerating SCCs over ``Inverse(graph)`` visits them in forward
    topological order of ``graph``'s condensation, restricted to the
    nodes that can reach the entry node.
    """

    def __init__(self, graph: BidirectionalGraph[NodeT]) -> None:
        self.graph = graph

    def entry_node(self) -> Optional[NodeT]:
        return self.graph.entry_node()

    def children(self, node: NodeT) -> Iterable[NodeT]:
        return self.graph.parents(node)

    def parents(self, node: NodeT) -> Iterable[NodeT]:
        return self.graph.children(node)


def build_graph(
    edges: Iterable[Tuple[NodeT, NodeT]],
    nodes: Iterable[NodeT] = (),
    entry: Optional[NodeT] = None,
) -> AdjacencyGraph[NodeT]:
    """
    Convenience helper to build a graph from iterables.

    Unlike ``add_node``, repeated entries in ``nodes`` are tolerated; the
    first occurrence fixes the node's position.
    """

    graph: AdjacencyGraph[NodeT] = AdjacencyGraph()
    for node in nodes:
        if node not in graph:
            graph.add_node(node)
    for src, dst in edges:
        graph.add_edge(src, dst)
    if entry is not None:
        graph.set_entry(entry)
    return graph
