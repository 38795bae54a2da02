"""networkx bridges for the graph capability."""

from __future__ import annotations

from typing import Hashable, Iterable, Optional

import networkx as nx

from .graph import AdjacencyGraph


class DiGraphAdapter:
    """Expose a ``networkx.DiGraph`` to the SCC enumerator."""

    def __init__(self, graph: nx.DiGraph, entry: Optional[Hashable] = None) -> None:
        if not graph.is_directed():
            raise ValueError("SCC enumeration requires a directed graph")
        if entry is not None and entry not in graph:
            raise KeyError(f"unknown entry node {entry!r}")
        self.graph = graph
        self.entry = entry

    def entry_node(self) -> Optional[Hashable]:
        if self.entry is not None:
            return self.entry
        return next(iter(self.graph), None)

    def children(self, node: Hashable) -> Iterable[Hashable]:
        return self.graph.successors(node)

    def parents(self, node: Hashable) -> Iterable[Hashable]:
        return self.graph.predecessors(node)


def to_networkx(graph: AdjacencyGraph) -> nx.DiGraph:
    """Copy an ``AdjacencyGraph`` into a ``networkx.DiGraph``."""

    digraph = nx.DiGraph()
    digraph.add_nodes_from(graph.iter_nodes())
    digraph.add_edges_from(graph.edges())
    return digraph
