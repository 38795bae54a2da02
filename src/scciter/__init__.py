"""scciter core package."""

from importlib import metadata

from . import core, dsl
from .core.adapters import DiGraphAdapter, to_networkx
from .core.graph import AdjacencyGraph, BidirectionalGraph, GraphTraits, Inverse, build_graph
from .core.invariants import (
    ExhaustedIteratorError,
    InvariantViolation,
    NodeCollisionError,
    PreconditionViolation,
    UntrackedNodeError,
    assert_invariants,
)
from .core.scc import Component, SCCIterator, iter_sccs, scc_begin, scc_end, strongly_connected_components

try:  # pragma: no cover - metadata only at runtime
    __version__ = metadata.version("scciter")
except metadata.PackageNotFoundError:  # pragma: no cover - source tree / editable installs
    __version__ = "0.0.0"

__all__ = [
    "core",
    "dsl",
    "GraphTraits",
    "BidirectionalGraph",
    "AdjacencyGraph",
    "Inverse",
    "build_graph",
    "DiGraphAdapter",
    "to_networkx",
    "SCCIterator",
    "Component",
    "scc_begin",
    "scc_end",
    "iter_sccs",
    "strongly_connected_components",
    "PreconditionViolation",
    "ExhaustedIteratorError",
    "UntrackedNodeError",
    "NodeCollisionError",
    "InvariantViolation",
    "assert_invariants",
    "__version__",
]
