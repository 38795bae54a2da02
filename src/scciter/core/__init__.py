"""
Core pieces of scciter.

The core package includes the graph capability protocols, the lazy SCC
iterator, invariant checks over its output, and a networkx adapter.
"""

from . import graph, scc, invariants, adapters  # noqa: F401

__all__ = ["graph", "scc", "invariants", "adapters"]
