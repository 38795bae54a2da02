"""YAML based graph description for SCC runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

import yaml

from ..core.graph import AdjacencyGraph, build_graph


@dataclass
class GraphSpec:
    name: str
    edges: List[Tuple[Any, Any]]
    nodes: List[Any] = field(default_factory=list)
    entry: Optional[Any] = None


def _parse_edge(raw: Any) -> Tuple[Any, Any]:
    if isinstance(raw, Mapping):
        try:
            return raw["source"], raw["target"]
        except KeyError as exc:
            raise ValueError(f"edge {raw!r} lacks {exc.args[0]!r}") from None
    if isinstance(raw, (list, tuple)) and len(raw) == 2:
        return raw[0], raw[1]
    raise ValueError(f"edge {raw!r} must be a [source, target] pair or a source/target mapping")


def parse_graph_spec(data: Mapping[str, Any]) -> GraphSpec:
    if not isinstance(data, Mapping):
        raise ValueError("graph description must be a mapping")
    graph = data.get("graph", data)
    edges = [_parse_edge(edge) for edge in graph.get("edges") or []]
    return GraphSpec(
        name=graph.get("name", "graph"),
        edges=edges,
        nodes=list(graph.get("nodes") or []),
        entry=graph.get("entry"),
    )


def load_graph_spec(path: str | Path) -> GraphSpec:
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    return parse_graph_spec(data or {})


def dump_graph_spec(spec: GraphSpec, path: str | Path) -> None:
    graph: Dict[str, Any] = {"name": spec.name}
    if spec.entry is not None:
        graph["entry"] = spec.entry
    if spec.nodes:
        graph["nodes"] = list(spec.nodes)
    graph["edges"] = [[src, dst] for src, dst in spec.edges]
    Path(path).write_text(yaml.safe_dump({"graph": graph}, sort_keys=False), encoding="utf-8")


def build_graph_from_spec(spec: GraphSpec, entry: Optional[Any] = None) -> AdjacencyGraph:
    """Build the graph, with ``entry`` overriding the one in the description."""

    return build_graph(spec.edges, nodes=spec.nodes, entry=entry if entry is not None else spec.entry)
