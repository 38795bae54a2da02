"""scciter command line: enumerate and validate SCCs of YAML-described graphs."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict, Hashable, Optional, Sequence

import networkx as nx
import yaml

from .core.adapters import to_networkx
from .core.graph import AdjacencyGraph, Inverse
from .core.invariants import InvariantViolation, PartitionViolation, assert_invariants
from .core.scc import iter_sccs
from .dsl import build_graph_from_spec, load_graph_spec

LOGGER = logging.getLogger(__name__)


def _resolve_entry(graph: AdjacencyGraph, raw: str) -> Any:
    """Map a command-line entry string onto a node, typed the way YAML would type it."""

    if raw in graph:
        return raw
    try:
        typed = yaml.safe_load(raw)
    except yaml.YAMLError:
        return raw
    if isinstance(typed, Hashable) and typed in graph:
        return typed
    return raw


def _load_graph(path: Path, entry: Optional[str]) -> tuple[str, AdjacencyGraph]:
    spec = load_graph_spec(path)
    graph = build_graph_from_spec(spec)
    if entry is not None:
        graph.set_entry(_resolve_entry(graph, entry))
    LOGGER.debug("loaded graph %s from %s: %r", spec.name, path, graph)
    return spec.name, graph


def _write_json_output(payload: Dict[str, Any], output_path: Optional[Path]) -> None:
    text = json.dumps(payload, indent=2, default=str)
    if output_path:
        out_path = Path(output_path)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(text + "\n", encoding="utf-8")
    else:
        print(text)


def command_sccs(args: argparse.Namespace) -> None:
    name, graph = _load_graph(args.graph, args.entry)
    target = Inverse(graph) if args.inverse else graph
    rows = [
        {"index": idx, "nodes": list(component.nodes), "has_loop": component.has_loop}
        for idx, component in enumerate(iter_sccs(target))
    ]
    if args.cyclic_only:
        rows = [row for row in rows if row["has_loop"]]

    if args.json:
        payload = {
            "graph": name,
            "entry": graph.entry_node(),
            "order": "topological" if args.inverse else "reverse-topological",
            "components": rows,
        }
        _write_json_output(payload, None if args.json == "-" else Path(args.json))
        return

    if not rows:
        print("No components found.")
        return
    for row in rows:
        flag = "loop" if row["has_loop"] else "-"
        members = ",".join(str(node) for node in row["nodes"])
        print(f"{row['index']}\t{flag}\t{members}")


def command_validate(args: argparse.Namespace) -> None:
    _name, graph = _load_graph(args.graph, args.entry)
    components = list(iter_sccs(graph))
    assert_invariants(graph, components)

    entry = graph.entry_node()
    digraph = to_networkx(graph)
    reachable = set() if entry is None else nx.descendants(digraph, entry) | {entry}
    expected = {frozenset(comp) for comp in nx.strongly_connected_components(digraph.subgraph(reachable))}
    found = {frozenset(component.nodes) for component in components}
    if expected != found:
        raise PartitionViolation(f"components disagree with networkx: {len(found)} found, {len(expected)} expected")

    cyclic = sum(1 for component in components if component.has_loop)
    print(f"OK: {len(components)} components ({cyclic} cyclic) over {len(reachable)} reachable nodes")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Enumerate strongly connected components in reverse topological order.",
    )
    parser.add_argument(
        "--log-level",
        default="warning",
        choices=["debug", "info", "warning", "error"],
        help="Logging verbosity (default: warning). Set SCCITER_TRACE=1 for per-node debug traces.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    sccs = subparsers.add_parser("sccs", help="List the SCCs reachable from the entry node.")
    sccs.add_argument("graph", type=Path, help="YAML graph description.")
    sccs.add_argument("--entry", help="Entry node (defaults to the description's entry or first node).")
    sccs.add_argument("--inverse", action="store_true", help="Walk reversed edges (forward topological order).")
    sccs.add_argument("--cyclic-only", action="store_true", help="Only print components that contain a cycle.")
    sccs.add_argument("--json", help="Write JSON to this path ('-' for stdout).")
    sccs.set_defaults(func=command_sccs)

    validate = subparsers.add_parser("validate", help="Check SCC ordering and membership against networkx.")
    validate.add_argument("graph", type=Path, help="YAML graph description.")
    validate.add_argument("--entry", help="Entry node (defaults to the description's entry or first node).")
    validate.set_defaults(func=command_validate)

    return parser


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper()))
    try:
        args.func(args)
    except (ValueError, KeyError, InvariantViolation) as exc:
        parser.error(str(exc))


if __name__ == "__main__":  # pragma: no cover - manual invocation path
    main()
