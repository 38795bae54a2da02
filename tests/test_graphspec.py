from pathlib import Path

import pytest

from scciter.core.scc import strongly_connected_components
from scciter.dsl import GraphSpec, build_graph_from_spec, dump_graph_spec, load_graph_spec, parse_graph_spec

CYCLE_YAML = """
graph:
  name: cycle-plus-pendant
  entry: D
  edges:
    - [A, B]
    - {source: B, target: C}
    - [C, A]
    - [D, A]
"""


def test_load_and_build(tmp_path: Path):
    path = tmp_path / "graph.yaml"
    path.write_text(CYCLE_YAML)
    spec = load_graph_spec(path)
    assert spec.name == "cycle-plus-pendant"
    assert spec.entry == "D"
    assert spec.edges[1] == ("B", "C")

    graph = build_graph_from_spec(spec)
    sccs = strongly_connected_components(graph)
    assert [frozenset(scc) for scc in sccs] == [frozenset("ABC"), frozenset("D")]


def test_entry_override_and_isolated_nodes():
    spec = parse_graph_spec({"nodes": ["solo"], "edges": [[1, 2]], "entry": 1})
    assert spec.name == "graph"
    graph = build_graph_from_spec(spec, entry="solo")
    assert strongly_connected_components(graph) == [("solo",)]


def test_dump_round_trip(tmp_path: Path):
    spec = GraphSpec(name="demo", edges=[("a", "b"), ("b", "a")], nodes=["a", "b", "c"], entry="b")
    path = tmp_path / "demo.yaml"
    dump_graph_spec(spec, path)
    assert load_graph_spec(path) == spec


@pytest.mark.parametrize("edge", [["a"], {"source": "a"}, "a->b"])
def test_malformed_edges_rejected(edge):
    with pytest.raises(ValueError):
        parse_graph_spec({"edges": [edge]})
