"""Graph description helpers."""

from .graphspec import GraphSpec, load_graph_spec, dump_graph_spec, parse_graph_spec, build_graph_from_spec

__all__ = ["GraphSpec", "load_graph_spec", "dump_graph_spec", "parse_graph_spec", "build_graph_from_spec"]
