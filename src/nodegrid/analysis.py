"""Structural analysis of a graph: sources, sinks, depths and islands."""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass, field

from nodegrid.ir.graph import GraphIR
from nodegrid.layout.grid import longest_path_depths
from nodegrid.layout.islands import decompose_islands


@dataclass
class LayoutAnalysis:
    source_nodes: list[Hashable] = field(default_factory=list)
    sink_nodes: list[Hashable] = field(default_factory=list)
    node_depths: dict[Hashable, int] = field(default_factory=dict)
    depth_levels: dict[int, list[Hashable]] = field(default_factory=dict)
    islands: list[list[Hashable]] = field(default_factory=list)
    max_depth: int = 0
    average_connections_per_node: float = 0.0


def analyze(gir: GraphIR) -> LayoutAnalysis:
    """Summarise the graph's structure; depths are measured from the sources."""
    graph = gir.digraph
    if gir.node_count() == 0:
        return LayoutAnalysis()

    depths = longest_path_depths(graph)
    levels: dict[int, list[Hashable]] = {}
    for node, depth in depths.items():
        levels.setdefault(depth, []).append(node)

    return LayoutAnalysis(
        source_nodes=[n for n in graph.nodes if gir.in_degree(n) == 0],
        sink_nodes=[n for n in graph.nodes if gir.out_degree(n) == 0],
        node_depths=depths,
        depth_levels={depth: levels[depth] for depth in sorted(levels)},
        islands=decompose_islands(graph),
        max_depth=max(depths.values()),
        average_connections_per_node=gir.edge_count() / gir.node_count(),
    )
