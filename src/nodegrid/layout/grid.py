"""Depth-grid layout engine.

Places every node in a fixed-size grid cell: the column is its longest path
from a source, the row its rank by id among nodes of the same depth.
Ignores node sizes and crossings; useful as a quick tidy.
"""

from __future__ import annotations

from collections.abc import Hashable

import networkx as nx

from nodegrid.config import LayoutConfig
from nodegrid.ir.graph import GraphIR
from nodegrid.layout.coordinates import resolve_sizes
from nodegrid.layout.islands import compose_result, decompose_islands
from nodegrid.layout.sugiyama import remove_cycles
from nodegrid.layout.types import LayoutResult
from nodegrid.types import Position


def longest_path_depths(graph: nx.DiGraph) -> dict[Hashable, int]:
    """Longest path from any source to each node, in input order.

    Cycles are broken with greedy-FAS first, so this never fails.
    """
    dag, _ = remove_cycles(graph)
    depths: dict[Hashable, int] = {}
    for node in nx.topological_sort(dag):
        depths[node] = max((depths[p] + 1 for p in dag.predecessors(node)), default=0)
    return {node: depths[node] for node in graph.nodes}


def _id_order(node: Hashable) -> tuple[bool, object]:
    # numbers before strings; mixed id types never compare directly
    if isinstance(node, (int, float)) and not isinstance(node, bool):
        return (False, node)
    return (True, str(node))


class GridLayout:
    """Fixed-pitch depth grid layout engine."""

    name = "grid"

    def layout(self, gir: GraphIR, config: LayoutConfig) -> LayoutResult:
        graph = gir.digraph
        depths = longest_path_depths(graph)
        sizes = resolve_sizes(graph, config.default_width, config.default_height)

        island_positions: list[dict[Hashable, Position]] = []
        cells: dict[Hashable, tuple[int, int]] = {}
        for island in decompose_islands(graph):
            rows: dict[int, int] = {}
            positions: dict[Hashable, Position] = {}
            for node in sorted(island, key=_id_order):
                depth = depths[node]
                row = rows.get(depth, 0)
                rows[depth] = row + 1
                cells[node] = (depth, row)
                positions[node] = Position(depth * config.grid_column_width, row * config.grid_row_height)
            island_positions.append(positions)

        return compose_result(graph, island_positions, cells, sizes, config.grid_island_spacing, [])
