"""Island decomposition and vertical island stacking."""

from __future__ import annotations

import logging
from collections.abc import Hashable

import networkx as nx

from nodegrid.layout.types import LayoutNode, LayoutResult
from nodegrid.types import Position

logger = logging.getLogger(__name__)


def decompose_islands(graph: nx.DiGraph) -> list[list[Hashable]]:
    """Split the graph into weakly-connected components.

    Iterative (stack-based) traversal over children and parents. Islands are
    ordered by the first appearance of any of their nodes and keep input order
    internally.
    """
    position: dict[Hashable, int] = {node: i for i, node in enumerate(graph.nodes)}
    visited: set[Hashable] = set()
    islands: list[list[Hashable]] = []

    for node in graph.nodes:
        if node in visited:
            continue
        visited.add(node)
        stack = [node]
        island: list[Hashable] = []
        while stack:
            current = stack.pop()
            island.append(current)
            for neighbor in list(graph.successors(current)) + list(graph.predecessors(current)):
                if neighbor not in visited:
                    visited.add(neighbor)
                    stack.append(neighbor)
        island.sort(key=position.__getitem__)
        islands.append(island)

    logger.debug("found %d islands", len(islands))
    return islands


def island_subgraph(graph: nx.DiGraph, island: list[Hashable]) -> nx.DiGraph:
    """Copy of the island's nodes and edges; later phases never alias the input."""
    sub: nx.DiGraph = nx.DiGraph()
    for node in island:
        sub.add_node(node, **graph.nodes[node])
    for node in island:
        for child, attrs in graph.succ[node].items():
            sub.add_edge(node, child, **attrs)
    return sub


def normalize_origin(positions: dict[Hashable, Position], x: bool = True, y: bool = True) -> dict[Hashable, Position]:
    """Translate positions so the minimum x and/or y become zero."""
    if not positions:
        return {}
    dx = -min(p.x for p in positions.values()) if x else 0.0
    dy = -min(p.y for p in positions.values()) if y else 0.0
    return {node: p.translated(dx, dy) for node, p in positions.items()}


def stack_islands(
    island_positions: list[dict[Hashable, Position]],
    heights: dict[Hashable, float],
    island_spacing: float,
) -> list[dict[Hashable, Position]]:
    """Stack island layouts top to bottom.

    Each island is normalised to a minimum y of zero, then offset below the
    lowest bottom edge of the previous island plus ``island_spacing``.
    """
    stacked: list[dict[Hashable, Position]] = []
    offset = 0.0
    for positions in island_positions:
        if not positions:
            stacked.append({})
            continue
        placed = {node: p.translated(0.0, offset) for node, p in normalize_origin(positions, x=False).items()}
        stacked.append(placed)
        bottom = max(p.y + heights[node] for node, p in placed.items())
        offset = bottom + island_spacing
    return stacked


def compose_result(
    graph: nx.DiGraph,
    island_positions: list[dict[Hashable, Position]],
    cells: dict[Hashable, tuple[int, int]],
    sizes: dict[Hashable, tuple[float, float]],
    island_spacing: float,
    warnings: list[str],
) -> LayoutResult:
    """Stack per-island layouts and build the result, in input node order."""
    heights = {node: size[1] for node, size in sizes.items()}
    stacked = stack_islands(island_positions, heights, island_spacing)

    merged: dict[Hashable, Position] = {}
    island_of: dict[Hashable, int] = {}
    for index, positions in enumerate(stacked):
        merged.update(positions)
        island_of.update(dict.fromkeys(positions, index))

    positions = {node: merged[node] for node in graph.nodes if node in merged}
    nodes = [
        LayoutNode(
            id=node,
            island=island_of[node],
            column=cells[node][0],
            row=cells[node][1],
            x=pos.x,
            y=pos.y,
            width=sizes[node][0],
            height=sizes[node][1],
        )
        for node, pos in positions.items()
    ]
    return LayoutResult(positions=positions, nodes=nodes, island_count=len(stacked), warnings=warnings)
