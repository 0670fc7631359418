"""Coordinate assignment and post-processing passes.

All functions take a position map and return a new one; column and row
assignments are never changed here.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable

import networkx as nx

from nodegrid.layout.types import edge_data, is_bundle, node_data
from nodegrid.types import NodeKind, Position

logger = logging.getLogger(__name__)


def resolve_sizes(
    graph: nx.DiGraph, default_width: float, default_height: float
) -> dict[Hashable, tuple[float, float]]:
    """(width, height) of every real node, falling back to the defaults."""
    sizes: dict[Hashable, tuple[float, float]] = {}
    for node in graph.nodes:
        if is_bundle(node):
            continue
        data = node_data(graph, node)
        width = data.width if data.width > 0 else default_width
        height = data.height if data.height > 0 else default_height
        sizes[node] = (width, height)
    return sizes


def _group_by_column(positions: dict[Hashable, Position], columns: dict[Hashable, int]) -> list[list[Hashable]]:
    by_column: dict[int, list[Hashable]] = {}
    for node in positions:
        by_column.setdefault(columns[node], []).append(node)
    return [by_column[col] for col in sorted(by_column)]


# ─── Spacing ─────────────────────────────────────────────────────────────────


def apply_spacing(
    cells: dict[Hashable, tuple[int, int]],
    sizes: dict[Hashable, tuple[float, float]],
    spacing_x: float,
    spacing_y: float,
) -> dict[Hashable, Position]:
    """Turn integer (column, row) cells into canvas coordinates.

    Column x offsets are the running sum of the widest node per column plus
    ``spacing_x``; row y offsets likewise use the tallest node per row.
    """
    col_width: dict[int, float] = {}
    row_height: dict[int, float] = {}
    for node, (col, row) in cells.items():
        width, height = sizes[node]
        col_width[col] = max(col_width.get(col, 0.0), width)
        row_height[row] = max(row_height.get(row, 0.0), height)

    col_x: dict[int, float] = {}
    x = 0.0
    for col in sorted(col_width):
        col_x[col] = x
        x += col_width[col] + spacing_x

    row_y: dict[int, float] = {}
    y = 0.0
    for row in sorted(row_height):
        row_y[row] = y
        y += row_height[row] + spacing_y

    return {node: Position(col_x[col], row_y[row]) for node, (col, row) in cells.items()}


# ─── Alignment ───────────────────────────────────────────────────────────────


def align_columns(
    positions: dict[Hashable, Position], columns: dict[Hashable, int], graph: nx.DiGraph
) -> dict[Hashable, Position]:
    """Shift each column by the mean vertical offset of the wires entering it
    from the column on its left."""
    result = dict(positions)
    grouped = _group_by_column(result, columns)
    for left, right in zip(grouped, grouped[1:]):
        right_col = columns[right[0]]
        deltas = [
            result[u].y - result[v].y
            for u in left
            for v in graph.successors(u)
            if v in result and columns[v] == right_col
        ]
        if not deltas:
            continue
        shift = sum(deltas) / len(deltas)
        for v in right:
            result[v] = result[v].translated(0.0, shift)
    return result


def align_single_child(
    positions: dict[Hashable, Position],
    graph: nx.DiGraph,
    sizes: dict[Hashable, tuple[float, float]],
) -> dict[Hashable, Position]:
    """Line up single-child nodes with the input slot they feed.

    Needs slot geometry on the child; nodes without it are left alone.
    """
    result = dict(positions)
    for node in positions:
        if graph.out_degree(node) != 1:
            continue
        child = next(iter(graph.successors(node)))
        if child not in result:
            continue
        edge = edge_data(graph, node, child)
        slot = node_data(graph, child).input_slot(edge.to_slot)
        if slot is None:
            continue
        out_slot = node_data(graph, node).output_slot(edge.from_slot)
        out_offset = out_slot.offset_y if out_slot is not None else 0.0
        target = result[child].y + sizes[child][1] / 2 + slot.offset_y - out_offset
        result[node] = Position(result[node].x, target - sizes[node][1] / 2)
        logger.debug("aligned %r to input %d of %r", node, edge.to_slot, child)
    return result


def align_params_to_inputs(
    positions: dict[Hashable, Position],
    columns: dict[Hashable, int],
    graph: nx.DiGraph,
    sizes: dict[Hashable, tuple[float, float]],
) -> dict[Hashable, Position]:
    """Align Param parents to the inputs of a Component child.

    Applies when every input of the child is fed by exactly one Param in the
    previous column, so the wires come out straight and parallel.
    """
    result = dict(positions)
    grouped = _group_by_column(result, columns)
    for prev_col, col in zip(grouped, grouped[1:]):
        prev = set(prev_col)
        for child in col:
            parents = [p for p in graph.predecessors(child) if p in prev]
            child_data = node_data(graph, child)
            if len(parents) < 2 or child_data.kind is not NodeKind.Component:
                continue
            if len(child_data.inputs) != len(parents):
                continue
            if not all(node_data(graph, p).kind is NodeKind.Param for p in parents):
                continue

            child_center = result[child].y + sizes[child][1] / 2
            slot_of = {p: edge_data(graph, p, child).to_slot for p in parents}
            for parent in sorted(parents, key=lambda p: -1 if slot_of[p] is None else slot_of[p]):
                slot = child_data.input_slot(slot_of[parent])
                if slot is None:
                    continue
                result[parent] = Position(result[parent].x, child_center + slot.offset_y - sizes[parent][1] / 2)
    return result


# ─── Collision Resolution ────────────────────────────────────────────────────


def resolve_collisions(
    positions: dict[Hashable, Position],
    columns: dict[Hashable, int],
    sizes: dict[Hashable, tuple[float, float]],
) -> dict[Hashable, Position]:
    """Push nodes down so no two nodes in a column overlap vertically."""
    result = dict(positions)
    for column in _group_by_column(result, columns):
        last_bottom = float("-inf")
        for node in sorted(column, key=lambda n: result[n].y):
            if result[node].y < last_bottom:
                result[node] = Position(result[node].x, last_bottom)
            last_bottom = result[node].y + sizes[node][1]
    return result
