"""Sugiyama-style layered graph layout engine.

Phases (per island):
  1. Layer assignment (longest path to a sink, inverted so sources sit left)
  2. Edge concentration (bundling nodes between adjacent columns)
  3. Row assignment (barycenter, forward then backward)
  4. Crossing minimization (median sweeps to a fixed point)
  5. Spacing, column shift, alignment, collision resolution
  6. Island stacking
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable

import networkx as nx

from nodegrid.config import LayoutConfig
from nodegrid.errors import CycleError
from nodegrid.ir.graph import EdgeData, GraphIR
from nodegrid.layout.coordinates import (
    align_columns,
    align_params_to_inputs,
    align_single_child,
    apply_spacing,
    resolve_collisions,
    resolve_sizes,
)
from nodegrid.layout.islands import compose_result, decompose_islands, island_subgraph
from nodegrid.layout.types import BundleNode, LayoutResult, edge_data, is_bundle
from nodegrid.types import Position

logger = logging.getLogger(__name__)

MIN_SWEEPS: int = 8

# Sorts nodes without positioned neighbours after every real row.
_UNPLACED: float = float("inf")

_SortKey = Callable[[list[Hashable], dict[Hashable, int]], float]


# ─── Cycle Removal (Greedy-FAS) ─────────────────────────────────────────────


def greedy_fas_ordering(graph: nx.DiGraph) -> list[Hashable]:
    """Compute a node ordering using the greedy-FAS heuristic.

    Sinks are peeled to the right, sources to the left; when only cycles
    remain, the node with the largest out/in degree surplus goes left.
    """
    # dict as an insertion-ordered set keeps the ordering deterministic
    active: dict[Hashable, None] = dict.fromkeys(graph.nodes)
    out_deg: dict[Hashable, int] = {node: graph.out_degree(node) for node in graph.nodes}
    in_deg: dict[Hashable, int] = {node: graph.in_degree(node) for node in graph.nodes}
    left: list[Hashable] = []
    right: list[Hashable] = []

    def take(node: Hashable) -> None:
        del active[node]
        for succ in graph.successors(node):
            if succ in active:
                in_deg[succ] -= 1
        for pred in graph.predecessors(node):
            if pred in active:
                out_deg[pred] -= 1

    while active:
        sinks = [n for n in active if out_deg[n] == 0]
        while sinks:
            for sink in sinks:
                take(sink)
                right.append(sink)
            sinks = [n for n in active if out_deg[n] == 0]

        sources = [n for n in active if in_deg[n] == 0]
        while sources:
            for source in sources:
                take(source)
                left.append(source)
            sources = [n for n in active if in_deg[n] == 0]

        if active:
            best = max(active, key=lambda n: out_deg[n] - in_deg[n])
            take(best)
            left.append(best)

    return left + right[::-1]


def remove_cycles(graph: nx.DiGraph) -> tuple[nx.DiGraph, set[tuple[Hashable, Hashable]]]:
    """Break cycles using greedy-FAS. Returns (dag, reversed_edges).

    Reversed edges lose their slot indices; self-loops are dropped.
    """
    if graph.number_of_nodes() == 0:
        return graph.copy(), set()

    ordering = greedy_fas_ordering(graph)
    position: dict[Hashable, int] = {node: pos for pos, node in enumerate(ordering)}

    reversed_edges: set[tuple[Hashable, Hashable]] = set()
    for src, tgt in graph.edges():
        if src == tgt or position[src] > position[tgt]:
            reversed_edges.add((src, tgt))

    new_graph: nx.DiGraph = nx.DiGraph()
    for node_id in graph.nodes:
        new_graph.add_node(node_id, **graph.nodes[node_id])

    for src, tgt, edge_attrs in graph.edges(data=True):
        if src == tgt:
            continue
        if (src, tgt) in reversed_edges:
            if not new_graph.has_edge(tgt, src):
                new_graph.add_edge(tgt, src, data=EdgeData())
        else:
            new_graph.add_edge(src, tgt, **edge_attrs)

    return new_graph, reversed_edges


# ─── Layer Assignment ────────────────────────────────────────────────────────


def compute_depths(graph: nx.DiGraph) -> dict[Hashable, int]:
    """Longest path from each node to a sink (sinks are 0).

    Explicit-stack DFS with memoisation. Raises CycleError when a child is
    reached while still on the stack.
    """
    depths: dict[Hashable, int] = {}
    on_stack: set[Hashable] = set()

    for root in graph.nodes:
        if root in depths:
            continue
        on_stack.add(root)
        stack = [(root, iter(graph.successors(root)))]
        while stack:
            node, children = stack[-1]
            for child in children:
                if child in on_stack:
                    raise CycleError(child)
                if child not in depths:
                    on_stack.add(child)
                    stack.append((child, iter(graph.successors(child))))
                    break
            else:
                stack.pop()
                on_stack.discard(node)
                depths[node] = 1 + max((depths[c] for c in graph.successors(node)), default=-1)

    return depths


def assign_layers(graph: nx.DiGraph) -> dict[Hashable, int]:
    """Column of every node: sources at 0 (left), sinks at the maximum depth."""
    depths = compute_depths(graph)
    max_depth = max(depths.values(), default=0)
    return {node: max_depth - depths[node] for node in graph.nodes}


# ─── Edge Concentration ──────────────────────────────────────────────────────


def concentrate_edges(
    graph: nx.DiGraph, columns: dict[Hashable, int]
) -> tuple[nx.DiGraph, dict[Hashable, float]]:
    """Bundle many-to-many edge groups between adjacent columns.

    Nodes of a column that share the exact same (2+) targets in the next
    column, with 2+ such nodes, are rerouted through one BundleNode placed at
    the half column. Works on a copy; ``graph`` is left untouched.
    """
    work = graph.copy()
    work_columns: dict[Hashable, float] = {node: float(col) for node, col in columns.items()}
    by_column: dict[int, list[Hashable]] = {}
    for node in graph.nodes:
        by_column.setdefault(columns[node], []).append(node)

    values = sorted(by_column)
    bundle_count = 0
    for left_value, right_value in zip(values, values[1:]):
        right = set(by_column[right_value])
        groups: dict[frozenset, tuple[list[Hashable], list[Hashable]]] = {}
        for node in by_column[left_value]:
            targets = [child for child in work.successors(node) if child in right]
            key = frozenset(targets)
            if key not in groups:
                groups[key] = ([], targets)
            groups[key][0].append(node)

        for sources, targets in groups.values():
            if len(sources) < 2 or len(targets) < 2:
                continue
            bundle = BundleNode(bundle_count)
            bundle_count += 1
            work.add_node(bundle, data=bundle)
            work_columns[bundle] = left_value + 0.5
            for src in sources:
                for tgt in targets:
                    work.remove_edge(src, tgt)
                work.add_edge(src, bundle, data=EdgeData())
            for tgt in targets:
                work.add_edge(bundle, tgt, data=EdgeData())
            logger.debug("bundled %d sources into %d targets via %r", len(sources), len(targets), bundle)

    return work, work_columns


# ─── Row Assignment ──────────────────────────────────────────────────────────


def _group_columns(graph: nx.DiGraph, columns: dict[Hashable, float]) -> list[list[Hashable]]:
    by_value: dict[float, list[Hashable]] = {}
    for node in graph.nodes:
        by_value.setdefault(columns[node], []).append(node)
    return [by_value[value] for value in sorted(by_value)]


def _barycenter(neighbors: list[Hashable], rows: dict[Hashable, int]) -> float:
    positions = [rows[nb] for nb in neighbors if nb in rows]
    if not positions:
        return _UNPLACED
    return sum(positions) / len(positions)


def _median(neighbors: list[Hashable], rows: dict[Hashable, int]) -> float:
    positions = sorted(rows[nb] for nb in neighbors if nb in rows)
    if not positions:
        return _UNPLACED
    mid = len(positions) // 2
    if len(positions) % 2 == 1:
        return float(positions[mid])
    return (positions[mid - 1] + positions[mid]) / 2


def _mean_output_slot(graph: nx.DiGraph, node: Hashable) -> float:
    slots = []
    for child in graph.successors(node):
        slot = edge_data(graph, node, child).from_slot
        slots.append(slot if slot is not None and slot >= 0 else -1)
    if not slots:
        return _UNPLACED
    return sum(slots) / len(slots)


def _rows_of(layer: list[Hashable]) -> dict[Hashable, int]:
    return {node: i for i, node in enumerate(layer)}


def _is_bundle_layer(layer: list[Hashable]) -> bool:
    return all(is_bundle(node) for node in layer)


def _nearest_real_layer(ordering: list[list[Hashable]], idx: int, step: int) -> int | None:
    """Index of the closest layer of real nodes from ``idx`` in direction ``step``."""
    idx += step
    while 0 <= idx < len(ordering):
        if not _is_bundle_layer(ordering[idx]):
            return idx
        idx += step
    return None


def _parents(graph: nx.DiGraph, node: Hashable) -> list[Hashable]:
    """Predecessors, with a bundling node replaced by its own sources."""
    parents: list[Hashable] = []
    for pred in graph.predecessors(node):
        if is_bundle(pred):
            parents.extend(graph.predecessors(pred))
        else:
            parents.append(pred)
    return parents


def _children(graph: nx.DiGraph, node: Hashable) -> list[Hashable]:
    """Successors, with a bundling node replaced by its own targets."""
    children: list[Hashable] = []
    for succ in graph.successors(node):
        if is_bundle(succ):
            children.extend(graph.successors(succ))
        else:
            children.append(succ)
    return children


def _sort_forward(graph: nx.DiGraph, ordering: list[list[Hashable]], key: _SortKey) -> None:
    for idx in range(1, len(ordering)):
        prev_idx = _nearest_real_layer(ordering, idx, -1)
        if prev_idx is None:
            continue
        prev = _rows_of(ordering[prev_idx])
        ordering[idx].sort(key=lambda n, p=prev: key(_parents(graph, n), p))


def _sort_backward(graph: nx.DiGraph, ordering: list[list[Hashable]], key: _SortKey) -> None:
    for idx in range(len(ordering) - 2, -1, -1):
        next_idx = _nearest_real_layer(ordering, idx, 1)
        if next_idx is None:
            continue
        nxt = _rows_of(ordering[next_idx])
        ordering[idx].sort(key=lambda n, s=nxt: key(_children(graph, n), s))


def order_rows(graph: nx.DiGraph, columns: dict[Hashable, float]) -> list[list[Hashable]]:
    """Initial row order per column.

    The first column is ordered by the mean output-slot index of its wires;
    every later column by the barycenter of its parents in the previous one.
    A backward pass then reorders each column by its children in the next one.

    Bundling nodes keep a layer of their own at the half column, but neighbour
    rows are always read from the nearest column of real nodes: a wire routed
    through a bundle counts as a wire to the bundle's sources or targets.
    """
    ordering = _group_columns(graph, columns)
    if not ordering:
        return ordering

    ordering[0].sort(key=lambda n: _mean_output_slot(graph, n))
    _sort_forward(graph, ordering, _barycenter)
    _sort_backward(graph, ordering, _barycenter)
    return ordering


# ─── Crossing Minimization ───────────────────────────────────────────────────


def _median_sweep(graph: nx.DiGraph, ordering: list[list[Hashable]]) -> None:
    _sort_forward(graph, ordering, _median)
    _sort_backward(graph, ordering, _median)


def minimise_crossings(
    graph: nx.DiGraph, ordering: list[list[Hashable]], max_sweeps: int
) -> tuple[list[list[Hashable]], bool]:
    """Alternate median sweeps until a sweep changes no row.

    Returns (ordering, converged). When ``max_sweeps`` is exhausted the
    ordering with the fewest crossings seen is returned instead.
    """
    current = [list(layer) for layer in ordering]
    best = [list(layer) for layer in current]
    best_crossings = count_crossings(current, graph)

    for sweep in range(max_sweeps):
        before = [list(layer) for layer in current]
        _median_sweep(graph, current)
        if current == before:
            logger.debug("crossing minimisation converged after %d sweeps", sweep + 1)
            return current, True
        crossings = count_crossings(current, graph)
        if crossings < best_crossings:
            best = [list(layer) for layer in current]
            best_crossings = crossings

    logger.warning("crossing minimisation did not converge in %d sweeps", max_sweeps)
    return best, False


def count_crossings(ordering: list[list[Hashable]], graph: nx.DiGraph) -> int:
    """Pairwise edge inversions between every pair of adjacent real columns.

    Bundle layers are skipped; a wire through a bundling node is counted as
    one wire from each of its sources to each of its targets.
    """
    real = [layer for layer in ordering if not _is_bundle_layer(layer)]
    total = 0
    for upper, lower in zip(real, real[1:]):
        lower_rows = _rows_of(lower)
        segments = [
            (row, lower_rows[child])
            for row, node in enumerate(upper)
            if node in graph
            for child in _children(graph, node)
            if child in lower_rows
        ]
        for i, (src_a, tgt_a) in enumerate(segments):
            for src_b, tgt_b in segments[i + 1 :]:
                if (src_a - src_b) * (tgt_a - tgt_b) < 0:
                    total += 1
    return total


def real_cells(ordering: list[list[Hashable]], columns: dict[Hashable, int]) -> dict[Hashable, tuple[int, int]]:
    """(column, row) of every real node; bundling nodes are dropped here."""
    cells: dict[Hashable, tuple[int, int]] = {}
    for layer in ordering:
        row = 0
        for node in layer:
            if is_bundle(node):
                continue
            cells[node] = (columns[node], row)
            row += 1
    return cells


# ─── SugiyamaLayout Engine ───────────────────────────────────────────────────


class SugiyamaLayout:
    """Sugiyama layered layout engine."""

    name = "sugiyama"

    def layout(self, gir: GraphIR, config: LayoutConfig) -> LayoutResult:
        graph = gir.digraph
        warnings: list[str] = []
        sizes = resolve_sizes(graph, config.default_width, config.default_height)

        islands = decompose_islands(graph)
        island_positions: list[dict[Hashable, Position]] = []
        cells: dict[Hashable, tuple[int, int]] = {}
        for index, island in enumerate(islands):
            logger.debug("laying out island %d (%d nodes)", index, len(island))
            positions, island_cells = self.layout_island(island_subgraph(graph, island), config, sizes, warnings)
            island_positions.append(positions)
            cells.update(island_cells)

        return compose_result(graph, island_positions, cells, sizes, config.island_spacing, warnings)

    def layout_island(
        self,
        sub: nx.DiGraph,
        config: LayoutConfig,
        sizes: dict[Hashable, tuple[float, float]],
        warnings: list[str],
    ) -> tuple[dict[Hashable, Position], dict[Hashable, tuple[int, int]]]:
        try:
            columns = assign_layers(sub)
            dag = sub
        except CycleError as exc:
            message = f"{exc}; reversing back-edges to continue"
            logger.warning(message)
            warnings.append(message)
            dag, _ = remove_cycles(sub)
            columns = assign_layers(dag)

        work, work_columns = concentrate_edges(dag, columns)
        ordering = order_rows(work, work_columns)
        max_sweeps = max(MIN_SWEEPS, config.sweep_limit_factor * work.number_of_nodes())
        ordering, converged = minimise_crossings(work, ordering, max_sweeps)
        if not converged:
            warnings.append(f"crossing minimisation stopped after {max_sweeps} sweeps")

        cells = real_cells(ordering, columns)
        positions = apply_spacing(cells, sizes, config.spacing_x, config.spacing_y)
        if config.align_columns:
            positions = align_columns(positions, columns, dag)
        positions = align_single_child(positions, dag, sizes)
        positions = align_params_to_inputs(positions, columns, dag, sizes)
        positions = resolve_collisions(positions, columns, sizes)
        return positions, cells
