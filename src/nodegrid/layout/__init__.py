"""Layout engines and public layout API."""

from __future__ import annotations

from nodegrid.layout.coordinates import (
    align_columns,
    align_params_to_inputs,
    align_single_child,
    apply_spacing,
    resolve_collisions,
    resolve_sizes,
)
from nodegrid.layout.engine import engine_names, get_engine, is_prepositioned, layout_graph
from nodegrid.layout.grid import GridLayout, longest_path_depths
from nodegrid.layout.islands import (
    compose_result,
    decompose_islands,
    island_subgraph,
    normalize_origin,
    stack_islands,
)
from nodegrid.layout.sugiyama import (
    MIN_SWEEPS,
    SugiyamaLayout,
    assign_layers,
    compute_depths,
    concentrate_edges,
    count_crossings,
    greedy_fas_ordering,
    minimise_crossings,
    order_rows,
    real_cells,
    remove_cycles,
)
from nodegrid.layout.types import BundleNode, LayoutNode, LayoutResult, is_bundle, vertex

__all__ = [
    "MIN_SWEEPS",
    "BundleNode",
    "GridLayout",
    "LayoutNode",
    "LayoutResult",
    "SugiyamaLayout",
    "align_columns",
    "align_params_to_inputs",
    "align_single_child",
    "apply_spacing",
    "assign_layers",
    "compose_result",
    "compute_depths",
    "concentrate_edges",
    "count_crossings",
    "decompose_islands",
    "engine_names",
    "get_engine",
    "greedy_fas_ordering",
    "is_bundle",
    "is_prepositioned",
    "island_subgraph",
    "layout_graph",
    "longest_path_depths",
    "minimise_crossings",
    "normalize_origin",
    "order_rows",
    "real_cells",
    "remove_cycles",
    "resolve_collisions",
    "resolve_sizes",
    "stack_islands",
    "vertex",
]
