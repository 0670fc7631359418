"""Layout engine registry and entry point."""

from __future__ import annotations

import logging

from nodegrid.config import LayoutConfig
from nodegrid.ir.graph import GraphIR
from nodegrid.layout.base import LayoutEngine
from nodegrid.layout.grid import GridLayout
from nodegrid.layout.islands import decompose_islands, normalize_origin
from nodegrid.layout.sugiyama import SugiyamaLayout
from nodegrid.layout.types import LayoutResult

logger = logging.getLogger(__name__)

_ENGINES: dict[str, type[LayoutEngine]] = {
    "sugiyama": SugiyamaLayout,
    "grid": GridLayout,
}


def engine_names() -> list[str]:
    return list(_ENGINES)


def get_engine(name: str) -> LayoutEngine:
    engine_cls = _ENGINES.get(name)
    if engine_cls is None:
        raise ValueError(f"Unknown layout engine '{name}'; use one of: {', '.join(_ENGINES)}")
    return engine_cls()


def is_prepositioned(gir: GraphIR) -> bool:
    """True when every node carries a non-empty position hint."""
    pivots = gir.pivots()
    return bool(pivots) and all(p is not None and not p.is_empty for p in pivots.values())


def layout_graph(gir: GraphIR, config: LayoutConfig | None = None) -> LayoutResult:
    """Compute positions for every node of ``gir``.

    Unless ``config.force`` is set, a graph whose nodes all already have
    positions is not laid out again: its positions are only translated so the
    minimum x and y become zero.

    Raises:
        ValueError: If ``config.engine`` names no registered engine.
    """
    config = config or LayoutConfig()
    engine = get_engine(config.engine)

    if gir.node_count() == 0:
        return LayoutResult(positions={})

    if not config.force and is_prepositioned(gir):
        logger.debug("all %d nodes already positioned; normalising origin only", gir.node_count())
        return LayoutResult(
            positions=normalize_origin(gir.pivots()),
            island_count=len(decompose_islands(gir.digraph)),
            recomputed=False,
        )

    logger.debug("running %s layout on %d nodes, %d edges", engine.name, gir.node_count(), gir.edge_count())
    return engine.layout(gir, config)
