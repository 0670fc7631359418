"""nodegrid: automatic layered layout for node-graph canvases."""

from nodegrid.analysis import LayoutAnalysis, analyze
from nodegrid.config import LayoutConfig
from nodegrid.errors import CycleError, DocumentError, LayoutError
from nodegrid.ir.graph import EdgeData, GraphIR, NodeData, Slot
from nodegrid.layout import LayoutNode, LayoutResult, layout_graph
from nodegrid.parsers import GraphDocument, parse
from nodegrid.types import NodeKind, Position


def layout_document(src: str, config: LayoutConfig | None = None) -> tuple[GraphDocument, LayoutResult]:
    """Parse a JSON graph document and lay it out.

    Args:
        src: JSON document text.
        config: Layout options; defaults to ``LayoutConfig()``.

    Returns:
        The parsed document and the layout result.

    Raises:
        DocumentError: If the document is not valid.
        ValueError: If the configured engine is unknown.
    """
    document, gir = parse(src)
    return document, layout_graph(gir, config)


__all__ = [
    "CycleError",
    "DocumentError",
    "EdgeData",
    "GraphDocument",
    "GraphIR",
    "LayoutAnalysis",
    "LayoutConfig",
    "LayoutError",
    "LayoutNode",
    "LayoutResult",
    "NodeData",
    "NodeKind",
    "Position",
    "Slot",
    "analyze",
    "layout_document",
    "layout_graph",
    "parse",
]
