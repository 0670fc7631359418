"""JSON output for layout results, documents and analyses."""

from __future__ import annotations

import json
from typing import Any

from nodegrid.analysis import LayoutAnalysis
from nodegrid.layout.types import LayoutResult
from nodegrid.parsers.document import GraphDocument


def _dumps(data: Any) -> str:
    return json.dumps(data, indent=2) + "\n"


def render_positions(result: LayoutResult) -> str:
    """``{"positions": {id: "x,y"}, "warnings": [...]}``."""
    return _dumps(
        {
            "positions": {str(node): str(pos) for node, pos in result.positions.items()},
            "warnings": list(result.warnings),
        }
    )


def render_document(document: GraphDocument, result: LayoutResult) -> str:
    """The input document with every laid-out component's pivot replaced."""
    data = document.model_dump(mode="json", by_alias=True, exclude_none=True)
    for component in data.get("components", []):
        pos = result.positions.get(component["id"])
        if pos is not None:
            component["pivot"] = str(pos)
    return _dumps(data)


def render_analysis(analysis: LayoutAnalysis) -> str:
    return _dumps(
        {
            "sourceNodes": analysis.source_nodes,
            "sinkNodes": analysis.sink_nodes,
            "nodeDepths": {str(node): depth for node, depth in analysis.node_depths.items()},
            "depthLevels": {str(depth): nodes for depth, nodes in analysis.depth_levels.items()},
            "islands": analysis.islands,
            "maxDepth": analysis.max_depth,
            "averageConnectionsPerNode": analysis.average_connections_per_node,
        }
    )
