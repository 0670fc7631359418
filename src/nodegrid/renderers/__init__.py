"""Output renderers."""

from nodegrid.renderers.json_output import render_analysis, render_document, render_positions

__all__ = [
    "render_analysis",
    "render_document",
    "render_positions",
]
