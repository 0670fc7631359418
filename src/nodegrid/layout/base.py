"""Base layout engine protocol."""

from __future__ import annotations

from typing import Protocol

from nodegrid.config import LayoutConfig
from nodegrid.ir.graph import GraphIR
from nodegrid.layout.types import LayoutResult


class LayoutEngine(Protocol):
    """Protocol that all layout engines must implement."""

    name: str

    def layout(self, gir: GraphIR, config: LayoutConfig) -> LayoutResult:
        """Compute a position for every node of the graph."""
        ...
