"""Exception hierarchy for nodegrid."""

from __future__ import annotations

from collections.abc import Hashable


class LayoutError(Exception):
    """Base class for all nodegrid errors."""


class CycleError(LayoutError):
    """Raised by layer assignment when the graph is not acyclic."""

    def __init__(self, node_id: Hashable) -> None:
        super().__init__(f"cycle detected at node {node_id!r}")
        self.node_id = node_id


class DocumentError(LayoutError, ValueError):
    """Raised when a graph document cannot be parsed or validated."""
