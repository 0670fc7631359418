"""Base parser protocol."""

from __future__ import annotations

from typing import Protocol

from nodegrid.ir.graph import GraphIR
from nodegrid.parsers.document import GraphDocument


class Parser(Protocol):
    """Protocol that all document parsers must implement."""

    def parse(self, src: str) -> tuple[GraphDocument, GraphIR]:
        """Parse source text into a document and its layout IR."""
        ...
