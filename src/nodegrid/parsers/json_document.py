"""JSON graph document parser."""

from __future__ import annotations

from pydantic import ValidationError

from nodegrid.errors import DocumentError
from nodegrid.ir.graph import GraphIR
from nodegrid.parsers.document import GraphDocument


class JsonDocumentParser:
    def parse(self, src: str) -> tuple[GraphDocument, GraphIR]:
        try:
            document = GraphDocument.model_validate_json(src)
        except ValidationError as exc:
            raise DocumentError(f"invalid graph document:\n{exc}") from exc
        return document, document.to_graph()
