"""Parser registry: dispatch a document format to the right parser."""

from __future__ import annotations

from nodegrid.ir.graph import GraphIR
from nodegrid.parsers.base import Parser
from nodegrid.parsers.document import ComponentModel, ConnectionModel, EndpointModel, GraphDocument, SlotModel
from nodegrid.parsers.json_document import JsonDocumentParser

_PARSERS: dict[str, type[Parser]] = {
    "json": JsonDocumentParser,
}


def parse(src: str, fmt: str = "json") -> tuple[GraphDocument, GraphIR]:
    """Parse a graph document into the document model and its layout IR.

    Raises:
        ValueError: If the format is unknown.
        DocumentError: If the document is not valid.
    """
    parser_cls = _PARSERS.get(fmt)
    if parser_cls is None:
        raise ValueError(f"Unsupported document format: {fmt}")
    return parser_cls().parse(src)


__all__ = [
    "ComponentModel",
    "ConnectionModel",
    "EndpointModel",
    "GraphDocument",
    "JsonDocumentParser",
    "Parser",
    "SlotModel",
    "parse",
]
