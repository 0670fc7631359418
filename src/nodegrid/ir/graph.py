"""Graph IR: the node/edge model consumed by the layout engines.

Wraps a networkx DiGraph whose nodes carry a ``data`` attribute holding a
:class:`NodeData` and whose edges carry a ``data`` attribute holding an
:class:`EdgeData`. Node insertion order is the caller's input order; every
downstream phase iterates in that order so layouts are deterministic.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Iterable, Mapping
from dataclasses import dataclass, field

import networkx as nx

from nodegrid.types import NodeKind, Position

logger = logging.getLogger(__name__)


@dataclass
class Slot:
    """A connection slot; ``offset_y`` is relative to the node's centre."""

    name: str
    offset_y: float = 0.0


@dataclass
class NodeData:
    id: Hashable
    width: float = 0.0
    height: float = 0.0
    kind: NodeKind = NodeKind.Component
    pivot: Position | None = None
    inputs: list[Slot] = field(default_factory=list)
    outputs: list[Slot] = field(default_factory=list)

    def input_slot(self, index: int | None) -> Slot | None:
        return _slot_at(self.inputs, index)

    def output_slot(self, index: int | None) -> Slot | None:
        return _slot_at(self.outputs, index)


@dataclass
class EdgeData:
    from_slot: int | None = None
    to_slot: int | None = None


def _slot_at(slots: list[Slot], index: int | None) -> Slot | None:
    if index is None or index < 0 or index >= len(slots):
        return None
    return slots[index]


class GraphIR:
    """The graph intermediate representation handed to a layout engine.

    Wraps a networkx DiGraph and exposes helpers for topology queries.
    """

    def __init__(self, digraph: nx.DiGraph | None = None) -> None:
        self.digraph = digraph if digraph is not None else nx.DiGraph()

    @classmethod
    def from_lists(
        cls,
        nodes: Iterable[tuple[Hashable, float, float]],
        edges: Iterable[tuple[Hashable, int | None, Hashable, int | None]],
        pivots: Mapping[Hashable, Position] | None = None,
    ) -> GraphIR:
        """Build a GraphIR from ``(id, width, height)`` and
        ``(from_id, from_slot, to_id, to_slot)`` tuples."""
        gir = cls()
        pivots = pivots or {}
        for node_id, width, height in nodes:
            gir.add_node(NodeData(id=node_id, width=width, height=height, pivot=pivots.get(node_id)))
        for from_id, from_slot, to_id, to_slot in edges:
            gir.add_edge(from_id, to_id, EdgeData(from_slot=from_slot, to_slot=to_slot))
        return gir

    def add_node(self, data: NodeData) -> None:
        self.digraph.add_node(data.id, data=data)

    def add_edge(self, from_id: Hashable, to_id: Hashable, data: EdgeData | None = None) -> bool:
        """Add a directed edge; edges with an unknown endpoint are skipped."""
        missing = [n for n in (from_id, to_id) if n not in self.digraph]
        if missing:
            logger.warning("skipping edge %r -> %r: unknown node(s) %r", from_id, to_id, missing)
            return False
        self.digraph.add_edge(from_id, to_id, data=data or EdgeData())
        return True

    def node_data(self, node_id: Hashable) -> NodeData:
        return self.digraph.nodes[node_id]["data"]

    def pivots(self) -> dict[Hashable, Position | None]:
        return {n: self.digraph.nodes[n]["data"].pivot for n in self.digraph.nodes}

    def node_count(self) -> int:
        return self.digraph.number_of_nodes()

    def edge_count(self) -> int:
        return self.digraph.number_of_edges()

    def in_degree(self, node_id: Hashable) -> int:
        if node_id not in self.digraph:
            return 0
        return self.digraph.in_degree(node_id)

    def out_degree(self, node_id: Hashable) -> int:
        if node_id not in self.digraph:
            return 0
        return self.digraph.out_degree(node_id)
