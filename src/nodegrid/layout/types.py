"""Layout types shared across layout engines and renderers."""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass, field

import networkx as nx

from nodegrid.ir.graph import EdgeData, NodeData
from nodegrid.types import Position


@dataclass(frozen=True)
class BundleNode:
    """Synthetic routing node introduced by edge concentration.

    Instances are used directly as node keys in the per-island working graph,
    so they can never collide with a caller's node id.
    """

    index: int


# Working-graph node payload: a real node or a bundling node.
Vertex = NodeData | BundleNode


def is_bundle(node: Hashable) -> bool:
    return isinstance(node, BundleNode)


@dataclass
class LayoutNode:
    """A positioned real node in the layout."""

    id: Hashable
    island: int
    column: int
    row: int
    x: float
    y: float
    width: float
    height: float


@dataclass
class LayoutResult:
    """Layout output: final position of every real input node."""

    positions: dict[Hashable, Position]
    nodes: list[LayoutNode] = field(default_factory=list)
    island_count: int = 0
    recomputed: bool = True
    warnings: list[str] = field(default_factory=list)


def vertex(graph: nx.DiGraph, node: Hashable) -> Vertex:
    """The payload of a working-graph node; bare graph nodes get an empty NodeData."""
    data = graph.nodes[node].get("data")
    if isinstance(data, (NodeData, BundleNode)):
        return data
    return NodeData(id=node)


def node_data(graph: nx.DiGraph, node: Hashable) -> NodeData:
    data = vertex(graph, node)
    return data if isinstance(data, NodeData) else NodeData(id=node)


def edge_data(graph: nx.DiGraph, src: Hashable, tgt: Hashable) -> EdgeData:
    data = graph.edges[src, tgt].get("data")
    return data if isinstance(data, EdgeData) else EdgeData()
