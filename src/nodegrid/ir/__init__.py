"""Intermediate representation: the graph handed to layout engines."""

from nodegrid.ir.graph import EdgeData, GraphIR, NodeData, Slot

__all__ = [
    "EdgeData",
    "GraphIR",
    "NodeData",
    "Slot",
]
