"""JSON graph document schema.

A document lists ``components`` (id, size, kind, optional pivot and slot
geometry) and ``connections`` between component slots::

    {
      "components": [
        {"id": "a", "width": 80, "height": 40, "pivot": "10,20",
         "outputs": [{"name": "R", "offsetY": 0}]},
        {"id": "b", "kind": "component", "inputs": [{"name": "A", "offsetY": -8}]}
      ],
      "connections": [
        {"from": {"id": "a", "paramName": "R"}, "to": {"id": "b", "paramIndex": 0}}
      ]
    }

Unknown fields are preserved so a document can be written back unchanged
apart from its pivots.
"""

from __future__ import annotations

import logging
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator

from nodegrid.ir.graph import EdgeData, GraphIR, NodeData, Slot
from nodegrid.types import NodeKind, Position

logger = logging.getLogger(__name__)

_KINDS: dict[str, NodeKind] = {
    "component": NodeKind.Component,
    "param": NodeKind.Param,
}


class SlotModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str = ""
    offset_y: float = Field(0.0, alias="offsetY", description="Slot centre relative to the node centre")


class EndpointModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: int | str
    param_name: str | None = Field(None, alias="paramName")
    param_index: int | None = Field(None, alias="paramIndex")

    def resolve_slot(self, slots: list[Slot]) -> int | None:
        """Slot index of this endpoint; the explicit index wins over the name."""
        if self.param_index is not None:
            return self.param_index
        if self.param_name is None:
            return None
        for index, slot in enumerate(slots):
            if slot.name == self.param_name:
                return index
        return None


class ComponentModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: int | str
    width: float = 0.0
    height: float = 0.0
    kind: Literal["component", "param"] = "component"
    pivot: Position | None = Field(None, description="Compact 'x,y' string or legacy {x, y} object")
    inputs: list[SlotModel] = Field(default_factory=list)
    outputs: list[SlotModel] = Field(default_factory=list)

    @field_validator("pivot", mode="before")
    @classmethod
    def parse_pivot(cls, v: Any) -> Any:
        """Accept ``"x,y"`` strings and legacy ``{"x": .., "y": ..}`` objects."""
        if v is None or v == "":
            return None
        if isinstance(v, str):
            return Position.parse(v)
        if isinstance(v, dict):
            try:
                return Position(float(v.get("x", v.get("X", 0.0))), float(v.get("y", v.get("Y", 0.0))))
            except (TypeError, ValueError):
                raise ValueError(f"Invalid position object: {v!r}") from None
        return v

    @field_serializer("pivot")
    def dump_pivot(self, pivot: Position | None) -> str | None:
        return None if pivot is None else str(pivot)

    def to_node_data(self) -> NodeData:
        return NodeData(
            id=self.id,
            width=self.width,
            height=self.height,
            kind=_KINDS[self.kind],
            pivot=self.pivot,
            inputs=[Slot(name=s.name, offset_y=s.offset_y) for s in self.inputs],
            outputs=[Slot(name=s.name, offset_y=s.offset_y) for s in self.outputs],
        )


class ConnectionModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    source: EndpointModel = Field(alias="from")
    target: EndpointModel = Field(alias="to")


class GraphDocument(BaseModel):
    model_config = ConfigDict(extra="allow")

    components: list[ComponentModel] = Field(default_factory=list)
    connections: list[ConnectionModel] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_unique_ids(self) -> GraphDocument:
        seen: set[int | str] = set()
        for component in self.components:
            if component.id in seen:
                raise ValueError(f"duplicate component id {component.id!r}")
            seen.add(component.id)
        return self

    def to_graph(self) -> GraphIR:
        """Build the layout IR; connections to unknown components are skipped."""
        gir = GraphIR()
        for component in self.components:
            gir.add_node(component.to_node_data())

        for conn in self.connections:
            src, tgt = conn.source.id, conn.target.id
            if src not in gir.digraph or tgt not in gir.digraph:
                gir.add_edge(src, tgt)
                continue
            edge = EdgeData(
                from_slot=conn.source.resolve_slot(gir.node_data(src).outputs),
                to_slot=conn.target.resolve_slot(gir.node_data(tgt).inputs),
            )
            gir.add_edge(src, tgt, edge)

        logger.debug("built graph with %d nodes and %d edges", gir.node_count(), gir.edge_count())
        return gir
