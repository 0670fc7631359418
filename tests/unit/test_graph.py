"""Tests for nodegrid.ir.graph: GraphIR construction and degree queries."""

from nodegrid.ir.graph import EdgeData, GraphIR, NodeData, Slot
from nodegrid.types import NodeKind, Position


def _gir(*edges: tuple[str, str]) -> GraphIR:
    nodes: list[str] = []
    for src, tgt in edges:
        for node in (src, tgt):
            if node not in nodes:
                nodes.append(node)
    return GraphIR.from_lists([(n, 100, 50) for n in nodes], [(s, None, t, None) for s, t in edges])


class TestBasicConstruction:
    def test_empty_graph(self):
        gir = GraphIR()
        assert gir.node_count() == 0
        assert gir.edge_count() == 0

    def test_from_lists(self):
        gir = GraphIR.from_lists(
            [("A", 80, 40), ("B", 100, 50)],
            [("A", 0, "B", 2)],
            pivots={"A": Position(5, 5)},
        )
        assert gir.node_count() == 2
        assert gir.edge_count() == 1
        assert gir.node_data("A").width == 80
        assert gir.node_data("A").pivot == Position(5, 5)
        assert gir.node_data("B").pivot is None
        assert gir.digraph.edges["A", "B"]["data"] == EdgeData(from_slot=0, to_slot=2)

    def test_node_order_preserved(self):
        gir = GraphIR.from_lists([("C", 1, 1), ("A", 1, 1), ("B", 1, 1)], [])
        assert list(gir.digraph.nodes) == ["C", "A", "B"]

    def test_integer_ids(self):
        gir = GraphIR.from_lists([(1, 10, 10), (2, 10, 10)], [(1, None, 2, None)])
        assert list(gir.digraph.edges) == [(1, 2)]
        assert gir.node_data(2).id == 2


class TestUnknownEndpoints:
    def test_edge_to_unknown_node_skipped(self):
        gir = GraphIR.from_lists([("A", 1, 1)], [("A", None, "ghost", None)])
        assert gir.edge_count() == 0
        assert "ghost" not in gir.digraph

    def test_add_edge_reports_skip(self):
        gir = GraphIR()
        gir.add_node(NodeData(id="A"))
        assert gir.add_edge("A", "B") is False
        gir.add_node(NodeData(id="B"))
        assert gir.add_edge("A", "B") is True

    def test_default_edge_data(self):
        gir = GraphIR()
        gir.add_node(NodeData(id="A"))
        gir.add_node(NodeData(id="B"))
        gir.add_edge("A", "B")
        assert gir.digraph.edges["A", "B"]["data"] == EdgeData()


class TestDegrees:
    def test_in_out_degree(self):
        gir = _gir(("A", "B"), ("A", "C"), ("B", "C"))
        assert gir.out_degree("A") == 2
        assert gir.in_degree("C") == 2
        assert gir.in_degree("A") == 0

    def test_unknown_node_degree_zero(self):
        gir = _gir(("A", "B"))
        assert gir.in_degree("Z") == 0
        assert gir.out_degree("Z") == 0


class TestNodeData:
    def test_defaults(self):
        data = NodeData(id="A")
        assert data.kind is NodeKind.Component
        assert (data.width, data.height) == (0.0, 0.0)
        assert data.inputs == []

    def test_slot_lookup(self):
        data = NodeData(id="A", inputs=[Slot("a", -10), Slot("b", 10)])
        assert data.input_slot(1) == Slot("b", 10)
        assert data.input_slot(2) is None
        assert data.input_slot(-1) is None
        assert data.input_slot(None) is None
        assert data.output_slot(0) is None

    def test_pivots(self):
        gir = GraphIR.from_lists([("A", 1, 1), ("B", 1, 1)], [], pivots={"B": Position(1, 2)})
        assert gir.pivots() == {"A": None, "B": Position(1, 2)}
