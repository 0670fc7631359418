"""Tests for the JSON graph document parser and the JSON renderers."""

import json

import pytest

from nodegrid.analysis import analyze
from nodegrid.errors import DocumentError
from nodegrid.ir.graph import EdgeData
from nodegrid.layout.engine import layout_graph
from nodegrid.parsers import parse
from nodegrid.renderers import render_analysis, render_document, render_positions
from nodegrid.types import NodeKind, Position


def _doc(components, connections=()) -> str:
    return json.dumps({"components": list(components), "connections": list(connections)})


def test_parse_components_and_slots():
    src = _doc(
        [
            {"id": "a", "width": 80, "height": 40, "outputs": [{"name": "R", "offsetY": 4}]},
            {"id": "b", "kind": "param", "inputs": [{"name": "A"}, {"name": "B", "offsetY": 8}]},
        ]
    )
    document, gir = parse(src)
    assert len(document.components) == 2
    a = gir.node_data("a")
    assert (a.width, a.height) == (80, 40)
    assert a.outputs[0].offset_y == 4
    b = gir.node_data("b")
    assert b.kind is NodeKind.Param
    assert [s.name for s in b.inputs] == ["A", "B"]


def test_param_name_resolved_to_slot_index():
    src = _doc(
        [
            {"id": "a", "outputs": [{"name": "X"}, {"name": "Y"}]},
            {"id": "b", "inputs": [{"name": "P"}, {"name": "Q"}]},
        ],
        [{"from": {"id": "a", "paramName": "Y"}, "to": {"id": "b", "paramName": "Q"}}],
    )
    _, gir = parse(src)
    assert gir.digraph.edges["a", "b"]["data"] == EdgeData(from_slot=1, to_slot=1)


def test_param_index_wins_over_name():
    src = _doc(
        [{"id": "a"}, {"id": "b", "inputs": [{"name": "P"}, {"name": "Q"}]}],
        [{"from": {"id": "a"}, "to": {"id": "b", "paramName": "Q", "paramIndex": 0}}],
    )
    _, gir = parse(src)
    assert gir.digraph.edges["a", "b"]["data"] == EdgeData(from_slot=None, to_slot=0)


def test_unmatched_param_name_is_unspecified():
    src = _doc(
        [{"id": "a"}, {"id": "b", "inputs": [{"name": "P"}]}],
        [{"from": {"id": "a"}, "to": {"id": "b", "paramName": "nope"}}],
    )
    _, gir = parse(src)
    assert gir.digraph.edges["a", "b"]["data"].to_slot is None


def test_compact_pivot():
    _, gir = parse(_doc([{"id": "a", "pivot": "10.5,-20"}]))
    assert gir.node_data("a").pivot == Position(10.5, -20)


def test_legacy_pivot_object():
    _, gir = parse(_doc([{"id": "a", "pivot": {"X": 10, "Y": 20}}, {"id": "b", "pivot": {"x": 1, "y": 2}}]))
    assert gir.node_data("a").pivot == Position(10, 20)
    assert gir.node_data("b").pivot == Position(1, 2)


def test_bad_pivot_rejected():
    with pytest.raises(DocumentError, match="Invalid position format"):
        parse(_doc([{"id": "a", "pivot": "10;20"}]))


def test_integer_ids():
    _, gir = parse(_doc([{"id": 1}, {"id": 2}], [{"from": {"id": 1}, "to": {"id": 2}}]))
    assert list(gir.digraph.edges) == [(1, 2)]


def test_duplicate_ids_rejected():
    with pytest.raises(DocumentError, match="duplicate component id"):
        parse(_doc([{"id": "a"}, {"id": "a"}]))


def test_invalid_json_rejected():
    with pytest.raises(DocumentError):
        parse("{not json")


def test_missing_endpoint_rejected():
    with pytest.raises(DocumentError):
        parse(_doc([{"id": "a"}], [{"from": {"id": "a"}}]))


def test_unknown_endpoint_skipped():
    _, gir = parse(_doc([{"id": "a"}], [{"from": {"id": "a"}, "to": {"id": "ghost"}}]))
    assert gir.node_count() == 1
    assert gir.edge_count() == 0


def test_unknown_format():
    with pytest.raises(ValueError, match="Unsupported document format"):
        parse("{}", fmt="yaml")


def test_empty_document():
    document, gir = parse("{}")
    assert document.components == []
    assert gir.node_count() == 0


# ─── Renderers ────────────────────────────────────────────────────────────────


def test_render_positions():
    _, gir = parse(_doc([{"id": "a"}, {"id": 7}], [{"from": {"id": "a"}, "to": {"id": 7}}]))
    rendered = json.loads(render_positions(layout_graph(gir)))
    assert rendered == {"positions": {"a": "0,0", "7": "150,0"}, "warnings": []}


def test_render_document_replaces_pivots_and_keeps_extras():
    src = _doc(
        [{"id": "a", "pivot": "500,500", "color": "red"}, {"id": "b"}],
        [{"from": {"id": "a", "paramIndex": 0}, "to": {"id": "b"}, "note": "keep"}],
    )
    document, gir = parse(src)
    rendered = json.loads(render_document(document, layout_graph(gir)))
    a, b = rendered["components"]
    assert a["pivot"] == "0,0"
    assert a["color"] == "red"
    assert b["pivot"] == "150,0"
    connection = rendered["connections"][0]
    assert connection["from"] == {"id": "a", "paramIndex": 0}
    assert connection["note"] == "keep"


def test_render_analysis():
    _, gir = parse(_doc([{"id": "a"}, {"id": "b"}], [{"from": {"id": "a"}, "to": {"id": "b"}}]))
    rendered = json.loads(render_analysis(analyze(gir)))
    assert rendered["sourceNodes"] == ["a"]
    assert rendered["sinkNodes"] == ["b"]
    assert rendered["nodeDepths"] == {"a": 0, "b": 1}
    assert rendered["depthLevels"] == {"0": ["a"], "1": ["b"]}
    assert rendered["maxDepth"] == 1
    assert rendered["averageConnectionsPerNode"] == 0.5


def test_layout_document():
    from nodegrid import layout_document

    document, result = layout_document(_doc([{"id": "a"}, {"id": "b"}], [{"from": {"id": "a"}, "to": {"id": "b"}}]))
    assert [c.id for c in document.components] == ["a", "b"]
    assert result.positions == {"a": Position(0, 0), "b": Position(150, 0)}
