"""Tests for the layout engine pipelines."""

import pytest

from metro_schematic.layout import compute_layout
from metro_schematic.network.loader import build_graph


def test_1d_layout_of_y_network(y_network):
    graph = build_graph(y_network)
    result = compute_layout(graph, mode="1d")

    by_stop = {v.point.id: (v.x, v.y) for v in graph.vertices}
    assert by_stop["w1"] == (0, 0)
    assert by_stop["c"] == (2, 0)
    assert by_stop["e2"] == (4, 0)
    assert by_stop["n1"] == (3, 1)
    assert by_stop["n3"] == (5, 1)

    trunk = graph.edges[0]
    assert result.offsets[(trunk.id, "red")] == pytest.approx(-0.6)
    assert result.offsets[(trunk.id, "blue")] == pytest.approx(0.6)
    assert all(edge.render_points for edge in graph.edges)


def test_1d_reset_restores_geographic_coordinates(y_network):
    graph = build_graph(y_network)
    before = {v.point.id: (v.x, v.y) for v in graph.vertices}
    compute_layout(graph, mode="1d")
    graph.reset_coordinates()
    for vertex in graph.vertices:
        if vertex.point.id in before:
            assert (vertex.x, vertex.y) == before[vertex.point.id]


def test_2d_reset_restores_snapshot(transfer_network):
    graph = build_graph(transfer_network)
    before = {v.point.id: (v.x, v.y) for v in graph.vertices}
    compute_layout(graph, mode="2d")
    graph.reset_coordinates()
    for vertex in graph.vertices:
        if vertex.point.id in before:
            assert (vertex.x, vertex.y) == before[vertex.point.id]
        assert (vertex.x, vertex.y) == (vertex.orig_x, vertex.orig_y)
        assert vertex.snapped is False
    assert not any(edge.aligned for edge in graph.edges)


def test_2d_layout_snaps_to_grid(y_network):
    graph = build_graph(y_network)
    result = compute_layout(graph, mode="2d", cell_size=500.0)

    assert result.cell_size == 500.0
    assert graph.cell_size == 500.0
    for vertex in graph.vertices:
        assert vertex.snapped
        assert vertex.x % 500 == 0
        assert vertex.y % 500 == 0
    assert len({(v.x, v.y) for v in graph.vertices}) == len(graph.vertices)
    assert result.offsets
    assert graph.grid_edge_segments
    assert all(segment_id in ("red", "blue") for segment_id, _ in result.offsets)


def test_collapse_merges_transfer(transfer_network):
    graph = build_graph(transfer_network)
    result = compute_layout(graph, mode="2d")
    assert result.collapsed == 1
    assert len(graph.vertices) == 5
    hub = next(v for v in graph.vertices if len(v.edges) == 4)
    assert [p.id for p in hub.point.points] == ["hub", "hub_b"]


def test_no_collapse_keeps_transfer(transfer_network):
    graph = build_graph(transfer_network)
    result = compute_layout(graph, mode="1d", collapse=False)
    assert result.collapsed == 0
    assert len(graph.vertices) == 6


def test_threshold_controls_collapse(transfer_network):
    graph = build_graph(transfer_network)
    result = compute_layout(graph, transfer_threshold=10.0)
    assert result.collapsed == 0


def test_unknown_mode_raises(y_network):
    graph = build_graph(y_network)
    with pytest.raises(ValueError, match="Unknown layout mode"):
        compute_layout(graph, mode="3d")
