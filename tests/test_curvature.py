"""Tests for curvature optimization and edge geometry."""

from helpers import add_pattern, make_stop

from metro_schematic.layout.curvature import optimize_curvature
from metro_schematic.layout.graph import NetworkGraph


def _anchor_graph():
    """Axial a-b (red), red bends on to c, blue leaves b towards e."""
    graph = NetworkGraph()
    a = graph.add_vertex(make_stop("a"), 0.0, 0.0)
    b = graph.add_vertex(make_stop("b"), 100.0, 0.0)
    c = graph.add_vertex(make_stop("c"), 300.0, 100.0)
    e = graph.add_vertex(make_stop("e"), 200.0, -300.0)
    ab = graph.add_edge([], a, b)
    bc = graph.add_edge([], b, c)
    be = graph.add_edge([], b, e)
    add_pattern("red", ab, bc, render=True)
    add_pattern("blue", be, render=True)
    return graph, ab, bc, be


def test_same_pattern_continues_straight():
    graph, ab, bc, _ = _anchor_graph()
    optimize_curvature(graph)
    assert bc.aligned
    assert bc.from_vector == (1.0, 0.0)


def test_other_transit_edges_leave_perpendicular():
    graph, ab, _, be = _anchor_graph()
    optimize_curvature(graph)
    assert be.aligned
    assert be.from_vector == (0.0, -1.0)
    assert not ab.aligned


def test_returns_number_of_newly_aligned_edges():
    graph, _, _, _ = _anchor_graph()
    assert optimize_curvature(graph) == 2
    assert optimize_curvature(graph) == 0


def test_aligned_edge_gets_axis_leg_first():
    graph, _, bc, _ = _anchor_graph()
    optimize_curvature(graph)
    points = bc.calculate_geometry(100.0)
    assert points == [(100.0, 0.0), (200.0, 0.0), (300.0, 100.0)]


def test_diagonal_leg_first_when_arriving_on_axis():
    graph, _, bc, _ = _anchor_graph()
    bc.align(bc.to_vertex, (1.0, 0.0))
    points = bc.calculate_geometry()
    assert points == [(100.0, 0.0), (200.0, 100.0), (300.0, 100.0)]


def test_axial_and_diagonal_edges_are_straight():
    graph, ab, _, _ = _anchor_graph()
    assert ab.calculate_geometry() == [(0.0, 0.0), (100.0, 0.0)]
    f = graph.add_vertex(make_stop("f"), 200.0, 100.0)
    diagonal = graph.add_edge([], ab.to_vertex, f)
    assert diagonal.is_diagonal()
    assert len(diagonal.calculate_geometry()) == 2
