"""Tests for bundle voting and 1-D / 2-D line offsets."""

import pytest
from helpers import add_pattern, make_stop

from metro_schematic.layout.bundling import (
    apply_1d_offsets,
    apply_2d_offsets,
    bundle_order,
    collect_votes,
)
from metro_schematic.layout.graph import NetworkGraph


def _fork_graph():
    """a-b shared by red and blue; red continues east to c, blue turns south to d."""
    graph = NetworkGraph()
    a = graph.add_vertex(make_stop("a"), 0.0, 0.0)
    b = graph.add_vertex(make_stop("b"), 300.0, 0.0)
    c = graph.add_vertex(make_stop("c"), 600.0, 0.0)
    d = graph.add_vertex(make_stop("d"), 300.0, -300.0)
    ab = graph.add_edge([], a, b)
    bc = graph.add_edge([], b, c)
    bd = graph.add_edge([], b, d)
    red = add_pattern("red", ab, bc, render=True)
    blue = add_pattern("blue", ab, bd, render=True)
    return graph, ab, bd, red, blue


def test_bundle_order_without_votes_keeps_input_order():
    graph = NetworkGraph()
    patterns = [add_pattern(pid) for pid in ("p", "q", "r")]
    assert bundle_order(graph, patterns) == patterns


def test_bundle_order_negative_vote_sorts_first():
    graph = NetworkGraph()
    p, q = add_pattern("p"), add_pattern("q")
    graph.bundle_comparison(q, p)
    assert graph.bundle_comparisons[("p", "q")] == -1
    assert bundle_order(graph, [q, p]) == [p, q]


def test_three_patterns_without_divergence_are_centered():
    graph = NetworkGraph()
    a = graph.add_vertex(make_stop("a"), 0.0, 0.0)
    b = graph.add_vertex(make_stop("b"), 100.0, 0.0)
    edge = graph.add_edge([], a, b)
    for pid in ("x", "y", "z"):
        add_pattern(pid, edge)

    offsets = apply_1d_offsets(graph)
    assert graph.bundle_comparisons == {}
    values = [offsets[(edge.id, pid)] for pid in ("x", "y", "z")]
    assert values == pytest.approx([-1.2, 0.0, 1.2])
    assert sum(values) == pytest.approx(0.0)


def test_1d_offsets_skip_non_horizontal_edges():
    graph = NetworkGraph()
    a = graph.add_vertex(make_stop("a"), 0.0, 0.0)
    b = graph.add_vertex(make_stop("b"), 1.0, 1.0)
    edge = graph.add_edge([], a, b)
    add_pattern("x", edge)
    add_pattern("y", edge)
    assert apply_1d_offsets(graph) == {}


def test_votes_collected_from_render_segments():
    graph, ab, _, red, blue = _fork_graph()
    collect_votes(graph, lambda edge: edge.render_segments)
    # Red continues level while blue heads to a lower y
    assert graph.bundle_comparisons[("red", "blue")] == 1
    assert graph.bundle_comparisons[("blue", "red")] == -1


def test_votes_ignore_low_degree_vertices():
    graph = NetworkGraph()
    a = graph.add_vertex(make_stop("a"), 0.0, 0.0)
    b = graph.add_vertex(make_stop("b"), 100.0, 0.0)
    c = graph.add_vertex(make_stop("c"), 200.0, 50.0)
    ab = graph.add_edge([], a, b)
    bc = graph.add_edge([], b, c)
    add_pattern("x", ab, bc)
    add_pattern("y", ab, bc)
    collect_votes(graph, lambda edge: edge.patterns)
    assert graph.bundle_comparisons == {}


def test_2d_offsets_by_axis():
    graph, ab, bd, red, blue = _fork_graph()
    red_seg = ab.render_segments[0]
    blue_seg = ab.render_segments[1]

    offsets = apply_2d_offsets(graph, [red_seg, blue_seg], cell_size=100.0)

    horizontal = ("y", 0.0)
    assert offsets[("blue", horizontal)] == pytest.approx(-0.6)
    assert offsets[("red", horizontal)] == pytest.approx(0.6)
    assert red_seg.axis_offsets[horizontal] == pytest.approx(0.6)
    # Blue runs alone down the vertical leg
    assert offsets[("blue", ("x", 300.0))] == 0
    assert ("red", ("x", 300.0)) not in offsets


def test_2d_grid_edge_lookup():
    graph, ab, bd, red, blue = _fork_graph()
    red_seg, blue_seg = ab.render_segments

    apply_2d_offsets(graph, [red_seg, blue_seg], cell_size=100.0)

    assert ab.grid_edges == [
        (0.0, 0.0, 100.0, 0.0),
        (100.0, 0.0, 200.0, 0.0),
        (200.0, 0.0, 300.0, 0.0),
    ]
    assert graph.grid_edge_segments[(0.0, 0.0, 100.0, 0.0)] == [red_seg, blue_seg]
    assert graph.grid_edge_segments[(300.0, -100.0, 300.0, 0.0)] == [blue_seg]
    assert red_seg.grid_edge_lookup[(100.0, 0.0, 200.0, 0.0)] is ab
    assert blue_seg.grid_edge_lookup[(300.0, -300.0, 300.0, -200.0)] is bd


def test_2d_offsets_ignore_walk_segments():
    graph, ab, _, _, _ = _fork_graph()
    red_seg, blue_seg = ab.render_segments
    blue_seg.type = "WALK"

    offsets = apply_2d_offsets(graph, [red_seg, blue_seg], cell_size=100.0)
    assert offsets[("red", ("y", 0.0))] == 0
    assert all(segment_id == "red" for segment_id, _ in offsets)
