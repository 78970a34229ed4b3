"""Tests for the JSON network loader and graph builder."""

import json

import pytest
from helpers import Y_LINE_TEXT

from metro_schematic.layout.constants import WALK
from metro_schematic.network.loader import (
    NetworkFormatError,
    build_graph,
    load_network,
    parse_network,
)
from metro_schematic.network.model import MultiPoint, Stop


def _network_text(**overrides):
    data = {
        "stops": [
            {"id": "a", "lat": 52.5, "lon": 13.3},
            {"id": "b", "lat": 52.5, "lon": 13.4},
        ],
        "patterns": [{"id": "p", "stops": ["a", "b"]}],
    }
    data.update(overrides)
    return json.dumps(data)


def test_parse_network(y_network):
    assert y_network.title == "Y Line"
    assert len(y_network.stops) == 8
    assert list(y_network.patterns) == ["red", "blue"]
    assert y_network.patterns["blue"].color == "#377eb8"
    assert y_network.stops["c"].name == "Central"
    assert y_network.stop_patterns("c") == ["blue", "red"]
    assert y_network.stop_patterns("e1") == ["red"]


def test_default_name_and_color():
    network = parse_network(_network_text())
    pattern = network.patterns["p"]
    assert pattern.name == "p"
    assert pattern.color.startswith("#")
    assert network.stops["a"].name == "a"


def test_load_network_from_file(tmp_path):
    path = tmp_path / "net.json"
    path.write_text(Y_LINE_TEXT)
    network = load_network(path)
    assert network.title == "Y Line"


@pytest.mark.parametrize(
    "text, message",
    [
        ("not json", "Invalid JSON"),
        ("[1, 2]", "JSON object"),
        (_network_text(patterns=[{"id": "p", "stops": ["a", "zz"]}]), "unknown stop"),
        (_network_text(patterns=[{"id": "p", "stops": ["a"]}]), "at least two"),
        (_network_text(stops=[{"id": "a", "lat": "north", "lon": 1}]), "numeric"),
        (_network_text(transfers=[["a"]]), "pair of stop ids"),
        (_network_text(transfers=[["a", "q"]]), "unknown stop"),
        (
            _network_text(patterns=[{"id": "p", "stops": ["a", "b"]},
                                    {"id": "p", "stops": ["b", "a"]}]),
            "Duplicate pattern",
        ),
    ],
)
def test_parse_errors(text, message):
    with pytest.raises(NetworkFormatError, match=message):
        parse_network(text)


def test_format_error_is_value_error():
    with pytest.raises(ValueError):
        parse_network("{")


def test_build_graph_folds_intermediate_stops(y_network):
    graph = build_graph(y_network)

    assert [v.point.id for v in graph.vertices] == ["w1", "c", "e2", "n3"]
    assert len(graph.edges) == 3
    trunk, east, north = graph.edges
    assert [s.id for s in trunk.stop_array] == ["w2"]
    assert [s.id for s in north.stop_array] == ["n1", "n2"]
    assert trunk.point_array == ("w1", "w2", "c")
    assert [p.id for p in trunk.patterns] == ["red", "blue"]
    assert [p.id for p in east.patterns] == ["red"]


def test_build_graph_segments(y_network):
    graph = build_graph(y_network)
    trunk = graph.edges[0]
    assert [s.id for s in trunk.path_segments] == ["red:path", "blue:path"]
    assert [s.id for s in trunk.render_segments] == ["red", "blue"]
    red_render = trunk.render_segments[0]
    assert red_render.pattern is y_network.patterns["red"]
    assert red_render.graph_edges == y_network.patterns["red"].graph_edges


def test_build_graph_transfers(transfer_network):
    graph = build_graph(transfer_network)
    assert len(graph.vertices) == 6
    walk = graph.edges[-1]
    assert walk.point_array == ("hub", "hub_b")
    assert [s.type for s in walk.path_segments] == [WALK]
    assert walk.patterns == []


def test_build_graph_is_repeatable(y_network):
    build_graph(y_network)
    graph = build_graph(y_network)
    assert len(y_network.patterns["red"].graph_edges) == 2
    assert all(e in graph.edges for e in y_network.patterns["red"].graph_edges)


def test_role_stop_becomes_vertex():
    text = _network_text(
        stops=[
            {"id": "a", "lat": 52.5, "lon": 13.3},
            {"id": "m", "lat": 52.5, "lon": 13.35, "role": "from"},
            {"id": "b", "lat": 52.5, "lon": 13.4},
        ],
        patterns=[{"id": "p", "stops": ["a", "m", "b"]}],
    )
    graph = build_graph(parse_network(text))
    assert [v.point.id for v in graph.vertices] == ["a", "m", "b"]
    assert graph.vertices[1].point.contains_from_point()


def test_multipoint_aggregates_members():
    multi = MultiPoint()
    multi.add_point(Stop("a", "Alpha", 10.0, 20.0))
    multi.add_point(Stop("b", "Beta", 12.0, 22.0, role="to"))
    assert multi.id == "a+b"
    assert multi.name == "Alpha / Beta"
    assert (multi.lat, multi.lon) == (11.0, 21.0)
    assert multi.contains_to_point()
    assert not multi.contains_from_point()
