"""Graph builders and network texts shared by the test modules."""

from __future__ import annotations

from dataclasses import dataclass

from metro_schematic.layout.elements import Edge, Vertex
from metro_schematic.layout.graph import NetworkGraph
from metro_schematic.network.model import Pattern, RenderSegment, Stop

# --- Network text constants ---

Y_LINE_TEXT = """
{
  "title": "Y Line",
  "stops": [
    {"id": "w1", "name": "West End", "lat": 52.500, "lon": 13.300},
    {"id": "w2", "name": "Mill Lane", "lat": 52.500, "lon": 13.320},
    {"id": "c", "name": "Central", "lat": 52.500, "lon": 13.340},
    {"id": "e1", "name": "Harbour", "lat": 52.500, "lon": 13.360},
    {"id": "e2", "name": "East Quay", "lat": 52.500, "lon": 13.380},
    {"id": "n1", "name": "Park Road", "lat": 52.512, "lon": 13.352},
    {"id": "n2", "name": "Hillside", "lat": 52.524, "lon": 13.366},
    {"id": "n3", "name": "North Gate", "lat": 52.536, "lon": 13.380}
  ],
  "patterns": [
    {"id": "red", "name": "Red", "color": "#e41a1c",
     "stops": ["w1", "w2", "c", "e1", "e2"]},
    {"id": "blue", "name": "Blue", "color": "#377eb8",
     "stops": ["w1", "w2", "c", "n1", "n2", "n3"]}
  ]
}
"""

TRANSFER_TEXT = """
{
  "title": "Transfer",
  "stops": [
    {"id": "a1", "name": "Docks", "lat": 52.500, "lon": 13.300},
    {"id": "hub", "name": "Riverside", "lat": 52.500, "lon": 13.340},
    {"id": "a2", "name": "Old Town", "lat": 52.500, "lon": 13.380},
    {"id": "b1", "name": "South Park", "lat": 52.470, "lon": 13.340},
    {"id": "hub_b", "name": "Riverside Bridge", "lat": 52.5005, "lon": 13.3405},
    {"id": "b2", "name": "Observatory", "lat": 52.530, "lon": 13.350}
  ],
  "patterns": [
    {"id": "red", "stops": ["a1", "hub", "a2"]},
    {"id": "blue", "stops": ["b1", "hub_b", "b2"]}
  ],
  "transfers": [["hub", "hub_b"]]
}
"""


# --- Builders ---


def make_stop(sid: str, lat: float = 0.0, lon: float = 0.0, role=None) -> Stop:
    return Stop(id=sid, name=sid.upper(), lat=lat, lon=lon, role=role)


def add_pattern(pattern_id: str, *edges: Edge, render: bool = False) -> Pattern:
    """Create a pattern running over ``edges`` in order."""
    pattern = Pattern(pattern_id)
    segment = RenderSegment(id=pattern_id, pattern=pattern) if render else None
    for edge in edges:
        pattern.add_edge(edge)
        if segment is not None:
            segment.add_edge(edge)
    return pattern


@dataclass
class YGraph:
    """Trunk a-b shared by red and blue; red continues to d, blue to c."""

    graph: NetworkGraph
    a: Vertex
    b: Vertex
    c: Vertex
    d: Vertex
    ab: Edge
    bd: Edge
    bc: Edge
    red: Pattern
    blue: Pattern


def build_y_graph() -> YGraph:
    graph = NetworkGraph()
    a = graph.add_vertex(make_stop("a"), 0.0, 0.0)
    b = graph.add_vertex(make_stop("b"), 300.0, 0.0)
    d = graph.add_vertex(make_stop("d"), 600.0, 0.0)
    c = graph.add_vertex(make_stop("c"), 600.0, 300.0)
    ab = graph.add_edge([make_stop("s1"), make_stop("s2")], a, b)
    bd = graph.add_edge([make_stop("s3")], b, d)
    bc = graph.add_edge([make_stop("s4"), make_stop("s5")], b, c)
    red = add_pattern("red", ab, bd)
    blue = add_pattern("blue", ab, bc)
    return YGraph(graph, a, b, c, d, ab, bd, bc, red, blue)
