"""Loader for JSON network descriptions and builder for the network graph.

A network file lists stops, the patterns (lines) serving them in order,
and optional walking transfers::

    {
      "title": "Riverside",
      "stops": [{"id": "a", "name": "Alpha", "lat": 52.52, "lon": 13.40}],
      "patterns": [{"id": "red", "name": "Red", "color": "#e41a1c",
                    "stops": ["a", "b", "c"]}],
      "transfers": [["b", "b2"]]
    }

The graph builder keeps a vertex only where something happens: pattern
ends, branch points, transfers and trip endpoints. Stops in between are
folded into the ``stop_array`` of the edge they lie on.
"""

from __future__ import annotations

__all__ = [
    "NetworkFormatError",
    "build_graph",
    "load_network",
    "parse_network",
]

import json
from collections import defaultdict
from pathlib import Path
from typing import Any

from metro_schematic.layout.constants import TRANSIT, WALK
from metro_schematic.layout.elements import Edge, Vertex
from metro_schematic.layout.graph import NetworkGraph
from metro_schematic.network.model import (
    Network,
    PathSegment,
    Pattern,
    RenderSegment,
    Stop,
)

DEFAULT_COLORS = [
    "#e41a1c",
    "#377eb8",
    "#4daf4a",
    "#984ea3",
    "#ff7f00",
    "#a65628",
    "#f781bf",
    "#999999",
]


class NetworkFormatError(ValueError):
    """Raised when a network description is malformed."""


def load_network(path: str | Path) -> Network:
    """Read and parse a JSON network file."""
    return parse_network(Path(path).read_text())


def parse_network(text: str) -> Network:
    """Parse a JSON network description."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise NetworkFormatError(f"Invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise NetworkFormatError("Network description must be a JSON object")

    network = Network(title=str(data.get("title", "")))

    for raw in data.get("stops", []):
        network.add_stop(_parse_stop(raw))

    for i, raw in enumerate(data.get("patterns", [])):
        pattern = _parse_pattern(raw, i)
        for sid in pattern.stop_ids:
            if sid not in network.stops:
                raise NetworkFormatError(
                    f"Pattern '{pattern.id}' references unknown stop '{sid}'"
                )
        if pattern.id in network.patterns:
            raise NetworkFormatError(f"Duplicate pattern id '{pattern.id}'")
        network.add_pattern(pattern)

    for raw in data.get("transfers", []):
        if not isinstance(raw, (list, tuple)) or len(raw) != 2:
            raise NetworkFormatError(f"Transfer must be a pair of stop ids: {raw!r}")
        a, b = str(raw[0]), str(raw[1])
        for sid in (a, b):
            if sid not in network.stops:
                raise NetworkFormatError(f"Transfer references unknown stop '{sid}'")
        network.transfers.append((a, b))

    return network


def _parse_stop(raw: Any) -> Stop:
    if not isinstance(raw, dict) or "id" not in raw:
        raise NetworkFormatError(f"Stop must be an object with an 'id': {raw!r}")
    try:
        lat = float(raw["lat"])
        lon = float(raw["lon"])
    except (KeyError, TypeError, ValueError) as e:
        raise NetworkFormatError(
            f"Stop '{raw['id']}' needs numeric 'lat' and 'lon'"
        ) from e
    role = raw.get("role")
    if role not in (None, "from", "to"):
        raise NetworkFormatError(f"Stop '{raw['id']}' has unknown role '{role}'")
    return Stop(
        id=str(raw["id"]),
        name=str(raw.get("name", raw["id"])),
        lat=lat,
        lon=lon,
        point_type=str(raw.get("type", "STOP")),
        role=role,
    )


def _parse_pattern(raw: Any, index: int) -> Pattern:
    if not isinstance(raw, dict) or "id" not in raw:
        raise NetworkFormatError(f"Pattern must be an object with an 'id': {raw!r}")
    stop_ids = [str(s) for s in raw.get("stops", [])]
    if len(stop_ids) < 2:
        raise NetworkFormatError(f"Pattern '{raw['id']}' needs at least two stops")
    return Pattern(
        id=str(raw["id"]),
        name=str(raw.get("name", raw["id"])),
        color=str(raw.get("color", DEFAULT_COLORS[index % len(DEFAULT_COLORS)])),
        stop_ids=stop_ids,
    )


def build_graph(network: Network) -> NetworkGraph:
    """Build the network graph for a parsed network.

    Each pattern gets a TRANSIT path segment and a render segment spanning
    its edges; each transfer becomes a walk edge with a WALK path segment.
    Patterns are reset, so a network can be built more than once.
    """
    graph = NetworkGraph()
    anchors = _anchor_stops(network)

    vertices: dict[str, Vertex] = {}
    for sid, stop in network.stops.items():
        if sid in anchors:
            vertices[sid] = graph.add_vertex(stop)

    for pattern in network.patterns.values():
        pattern.graph_edges = []
        pattern.edge_offsets = {}
        pattern.bundle_indices = {}
        path = PathSegment(id=f"{pattern.id}:path", type=TRANSIT, pattern=pattern)
        render = RenderSegment(id=pattern.id, type=TRANSIT, pattern=pattern)

        run = [pattern.stop_ids[0]]
        for sid in pattern.stop_ids[1:]:
            run.append(sid)
            if sid not in anchors:
                continue
            edge = _edge_for_run(graph, network, vertices, run)
            pattern.add_edge(edge)
            path.add_edge(edge)
            render.add_edge(edge)
            run = [sid]

    for a, b in network.transfers:
        if a == b:
            continue
        edge = (
            graph.get_equivalent_edge((a, b), vertices[a], vertices[b])
            or graph.get_equivalent_edge((b, a), vertices[b], vertices[a])
            or graph.add_edge([], vertices[a], vertices[b], (a, b))
        )
        PathSegment(id=f"walk:{a}:{b}", type=WALK).add_edge(edge)

    return graph


def _anchor_stops(network: Network) -> set[str]:
    """Stops that must become vertices rather than fold into an edge."""
    anchors: set[str] = set()
    neighbours: dict[str, set[str]] = defaultdict(set)
    for pattern in network.patterns.values():
        ids = pattern.stop_ids
        anchors.add(ids[0])
        anchors.add(ids[-1])
        for a, b in zip(ids, ids[1:]):
            neighbours[a].add(b)
            neighbours[b].add(a)
    for sid, nbs in neighbours.items():
        if len(nbs) != 2:
            anchors.add(sid)
    for a, b in network.transfers:
        anchors.add(a)
        anchors.add(b)
    for sid, stop in network.stops.items():
        if stop.role is not None and (sid in neighbours or sid in anchors):
            anchors.add(sid)
    return anchors


def _edge_for_run(
    graph: NetworkGraph,
    network: Network,
    vertices: dict[str, Vertex],
    run: list[str],
) -> Edge:
    """Find or create the edge for a run of stops between two anchors."""
    point_array = tuple(run)
    start, end = vertices[run[0]], vertices[run[-1]]
    existing = graph.get_equivalent_edge(point_array, start, end)
    if existing is None:
        existing = graph.get_equivalent_edge(point_array[::-1], end, start)
    if existing is not None:
        return existing
    stops = [network.stops[sid] for sid in run[1:-1]]
    return graph.add_edge(stops, start, end, point_array)
