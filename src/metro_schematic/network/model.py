"""Data model for transit networks: stops, patterns and segments.

These are the collaborators the layout core talks to. The core only uses
the attributes and methods defined here, so callers with their own
network objects can pass anything exposing the same interface.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from metro_schematic.layout.elements import Edge, Vertex


@dataclass(eq=False)
class Stop:
    """A geographic point: a transit stop or a trip origin/destination place."""

    id: str
    name: str
    lat: float
    lon: float
    point_type: str = "STOP"
    # "from" / "to" mark trip endpoints that must never be merged away
    role: str | None = None

    def contains_from_point(self) -> bool:
        return self.role == "from"

    def contains_to_point(self) -> bool:
        return self.role == "to"


@dataclass(eq=False)
class MultiPoint:
    """Aggregate of the points of several merged vertices."""

    points: list[Any] = field(default_factory=list)
    point_type: str = "MULTI"

    def add_point(self, point: Any) -> None:
        self.points.append(point)

    @property
    def id(self) -> str:
        return "+".join(str(getattr(p, "id", "?")) for p in self.points)

    @property
    def name(self) -> str:
        return " / ".join(str(getattr(p, "name", "")) for p in self.points)

    @property
    def lat(self) -> float:
        if not self.points:
            return 0.0
        return sum(p.lat for p in self.points) / len(self.points)

    @property
    def lon(self) -> float:
        if not self.points:
            return 0.0
        return sum(p.lon for p in self.points) / len(self.points)

    def contains_from_point(self) -> bool:
        return any(p.contains_from_point() for p in self.points)

    def contains_to_point(self) -> bool:
        return any(p.contains_to_point() for p in self.points)


def _adjacent_edge(edges: list[Edge], edge: Edge, vertex: Vertex) -> Edge | None:
    """The edge before or after ``edge`` in ``edges`` that meets it at ``vertex``."""
    if edge not in edges:
        return None
    i = edges.index(edge)
    for j in (i - 1, i + 1):
        if 0 <= j < len(edges):
            candidate = edges[j]
            if candidate is not edge and candidate.touches(vertex):
                return candidate
    return None


@dataclass(eq=False)
class Pattern:
    """One transit line: an ordered traversal of graph edges."""

    id: str
    name: str = ""
    color: str = "#888888"
    stop_ids: list[str] = field(default_factory=list)
    graph_edges: list[Edge] = field(default_factory=list, repr=False)
    # edge -> lateral offset (line-width units); populated by 1-D bundling
    edge_offsets: dict[Edge, float] = field(default_factory=dict, repr=False)
    bundle_indices: dict[Edge, int] = field(default_factory=dict, repr=False)

    def add_edge(self, edge: Edge) -> None:
        """Append ``edge`` to this pattern's traversal and register on it."""
        self.graph_edges.append(edge)
        edge.add_pattern(self)

    def insert_edge(self, index: int, edge: Edge) -> None:
        self.graph_edges.insert(index, edge)

    def get_adjacent_edge(self, edge: Edge, vertex: Vertex) -> Edge | None:
        return _adjacent_edge(self.graph_edges, edge, vertex)

    def set_edge_offset(
        self,
        edge: Edge,
        offset: float,
        index: int | None = None,
        bundled: bool = False,
    ) -> None:
        self.edge_offsets[edge] = offset
        if bundled and index is not None:
            self.bundle_indices[edge] = index


@dataclass(eq=False)
class PathSegment:
    """A leg of a journey (transit ride or walk) over graph edges."""

    id: str
    type: str = "TRANSIT"
    pattern: Pattern | None = None
    graph_edges: list[Edge] = field(default_factory=list, repr=False)

    def add_edge(self, edge: Edge) -> None:
        self.graph_edges.append(edge)
        if self not in edge.path_segments:
            edge.path_segments.append(self)

    def remove_edge(self, edge: Edge) -> None:
        if edge in self.graph_edges:
            self.graph_edges.remove(edge)
        if self in edge.path_segments:
            edge.path_segments.remove(self)

    def is_orphaned(self) -> bool:
        return not self.graph_edges

    def get_adjacent_edge(self, edge: Edge, vertex: Vertex) -> Edge | None:
        return _adjacent_edge(self.graph_edges, edge, vertex)


@dataclass(eq=False)
class RenderSegment(PathSegment):
    """A drawable run of one pattern; the unit bundled in 2-D mode."""

    grid_edge_lookup: dict[tuple, Edge] = field(default_factory=dict, repr=False)
    # axis key -> lateral offset; populated by 2-D bundling
    axis_offsets: dict[tuple[str, float], float] = field(
        default_factory=dict, repr=False
    )

    def add_edge(self, edge: Edge) -> None:
        self.graph_edges.append(edge)
        if self not in edge.render_segments:
            edge.render_segments.append(self)

    def remove_edge(self, edge: Edge) -> None:
        if edge in self.graph_edges:
            self.graph_edges.remove(edge)
        if self in edge.render_segments:
            edge.render_segments.remove(self)

    def set_axis_offset(self, axis: tuple[str, float], offset: float) -> None:
        self.axis_offsets[axis] = offset


@dataclass
class Network:
    """A parsed network description, before it is turned into a graph."""

    title: str = ""
    stops: dict[str, Stop] = field(default_factory=dict)
    patterns: dict[str, Pattern] = field(default_factory=dict)
    transfers: list[tuple[str, str]] = field(default_factory=list)

    def add_stop(self, stop: Stop) -> None:
        self.stops[stop.id] = stop

    def add_pattern(self, pattern: Pattern) -> None:
        self.patterns[pattern.id] = pattern

    def stop_patterns(self, stop_id: str) -> list[str]:
        """Return pattern IDs that serve a stop."""
        return sorted(
            pid for pid, p in self.patterns.items() if stop_id in p.stop_ids
        )
