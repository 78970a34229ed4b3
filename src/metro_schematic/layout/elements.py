"""Vertices and edges of the network graph.

Vertices and edges reference each other (edges name their endpoints,
vertices list their incident edges), so both compare by identity. The
owning :class:`~metro_schematic.layout.graph.NetworkGraph` hands out the
integer ``id`` used to key lookup tables.
"""

from __future__ import annotations

__all__ = ["Edge", "GridEdge", "GridPoint", "Vertex"]

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from metro_schematic.layout.geometry import normalize, round_half_up, sign

if TYPE_CHECKING:
    from metro_schematic.network.model import Pattern, PathSegment, RenderSegment

GridPoint = tuple[int, int]
"""Integer cell indices of a grid point."""

GridEdge = tuple[float, float, float, float]
"""A unit grid edge ``(x1, y1, x2, y2)`` with its endpoints in canonical order."""

Point2 = tuple[float, float]


@dataclass(eq=False)
class Vertex:
    """A node of the network graph: a stop, a branch point or a merged group."""

    point: Any
    x: float
    y: float
    id: int = -1
    edges: list[Edge] = field(default_factory=list, repr=False)
    snapped: bool = False
    old_vertices: list[Vertex] = field(default_factory=list, repr=False)
    orig_x: float = field(init=False)
    orig_y: float = field(init=False)

    def __post_init__(self) -> None:
        self.orig_x = self.x
        self.orig_y = self.y

    def move_to(self, x: float, y: float) -> None:
        self.x = x
        self.y = y

    def snapshot(self) -> None:
        """Make the current coordinates the ones restored by a reset."""
        self.orig_x = self.x
        self.orig_y = self.y

    def add_edge(self, edge: Edge) -> None:
        if edge not in self.edges:
            self.edges.append(edge)

    def remove_edge(self, edge: Edge) -> None:
        if edge in self.edges:
            self.edges.remove(edge)

    def incident_edges(self, exclude: Edge | None = None) -> list[Edge]:
        """Incident edges in incidence order, without ``exclude``."""
        return [e for e in self.edges if e is not exclude]

    def clone(self) -> Vertex:
        """Copy of this vertex sharing its point, with no incident edges."""
        copy = Vertex(self.point, self.x, self.y, id=self.id, snapped=self.snapped)
        copy.orig_x = self.orig_x
        copy.orig_y = self.orig_y
        copy.old_vertices = list(self.old_vertices)
        return copy


@dataclass(eq=False)
class Edge:
    """A connection between two vertices carrying one or more patterns."""

    stop_array: list[Any]
    from_vertex: Vertex
    to_vertex: Vertex
    point_array: tuple = ()
    id: int = -1
    patterns: list[Pattern] = field(default_factory=list, repr=False)
    path_segments: list[PathSegment] = field(default_factory=list, repr=False)
    render_segments: list[RenderSegment] = field(default_factory=list, repr=False)
    aligned: bool = False
    # Departure directions fixed by curvature alignment
    from_vector: Point2 | None = None
    to_vector: Point2 | None = None
    label_position: int = 0
    # Populated by calculate_geometry / calculate_grid_edges
    render_points: list[Point2] = field(default_factory=list, repr=False)
    grid_edges: list[GridEdge] = field(default_factory=list, repr=False)

    # -- topology ---------------------------------------------------------

    def touches(self, vertex: Vertex) -> bool:
        return self.from_vertex is vertex or self.to_vertex is vertex

    def opposite_vertex(self, vertex: Vertex) -> Vertex | None:
        if vertex is self.from_vertex:
            return self.to_vertex
        if vertex is self.to_vertex:
            return self.from_vertex
        return None

    def replace_vertex(self, old: Vertex, new: Vertex) -> None:
        if self.from_vertex is old:
            self.from_vertex = new
        if self.to_vertex is old:
            self.to_vertex = new

    def add_pattern(self, pattern: Pattern) -> None:
        if pattern not in self.patterns:
            self.patterns.append(pattern)

    def set_label_position(self, position: int) -> None:
        self.label_position = position

    # -- measurement ------------------------------------------------------

    @property
    def length(self) -> float:
        return math.hypot(
            self.to_vertex.x - self.from_vertex.x,
            self.to_vertex.y - self.from_vertex.y,
        )

    def is_axial(self) -> bool:
        """True when the edge runs along a grid axis."""
        return (
            self.from_vertex.x == self.to_vertex.x
            or self.from_vertex.y == self.to_vertex.y
        )

    def is_diagonal(self) -> bool:
        dx = abs(self.to_vertex.x - self.from_vertex.x)
        dy = abs(self.to_vertex.y - self.from_vertex.y)
        return dx > 0 and math.isclose(dx, dy)

    def vector(self, vertex: Vertex) -> Point2:
        """Unit direction of travel along this edge arriving at ``vertex``."""
        origin = self.opposite_vertex(vertex)
        if origin is None:
            raise ValueError(f"vertex {vertex.id} is not an endpoint of edge {self.id}")
        return normalize(vertex.x - origin.x, vertex.y - origin.y)

    def align(self, vertex: Vertex, vector: Point2) -> None:
        """Fix the direction in which this edge leaves ``vertex``."""
        if vertex is self.from_vertex:
            self.from_vector = vector
        elif vertex is self.to_vertex:
            self.to_vector = vector
        else:
            raise ValueError(f"vertex {vertex.id} is not an endpoint of edge {self.id}")
        self.aligned = True

    def clear_alignment(self) -> None:
        self.aligned = False
        self.from_vector = None
        self.to_vector = None

    # -- geometry ---------------------------------------------------------

    def calculate_geometry(self, cell_size: float | None = None) -> list[Point2]:
        """Compute the rendered polyline of this edge.

        Axial and diagonal edges are drawn straight. Any other edge gets a
        single elbow joining an axis-parallel leg and a 45-degree leg; the
        alignment vectors decide which leg comes first.
        """
        start = (self.from_vertex.x, self.from_vertex.y)
        end = (self.to_vertex.x, self.to_vertex.y)
        elbow = self._elbow()
        if elbow is None:
            self.render_points = [start, end]
            return self.render_points
        if cell_size:
            elbow = (
                round_half_up(elbow[0] / cell_size) * cell_size,
                round_half_up(elbow[1] / cell_size) * cell_size,
            )
        self.render_points = [start, elbow, end]
        return self.render_points

    def _elbow(self) -> Point2 | None:
        fx, fy = self.from_vertex.x, self.from_vertex.y
        tx, ty = self.to_vertex.x, self.to_vertex.y
        dx, dy = tx - fx, ty - fy
        adx, ady = abs(dx), abs(dy)
        if adx == 0 or ady == 0 or math.isclose(adx, ady):
            return None

        diagonal_first = self._diagonal_leg_first()
        if adx > ady:
            run = sign(dx) * (adx - ady)
            return (tx - run, ty) if diagonal_first else (fx + run, fy)
        run = sign(dy) * (ady - adx)
        return (tx, ty - run) if diagonal_first else (fx, fy + run)

    def _diagonal_leg_first(self) -> bool:
        if self.from_vector is not None:
            return not _is_axis_vector(self.from_vector)
        if self.to_vector is not None:
            return _is_axis_vector(self.to_vector)
        return False

    def grid_points(self, cell_size: float) -> list[GridPoint]:
        """Grid cells crossed by the straight edge, endpoints excluded."""
        start = _to_cell(self.from_vertex.x, self.from_vertex.y, cell_size)
        end = _to_cell(self.to_vertex.x, self.to_vertex.y, cell_size)
        return _walk_cells(start, end)[1:-1]

    def calculate_grid_edges(self, cell_size: float) -> list[GridEdge]:
        """Unit grid edges covered by the rendered polyline (or the chord)."""
        points = self.render_points or [
            (self.from_vertex.x, self.from_vertex.y),
            (self.to_vertex.x, self.to_vertex.y),
        ]
        grid_edges: list[GridEdge] = []
        seen: set[GridEdge] = set()
        for (ax, ay), (bx, by) in zip(points, points[1:]):
            cells = _walk_cells(
                _to_cell(ax, ay, cell_size), _to_cell(bx, by, cell_size)
            )
            for c1, c2 in zip(cells, cells[1:]):
                lo, hi = sorted((c1, c2))
                key = (
                    lo[0] * cell_size,
                    lo[1] * cell_size,
                    hi[0] * cell_size,
                    hi[1] * cell_size,
                )
                if key not in seen:
                    seen.add(key)
                    grid_edges.append(key)
        self.grid_edges = grid_edges
        return grid_edges

    def clone(self, from_vertex: Vertex, to_vertex: Vertex) -> Edge:
        """Copy of this edge attached to the given endpoints."""
        copy = Edge(
            list(self.stop_array),
            from_vertex,
            to_vertex,
            point_array=self.point_array,
            id=self.id,
            aligned=self.aligned,
            from_vector=self.from_vector,
            to_vector=self.to_vector,
            label_position=self.label_position,
        )
        copy.patterns = list(self.patterns)
        copy.path_segments = list(self.path_segments)
        copy.render_segments = list(self.render_segments)
        copy.render_points = list(self.render_points)
        copy.grid_edges = list(self.grid_edges)
        return copy


def _is_axis_vector(vector: Point2) -> bool:
    return math.isclose(vector[0], 0.0, abs_tol=1e-9) or math.isclose(
        vector[1], 0.0, abs_tol=1e-9
    )


def _to_cell(x: float, y: float, cell_size: float) -> GridPoint:
    return round_half_up(x / cell_size), round_half_up(y / cell_size)


def _walk_cells(start: GridPoint, end: GridPoint) -> list[GridPoint]:
    """Cells from ``start`` to ``end`` inclusive, one unit step at a time."""
    steps = max(abs(end[0] - start[0]), abs(end[1] - start[1]))
    if steps == 0:
        return [start]
    cells = [start]
    for k in range(1, steps):
        t = k / steps
        cells.append(
            (
                round_half_up(start[0] + (end[0] - start[0]) * t),
                round_half_up(start[1] + (end[1] - start[1]) * t),
            )
        )
    cells.append(end)
    return cells
