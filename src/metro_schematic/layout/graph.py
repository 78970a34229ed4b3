"""The network graph: vertex/edge collections and their mutation primitives.

Layout passes live in their own modules (linearize, bundling, snapping,
curvature) and operate on a :class:`NetworkGraph` in place.
"""

from __future__ import annotations

__all__ = ["NetworkGraph"]

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import networkx as nx

from metro_schematic.layout.constants import TRANSFER_THRESHOLD, WALK
from metro_schematic.layout.elements import Edge, GridEdge, Vertex
from metro_schematic.layout.geometry import arrays_equal, median, spherical_mercator
from metro_schematic.network.model import MultiPoint

if TYPE_CHECKING:
    from metro_schematic.network.model import Pattern, RenderSegment

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class NetworkGraph:
    """The 'wireframe' graph underlying a schematic transit diagram.

    ``vertices`` and ``edges`` keep insertion order; trunk selection,
    branch ordering and bundle sorting all depend on it.
    """

    vertices: list[Vertex] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)
    # Pairwise bundle votes: (id_a, id_b) -> signed count
    bundle_comparisons: dict[tuple[str, str], int] = field(default_factory=dict)
    # Set by apply_2d_offsets
    grid_edge_segments: dict[GridEdge, list[RenderSegment]] = field(
        default_factory=dict
    )
    # Set by snap_to_grid
    ordered_vertices: list[Vertex] = field(default_factory=list)
    cell_size: float | None = None
    _next_vertex_id: int = 0
    _next_edge_id: int = 0

    # -- vertices ---------------------------------------------------------

    def add_vertex(
        self, point: Any, x: float | None = None, y: float | None = None
    ) -> Vertex:
        """Add a vertex for ``point``.

        Without explicit coordinates the point's lat/lon is projected to
        spherical-mercator meters.
        """
        if x is None or y is None:
            x, y = spherical_mercator(point.lat, point.lon)
        vertex = Vertex(point, x, y, id=self._allocate_vertex_id())
        self.vertices.append(vertex)
        return vertex

    def _allocate_vertex_id(self) -> int:
        vid = self._next_vertex_id
        self._next_vertex_id += 1
        return vid

    def _remove_vertex(self, vertex: Vertex) -> None:
        if vertex in self.vertices:
            self.vertices.remove(vertex)

    def merge_vertices(self, vertices: Sequence[Vertex]) -> Vertex | None:
        """Replace a set of vertices with a single vertex at their mean.

        Edges running between two members are dropped; every other
        incident edge is reattached to the merged vertex. The merged
        vertex's point is a MultiPoint of the members' points.
        """
        members = list(vertices)
        if not members:
            logger.warning("merge_vertices called with no vertices")
            return None

        multi_point = MultiPoint()
        merged = Vertex(multi_point, 0.0, 0.0, id=self._allocate_vertex_id())

        x_total = 0.0
        y_total = 0.0
        for vertex in members:
            x_total += vertex.x
            y_total += vertex.y
            for edge in list(vertex.edges):
                if edge.from_vertex in members and edge.to_vertex in members:
                    self.remove_edge(edge)
                    continue
                edge.replace_vertex(vertex, merged)
                merged.add_edge(edge)
            self._remove_vertex(vertex)

        merged.move_to(x_total / len(members), y_total / len(members))
        merged.snapshot()
        merged.old_vertices = members
        for vertex in members:
            multi_point.add_point(vertex.point)

        self.vertices.append(merged)
        return merged

    # -- edges ------------------------------------------------------------

    def add_edge(
        self,
        stop_array: Iterable[Any],
        from_vertex: Vertex,
        to_vertex: Vertex,
        point_array: Sequence = (),
    ) -> Edge | None:
        """Connect two member vertices. Returns None if either is foreign."""
        if from_vertex not in self.vertices:
            logger.error("Graph does not contain edge from_vertex %s", from_vertex.id)
            return None
        if to_vertex not in self.vertices:
            logger.error("Graph does not contain edge to_vertex %s", to_vertex.id)
            return None

        edge = Edge(
            list(stop_array),
            from_vertex,
            to_vertex,
            point_array=tuple(point_array),
            id=self._next_edge_id,
        )
        self._next_edge_id += 1
        self.edges.append(edge)
        from_vertex.add_edge(edge)
        to_vertex.add_edge(edge)
        return edge

    def remove_edge(self, edge: Edge) -> None:
        """Remove an edge from the graph, its endpoints and every segment on it."""
        if edge in self.edges:
            self.edges.remove(edge)
        edge.from_vertex.remove_edge(edge)
        edge.to_vertex.remove_edge(edge)
        for segment in list(edge.path_segments):
            segment.remove_edge(edge)
        for segment in list(edge.render_segments):
            segment.remove_edge(edge)

    def get_equivalent_edge(
        self, point_array: Sequence, from_vertex: Vertex, to_vertex: Vertex
    ) -> Edge | None:
        """Existing edge between the same endpoints with the same point array."""
        for edge in self.edges:
            if (
                edge.from_vertex is from_vertex
                and edge.to_vertex is to_vertex
                and arrays_equal(point_array, edge.point_array)
            ):
                return edge
        return None

    def split_edge(
        self, edge: Edge, new_vertex: Vertex, adjacent_vertex: Vertex
    ) -> Edge | None:
        """Insert ``new_vertex`` between ``edge`` and its end ``adjacent_vertex``.

        ``edge`` keeps its far end and is reattached to ``new_vertex``; a new
        edge joins ``adjacent_vertex`` to ``new_vertex`` and inherits the
        patterns, each pattern's edge list gaining it at the matching
        position. Returns the new edge, or None for invalid arguments.
        """
        if edge.from_vertex is adjacent_vertex:
            adjacent_is_from = True
        elif edge.to_vertex is adjacent_vertex:
            adjacent_is_from = False
        else:
            logger.warning(
                "Invalid split: vertex %s is not an endpoint of edge %s",
                adjacent_vertex.id,
                edge.id,
            )
            return None
        if new_vertex not in self.vertices:
            logger.error("Graph does not contain split vertex %s", new_vertex.id)
            return None

        # Work out every pattern's insertion point before touching the edge
        insertions = [
            (pattern, _insertion_index(pattern, edge, adjacent_vertex))
            for pattern in edge.patterns
        ]

        if adjacent_is_from:
            new_edge = self.add_edge([], adjacent_vertex, new_vertex)
            edge.from_vertex = new_vertex
        else:
            new_edge = self.add_edge([], new_vertex, adjacent_vertex)
            edge.to_vertex = new_vertex

        adjacent_vertex.remove_edge(edge)
        for pattern in edge.patterns:
            new_edge.add_pattern(pattern)
        new_vertex.edges = [new_edge, edge]

        for pattern, index in insertions:
            pattern.insert_edge(index, new_edge)
        return new_edge

    # -- bundling votes ---------------------------------------------------

    def bundle_comparison(self, first: Any, second: Any) -> None:
        """Record one vote for ``first`` rendering above ``second``."""
        key = (first.id, second.id)
        self.bundle_comparisons[key] = self.bundle_comparisons.get(key, 0) + 1
        key = (second.id, first.id)
        self.bundle_comparisons[key] = self.bundle_comparisons.get(key, 0) - 1

    # -- simplification ---------------------------------------------------

    def collapse_transfers(self, threshold: float = TRANSFER_THRESHOLD) -> int:
        """Merge the endpoints of short walk-only edges.

        Edges touching a trip origin or destination are kept. Returns the
        number of merges performed.
        """
        merges = 0
        for edge in list(self.edges):
            if edge not in self.edges or edge.from_vertex is edge.to_vertex:
                continue
            if edge.length > threshold:
                continue
            if any(
                vertex.point.contains_from_point() or vertex.point.contains_to_point()
                for vertex in (edge.from_vertex, edge.to_vertex)
            ):
                continue
            if all(segment.type == WALK for segment in edge.path_segments):
                self.merge_vertices([edge.from_vertex, edge.to_vertex])
                merges += 1
        if merges:
            logger.debug("Collapsed %d transfer edges", merges)
        return merges

    # -- coordinates ------------------------------------------------------

    def recenter(self) -> None:
        """Shift every vertex so the median point sits at the origin."""
        if not self.vertices:
            return
        mx = median(v.x for v in self.vertices)
        my = median(v.y for v in self.vertices)
        for vertex in self.vertices:
            vertex.move_to(vertex.x - mx, vertex.y - my)

    def reset_coordinates(self) -> None:
        """Restore every vertex to its snapshot and undo snapping/alignment."""
        for vertex in self.vertices:
            vertex.move_to(vertex.orig_x, vertex.orig_y)
            vertex.snapped = False
        for edge in self.edges:
            edge.clear_alignment()

    def calculate_geometry(self, cell_size: float | None = None) -> None:
        for edge in self.edges:
            edge.calculate_geometry(cell_size)

    # -- copies and views -------------------------------------------------

    def clone(self) -> NetworkGraph:
        """Structural copy: new vertices and edges, shared points and patterns.

        Segments are shared too, so the grid edge map keeps the same segment
        objects in fresh lists.
        """
        vertex_map: dict[Vertex, Vertex] = {}
        edge_map: dict[Edge, Edge] = {}
        copy = NetworkGraph(
            bundle_comparisons=dict(self.bundle_comparisons),
            grid_edge_segments={
                key: list(segments)
                for key, segments in self.grid_edge_segments.items()
            },
            cell_size=self.cell_size,
            _next_vertex_id=self._next_vertex_id,
            _next_edge_id=self._next_edge_id,
        )
        for vertex in self.vertices:
            vertex_map[vertex] = vertex.clone()
            copy.vertices.append(vertex_map[vertex])
        for edge in self.edges:
            edge_map[edge] = edge.clone(
                vertex_map[edge.from_vertex], vertex_map[edge.to_vertex]
            )
            copy.edges.append(edge_map[edge])
        for vertex in self.vertices:
            vertex_map[vertex].edges = [
                edge_map[e] for e in vertex.edges if e in edge_map
            ]
        copy.ordered_vertices = [
            vertex_map[v] for v in self.ordered_vertices if v in vertex_map
        ]
        return copy

    def to_networkx(self) -> nx.MultiGraph:
        """Undirected multigraph view keyed by vertex and edge ids."""
        G = nx.MultiGraph()
        for vertex in self.vertices:
            G.add_node(vertex.id)
        for edge in self.edges:
            G.add_edge(edge.from_vertex.id, edge.to_vertex.id, key=edge.id)
        return G

    def is_branch_acyclic(self) -> bool:
        """True when the graph is a forest (parallel edges count as cycles)."""
        if not self.vertices:
            return True
        return nx.is_forest(self.to_networkx())

    def connected_components(self) -> int:
        if not self.vertices:
            return 0
        return nx.number_connected_components(self.to_networkx())


def _insertion_index(pattern: Pattern, edge: Edge, adjacent_vertex: Vertex) -> int:
    """Position in ``pattern.graph_edges`` for an edge spliced in at ``adjacent_vertex``."""
    edges = pattern.graph_edges
    if edge not in edges:
        return len(edges)
    i = edges.index(edge)
    prev_edge = edges[i - 1] if i > 0 else None
    next_edge = edges[i + 1] if i + 1 < len(edges) else None

    if prev_edge is not None and prev_edge.touches(adjacent_vertex):
        return i
    if next_edge is not None and next_edge.touches(adjacent_vertex):
        return i + 1
    # The pattern begins or ends on this edge
    if prev_edge is not None:
        return i + 1
    if next_edge is not None:
        return i
    return i if edge.from_vertex is adjacent_vertex else i + 1
