"""Grid snapping for the 2-D layout.

Vertices are quantized to the nearest grid cell, starting with the one
closest to the median point and spreading through the graph depth first.
A vertex whose cell is taken (by another vertex or by the path of an
already-snapped edge) moves to the nearest free cell within a small
neighbourhood. When the whole neighbourhood is taken the vertex keeps
its rounded cell; there is no global search.
"""

from __future__ import annotations

__all__ = ["snap_to_grid", "snap_vertex"]

import logging
import math
from collections.abc import Iterator

from metro_schematic.layout.constants import SNAP_SEARCH_RADIUS
from metro_schematic.layout.elements import Edge, GridPoint, Vertex
from metro_schematic.layout.geometry import median, round_half_up
from metro_schematic.layout.graph import NetworkGraph
from metro_schematic.layout.queue import PriorityQueue

logger = logging.getLogger(__name__)

Occupancy = dict[GridPoint, Vertex | Edge]


def snap_to_grid(
    graph: NetworkGraph,
    cell_size: float,
    search_radius: int = SNAP_SEARCH_RADIUS,
) -> Occupancy:
    """Move every vertex onto the grid, avoiding shared cells where possible.

    Sets ``graph.cell_size`` and ``graph.ordered_vertices`` (vertices by
    distance from the median point, nearest first). Returns the grid
    occupancy map (cell indices -> occupying vertex or edge).
    """
    graph.cell_size = cell_size
    graph.recenter()
    coords: Occupancy = {}
    if not graph.vertices:
        graph.ordered_vertices = []
        return coords

    mx = median(v.x for v in graph.vertices)
    my = median(v.y for v in graph.vertices)

    vertex_queue: PriorityQueue[Vertex] = PriorityQueue()
    for vertex in graph.vertices:
        vertex_queue.enqueue(vertex, math.hypot(vertex.x - mx, vertex.y - my))

    graph.ordered_vertices = []
    while vertex_queue:
        graph.ordered_vertices.append(vertex_queue.dequeue())

    # Disconnected components are started from their most central vertex
    for vertex in graph.ordered_vertices:
        if not vertex.snapped:
            snap_vertex(graph, vertex, None, coords, search_radius)
    return coords


def snap_vertex(
    graph: NetworkGraph,
    vertex: Vertex,
    in_edge: Edge | None,
    coords: Occupancy,
    search_radius: int = SNAP_SEARCH_RADIUS,
) -> None:
    """Snap ``vertex`` and then, depth first, every unsnapped vertex beyond it.

    Neighbours are visited through incident edges in incidence order,
    skipping ``in_edge``. Requires ``graph.cell_size`` to be set.
    """
    if vertex.snapped:
        return
    cell_size = graph.cell_size
    if not cell_size:
        raise ValueError("snap_vertex requires graph.cell_size")

    _place_vertex(vertex, coords, cell_size, search_radius)
    stack: list[tuple[Vertex, Iterator[Edge]]] = [
        (vertex, iter(vertex.incident_edges(in_edge)))
    ]
    while stack:
        current, pending = stack[-1]
        edge = next(pending, None)
        if edge is None:
            stack.pop()
            continue
        opp_vertex = edge.opposite_vertex(current)
        if opp_vertex is None or opp_vertex.snapped:
            continue
        _place_vertex(opp_vertex, coords, cell_size, search_radius)
        stack.append((opp_vertex, iter(opp_vertex.incident_edges(edge))))


def _place_vertex(
    vertex: Vertex, coords: Occupancy, cell_size: float, search_radius: int
) -> None:
    cell = (round_half_up(vertex.x / cell_size), round_half_up(vertex.y / cell_size))
    if cell in coords:
        cell = _nearest_free_cell(cell, coords, search_radius)
    coords[cell] = vertex

    vertex.move_to(cell[0] * cell_size, cell[1] * cell_size)
    vertex.snapped = True

    # Reserve the cells crossed by edges that are now fixed at both ends
    for edge in vertex.edges:
        if edge.from_vertex.snapped and edge.to_vertex.snapped:
            for point in edge.grid_points(cell_size):
                coords[point] = edge


def _nearest_free_cell(
    cell: GridPoint, coords: Occupancy, radius: int
) -> GridPoint:
    """Closest unoccupied cell within ``radius``; ``cell`` itself if none is free."""
    candidates: PriorityQueue[GridPoint] = PriorityQueue()
    for xr in range(-radius, radius + 1):
        for yr in range(-radius, radius + 1):
            if xr == 0 and yr == 0:
                continue
            candidates.enqueue((cell[0] + xr, cell[1] + yr), math.hypot(xr, yr))

    while candidates:
        candidate = candidates.dequeue()
        if candidate not in coords:
            return candidate
    logger.debug("No free grid cell within %d of %s; sharing it", radius, cell)
    return cell
