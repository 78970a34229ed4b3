"""Bundle offsets: lateral separation of lines that share an edge.

Where lines diverge (a vertex with three or more edges), every pair of
lines sharing an incoming edge is compared by where each goes next. The
line heading to the lower far vertex should sit on the lower side of the
bundle, so it collects a vote against the other. The accumulated votes
order each bundle; they are a heuristic and need not be transitive, so the
sort is a stable sort and results only depend on input order.
"""

from __future__ import annotations

__all__ = ["apply_1d_offsets", "apply_2d_offsets", "bundle_order", "collect_votes"]

import functools
import logging
from collections import defaultdict
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from metro_schematic.layout.constants import LINE_SPACING, TRANSIT
from metro_schematic.layout.elements import Edge, GridEdge
from metro_schematic.layout.graph import NetworkGraph

logger = logging.getLogger(__name__)

AxisKey = tuple[str, float]


def collect_votes(
    graph: NetworkGraph, members: Callable[[Edge], Sequence[Any]]
) -> None:
    """Accumulate pairwise bundle votes at every divergence vertex.

    ``members`` returns the bundled objects (patterns or render segments)
    travelling along an edge; each must offer ``get_adjacent_edge``.
    """
    for vertex in graph.vertices:
        if len(vertex.edges) <= 2:
            continue
        for edge in vertex.edges:
            bundled = members(edge)
            if len(bundled) < 2:
                continue
            dx = edge.to_vertex.x - edge.from_vertex.x
            for i in range(len(bundled)):
                for j in range(i + 1, len(bundled)):
                    p1, p2 = bundled[i], bundled[j]
                    adj1 = p1.get_adjacent_edge(edge, vertex)
                    adj2 = p2.get_adjacent_edge(edge, vertex)
                    if adj1 is None or adj2 is None or adj1 is adj2:
                        continue
                    y1 = adj1.opposite_vertex(vertex).y
                    y2 = adj2.opposite_vertex(vertex).y
                    if dx > 0 and y1 < y2:
                        graph.bundle_comparison(p2, p1)
                    elif dx > 0 and y1 > y2:
                        graph.bundle_comparison(p1, p2)
                    elif dx < 0 and y1 < y2:
                        graph.bundle_comparison(p1, p2)
                    elif dx < 0 and y1 > y2:
                        graph.bundle_comparison(p2, p1)


def bundle_order(graph: NetworkGraph, members: Iterable[Any]) -> list[Any]:
    """Sort bundle members by the vote table.

    A negative vote count for ``(a, b)`` puts ``a`` first. Ties and
    unrelated pairs keep their input order.
    """

    def compare(a: Any, b: Any) -> int:
        value = graph.bundle_comparisons.get((a.id, b.id), 0)
        if value < 0:
            return -1
        if value > 0:
            return 1
        return 0

    return sorted(members, key=functools.cmp_to_key(compare))


def apply_1d_offsets(
    graph: NetworkGraph, spacing: float = LINE_SPACING
) -> dict[tuple[int, str], float]:
    """Compute per-pattern offsets for a linear (1-D) layout.

    Only horizontal edges are offset. Bundles are centered on the edge:
    N patterns get offsets ``(i - (N-1)/2) * spacing`` by sorted position.

    Returns dict mapping (edge_id, pattern_id) -> offset.
    """
    graph.bundle_comparisons = {}
    collect_votes(graph, lambda edge: edge.patterns)

    offsets: dict[tuple[int, str], float] = {}
    by_size = sorted(graph.edges, key=lambda e: len(e.patterns), reverse=True)
    for edge in by_size:
        if edge.to_vertex.y != edge.from_vertex.y or not edge.patterns:
            continue
        if len(edge.patterns) == 1:
            pattern = edge.patterns[0]
            pattern.set_edge_offset(edge, 0)
            offsets[(edge.id, pattern.id)] = 0.0
            continue

        count = len(edge.patterns)
        for i, pattern in enumerate(bundle_order(graph, edge.patterns)):
            offset = (i - (count - 1) / 2) * spacing
            pattern.set_edge_offset(edge, offset, i, True)
            offsets[(edge.id, pattern.id)] = offset
    return offsets


def apply_2d_offsets(
    graph: NetworkGraph,
    render_segments: Sequence[Any],
    cell_size: float,
    spacing: float = LINE_SPACING,
) -> dict[tuple[str, AxisKey], float]:
    """Compute per-segment offsets for a grid (2-D) layout.

    Segments are grouped by the grid axis their grid edges run along
    (``("x", x)`` for vertical runs, ``("y", y)`` for horizontal ones).
    Each axis bundle is ordered by the vote table and spread symmetrically;
    the sign follows the direction of the segment's first edge so offsets
    stay on a consistent side when reading along the line.

    Returns dict mapping (segment_id, axis) -> offset.
    """
    graph.bundle_comparisons = {}
    collect_votes(graph, lambda edge: edge.render_segments)

    for edge in graph.edges:
        edge.calculate_grid_edges(cell_size)

    grid_edge_segments: dict[GridEdge, list[Any]] = {}
    for segment in render_segments:
        segment.grid_edge_lookup = {}
        for edge in segment.graph_edges:
            for grid_edge in edge.grid_edges:
                segment_list = grid_edge_segments.setdefault(grid_edge, [])
                if segment not in segment_list:
                    segment_list.append(segment)
                    segment.grid_edge_lookup[grid_edge] = edge
    graph.grid_edge_segments = grid_edge_segments

    axis_bundles: dict[AxisKey, list[Any]] = defaultdict(list)
    for grid_edge, segments in grid_edge_segments.items():
        axis = _grid_edge_axis(grid_edge)
        if axis is None:
            continue
        for segment in segments:
            _add_segment_to_axis(segment, axis_bundles[axis])

    offsets: dict[tuple[str, AxisKey], float] = {}
    for axis, segments in axis_bundles.items():
        bundle_width = spacing * (len(segments) - 1)
        for s, segment in enumerate(bundle_order(graph, segments)):
            offset = -bundle_width / 2 + s * spacing
            if not _reads_forward(segment, axis):
                offset = -offset
            segment.set_axis_offset(axis, offset)
            offsets[(segment.id, axis)] = offset

    logger.debug(
        "Bundled %d segments on %d grid axes", len(render_segments), len(axis_bundles)
    )
    return offsets


def _grid_edge_axis(grid_edge: GridEdge) -> AxisKey | None:
    x1, y1, x2, y2 = grid_edge
    if x1 == x2:
        return ("x", x1)
    if y1 == y2:
        return ("y", y1)
    # Diagonal grid edges are not bundled
    return None


def _add_segment_to_axis(segment: Any, axis_segments: list[Any]) -> None:
    """Keep TRANSIT segments only, at most one per pattern on an axis."""
    if segment.type != TRANSIT or segment in axis_segments:
        return
    if segment.pattern is not None:
        for other in axis_segments:
            if other.pattern is not None and other.pattern.id == segment.pattern.id:
                return
    axis_segments.append(segment)


def _reads_forward(segment: Any, axis: AxisKey) -> bool:
    if not segment.graph_edges:
        return True
    edge = segment.graph_edges[0]
    dx = edge.to_vertex.x - edge.from_vertex.x
    dy = edge.to_vertex.y - edge.from_vertex.y
    return (axis[0] == "x" and dy > 0) or (axis[0] == "y" and dx > 0)
