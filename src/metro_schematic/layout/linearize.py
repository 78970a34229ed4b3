"""Linear (1-D) layout of a branch-acyclic network.

The edge carrying the most patterns becomes the trunk and is laid along
the x-axis starting at the origin. The layout then grows outward from
both trunk ends: a single continuation stays on the current row, and at a
branch point the first edge continues straight while every later edge is
bent onto its own row below.
"""

from __future__ import annotations

__all__ = ["convert_to_1d", "extend_1d", "select_trunk"]

import logging

from metro_schematic.layout.bundling import apply_1d_offsets
from metro_schematic.layout.constants import LABEL_ABOVE, LABEL_BELOW
from metro_schematic.layout.elements import Edge, Vertex
from metro_schematic.layout.graph import NetworkGraph

logger = logging.getLogger(__name__)


def select_trunk(graph: NetworkGraph) -> Edge | None:
    """First edge with the largest number of patterns."""
    trunk: Edge | None = None
    max_patterns = -1
    for edge in graph.edges:
        if len(edge.patterns) > max_patterns:
            trunk = edge
            max_patterns = len(edge.patterns)
    return trunk


def convert_to_1d(graph: NetworkGraph) -> dict[tuple[int, str], float]:
    """Lay the graph out as a linear diagram and bundle its patterns.

    Vertices get integer-spaced x positions (one unit per stop) and row
    numbers as y. Returns the per-(edge, pattern) offsets computed by
    :func:`apply_1d_offsets`.
    """
    if not graph.edges:
        return {}

    if not graph.is_branch_acyclic():
        logger.warning(
            "Graph contains cycles; branches closing a cycle will not be laid out"
        )

    trunk = select_trunk(graph)
    explored: set[Vertex] = {trunk.from_vertex, trunk.to_vertex}
    trunk.set_label_position(LABEL_ABOVE)

    # Direction of the trunk decides which end reads as "left"
    ll_dir = trunk.to_vertex.x - trunk.from_vertex.x
    if ll_dir == 0:
        ll_dir = trunk.to_vertex.y - trunk.from_vertex.y

    trunk_length = len(trunk.stop_array) + 1
    if ll_dir > 0:
        trunk.from_vertex.move_to(0, 0)
        trunk.to_vertex.move_to(trunk_length, 0)
        extend_1d(graph, trunk, trunk.from_vertex, -1, 0, explored)
        extend_1d(graph, trunk, trunk.to_vertex, 1, 0, explored)
    else:
        trunk.to_vertex.move_to(0, 0)
        trunk.from_vertex.move_to(trunk_length, 0)
        extend_1d(graph, trunk, trunk.from_vertex, 1, 0, explored)
        extend_1d(graph, trunk, trunk.to_vertex, -1, 0, explored)

    return apply_1d_offsets(graph)


def extend_1d(
    graph: NetworkGraph,
    edge: Edge,
    vertex: Vertex,
    direction: int,
    y: float,
    explored: set[Vertex],
) -> None:
    """Place everything reachable from ``vertex`` without crossing ``edge``.

    ``direction`` is +1 (rightward) or -1 (leftward); ``y`` is the row of
    the line arriving at ``vertex``. A vertex already in ``explored`` means
    the graph closes a cycle here: the branch is skipped with a warning.
    """
    # Follow unbranched runs iteratively so long lines stay off the stack
    while True:
        edges = vertex.incident_edges(edge)
        if not edges:
            return
        if len(edges) > 1:
            break

        ext_edge = edges[0]
        opp_vertex = ext_edge.opposite_vertex(vertex)
        ext_edge.set_label_position(_label_side(y))
        if opp_vertex in explored:
            logger.warning("Found cycle in 1-D graph at vertex %s", opp_vertex.id)
            return
        explored.add(opp_vertex)

        opp_vertex.move_to(vertex.x + (len(ext_edge.stop_array) + 1) * direction, y)
        edge, vertex = ext_edge, opp_vertex

    for i, ext_edge in enumerate(edges):
        opp_vertex = ext_edge.opposite_vertex(vertex)
        if opp_vertex in explored:
            logger.warning(
                "Found cycle in 1-D graph (branch) at vertex %s", opp_vertex.id
            )
            continue
        explored.add(opp_vertex)

        # The first branch continues the current line
        if i == 0:
            opp_vertex.move_to(
                vertex.x + (len(ext_edge.stop_array) + 1) * direction, y
            )
            ext_edge.set_label_position(_label_side(y))
            extend_1d(graph, ext_edge, opp_vertex, direction, y, explored)
            continue

        branch_y = y + i
        if not ext_edge.stop_array:
            opp_vertex.move_to(vertex.x + direction, branch_y)
            continue

        # Peel the stop nearest the branch point off into a new vertex
        if ext_edge.from_vertex is vertex:
            branch_stop = ext_edge.stop_array.pop(0)
        else:
            branch_stop = ext_edge.stop_array.pop()
        new_vertex = graph.add_vertex(branch_stop, vertex.x + direction, branch_y)
        graph.split_edge(ext_edge, new_vertex, vertex)
        ext_edge.set_label_position(_label_side(branch_y))

        opp_vertex.move_to(
            new_vertex.x + (len(ext_edge.stop_array) + 1) * direction, branch_y
        )
        extend_1d(graph, ext_edge, opp_vertex, direction, branch_y, explored)


def _label_side(y: float) -> int:
    return LABEL_BELOW if y > 0 else LABEL_ABOVE
