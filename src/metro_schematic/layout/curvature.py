"""Curvature optimization: straighten lines through grid-axis anchors.

Axial edges (running exactly along a grid axis) anchor the pass. Edges
continuing the same line through an anchor's endpoints are aligned with
it first, so the line leaves the vertex in the direction it arrived.
Remaining transit edges at those vertices then leave perpendicular to the
anchor. An edge is aligned at most once.
"""

from __future__ import annotations

__all__ = ["optimize_curvature"]

from typing import Any

from metro_schematic.layout.constants import TRANSIT
from metro_schematic.layout.elements import Edge, Vertex
from metro_schematic.layout.graph import NetworkGraph


def optimize_curvature(graph: NetworkGraph) -> int:
    """Align edges around axial anchors. Returns the number of edges aligned."""
    before = sum(1 for edge in graph.edges if edge.aligned)

    for edge in graph.edges:
        if not edge.is_axial():
            continue
        for segment in edge.render_segments:
            if segment.type == TRANSIT:
                _align_pattern_incident_edges(edge.from_vertex, edge, segment.pattern)
                _align_pattern_incident_edges(edge.to_vertex, edge, segment.pattern)

    for edge in graph.edges:
        if not edge.is_axial():
            continue
        if any(segment.type == TRANSIT for segment in edge.render_segments):
            _align_other_incident_edges(edge.from_vertex, edge)
            _align_other_incident_edges(edge.to_vertex, edge)

    return sum(1 for edge in graph.edges if edge.aligned) - before


def _align_pattern_incident_edges(vertex: Vertex, in_edge: Edge, pattern: Any) -> None:
    for edge in vertex.incident_edges(in_edge):
        if edge.aligned:
            continue
        if any(
            segment.type == TRANSIT and segment.pattern is pattern
            for segment in edge.render_segments
        ):
            edge.align(vertex, in_edge.vector(vertex))


def _align_other_incident_edges(vertex: Vertex, in_edge: Edge) -> None:
    for edge in vertex.incident_edges(in_edge):
        if edge.aligned:
            continue
        if any(segment.type == TRANSIT for segment in edge.render_segments):
            vx, vy = in_edge.vector(vertex)
            edge.align(vertex, (vy, -vx))
