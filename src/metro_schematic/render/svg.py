"""SVG generation for laid-out network graphs using drawsvg.

This is a preview renderer: it draws each pattern along its edges with
the bundle offsets computed by the layout, marks vertices and folded
stops, and adds a legend. Stop labels are not placed.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

import drawsvg as draw

from metro_schematic.layout.elements import Edge
from metro_schematic.layout.geometry import round_half_up
from metro_schematic.layout.graph import NetworkGraph
from metro_schematic.network.model import Pattern, RenderSegment
from metro_schematic.render.constants import (
    CANVAS_PADDING,
    GRID_UNIT,
    LEGEND_GAP,
    TITLE_HEIGHT,
    X_UNIT,
    Y_UNIT,
)
from metro_schematic.render.legend import compute_legend_dimensions, render_legend
from metro_schematic.render.style import Theme


@dataclass
class _Projection:
    """Maps layout coordinates to SVG pixels."""

    min_x: float
    min_y: float
    max_y: float
    sx: float
    sy: float
    left: float
    top: float
    flip: bool

    def __call__(self, x: float, y: float) -> tuple[float, float]:
        px = self.left + (x - self.min_x) * self.sx
        if self.flip:
            py = self.top + (self.max_y - y) * self.sy
        else:
            py = self.top + (y - self.min_y) * self.sy
        return px, py


def render_svg(
    graph: NetworkGraph,
    patterns: Sequence[Pattern],
    theme: Theme,
    mode: str = "1d",
    title: str = "",
    padding: float = CANVAS_PADDING,
) -> str:
    """Render a laid-out graph to an SVG string.

    ``mode`` must match the layout: 1-D coordinates are stop intervals and
    branch rows, 2-D coordinates are grid-snapped and drawn north-up.
    """
    if not graph.vertices:
        return '<svg xmlns="http://www.w3.org/2000/svg"></svg>'

    patterns = list(patterns)
    xs, ys = _extent(graph)
    top = padding + (TITLE_HEIGHT if title else 0.0)
    if mode == "1d":
        proj = _Projection(min(xs), min(ys), max(ys), X_UNIT, Y_UNIT, padding, top, False)
    else:
        scale = GRID_UNIT / (graph.cell_size or 1.0)
        proj = _Projection(min(xs), min(ys), max(ys), scale, scale, padding, top, True)

    content_w = (max(xs) - min(xs)) * proj.sx
    content_h = (max(ys) - min(ys)) * proj.sy
    legend_w, legend_h = compute_legend_dimensions(patterns, theme)
    svg_width = int(max(content_w, legend_w) + padding * 2)
    svg_height = int(top + content_h + padding + (legend_h + LEGEND_GAP if patterns else 0))

    d = draw.Drawing(svg_width, svg_height)
    d.append(draw.Rectangle(0, 0, svg_width, svg_height, fill=theme.background_color))

    if title:
        d.append(draw.Text(
            title,
            theme.title_font_size,
            padding, padding,
            fill=theme.title_color,
            font_family=theme.label_font_family,
            font_weight="bold",
        ))

    _render_lines(d, graph, patterns, theme, proj, mode)
    _render_stops(d, graph, theme, proj)

    render_legend(d, patterns, theme, padding, top + content_h + LEGEND_GAP)
    return d.as_svg()


def _extent(graph: NetworkGraph) -> tuple[list[float], list[float]]:
    xs = [v.x for v in graph.vertices]
    ys = [v.y for v in graph.vertices]
    for edge in graph.edges:
        for x, y in edge.render_points:
            xs.append(x)
            ys.append(y)
    return xs, ys


def _edge_points(edge: Edge) -> list[tuple[float, float]]:
    return edge.render_points or [
        (edge.from_vertex.x, edge.from_vertex.y),
        (edge.to_vertex.x, edge.to_vertex.y),
    ]


def _render_segment(edge: Edge, pattern: Pattern) -> RenderSegment | None:
    for segment in edge.render_segments:
        if segment.pattern is pattern:
            return segment
    return None


def _render_lines(
    d: draw.Drawing,
    graph: NetworkGraph,
    patterns: list[Pattern],
    theme: Theme,
    proj: _Projection,
    mode: str,
) -> None:
    """Draw every pattern leg by leg, shifted by its bundle offset."""
    lw = theme.line_width
    cell = graph.cell_size or 1.0
    for pattern in patterns:
        for edge in pattern.graph_edges:
            points = _edge_points(edge)
            segment = _render_segment(edge, pattern) if mode != "1d" else None
            for (ax, ay), (bx, by) in zip(points, points[1:]):
                ox = oy = 0.0
                if mode == "1d":
                    if ay == by:
                        oy = pattern.edge_offsets.get(edge, 0.0) * lw
                elif segment is not None:
                    if ax == bx:
                        axis = ("x", round_half_up(ax / cell) * cell)
                        ox = segment.axis_offsets.get(axis, 0.0) * lw
                    elif ay == by:
                        axis = ("y", round_half_up(ay / cell) * cell)
                        oy = -segment.axis_offsets.get(axis, 0.0) * lw
                x1, y1 = proj(ax, ay)
                x2, y2 = proj(bx, by)
                d.append(draw.Line(
                    x1 + ox, y1 + oy,
                    x2 + ox, y2 + oy,
                    stroke=pattern.color,
                    stroke_width=lw,
                    stroke_linecap="round",
                ))


def _render_stops(
    d: draw.Drawing,
    graph: NetworkGraph,
    theme: Theme,
    proj: _Projection,
) -> None:
    """Vertices as circles, folded stops as small dots along edges."""
    stop_fill = theme.stop_fill or theme.vertex_fill
    for edge in graph.edges:
        if not edge.stop_array:
            continue
        points = _edge_points(edge)
        count = len(edge.stop_array)
        for k in range(1, count + 1):
            x, y = _interpolate(points, k / (count + 1))
            px, py = proj(x, y)
            d.append(draw.Circle(
                px, py, theme.stop_radius,
                fill=stop_fill,
                stroke=theme.vertex_stroke,
                stroke_width=theme.vertex_stroke_width / 2,
            ))

    for vertex in graph.vertices:
        px, py = proj(vertex.x, vertex.y)
        d.append(draw.Circle(
            px, py, theme.vertex_radius,
            fill=theme.vertex_fill,
            stroke=theme.vertex_stroke,
            stroke_width=theme.vertex_stroke_width,
        ))


def _interpolate(
    points: list[tuple[float, float]], t: float
) -> tuple[float, float]:
    """Point at fraction ``t`` of the polyline's length."""
    lengths = [
        math.hypot(bx - ax, by - ay)
        for (ax, ay), (bx, by) in zip(points, points[1:])
    ]
    total = sum(lengths)
    if total == 0:
        return points[0]
    target = t * total
    for (ax, ay), (bx, by), length in zip(points, points[1:], lengths):
        if target <= length and length > 0:
            f = target / length
            return ax + (bx - ax) * f, ay + (by - ay) * f
        target -= length
    return points[-1]
