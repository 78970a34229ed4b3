"""Layout engine: runs the 1-D or 2-D pipeline over a network graph.

1-D: collapse transfers -> linearize -> 1-D bundle offsets -> geometry.
2-D: collapse transfers -> grid snap -> curvature -> geometry ->
2-D bundle offsets.
"""

from __future__ import annotations

__all__ = ["LayoutResult", "compute_layout"]

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from metro_schematic.layout.bundling import apply_2d_offsets
from metro_schematic.layout.constants import DEFAULT_CELL_SIZE, TRANSFER_THRESHOLD
from metro_schematic.layout.curvature import optimize_curvature
from metro_schematic.layout.graph import NetworkGraph
from metro_schematic.layout.linearize import convert_to_1d
from metro_schematic.layout.snapping import snap_to_grid

logger = logging.getLogger(__name__)

MODES = ("1d", "2d")


@dataclass
class LayoutResult:
    """Summary of one layout pass."""

    mode: str
    cell_size: float | None = None
    collapsed: int = 0
    aligned: int = 0
    # (edge_id, pattern_id) or (segment_id, axis) -> offset
    offsets: dict[tuple, float] = field(default_factory=dict)


def compute_layout(
    graph: NetworkGraph,
    mode: str = "1d",
    cell_size: float = DEFAULT_CELL_SIZE,
    render_segments: Sequence[Any] | None = None,
    collapse: bool = True,
    transfer_threshold: float = TRANSFER_THRESHOLD,
) -> LayoutResult:
    """Lay out ``graph`` in place.

    Args:
        graph: The network graph, with geographic (projected) coordinates.
        mode: ``"1d"`` for a linear diagram, ``"2d"`` for a grid diagram.
        cell_size: Grid cell size for the 2-D pipeline.
        render_segments: Segments to bundle in 2-D mode. Defaults to every
            render segment found on the graph's edges.
        collapse: Merge short walk transfers before laying out.
        transfer_threshold: Longest walk edge merged by the collapse step.
    """
    if mode not in MODES:
        raise ValueError(f"Unknown layout mode {mode!r}; expected one of {MODES}")

    result = LayoutResult(mode=mode)
    if collapse:
        result.collapsed = graph.collapse_transfers(transfer_threshold)

    if mode == "1d":
        result.offsets = dict(convert_to_1d(graph))
        graph.calculate_geometry()
    else:
        result.cell_size = cell_size
        snap_to_grid(graph, cell_size)
        result.aligned = optimize_curvature(graph)
        graph.calculate_geometry(cell_size)
        if render_segments is None:
            render_segments = _graph_render_segments(graph)
        result.offsets = dict(apply_2d_offsets(graph, render_segments, cell_size))

    logger.info(
        "Laid out %d vertices, %d edges (%s)",
        len(graph.vertices),
        len(graph.edges),
        mode,
    )
    return result


def _graph_render_segments(graph: NetworkGraph) -> list[Any]:
    segments: list[Any] = []
    seen: set[int] = set()
    for edge in graph.edges:
        for segment in edge.render_segments:
            if id(segment) not in seen:
                seen.add(id(segment))
                segments.append(segment)
    return segments
