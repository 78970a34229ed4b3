"""Pattern legend for schematic SVGs.

One row per pattern: a short stretch of line with a vertex marker in its
color, followed by the pattern name and how many stops it serves.
"""

from __future__ import annotations

from collections.abc import Sequence

import drawsvg as draw

from metro_schematic.network.model import Pattern
from metro_schematic.render.constants import (
    LEGEND_BORDER_RADIUS,
    LEGEND_CHAR_WIDTH_RATIO,
    LEGEND_LINE_HEIGHT,
    LEGEND_PADDING,
    LEGEND_SWATCH_WIDTH,
    LEGEND_TEXT_GAP,
)
from metro_schematic.render.style import Theme


def _entry_label(pattern: Pattern) -> str:
    label = pattern.name or pattern.id
    if pattern.stop_ids:
        label += f" ({len(pattern.stop_ids)} stops)"
    return label


def compute_legend_dimensions(
    patterns: Sequence[Pattern], theme: Theme
) -> tuple[float, float]:
    """(width, height) of the legend box; (0, 0) without patterns."""
    if not patterns:
        return (0.0, 0.0)

    longest = max(len(_entry_label(p)) for p in patterns)
    text_width = longest * theme.legend_font_size * LEGEND_CHAR_WIDTH_RATIO
    width = 2 * LEGEND_PADDING + LEGEND_SWATCH_WIDTH + LEGEND_TEXT_GAP + text_width
    height = 2 * LEGEND_PADDING + LEGEND_LINE_HEIGHT * len(patterns)
    return (width, height)


def render_legend(
    drawing: draw.Drawing,
    patterns: Sequence[Pattern],
    theme: Theme,
    x: float,
    y: float,
) -> None:
    """Draw the legend with its top-left corner at (x, y)."""
    if not patterns:
        return

    width, height = compute_legend_dimensions(patterns, theme)
    drawing.append(draw.Rectangle(
        x, y, width, height,
        rx=LEGEND_BORDER_RADIUS,
        ry=LEGEND_BORDER_RADIUS,
        fill=theme.legend_background,
    ))

    swatch_x1 = x + LEGEND_PADDING
    swatch_x2 = swatch_x1 + LEGEND_SWATCH_WIDTH
    text_x = swatch_x2 + LEGEND_TEXT_GAP
    marker_radius = min(theme.vertex_radius, LEGEND_LINE_HEIGHT / 4)

    row_y = y + LEGEND_PADDING + LEGEND_LINE_HEIGHT / 2
    for pattern in patterns:
        group = draw.Group()
        group.append(draw.Line(
            swatch_x1, row_y, swatch_x2, row_y,
            stroke=pattern.color,
            stroke_width=theme.line_width,
            stroke_linecap="round",
        ))
        group.append(draw.Circle(
            (swatch_x1 + swatch_x2) / 2, row_y, marker_radius,
            fill=theme.vertex_fill,
            stroke=pattern.color,
            stroke_width=theme.vertex_stroke_width,
        ))
        group.append(draw.Text(
            _entry_label(pattern),
            theme.legend_font_size,
            text_x, row_y,
            fill=theme.legend_text_color,
            font_family=theme.label_font_family,
            dominant_baseline="central",
        ))
        drawing.append(group)
        row_y += LEGEND_LINE_HEIGHT
