"""Theme and style constants for schematic rendering."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Theme:
    """Visual theme for a schematic diagram."""

    name: str
    background_color: str
    vertex_fill: str
    vertex_stroke: str
    vertex_radius: float
    vertex_stroke_width: float
    line_width: float
    label_font_family: str
    title_color: str
    title_font_size: float
    legend_background: str
    legend_text_color: str
    legend_font_size: float
    # Intermediate stops (folded into edges) are drawn smaller
    stop_radius: float = 2.5
    stop_fill: str = ""  # empty = inherit vertex_fill
