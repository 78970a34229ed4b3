"""Render constants used across render modules.

Theme-dependent values remain in style.py.
"""

# ---------------------------------------------------------------------------
# Canvas
# ---------------------------------------------------------------------------
CANVAS_PADDING: float = 60.0
"""Margin between the drawing and the canvas edge."""

TITLE_HEIGHT: float = 40.0
"""Vertical space reserved for the title."""

LEGEND_GAP: float = 30.0
"""Space between the bottom of the diagram and the legend."""

# ---------------------------------------------------------------------------
# Scale
# ---------------------------------------------------------------------------
X_UNIT: float = 40.0
"""Pixels per stop interval in 1-D diagrams."""

Y_UNIT: float = 40.0
"""Pixels per branch row in 1-D diagrams."""

GRID_UNIT: float = 40.0
"""Pixels per grid cell in 2-D diagrams."""

# ---------------------------------------------------------------------------
# Legend
# ---------------------------------------------------------------------------
LEGEND_LINE_HEIGHT: float = 24.0
"""Row height of one pattern entry."""

LEGEND_PADDING: float = 12.0
"""Space between the legend border and its rows."""

LEGEND_SWATCH_WIDTH: float = 24.0
"""Length of the line sample drawn for each pattern."""

LEGEND_TEXT_GAP: float = 12.0
"""Space between the line sample and the pattern label."""

LEGEND_CHAR_WIDTH_RATIO: float = 0.48
"""Approximate glyph width relative to font size, used to size the box."""

LEGEND_BORDER_RADIUS: int = 6
"""Rounding of the legend box corners."""
