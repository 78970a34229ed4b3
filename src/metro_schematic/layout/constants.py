"""Layout constants used across layout modules.

Centralizes the numbers shared by the graph, linearizer, bundler, snapper
and engine.
"""

# ---------------------------------------------------------------------------
# Projection
# ---------------------------------------------------------------------------
EARTH_RADIUS: float = 6378137.0
"""Spherical-mercator earth radius in meters."""

# ---------------------------------------------------------------------------
# Simplification
# ---------------------------------------------------------------------------
TRANSFER_THRESHOLD: float = 200.0
"""Maximum length (projected meters) of a walk edge merged by collapse_transfers."""

# ---------------------------------------------------------------------------
# Bundling
# ---------------------------------------------------------------------------
LINE_SPACING: float = 1.2
"""Distance between adjacent lines in a bundle, in line-width units."""

# ---------------------------------------------------------------------------
# Grid snapping
# ---------------------------------------------------------------------------
DEFAULT_CELL_SIZE: float = 100.0
"""Grid cell size used by the 2-D pipeline."""

SNAP_SEARCH_RADIUS: int = 3
"""Cells searched in each direction when a snapped vertex collides."""

# ---------------------------------------------------------------------------
# Segment types
# ---------------------------------------------------------------------------
TRANSIT: str = "TRANSIT"
WALK: str = "WALK"

# ---------------------------------------------------------------------------
# Label side hints (set by 1-D layout)
# ---------------------------------------------------------------------------
LABEL_ABOVE: int = -1
LABEL_BELOW: int = 1
