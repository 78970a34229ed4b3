"""Pure geometry helpers: projection, medians, rounding and vectors."""

from __future__ import annotations

__all__ = [
    "arrays_equal",
    "median",
    "normalize",
    "round_half_up",
    "sign",
    "spherical_mercator",
]

import math
from collections.abc import Iterable, Sequence

from metro_schematic.layout.constants import EARTH_RADIUS


def spherical_mercator(
    lat: float, lon: float, radius: float = EARTH_RADIUS
) -> tuple[float, float]:
    """Convert lat/lon degrees to spherical-mercator meter coordinates."""
    x = radius * lon * math.pi / 180
    y = radius * math.log(math.tan(math.pi / 4 + lat * math.pi / 360))
    return x, y


def median(values: Iterable[float]) -> float:
    """Median of a numeric sequence (mean of the middle pair for even counts).

    Raises ValueError for an empty sequence.
    """
    ordered = sorted(values)
    if not ordered:
        raise ValueError("median of an empty sequence")
    half = len(ordered) // 2
    if len(ordered) % 2:
        return ordered[half]
    return (ordered[half - 1] + ordered[half]) / 2.0


def arrays_equal(a: Sequence, b: Sequence) -> bool:
    """Element-wise equality of two sequences, regardless of their types."""
    if len(a) != len(b):
        return False
    return all(x == y for x, y in zip(a, b))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 always rounding up."""
    return math.floor(value + 0.5)


def normalize(dx: float, dy: float) -> tuple[float, float]:
    """Unit vector in the direction (dx, dy); zero vector stays zero."""
    length = math.hypot(dx, dy)
    if length == 0:
        return 0.0, 0.0
    return dx / length, dy / length


def sign(value: float) -> int:
    if value > 0:
        return 1
    if value < 0:
        return -1
    return 0
