"""Transit network model and loader."""

from metro_schematic.network.model import (
    MultiPoint,
    Network,
    PathSegment,
    Pattern,
    RenderSegment,
    Stop,
)

__all__ = [
    "MultiPoint",
    "Network",
    "PathSegment",
    "Pattern",
    "RenderSegment",
    "Stop",
]
