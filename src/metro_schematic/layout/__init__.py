"""Layout engine for schematic transit diagrams."""

from metro_schematic.layout.engine import LayoutResult, compute_layout
from metro_schematic.layout.graph import NetworkGraph

__all__ = ["LayoutResult", "NetworkGraph", "compute_layout"]
