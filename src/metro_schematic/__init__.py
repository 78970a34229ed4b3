"""metro-schematic: Lay out transit networks as schematic metro-map diagrams."""

__version__ = "0.1.0"
