"""SVG rendering of laid-out network graphs."""

from metro_schematic.render.svg import render_svg

__all__ = ["render_svg"]
