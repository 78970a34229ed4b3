"""Dark theme (default): white vertices on a charcoal background."""

from metro_schematic.render.style import Theme

DARK_THEME = Theme(
    name="dark",
    background_color="#2b2b2b",
    vertex_fill="#ffffff",
    vertex_stroke="#333333",
    vertex_radius=5.0,
    vertex_stroke_width=1.5,
    line_width=3.0,
    label_font_family="'Helvetica Neue', Helvetica, Arial, sans-serif",
    title_color="#ffffff",
    title_font_size=24.0,
    legend_background="rgba(0, 0, 0, 0.3)",
    legend_text_color="#e0e0e0",
    legend_font_size=14.0,
)
