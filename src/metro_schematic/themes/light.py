"""Light theme for printing and light page backgrounds."""

from metro_schematic.render.style import Theme

LIGHT_THEME = Theme(
    name="light",
    background_color="#fafafa",
    vertex_fill="#ffffff",
    vertex_stroke="#222222",
    vertex_radius=6.0,
    vertex_stroke_width=2.0,
    line_width=5.0,
    label_font_family="'Helvetica Neue', Helvetica, Arial, sans-serif",
    title_color="#111111",
    title_font_size=26.0,
    legend_background="rgba(0, 0, 0, 0.05)",
    legend_text_color="#222222",
    legend_font_size=15.0,
    stop_radius=3.0,
    stop_fill="#e8e8e8",
)
