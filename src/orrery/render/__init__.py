"""pygame host for the orrery: drawing, control panel and window."""

from .assets import (
    AssetLibrary,
    get_text_surface,
    load_font,
    parse_hex_color,
)
from .draw import (
    circle_points,
    draw_body,
    draw_orbit_line,
    draw_orbit_rings,
    draw_planet_ring,
    draw_scene,
    draw_starfield,
    generate_starfield,
    project_polyline,
)
from .surface import PygameSurface
from .ui import (
    Button,
    ButtonVisualStyle,
    ControlPanel,
    build_text_panel,
)

__all__ = [
    "AssetLibrary",
    "Button",
    "ButtonVisualStyle",
    "ControlPanel",
    "PygameSurface",
    "build_text_panel",
    "circle_points",
    "draw_body",
    "draw_orbit_line",
    "draw_orbit_rings",
    "draw_planet_ring",
    "draw_scene",
    "draw_starfield",
    "generate_starfield",
    "get_text_surface",
    "load_font",
    "parse_hex_color",
    "project_polyline",
]
