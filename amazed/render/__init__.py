"""Color ramps, rasterization and image output for labeled mazes."""

__all__ = [
    "BLACK",
    "WHITE",
    "RGBColor",
    "ColorRamp",
    "ramp",
    "dual_ramp",
    "expand_palette",
    "parse_color",
    "random_color",
    "RenderMode",
    "DEFAULT_MODE",
    "PixelBuffer",
    "Rasterizer",
    "render_maze",
    "save_buffer",
    "to_image",
]

from .color import BLACK, WHITE, ColorRamp, RGBColor, dual_ramp, expand_palette, parse_color, random_color, ramp
from .rasterizer import DEFAULT_MODE, PixelBuffer, Rasterizer, RenderMode, render_maze
from .sink import save_buffer, to_image
