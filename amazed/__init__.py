"""Random perfect maze generation and rendering toolkit."""

__all__ = [
    "AbstractMazeGenerator",
    "Maze",
    "Direction",
    "RGBColor",
    "ColorRamp",
    "RenderMode",
    "PixelBuffer",
    "Rasterizer",
    "render_maze",
    "save_buffer",
    "build_maze",
    "MazeImageGenerator",
    "MazeRecord",
]

from .base import AbstractMazeGenerator
from .maze import Direction, Maze
from .render import ColorRamp, PixelBuffer, Rasterizer, RenderMode, RGBColor, render_maze, save_buffer
from .builder import MazeImageGenerator, MazeRecord, build_maze
