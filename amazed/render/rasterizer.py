"""Turn a labeled maze into a 32-bit pixel buffer.

Pixels are packed ``red<<24 | green<<16 | blue<<8`` with the low byte left at
zero. Buffers are row-major with the origin at the top left.

Wall layout: cell ``(r, c)`` owns the 2x2 block starting at pixel
``(2r, 2c)``::

    corner     north
    west       interior

The corner is always background, north/west are open iff the passage exists,
and the interior takes the open color. Column ``2*width`` closes each cell
row with the east border of the last cell and row ``2*height`` is background.
"""

from __future__ import annotations

from enum import IntFlag
from typing import Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np

from ..maze.grid import Direction, Maze
from .color import BLACK, WHITE, ColorRamp, RGBColor


class RenderMode(IntFlag):
    WALLS = 0x01
    SHADED = 0x02

    @classmethod
    def parse(cls, names: Iterable[str]) -> "RenderMode":
        """OR together mode names such as ``["walls", "shaded"]``."""
        mode = cls(0)
        for name in names:
            try:
                mode |= cls[name.upper()]
            except KeyError as exc:
                raise ValueError(f"Unknown render mode '{name}'; choose from walls, shaded") from exc
        return mode

    def names(self) -> List[str]:
        return [member.name.lower() for member in RenderMode if member in self]


DEFAULT_MODE = RenderMode.WALLS | RenderMode.SHADED


class PixelBuffer:
    """Row-major ``uint32`` pixel storage with checked addressing."""

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("PixelBuffer dimensions must be positive")
        self.width = int(width)
        self.height = int(height)
        self.pixels = np.zeros((self.height, self.width), dtype=np.uint32)

    def __repr__(self) -> str:
        return f"PixelBuffer(width={self.width}, height={self.height})"

    @property
    def shape(self):
        return self.pixels.shape

    def index(self, row: int, col: int) -> int:
        """Flat offset of ``(row, col)`` in the row-major buffer."""
        assert 0 <= row < self.height, f"row {row} outside 0..{self.height - 1}"
        assert 0 <= col < self.width, f"col {col} outside 0..{self.width - 1}"
        return row * self.width + col

    def __getitem__(self, position) -> int:
        row, col = position
        return int(self.pixels.flat[self.index(row, col)])

    def __setitem__(self, position, value: Union[int, RGBColor]) -> None:
        row, col = position
        if isinstance(value, RGBColor):
            value = value.pack()
        self.pixels.flat[self.index(row, col)] = value

    def fill(self, value: Union[int, RGBColor]) -> None:
        if isinstance(value, RGBColor):
            value = value.pack()
        self.pixels.fill(value)

    def tobytes(self) -> bytes:
        """Big-endian bytes, i.e. R, G, B, X per pixel."""
        return self.pixels.astype(">u4").tobytes()


def buffer_size(maze: Maze, mode: RenderMode) -> Tuple[int, int]:
    """``(width, height)`` of the buffer produced for ``mode``."""
    if mode & RenderMode.WALLS:
        return 2 * maze.width + 1, 2 * maze.height + 1
    return maze.width, maze.height


class Rasterizer:
    """Render a labeled maze in one of the supported modes."""

    BACKGROUND: RGBColor = BLACK
    OPEN_COLOR: RGBColor = WHITE

    def __init__(
        self,
        mode: RenderMode = DEFAULT_MODE,
        colors: Optional[Sequence[RGBColor]] = None,
        *,
        threshold: Optional[int] = None,
    ) -> None:
        mode = RenderMode(mode)
        if not mode & (RenderMode.WALLS | RenderMode.SHADED):
            raise ValueError("render mode must include WALLS, SHADED or both")
        self.mode = mode
        self.colors = list(colors) if colors else [BLACK, WHITE]
        self.threshold = threshold

    def render(self, maze: Maze) -> PixelBuffer:
        shader = ColorRamp(self.colors, maze.max_distance, threshold=self.threshold)
        if self.mode & RenderMode.WALLS:
            if self.mode & RenderMode.SHADED:
                return self._render_walls(maze, shader)
            return self._render_walls(maze, None)
        return self._render_shaded(maze, shader)

    def _render_shaded(self, maze: Maze, shader: ColorRamp) -> PixelBuffer:
        buffer = PixelBuffer(*buffer_size(maze, RenderMode.SHADED))
        for cell in maze:
            buffer[cell.row, cell.col] = shader(cell.dist_from_start)
        return buffer

    def _render_walls(self, maze: Maze, shader: Optional[ColorRamp]) -> PixelBuffer:
        width, height = buffer_size(maze, RenderMode.WALLS)
        buffer = PixelBuffer(width, height)
        background = self.BACKGROUND.pack()
        for cell in maze:
            top, left = 2 * cell.row, 2 * cell.col
            color = (shader(cell.dist_from_start) if shader is not None else self.OPEN_COLOR).pack()
            buffer[top, left] = background
            buffer[top, left + 1] = color if cell.is_open(Direction.N) else background
            buffer[top + 1, left] = color if cell.is_open(Direction.W) else background
            buffer[top + 1, left + 1] = color
            if cell.col == maze.width - 1:
                buffer[top, left + 2] = background
                buffer[top + 1, left + 2] = color if cell.is_open(Direction.E) else background
        for col in range(width):
            buffer[height - 1, col] = background
        return buffer


def render_maze(
    maze: Maze,
    mode: RenderMode = DEFAULT_MODE,
    colors: Optional[Sequence[RGBColor]] = None,
    *,
    threshold: Optional[int] = None,
) -> PixelBuffer:
    return Rasterizer(mode, colors, threshold=threshold).render(maze)


__all__ = [
    "DEFAULT_MODE",
    "PixelBuffer",
    "Rasterizer",
    "RenderMode",
    "buffer_size",
    "render_maze",
]
