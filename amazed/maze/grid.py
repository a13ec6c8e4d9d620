"""Grid graph model shared by the maze generators, labelers and renderers.

Cells never hold references to each other. A passage is stored as the
neighbour's ``(row, col)`` coordinates and resolved through the owning
:class:`Maze`, which is the sole owner of the cell array.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, Iterator, List, Optional, Tuple

import numpy as np

Coord = Tuple[int, int]


class Direction(IntEnum):
    """Cardinal directions, in the order used to index cell passages."""

    N = 0
    E = 1
    S = 2
    W = 3

    @property
    def opposite(self) -> "Direction":
        return Direction((self + 2) % 4)

    @property
    def delta(self) -> Coord:
        return _DELTAS[self]

    @property
    def is_vertical(self) -> bool:
        return self in (Direction.N, Direction.S)


_DELTAS: Dict[Direction, Coord] = {
    Direction.N: (-1, 0),
    Direction.E: (0, 1),
    Direction.S: (1, 0),
    Direction.W: (0, -1),
}


@dataclass
class Cell:
    """A grid unit with up to four open passages."""

    row: int
    col: int
    neighbours: List[Optional[Coord]] = field(default_factory=lambda: [None, None, None, None])
    dist_from_start: int = 0
    visited: int = 0

    @property
    def position(self) -> Coord:
        return (self.row, self.col)

    def is_open(self, direction: Direction) -> bool:
        return self.neighbours[direction] is not None

    def open_directions(self) -> List[Direction]:
        return [direction for direction in Direction if self.neighbours[direction] is not None]


class Maze:
    """Rectangular grid of cells with symmetric passages."""

    def __init__(self, width: int, height: int) -> None:
        if int(width) < 1 or int(height) < 1:
            raise ValueError("width and height must be at least 1")
        self.width = int(width)
        self.height = int(height)
        self.start: Coord = (0, 0)
        self.max_distance = 0
        self.cells: List[List[Cell]] = [
            [Cell(row, col) for col in range(self.width)] for row in range(self.height)
        ]

    def __repr__(self) -> str:
        return f"Maze(width={self.width}, height={self.height}, start={self.start})"

    @property
    def size(self) -> int:
        return self.width * self.height

    def in_bounds(self, coord: Coord) -> bool:
        row, col = coord
        return 0 <= row < self.height and 0 <= col < self.width

    def cell(self, coord: Coord) -> Cell:
        row, col = coord
        if not self.in_bounds(coord):
            raise IndexError(f"cell {coord} outside {self.height}x{self.width} grid")
        return self.cells[row][col]

    def step(self, coord: Coord, direction: Direction) -> Coord:
        """Return the grid-adjacent coordinate, which may be out of bounds."""
        dr, dc = direction.delta
        return (coord[0] + dr, coord[1] + dc)

    def neighbour(self, cell: Cell, direction: Direction) -> Optional[Cell]:
        """Resolve the passage of ``cell`` in ``direction`` through the grid."""
        target = cell.neighbours[direction]
        if target is None:
            return None
        return self.cell(target)

    def link(self, coord: Coord, direction: Direction) -> Coord:
        """Open a passage in both directions and return the neighbour coordinate."""
        target = self.step(coord, direction)
        if not self.in_bounds(target):
            raise ValueError(f"cannot link {coord} {direction.name}: {target} is outside the grid")
        self.cell(coord).neighbours[direction] = target
        self.cell(target).neighbours[direction.opposite] = coord
        return target

    def reset_visited(self) -> None:
        for cell in self:
            cell.visited = 0

    def __iter__(self) -> Iterator[Cell]:
        for row in self.cells:
            yield from row

    def edges(self) -> List[Tuple[Coord, Coord]]:
        """Open passages, each listed once from its south or east end."""
        result: List[Tuple[Coord, Coord]] = []
        for cell in self:
            for direction in (Direction.N, Direction.W):
                target = cell.neighbours[direction]
                if target is not None:
                    result.append((target, cell.position))
        return result

    def edge_count(self) -> int:
        return len(self.edges())

    def distances(self) -> np.ndarray:
        """Distance field as a ``(height, width)`` integer array."""
        values = np.zeros((self.height, self.width), dtype=np.int64)
        for cell in self:
            values[cell.row, cell.col] = cell.dist_from_start
        return values

    def to_dict(self) -> Dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "start": list(self.start),
            "max_distance": int(self.max_distance),
            "passages": [
                ["".join(direction.name for direction in cell.open_directions()) for cell in row]
                for row in self.cells
            ],
        }


__all__ = ["Cell", "Coord", "Direction", "Maze"]
