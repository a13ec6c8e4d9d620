"""Spanning-tree carving over a :class:`~amazed.maze.grid.Maze`."""

from __future__ import annotations

import logging
import random
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Type

from .grid import Coord, Direction, Maze
from .policies import DirectionPolicy, UniformPolicy


class MazeCarver(ABC):
    """Base class for algorithms that open passages on a fresh maze."""

    name: str = ""

    @abstractmethod
    def carve(self, maze: Maze, rng: random.Random) -> Maze:
        """Turn the closed grid into a spanning tree and record ``maze.start``."""

    def _pick_start(self, maze: Maze, rng: random.Random) -> Coord:
        maze.start = (rng.randrange(maze.height), rng.randrange(maze.width))
        return maze.start


class RecursiveBacktrackCarver(MazeCarver):
    """Randomized depth-first carve driven by a :class:`DirectionPolicy`.

    Proposals pointing outside the grid or at a visited cell are discarded
    until the policy hits a valid neighbour.
    """

    name = "backtrack"

    def __init__(self, policy: Optional[DirectionPolicy] = None) -> None:
        self.policy = policy if policy is not None else UniformPolicy()

    def carve(self, maze: Maze, rng: random.Random) -> Maze:
        maze.reset_visited()
        cursor = self._pick_start(maze, rng)
        maze.cell(cursor).visited += 1
        stack: List[Coord] = [cursor]
        previous: Optional[Direction] = None
        rejected = 0

        while stack:
            if self._has_unvisited_neighbour(maze, cursor):
                while True:
                    direction = self.policy.next_direction(rng, previous)
                    target = maze.step(cursor, direction)
                    if maze.in_bounds(target) and not maze.cell(target).visited:
                        break
                    rejected += 1
                maze.link(cursor, direction)
                maze.cell(target).visited += 1
                stack.append(target)
                cursor = target
                previous = direction
            else:
                stack.pop()
                if stack:
                    cursor = stack[-1]

        logging.debug(f"Carved {maze.width}x{maze.height} maze from {maze.start} ({rejected} rejected proposals)")
        return maze

    @staticmethod
    def _has_unvisited_neighbour(maze: Maze, coord: Coord) -> bool:
        for direction in Direction:
            target = maze.step(coord, direction)
            if maze.in_bounds(target) and not maze.cell(target).visited:
                return True
        return False


class BinaryTreeCarver(MazeCarver):
    """Link every cell but the origin to its north or west neighbour.

    Row 0 can only go west and column 0 can only go north, which gives the
    characteristic diagonal bias towards the top-left corner.
    """

    name = "binary-tree"

    def carve(self, maze: Maze, rng: random.Random) -> Maze:
        self._pick_start(maze, rng)
        for row in range(maze.height):
            for col in range(maze.width):
                if row == 0 and col == 0:
                    continue
                direction = Direction.N if rng.getrandbits(1) else Direction.W
                if row == 0:
                    direction = Direction.W
                if col == 0:
                    direction = Direction.N
                maze.link((row, col), direction)
        return maze


CARVERS: Dict[str, Type[MazeCarver]] = {
    RecursiveBacktrackCarver.name: RecursiveBacktrackCarver,
    BinaryTreeCarver.name: BinaryTreeCarver,
}


def get_carver(name: str, policy: Optional[DirectionPolicy] = None) -> MazeCarver:
    if name == RecursiveBacktrackCarver.name:
        return RecursiveBacktrackCarver(policy)
    if name == BinaryTreeCarver.name:
        return BinaryTreeCarver()
    raise ValueError(f"Unknown maze generator '{name}'; choose from {sorted(CARVERS)}")


__all__ = [
    "BinaryTreeCarver",
    "CARVERS",
    "MazeCarver",
    "RecursiveBacktrackCarver",
    "get_carver",
]
