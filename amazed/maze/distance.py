"""Distance-from-start labeling passes.

``TraversalLabeler`` reproduces the random depth-first walk whose counter
drives the color shading of previously rendered images. On a spanning tree
the counter always equals the depth of the walk, i.e. the length of the unique
path from the start, so it agrees with ``BreadthFirstLabeler``. The two only
diverge on graphs with cycles.
"""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from collections import deque
from typing import Deque, Dict, List, Type

from .grid import Cell, Coord, Direction, Maze


class DistanceLabeler(ABC):
    name: str = ""

    @abstractmethod
    def label(self, maze: Maze, rng: random.Random) -> Maze:
        """Populate ``dist_from_start`` on every cell and ``maze.max_distance``."""


class TraversalLabeler(DistanceLabeler):
    """Label cells with a counter that follows a random depth-first walk.

    The counter goes up on every forward step and down on every backtrack.
    Directions are sampled uniformly until one hits an open passage.
    """

    name = "traversal"

    def label(self, maze: Maze, rng: random.Random) -> Maze:
        maze.reset_visited()
        distance = 0
        max_distance = 0
        stack: List[Cell] = [maze.cell(maze.start)]

        while stack:
            cursor = stack[-1]
            cursor.visited += 1

            if self._has_unvisited_neighbour(maze, cursor):
                following = None
                while following is None:
                    following = maze.neighbour(cursor, Direction(rng.randrange(4)))
                if following.visited == 0:
                    stack.append(following)
                    following.visited += 1
                    cursor.dist_from_start = distance
                    distance += 1
                    max_distance = max(max_distance, distance)
            else:
                if len(stack) > 1:
                    cursor.dist_from_start = distance
                    distance -= 1
                stack.pop()

        maze.max_distance = max_distance
        return maze

    @staticmethod
    def _has_unvisited_neighbour(maze: Maze, cell: Cell) -> bool:
        return any(
            maze.neighbour(cell, direction).visited == 0
            for direction in cell.open_directions()
        )


class BreadthFirstLabeler(DistanceLabeler):
    """Exact shortest-path distances from ``maze.start``."""

    name = "bfs"

    def label(self, maze: Maze, rng: random.Random) -> Maze:
        maze.reset_visited()
        start = maze.cell(maze.start)
        start.dist_from_start = 0
        start.visited = 1
        queue: Deque[Coord] = deque([maze.start])
        max_distance = 0
        while queue:
            cell = maze.cell(queue.popleft())
            for direction in cell.open_directions():
                following = maze.neighbour(cell, direction)
                if following.visited:
                    continue
                following.visited = 1
                following.dist_from_start = cell.dist_from_start + 1
                max_distance = max(max_distance, following.dist_from_start)
                queue.append(following.position)
        maze.max_distance = max_distance
        return maze


LABELERS: Dict[str, Type[DistanceLabeler]] = {
    TraversalLabeler.name: TraversalLabeler,
    BreadthFirstLabeler.name: BreadthFirstLabeler,
}


def get_labeler(name: str) -> DistanceLabeler:
    try:
        return LABELERS[name]()
    except KeyError as exc:
        raise ValueError(f"Unknown distance labeler '{name}'; choose from {sorted(LABELERS)}") from exc


__all__ = [
    "BreadthFirstLabeler",
    "DistanceLabeler",
    "LABELERS",
    "TraversalLabeler",
    "get_labeler",
]
