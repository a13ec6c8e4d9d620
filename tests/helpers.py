from collections import deque
from typing import Set

from amazed.maze import Coord, Direction, Maze


def reachable_from_start(maze: Maze) -> Set[Coord]:
    seen = {maze.start}
    queue = deque([maze.start])
    while queue:
        cell = maze.cell(queue.popleft())
        for direction in cell.open_directions():
            target = cell.neighbours[direction]
            if target not in seen:
                seen.add(target)
                queue.append(target)
    return seen


def linked_maze_2x2() -> Maze:
    """Passages (0,0)-(0,1), (0,0)-(1,0) and (1,0)-(1,1), start at the origin."""
    maze = Maze(2, 2)
    maze.start = (0, 0)
    maze.link((0, 0), Direction.E)
    maze.link((0, 0), Direction.S)
    maze.link((1, 0), Direction.E)
    return maze
