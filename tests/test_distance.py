import random
import unittest

import numpy as np

from amazed.maze import (
    BinaryTreeCarver,
    BreadthFirstLabeler,
    Maze,
    RecursiveBacktrackCarver,
    TraversalLabeler,
    get_labeler,
    get_policy,
)

from tests.helpers import linked_maze_2x2


class TraversalLabelerTests(unittest.TestCase):
    def test_single_cell_has_zero_max_distance(self) -> None:
        rng = random.Random(0)
        maze = RecursiveBacktrackCarver().carve(Maze(1, 1), rng)
        TraversalLabeler().label(maze, rng)
        self.assertEqual(maze.max_distance, 0)
        self.assertEqual(maze.cell((0, 0)).dist_from_start, 0)

    def test_hand_built_maze_distances(self) -> None:
        maze = linked_maze_2x2()
        TraversalLabeler().label(maze, random.Random(1))
        self.assertEqual(maze.distances().tolist(), [[0, 1], [1, 2]])
        self.assertEqual(maze.max_distance, 2)

    def test_max_distance_bounds_every_cell(self) -> None:
        rng = random.Random(42)
        for name in ("uniform", "weird", "changing", "rand"):
            with self.subTest(policy=name):
                maze = RecursiveBacktrackCarver(get_policy(name)).carve(Maze(12, 9), rng)
                TraversalLabeler().label(maze, rng)
                field = maze.distances()
                self.assertEqual(int(field.max()), maze.max_distance)
                self.assertGreaterEqual(int(field.min()), 0)
                self.assertEqual(maze.cell(maze.start).dist_from_start, 0)

    def test_agrees_with_breadth_first_on_spanning_trees(self) -> None:
        rng = random.Random(7)
        for carver in (RecursiveBacktrackCarver(), BinaryTreeCarver()):
            with self.subTest(carver=carver.name):
                maze = carver.carve(Maze(10, 8), rng)
                TraversalLabeler().label(maze, rng)
                traversal = maze.distances()
                traversal_max = maze.max_distance
                BreadthFirstLabeler().label(maze, rng)
                np.testing.assert_array_equal(traversal, maze.distances())
                self.assertEqual(traversal_max, maze.max_distance)


class BreadthFirstLabelerTests(unittest.TestCase):
    def test_hand_built_maze_distances(self) -> None:
        maze = linked_maze_2x2()
        maze.start = (1, 1)
        BreadthFirstLabeler().label(maze, random.Random(0))
        self.assertEqual(maze.distances().tolist(), [[2, 3], [1, 0]])
        self.assertEqual(maze.max_distance, 3)

    def test_registry(self) -> None:
        self.assertIsInstance(get_labeler("bfs"), BreadthFirstLabeler)
        self.assertIsInstance(get_labeler("traversal"), TraversalLabeler)
        with self.assertRaises(ValueError):
            get_labeler("dijkstra")


if __name__ == "__main__":
    unittest.main()
