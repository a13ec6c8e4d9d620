import random
import unittest

from amazed.maze import (
    BinaryTreeCarver,
    Direction,
    Maze,
    RecursiveBacktrackCarver,
    get_carver,
    get_policy,
)
from amazed.maze.policies import POLICIES

from tests.helpers import reachable_from_start


class SpanningTreeAssertions(unittest.TestCase):
    def assert_spanning_tree(self, maze: Maze) -> None:
        self.assertEqual(maze.edge_count(), maze.width * maze.height - 1)
        self.assertEqual(len(reachable_from_start(maze)), maze.width * maze.height)
        self.assertTrue(maze.in_bounds(maze.start))

    def assert_symmetric(self, maze: Maze) -> None:
        for cell in maze:
            for direction in Direction:
                target = cell.neighbours[direction]
                if target is None:
                    continue
                self.assertEqual(maze.step(cell.position, direction), target)
                self.assertEqual(maze.cell(target).neighbours[direction.opposite], cell.position)


class RecursiveBacktrackTests(SpanningTreeAssertions):
    def test_every_policy_yields_spanning_tree(self) -> None:
        rng = random.Random(2024)
        for name in sorted(POLICIES):
            for width, height in ((1, 1), (1, 7), (6, 1), (2, 2), (5, 4), (9, 9)):
                with self.subTest(policy=name, width=width, height=height):
                    maze = RecursiveBacktrackCarver(get_policy(name)).carve(Maze(width, height), rng)
                    self.assert_spanning_tree(maze)
                    self.assert_symmetric(maze)

    def test_single_cell_has_no_passages(self) -> None:
        maze = RecursiveBacktrackCarver().carve(Maze(1, 1), random.Random(0))
        self.assertEqual(maze.edge_count(), 0)
        self.assertEqual(maze.start, (0, 0))

    def test_same_seed_reproduces_maze(self) -> None:
        first = RecursiveBacktrackCarver().carve(Maze(8, 6), random.Random(11))
        second = RecursiveBacktrackCarver().carve(Maze(8, 6), random.Random(11))
        self.assertEqual(first.start, second.start)
        self.assertEqual(first.to_dict(), second.to_dict())

    def test_start_is_spread_over_the_grid(self) -> None:
        rng = random.Random(5)
        starts = {RecursiveBacktrackCarver().carve(Maze(3, 2), rng).start for _ in range(200)}
        self.assertEqual(len(starts), 6)


class BinaryTreeTests(SpanningTreeAssertions):
    def test_each_cell_links_north_or_west(self) -> None:
        maze = BinaryTreeCarver().carve(Maze(7, 5), random.Random(3))
        origin = maze.cell((0, 0))
        self.assertFalse(origin.is_open(Direction.N))
        self.assertFalse(origin.is_open(Direction.W))
        for cell in maze:
            if cell.position == (0, 0):
                continue
            north = cell.is_open(Direction.N)
            west = cell.is_open(Direction.W)
            self.assertNotEqual(north, west, cell.position)
            if cell.row == 0:
                self.assertTrue(west)
            if cell.col == 0:
                self.assertTrue(north)

    def test_binary_tree_is_spanning_tree(self) -> None:
        rng = random.Random(8)
        for width, height in ((1, 1), (1, 5), (5, 1), (6, 4)):
            with self.subTest(width=width, height=height):
                maze = BinaryTreeCarver().carve(Maze(width, height), rng)
                self.assert_spanning_tree(maze)
                self.assert_symmetric(maze)


class CarverRegistryTests(unittest.TestCase):
    def test_lookup_by_name(self) -> None:
        policy = get_policy("weird")
        carver = get_carver("backtrack", policy)
        self.assertIsInstance(carver, RecursiveBacktrackCarver)
        self.assertIs(carver.policy, policy)
        self.assertIsInstance(get_carver("binary-tree"), BinaryTreeCarver)

    def test_unknown_names_raise_value_error(self) -> None:
        with self.assertRaises(ValueError):
            get_carver("prim")
        with self.assertRaises(ValueError):
            get_policy("spiral")


if __name__ == "__main__":
    unittest.main()
