import unittest

from amazed.maze import Direction, Maze


class DirectionTests(unittest.TestCase):
    def test_opposites(self) -> None:
        self.assertEqual(Direction.N.opposite, Direction.S)
        self.assertEqual(Direction.E.opposite, Direction.W)
        self.assertEqual(Direction.S.opposite, Direction.N)
        self.assertEqual(Direction.W.opposite, Direction.E)

    def test_deltas_follow_row_col_layout(self) -> None:
        self.assertEqual(Direction.N.delta, (-1, 0))
        self.assertEqual(Direction.E.delta, (0, 1))
        self.assertEqual(Direction.S.delta, (1, 0))
        self.assertEqual(Direction.W.delta, (0, -1))
        self.assertTrue(Direction.S.is_vertical)
        self.assertFalse(Direction.W.is_vertical)


class MazeModelTests(unittest.TestCase):
    def test_new_maze_has_all_passages_closed(self) -> None:
        maze = Maze(4, 3)
        self.assertEqual(maze.size, 12)
        self.assertEqual(len(maze.cells), 3)
        self.assertEqual(len(maze.cells[0]), 4)
        self.assertEqual(maze.edge_count(), 0)
        for cell in maze:
            self.assertEqual(cell.neighbours, [None, None, None, None])
            self.assertEqual(cell.visited, 0)

    def test_rejects_empty_dimensions(self) -> None:
        with self.assertRaises(ValueError):
            Maze(0, 5)
        with self.assertRaises(ValueError):
            Maze(5, -1)

    def test_link_is_symmetric_and_stores_coordinates(self) -> None:
        maze = Maze(3, 3)
        target = maze.link((1, 1), Direction.N)
        self.assertEqual(target, (0, 1))
        self.assertEqual(maze.cell((1, 1)).neighbours[Direction.N], (0, 1))
        self.assertEqual(maze.cell((0, 1)).neighbours[Direction.S], (1, 1))
        self.assertIs(maze.neighbour(maze.cell((1, 1)), Direction.N), maze.cell((0, 1)))
        self.assertIsNone(maze.neighbour(maze.cell((1, 1)), Direction.E))
        self.assertEqual(maze.edges(), [((0, 1), (1, 1))])

    def test_link_outside_grid_is_rejected(self) -> None:
        maze = Maze(2, 2)
        with self.assertRaises(ValueError):
            maze.link((0, 0), Direction.W)

    def test_cell_lookup_is_bounds_checked(self) -> None:
        maze = Maze(2, 3)
        self.assertTrue(maze.in_bounds((2, 1)))
        self.assertFalse(maze.in_bounds((1, 2)))
        with self.assertRaises(IndexError):
            maze.cell((3, 0))

    def test_to_dict_lists_passages(self) -> None:
        maze = Maze(2, 1)
        maze.link((0, 0), Direction.E)
        payload = maze.to_dict()
        self.assertEqual(payload["width"], 2)
        self.assertEqual(payload["height"], 1)
        self.assertEqual(payload["passages"], [["E", "W"]])


if __name__ == "__main__":
    unittest.main()
