"""Maze graph, carving algorithms and distance labeling."""

__all__ = [
    "Cell",
    "Coord",
    "Direction",
    "Maze",
    "DirectionPolicy",
    "UniformPolicy",
    "RandModuloPolicy",
    "WeirdPolicy",
    "ChangingAxisPolicy",
    "POLICIES",
    "get_policy",
    "MazeCarver",
    "RecursiveBacktrackCarver",
    "BinaryTreeCarver",
    "CARVERS",
    "get_carver",
    "DistanceLabeler",
    "TraversalLabeler",
    "BreadthFirstLabeler",
    "LABELERS",
    "get_labeler",
]

from .grid import Cell, Coord, Direction, Maze
from .policies import (
    POLICIES,
    ChangingAxisPolicy,
    DirectionPolicy,
    RandModuloPolicy,
    UniformPolicy,
    WeirdPolicy,
    get_policy,
)
from .generator import CARVERS, BinaryTreeCarver, MazeCarver, RecursiveBacktrackCarver, get_carver
from .distance import LABELERS, BreadthFirstLabeler, DistanceLabeler, TraversalLabeler, get_labeler
