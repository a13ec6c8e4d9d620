"""Direction policies used by the backtracking carve.

A policy proposes one of the four cardinal directions from a random source
and, optionally, the direction of the previous move. The generator rejects
proposals that leave the grid or hit a visited cell, so every policy must keep
a non-zero probability of eventually proposing each direction. A policy that
never proposes a locally valid direction makes generation loop forever.
"""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from typing import Dict, Optional, Type

from .grid import Direction


class DirectionPolicy(ABC):
    """Samples the next carving direction."""

    name: str = ""

    @abstractmethod
    def next_direction(self, rng: random.Random, previous: Optional[Direction] = None) -> Direction:
        """Propose a direction; ``previous`` is the last committed move, if any."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class UniformPolicy(DirectionPolicy):
    name = "uniform"

    def next_direction(self, rng: random.Random, previous: Optional[Direction] = None) -> Direction:
        return Direction(rng.randint(0, 3))


class RandModuloPolicy(DirectionPolicy):
    """Modulo-4 of a raw 31-bit draw, like ``rand() % 4``."""

    name = "rand"

    def next_direction(self, rng: random.Random, previous: Optional[Direction] = None) -> Direction:
        return Direction(rng.getrandbits(31) % 4)


class WeirdPolicy(DirectionPolicy):
    """Sum of four coin flips, mod 4. Favors S, then E and W, then N."""

    name = "weird"

    def next_direction(self, rng: random.Random, previous: Optional[Direction] = None) -> Direction:
        total = sum(rng.getrandbits(31) % 2 for _ in range(4))
        return Direction(total % 4)


class ChangingAxisPolicy(DirectionPolicy):
    """Alternate axes: favor horizontal after a vertical move and vice versa.

    The biased draw is taken from ``[0, RANGE)``. One value maps to each
    off-axis direction and the rest split evenly between the two on-axis
    directions, so with ``RANGE = 100`` the split is 1/49/1/49.
    """

    name = "changing"
    RANGE = 100

    def next_direction(self, rng: random.Random, previous: Optional[Direction] = None) -> Direction:
        if previous is None or previous.is_vertical:
            return self._horizontal(rng)
        return self._vertical(rng)

    def _bucket(self, rng: random.Random) -> int:
        value = rng.randrange(self.RANGE)
        half = self.RANGE // 2
        if value < 1:
            return 0
        if value < half:
            return 1
        if value == half:
            return 2
        return 3

    def _horizontal(self, rng: random.Random) -> Direction:
        return (Direction.N, Direction.E, Direction.S, Direction.W)[self._bucket(rng)]

    def _vertical(self, rng: random.Random) -> Direction:
        return (Direction.E, Direction.N, Direction.W, Direction.S)[self._bucket(rng)]


POLICIES: Dict[str, Type[DirectionPolicy]] = {
    policy.name: policy
    for policy in (UniformPolicy, RandModuloPolicy, WeirdPolicy, ChangingAxisPolicy)
}


def get_policy(name: str) -> DirectionPolicy:
    try:
        return POLICIES[name]()
    except KeyError as exc:
        raise ValueError(f"Unknown direction policy '{name}'; choose from {sorted(POLICIES)}") from exc


__all__ = [
    "ChangingAxisPolicy",
    "DirectionPolicy",
    "POLICIES",
    "RandModuloPolicy",
    "UniformPolicy",
    "WeirdPolicy",
    "get_policy",
]
