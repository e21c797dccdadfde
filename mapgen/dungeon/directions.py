"""Axis aligned directions between neighbouring rooms.

Up/Down step along y, North/South along z and East/West along x. The integer
value of each member is its slot in a room's open-wall flags.
"""
from __future__ import annotations

from enum import IntEnum
from typing import Tuple

Offset3D = Tuple[int, int, int]


class Direction(IntEnum):
    UP = 0
    DOWN = 1
    NORTH = 2
    SOUTH = 3
    EAST = 4
    WEST = 5

    @property
    def index(self) -> int:
        return int(self)

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]

    @property
    def offset(self) -> Offset3D:
        return _OFFSETS[self]

    @property
    def is_lateral(self) -> bool:
        return self not in (Direction.UP, Direction.DOWN)

    @classmethod
    def from_index(cls, idx: int) -> "Direction":
        if isinstance(idx, bool) or not 0 <= idx < len(cls):
            raise ValueError(f"Invalid direction index {idx}!")
        return cls(idx)


_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
}

_OFFSETS = {
    Direction.UP: (0, 1, 0),
    Direction.DOWN: (0, -1, 0),
    Direction.NORTH: (0, 0, 1),
    Direction.SOUTH: (0, 0, -1),
    Direction.EAST: (1, 0, 0),
    Direction.WEST: (-1, 0, 0),
}

DIRECTIONS: Tuple[Direction, ...] = tuple(Direction)

# One direction per axis; enumerating walls over these counts each undirected edge once.
HALF_DIRECTIONS: Tuple[Direction, ...] = (Direction.UP, Direction.NORTH, Direction.EAST)

# Floors and ceilings are not voxelized.
LATERAL_DIRECTIONS: Tuple[Direction, ...] = tuple(d for d in DIRECTIONS if d.is_lateral)


def opposite(direction: Direction) -> Direction:
    return _OPPOSITES[direction]


__all__ = [
    "Direction",
    "DIRECTIONS",
    "HALF_DIRECTIONS",
    "LATERAL_DIRECTIONS",
    "opposite",
]
