"""Room grid model: positions, rooms and the walls between them."""
from __future__ import annotations

from typing import Iterator, List, NamedTuple, Optional, Tuple

from .config import DungeonSpecification
from .directions import DIRECTIONS, HALF_DIRECTIONS, Direction
from .errors import GenerationInvariantError


class Position(NamedTuple):
    x: int
    y: int
    z: int

    def linear_index(self, spec: DungeonSpecification) -> int:
        return self.x * spec.depth * spec.height + self.y * spec.depth + self.z

    def in_direction(self, direction: Direction, spec: DungeonSpecification) -> Optional["Position"]:
        dx, dy, dz = direction.offset
        nx, ny, nz = self.x + dx, self.y + dy, self.z + dz
        if not spec.contains(nx, ny, nz):
            return None
        return Position(nx, ny, nz)


def neighbor(position: Position, direction: Direction, spec: DungeonSpecification) -> Optional[Position]:
    """Return the adjacent position, or None when the step leaves the grid."""
    return position.in_direction(direction, spec)


class Wall(NamedTuple):
    position: Position
    direction: Direction

    def other_side(self, spec: DungeonSpecification) -> Position:
        other = self.position.in_direction(self.direction, spec)
        if other is None:
            raise GenerationInvariantError(f"wall {self} has no room on its far side")
        return other


class Room:
    """Open flags for the six faces of a single room."""

    __slots__ = ("open",)

    def __init__(self, open_flags: Optional[List[bool]] = None):
        self.open = list(open_flags) if open_flags is not None else [False] * len(DIRECTIONS)

    def is_open(self, direction: Direction) -> bool:
        return self.open[direction]

    @property
    def mask(self) -> int:
        return sum(1 << d for d in DIRECTIONS if self.open[d])

    def to_dict(self):
        return {"open": [d.name.lower() for d in DIRECTIONS if self.open[d]], "mask": self.mask}


class RoomGrid:
    """Flat, index-addressed storage for every room of a DungeonSpecification."""

    def __init__(self, spec: DungeonSpecification):
        self.spec = spec
        self.rooms: List[Room] = [Room() for _ in range(spec.num_rooms)]
        # Neighbour index per room and direction; None past the grid edge
        self._neighbors: List[Tuple[Optional[int], ...]] = []
        for pos in spec.positions():
            row = []
            for d in DIRECTIONS:
                other = pos.in_direction(d, spec)
                row.append(None if other is None else other.linear_index(spec))
            self._neighbors.append(tuple(row))

    def __len__(self) -> int:
        return len(self.rooms)

    def __getitem__(self, position: Position) -> Room:
        return self.rooms[position.linear_index(self.spec)]

    def neighbor_index(self, index: int, direction: Direction) -> Optional[int]:
        return self._neighbors[index][direction]

    def is_open(self, position: Position, direction: Direction) -> bool:
        return self[position].open[direction]

    def open_wall(self, wall: Wall) -> None:
        """Open a wall from both sides; the only place open flags change."""
        other = wall.other_side(self.spec)
        self[wall.position].open[wall.direction] = True
        self[other].open[wall.direction.opposite] = True

    def open_all(self) -> None:
        for wall in enumerate_walls(self.spec):
            self.open_wall(wall)

    def open_walls(self) -> Iterator[Wall]:
        for pos in self.spec.positions():
            room = self[pos]
            for d in HALF_DIRECTIONS:
                if room.open[d]:
                    yield Wall(pos, d)

    def iter_rooms(self) -> Iterator[Tuple[Position, Room]]:
        for pos, room in zip(self.spec.positions(), self.rooms):
            yield pos, room


def enumerate_walls(spec: DungeonSpecification) -> List[Wall]:
    """Every undirected wall between adjacent rooms, listed exactly once."""
    walls = []
    for pos in spec.positions():
        for d in HALF_DIRECTIONS:
            if pos.in_direction(d, spec) is not None:
                walls.append(Wall(pos, d))
    return walls


__all__ = ["Position", "Wall", "Room", "RoomGrid", "neighbor", "enumerate_walls"]
