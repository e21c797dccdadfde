"""Wall geometry for the closed faces of a generated grid.

Rooms sit on a 12 voxel pitch along every axis: a 10 voxel interior plus the
2 voxels of wall shared with the next room. Each closed lateral face stamps a
one voxel thick plane at the room's edge, so a wall closed from both sides
ends up two voxels thick. Floors and ceilings are not emitted.
"""
from __future__ import annotations

from typing import Dict, Iterable, List, NamedTuple, Set

from .cells import Position, RoomGrid
from .directions import LATERAL_DIRECTIONS, Direction

ROOM_INTERIOR = 10
WALL_THICKNESS = 2
ROOM_PITCH = ROOM_INTERIOR + WALL_THICKNESS
WALL_HEIGHT = ROOM_INTERIOR + 1


class Voxel(NamedTuple):
    x: int
    y: int
    z: int


def fill(lo: Voxel, hi: Voxel) -> List[Voxel]:
    """All voxels in the box spanned by two corners, inclusive."""
    return [
        Voxel(x, y, z)
        for x in range(lo.x, hi.x + 1)
        for y in range(lo.y, hi.y + 1)
        for z in range(lo.z, hi.z + 1)
    ]


_EDGE = ROOM_PITCH - 1
_TOP = WALL_HEIGHT - 1
_FACE_BOUNDS = {
    Direction.NORTH: (Voxel(0, 0, _EDGE), Voxel(_EDGE, _TOP, _EDGE)),
    Direction.SOUTH: (Voxel(0, 0, 0), Voxel(_EDGE, _TOP, 0)),
    Direction.EAST: (Voxel(_EDGE, 0, 0), Voxel(_EDGE, _TOP, _EDGE)),
    Direction.WEST: (Voxel(0, 0, 0), Voxel(0, _TOP, _EDGE)),
}


def wall_slab(direction: Direction) -> List[Voxel]:
    """Room-local voxels for one closed face."""
    if direction not in _FACE_BOUNDS:
        raise ValueError(f"{direction.name} faces are not voxelized")
    lo, hi = _FACE_BOUNDS[direction]
    return fill(lo, hi)


_SLABS: Dict[Direction, List[Voxel]] = {d: wall_slab(d) for d in LATERAL_DIRECTIONS}

SLAB_VOXELS = len(_SLABS[Direction.NORTH])


def room_origin(position: Position) -> Voxel:
    return Voxel(position.x * ROOM_PITCH, position.y * ROOM_PITCH, position.z * ROOM_PITCH)


def translate(voxels: Iterable[Voxel], offset: Voxel) -> List[Voxel]:
    ox, oy, oz = offset
    return [Voxel(v.x + ox, v.y + oy, v.z + oz) for v in voxels]


def voxelize(grid: RoomGrid, unique: bool = False) -> List[Voxel]:
    """Emit every closed lateral face, room by room in index order.

    With ``unique`` set, a voxel already emitted by an earlier face is
    dropped; otherwise faces shared between rooms and corner columns repeat.
    """
    voxels: List[Voxel] = []
    seen: Set[Voxel] = set()
    for pos, room in grid.iter_rooms():
        origin = room_origin(pos)
        for d in LATERAL_DIRECTIONS:
            if room.open[d]:
                continue
            slab = translate(_SLABS[d], origin)
            if unique:
                slab = [v for v in slab if v not in seen]
                seen.update(slab)
            voxels.extend(slab)
    return voxels


def max_voxel_count(num_rooms: int) -> int:
    """Voxels emitted for a fully closed grid, repeats included."""
    return num_rooms * len(LATERAL_DIRECTIONS) * SLAB_VOXELS


__all__ = [
    "Voxel",
    "ROOM_INTERIOR",
    "WALL_THICKNESS",
    "ROOM_PITCH",
    "WALL_HEIGHT",
    "SLAB_VOXELS",
    "fill",
    "wall_slab",
    "room_origin",
    "translate",
    "voxelize",
    "max_voxel_count",
]
