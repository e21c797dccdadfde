"""Connected component labelling over open walls.

Rooms are flood filled in ascending linear index order, so the first seed to
reach a room is always the smallest index in its component. A room already
claimed by a lower seed is skipped, and every component id ends up equal to
its smallest member's index.
"""
from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from .cells import Position, RoomGrid, Wall
from .directions import DIRECTIONS
from .errors import GenerationInvariantError

ComponentLabels = List[int]


def build_connectivity(grid: RoomGrid) -> ComponentLabels:
    spec = grid.spec
    rooms = grid.rooms
    areas = list(range(spec.num_rooms))
    for seed in range(spec.num_rooms):
        if areas[seed] < seed:
            continue
        stack = [seed]
        while stack:
            current = stack.pop()
            areas[current] = seed
            flags = rooms[current].open
            for d in DIRECTIONS:
                if not flags[d]:
                    continue
                other = grid.neighbor_index(current, d)
                if other is None:
                    raise GenerationInvariantError(
                        f"room {spec.position_at(current)} is open {d.name} towards the grid edge"
                    )
                if areas[other] > seed:
                    stack.append(other)
    return areas


def is_connected(grid: RoomGrid) -> bool:
    return labels_connected(build_connectivity(grid))


def labels_connected(areas: Sequence[int]) -> bool:
    return all(area == areas[0] for area in areas)


def component_count(areas: Sequence[int]) -> int:
    return len(set(areas))


def components(grid: RoomGrid, areas: Optional[Sequence[int]] = None) -> Dict[int, List[Position]]:
    """Group positions by component id (ids ascend, members in index order)."""
    if areas is None:
        areas = build_connectivity(grid)
    groups: Dict[int, List[Position]] = {}
    for pos in grid.spec.positions():
        groups.setdefault(areas[pos.linear_index(grid.spec)], []).append(pos)
    return groups


def separating_walls(grid: RoomGrid, walls: Sequence[Wall], areas: Sequence[int]) -> List[int]:
    """Indices into ``walls`` of the walls whose two rooms lie in different components."""
    spec = grid.spec
    result = []
    for idx, wall in enumerate(walls):
        here = areas[wall.position.linear_index(spec)]
        there = areas[wall.other_side(spec).linear_index(spec)]
        if here != there:
            result.append(idx)
    return result


__all__ = [
    "ComponentLabels",
    "build_connectivity",
    "is_connected",
    "labels_connected",
    "component_count",
    "components",
    "separating_walls",
]
