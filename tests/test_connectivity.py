import random

import pytest

from mapgen.dungeon import (
    Direction,
    DungeonSpecification,
    GenerationInvariantError,
    Position,
    RoomGrid,
    Wall,
    build_connectivity,
    component_count,
    enumerate_walls,
    is_connected,
    separating_walls,
)
from mapgen.dungeon.connectivity import components
from tests.dungeon_test_utils import bfs_reachable


def _random_grid(spec, seed, fraction=0.4):
    rng = random.Random(seed)
    grid = RoomGrid(spec)
    for wall in enumerate_walls(spec):
        if rng.random() < fraction:
            grid.open_wall(wall)
    return grid


def test_closed_grid_has_one_component_per_room():
    spec = DungeonSpecification(width=2, depth=2, height=2)
    grid = RoomGrid(spec)
    areas = build_connectivity(grid)
    assert areas == list(range(8))
    assert component_count(areas) == 8
    assert not is_connected(grid)


def test_single_room_is_connected():
    grid = RoomGrid(DungeonSpecification(width=1, depth=1, height=1))
    assert build_connectivity(grid) == [0]
    assert is_connected(grid)


def test_fully_open_grid_is_connected():
    spec = DungeonSpecification(width=3, depth=2, height=2)
    grid = RoomGrid(spec)
    grid.open_all()
    assert set(build_connectivity(grid)) == {0}
    assert is_connected(grid)


def test_component_id_is_smallest_member_index():
    spec = DungeonSpecification(width=3, depth=1, height=1)
    grid = RoomGrid(spec)
    # Join rooms 1 and 2 only; room 0 stays isolated
    grid.open_wall(Wall(Position(1, 0, 0), Direction.EAST))
    assert build_connectivity(grid) == [0, 1, 1]
    grid.open_wall(Wall(Position(0, 0, 0), Direction.EAST))
    assert build_connectivity(grid) == [0, 0, 0]


@pytest.mark.parametrize("seed", [0, 1, 2, 3, 7, 42, 99])
def test_labels_match_reachability(seed):
    spec = DungeonSpecification(width=4, depth=3, height=2)
    grid = _random_grid(spec, seed)
    areas = build_connectivity(grid)
    positions = list(spec.positions())
    for p in positions:
        reach = bfs_reachable(grid, p)
        assert areas[p.linear_index(spec)] == min(q.linear_index(spec) for q in reach)
        for q in positions:
            same = areas[p.linear_index(spec)] == areas[q.linear_index(spec)]
            assert same == (q in reach)


@pytest.mark.parametrize("seed", [5, 6, 8])
def test_labels_stable_on_unchanged_grid(seed):
    spec = DungeonSpecification(width=4, depth=4, height=1)
    grid = _random_grid(spec, seed)
    first = build_connectivity(grid)
    assert build_connectivity(grid) == first
    assert build_connectivity(grid) == first


def test_components_grouping():
    spec = DungeonSpecification(width=3, depth=1, height=1)
    grid = RoomGrid(spec)
    grid.open_wall(Wall(Position(1, 0, 0), Direction.EAST))
    groups = components(grid)
    assert groups == {0: [Position(0, 0, 0)], 1: [Position(1, 0, 0), Position(2, 0, 0)]}


def test_separating_walls():
    spec = DungeonSpecification(width=3, depth=1, height=1)
    grid = RoomGrid(spec)
    walls = enumerate_walls(spec)
    assert separating_walls(grid, walls, build_connectivity(grid)) == [0, 1]
    grid.open_wall(walls[0])
    remaining = walls[1:]
    assert separating_walls(grid, remaining, build_connectivity(grid)) == [0]
    grid.open_wall(remaining[0])
    assert separating_walls(grid, [], build_connectivity(grid)) == []


def test_loop_walls_are_not_separating():
    spec = DungeonSpecification(width=2, depth=2, height=1)
    grid = RoomGrid(spec)
    walls = enumerate_walls(spec)
    for wall in walls[:3]:
        grid.open_wall(wall)
    assert is_connected(grid)
    assert separating_walls(grid, walls[3:], build_connectivity(grid)) == []


def test_dangling_open_flag_is_invariant_error():
    spec = DungeonSpecification(width=2, depth=1, height=1)
    grid = RoomGrid(spec)
    grid[Position(1, 0, 0)].open[Direction.EAST] = True
    with pytest.raises(GenerationInvariantError):
        build_connectivity(grid)
