"""Public dungeon package interface."""

from .cells import Position, Room, RoomGrid, Wall, enumerate_walls, neighbor  # noqa: F401
from .config import DEFAULT_SEPARATING_WALL_BIAS, DungeonSpecification, GeneratorConfig  # noqa: F401
from .connectivity import build_connectivity, component_count, is_connected, separating_walls  # noqa: F401
from .directions import DIRECTIONS, HALF_DIRECTIONS, LATERAL_DIRECTIONS, Direction, opposite  # noqa: F401
from .errors import (  # noqa: F401
    ConfigurationError,
    GenerationInvariantError,
    InvalidSpecificationError,
    MapGenError,
)
from .generator import GenerationOutputs, Generator, GeneratorState  # noqa: F401
from .pipeline import Dungeon, generate_dungeon  # noqa: F401
from .voxels import Voxel, voxelize  # noqa: F401

__all__ = [
    "Dungeon",
    "DungeonSpecification",
    "GeneratorConfig",
    "DEFAULT_SEPARATING_WALL_BIAS",
    "Direction",
    "DIRECTIONS",
    "HALF_DIRECTIONS",
    "LATERAL_DIRECTIONS",
    "opposite",
    "neighbor",
    "Position",
    "Room",
    "RoomGrid",
    "Wall",
    "enumerate_walls",
    "build_connectivity",
    "component_count",
    "is_connected",
    "separating_walls",
    "Generator",
    "GeneratorState",
    "GenerationOutputs",
    "Voxel",
    "voxelize",
    "generate_dungeon",
    "MapGenError",
    "ConfigurationError",
    "InvalidSpecificationError",
    "GenerationInvariantError",
]
