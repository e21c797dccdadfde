from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import TYPE_CHECKING, Iterator, Optional

from .errors import ConfigurationError, InvalidSpecificationError

if TYPE_CHECKING:
    from .cells import Position

DEFAULT_SEPARATING_WALL_BIAS = 0.10

_FALSE_STRINGS = {"0", "false", "no", ""}


@dataclass(frozen=True)
class DungeonSpecification:
    """Room counts along each axis: width is x, height is y, depth is z."""

    width: int
    depth: int
    height: int

    def __post_init__(self):
        for name in ("width", "depth", "height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise InvalidSpecificationError(name, value)

    @property
    def num_rooms(self) -> int:
        return self.width * self.depth * self.height

    @property
    def num_adjacent_pairs(self) -> int:
        w, d, h = self.width, self.depth, self.height
        return (w - 1) * d * h + w * d * (h - 1) + w * (d - 1) * h

    def contains(self, x: int, y: int, z: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height and 0 <= z < self.depth

    def positions(self) -> Iterator["Position"]:
        """Yield every position in linear index order."""
        from .cells import Position

        for x in range(self.width):
            for y in range(self.height):
                for z in range(self.depth):
                    yield Position(x, y, z)

    def position_at(self, index: int) -> "Position":
        from .cells import Position

        if not 0 <= index < self.num_rooms:
            raise IndexError(f"room index {index} out of range")
        x, rest = divmod(index, self.depth * self.height)
        y, z = divmod(rest, self.depth)
        return Position(x, y, z)


@dataclass
class GeneratorConfig:
    """Tunables for a generation run.

    ``separating_wall_bias`` is the probability that an iteration opens a wall
    between two different components rather than any remaining wall. Higher
    values give more tree-like layouts that connect quickly; lower values
    converge slower and leave more loops.
    """

    seed: Optional[int] = None
    separating_wall_bias: float = DEFAULT_SEPARATING_WALL_BIAS
    unique_voxels: bool = False
    enable_metrics: bool = True

    def __post_init__(self):
        if not 0.0 <= self.separating_wall_bias <= 1.0:
            raise ConfigurationError(
                f"separating_wall_bias must be within [0, 1], got {self.separating_wall_bias!r}"
            )

    @classmethod
    def from_env(cls, **overrides) -> "GeneratorConfig":
        """Build a config from ``MAPGEN_*`` environment variables.

        Keyword overrides take precedence; ``None`` overrides are ignored so
        unset CLI flags fall through to the environment.
        """
        values = {}
        env_map = {
            "MAPGEN_SEED": ("seed", int),
            "MAPGEN_SEPARATING_WALL_BIAS": ("separating_wall_bias", float),
            "MAPGEN_UNIQUE_VOXELS": ("unique_voxels", _parse_bool),
            "MAPGEN_ENABLE_GENERATION_METRICS": ("enable_metrics", _parse_bool),
        }
        for env_key, (attr, parse) in env_map.items():
            raw = os.environ.get(env_key)
            if raw is None:
                continue
            try:
                values[attr] = parse(raw.strip())
            except ValueError as e:
                raise ConfigurationError(f"{env_key}={raw!r} is not valid") from e
        known = {f.name for f in fields(cls)}
        for key, val in overrides.items():
            if key not in known:
                raise TypeError(f"unknown config field {key!r}")
            if val is not None:
                values[key] = val
        return cls(**values)


def _parse_bool(raw: str) -> bool:
    return raw.lower() not in _FALSE_STRINGS


__all__ = ["DungeonSpecification", "GeneratorConfig", "DEFAULT_SEPARATING_WALL_BIAS"]
