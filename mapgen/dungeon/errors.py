"""Exception types raised by the dungeon generator."""


class MapGenError(Exception):
    """Base class for map generation failures."""


class ConfigurationError(MapGenError, ValueError):
    """A generator tunable is outside its accepted range."""


class InvalidSpecificationError(ConfigurationError):
    """A dungeon extent is not a positive integer."""

    def __init__(self, field: str, value):
        super().__init__(f"{field} must be a positive integer, got {value!r}")
        self.field = field
        self.value = value


class GenerationInvariantError(MapGenError, RuntimeError):
    """Internal grid state no longer satisfies a generation invariant."""


__all__ = [
    "MapGenError",
    "ConfigurationError",
    "InvalidSpecificationError",
    "GenerationInvariantError",
]
