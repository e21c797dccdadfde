"""Randomised wall removal until every room is reachable.

The grid starts with every wall closed. Each iteration opens one remaining
wall: with probability ``separating_wall_bias`` the pick is restricted to walls
that join two different components, otherwise any remaining wall is taken.
The run stops as soon as the grid forms a single component. Because the fully
open grid is connected and the wall list shrinks every iteration, the loop
ends at or before the last wall is used.
"""
from __future__ import annotations

import random
from enum import Enum
from typing import Any, Dict, List, NamedTuple, Optional

from ..logging_utils import get_logger
from .cells import RoomGrid, Wall, enumerate_walls
from .config import DEFAULT_SEPARATING_WALL_BIAS, DungeonSpecification
from .connectivity import ComponentLabels, build_connectivity, labels_connected, separating_walls
from .errors import ConfigurationError, GenerationInvariantError

log = get_logger("mapgen.generator")


class GeneratorState(Enum):
    GENERATING = "generating"
    DONE = "done"


class GenerationOutputs(NamedTuple):
    grid: RoomGrid
    opened: List[Wall]
    remaining: List[Wall]
    iterations: int
    labels: ComponentLabels


class Generator:
    def __init__(
        self,
        spec: DungeonSpecification,
        rng: Optional[random.Random] = None,
        separating_wall_bias: float = DEFAULT_SEPARATING_WALL_BIAS,
        metrics: Optional[Dict[str, Any]] = None,
    ):
        if not 0.0 <= separating_wall_bias <= 1.0:
            raise ConfigurationError(f"separating_wall_bias must be within [0, 1], got {separating_wall_bias!r}")
        self.spec = spec
        self.rng = rng if rng is not None else random.Random()
        self.separating_wall_bias = separating_wall_bias
        self.metrics = metrics
        self.grid = RoomGrid(spec)
        self.walls: List[Wall] = enumerate_walls(spec)
        self.opened: List[Wall] = []
        self.iterations = 0
        self.labels: ComponentLabels = self._connectivity()
        self.state = GeneratorState.DONE if labels_connected(self.labels) else GeneratorState.GENERATING
        self._count('walls_total', len(self.walls))

    @property
    def done(self) -> bool:
        return self.state is GeneratorState.DONE

    def _count(self, key: str, amount: int = 1) -> None:
        if self.metrics is not None:
            self.metrics[key] = self.metrics.get(key, 0) + amount

    def _connectivity(self) -> ComponentLabels:
        self._count('connectivity_checks')
        return build_connectivity(self.grid)

    def choose_wall(self) -> int:
        """Return the list index of the next wall to open."""
        if not self.walls:
            raise GenerationInvariantError(
                f"no walls left to open but {len(set(self.labels))} components remain"
            )
        if self.rng.random() < self.separating_wall_bias:
            candidates = separating_walls(self.grid, self.walls, self._connectivity())
            if candidates:
                self._count('separating_picks')
                return candidates[self.rng.randrange(len(candidates))]
            self._count('separating_fallbacks')
        self._count('random_picks')
        return self.rng.randrange(len(self.walls))

    def step(self) -> Wall:
        """Open one wall and update the generation state."""
        if self.done:
            raise GenerationInvariantError("generation already finished")
        wall = self.walls.pop(self.choose_wall())
        self.grid.open_wall(wall)
        self.opened.append(wall)
        self.iterations += 1
        self.labels = self._connectivity()
        if labels_connected(self.labels):
            self.state = GeneratorState.DONE
        return wall

    def run(self) -> GenerationOutputs:
        log.debug(event="generation_start", width=self.spec.width, depth=self.spec.depth,
                  height=self.spec.height, walls=len(self.walls), bias=self.separating_wall_bias)
        while not self.done:
            self.step()
        if self.metrics is not None:
            self.metrics['iterations'] = self.iterations
            self.metrics['walls_opened'] = len(self.opened)
            self.metrics['walls_remaining'] = len(self.walls)
            self.metrics['components_final'] = len(set(self.labels))
        log.debug(event="generation_done", iterations=self.iterations, opened=len(self.opened),
                  remaining=len(self.walls))
        return GenerationOutputs(self.grid, self.opened, self.walls, self.iterations, self.labels)


__all__ = ["Generator", "GeneratorState", "GenerationOutputs"]
