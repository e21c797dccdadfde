"""Pipeline orchestration for dungeon generation.

Provides the public Dungeon class: it resolves the run configuration, drives
the generator to a fully connected grid, then voxelizes the remaining walls.
"""
from __future__ import annotations

import random
import time
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

from ..logging_utils import get_logger
from .cells import RoomGrid, Wall
from .config import DEFAULT_SEPARATING_WALL_BIAS, DungeonSpecification, GeneratorConfig
from .generator import Generator
from .metrics import init_metrics
from .voxels import Voxel, voxelize

log = get_logger("mapgen.pipeline")


@dataclass
class Dungeon:
    spec: DungeonSpecification
    config: Optional[GeneratorConfig] = None
    grid: RoomGrid = field(init=False, repr=False)
    opened: List[Wall] = field(init=False, repr=False)
    voxels: List[Voxel] = field(init=False, repr=False)

    def __post_init__(self):
        if self.config is None:
            self.config = GeneratorConfig.from_env()
        # None => random, but recorded so the layout can be regenerated
        if self.config.seed is None:
            self.config = replace(self.config, seed=random.randint(1, 1_000_000))
        self.metrics: Dict[str, Any] = init_metrics() if self.config.enable_metrics else {}
        self._run_pipeline()

    @property
    def seed(self) -> int:
        return self.config.seed

    @property
    def width(self) -> int:
        return self.spec.width

    @property
    def depth(self) -> int:
        return self.spec.depth

    @property
    def height(self) -> int:
        return self.spec.height

    def _run_pipeline(self):
        """Execute generation phases, timing each one when metrics are enabled."""
        enabled = self.config.enable_metrics
        phase_times = {}
        start = time.perf_counter()

        def _phase(label, fn, *a, **k):
            if not enabled:
                return fn(*a, **k)
            ps = time.perf_counter()
            r = fn(*a, **k)
            phase_times[label] = int((time.perf_counter() - ps) * 1000)
            return r

        gen = Generator(
            self.spec,
            rng=random.Random(self.config.seed),
            separating_wall_bias=self.config.separating_wall_bias,
            metrics=self.metrics if enabled else None,
        )
        outputs = _phase('generate', gen.run)
        self.grid = outputs.grid
        self.opened = outputs.opened
        self.voxels = _phase('voxelize', voxelize, self.grid, unique=self.config.unique_voxels)

        if enabled:
            self.metrics['voxels_emitted'] = len(self.voxels)
            self.metrics['runtime_ms'] = int((time.perf_counter() - start) * 1000)
            self.metrics['phase_ms'] = phase_times
        log.info(
            event="dungeon_generated",
            seed=self.seed,
            rooms=self.spec.num_rooms,
            opened=len(self.opened),
            iterations=outputs.iterations,
            voxels=len(self.voxels),
        )


def generate_dungeon(
    spec: DungeonSpecification,
    rng: Optional[random.Random] = None,
    separating_wall_bias: float = DEFAULT_SEPARATING_WALL_BIAS,
    unique: bool = False,
) -> List[Voxel]:
    """Generate a connected layout and return the voxels of its remaining walls."""
    outputs = Generator(spec, rng=rng, separating_wall_bias=separating_wall_bias).run()
    return voxelize(outputs.grid, unique=unique)


__all__ = ["Dungeon", "generate_dungeon"]
