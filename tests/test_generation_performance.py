import random
import time

import pytest

from mapgen.dungeon import DungeonSpecification, Generator, voxelize

# Simple performance guardrail. Not a strict micro-benchmark; aims to catch large regressions.
# Adjust thresholds if CI hardware differs significantly.


@pytest.mark.performance
def test_default_map_generation_time():
    spec = DungeonSpecification(width=15, depth=15, height=1)
    seeds = [10101, 20202, 30303]
    max_seconds_per = 5.0  # generous threshold; tune as needed
    for s in seeds:
        start = time.perf_counter()
        out = Generator(spec, rng=random.Random(s)).run()
        voxelize(out.grid)
        elapsed = time.perf_counter() - start
        assert elapsed < max_seconds_per, f"Seed {s} took {elapsed:.3f}s (> {max_seconds_per}s)"
