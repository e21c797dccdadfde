import os
import random
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from mapgen.dungeon import DungeonSpecification, Generator  # noqa: E402


def pytest_configure(config):  # register custom marker
    config.addinivalue_line("markers", "performance: generation time guardrails")


@pytest.fixture(autouse=True)
def _clean_mapgen_env(monkeypatch):
    """Keep developer MAPGEN_* settings from leaking into config resolution."""
    for key in list(os.environ):
        if key.startswith("MAPGEN_"):
            monkeypatch.delenv(key, raising=False)
    yield


@pytest.fixture
def spec_3x3():
    return DungeonSpecification(width=3, depth=3, height=1)


@pytest.fixture
def make_generator():
    def _make(width, depth, height, seed=0, **kw):
        spec = DungeonSpecification(width=width, depth=depth, height=height)
        return Generator(spec, rng=random.Random(seed), **kw)

    return _make
