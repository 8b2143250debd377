import random

import pytest

from game.systems import perf_stats


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture(autouse=True)
def _reset_perf_counters():
    perf_stats.reset_pathfinding()
    yield
    perf_stats.reset_pathfinding()
