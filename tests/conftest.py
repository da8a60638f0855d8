"""Pytest configuration for path tracer tests.

Provides generator stubs and seeded generators shared by the test modules.
Every sampling function takes its generator explicitly, so tests pass
these in directly.
"""

import random

import pytest


class MidpointRandom:
    """Generator stub that returns the midpoint of every requested range."""

    def random(self) -> float:
        return 0.5

    def uniform(self, a: float, b: float) -> float:
        return a + (b - a) * 0.5


class ScriptedRandom:
    """Generator stub that replays a fixed list of uniform(a, b) results.

    random() keeps returning 0.5 so Fresnel draws and pixel jitter stay
    predictable while the scripted values drive vector sampling.
    """

    def __init__(self, values):
        self.values = list(values)

    def random(self) -> float:
        return 0.5

    def uniform(self, a: float, b: float) -> float:
        return self.values.pop(0)


@pytest.fixture
def midpoint_rng():
    return MidpointRandom()


@pytest.fixture
def seeded_rng():
    return random.Random(1234)
