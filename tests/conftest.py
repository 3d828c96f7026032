"""Shared fixtures for the test suite."""

import numpy as np
import pytest


@pytest.fixture
def rng():
    """A seeded random source so stochastic tests are reproducible."""
    return np.random.default_rng(42)


class FixedRandom:
    """Stand-in generator returning scripted values.

    `uniform` pops the next queued vector, `random` the next queued scalar.
    """

    def __init__(self, uniforms=(), randoms=()):
        self._uniforms = list(uniforms)
        self._randoms = list(randoms)

    def uniform(self, low, high, size):
        return np.asarray(self._uniforms.pop(0), dtype=np.float64)

    def random(self, size=None):
        if size is None:
            return self._randoms.pop(0)
        return np.asarray([self._randoms.pop(0) for _ in range(size)], dtype=np.float64)


@pytest.fixture
def fixed_random():
    return FixedRandom
