import numpy as np
import pytest


class CornerSeeds:
    """Stand-in for numpy's Generator: every uniform draw returns the lower bound."""

    def __init__(self):
        self.calls = []

    def uniform(self, low, high, size):
        self.calls.append((low, high, size))
        return np.full(size, low, dtype=np.float64)


@pytest.fixture
def corner_rng():
    return CornerSeeds()
