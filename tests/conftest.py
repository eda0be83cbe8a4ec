
import pytest
import numpy as np


@pytest.fixture
def rng():
    return np.random.default_rng(42)

@pytest.fixture
def small_sample():
    return np.array([10.0, 20.0, 30.0, 40.0, 50.0])

@pytest.fixture
def normal_sample(rng):
    return rng.normal(loc=3.0, scale=2.0, size=300)

@pytest.fixture
def correlated_pair(rng):
    x = rng.normal(size=150)
    y = 0.6 * x + 0.8 * rng.normal(size=150)
    return x, y
