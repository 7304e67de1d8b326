import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest


@pytest.fixture
def rng():
    return np.random.default_rng(42)


@pytest.fixture
def two_clusters(rng):
    """Two well separated 2D clusters labelled 0 and 1, rows shuffled."""
    n = 60
    class_0 = rng.normal(loc=(-2.0, -2.0), scale=0.5, size=(n, 2))
    class_1 = rng.normal(loc=(2.0, 2.0), scale=0.5, size=(n, 2))
    X = np.vstack([class_0, class_1])
    y = np.concatenate([np.zeros(n), np.ones(n)])
    order = rng.permutation(len(y))
    return X[order], y[order]


@pytest.fixture
def three_clusters(rng):
    """Three well separated 2D clusters with class indices 0, 1 and 2, rows shuffled."""
    n = 40
    centers = [(-4.0, 0.0), (4.0, 0.0), (0.0, 6.0)]
    X = np.vstack([rng.normal(loc=c, scale=0.5, size=(n, 2)) for c in centers])
    y = np.repeat(np.arange(3), n)
    order = rng.permutation(len(y))
    return X[order], y[order]
