import numpy as np
import pytest

from bn_data import DiscreteDataset
from bn_graph import BayesNetGraph


@pytest.fixture
def correlated_dataset():
    """a and b always agree, c is independent of both."""
    rows = [
        (0, 0, 0),
        (1, 1, 0),
        (0, 0, 1),
        (1, 1, 1),
    ]
    return DiscreteDataset(rows, [2, 2, 2], names=["a", "b", "c"])


@pytest.fixture
def random_dataset():
    rng = np.random.default_rng(0)
    codes = rng.integers(0, [2, 3, 4, 2, 3, 2], size=(200, 6))
    #make column 3 a noisy copy of column 0 so there is some structure to find
    flip = rng.random(200) < 0.1
    codes[:, 3] = np.where(flip, 1 - codes[:, 0], codes[:, 0])
    return DiscreteDataset(codes, [2, 3, 4, 2, 3, 2])


@pytest.fixture
def empty_graph(correlated_dataset):
    return BayesNetGraph.for_dataset(correlated_dataset)
