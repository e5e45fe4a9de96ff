from math import log

import pytest

from bn_data import DiscreteDataset
from bn_graph import BayesNetGraph
from bn_scoring import bayesian_score


def test_single_node_score():
    ds = DiscreteDataset([[0], [1], [0], [1]], [2])
    #lgamma(2) - lgamma(6) + 2 * lgamma(3)
    assert bayesian_score(ds, BayesNetGraph(1)) == pytest.approx(log(1 / 30))


def test_learned_edge_improves_score(correlated_dataset):
    empty = BayesNetGraph(3)
    linked = BayesNetGraph.from_edges(3, [(0, 1)])
    assert bayesian_score(correlated_dataset, linked) == pytest.approx(
        2 * log(1 / 3) + 2 * log(1 / 30))
    assert bayesian_score(correlated_dataset, linked) > bayesian_score(correlated_dataset, empty)
