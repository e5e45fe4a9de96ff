from math import lgamma
from typing import List

import pandas as pd


def _code_frame(dataset) -> pd.DataFrame:
    return pd.DataFrame({i: dataset.column(i) for i in range(dataset.attribute_count())})


def counts_for_node_given_parents(df: pd.DataFrame, node: int, parents: List[int]) -> pd.Series:
    """Observed counts N_ijk indexed by (parent values..., node value); unseen configs are absent."""
    return df.groupby(parents + [node]).size()


def node_score(df: pd.DataFrame, node: int, parents: List[int], r_i: int) -> float:
    """K2 contribution of one node: uniform Dirichlet prior (all pseudo-counts 1).

    Parent configurations with no data add lgamma(r) - lgamma(r) = 0, and
    so does lgamma(1 + 0), so only observed counts are visited.
    """
    if not parents:
        parent_totals = [len(df)]
        k_counts = df[node].value_counts().tolist()
    else:
        parent_totals = df.groupby(parents).size().tolist()
        k_counts = counts_for_node_given_parents(df, node, parents).tolist()
    score = 0.0
    for N_ij in parent_totals:
        score += lgamma(r_i) - lgamma(r_i + N_ij)
    for N_ijk in k_counts:
        score += lgamma(1 + N_ijk)
    return score


def bayesian_score(dataset, graph) -> float:
    """Log Bayesian score of ``graph`` given ``dataset``."""
    df = _code_frame(dataset)
    score = 0.0
    for node in range(dataset.attribute_count()):
        parents = [p for p in graph.parents(node) if p != node]
        score += node_score(df, node, parents, dataset.domain_size(node))
    return float(score)
