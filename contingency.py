"""Pairwise contingency tables and the conditional entropies read off them.

Entropies are in bits. A cell with zero count contributes nothing
(0 log 0 = 0) and an all-zero table has entropy 0.
"""

import logging
import numbers
from dataclasses import dataclass
from typing import Dict, List, Tuple

import numpy as np

from bn_errors import InvalidDataset

logger = logging.getLogger(__name__)

#conditional entropies closer than this are a tie (summation order differs per axis)
TIE_TOLERANCE = 1e-9


@dataclass(frozen=True)
class ContingencyTable:
    """Joint counts of attribute ``row_attr`` (rows) against ``col_attr`` (columns)."""
    row_attr: int
    col_attr: int
    counts: np.ndarray

    @property
    def total(self) -> int:
        return int(self.counts.sum())


@dataclass(frozen=True)
class CandidateEdge:
    """Proposed edge parent -> child; ``entropy`` is H(child | parent), lower is stronger."""
    parent: int
    child: int
    entropy: float
    gain: float = 0.0

    def as_tuple(self) -> Tuple[int, int]:
        return (self.parent, self.child)


def _attribute_codes(dataset, attr: int, instances: int) -> np.ndarray:
    column = getattr(dataset, "column", None)
    if column is not None:
        raw = np.asarray(column(attr))
    else:
        raw = np.array([dataset.category_of(n, attr) for n in range(instances)])
    if raw.shape != (instances,):
        raise InvalidDataset(
            f"attribute {attr} supplies {raw.shape[0] if raw.ndim else 1} values for {instances} instances")
    if instances == 0 or raw.dtype.kind in "iu":
        return raw.astype(np.int64, copy=False)
    if raw.dtype.kind == "f":
        fractional = ~np.isfinite(raw) | (raw != np.floor(raw))
    else:
        fractional = np.array([not isinstance(v, numbers.Integral) for v in raw.tolist()])
    bad = np.flatnonzero(fractional)
    if bad.size:
        n = int(bad[0])
        raise InvalidDataset(
            f"instance {n} has non-integer category {raw.tolist()[n]!r} for attribute {attr}")
    return raw.astype(np.int64)


def _validated_columns(dataset) -> Tuple[List[np.ndarray], List[int]]:
    n_attrs = dataset.attribute_count()
    if n_attrs <= 0:
        raise InvalidDataset("dataset has no attributes")
    instances = dataset.instance_count()
    domains = []
    columns = []
    for attr in range(n_attrs):
        size = dataset.domain_size(attr)
        if size <= 0:
            raise InvalidDataset(f"attribute {attr} has domain size {size}")
        codes = _attribute_codes(dataset, attr, instances)
        bad = np.flatnonzero((codes < 0) | (codes >= size))
        if bad.size:
            n = int(bad[0])
            raise InvalidDataset(
                f"instance {n} has category {int(codes[n])} for attribute {attr}, "
                f"expected a value in [0, {size})")
        domains.append(size)
        columns.append(codes)
    return columns, domains


def build_contingency_tables(dataset) -> Dict[Tuple[int, int], ContingencyTable]:
    """Count co-occurrences for every attribute pair (i, j) with j < i."""
    columns, domains = _validated_columns(dataset)
    tables = {}
    for i in range(len(columns)):
        for j in range(i):
            cells = columns[i] * domains[j] + columns[j]
            counts = np.bincount(cells, minlength=domains[i] * domains[j])
            tables[(i, j)] = ContingencyTable(i, j, counts.reshape(domains[i], domains[j]))
    logger.info("built %d contingency tables from %d instances",
                len(tables), dataset.instance_count())
    return tables


def _xlogx(values: np.ndarray) -> np.ndarray:
    out = np.zeros(values.shape, dtype=float)
    mask = values > 0
    out[mask] = values[mask] * np.log2(values[mask])
    return out


def _conditional_entropy(counts, axis: int) -> float:
    counts = np.asarray(counts, dtype=float)
    total = counts.sum()
    if total <= 0:
        return 0.0
    group_sums = counts.sum(axis=axis)
    value = (_xlogx(group_sums).sum() - _xlogx(counts).sum()) / total
    return max(0.0, float(value))


def entropy_conditioned_on_rows(counts) -> float:
    """H(columns | rows): column entropy within each row, weighted by row probability."""
    return _conditional_entropy(counts, axis=1)


def entropy_conditioned_on_columns(counts) -> float:
    """H(rows | columns)."""
    return _conditional_entropy(counts, axis=0)


def marginal_entropy(counts, axis: int) -> float:
    """Entropy of the marginal left after summing ``counts`` over ``axis``.

    ``axis=1`` gives the row variable, ``axis=0`` the column variable.
    """
    marginal = np.asarray(counts, dtype=float).sum(axis=axis)
    total = marginal.sum()
    if total <= 0:
        return 0.0
    value = (total * np.log2(total) - _xlogx(marginal).sum()) / total
    return max(0.0, float(value))


def resolve_direction(table: ContingencyTable) -> CandidateEdge:
    """Orient the pair so the attribute that explains the other better is the parent.

    On a tie (within TIE_TOLERANCE) the column attribute (the lower index) becomes the parent.
    """
    on_rows = entropy_conditioned_on_rows(table.counts)
    on_columns = entropy_conditioned_on_columns(table.counts)
    if on_columns - on_rows > TIE_TOLERANCE:
        child_entropy = marginal_entropy(table.counts, axis=0)
        return CandidateEdge(table.row_attr, table.col_attr, on_rows,
                             max(0.0, child_entropy - on_rows))
    child_entropy = marginal_entropy(table.counts, axis=1)
    return CandidateEdge(table.col_attr, table.row_attr, on_columns,
                         max(0.0, child_entropy - on_columns))


def evaluate_tables(tables: Dict[Tuple[int, int], ContingencyTable]) -> List[CandidateEdge]:
    return [resolve_direction(tables[key]) for key in sorted(tables)]
