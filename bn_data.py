from typing import Dict, List, Optional, Sequence

import numpy as np
import pandas as pd


def load_discrete_data(path: str) -> pd.DataFrame:
    """Read a CSV; float columns holding only whole numbers become int, the rest are left as read."""
    df = pd.read_csv(path)
    for c in df.columns:
        values = df[c]
        if pd.api.types.is_float_dtype(values) and values.notna().all() and (values % 1 == 0).all():
            df[c] = values.astype(int)
    return df


class DiscreteDataset:
    """Read-only table of 0-based category codes, one column per attribute.

    Values are not checked here; the contingency builder rejects codes outside
    [0, domain size) when a search starts.
    """

    def __init__(self, codes, domain_sizes: Sequence[int], names: Optional[Sequence[str]] = None):
        codes = np.asarray(codes, dtype=np.int64)
        if codes.ndim == 1 and codes.size == 0:
            codes = codes.reshape(0, len(domain_sizes))
        if codes.ndim != 2:
            raise ValueError(f"codes must be a 2-d array, got shape {codes.shape}")
        if codes.shape[1] != len(domain_sizes):
            raise ValueError(
                f"{codes.shape[1]} columns but {len(domain_sizes)} domain sizes")
        if names is None:
            names = [str(i) for i in range(codes.shape[1])]
        if len(names) != codes.shape[1]:
            raise ValueError(f"{codes.shape[1]} columns but {len(names)} names")
        self._codes = codes
        self._domains = [int(d) for d in domain_sizes]
        self.names: List[str] = [str(n) for n in names]

    @classmethod
    def from_frame(cls, df: pd.DataFrame, base: int = 1,
                   domain_sizes: Optional[Dict[str, int]] = None) -> "DiscreteDataset":
        """Build a dataset from a DataFrame.

        Integer columns are shifted by ``base`` (the course data counts
        categories from 1). Any other column is factorised in sorted order.
        Domain sizes default to the largest code + 1 (1 for an empty column)
        unless given per column.
        """
        columns = []
        domains = []
        for col in df.columns:
            series = df[col]
            if pd.api.types.is_integer_dtype(series):
                codes = series.to_numpy(dtype=np.int64) - base
            else:
                codes, _ = pd.factorize(series, sort=True)
            columns.append(codes)
            if domain_sizes is not None and col in domain_sizes:
                domains.append(int(domain_sizes[col]))
            else:
                domains.append(int(codes.max()) + 1 if len(codes) else 1)
        matrix = np.column_stack(columns) if columns else np.empty((len(df), 0), dtype=np.int64)
        return cls(matrix, domains, names=list(df.columns))

    @classmethod
    def from_csv(cls, path: str, base: int = 1) -> "DiscreteDataset":
        return cls.from_frame(load_discrete_data(path), base=base)

    def attribute_count(self) -> int:
        return self._codes.shape[1]

    def domain_size(self, attr: int) -> int:
        return self._domains[attr]

    def instance_count(self) -> int:
        return self._codes.shape[0]

    def category_of(self, instance: int, attr: int) -> int:
        return int(self._codes[instance, attr])

    def column(self, attr: int) -> np.ndarray:
        #read-only view so callers cannot mutate the data mid-search
        view = self._codes[:, attr]
        view.flags.writeable = False
        return view

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(self._codes, columns=self.names)

    def __repr__(self):
        return (f"DiscreteDataset(instances={self.instance_count()}, "
                f"attributes={self.attribute_count()})")
