"""
Missing-value imputation.
"""

from __future__ import annotations

import warnings
from typing import Any, Optional

import numpy as np
from typing_extensions import Self

from ._base import Transform, as_2d


class SimpleImputer(Transform):
    """
    Replace missing values with a per-column statistic.

    Parameters
    ----------
    strategy : {"mean", "median", "most_frequent", "constant"}, default="mean"
        - "mean": mean of the observed values.
        - "median": upper median, ``sorted(observed)[n // 2]``.
        - "most_frequent": most common observed value; ties resolve to the
          smallest value.
        - "constant": `fill_value` for every column.
    fill_value : float, default=0.0
        Replacement used by the "constant" strategy.
    missing_values : float, default=NaN
        Marker for missing entries. NaN is matched with ``isnan``.

    Notes
    -----
    A column with no observed values gets the statistic 0 and a
    ``RuntimeWarning`` is emitted.

    Attributes
    ----------
    statistics_ : np.ndarray
        Fill value per column.
    """

    _STRATEGIES = ("mean", "median", "most_frequent", "constant")

    def __init__(
        self,
        strategy: str = "mean",
        *,
        fill_value: float = 0.0,
        missing_values: float = np.nan,
    ) -> None:
        super().__init__()
        if strategy not in self._STRATEGIES:
            raise ValueError(f"strategy must be one of {self._STRATEGIES}, got {strategy!r}")
        self.strategy = strategy
        self.fill_value = float(fill_value)
        self.missing_values = float(missing_values)
        self.statistics_: Optional[np.ndarray] = None

    def _missing_mask(self, arr: np.ndarray) -> np.ndarray:
        if np.isnan(self.missing_values):
            return np.isnan(arr)
        return arr == self.missing_values

    def _column_statistic(self, values: np.ndarray) -> float:
        if self.strategy == "mean":
            return float(values.mean())
        if self.strategy == "median":
            return float(np.sort(values)[values.size // 2])
        uniq, counts = np.unique(values, return_counts=True)
        return float(uniq[np.argmax(counts)])

    def fit(self, x: Any) -> Self:
        arr = as_2d(x)
        missing = self._missing_mask(arr)
        stats = np.zeros(arr.shape[1], dtype=np.float64)

        for j in range(arr.shape[1]):
            if self.strategy == "constant":
                stats[j] = self.fill_value
                continue
            observed = arr[~missing[:, j], j]
            if observed.size == 0:
                warnings.warn(
                    f"SimpleImputer: column {j} has no observed values; using 0.",
                    RuntimeWarning,
                    stacklevel=2,
                )
                continue
            stats[j] = self._column_statistic(observed)

        self.statistics_ = stats
        self._mark_fitted(arr.shape[1])
        return self

    def transform(self, x: Any) -> np.ndarray:
        arr = self._check_input(x)
        missing = self._missing_mask(arr)
        return np.where(missing, self.statistics_[None, :], arr)
