"""
Feature scalers: StandardScaler, MinMaxScaler, RobustScaler and Normalizer.

Column-wise scalers learn one statistic pair per feature during `fit`.
`Normalizer` is row-wise and needs no statistics.
"""

from __future__ import annotations

from typing import Any, Optional, Tuple

import numpy as np
from typing_extensions import Self

from ._base import Transform, as_2d


class StandardScaler(Transform):
    """
    Standardize features to zero mean and unit variance.

        z = (x - mean_) / scale_

    `scale_` is the population standard deviation per column, with zero
    replaced by 1 so constant columns map to 0 rather than NaN.
    """

    def __init__(self) -> None:
        super().__init__()
        self.mean_: Optional[np.ndarray] = None
        self.scale_: Optional[np.ndarray] = None

    def fit(self, x: Any) -> Self:
        arr = as_2d(x)
        self.mean_ = arr.mean(axis=0)
        std = arr.std(axis=0)
        self.scale_ = np.where(std == 0.0, 1.0, std)
        self._mark_fitted(arr.shape[1])
        return self

    def transform(self, x: Any) -> np.ndarray:
        arr = self._check_input(x)
        return (arr - self.mean_) / self.scale_

    def inverse_transform(self, x: Any) -> np.ndarray:
        arr = self._check_input(x)
        return arr * self.scale_ + self.mean_


class MinMaxScaler(Transform):
    """
    Rescale each feature linearly into `feature_range`.

        x_scaled = (x - data_min_) / data_range_ * (hi - lo) + lo

    Columns with zero range use a range of 1.

    Parameters
    ----------
    feature_range : tuple[float, float], default=(0.0, 1.0)
        Target interval; ``lo < hi`` is required.
    """

    def __init__(self, feature_range: Tuple[float, float] = (0.0, 1.0)) -> None:
        super().__init__()
        lo, hi = float(feature_range[0]), float(feature_range[1])
        if not lo < hi:
            raise ValueError(f"feature_range must satisfy min < max, got {feature_range}")
        self.feature_range = (lo, hi)
        self.data_min_: Optional[np.ndarray] = None
        self.data_max_: Optional[np.ndarray] = None
        self.data_range_: Optional[np.ndarray] = None

    def fit(self, x: Any) -> Self:
        arr = as_2d(x)
        self.data_min_ = arr.min(axis=0)
        self.data_max_ = arr.max(axis=0)
        rng = self.data_max_ - self.data_min_
        self.data_range_ = np.where(rng == 0.0, 1.0, rng)
        self._mark_fitted(arr.shape[1])
        return self

    def transform(self, x: Any) -> np.ndarray:
        arr = self._check_input(x)
        lo, hi = self.feature_range
        return (arr - self.data_min_) / self.data_range_ * (hi - lo) + lo

    def inverse_transform(self, x: Any) -> np.ndarray:
        arr = self._check_input(x)
        lo, hi = self.feature_range
        return (arr - lo) / (hi - lo) * self.data_range_ + self.data_min_


class RobustScaler(Transform):
    """
    Scale features with statistics that are robust to outliers.

        x_scaled = (x - center_) / scale_

    Per column, on the sorted values ``s`` of length ``n``:

    - ``center_ = s[n // 2]``
    - ``scale_ = s[3n // 4] - s[n // 4]`` (interquartile range), 0 replaced by 1
    """

    def __init__(self) -> None:
        super().__init__()
        self.center_: Optional[np.ndarray] = None
        self.scale_: Optional[np.ndarray] = None

    def fit(self, x: Any) -> Self:
        arr = as_2d(x)
        s = np.sort(arr, axis=0)
        n = s.shape[0]
        self.center_ = s[n // 2].copy()
        iqr = s[(3 * n) // 4] - s[n // 4]
        self.scale_ = np.where(iqr == 0.0, 1.0, iqr)
        self._mark_fitted(arr.shape[1])
        return self

    def transform(self, x: Any) -> np.ndarray:
        arr = self._check_input(x)
        return (arr - self.center_) / self.scale_

    def inverse_transform(self, x: Any) -> np.ndarray:
        arr = self._check_input(x)
        return arr * self.scale_ + self.center_


class Normalizer(Transform):
    """
    Scale each row (sample) to unit norm.

    Parameters
    ----------
    norm : {"l2", "l1", "max"}, default="l2"
        Row norm. Rows whose norm is 0 are returned unchanged.

    Notes
    -----
    Stateless: `fit` only validates the input, and `transform` works
    without a prior `fit`.
    """

    _NORMS = ("l1", "l2", "max")

    def __init__(self, norm: str = "l2") -> None:
        super().__init__()
        if norm not in self._NORMS:
            raise ValueError(f"norm must be one of {self._NORMS}, got {norm!r}")
        self.norm = norm

    def fit(self, x: Any) -> Self:
        as_2d(x)
        self._mark_fitted()
        return self

    def transform(self, x: Any) -> np.ndarray:
        arr = as_2d(x)
        if self.norm == "l1":
            norms = np.abs(arr).sum(axis=1)
        elif self.norm == "l2":
            norms = np.sqrt((arr * arr).sum(axis=1))
        else:
            norms = np.abs(arr).max(axis=1)
        norms = np.where(norms > 0.0, norms, 1.0)
        return arr / norms[:, None]
