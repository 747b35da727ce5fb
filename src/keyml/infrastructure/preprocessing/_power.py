"""
Power transforms making features more Gaussian-like.

Per-column lambdas are fixed at 0 during `fit`, which reduces both methods
to log transforms:

- Yeo-Johnson, ``lambda = 0``:
    ``log(x + 1)`` for ``x >= 0`` and ``-((1 - x)^2 - 1) / 2`` for ``x < 0``
- Box-Cox, ``lambda = 0``:
    ``log(x)``, defined for strictly positive data only.

The transform formulas below are written for arbitrary lambdas so that
`lambdas_` may be set explicitly.
"""

from __future__ import annotations

from typing import Any, Optional

import numpy as np
from typing_extensions import Self

from ._base import Transform, as_2d

_LAMBDA_TOL = 1e-10


def _yeo_johnson(x: np.ndarray, lmbda: np.ndarray) -> np.ndarray:
    lp = np.broadcast_to(lmbda, x.shape)
    l2 = 2.0 - lp
    near0 = np.abs(lp) < _LAMBDA_TOL
    near2 = np.abs(l2) < _LAMBDA_TOL
    with np.errstate(divide="ignore", invalid="ignore"):
        pos = np.where(near0, np.log1p(np.abs(x)), (np.power(np.abs(x) + 1, lp) - 1) / lp)
        neg = np.where(
            near2, -np.log1p(np.abs(x)), -(np.power(np.abs(x) + 1, l2) - 1) / l2
        )
    return np.where(x >= 0, pos, neg)


def _yeo_johnson_inverse(y: np.ndarray, lmbda: np.ndarray) -> np.ndarray:
    lp = np.broadcast_to(lmbda, y.shape)
    l2 = 2.0 - lp
    near0 = np.abs(lp) < _LAMBDA_TOL
    near2 = np.abs(l2) < _LAMBDA_TOL
    with np.errstate(divide="ignore", invalid="ignore"):
        pos = np.where(near0, np.expm1(y), np.power(y * lp + 1, 1 / lp) - 1)
        neg = np.where(near2, -np.expm1(-y), 1 - np.power(1 - l2 * y, 1 / l2))
    return np.where(y >= 0, pos, neg)


def _box_cox(x: np.ndarray, lmbda: np.ndarray) -> np.ndarray:
    lp = np.broadcast_to(lmbda, x.shape)
    near0 = np.abs(lp) < _LAMBDA_TOL
    with np.errstate(divide="ignore", invalid="ignore"):
        return np.where(near0, np.log(x), (np.power(x, lp) - 1) / lp)


def _box_cox_inverse(y: np.ndarray, lmbda: np.ndarray) -> np.ndarray:
    lp = np.broadcast_to(lmbda, y.shape)
    near0 = np.abs(lp) < _LAMBDA_TOL
    with np.errstate(divide="ignore", invalid="ignore"):
        return np.where(near0, np.exp(y), np.power(y * lp + 1, 1 / lp))


class PowerTransformer(Transform):
    """
    Apply a per-column power transform.

    Parameters
    ----------
    method : {"yeo-johnson", "box-cox"}, default="yeo-johnson"
        "box-cox" requires strictly positive data.

    Attributes
    ----------
    lambdas_ : np.ndarray
        Per-column lambda (all zeros after `fit`).

    Raises
    ------
    ValueError
        From `fit` / `transform` when "box-cox" meets non-positive data.
    """

    _METHODS = ("yeo-johnson", "box-cox")

    def __init__(self, method: str = "yeo-johnson") -> None:
        super().__init__()
        if method not in self._METHODS:
            raise ValueError(f"method must be one of {self._METHODS}, got {method!r}")
        self.method = method
        self.lambdas_: Optional[np.ndarray] = None

    def _check_domain(self, arr: np.ndarray) -> None:
        if self.method == "box-cox" and np.any(arr <= 0):
            raise ValueError("box-cox requires strictly positive data")

    def fit(self, x: Any) -> Self:
        arr = as_2d(x)
        self._check_domain(arr)
        self.lambdas_ = np.zeros(arr.shape[1], dtype=np.float64)
        self._mark_fitted(arr.shape[1])
        return self

    def transform(self, x: Any) -> np.ndarray:
        arr = self._check_input(x)
        self._check_domain(arr)
        if self.method == "box-cox":
            return _box_cox(arr, self.lambdas_)
        return _yeo_johnson(arr, self.lambdas_)

    def inverse_transform(self, x: Any) -> np.ndarray:
        arr = self._check_input(x)
        if self.method == "box-cox":
            return _box_cox_inverse(arr, self.lambdas_)
        return _yeo_johnson_inverse(arr, self.lambdas_)
