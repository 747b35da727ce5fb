"""
Shared machinery for preprocessing transforms.

Transforms operate on raw array-likes (nested lists or NumPy arrays) with
rows as samples and columns as features, independent of `Tensor`. Feature
outputs are ``float64`` NumPy arrays with the same number of rows as the
input.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import numpy as np
from typing_extensions import Self

from ...domain._errors import NotFittedError
from ...domain._transform import ITransform

logger = logging.getLogger(__name__)


def as_2d(x: Any, name: str = "x") -> np.ndarray:
    """
    Convert an array-like of samples to a 2-D float64 array.

    Raises
    ------
    ValueError
        If the input is not 2-D or has no rows or columns.
    """
    arr = np.array(x, dtype=np.float64)
    if arr.ndim != 2:
        raise ValueError(f"{name} must be 2-D (samples x features), got ndim={arr.ndim}")
    if arr.shape[0] == 0 or arr.shape[1] == 0:
        raise ValueError(f"{name} must have at least one row and one column, got {arr.shape}")
    return arr


def as_1d(y: Any, name: str = "y") -> np.ndarray:
    """
    Convert an array-like of labels to a non-empty 1-D array.

    Raises
    ------
    ValueError
        If the input is not 1-D or is empty.
    """
    arr = np.asarray(y)
    if arr.ndim != 1:
        raise ValueError(f"{name} must be 1-D, got ndim={arr.ndim}")
    if arr.size == 0:
        raise ValueError(f"{name} must not be empty")
    return arr


class Transform(ITransform):
    """
    Base class for fitted transforms.

    Subclasses implement `fit` (which must call `_mark_fitted`) and
    `transform`. `fit_transform` fits then transforms the same data.

    Notes
    -----
    `n_features_in_` is the column count seen at fit; `transform` rejects
    data with a different column count.
    """

    n_features_in_: Optional[int] = None

    def __init__(self) -> None:
        self._fitted = False

    @property
    def is_fitted(self) -> bool:
        return self._fitted

    def _mark_fitted(self, n_features: Optional[int] = None) -> None:
        self._fitted = True
        self.n_features_in_ = n_features
        logger.debug("%s fitted (n_features=%s)", type(self).__name__, n_features)

    def _check_fitted(self) -> None:
        if not self._fitted:
            raise NotFittedError(type(self).__name__)

    def _check_input(self, x: Any) -> np.ndarray:
        """Validate `x` for `transform`: fitted, 2-D, matching column count."""
        self._check_fitted()
        arr = as_2d(x)
        if self.n_features_in_ is not None and arr.shape[1] != self.n_features_in_:
            raise ValueError(
                f"{type(self).__name__}: expected {self.n_features_in_} features, "
                f"got {arr.shape[1]}"
            )
        return arr

    def fit(self, x: Any) -> Self:
        raise NotImplementedError

    def transform(self, x: Any) -> np.ndarray:
        raise NotImplementedError

    def fit_transform(self, x: Any) -> np.ndarray:
        """Fit to `x`, then return the transformed `x`."""
        return self.fit(x).transform(x)
