"""
Categorical encoders: LabelEncoder and OneHotEncoder.
"""

from __future__ import annotations

from typing import Any, List, Optional

import numpy as np
from typing_extensions import Self

from ._base import Transform, as_1d


class LabelEncoder(Transform):
    """
    Encode labels as integers ``0 .. n_classes - 1``.

    Codes follow the ascending sort order of the distinct labels, so equal
    labels always receive equal codes.

    Attributes
    ----------
    classes_ : np.ndarray
        Sorted distinct labels seen during `fit`.
    """

    def __init__(self) -> None:
        super().__init__()
        self.classes_: Optional[np.ndarray] = None

    def fit(self, y: Any) -> Self:
        self.classes_ = np.unique(as_1d(y))
        self._mark_fitted()
        return self

    def transform(self, y: Any) -> np.ndarray:
        """
        Map labels to their integer codes.

        Raises
        ------
        ValueError
            If `y` contains labels not seen during `fit`.
        """
        self._check_fitted()
        arr = as_1d(y)
        codes = np.searchsorted(self.classes_, arr)
        clipped = np.minimum(codes, len(self.classes_) - 1)
        unseen = self.classes_[clipped] != arr
        if np.any(unseen):
            raise ValueError(f"LabelEncoder: unseen labels {np.unique(arr[unseen]).tolist()}")
        return codes.astype(np.int64)

    def inverse_transform(self, codes: Any) -> np.ndarray:
        """
        Map integer codes back to the original labels.

        Raises
        ------
        ValueError
            If a code is outside ``[0, n_classes)``.
        """
        self._check_fitted()
        arr = as_1d(codes, "codes").astype(np.int64)
        if np.any((arr < 0) | (arr >= len(self.classes_))):
            raise ValueError(
                f"LabelEncoder: codes must be in [0, {len(self.classes_)}), got {arr.tolist()}"
            )
        return self.classes_[arr]


class OneHotEncoder(Transform):
    """
    Expand categorical columns into indicator columns.

    Each input column ``j`` with ``k_j`` distinct values seen during `fit`
    becomes ``k_j`` output columns in sorted category order; the output
    width is ``sum(k_j)``.

    Notes
    -----
    A value not seen during `fit` encodes as an all-zero block for its
    column rather than raising.

    Attributes
    ----------
    categories_ : list[np.ndarray]
        Sorted categories per input column.
    """

    def __init__(self) -> None:
        super().__init__()
        self.categories_: Optional[List[np.ndarray]] = None

    @staticmethod
    def _as_table(x: Any) -> np.ndarray:
        arr = np.asarray(x)
        if arr.ndim != 2:
            raise ValueError(f"x must be 2-D (samples x features), got ndim={arr.ndim}")
        if arr.shape[0] == 0 or arr.shape[1] == 0:
            raise ValueError(f"x must have at least one row and one column, got {arr.shape}")
        return arr

    def fit(self, x: Any) -> Self:
        arr = self._as_table(x)
        self.categories_ = [np.unique(arr[:, j]) for j in range(arr.shape[1])]
        self._mark_fitted(arr.shape[1])
        return self

    def transform(self, x: Any) -> np.ndarray:
        self._check_fitted()
        arr = self._as_table(x)
        if arr.shape[1] != self.n_features_in_:
            raise ValueError(
                f"OneHotEncoder: expected {self.n_features_in_} features, got {arr.shape[1]}"
            )

        width = sum(len(c) for c in self.categories_)
        out = np.zeros((arr.shape[0], width), dtype=np.float64)
        offset = 0
        for j, cats in enumerate(self.categories_):
            col = arr[:, j]
            idx = np.minimum(np.searchsorted(cats, col), len(cats) - 1)
            known = cats[idx] == col
            rows = np.nonzero(known)[0]
            out[rows, offset + idx[known]] = 1.0
            offset += len(cats)
        return out

    def get_feature_names(self) -> List[str]:
        """Return output column names of the form ``x{j}_{category}``."""
        self._check_fitted()
        return [f"x{j}_{c}" for j, cats in enumerate(self.categories_) for c in cats]
