"""
Reduction mixin implementing whole-tensor Tensor reductions.

All reductions collapse every element and return a Python ``float`` (or an
``int`` flat index for `argmax` / `argmin`). Accumulation happens in the
tensor's own dtype through NumPy's pairwise summation.
"""

from __future__ import annotations

import numpy as np

from ....domain._errors import ShapeMismatchError


class TensorMixinReduction:
    """
    Scalar reductions for the concrete Tensor.

    Notes
    -----
    - Methods assume the host class provides `._data` (flat storage).
    - `variance` and `std` are population statistics (divide by ``n``).
    """

    def sum(self) -> float:
        """
        Return the sum of all elements.
        """
        return float(np.sum(self._data))

    def mean(self) -> float:
        """
        Return the arithmetic mean of all elements.
        """
        return float(np.mean(self._data))

    def variance(self) -> float:
        """
        Return the population variance ``mean((x - mean(x))**2)``.
        """
        return float(np.var(self._data))

    def std(self) -> float:
        """
        Return the population standard deviation.
        """
        return float(np.std(self._data))

    def max(self) -> float:
        return float(np.max(self._data))

    def min(self) -> float:
        return float(np.min(self._data))

    def argmax(self) -> int:
        """
        Return the flat index of the first occurrence of the maximum.
        """
        return int(np.argmax(self._data))

    def argmin(self) -> int:
        """
        Return the flat index of the first occurrence of the minimum.
        """
        return int(np.argmin(self._data))

    def dot(self, other) -> float:
        """
        Return the inner product of the flattened tensors.

        Shapes may differ as long as the element counts are equal.

        Raises
        ------
        ShapeMismatchError
            If the element counts differ.
        """
        if self._data.size != other.count:
            raise ShapeMismatchError(
                "dot", self.shape, other.shape, "element counts differ"
            )
        return float(np.dot(self._data, other._data.astype(self._data.dtype, copy=False)))
