"""
Unary elementwise mixin for Tensor operations.

Provides elementwise maps (`exp`, `log`, `sqrt`, `pow`, `clip`, `abs`,
`sign`, `tanh`) and the whole-tensor `normalize` standardisation. Each
method returns a new tensor of the same shape and dtype.

Domain errors (``log`` of non-positive values, ``sqrt`` of negatives)
follow IEEE-754 and produce ``-inf`` / ``nan`` without raising.
"""

from __future__ import annotations

import warnings

import numpy as np


class TensorMixinUnary:
    """
    Elementwise unary operations for the concrete Tensor.

    Notes
    -----
    - Methods assume the host class provides `._view()`, `._dtype`,
      `.copy()` and the `._wrap(arr, dtype)` classmethod.
    """

    def _map(self, fn):
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            return self._wrap(fn(self._view()), self._dtype)

    def exp(self):
        return self._map(np.exp)

    def log(self):
        """
        Natural logarithm; ``log(0) == -inf``.
        """
        return self._map(np.log)

    def sqrt(self):
        return self._map(np.sqrt)

    def pow(self, exponent: float):
        """
        Raise every element to a scalar power.
        """
        e = self._dtype.from_float(exponent)
        return self._map(lambda a: np.power(a, e))

    def __pow__(self, exponent: float):
        return self.pow(exponent)

    def clip(self, min_value: float, max_value: float):
        """
        Clamp every element into ``[min_value, max_value]``.

        Raises
        ------
        ValueError
            If ``min_value > max_value``.
        """
        if min_value > max_value:
            raise ValueError(
                f"clip: min_value ({min_value}) must not exceed max_value ({max_value})"
            )
        return self._map(lambda a: np.clip(a, min_value, max_value))

    def abs(self):
        return self._map(np.abs)

    def sign(self):
        """
        Elementwise sign in ``{-1, 0, 1}``.
        """
        return self._map(np.sign)

    def tanh(self):
        return self._map(np.tanh)

    def normalize(self):
        """
        Standardise the tensor to zero mean and unit population std.

        Returns
        -------
        Tensor
            ``(x - mean) / std`` as a new tensor. When every element is equal
            (``std == 0``) an unmodified copy is returned instead and a
            ``RuntimeWarning`` is emitted.
        """
        std = self.std()
        if std == 0.0:
            warnings.warn(
                "normalize() on a tensor with zero variance; returning a copy.",
                RuntimeWarning,
                stacklevel=2,
            )
            return self.copy()
        mean = self.mean()
        return self._wrap((self._view() - mean) / std, self._dtype)
