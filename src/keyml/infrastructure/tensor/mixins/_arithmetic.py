"""
Arithmetic mixin implementing elementwise Tensor operators and matmul.

This module defines :class:`TensorMixinArithmetic`, which provides the
public operator surface of the concrete Tensor:

- addition / subtraction (tensor-tensor or tensor-scalar)
- multiplication (elementwise or scalar)
- true division (by scalar or elementwise)
- unary negation
- matrix multiplication (``matmul`` / ``@``) through BLAS GEMM

There is no broadcasting. Tensor-tensor operands must agree exactly in shape
and dtype; scalars are applied to every element. Every operator returns a
new tensor and leaves both operands untouched.
"""

from __future__ import annotations

from typing import Union

import numpy as np

from ....domain._errors import DTypeMismatchError, ShapeMismatchError

Number = Union[int, float]
"""Scalar types accepted by Tensor arithmetic operators."""


def _is_scalar(value) -> bool:
    return isinstance(value, (int, float, np.integer, np.floating)) and not isinstance(
        value, bool
    )


class TensorMixinArithmetic:
    """
    Elementwise arithmetic and matrix product for the concrete Tensor.

    Notes
    -----
    - Methods assume the host class provides `._view()`, `._dtype`,
      `._check_binary(other, op)` and the `._wrap(arr, dtype)` classmethod.
    - Results keep the receiver's dtype; float32 arithmetic is not silently
      promoted to float64.
    """

    def _binary(self, other, op: str, fn):
        if _is_scalar(other):
            rhs = self._dtype.from_float(other)
            return self._wrap(fn(self._view(), rhs), self._dtype)
        self._check_binary(other, op)
        return self._wrap(fn(self._view(), other._view()), self._dtype)

    # ----------------------------
    # Elementwise
    # ----------------------------
    def __add__(self, other):
        """
        Elementwise addition.

        Raises
        ------
        ShapeMismatchError
            If `other` is a tensor of a different shape.
        DTypeMismatchError
            If `other` is a tensor of a different dtype.
        """
        return self._binary(other, "add", np.add)

    def __radd__(self, other):
        return self.__add__(other)

    def __sub__(self, other):
        """
        Elementwise subtraction ``self - other``.
        """
        return self._binary(other, "sub", np.subtract)

    def __rsub__(self, other):
        if not _is_scalar(other):
            return NotImplemented
        return self._wrap(self._dtype.from_float(other) - self._view(), self._dtype)

    def __mul__(self, other):
        """
        Scalar multiplication or elementwise (Hadamard) product.
        """
        return self._binary(other, "mul", np.multiply)

    def __rmul__(self, other):
        return self.__mul__(other)

    def __truediv__(self, other):
        """
        Division by a scalar, or elementwise division by a same-shape tensor.

        Notes
        -----
        Division by zero follows IEEE-754 (``inf`` / ``nan``); no error is
        raised.
        """
        with np.errstate(divide="ignore", invalid="ignore"):
            return self._binary(other, "div", np.divide)

    def __neg__(self):
        return self._wrap(-self._view(), self._dtype)

    def maximum(self, other):
        """
        Elementwise maximum of two same-shape tensors (or a tensor and a scalar).
        """
        return self._binary(other, "maximum", np.maximum)

    # ----------------------------
    # Matrix product
    # ----------------------------
    def matmul(self, other):
        """
        Matrix multiplication of two rank-2 tensors.

        Parameters
        ----------
        other : Tensor
            Right-hand operand of shape ``(K, N)``.

        Returns
        -------
        Tensor
            Product of shape ``(M, N)`` for a receiver of shape ``(M, K)``.

        Raises
        ------
        ShapeMismatchError
            If either operand is not rank 2 or the inner dimensions differ.
        DTypeMismatchError
            If the operand dtypes differ.

        Notes
        -----
        Computed by ``numpy.matmul``, which dispatches to the BLAS GEMM of
        the matching precision for both float32 and float64.
        """
        if len(self._shape) != 2 or len(getattr(other, "shape", ())) != 2:
            raise ShapeMismatchError(
                "matmul",
                self._shape,
                getattr(other, "shape", ()),
                "both operands must be rank 2",
            )
        if self._shape[1] != other.shape[0]:
            raise ShapeMismatchError(
                "matmul", self._shape, other.shape, "inner dimensions differ"
            )
        if self._dtype is not other.dtype:
            raise DTypeMismatchError("matmul", self._dtype.name, other.dtype.name)
        return self._wrap(np.matmul(self._view(), other._view()), self._dtype)

    def __matmul__(self, other):
        return self.matmul(other)
