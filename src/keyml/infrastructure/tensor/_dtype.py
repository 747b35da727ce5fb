"""
Concrete numeric element types (NumPy backend).

This module provides `DType`, the infrastructure implementation of the
domain `INumericType` contract, and its only two instances: ``float32`` and
``float64``. Both route to NumPy's vectorized kernels (and to BLAS for
matrix products), so every Tensor operation is available for either type.

It also owns the package-wide default dtype used when a Tensor is created
without an explicit `dtype`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Union

import numpy as np


@dataclass(frozen=True)
class DType:
    """
    Floating-point element type descriptor.

    Parameters
    ----------
    name : str
        Canonical name ("float32" or "float64").
    backend : np.dtype
        NumPy dtype used for storage and computation.
    """

    name: str
    backend: np.dtype

    @property
    def zero(self) -> Any:
        return self.backend.type(0.0)

    @property
    def one(self) -> Any:
        return self.backend.type(1.0)

    @property
    def eps(self) -> float:
        return float(np.finfo(self.backend).eps)

    def from_float(self, value: float) -> Any:
        return self.backend.type(value)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"keyml.{self.name}"


float32 = DType("float32", np.dtype(np.float32))
float64 = DType("float64", np.dtype(np.float64))

_DTYPES: Dict[str, DType] = {float32.name: float32, float64.name: float64}
_default_dtype: DType = float32

DTypeLike = Union[DType, str, np.dtype, type, None]


def resolve_dtype(dtype: DTypeLike = None) -> DType:
    """
    Normalize a dtype-like value to one of the supported `DType` instances.

    Parameters
    ----------
    dtype : DTypeLike
        A `DType`, a name ("float32"/"float64"), a NumPy dtype or scalar
        type, or None for the current default dtype.

    Returns
    -------
    DType
        The matching dtype instance.

    Raises
    ------
    TypeError
        If `dtype` does not name float32 or float64.
    """
    if dtype is None:
        return _default_dtype
    if isinstance(dtype, DType):
        return dtype
    try:
        name = np.dtype(dtype).name
    except TypeError as e:
        raise TypeError(f"Unsupported dtype: {dtype!r}") from e
    try:
        return _DTYPES[name]
    except KeyError as e:
        available = ", ".join(sorted(_DTYPES))
        raise TypeError(
            f"Unsupported dtype: {dtype!r}. Available: {available}"
        ) from e


def set_default_dtype(dtype: DTypeLike) -> DType:
    """
    Set the dtype used by Tensor constructors when none is given.

    Returns
    -------
    DType
        The previous default, so callers can restore it.
    """
    global _default_dtype
    previous = _default_dtype
    _default_dtype = resolve_dtype(dtype)
    return previous


def get_default_dtype() -> DType:
    """Return the current default dtype."""
    return _default_dtype
