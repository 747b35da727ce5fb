"""
Dataset-preparation transform contracts.

Transforms are stateful: `fit` establishes parameters (column statistics,
class lists, ...) that later `transform` / `inverse_transform` calls reuse.
They operate on raw array-like data, independently of `ITensor`.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from .types._numpy import NDArrayLike


@runtime_checkable
class ITransform(Protocol):
    """
    Fit/transform interface.

    Notes
    -----
    - `fit` returns the transform itself to allow chaining.
    - `transform` before `fit` raises `NotFittedError`.
    """

    def fit(self, x: Any) -> "ITransform": ...

    def transform(self, x: Any) -> NDArrayLike: ...

    def fit_transform(self, x: Any) -> NDArrayLike: ...


@runtime_checkable
class IInvertibleTransform(ITransform, Protocol):
    """
    A transform that can map transformed data back to the original space.
    """

    def inverse_transform(self, x: Any) -> NDArrayLike: ...
