"""
Numeric element-type contract.

This module defines `INumericType`, the single numeric "trait" every tensor
element type must satisfy. The infrastructure layer provides exactly two
instantiations, ``float32`` and ``float64``, and every Tensor operation is
available for both.

Notes
-----
- Domain contracts are backend-agnostic and must not depend on NumPy.
- The `backend` attribute is intentionally typed as `Any`; in the NumPy
  backend it is a ``numpy.dtype``.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class INumericType(Protocol):
    """
    Numeric element-type interface.

    Required members
    ----------------
    - `name`: canonical name (e.g., "float32").
    - `zero` / `one`: additive and multiplicative identities.
    - `eps`: machine epsilon of the type.
    - `from_float(value)`: convert a Python float into this type.
    - `backend`: backend-native dtype descriptor.
    """

    @property
    def name(self) -> str: ...

    @property
    def zero(self) -> Any: ...

    @property
    def one(self) -> Any: ...

    @property
    def eps(self) -> float: ...

    @property
    def backend(self) -> Any: ...

    def from_float(self, value: float) -> Any: ...
