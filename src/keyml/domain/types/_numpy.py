"""
Domain-level structural typing for NumPy-like n-dimensional arrays.

This module defines :class:`NDArrayLike`, a backend-agnostic Protocol
describing the array objects returned by preprocessing transforms and
`ITensor.to_numpy()`, without introducing a dependency on NumPy in the
domain layer.

Typical implementers include ``numpy.ndarray`` and array views returned by
the infrastructure layer.
"""

from __future__ import annotations

from typing import Any, Iterator, Protocol, Tuple, runtime_checkable


@runtime_checkable
class NDArrayLike(Protocol):
    """
    A structural typing interface for objects that behave like NumPy ndarrays.

    Notes
    -----
    - This is a *Protocol*, not a concrete base class.
    - Only the subset of the ndarray API that KeyML callers rely on is
      modelled here.
    """

    @property
    def shape(self) -> Tuple[int, ...]:
        """
        Shape of the array as a tuple of dimension sizes.
        """
        ...

    @property
    def ndim(self) -> int:
        """
        Number of dimensions of the array.
        """
        ...

    @property
    def size(self) -> int:
        """
        Total number of elements in the array.
        """
        ...

    @property
    def dtype(self) -> Any:
        """
        Backend-defined dtype descriptor of the array elements.
        """
        ...

    def copy(self) -> "NDArrayLike": ...

    def tolist(self) -> list[Any]: ...

    def __array__(self, dtype: Any = ...) -> Any: ...

    def __getitem__(self, key: Any) -> Any: ...

    def __len__(self) -> int: ...

    def __iter__(self) -> Iterator[Any]: ...
