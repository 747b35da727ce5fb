"""
Tensor interface definitions.

This module defines the domain-level interface for tensor-like objects using
structural typing. The interface captures the backend-agnostic surface that
activations, losses, optimizers and callers rely on.

Notes
-----
- Tensors follow value semantics: each instance exclusively owns its
  storage. Arithmetic returns new tensors; only indexed assignment, `fill`,
  `copy_from` and optimizer steps mutate a tensor in place.
- `uid` is a process-unique identity assigned at construction. Copies get a
  fresh uid, in-place mutation keeps it.
"""

from __future__ import annotations

from typing import Any, Protocol, Sequence, Union, runtime_checkable

from ._dtype import INumericType

Number = Union[int, float]


@runtime_checkable
class ITensor(Protocol):
    """
    Tensor interface.

    An `ITensor` is a strided, row-major, multi-dimensional numeric array.

    Notes
    -----
    - Binary elementwise operations require identical shapes; there is no
      broadcasting.
    - Reductions return Python scalars.
    """

    # ---------------------------------------------------------------------
    # Core identity / layout
    # ---------------------------------------------------------------------
    @property
    def shape(self) -> tuple[int, ...]:
        """
        Return the shape of the tensor.

        Returns
        -------
        tuple[int, ...]
            The tensor's shape; every dimension is positive.
        """
        ...

    @property
    def strides(self) -> tuple[int, ...]:
        """
        Return the row-major strides of the tensor, in elements.
        """
        ...

    @property
    def rank(self) -> int:
        """
        Return the number of dimensions.
        """
        ...

    @property
    def count(self) -> int:
        """
        Return the total number of elements (product of `shape`).
        """
        ...

    @property
    def dtype(self) -> INumericType:
        """
        Return the element type descriptor.
        """
        ...

    @property
    def uid(self) -> int:
        """
        Return the process-unique identity of this tensor instance.
        """
        ...

    @property
    def data(self) -> Any:
        """
        Return a read-only flat row-major view of the storage.
        """
        ...

    # ---------------------------------------------------------------------
    # Host interop / in-place mutation
    # ---------------------------------------------------------------------
    def to_numpy(self) -> Any:
        """
        Return a copy of the tensor as a backend-native array of `shape`.
        """
        ...

    def copy(self) -> "ITensor":
        """
        Return an independent duplicate with a fresh `uid`.
        """
        ...

    def copy_from(self, other: "ITensor") -> None:
        """
        Copy data from another tensor into this tensor (in-place).

        Raises
        ------
        ShapeMismatchError
            If tensor shapes differ.
        """
        ...

    def fill(self, value: float) -> None:
        """
        Fill the tensor with a scalar value (in-place).
        """
        ...

    # ---------------------------------------------------------------------
    # Shape and indexing
    # ---------------------------------------------------------------------
    def __getitem__(self, indices: Any) -> float: ...

    def __setitem__(self, indices: Any, value: float) -> None: ...

    def reshape(self, *shape: Union[int, Sequence[int]]) -> "ITensor": ...

    def flatten(self) -> "ITensor": ...

    def transpose(self) -> "ITensor": ...

    # ---------------------------------------------------------------------
    # Arithmetic
    # ---------------------------------------------------------------------
    def __add__(self, other: "ITensor") -> "ITensor": ...

    def __sub__(self, other: "ITensor") -> "ITensor": ...

    def __mul__(self, other: Union["ITensor", Number]) -> "ITensor": ...

    def matmul(self, other: "ITensor") -> "ITensor": ...

    # ---------------------------------------------------------------------
    # Reductions
    # ---------------------------------------------------------------------
    def sum(self) -> float: ...

    def mean(self) -> float: ...

    def max(self) -> float: ...

    def min(self) -> float: ...
