"""
Concrete Tensor implementation (NumPy backend).

This module provides the concrete `Tensor` class that satisfies the
domain-level `ITensor` protocol. A tensor is a strided, row-major,
multi-dimensional array of ``float32`` or ``float64`` values.

Design notes
------------
- Value semantics: every Tensor exclusively owns a flat, contiguous NumPy
  buffer. Constructors copy caller data, every operation allocates a fresh
  buffer, `data` is a read-only view and `to_numpy()` returns a copy. Two
  Tensor instances never alias one buffer.
- In-place mutation is limited to indexed assignment, `fill`, `copy_from`
  and optimizer updates; all of them keep the tensor's `uid`.
- Broadcasting is intentionally not implemented; binary ops require exact
  shape (and dtype) matches and raise contract errors otherwise.
- Operations are grouped into mixins (arithmetic, reductions, unary maps,
  shape/indexing); this module holds storage, construction and factories.
"""

from __future__ import annotations

import itertools
from typing import Any, Iterable, Optional, Sequence, Union

import numpy as np

from ...domain._tensor import ITensor
from ...domain._errors import DTypeMismatchError, ShapeMismatchError
from ._dtype import DType, DTypeLike, resolve_dtype
from ._random import resolve_generator
from .mixins import TensorMixinArithmetic, TensorMixinReduction, TensorMixinUnary
from ._shape_and_indexing import TensorShapeAndIndexingMixin

Number = Union[int, float]
ShapeLike = Union[int, Sequence[int]]

_uid_counter = itertools.count(1)


def _normalize_shape(shape: ShapeLike) -> tuple[int, ...]:
    """
    Convert a shape-like value into a validated tuple of positive ints.

    Raises
    ------
    ValueError
        If the shape is empty or contains a non-positive dimension.
    TypeError
        If a dimension is not an integer.
    """
    if isinstance(shape, (int, np.integer)):
        dims: Iterable[Any] = (shape,)
    else:
        dims = tuple(shape)
    out = []
    for d in dims:
        if isinstance(d, bool) or not isinstance(d, (int, np.integer)):
            raise TypeError(f"Shape dimensions must be integers, got {d!r}")
        out.append(int(d))
    if not out:
        raise ValueError("Shape must have at least one dimension")
    if any(d <= 0 for d in out):
        raise ValueError(f"Shape dimensions must be positive, got {tuple(out)}")
    return tuple(out)


def _compute_strides(shape: tuple[int, ...]) -> tuple[int, ...]:
    """Row-major strides in elements; the last dimension varies fastest."""
    strides = [1] * len(shape)
    for i in range(len(shape) - 2, -1, -1):
        strides[i] = strides[i + 1] * shape[i + 1]
    return tuple(strides)


class Tensor(
    TensorMixinArithmetic,
    TensorMixinReduction,
    TensorMixinUnary,
    TensorShapeAndIndexingMixin,
    ITensor,
):
    """
    Concrete tensor implementation (NumPy CPU backend).

    Parameters
    ----------
    shape : int or Sequence[int]
        Tensor shape. Every dimension must be positive.
    data : array-like, optional
        Flat (or any-shaped) values read in row-major order. Its element
        count must equal ``product(shape)``. The values are copied.
    fill_value : float, optional
        Value used for every element when `data` is omitted. Defaults to 0.
    dtype : DTypeLike, optional
        "float32" or "float64". Defaults to the package default dtype.

    Raises
    ------
    ShapeMismatchError
        If the number of elements in `data` differs from ``product(shape)``.
    ValueError
        If any dimension is not positive.

    Notes
    -----
    - `_data` is always a 1-D contiguous ndarray of length `count`.
    - `uid` is unique per instance; copies get a new one.
    """

    def __init__(
        self,
        shape: ShapeLike,
        data: Optional[Any] = None,
        *,
        fill_value: float = 0.0,
        dtype: DTypeLike = None,
    ) -> None:
        self._shape = _normalize_shape(shape)
        self._dtype: DType = resolve_dtype(dtype)
        self._strides = _compute_strides(self._shape)
        count = int(np.prod(self._shape))

        if data is None:
            self._data = np.full(count, fill_value, dtype=self._dtype.backend)
        else:
            arr = np.array(data, dtype=self._dtype.backend).reshape(-1)
            if arr.size != count:
                raise ShapeMismatchError(
                    "Tensor",
                    (arr.size,),
                    self._shape,
                    "data count must equal product(shape)",
                )
            self._data = arr
        self._uid = next(_uid_counter)

    @classmethod
    def _wrap(cls, arr: np.ndarray, dtype: DType) -> "Tensor":
        """
        Build a tensor that takes ownership of a freshly computed array.

        Bypasses `__init__` validation and copying. Only call this with an
        array no other object references.
        """
        obj = cls.__new__(cls)
        shape = tuple(int(d) for d in arr.shape) or (1,)
        obj._shape = shape
        obj._dtype = dtype
        obj._strides = _compute_strides(shape)
        obj._data = np.ascontiguousarray(arr, dtype=dtype.backend).reshape(-1)
        obj._uid = next(_uid_counter)
        return obj

    # ----------------------------
    # Properties
    # ----------------------------
    @property
    def shape(self) -> tuple[int, ...]:
        return self._shape

    @property
    def strides(self) -> tuple[int, ...]:
        return self._strides

    @property
    def rank(self) -> int:
        return len(self._shape)

    @property
    def count(self) -> int:
        return int(self._data.size)

    @property
    def dtype(self) -> DType:
        return self._dtype

    @property
    def uid(self) -> int:
        return self._uid

    @property
    def data(self) -> np.ndarray:
        """
        Return a read-only flat row-major view of the storage.

        Notes
        -----
        The view reflects later in-place updates of this tensor but cannot
        be written through. Use `to_numpy()` for an independent copy.
        """
        view = self._data.view()
        view.flags.writeable = False
        return view

    def numel(self) -> int:
        """
        Return the total number of elements in the tensor.
        """
        return self.count

    def __len__(self) -> int:
        return self._shape[0]

    def __repr__(self) -> str:
        head = ", ".join(f"{v:g}" for v in self._data[:10])
        suffix = ", ..." if self.count > 10 else ""
        return f"Tensor(shape={self._shape}, dtype={self._dtype}, data=[{head}{suffix}])"

    # ----------------------------
    # Internal helpers
    # ----------------------------
    def _view(self) -> np.ndarray:
        """Shaped view of the owned buffer, for internal computation only."""
        return self._data.reshape(self._shape)

    def _check_binary(self, other: "Tensor", op: str) -> None:
        """
        Validate operand compatibility for binary elementwise operations.

        Raises
        ------
        TypeError
            If `other` is not a Tensor.
        ShapeMismatchError
            If shapes do not match exactly.
        DTypeMismatchError
            If dtypes differ.
        """
        if not isinstance(other, Tensor):
            raise TypeError(f"{op}: unsupported operand type {type(other)!r}")
        if self._shape != other._shape:
            raise ShapeMismatchError(op, self._shape, other._shape)
        if self._dtype is not other._dtype:
            raise DTypeMismatchError(op, self._dtype.name, other._dtype.name)

    # ----------------------------
    # Host interop / copies
    # ----------------------------
    def to_numpy(self) -> np.ndarray:
        """
        Return a copy of the tensor as an ndarray of shape `shape`.
        """
        return self._view().copy()

    def tolist(self) -> list:
        """Return the values as (nested) Python lists."""
        return self._view().tolist()

    def item(self) -> float:
        """
        Return the single value of a one-element tensor.

        Raises
        ------
        ValueError
            If the tensor holds more than one element.
        """
        if self.count != 1:
            raise ValueError(f"item() requires a single-element tensor, got {self._shape}")
        return float(self._data[0])

    def copy(self) -> "Tensor":
        """
        Return an independent duplicate (new buffer, new `uid`).
        """
        return Tensor._wrap(self._data.reshape(self._shape).copy(), self._dtype)

    def clone(self) -> "Tensor":
        """Alias of `copy()`."""
        return self.copy()

    def astype(self, dtype: DTypeLike) -> "Tensor":
        """
        Return a copy converted to another element type.
        """
        target = resolve_dtype(dtype)
        return Tensor._wrap(self._view().astype(target.backend), target)

    def copy_from(self, other: "Tensor") -> None:
        """
        Copy data from another tensor into this tensor (in-place).

        Values are cast to this tensor's dtype. The `uid` is preserved.

        Raises
        ------
        ShapeMismatchError
            If tensor shapes differ.
        """
        if not isinstance(other, Tensor):
            raise TypeError(f"copy_from: unsupported source type {type(other)!r}")
        if other._shape != self._shape:
            raise ShapeMismatchError("copy_from", self._shape, other._shape)
        self._data[...] = other._data

    def copy_from_numpy(self, arr: Any) -> None:
        """
        Copy an array-like of matching shape into this tensor (in-place).

        Raises
        ------
        ShapeMismatchError
            If the array shape does not match this tensor's shape.
        """
        arr_nd = np.asarray(arr, dtype=self._dtype.backend)
        if arr_nd.shape != self._shape:
            raise ShapeMismatchError("copy_from_numpy", self._shape, arr_nd.shape)
        self._data[...] = arr_nd.reshape(-1)

    def fill(self, value: float) -> None:
        """
        Fill the tensor with a scalar value (in-place).
        """
        self._data.fill(value)

    def allclose(self, other: "Tensor", rtol: float = 1e-5, atol: float = 1e-8) -> bool:
        """
        Return True if shapes match and all values agree within tolerance.
        """
        if not isinstance(other, Tensor) or other._shape != self._shape:
            return False
        return bool(np.allclose(self._data, other._data, rtol=rtol, atol=atol))

    # ----------------------------
    # Factories
    # ----------------------------
    @classmethod
    def zeros(cls, shape: ShapeLike, *, dtype: DTypeLike = None) -> "Tensor":
        """
        Create a tensor filled with zeros.
        """
        return cls(shape, fill_value=0.0, dtype=dtype)

    @classmethod
    def ones(cls, shape: ShapeLike, *, dtype: DTypeLike = None) -> "Tensor":
        """
        Create a tensor filled with ones.
        """
        return cls(shape, fill_value=1.0, dtype=dtype)

    @classmethod
    def full(cls, shape: ShapeLike, value: float, *, dtype: DTypeLike = None) -> "Tensor":
        """
        Create a tensor filled with `value`.
        """
        return cls(shape, fill_value=value, dtype=dtype)

    @classmethod
    def from_numpy(cls, arr: Any, *, dtype: DTypeLike = None) -> "Tensor":
        """
        Create a tensor from an array-like, copying its values and shape.

        Notes
        -----
        0-d inputs become shape ``(1,)`` tensors.
        """
        arr_nd = np.asarray(arr)
        shape = arr_nd.shape or (1,)
        return cls(shape, arr_nd, dtype=dtype)

    @classmethod
    def eye(cls, n: int, *, dtype: DTypeLike = None) -> "Tensor":
        """
        Create an ``n x n`` identity matrix.
        """
        out = cls.zeros((n, n), dtype=dtype)
        for i in range(n):
            out[i, i] = 1.0
        return out

    @classmethod
    def random(
        cls,
        shape: ShapeLike,
        min: float = 0.0,
        max: float = 1.0,
        *,
        dtype: DTypeLike = None,
        generator: Optional[np.random.Generator] = None,
        random_state: Optional[int] = None,
    ) -> "Tensor":
        """
        Create a tensor of independent uniform samples in ``[min, max)``.

        Parameters
        ----------
        shape : ShapeLike
            Output shape.
        min, max : float, optional
            Sampling range. Defaults to ``[0, 1)``.
        generator : np.random.Generator, optional
            Random source. Defaults to the package default generator.
        random_state : int, optional
            Seed for a fresh generator (mutually exclusive with `generator`).
        """
        shape_t = _normalize_shape(shape)
        rng = resolve_generator(generator, random_state)
        u = rng.random(int(np.prod(shape_t)))
        return cls(shape_t, min + u * (max - min), dtype=dtype)

    @classmethod
    def randn(
        cls,
        shape: ShapeLike,
        mean: float = 0.0,
        std: float = 1.0,
        *,
        dtype: DTypeLike = None,
        generator: Optional[np.random.Generator] = None,
        random_state: Optional[int] = None,
    ) -> "Tensor":
        """
        Create a tensor of normal samples using the pairwise Box-Muller transform.

        Each pair of positions ``(i, i + 1)`` is filled from one draw of
        ``u1 in (0, 1]`` and ``u2 in [0, 1)``:

            mag       = std * sqrt(-2 * log(u1))
            out[i]    = mean + mag * cos(2 * pi * u2)
            out[i+1]  = mean + mag * sin(2 * pi * u2)

        When the element count is odd, the last element is filled from an
        extra draw using the cosine branch only.
        """
        shape_t = _normalize_shape(shape)
        count = int(np.prod(shape_t))
        rng = resolve_generator(generator, random_state)

        n_pairs = count // 2
        out = np.empty(count, dtype=np.float64)
        if n_pairs:
            u1 = 1.0 - rng.random(n_pairs)
            u2 = rng.random(n_pairs)
            mag = std * np.sqrt(-2.0 * np.log(u1))
            angle = 2.0 * np.pi * u2
            out[0 : 2 * n_pairs : 2] = mean + mag * np.cos(angle)
            out[1 : 2 * n_pairs : 2] = mean + mag * np.sin(angle)
        if count % 2 == 1:
            u1 = 1.0 - rng.random()
            u2 = rng.random()
            mag = std * np.sqrt(-2.0 * np.log(u1))
            out[count - 1] = mean + mag * np.cos(2.0 * np.pi * u2)
        return cls(shape_t, out, dtype=dtype)
