"""
Tensor shape, indexing, and structural ops mixin (NumPy CPU backend).

This module defines `TensorShapeAndIndexingMixin`, a cohesive mixin that
implements element access and shape-transforming Tensor methods for the
NumPy-backed concrete Tensor implementation.

Design notes
------------
- This mixin is intended to be inherited by the concrete `Tensor` class.
- To avoid circular imports, the implementation does not import `Tensor`
  directly; instead it constructs new tensors via `self._wrap` (a classmethod
  of the host class).
- Element access resolves flat offsets through the row-major `strides`.
  Unlike NumPy, negative indices are rejected rather than wrapped.
- Every structural op returns a tensor with its own buffer.
"""

from __future__ import annotations

from typing import Any, Sequence, Union

import numpy as np

from ...domain._errors import ShapeMismatchError, TensorIndexError


class TensorShapeAndIndexingMixin:
    """
    Shape and indexing operations for the concrete Tensor implementation.

    Notes
    -----
    - Methods assume the host class provides:
        - `._shape`, `._strides`, `._data`, `._dtype`
        - `._view()` and the `._wrap(arr, dtype)` classmethod
    """

    # ----------------------------
    # Element access
    # ----------------------------
    def _flat_offset(self, indices: Any) -> int:
        """
        Resolve a multi-index to a flat row-major offset.

        Raises
        ------
        TensorIndexError
            On wrong arity, non-integer indices or out-of-range indices.
        """
        if not isinstance(indices, tuple):
            indices = (indices,)
        if len(indices) != len(self._shape):
            raise TensorIndexError(
                f"expected {len(self._shape)} indices for shape {self._shape}, "
                f"got {len(indices)}"
            )
        offset = 0
        for axis, (idx, dim, stride) in enumerate(
            zip(indices, self._shape, self._strides)
        ):
            if isinstance(idx, bool) or not isinstance(idx, (int, np.integer)):
                raise TensorIndexError(
                    f"index on axis {axis} must be an integer, got {idx!r}"
                )
            if idx < 0 or idx >= dim:
                raise TensorIndexError(
                    f"index {idx} out of range for axis {axis} with size {dim}"
                )
            offset += int(idx) * stride
        return offset

    def __getitem__(self, indices: Any) -> float:
        """
        Read a single element, e.g. ``t[i, j]``.

        Raises
        ------
        TensorIndexError
            If the index arity differs from `rank` or any index is out of range.
        """
        return float(self._data[self._flat_offset(indices)])

    def __setitem__(self, indices: Any, value: float) -> None:
        """
        Assign a single element in place, e.g. ``t[i, j] = v``.
        """
        self._data[self._flat_offset(indices)] = value

    def row(self, i: int):
        """
        Return a copy of the sub-tensor at position `i` of the first axis.

        For rank >= 2 the first axis is removed; rank-1 tensors yield a
        shape ``(1,)`` tensor holding the single element.
        """
        if isinstance(i, bool) or not isinstance(i, (int, np.integer)):
            raise TensorIndexError(f"row index must be an integer, got {i!r}")
        if i < 0 or i >= self._shape[0]:
            raise TensorIndexError(
                f"row {i} out of range for axis 0 with size {self._shape[0]}"
            )
        return self._wrap(self._view()[i].copy(), self._dtype)

    def column(self, j: int):
        """
        Return a copy of column `j` of a rank-2 tensor, shape ``(rows,)``.

        Raises
        ------
        ValueError
            If the tensor is not rank 2.
        TensorIndexError
            If `j` is out of range.
        """
        if len(self._shape) != 2:
            raise ValueError(f"column() requires a rank-2 tensor, got {self._shape}")
        if isinstance(j, bool) or not isinstance(j, (int, np.integer)):
            raise TensorIndexError(f"column index must be an integer, got {j!r}")
        if j < 0 or j >= self._shape[1]:
            raise TensorIndexError(
                f"column {j} out of range for axis 1 with size {self._shape[1]}"
            )
        return self._wrap(self._view()[:, j].copy(), self._dtype)

    def __iter__(self):
        """
        Iterate over the first axis, yielding `row(i)` copies.
        """
        for i in range(self._shape[0]):
            yield self.row(i)

    # ----------------------------
    # Shape ops
    # ----------------------------
    def reshape(self, *shape: Union[int, Sequence[int]]):
        """
        Return a copy with a new shape and the same row-major element order.

        Accepts either ``reshape(2, 3)`` or ``reshape((2, 3))``. At most one
        dimension may be ``-1``; it is inferred from `count`.

        Raises
        ------
        ShapeMismatchError
            If more than one ``-1`` is given, the inferred dimension does not
            divide evenly, or the element counts differ.
        TypeError
            If a dimension is not an integer.
        """
        if len(shape) == 1 and isinstance(shape[0], (tuple, list)):
            shape = tuple(shape[0])
        dims = []
        for d in shape:
            if isinstance(d, bool) or not isinstance(d, (int, np.integer)):
                raise TypeError(f"reshape dimensions must be integers, got {d!r}")
            dims.append(int(d))
        count = int(self._data.size)

        wildcards = [k for k, d in enumerate(dims) if d == -1]
        if len(wildcards) > 1:
            raise ShapeMismatchError(
                "reshape", self._shape, tuple(dims), "only one -1 is allowed"
            )
        if any(d == 0 or d < -1 for d in dims) or not dims:
            raise ShapeMismatchError(
                "reshape", self._shape, tuple(dims), "dimensions must be positive"
            )
        if wildcards:
            known = int(np.prod([d for d in dims if d != -1])) if len(dims) > 1 else 1
            if count % known != 0:
                raise ShapeMismatchError(
                    "reshape", self._shape, tuple(dims), "cannot infer -1"
                )
            dims[wildcards[0]] = count // known
        if int(np.prod(dims)) != count:
            raise ShapeMismatchError(
                "reshape", self._shape, tuple(dims), "element count differs"
            )
        return self._wrap(self._data.reshape(dims).copy(), self._dtype)

    def flatten(self):
        """
        Return a rank-1 copy of the tensor.
        """
        return self._wrap(self._data.copy(), self._dtype)

    def transpose(self):
        """
        Return the transpose of a rank-2 tensor as a new tensor.

        Element ``(i, j)`` of the input lands at ``(j, i)`` of the output,
        i.e. ``out[j * rows + i] = in[i * cols + j]``.

        Raises
        ------
        ValueError
            If the tensor is not rank 2.
        """
        if len(self._shape) != 2:
            raise ValueError(f"transpose() requires a rank-2 tensor, got {self._shape}")
        return self._wrap(np.ascontiguousarray(self._view().T), self._dtype)

    @property
    def T(self):
        """
        Convenience property for `transpose()`.
        """
        return self.transpose()
