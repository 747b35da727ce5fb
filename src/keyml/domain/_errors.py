"""
Contract- and state-related exceptions for KeyML.

This module defines the custom errors used to signal *contract violations*:
programming mistakes such as mismatched operand shapes, wrong index arity or
an optimizer being fed a different parameter set than the one it was built
up for. These errors are raised eagerly, before any data is touched, so the
failure surfaces at the call site that caused it.

Contract violations are deliberately distinct from numerical edge cases
(zero variance, `log(0)`, zero norms), which are absorbed by epsilon clamps
and never raised.

Hierarchy
---------
- ``ContractViolationError`` (``ValueError``)
    - ``ShapeMismatchError``
    - ``DTypeMismatchError``
    - ``TensorIndexError`` (also an ``IndexError``)
    - ``ParameterMismatchError``
    - ``OptimizerStateError``
- ``NotFittedError`` (``RuntimeError``)
"""

from __future__ import annotations

from typing import Any, Sequence


class ContractViolationError(ValueError):
    """
    Base class for all caller-side contract violations.

    Catching this type catches every precondition failure raised by the
    tensor, activation, loss and optimizer APIs.
    """


class ShapeMismatchError(ContractViolationError):
    """
    Raised when operand shapes are incompatible for an operation.

    Attributes
    ----------
    op : str
        Name of the operation that was attempted (e.g., "add", "matmul").
    shape_a : tuple[int, ...]
        Shape of the first operand.
    shape_b : tuple[int, ...]
        Shape of the second operand (or the requested shape for reshapes).
    """

    def __init__(
        self,
        op: str,
        shape_a: Sequence[int],
        shape_b: Sequence[int],
        detail: str = "",
    ) -> None:
        """
        Initialize the ShapeMismatchError.

        Parameters
        ----------
        op : str
            Operation name.
        shape_a : Sequence[int]
            Shape of the first operand.
        shape_b : Sequence[int]
            Shape of the second operand.
        detail : str, optional
            Extra context appended to the message.
        """
        msg = f"{op}: shape mismatch {tuple(shape_a)} vs {tuple(shape_b)}"
        if detail:
            msg = f"{msg} ({detail})"
        super().__init__(msg)
        self.op = op
        self.shape_a = tuple(shape_a)
        self.shape_b = tuple(shape_b)


class DTypeMismatchError(ContractViolationError):
    """
    Raised when a binary operation mixes float32 and float64 operands.

    KeyML does not promote dtypes implicitly; convert explicitly with
    ``Tensor.astype`` first.
    """

    def __init__(self, op: str, dtype_a: str, dtype_b: str) -> None:
        super().__init__(f"{op}: dtype mismatch '{dtype_a}' vs '{dtype_b}'")
        self.op = op
        self.dtype_a = dtype_a
        self.dtype_b = dtype_b


class TensorIndexError(ContractViolationError, IndexError):
    """
    Raised on wrong index arity or an out-of-range index.

    Inherits from ``IndexError`` as well so that generic sequence handling
    code keeps working.
    """


class ParameterMismatchError(ContractViolationError):
    """
    Raised when an optimizer step receives different numbers of parameters
    and gradients.
    """

    def __init__(self, n_params: int, n_grads: int) -> None:
        super().__init__(
            f"parameters/gradients count mismatch: {n_params} vs {n_grads}"
        )
        self.n_params = n_params
        self.n_grads = n_grads


class OptimizerStateError(ContractViolationError):
    """
    Raised when an optimizer is stepped with a parameter set whose identity
    or order differs from the one its state was allocated for.

    Call ``reset()`` on the optimizer before switching parameter sets. Also
    raised, with `detail` set, when one parameter appears more than once in a
    single step.
    """

    def __init__(self, optimizer: str, expected: Any, got: Any, detail: str = "") -> None:
        if detail:
            message = f"{optimizer}: {detail} (got uids {got})"
        else:
            message = (
                f"{optimizer}: parameter set changed since state was allocated "
                f"(expected uids {expected}, got {got}); call reset() first"
            )
        super().__init__(message)
        self.optimizer = optimizer
        self.expected = expected
        self.got = got


class NotFittedError(RuntimeError):
    """
    Raised when a preprocessing transform is used before ``fit``.
    """

    def __init__(self, transform: str) -> None:
        super().__init__(f"{transform} must be fitted before use; call fit() first")
        self.transform = transform
