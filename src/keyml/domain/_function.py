"""
Forward/backward functor interface definitions.

This module defines the domain-level contracts for the two kinds of
stateless differentiable building blocks in KeyML:

- `IActivation`: an elementwise (or per-slice) map ``y = f(x)`` together
  with its vector-Jacobian product.
- `ILoss`: a reduction ``L = loss(predictions, targets)`` to a Python scalar
  together with ``dL/dpredictions``.

There is no computation graph. Callers chain `forward` and `backward`
manually, operator by operator, in reverse order.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ._tensor import ITensor


@runtime_checkable
class IActivation(Protocol):
    """
    Activation function interface.

    Required members
    ----------------
    - `name`: a stable, human-readable identifier (e.g., "ReLU").
    - `forward(x)`: compute the activation output.
    - `backward(x, grad)`: given the *input* `x` of the forward pass and the
      upstream gradient w.r.t. the output, return the gradient w.r.t. `x`.

    Notes
    -----
    Implementations are pure functions of their inputs and never mutate
    `x` or `grad`.
    """

    @property
    def name(self) -> str: ...

    def forward(self, x: ITensor) -> ITensor: ...

    def backward(self, x: ITensor, grad: ITensor) -> ITensor: ...


@runtime_checkable
class ILoss(Protocol):
    """
    Loss function interface.

    Required members
    ----------------
    - `name`: a stable, human-readable identifier (e.g., "MSE").
    - `forward(predictions, targets)`: compute the scalar loss.
    - `backward(predictions, targets)`: compute ``dL/dpredictions`` as a
      tensor of the same shape as `predictions`.

    Notes
    -----
    Both methods require `predictions.shape == targets.shape`.
    """

    @property
    def name(self) -> str: ...

    def forward(self, predictions: ITensor, targets: ITensor) -> float: ...

    def backward(self, predictions: ITensor, targets: ITensor) -> ITensor: ...
