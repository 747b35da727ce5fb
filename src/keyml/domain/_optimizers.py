"""
Domain-level optimizer and learning-rate scheduler contracts for KeyML.

This module defines the `IOptimizer` protocol, which specifies the minimal
interface required for optimizer implementations (e.g., SGD, Adam), and the
`ILRScheduler` protocol for epoch-based learning-rate schedules.

Notes
-----
- Domain contracts are backend-agnostic and must not depend on NumPy or
  infrastructure implementations.
- Optimizers receive parameters and gradients explicitly on every step; the
  details of gradient computation are outside the scope of this protocol.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from ._tensor import ITensor


@runtime_checkable
class IOptimizer(Protocol):
    """
    Optimizer interface contract.

    An optimizer updates parameter tensors in-place according to a specific
    optimization rule, keeping per-parameter state across steps.

    Required members
    ----------------
    - `learning_rate`: mutable step size.
    - `step(parameters, gradients)` applies one optimization update.
    - `reset()` discards all accumulated state.
    - `name`: a stable identifier (e.g., "Adam").
    """

    learning_rate: float

    @property
    def name(self) -> str: ...

    @property
    def t(self) -> int:
        """
        Number of steps applied since creation or the last `reset()`.
        """
        ...

    def step(
        self, parameters: Sequence[ITensor], gradients: Sequence[ITensor]
    ) -> None:
        """
        Apply one optimization step.

        Parameters
        ----------
        parameters : Sequence[ITensor]
            Parameter tensors, updated in-place.
        gradients : Sequence[ITensor]
            Gradients matching `parameters` one-to-one in count and shape.
        """
        ...

    def reset(self) -> None:
        """
        Clear all per-parameter state and the step counter.
        """
        ...


@runtime_checkable
class ILRScheduler(Protocol):
    """
    Learning-rate scheduler interface.

    A scheduler is a pure function of the epoch index and the base rate.
    """

    def get_rate(self, epoch: int, base_rate: float) -> float: ...
