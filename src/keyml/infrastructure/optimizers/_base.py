"""
Shared optimizer machinery.

`Optimizer` implements the parts every update rule needs:

- validation of `step` arguments (counts and shapes),
- the parameter signature check guarding per-parameter state,
- lazy state allocation keyed by parameter `uid`,
- the global step counter `t`, and `reset()`.

Subclasses implement `_init_state(p)` and `_update(p, g, state)`.

Design notes
------------
- State is keyed by the parameter's `uid`, not by list position. The
  ordered uid tuple seen on the first step after construction (or
  `reset()`) is recorded; a later step with a different tuple raises
  `OptimizerStateError` instead of silently mixing up accumulators.
- Parameters are updated in place via `copy_from`, so their `uid` is kept.
- Optimizer math is expressed in terms of KeyML `Tensor` operations.
"""

from __future__ import annotations

import logging
from dataclasses import fields, is_dataclass
from typing import Any, Dict, Optional, Sequence, Tuple

from ...domain._errors import (
    DTypeMismatchError,
    OptimizerStateError,
    ParameterMismatchError,
    ShapeMismatchError,
)
from ...domain._optimizers import IOptimizer
from ..tensor._tensor import Tensor
from ..utils._registry import Registry

logger = logging.getLogger(__name__)

OPTIMIZERS: Registry = Registry("optimizer")


class Optimizer(IOptimizer):
    """
    Base class for stateful gradient-descent optimizers.

    Parameters
    ----------
    learning_rate : float
        Step size. Must be > 0 at construction.
    """

    name: str = "optimizer"

    def __init__(self, learning_rate: float) -> None:
        learning_rate = float(learning_rate)
        if learning_rate <= 0.0:
            raise ValueError(f"learning_rate must be > 0, got {learning_rate}")
        self._learning_rate = learning_rate
        self._state: Dict[int, Dict[str, Tensor]] = {}
        self._signature: Optional[Tuple[int, ...]] = None
        self._t = 0

    @property
    def learning_rate(self) -> float:
        return self._learning_rate

    @learning_rate.setter
    def learning_rate(self, value: float) -> None:
        # Schedules may anneal down to exactly 0.
        value = float(value)
        if value < 0.0:
            raise ValueError(f"learning_rate must be >= 0, got {value}")
        self._learning_rate = value

    @property
    def t(self) -> int:
        """Number of steps taken since construction or the last `reset()`."""
        return self._t

    def step(self, parameters: Sequence[Tensor], gradients: Sequence[Tensor]) -> None:
        """
        Apply one update to every parameter, in place.

        Parameters
        ----------
        parameters : Sequence[Tensor]
            Parameters to update. Must be the same tensors, in the same
            order, on every step until `reset()`.
        gradients : Sequence[Tensor]
            One gradient per parameter, each shaped like its parameter.

        Raises
        ------
        ParameterMismatchError
            If the counts differ.
        ShapeMismatchError
            If a gradient's shape differs from its parameter's.
        DTypeMismatchError
            If a gradient's dtype differs from its parameter's.
        OptimizerStateError
            If the parameter identities or order changed since state was
            allocated, or the same parameter is passed more than once.

        Notes
        -----
        All checks run before any parameter is modified.
        """
        parameters = list(parameters)
        gradients = list(gradients)
        if len(parameters) != len(gradients):
            raise ParameterMismatchError(len(parameters), len(gradients))
        for p, g in zip(parameters, gradients):
            if tuple(p.shape) != tuple(g.shape):
                raise ShapeMismatchError(f"{self.name}.step", p.shape, g.shape)
            if p.dtype is not g.dtype:
                raise DTypeMismatchError(f"{self.name}.step", p.dtype.name, g.dtype.name)

        signature = tuple(p.uid for p in parameters)
        if len(set(signature)) != len(signature):
            raise OptimizerStateError(
                self.name,
                self._signature,
                signature,
                detail="each parameter may appear only once per step",
            )
        if self._signature is None:
            self._signature = signature
            for p in parameters:
                self._state[p.uid] = self._init_state(p)
            logger.debug(
                "%s: allocated state for %d parameter(s)", self.name, len(parameters)
            )
        elif signature != self._signature:
            raise OptimizerStateError(self.name, self._signature, signature)

        self._t += 1
        for p, g in zip(parameters, gradients):
            self._update(p, g, self._state[p.uid])

    def reset(self) -> None:
        """
        Drop all accumulated state and the parameter signature.

        After a reset the optimizer behaves as freshly constructed (``t == 0``)
        and accepts a new parameter set.
        """
        self._state.clear()
        self._signature = None
        self._t = 0
        logger.debug("%s: state reset", self.name)

    def state_for(self, parameter: Tensor) -> Dict[str, Tensor]:
        """
        Return the accumulator tensors held for `parameter`.

        Raises
        ------
        KeyError
            If no state has been allocated for this parameter.
        """
        return self._state[parameter.uid]

    def _init_state(self, p: Tensor) -> Dict[str, Tensor]:
        return {}

    def _update(self, p: Tensor, g: Tensor, state: Dict[str, Tensor]) -> None:
        raise NotImplementedError

    def __repr__(self) -> str:
        parts = [f"learning_rate={self._learning_rate}"]
        if is_dataclass(self):
            parts += [f"{f.name}={getattr(self, f.name)!r}" for f in fields(self)]
        return f"{type(self).__name__}({', '.join(parts)})"


def get_optimizer(name: str, **kwargs: Any) -> Optimizer:
    """
    Construct a registered optimizer by name (e.g., "sgd", "adam").

    Raises
    ------
    ValueError
        If `name` is not registered or a hyperparameter is invalid.
    """
    return OPTIMIZERS.create(name, **kwargs)


def available_optimizers() -> tuple[str, ...]:
    """Return the registered optimizer names (sorted)."""
    return OPTIMIZERS.available()
