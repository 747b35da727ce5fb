"""
Stochastic Gradient Descent optimizer.

This module contains only SGD. Other optimizers (e.g., Adam) live in separate
modules under the optimizers package.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from ..tensor._tensor import Tensor
from ._base import OPTIMIZERS, Optimizer


@OPTIMIZERS.register("sgd")
@dataclass(eq=False, repr=False)
class SGD(Optimizer):
    """
    Stochastic Gradient Descent (SGD) optimizer.

    Update rule
    -----------
    For each parameter ``p`` with gradient ``g``:

    - If ``weight_decay > 0`` (classical L2 regularization):
        ``g <- g + weight_decay * p``
    - Without momentum:
        ``p <- p - lr * g``
    - With momentum (velocity ``v`` starts at zero):
        ``v <- momentum * v + g``
        ``p <- p - lr * v``                     (classical)
        ``p <- p - lr * (g + momentum * v)``    (Nesterov)

    Parameters
    ----------
    learning_rate : float, optional
        Learning rate. Must be positive. Defaults to 0.01.
    momentum : float, optional
        Momentum factor. Must be non-negative. Defaults to 0.0.
    nesterov : bool, optional
        Use Nesterov momentum. Requires ``momentum > 0``. Defaults to False.
    weight_decay : float, optional
        Classical L2 weight decay coefficient (coupled). Must be non-negative.
        Defaults to 0.0.
    """

    name = "SGD"

    momentum: float = 0.0
    nesterov: bool = False
    weight_decay: float = 0.0

    def __init__(
        self,
        learning_rate: float = 0.01,
        *,
        momentum: float = 0.0,
        nesterov: bool = False,
        weight_decay: float = 0.0,
    ) -> None:
        """
        Construct an SGD optimizer.

        Raises
        ------
        ValueError
            If any hyperparameter is outside its valid range.
        """
        super().__init__(learning_rate)
        self.momentum = float(momentum)
        self.nesterov = bool(nesterov)
        self.weight_decay = float(weight_decay)

        if self.momentum < 0.0:
            raise ValueError(f"momentum must be >= 0, got {self.momentum}")
        if self.nesterov and self.momentum == 0.0:
            raise ValueError("nesterov momentum requires momentum > 0")
        if self.weight_decay < 0.0:
            raise ValueError(f"weight_decay must be >= 0, got {self.weight_decay}")

    def _init_state(self, p: Tensor) -> Dict[str, Tensor]:
        if self.momentum > 0.0:
            return {"velocity": Tensor.zeros(p.shape, dtype=p.dtype)}
        return {}

    def _update(self, p: Tensor, g: Tensor, state: Dict[str, Tensor]) -> None:
        lr = self.learning_rate

        if self.weight_decay > 0.0:
            g = g + self.weight_decay * p

        if self.momentum > 0.0:
            v = state["velocity"]
            v.copy_from(self.momentum * v + g)
            if self.nesterov:
                p.copy_from(p - lr * (g + self.momentum * v))
            else:
                p.copy_from(p - lr * v)
        else:
            p.copy_from(p - lr * g)
