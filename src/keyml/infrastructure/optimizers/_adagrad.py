"""
Adagrad optimizer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from .._constants import ADAGRAD_EPS
from ..tensor._tensor import Tensor
from ._base import OPTIMIZERS, Optimizer


@OPTIMIZERS.register("adagrad")
@dataclass(eq=False, repr=False)
class Adagrad(Optimizer):
    """
    Adagrad optimizer.

    Accumulates the sum of squared gradients ``s`` per element:

        g <- g + weight_decay * p       (if weight_decay > 0)
        s <- s + g^2
        p <- p - lr * g / (sqrt(s) + eps)

    Parameters
    ----------
    learning_rate : float, optional
        Defaults to 0.01.
    eps : float, optional
        Defaults to 1e-10.
    weight_decay : float, optional
        Classical L2 coefficient. Defaults to 0.0.
    """

    name = "Adagrad"

    eps: float = ADAGRAD_EPS
    weight_decay: float = 0.0

    def __init__(
        self,
        learning_rate: float = 0.01,
        *,
        eps: float = ADAGRAD_EPS,
        weight_decay: float = 0.0,
    ) -> None:
        super().__init__(learning_rate)
        self.eps = float(eps)
        self.weight_decay = float(weight_decay)

        if self.eps <= 0.0:
            raise ValueError(f"eps must be > 0, got {self.eps}")
        if self.weight_decay < 0.0:
            raise ValueError(f"weight_decay must be >= 0, got {self.weight_decay}")

    def _init_state(self, p: Tensor) -> Dict[str, Tensor]:
        return {"sum_sq": Tensor.zeros(p.shape, dtype=p.dtype)}

    def _update(self, p: Tensor, g: Tensor, state: Dict[str, Tensor]) -> None:
        if self.weight_decay > 0.0:
            g = g + self.weight_decay * p

        s = state["sum_sq"]
        s.copy_from(s + g * g)
        p.copy_from(p - self.learning_rate * (g / (s.sqrt() + self.eps)))
