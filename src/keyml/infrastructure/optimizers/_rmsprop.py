"""
RMSprop optimizer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from .._constants import RMSPROP_EPS
from ..tensor._tensor import Tensor
from ._base import OPTIMIZERS, Optimizer


@OPTIMIZERS.register("rmsprop")
@dataclass(eq=False, repr=False)
class RMSprop(Optimizer):
    """
    RMSprop optimizer.

    Update rule
    -----------
        v   <- alpha * v + (1 - alpha) * g^2
        avg <- v

    Centered variant (running gradient mean ``gm``):

        gm  <- alpha * gm + (1 - alpha) * g
        avg <- v - gm^2

    Then, without momentum:

        p <- p - lr * g / (sqrt(avg) + eps)

    and with momentum (buffer ``b``):

        b <- momentum * b + g / (sqrt(avg) + eps)
        p <- p - lr * b

    Parameters
    ----------
    learning_rate : float, optional
        Defaults to 0.01.
    alpha : float, optional
        Smoothing constant in [0, 1). Defaults to 0.99.
    eps : float, optional
        Defaults to 1e-8.
    momentum : float, optional
        Defaults to 0.0.
    centered : bool, optional
        Normalize by an estimate of the gradient variance. Defaults to False.
    """

    name = "RMSprop"

    alpha: float = 0.99
    eps: float = RMSPROP_EPS
    momentum: float = 0.0
    centered: bool = False

    def __init__(
        self,
        learning_rate: float = 0.01,
        *,
        alpha: float = 0.99,
        eps: float = RMSPROP_EPS,
        momentum: float = 0.0,
        centered: bool = False,
    ) -> None:
        super().__init__(learning_rate)
        self.alpha = float(alpha)
        self.eps = float(eps)
        self.momentum = float(momentum)
        self.centered = bool(centered)

        if not (0.0 <= self.alpha < 1.0):
            raise ValueError(f"alpha must be in [0,1), got {self.alpha}")
        if self.eps <= 0.0:
            raise ValueError(f"eps must be > 0, got {self.eps}")
        if self.momentum < 0.0:
            raise ValueError(f"momentum must be >= 0, got {self.momentum}")

    def _init_state(self, p: Tensor) -> Dict[str, Tensor]:
        state = {"square_avg": Tensor.zeros(p.shape, dtype=p.dtype)}
        if self.centered:
            state["grad_avg"] = Tensor.zeros(p.shape, dtype=p.dtype)
        if self.momentum > 0.0:
            state["buffer"] = Tensor.zeros(p.shape, dtype=p.dtype)
        return state

    def _update(self, p: Tensor, g: Tensor, state: Dict[str, Tensor]) -> None:
        a = self.alpha
        v = state["square_avg"]
        v.copy_from(a * v + (1.0 - a) * (g * g))

        avg = v
        if self.centered:
            gm = state["grad_avg"]
            gm.copy_from(a * gm + (1.0 - a) * g)
            # Rounding can push v - gm^2 slightly below zero.
            avg = (v - gm * gm).maximum(0.0)

        scaled = g / (avg.sqrt() + self.eps)
        if self.momentum > 0.0:
            buf = state["buffer"]
            buf.copy_from(self.momentum * buf + scaled)
            p.copy_from(p - self.learning_rate * buf)
        else:
            p.copy_from(p - self.learning_rate * scaled)
