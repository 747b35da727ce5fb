"""
Adam optimizer implementation.

This module provides Adam with optional classical L2 weight decay and the
AMSGrad variant. Decoupled weight decay lives in `_adamw.py`.

Optimizer math is expressed in terms of KeyML `Tensor` operations; moment
tensors are allocated lazily on the first step and updated in place.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from .._constants import ADAM_EPS
from ..tensor._tensor import Tensor
from ._base import OPTIMIZERS, Optimizer


def _validate_adam(betas: Tuple[float, float], eps: float, weight_decay: float) -> None:
    b1, b2 = betas
    if not (0.0 < b1 < 1.0) or not (0.0 < b2 < 1.0):
        raise ValueError(f"betas must be in (0,1), got {betas}")
    if eps <= 0.0:
        raise ValueError(f"eps must be > 0, got {eps}")
    if weight_decay < 0.0:
        raise ValueError(f"weight_decay must be >= 0, got {weight_decay}")


@OPTIMIZERS.register("adam")
@dataclass(eq=False, repr=False)
class Adam(Optimizer):
    """
    Adam optimizer.

    Adam maintains exponentially decaying averages of past gradients (first
    moment) and past squared gradients (second moment), and applies bias
    correction to both estimates.

    Update rule
    -----------
    Let ``g_t`` be the gradient at step ``t``:

        m_t = beta1 * m_{t-1} + (1 - beta1) * g_t
        v_t = beta2 * v_{t-1} + (1 - beta2) * (g_t ** 2)

        m_hat = m_t / (1 - beta1^t)
        v_hat = v_t / (1 - beta2^t)

        p <- p - lr * m_hat / (sqrt(v_hat) + eps)

    If ``weight_decay > 0`` (classical L2 regularization):

        g_t <- g_t + weight_decay * p

    With ``amsgrad=True`` a running maximum of ``v_hat`` replaces ``v_hat``
    in the denominator.

    Parameters
    ----------
    learning_rate : float, optional
        Learning rate. Must be positive. Defaults to 1e-3.
    betas : tuple[float, float], optional
        Exponential decay rates for the first and second moments.
        Each must be in (0, 1). Defaults to (0.9, 0.999).
    eps : float, optional
        Numerical stability epsilon added to the denominator. Must be positive.
        Defaults to 1e-8.
    weight_decay : float, optional
        Classical L2 regularization coefficient (coupled). Must be non-negative.
        Defaults to 0.0.
    amsgrad : bool, optional
        Use the AMSGrad variant. Defaults to False.

    Notes
    -----
    - The step counter ``t`` is shared by all parameters and counts calls to
      `step` since construction or `reset()`.
    """

    name = "Adam"

    betas: Tuple[float, float] = (0.9, 0.999)
    eps: float = ADAM_EPS
    weight_decay: float = 0.0
    amsgrad: bool = False

    def __init__(
        self,
        learning_rate: float = 1e-3,
        *,
        betas: Tuple[float, float] = (0.9, 0.999),
        eps: float = ADAM_EPS,
        weight_decay: float = 0.0,
        amsgrad: bool = False,
    ) -> None:
        super().__init__(learning_rate)
        self.betas = (float(betas[0]), float(betas[1]))
        self.eps = float(eps)
        self.weight_decay = float(weight_decay)
        self.amsgrad = bool(amsgrad)
        _validate_adam(self.betas, self.eps, self.weight_decay)

    def _init_state(self, p: Tensor) -> Dict[str, Tensor]:
        state = {
            "m": Tensor.zeros(p.shape, dtype=p.dtype),
            "v": Tensor.zeros(p.shape, dtype=p.dtype),
        }
        if self.amsgrad:
            state["v_max"] = Tensor.zeros(p.shape, dtype=p.dtype)
        return state

    def _update(self, p: Tensor, g: Tensor, state: Dict[str, Tensor]) -> None:
        b1, b2 = self.betas
        t = self.t
        m = state["m"]
        v = state["v"]

        # Classical L2 weight decay (coupled): g <- g + wd * p
        if self.weight_decay > 0.0:
            g = g + self.weight_decay * p

        m.copy_from(b1 * m + (1.0 - b1) * g)
        v.copy_from(b2 * v + (1.0 - b2) * (g * g))

        m_hat = m / (1.0 - b1**t)
        v_hat = v / (1.0 - b2**t)

        if self.amsgrad:
            v_max = state["v_max"]
            v_max.copy_from(v_max.maximum(v_hat))
            v_hat = v_max

        denom = v_hat.sqrt() + self.eps
        p.copy_from(p - self.learning_rate * (m_hat / denom))
