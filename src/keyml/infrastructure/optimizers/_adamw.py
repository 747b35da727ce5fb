"""
AdamW optimizer (Adam with decoupled weight decay).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from .._constants import ADAM_EPS
from ..tensor._tensor import Tensor
from ._adam import _validate_adam
from ._base import OPTIMIZERS, Optimizer


@OPTIMIZERS.register("adamw")
@dataclass(eq=False, repr=False)
class AdamW(Optimizer):
    """
    AdamW optimizer.

    Weight decay is applied directly to the parameters, before and
    independently of the moment update:

        p <- p * (1 - lr * weight_decay)

    followed by the plain Adam update with the raw gradient.

    Parameters
    ----------
    learning_rate : float, optional
        Defaults to 1e-3.
    betas : tuple[float, float], optional
        Defaults to (0.9, 0.999).
    eps : float, optional
        Defaults to 1e-8.
    weight_decay : float, optional
        Decoupled decay coefficient. Defaults to 0.01.
    """

    name = "AdamW"

    betas: Tuple[float, float] = (0.9, 0.999)
    eps: float = ADAM_EPS
    weight_decay: float = 0.01

    def __init__(
        self,
        learning_rate: float = 1e-3,
        *,
        betas: Tuple[float, float] = (0.9, 0.999),
        eps: float = ADAM_EPS,
        weight_decay: float = 0.01,
    ) -> None:
        super().__init__(learning_rate)
        self.betas = (float(betas[0]), float(betas[1]))
        self.eps = float(eps)
        self.weight_decay = float(weight_decay)
        _validate_adam(self.betas, self.eps, self.weight_decay)

    def _init_state(self, p: Tensor) -> Dict[str, Tensor]:
        return {
            "m": Tensor.zeros(p.shape, dtype=p.dtype),
            "v": Tensor.zeros(p.shape, dtype=p.dtype),
        }

    def _update(self, p: Tensor, g: Tensor, state: Dict[str, Tensor]) -> None:
        b1, b2 = self.betas
        t = self.t
        lr = self.learning_rate
        m = state["m"]
        v = state["v"]

        p.copy_from(p * (1.0 - lr * self.weight_decay))

        m.copy_from(b1 * m + (1.0 - b1) * g)
        v.copy_from(b2 * v + (1.0 - b2) * (g * g))

        m_hat = m / (1.0 - b1**t)
        v_hat = v / (1.0 - b2**t)
        p.copy_from(p - lr * (m_hat / (v_hat.sqrt() + self.eps)))
