"""
Concrete activation functors.

Every activation maps a Tensor elementwise (Softmax: per slice along an
axis) and chains an upstream gradient through its derivative:

    dx = f'(x) * grad

Implemented activations
-----------------------
relu, leaky_relu, elu, selu, sigmoid, tanh, softmax, swish, gelu,
softplus, linear.
"""

from __future__ import annotations

import numpy as np

from .._constants import (
    GELU_COEFF,
    GELU_SQRT_2_OVER_PI,
    SELU_ALPHA,
    SELU_LAMBDA,
)
from ._base import Activation, register_activation


def _sigmoid(x: np.ndarray) -> np.ndarray:
    # Split by sign so exp never overflows.
    out = np.empty_like(x)
    pos = x >= 0
    out[pos] = 1.0 / (1.0 + np.exp(-x[pos]))
    ex = np.exp(x[~pos])
    out[~pos] = ex / (1.0 + ex)
    return out


@register_activation("relu")
class ReLU(Activation):
    """
    Rectified linear unit: ``max(0, x)``.

    The derivative at exactly 0 is taken as 0.
    """

    name = "relu"

    def _forward(self, x):
        return np.maximum(x, 0)

    def _backward(self, x, grad):
        return np.where(x > 0, grad, 0).astype(x.dtype)


@register_activation("leaky_relu")
class LeakyReLU(Activation):
    """
    Leaky ReLU activation.

        f(x) = x               if x > 0
             = alpha * x       otherwise

    Parameters
    ----------
    alpha : float, default=0.01
        Negative slope coefficient.
    """

    name = "leaky_relu"

    def __init__(self, alpha: float = 0.01) -> None:
        self.alpha = float(alpha)

    def _forward(self, x):
        return np.where(x > 0, x, self.alpha * x).astype(x.dtype)

    def _backward(self, x, grad):
        return (grad * np.where(x > 0, 1.0, self.alpha)).astype(x.dtype)

    def __repr__(self) -> str:
        return f"LeakyReLU(alpha={self.alpha})"


@register_activation("elu")
class ELU(Activation):
    """
    Exponential linear unit.

        f(x) = x                    if x > 0
             = alpha * (exp(x) - 1) otherwise

    Backward uses ``1`` or ``alpha * exp(x)``.
    """

    name = "elu"

    def __init__(self, alpha: float = 1.0) -> None:
        self.alpha = float(alpha)

    def _forward(self, x):
        neg = self.alpha * np.expm1(np.minimum(x, 0))
        return np.where(x > 0, x, neg).astype(x.dtype)

    def _backward(self, x, grad):
        d = np.where(x > 0, 1.0, self.alpha * np.exp(np.minimum(x, 0)))
        return (grad * d).astype(x.dtype)

    def __repr__(self) -> str:
        return f"ELU(alpha={self.alpha})"


@register_activation("selu")
class SELU(Activation):
    """
    Scaled ELU: ``lambda * ELU(x; alpha)`` with lambda=1.0507, alpha=1.6733.
    """

    name = "selu"

    def _forward(self, x):
        neg = SELU_ALPHA * np.expm1(np.minimum(x, 0))
        return (SELU_LAMBDA * np.where(x > 0, x, neg)).astype(x.dtype)

    def _backward(self, x, grad):
        d = np.where(x > 0, 1.0, SELU_ALPHA * np.exp(np.minimum(x, 0)))
        return (grad * SELU_LAMBDA * d).astype(x.dtype)


@register_activation("sigmoid")
class Sigmoid(Activation):
    """
    Logistic sigmoid ``1 / (1 + exp(-x))``; derivative ``s * (1 - s)``.
    """

    name = "sigmoid"

    def _forward(self, x):
        return _sigmoid(x)

    def _backward(self, x, grad):
        s = _sigmoid(x)
        return grad * s * (1 - s)


@register_activation("tanh")
class Tanh(Activation):
    name = "tanh"

    def _forward(self, x):
        return np.tanh(x)

    def _backward(self, x, grad):
        t = np.tanh(x)
        return grad * (1 - t * t)


@register_activation("softmax")
class Softmax(Activation):
    """
    Softmax along an axis.

    Parameters
    ----------
    axis : int, default=-1
        Axis along which each slice is normalized. For a 2-D batch the
        default normalizes every row independently.

    Notes
    -----
    - Forward subtracts the per-slice maximum before exponentiation.
    - Backward is the Jacobian-vector product computed per slice,

          dx = s * (g - sum(g * s, axis))

      which equals ``J^T g`` with ``J = diag(s) - s s^T`` for every slice,
      without materializing the Jacobian. For 1-D input this is the full
      Jacobian product.
    """

    name = "softmax"

    def __init__(self, axis: int = -1) -> None:
        self.axis = int(axis)

    def _resolve_axis(self, ndim: int) -> int:
        axis = self.axis if self.axis >= 0 else ndim + self.axis
        if axis < 0 or axis >= ndim:
            raise ValueError(f"Invalid softmax axis {self.axis} for ndim={ndim}")
        return axis

    def _forward(self, x):
        axis = self._resolve_axis(x.ndim)
        ex = np.exp(x - np.max(x, axis=axis, keepdims=True))
        return ex / np.sum(ex, axis=axis, keepdims=True)

    def _backward(self, x, grad):
        axis = self._resolve_axis(x.ndim)
        s = self._forward(x)
        return s * (grad - np.sum(grad * s, axis=axis, keepdims=True))

    def __repr__(self) -> str:
        return f"Softmax(axis={self.axis})"


@register_activation("swish")
class Swish(Activation):
    """
    Swish (SiLU): ``x * sigmoid(x)``.

    Backward: ``swish + sigmoid * (1 - swish)``.
    """

    name = "swish"

    def _forward(self, x):
        return x * _sigmoid(x)

    def _backward(self, x, grad):
        s = _sigmoid(x)
        sw = x * s
        return grad * (sw + s * (1 - sw))


@register_activation("gelu")
class GELU(Activation):
    """
    GELU, tanh approximation.

        gelu(x) = 0.5 * x * (1 + tanh(k * (x + c * x^3)))

    with ``k = sqrt(2/pi) = 0.7978845608`` and ``c = 0.044715``. Backward is
    the exact derivative of this formula:

        0.5 * (1 + th) + 0.5 * x * (1 - th^2) * k * (1 + 3c x^2)
    """

    name = "gelu"

    def _forward(self, x):
        inner = GELU_SQRT_2_OVER_PI * (x + GELU_COEFF * x**3)
        return (0.5 * x * (1 + np.tanh(inner))).astype(x.dtype)

    def _backward(self, x, grad):
        inner = GELU_SQRT_2_OVER_PI * (x + GELU_COEFF * x**3)
        th = np.tanh(inner)
        d_inner = GELU_SQRT_2_OVER_PI * (1 + 3 * GELU_COEFF * x * x)
        d = 0.5 * (1 + th) + 0.5 * x * (1 - th * th) * d_inner
        return (grad * d).astype(x.dtype)


@register_activation("softplus")
class Softplus(Activation):
    """
    Softplus ``log(1 + exp(x))``, computed as ``logaddexp(0, x)``.

    Derivative is ``sigmoid(x)``.
    """

    name = "softplus"

    def _forward(self, x):
        return np.logaddexp(0, x).astype(x.dtype)

    def _backward(self, x, grad):
        return grad * _sigmoid(x)


@register_activation("linear")
class Linear(Activation):
    """Identity activation; forward and backward return copies."""

    name = "linear"

    def _forward(self, x):
        return x.copy()

    def _backward(self, x, grad):
        return grad.copy()
