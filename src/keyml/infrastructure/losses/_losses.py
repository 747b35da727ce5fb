"""
Loss function primitives for KeyML.

Each loss is a stateless functor with

- ``forward(predictions, targets) -> float``: the scalar loss, and
- ``backward(predictions, targets) -> Tensor``: the gradient of that loss
  w.r.t. `predictions`, shaped like `predictions`.

Currently implemented losses:
- MSELoss, MAELoss, HuberLoss                       (regression)
- BCELoss, BCEWithLogitsLoss                         (binary classification)
- CrossEntropyLoss, NLLLoss                          (multi-class)
- HingeLoss                                          (margin, targets in {-1, 1})
- CosineEmbeddingLoss                                (similarity)

Design notes
------------
- `predictions` and `targets` must have identical shapes; there is no
  broadcasting. A mismatch raises `ShapeMismatchError`.
- Elementwise losses average over every element (``n = count``). The
  multi-class losses divide by the batch size instead: ``shape[0]`` for
  2-D input, 1 for a single 1-D sample.
- `log(0)` is avoided with the fixed clamps in `_constants`; numerical edge
  cases never raise.
"""

from __future__ import annotations

from typing import Any, ClassVar

import numpy as np

from ...domain._errors import ShapeMismatchError
from ...domain._function import ILoss
from .._constants import COSINE_EPS, PROB_EPS
from ..tensor._tensor import Tensor
from ..utils._registry import Registry

LOSSES: Registry = Registry("loss")


def _batch_size(t: Tensor) -> int:
    return int(t.shape[0]) if t.rank >= 2 else 1


class Loss(ILoss):
    """
    Base class for loss functors.

    Notes
    -----
    Subclasses call `_validate` first in both passes.
    """

    name: ClassVar[str] = "loss"

    def __call__(self, predictions: Tensor, targets: Tensor) -> float:
        return self.forward(predictions, targets)

    def _validate(self, predictions: Tensor, targets: Tensor, op: str) -> None:
        if tuple(predictions.shape) != tuple(targets.shape):
            raise ShapeMismatchError(
                f"{self.name}.{op}", predictions.shape, targets.shape
            )

    def _arrays(self, predictions: Tensor, targets: Tensor, op: str):
        self._validate(predictions, targets, op)
        p = predictions.to_numpy()
        return p, targets.to_numpy().astype(p.dtype, copy=False)

    def forward(self, predictions: Tensor, targets: Tensor) -> float:
        raise NotImplementedError

    def backward(self, predictions: Tensor, targets: Tensor) -> Tensor:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


@LOSSES.register("mse")
class MSELoss(Loss):
    """
    Mean Squared Error.

        MSE(p, t) = sum((p - t)^2) / n

    Backward:

        dL/dp = 2 * (p - t) / n
    """

    name = "MSE"

    def forward(self, predictions: Tensor, targets: Tensor) -> float:
        self._validate(predictions, targets, "forward")
        diff = predictions - targets.astype(predictions.dtype)
        return (diff * diff).sum() / diff.count

    def backward(self, predictions: Tensor, targets: Tensor) -> Tensor:
        self._validate(predictions, targets, "backward")
        diff = predictions - targets.astype(predictions.dtype)
        return diff * (2.0 / diff.count)


@LOSSES.register("mae")
class MAELoss(Loss):
    """
    Mean Absolute Error.

        MAE(p, t) = sum(|p - t|) / n

    Backward uses the subgradient ``sign(p - t) / n`` (0 at exact ties).
    """

    name = "MAE"

    def forward(self, predictions: Tensor, targets: Tensor) -> float:
        self._validate(predictions, targets, "forward")
        diff = predictions - targets.astype(predictions.dtype)
        return diff.abs().sum() / diff.count

    def backward(self, predictions: Tensor, targets: Tensor) -> Tensor:
        self._validate(predictions, targets, "backward")
        diff = predictions - targets.astype(predictions.dtype)
        return diff.sign() * (1.0 / diff.count)


@LOSSES.register("huber")
class HuberLoss(Loss):
    """
    Huber loss, quadratic near zero and linear beyond `delta`.

        l(d) = 0.5 * d^2                     if |d| <= delta
             = delta * (|d| - 0.5 * delta)   otherwise

    averaged over all elements. Backward is ``d / n`` inside the quadratic
    zone and ``sign(d) * delta / n`` outside.

    Parameters
    ----------
    delta : float, default=1.0
        Transition point; must be positive.
    """

    name = "Huber"

    def __init__(self, delta: float = 1.0) -> None:
        if delta <= 0:
            raise ValueError(f"delta must be positive, got {delta}")
        self.delta = float(delta)

    def forward(self, predictions: Tensor, targets: Tensor) -> float:
        p, t = self._arrays(predictions, targets, "forward")
        d = p - t
        a = np.abs(d)
        loss = np.where(a <= self.delta, 0.5 * d * d, self.delta * (a - 0.5 * self.delta))
        return float(np.sum(loss) / d.size)

    def backward(self, predictions: Tensor, targets: Tensor) -> Tensor:
        p, t = self._arrays(predictions, targets, "backward")
        d = p - t
        g = np.where(np.abs(d) <= self.delta, d, self.delta * np.sign(d)) / d.size
        return Tensor.from_numpy(g, dtype=predictions.dtype)

    def __repr__(self) -> str:
        return f"HuberLoss(delta={self.delta})"


@LOSSES.register("bce")
class BCELoss(Loss):
    """
    Binary Cross Entropy on probabilities.

        BCE(p, t) = mean(-(t * log(p) + (1 - t) * log(1 - p)))

    `p` is clamped to ``[1e-7, 1 - 1e-7]`` in both passes. Backward:

        dL/dp = (-t / p + (1 - t) / (1 - p)) / n
    """

    name = "BCE"

    def forward(self, predictions: Tensor, targets: Tensor) -> float:
        p, t = self._arrays(predictions, targets, "forward")
        p = np.clip(p.astype(np.float64), PROB_EPS, 1.0 - PROB_EPS)
        loss = -(t * np.log(p) + (1.0 - t) * np.log(1.0 - p))
        return float(np.sum(loss) / p.size)

    def backward(self, predictions: Tensor, targets: Tensor) -> Tensor:
        p, t = self._arrays(predictions, targets, "backward")
        p = np.clip(p.astype(np.float64), PROB_EPS, 1.0 - PROB_EPS)
        g = (-t / p + (1.0 - t) / (1.0 - p)) / p.size
        return Tensor.from_numpy(g, dtype=predictions.dtype)


@LOSSES.register("bce_with_logits")
class BCEWithLogitsLoss(Loss):
    """
    Binary Cross Entropy on raw logits (numerically stable).

    With ``m = max(0, -x)``:

        l(x, t) = m + x * (1 - t) + log(exp(-m) + exp(-x - m))

    averaged over all elements. Backward: ``(sigmoid(x) - t) / n``.
    """

    name = "BCEWithLogits"

    def forward(self, predictions: Tensor, targets: Tensor) -> float:
        x, t = self._arrays(predictions, targets, "forward")
        m = np.maximum(0, -x)
        loss = m + x * (1 - t) + np.log(np.exp(-m) + np.exp(-x - m))
        return float(np.sum(loss) / x.size)

    def backward(self, predictions: Tensor, targets: Tensor) -> Tensor:
        x, t = self._arrays(predictions, targets, "backward")
        sig = 0.5 * (1.0 + np.tanh(0.5 * x))
        return Tensor.from_numpy((sig - t) / x.size, dtype=predictions.dtype)


@LOSSES.register("cross_entropy")
class CrossEntropyLoss(Loss):
    """
    Softmax cross entropy on logits.

    Softmax is applied internally (over the whole vector for 1-D input,
    per row for 2-D input), then

        CE = -sum_{t > 0} t * log(max(p, 1e-7)) / batch

    Backward uses the closed form ``(softmax(x) - t) / batch``, which is the
    exact gradient only because softmax is part of this loss.

    Raises
    ------
    ValueError
        If the input rank is not 1 or 2.
    """

    name = "CrossEntropy"

    @staticmethod
    def _softmax(x: np.ndarray) -> np.ndarray:
        if x.ndim not in (1, 2):
            raise ValueError(f"CrossEntropy expects 1-D or 2-D input, got ndim={x.ndim}")
        ex = np.exp(x - np.max(x, axis=-1, keepdims=True))
        return ex / np.sum(ex, axis=-1, keepdims=True)

    def forward(self, predictions: Tensor, targets: Tensor) -> float:
        x, t = self._arrays(predictions, targets, "forward")
        p = self._softmax(x)
        mask = t > 0
        loss = -np.sum(t[mask] * np.log(np.maximum(p[mask], PROB_EPS)))
        return float(loss / _batch_size(predictions))

    def backward(self, predictions: Tensor, targets: Tensor) -> Tensor:
        x, t = self._arrays(predictions, targets, "backward")
        g = (self._softmax(x) - t) / _batch_size(predictions)
        return Tensor.from_numpy(g, dtype=predictions.dtype)


@LOSSES.register("nll")
class NLLLoss(Loss):
    """
    Negative log likelihood on log-probabilities with one-hot targets.

        NLL = -sum_{t > 0} p * t / batch

    Backward: ``-t / batch``.
    """

    name = "NLL"

    def forward(self, predictions: Tensor, targets: Tensor) -> float:
        p, t = self._arrays(predictions, targets, "forward")
        mask = t > 0
        return float(-np.sum(p[mask] * t[mask]) / _batch_size(predictions))

    def backward(self, predictions: Tensor, targets: Tensor) -> Tensor:
        _, t = self._arrays(predictions, targets, "backward")
        return Tensor.from_numpy(-t / _batch_size(predictions), dtype=predictions.dtype)


@LOSSES.register("hinge")
class HingeLoss(Loss):
    """
    Hinge loss for targets in ``{-1, 1}``.

        hinge = mean(max(0, 1 - t * p))

    Subgradient: ``-t / n`` where the margin is violated (``t * p < 1``),
    else 0.
    """

    name = "Hinge"

    def forward(self, predictions: Tensor, targets: Tensor) -> float:
        p, t = self._arrays(predictions, targets, "forward")
        return float(np.sum(np.maximum(0, 1 - t * p)) / p.size)

    def backward(self, predictions: Tensor, targets: Tensor) -> Tensor:
        p, t = self._arrays(predictions, targets, "backward")
        g = np.where(t * p < 1, -t / p.size, 0.0)
        return Tensor.from_numpy(g, dtype=predictions.dtype)


@LOSSES.register("cosine_embedding")
class CosineEmbeddingLoss(Loss):
    """
    One minus the cosine similarity of the flattened tensors.

        loss = 1 - dot(p, t) / (||p|| * ||t|| + 1e-8)

    Backward:

        dL/dp = (dot * p / ||p||^2 - t) / (||p|| * ||t|| + 1e-8)

    Parameters
    ----------
    margin : float, default=0.0
        Stored for configuration parity. Every pair is treated as a similar
        pair, so the margin does not enter the loss.
    """

    name = "CosineEmbedding"

    def __init__(self, margin: float = 0.0) -> None:
        self.margin = float(margin)

    @staticmethod
    def _stats(p: np.ndarray, t: np.ndarray):
        p64 = p.astype(np.float64).reshape(-1)
        t64 = t.astype(np.float64).reshape(-1)
        dot = float(np.dot(p64, t64))
        norm_p = float(np.sqrt(np.dot(p64, p64)))
        norm_t = float(np.sqrt(np.dot(t64, t64)))
        return dot, norm_p, norm_t

    def forward(self, predictions: Tensor, targets: Tensor) -> float:
        p, t = self._arrays(predictions, targets, "forward")
        dot, norm_p, norm_t = self._stats(p, t)
        return 1.0 - dot / (norm_p * norm_t + COSINE_EPS)

    def backward(self, predictions: Tensor, targets: Tensor) -> Tensor:
        p, t = self._arrays(predictions, targets, "backward")
        dot, norm_p, norm_t = self._stats(p, t)
        denom = norm_p * norm_t + COSINE_EPS
        # A zero prediction has no direction; only the -t term remains.
        coef = dot / (norm_p * norm_p) if norm_p > 0 else 0.0
        g = (coef * p.astype(np.float64) - t) / denom
        return Tensor.from_numpy(g, dtype=predictions.dtype)

    def __repr__(self) -> str:
        return f"CosineEmbeddingLoss(margin={self.margin})"


def get_loss(name: str, **kwargs: Any) -> Loss:
    """
    Construct a registered loss by name (e.g., "mse", "cross_entropy").

    Raises
    ------
    ValueError
        If `name` is not registered.
    """
    return LOSSES.create(name, **kwargs)


def available_losses() -> tuple[str, ...]:
    """Return the registered loss names (sorted)."""
    return LOSSES.available()
