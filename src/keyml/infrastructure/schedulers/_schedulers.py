"""
Epoch-based learning-rate schedules.

A scheduler is a pure function ``get_rate(epoch, base_rate) -> rate``; it
keeps no state between calls. `apply_schedule` writes the scheduled rate
into an optimizer.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from ...domain._optimizers import ILRScheduler, IOptimizer


def _check_epoch(epoch: int) -> int:
    epoch = int(epoch)
    if epoch < 0:
        raise ValueError(f"epoch must be >= 0, got {epoch}")
    return epoch


@dataclass(frozen=True)
class StepLR:
    """
    Decay the rate by `gamma` every `step_size` epochs.

        rate = base_rate * gamma ** (epoch // step_size)
    """

    step_size: int
    gamma: float = 0.1

    def __post_init__(self) -> None:
        if self.step_size <= 0:
            raise ValueError(f"step_size must be > 0, got {self.step_size}")
        if self.gamma <= 0.0:
            raise ValueError(f"gamma must be > 0, got {self.gamma}")

    def get_rate(self, epoch: int, base_rate: float) -> float:
        epoch = _check_epoch(epoch)
        return base_rate * self.gamma ** (epoch // self.step_size)


@dataclass(frozen=True)
class ExponentialLR:
    """
    Decay the rate by `gamma` every epoch: ``base_rate * gamma ** epoch``.
    """

    gamma: float

    def __post_init__(self) -> None:
        if self.gamma <= 0.0:
            raise ValueError(f"gamma must be > 0, got {self.gamma}")

    def get_rate(self, epoch: int, base_rate: float) -> float:
        return base_rate * self.gamma ** _check_epoch(epoch)


@dataclass(frozen=True)
class CosineAnnealingLR:
    """
    Cosine annealing from `base_rate` down to `min_rate` over `max_epochs`.

        rate = min_rate + (base_rate - min_rate) * (1 + cos(pi * epoch / max_epochs)) / 2

    Epochs past `max_epochs` continue along the cosine curve.
    """

    max_epochs: int
    min_rate: float = 0.0

    def __post_init__(self) -> None:
        if self.max_epochs <= 0:
            raise ValueError(f"max_epochs must be > 0, got {self.max_epochs}")

    def get_rate(self, epoch: int, base_rate: float) -> float:
        epoch = _check_epoch(epoch)
        cos = math.cos(math.pi * epoch / self.max_epochs)
        return self.min_rate + (base_rate - self.min_rate) * (1.0 + cos) / 2.0


@dataclass(frozen=True)
class WarmupLR:
    """
    Linear warmup, then an optional inner schedule.

    For ``epoch < warmup_epochs`` the rate is
    ``base_rate * (epoch + 1) / warmup_epochs``. Afterwards the inner
    scheduler is evaluated at ``epoch - warmup_epochs``, or `base_rate` is
    returned when there is no inner scheduler.

    Parameters
    ----------
    warmup_epochs : int
        Length of the warmup; must be > 0.
    inner : ILRScheduler, optional
        Schedule to follow after warmup.
    """

    warmup_epochs: int
    inner: Optional[ILRScheduler] = None

    def __post_init__(self) -> None:
        if self.warmup_epochs <= 0:
            raise ValueError(f"warmup_epochs must be > 0, got {self.warmup_epochs}")

    def get_rate(self, epoch: int, base_rate: float) -> float:
        epoch = _check_epoch(epoch)
        if epoch < self.warmup_epochs:
            return base_rate * (epoch + 1) / self.warmup_epochs
        if self.inner is not None:
            return self.inner.get_rate(epoch - self.warmup_epochs, base_rate)
        return base_rate


def apply_schedule(
    optimizer: IOptimizer, scheduler: ILRScheduler, epoch: int, base_rate: float
) -> float:
    """
    Set ``optimizer.learning_rate`` to the scheduled rate for `epoch`.

    Returns
    -------
    float
        The rate that was applied.
    """
    rate = float(scheduler.get_rate(epoch, base_rate))
    optimizer.learning_rate = rate
    return rate
