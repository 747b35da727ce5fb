"""
Learning-rate schedulers.
"""

from ._schedulers import (
    StepLR,
    ExponentialLR,
    CosineAnnealingLR,
    WarmupLR,
    apply_schedule,
)

__all__ = [
    StepLR.__name__,
    ExponentialLR.__name__,
    CosineAnnealingLR.__name__,
    WarmupLR.__name__,
    apply_schedule.__name__,
]
