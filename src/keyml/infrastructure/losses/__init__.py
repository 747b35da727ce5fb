"""
Loss functors (scalar forward, gradient backward) and a name-based factory.
"""

from ._losses import (
    Loss,
    MSELoss,
    MAELoss,
    HuberLoss,
    BCELoss,
    BCEWithLogitsLoss,
    CrossEntropyLoss,
    NLLLoss,
    HingeLoss,
    CosineEmbeddingLoss,
    get_loss,
    available_losses,
)

__all__ = [
    Loss.__name__,
    MSELoss.__name__,
    MAELoss.__name__,
    HuberLoss.__name__,
    BCELoss.__name__,
    BCEWithLogitsLoss.__name__,
    CrossEntropyLoss.__name__,
    NLLLoss.__name__,
    HingeLoss.__name__,
    CosineEmbeddingLoss.__name__,
    get_loss.__name__,
    available_losses.__name__,
]
