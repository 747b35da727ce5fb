"""
Dataset splitting: hold-out split and K-fold cross-validation indices.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence, Tuple

import numpy as np

from ..tensor._random import resolve_generator

logger = logging.getLogger(__name__)


def _take(data: Any, indices: np.ndarray) -> Any:
    if isinstance(data, np.ndarray):
        return data[indices]
    return [data[i] for i in indices]


def train_test_split(
    x: Sequence[Any],
    y: Sequence[Any],
    test_size: float = 0.2,
    shuffle: bool = True,
    random_state: Optional[int] = None,
    *,
    generator: Optional[np.random.Generator] = None,
) -> Tuple[Any, Any, Any, Any]:
    """
    Split paired collections into train and test parts.

    Parameters
    ----------
    x, y : sequence
        Equal-length collections (lists or NumPy arrays).
    test_size : float, default=0.2
        Fraction of samples in the test part, in ``(0, 1)``.
    shuffle : bool, default=True
        Permute the samples before splitting. Without shuffling the input
        order is preserved in both parts.
    random_state : int, optional
        Seed for the permutation.
    generator : np.random.Generator, optional
        Random source for the permutation (mutually exclusive with
        `random_state`).

    Returns
    -------
    tuple
        ``(x_train, x_test, y_train, y_test)``. NumPy inputs produce NumPy
        outputs; any other sequence produces lists.

    Notes
    -----
    The first ``round(n * (1 - test_size))`` (permuted) samples form the
    train part.

    Raises
    ------
    ValueError
        If the lengths differ or `test_size` is outside ``(0, 1)``.
    """
    n = len(x)
    if len(y) != n:
        raise ValueError(f"x and y must have the same length, got {n} and {len(y)}")
    if not 0.0 < test_size < 1.0:
        raise ValueError(f"test_size must be in (0, 1), got {test_size}")

    if shuffle:
        indices = resolve_generator(generator, random_state).permutation(n)
    else:
        indices = np.arange(n)

    split = int(round(n * (1.0 - test_size)))
    train_idx, test_idx = indices[:split], indices[split:]
    logger.debug("train_test_split: n=%d train=%d test=%d", n, split, n - split)
    return (
        _take(x, train_idx),
        _take(x, test_idx),
        _take(y, train_idx),
        _take(y, test_idx),
    )


class KFold:
    """
    K-fold cross-validation index generator.

    Parameters
    ----------
    n_splits : int, default=5
        Number of folds; at least 2.
    shuffle : bool, default=False
        Permute indices before folding.
    random_state : int, optional
        Seed used when `shuffle` is True.
    generator : np.random.Generator, optional
        Random source used when `shuffle` is True.

    Notes
    -----
    Every fold has ``n_samples // n_splits`` test indices except the last,
    which also takes the remainder. The test folds partition
    ``0 .. n_samples - 1``.
    """

    def __init__(
        self,
        n_splits: int = 5,
        shuffle: bool = False,
        random_state: Optional[int] = None,
        *,
        generator: Optional[np.random.Generator] = None,
    ) -> None:
        if int(n_splits) < 2:
            raise ValueError(f"n_splits must be >= 2, got {n_splits}")
        if generator is not None and random_state is not None:
            raise ValueError("pass either generator or random_state, not both")
        self.n_splits = int(n_splits)
        self.shuffle = bool(shuffle)
        self.random_state = random_state
        self.generator = generator

    def get_n_splits(self) -> int:
        return self.n_splits

    def split(self, n_samples: int) -> List[Tuple[np.ndarray, np.ndarray]]:
        """
        Return ``n_splits`` ``(train_indices, test_indices)`` pairs.

        Raises
        ------
        ValueError
            If ``n_samples < n_splits``.
        """
        n_samples = int(n_samples)
        if n_samples < self.n_splits:
            raise ValueError(
                f"n_samples ({n_samples}) must be >= n_splits ({self.n_splits})"
            )

        if self.shuffle:
            rng = resolve_generator(self.generator, self.random_state)
            indices = rng.permutation(n_samples)
        else:
            indices = np.arange(n_samples)

        fold_size = n_samples // self.n_splits
        folds = []
        for i in range(self.n_splits):
            start = i * fold_size
            end = n_samples if i == self.n_splits - 1 else start + fold_size
            test = indices[start:end]
            train = np.concatenate([indices[:start], indices[end:]])
            folds.append((train, test))
        return folds

    def __repr__(self) -> str:
        return f"KFold(n_splits={self.n_splits}, shuffle={self.shuffle})"
