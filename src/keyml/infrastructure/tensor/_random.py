"""
Seedable random source for KeyML.

All stochastic APIs (`Tensor.random`, `Tensor.randn`, shuffling splitters)
draw from a `numpy.random.Generator`. Callers may pass their own generator,
an integer `random_state`, or rely on the package default generator, which
`manual_seed` reseeds for reproducible runs.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

logger = logging.getLogger(__name__)

_default_generator: np.random.Generator = np.random.default_rng()


def manual_seed(seed: int) -> np.random.Generator:
    """
    Reseed the package default generator.

    Parameters
    ----------
    seed : int
        Seed passed to `numpy.random.default_rng`.

    Returns
    -------
    np.random.Generator
        The new default generator.
    """
    global _default_generator
    _default_generator = np.random.default_rng(seed)
    logger.debug("default generator reseeded with seed=%d", seed)
    return _default_generator


def default_generator() -> np.random.Generator:
    """Return the package default generator."""
    return _default_generator


def resolve_generator(
    generator: Optional[np.random.Generator] = None,
    random_state: Optional[int] = None,
) -> np.random.Generator:
    """
    Pick the generator a stochastic call should use.

    Precedence: explicit `generator`, then a fresh generator seeded with
    `random_state`, then the package default generator.

    Raises
    ------
    ValueError
        If both `generator` and `random_state` are given.
    """
    if generator is not None and random_state is not None:
        raise ValueError("pass either generator or random_state, not both")
    if generator is not None:
        return generator
    if random_state is not None:
        return np.random.default_rng(random_state)
    return _default_generator
