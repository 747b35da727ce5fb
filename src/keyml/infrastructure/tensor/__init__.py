"""
NumPy-backed Tensor implementation and its supporting dtype / random
utilities.
"""

from ._dtype import (
    DType,
    float32,
    float64,
    resolve_dtype,
    set_default_dtype,
    get_default_dtype,
)
from ._random import manual_seed, default_generator, resolve_generator
from ._tensor import Tensor

__all__ = [
    Tensor.__name__,
    DType.__name__,
    "float32",
    "float64",
    resolve_dtype.__name__,
    set_default_dtype.__name__,
    get_default_dtype.__name__,
    manual_seed.__name__,
    default_generator.__name__,
    resolve_generator.__name__,
]
