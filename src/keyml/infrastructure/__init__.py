"""
NumPy implementations of the KeyML contracts.
"""

from .tensor import (
    Tensor,
    DType,
    float32,
    float64,
    set_default_dtype,
    get_default_dtype,
    manual_seed,
    default_generator,
)
from .activations import *
from .losses import *
from .optimizers import *
from .schedulers import *
from .preprocessing import *

from . import activations as _activations
from . import losses as _losses
from . import optimizers as _optimizers
from . import schedulers as _schedulers
from . import preprocessing as _preprocessing

__all__ = [
    Tensor.__name__,
    DType.__name__,
    "float32",
    "float64",
    set_default_dtype.__name__,
    get_default_dtype.__name__,
    manual_seed.__name__,
    default_generator.__name__,
    *_activations.__all__,
    *_losses.__all__,
    *_optimizers.__all__,
    *_schedulers.__all__,
    *_preprocessing.__all__,
]
