"""
Activation functors with forward/backward passes and a name-based factory.
"""

from ._base import (
    Activation,
    get_activation,
    available_activations,
    register_activation,
)
from ._activations import (
    ReLU,
    LeakyReLU,
    ELU,
    SELU,
    Sigmoid,
    Tanh,
    Softmax,
    Swish,
    GELU,
    Softplus,
    Linear,
)

__all__ = [
    Activation.__name__,
    get_activation.__name__,
    available_activations.__name__,
    register_activation.__name__,
    ReLU.__name__,
    LeakyReLU.__name__,
    ELU.__name__,
    SELU.__name__,
    Sigmoid.__name__,
    Tanh.__name__,
    Softmax.__name__,
    Swish.__name__,
    GELU.__name__,
    Softplus.__name__,
    Linear.__name__,
]
