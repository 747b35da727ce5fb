"""
KeyML: a NumPy-backed tensor with forward/backward activations and losses,
stateful optimizers, learning-rate schedules and dataset preprocessing.

Logging
-------
Modules log through ``logging.getLogger(__name__)``. The package installs a
``NullHandler`` only; configure handlers in the application.
"""

import logging

from .domain import (
    ContractViolationError,
    ShapeMismatchError,
    DTypeMismatchError,
    TensorIndexError,
    ParameterMismatchError,
    OptimizerStateError,
    NotFittedError,
)
from .infrastructure import *
from . import infrastructure as _infrastructure

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0a0"

__all__ = [
    ContractViolationError.__name__,
    ShapeMismatchError.__name__,
    DTypeMismatchError.__name__,
    TensorIndexError.__name__,
    ParameterMismatchError.__name__,
    OptimizerStateError.__name__,
    NotFittedError.__name__,
    *_infrastructure.__all__,
]
