"""
Backend-agnostic contracts of KeyML.

The domain layer holds Protocols and error types only; it never imports
NumPy. Concrete implementations live in :mod:`keyml.infrastructure`.
"""

from ._errors import (
    ContractViolationError,
    ShapeMismatchError,
    DTypeMismatchError,
    TensorIndexError,
    ParameterMismatchError,
    OptimizerStateError,
    NotFittedError,
)
from ._dtype import INumericType
from ._tensor import ITensor
from ._function import IActivation, ILoss
from ._optimizers import IOptimizer, ILRScheduler
from ._transform import ITransform, IInvertibleTransform

__all__ = [
    ContractViolationError.__name__,
    ShapeMismatchError.__name__,
    DTypeMismatchError.__name__,
    TensorIndexError.__name__,
    ParameterMismatchError.__name__,
    OptimizerStateError.__name__,
    NotFittedError.__name__,
    INumericType.__name__,
    ITensor.__name__,
    IActivation.__name__,
    ILoss.__name__,
    IOptimizer.__name__,
    ILRScheduler.__name__,
    ITransform.__name__,
    IInvertibleTransform.__name__,
]
