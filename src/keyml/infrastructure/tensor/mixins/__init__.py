"""
Operation mixins composed into the concrete `Tensor` class.

- ``TensorMixinArithmetic``: elementwise operators and matmul
- ``TensorMixinReduction``: scalar reductions
- ``TensorMixinUnary``: elementwise maps and `normalize`
"""

from ._arithmetic import TensorMixinArithmetic
from ._reduction import TensorMixinReduction
from ._unary import TensorMixinUnary

__all__ = [
    TensorMixinArithmetic.__name__,
    TensorMixinReduction.__name__,
    TensorMixinUnary.__name__,
]
