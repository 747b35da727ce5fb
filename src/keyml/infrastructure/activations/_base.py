"""
Shared base class and registry for activation functors.
"""

from __future__ import annotations

from typing import Any, ClassVar

import numpy as np

from ...domain._errors import ShapeMismatchError
from ...domain._function import IActivation
from ..tensor._tensor import Tensor
from ..utils._registry import Registry

ACTIVATIONS: Registry = Registry("activation")


class Activation(IActivation):
    """
    Base class for stateless activation functors.

    Subclasses implement `_forward(x_np)` and `_backward(x_np, g_np)` on
    NumPy arrays shaped like the input; this class handles validation,
    conversion and output dtype.

    Notes
    -----
    - `forward` and `backward` never mutate their inputs.
    - Outputs keep the dtype of `x`.
    """

    name: ClassVar[str] = "activation"

    def __call__(self, x: Tensor) -> Tensor:
        return self.forward(x)

    def forward(self, x: Tensor) -> Tensor:
        """
        Apply the activation to `x`.

        Parameters
        ----------
        x : Tensor
            Input tensor of any shape.

        Returns
        -------
        Tensor
            New tensor of the same shape and dtype.
        """
        return Tensor.from_numpy(self._forward(x.to_numpy()), dtype=x.dtype)

    def backward(self, x: Tensor, grad: Tensor) -> Tensor:
        """
        Chain an upstream gradient through the activation.

        Parameters
        ----------
        x : Tensor
            The input that was passed to `forward`.
        grad : Tensor
            Gradient of the loss w.r.t. the activation output.

        Returns
        -------
        Tensor
            Gradient of the loss w.r.t. `x`.

        Raises
        ------
        ShapeMismatchError
            If `grad` and `x` have different shapes.
        """
        if tuple(grad.shape) != tuple(x.shape):
            raise ShapeMismatchError(f"{self.name}.backward", x.shape, grad.shape)
        x_np = x.to_numpy()
        g_np = grad.to_numpy().astype(x_np.dtype, copy=False)
        return Tensor.from_numpy(self._backward(x_np, g_np), dtype=x.dtype)

    def _forward(self, x: np.ndarray) -> np.ndarray:
        raise NotImplementedError

    def _backward(self, x: np.ndarray, grad: np.ndarray) -> np.ndarray:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def get_activation(name: str, **kwargs: Any) -> Activation:
    """
    Construct a registered activation by name.

    Parameters
    ----------
    name : str
        Registry name, e.g. "relu", "leaky_relu", "softmax".
    **kwargs
        Constructor arguments (e.g., ``alpha`` for "leaky_relu").

    Raises
    ------
    ValueError
        If `name` is not registered.
    """
    return ACTIVATIONS.create(name, **kwargs)


def available_activations() -> tuple[str, ...]:
    """Return the registered activation names (sorted)."""
    return ACTIVATIONS.available()


def register_activation(name: str, *, overwrite: bool = False):
    """Decorator registering an `Activation` subclass under `name`."""
    return ACTIVATIONS.register(name, overwrite=overwrite)
