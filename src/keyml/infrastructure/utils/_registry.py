"""
Name-keyed factory registry.

Activations, losses and optimizers are registered by string name via a
decorator, then constructed by name through `Registry.create`. This is the
mechanism behind `get_activation`, `get_loss` and `get_optimizer`.

Usage example
-------------
Registering a class:

    ACTIVATIONS = Registry("activation")

    @ACTIVATIONS.register("relu")
    class ReLU: ...

Constructing by name:

    act = ACTIVATIONS.create("relu")

Notes
-----
- Registration keys must be unique unless explicitly overwritten.
- Lookups are case-insensitive; keys are stored lower-case.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Generic, TypeVar

T = TypeVar("T", bound=Callable[..., Any])


class Registry(Generic[T]):
    """
    Registry of factories (usually classes) keyed by name.

    Parameters
    ----------
    kind : str
        Human-readable kind used in error messages (e.g., "activation").
    """

    def __init__(self, kind: str) -> None:
        self.kind = kind
        self._entries: Dict[str, T] = {}

    def register(self, name: str, *, overwrite: bool = False) -> Callable[[T], T]:
        """
        Decorator to register a factory under `name`.

        Parameters
        ----------
        name:
            Registry key used to retrieve the factory later.
        overwrite:
            If False (default), raises if `name` is already registered.
        """
        if not isinstance(name, str) or not name:
            raise ValueError(f"{self.kind} name must be a non-empty string")
        key = name.lower()

        def decorator(factory: T) -> T:
            if not overwrite and key in self._entries:
                raise ValueError(f"{self.kind} already registered: {name!r}")
            self._entries[key] = factory
            return factory

        return decorator

    def available(self) -> tuple[str, ...]:
        """Return registered names (sorted)."""
        return tuple(sorted(self._entries))

    def get(self, name: str) -> T:
        """
        Get a registered factory by name.

        Raises
        ------
        ValueError
            If no factory is registered under `name`.
        """
        try:
            return self._entries[str(name).lower()]
        except KeyError as e:
            available = ", ".join(self.available()) or "<none>"
            raise ValueError(
                f"Unsupported {self.kind} name: {name!r}. Available: {available}"
            ) from e

    def create(self, name: str, **kwargs: Any) -> Any:
        """Construct the factory registered under `name` with `kwargs`."""
        return self.get(name)(**kwargs)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._entries
