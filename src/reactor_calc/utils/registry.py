"""Plugin registry for reactor models and kinetics.

Reactor sizing models and kinetics classes register themselves under a
short key so that requests can name them ("batch", "cstr", "power_law")
and custom models can be added without modifying library source code.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from reactor_calc.exceptions import RegistryError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Registry:
    """Registry for plugin components.

    Example:
        >>> REACTOR_REGISTRY = Registry("reactors")
        >>> @REACTOR_REGISTRY.register("my_reactor")
        ... class MyReactor(AbstractReactor):
        ...     pass
        >>> reactor_cls = REACTOR_REGISTRY.get("my_reactor")
    """

    def __init__(self, name: str):
        self.name = name
        self._registry: dict[str, type[Any]] = {}
        logger.debug(f"Initialized {name} registry")

    def register(self, key: str) -> Callable[[type[T]], type[T]]:
        """Decorator to register a class under ``key``.

        Args:
            key: Unique identifier for this component.

        Returns:
            Decorator function.
        """

        def decorator(cls: type[T]) -> type[T]:
            if key in self._registry:
                logger.warning(f"Overwriting existing {self.name} registry entry: {key}")
            self._registry[key] = cls
            logger.debug(f"Registered {self.name}: {key} -> {cls.__name__}")
            return cls

        return decorator

    def get(self, key: str) -> type[Any]:
        """Retrieve a registered class.

        Args:
            key: Component identifier.

        Returns:
            Registered class.

        Raises:
            RegistryError: If key not found in registry.
        """
        if key not in self._registry:
            available = ", ".join(self.list_keys())
            raise RegistryError(f"'{key}' not found in {self.name} registry. Available: {available}")
        return self._registry[key]

    def create(self, key: str, *args: Any, **kwargs: Any) -> Any:
        """Instantiate the class registered under ``key``."""
        return self.get(key)(*args, **kwargs)

    def list_keys(self) -> list[str]:
        """List all registered keys, sorted."""
        return sorted(self._registry.keys())

    def __contains__(self, key: str) -> bool:
        return key in self._registry

    def __repr__(self) -> str:
        keys = ", ".join(self.list_keys())
        return f"Registry('{self.name}', keys=[{keys}])"


# Global registries
REACTOR_REGISTRY = Registry("reactors")
KINETICS_REGISTRY = Registry("kinetics")


__all__ = ["Registry", "REACTOR_REGISTRY", "KINETICS_REGISTRY"]
