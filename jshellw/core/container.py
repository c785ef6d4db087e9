"""
Service container for jshellw.

Holds the process-wide logger and presenter as dependency-injector
providers keyed by their interface, so pipeline services can look them up
lazily instead of having them threaded through every constructor.
"""

from collections.abc import Callable
from typing import Optional, TypeVar

from dependency_injector import providers

T = TypeVar("T")


class ServiceContainer:
    """Interface -> provider registry with a process-wide instance."""

    _instance: Optional["ServiceContainer"] = None

    def __init__(self) -> None:
        self._providers: dict[type, providers.Provider] = {}

    @classmethod
    def get_instance(cls) -> "ServiceContainer":
        """Get the global container, creating it on first use."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the global container (for testing)."""
        cls._instance = None

    def register_singleton(
        self,
        interface: type[T],
        implementation: T | None = None,
        factory: Callable[[], T] | None = None,
    ) -> None:
        """
        Register one shared instance for an interface.

        Args:
            interface: The interface type services ask for
            implementation: Ready-made instance
            factory: Builds the instance on first resolve instead

        Raises:
            ValueError: If neither implementation nor factory is given
        """
        if implementation is not None:
            self._providers[interface] = providers.Object(implementation)
        elif factory is not None:
            self._providers[interface] = providers.Singleton(factory)
        else:
            raise ValueError("Must provide either implementation or factory")

    def register_transient(self, interface: type[T], factory: Callable[..., T]) -> None:
        """Register a factory called on every resolve."""
        self._providers[interface] = providers.Factory(factory)

    def is_registered(self, interface: type) -> bool:
        return interface in self._providers

    def resolve(self, interface: type[T]) -> T:
        """
        Resolve a service by interface.

        Raises:
            KeyError: If nothing is registered for the interface
        """
        if interface not in self._providers:
            raise KeyError(f"No provider registered for: {interface}")
        return self._providers[interface]()

    def try_resolve(self, interface: type[T]) -> T | None:
        """Resolve a service, or None when nothing is registered."""
        if interface not in self._providers:
            return None
        return self._providers[interface]()


def get_container() -> ServiceContainer:
    """Get the global service container instance."""
    return ServiceContainer.get_instance()


def resolve(interface: type[T]) -> T:
    """Resolve a service from the global container."""
    return get_container().resolve(interface)


def try_resolve(interface: type[T]) -> T | None:
    """Resolve a service from the global container, or None."""
    return get_container().try_resolve(interface)
