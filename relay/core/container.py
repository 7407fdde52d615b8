"""
Dependency injection container for relay.

Uses dependency-injector for DI with support for:
- Singleton and transient lifetimes
- Factory registration
- Interface-based resolution
- A builder registry keyed by builder name (e.g. 'relay:dev-server')
"""

from collections.abc import Callable
from typing import Optional, TypeVar

from dependency_injector import providers

from .interfaces.builder import BuilderDescription

T = TypeVar("T")


class ServiceContainer:
    """
    Dependency injection container for relay.

    Combines dependency-injector's providers with a registry of builders
    that workspace targets refer to by name.
    """

    _instance: Optional["ServiceContainer"] = None

    def __init__(self) -> None:
        """Initialize the container with empty registries."""
        self._providers: dict[type, providers.Provider] = {}
        self._builders: dict[str, BuilderDescription] = {}

    @classmethod
    def get_instance(cls) -> "ServiceContainer":
        """Get the global container instance (singleton)."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the global container (for testing)."""
        cls._instance = None

    # -------------------------------------------------------------------------
    # Core service registration (uses dependency-injector providers)
    # -------------------------------------------------------------------------

    def register_singleton(
        self,
        interface: type[T],
        implementation: T | None = None,
        factory: Callable[[], T] | None = None,
    ) -> None:
        """
        Register a singleton service.

        Args:
            interface: The interface/protocol type
            implementation: Optional concrete instance
            factory: Optional factory function (for lazy init)
        """
        if implementation is not None:
            self._providers[interface] = providers.Object(implementation)
        elif factory is not None:
            self._providers[interface] = providers.Singleton(factory)
        else:
            raise ValueError("Must provide either implementation or factory")

    def register_transient(
        self,
        interface: type[T],
        factory: Callable[..., T],
    ) -> None:
        """Register a transient service (new instance per resolve)."""
        self._providers[interface] = providers.Factory(factory)

    def resolve(self, interface: type[T]) -> T:
        """
        Resolve a service by interface.

        Raises:
            KeyError: If no registration found
        """
        if interface not in self._providers:
            raise KeyError(f"No provider registered for: {interface}")
        return self._providers[interface]()

    def try_resolve(self, interface: type[T]) -> T | None:
        """Try to resolve a service, returning None if not registered."""
        if interface not in self._providers:
            return None
        return self._providers[interface]()

    def override(self, interface: type[T], provider: providers.Provider) -> None:
        """Override a registered provider (useful for testing)."""
        self._providers[interface] = provider

    # -------------------------------------------------------------------------
    # Builder registry
    # -------------------------------------------------------------------------

    def register_builder(self, description: BuilderDescription) -> None:
        """
        Register a builder under its name.

        Args:
            description: Builder name, options model and implementation class
        """
        self._builders[description.name] = description

    def get_builder_description(self, name: str) -> BuilderDescription:
        """
        Get a builder description by name.

        Raises:
            KeyError: If no builder registered under that name
        """
        if name not in self._builders:
            raise KeyError(f"No builder registered: {name}")
        return self._builders[name]

    def list_builders(self) -> list[str]:
        """List registered builder names."""
        return sorted(self._builders)


def get_container() -> ServiceContainer:
    """Get the global service container instance."""
    return ServiceContainer.get_instance()
