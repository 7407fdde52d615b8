"""
Application bootstrap for relay.

Initializes the DI container with core services and the built-in builders.
This module should be called once at application startup.
"""

from pathlib import Path

from .container import ServiceContainer, get_container
from .interfaces.logger import ILogger
from .interfaces.presenter import IPresenter

_initialized = False


def bootstrap(start_dir: Path | None = None) -> ServiceContainer:
    """
    Bootstrap the relay application.

    Initializes the DI container with:
    - Core services (presenter, logger)
    - Built-in builders (relay:dev-server, relay:e2e)

    Args:
        start_dir: Directory config lookup starts from (defaults to cwd)

    Returns:
        Initialized ServiceContainer
    """
    global _initialized

    container = get_container()

    if _initialized:
        return container

    _register_core_services(container, start_dir)

    from ..builders import register_builtin_builders

    register_builtin_builders(container)

    _initialized = True
    return container


def _register_core_services(container: ServiceContainer, start_dir: Path | None) -> None:
    """Register core application services."""
    from ..presenters.console import ConsolePresenter
    from ..services.logging import RelayLogger
    from .settings import load_settings

    container.register_singleton(IPresenter, implementation=ConsolePresenter())  # type: ignore[type-abstract]

    def create_logger() -> ILogger:
        settings = load_settings(start_dir=str(start_dir) if start_dir else None)
        return RelayLogger.from_config(settings.logging)

    container.register_singleton(ILogger, factory=create_logger)  # type: ignore[type-abstract]


def reset() -> None:
    """
    Reset the application state.

    Useful for testing to ensure clean state between tests.
    """
    global _initialized
    ServiceContainer.reset()
    _initialized = False


def is_initialized() -> bool:
    """Check if the application has been bootstrapped."""
    return _initialized
