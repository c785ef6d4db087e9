"""
Application bootstrap for jshellw.

Initializes the DI container with the logger and presenter.
This module should be called once at application startup.
"""

from .container import ServiceContainer, get_container
from .interfaces.logger import ILogger
from .interfaces.presenter import IPresenter
from .settings import JShellwSettings

_initialized = False


def bootstrap(settings: JShellwSettings) -> ServiceContainer:
    """
    Bootstrap the jshellw application.

    Args:
        settings: Loaded settings (logging and output sections are used)

    Returns:
        Initialized ServiceContainer
    """
    global _initialized

    container = get_container()

    if _initialized:
        return container

    _register_core_services(container, settings)

    _initialized = True
    return container


def _register_core_services(container: ServiceContainer, settings: JShellwSettings) -> None:
    """Register core application services."""
    from ..presenters.console import ConsolePresenter
    from ..services.logging import JShellwLogger

    quiet = settings.output.quiet
    container.register_singleton(IPresenter, implementation=ConsolePresenter(quiet=quiet))  # type: ignore[type-abstract]

    def create_logger() -> ILogger:
        return JShellwLogger.from_config(settings.logging)

    container.register_singleton(ILogger, factory=create_logger)  # type: ignore[type-abstract]


def is_initialized() -> bool:
    """Check if bootstrap has run."""
    return _initialized


def reset() -> None:
    """Reset bootstrap state and the container (for testing)."""
    global _initialized
    _initialized = False
    ServiceContainer.reset()
