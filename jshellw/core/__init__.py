"""
Core infrastructure for jshellw.

This module provides:
- ServiceContainer: DI container using dependency-injector
- Application bootstrap for initialization
- Settings loading
- Custom exception hierarchy
"""

from .bootstrap import bootstrap, is_initialized, reset
from .container import ServiceContainer, get_container, resolve, try_resolve
from .exceptions import (
    CleanupFailedError,
    CleanupGuardError,
    ConfigFileError,
    ExtractionFailedError,
    InvalidInputError,
    JShellwException,
    LaunchFailedError,
    SessionTerminatedError,
)
from .settings import JShellwSettings, load_settings

__all__ = [
    "CleanupFailedError",
    "CleanupGuardError",
    "ConfigFileError",
    "ExtractionFailedError",
    "InvalidInputError",
    "JShellwException",
    "JShellwSettings",
    "LaunchFailedError",
    "ServiceContainer",
    "SessionTerminatedError",
    "bootstrap",
    "get_container",
    "is_initialized",
    "load_settings",
    "reset",
    "resolve",
    "try_resolve",
]
