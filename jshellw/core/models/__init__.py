"""
Pydantic models for jshellw.

All models use Pydantic v2 with strict validation, except config sections
which relax strictness so TOML and environment values coerce.
"""

from .base import ImmutableModel, JShellwBaseModel
from .config import (
    ClasspathConfig,
    ClasspathStrategy,
    ExtractionConfig,
    LoggingConfig,
    LogLevel,
    OutputConfig,
    ShellConfig,
)
from .host import PlatformSnapshot, find_java_home
from .run import WILDCARD_TOKEN, ClasspathExpression, ExtractedLayout, SessionResult

__all__ = [
    "WILDCARD_TOKEN",
    "ClasspathConfig",
    "ClasspathExpression",
    "ClasspathStrategy",
    "ExtractedLayout",
    "ExtractionConfig",
    "ImmutableModel",
    "JShellwBaseModel",
    "LogLevel",
    "LoggingConfig",
    "OutputConfig",
    "PlatformSnapshot",
    "SessionResult",
    "ShellConfig",
    "find_java_home",
]
