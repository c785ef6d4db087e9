"""
Configuration models.

Provides Pydantic models for jshellw configuration with validation.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import ConfigDict, Field, field_validator

from .base import JShellwBaseModel

# Type aliases
LogLevel = Literal["debug", "info", "warning", "error"]
ClasspathStrategy = Literal["enumerated", "wildcard"]

DEFAULT_ACCEPTED_PREFIXES = ["BOOT-INF/", "WEB-INF/"]


class ConfigBaseModel(JShellwBaseModel):
    """Base model for config sections with relaxed strict mode for TOML loading."""

    model_config = ConfigDict(
        strict=False,  # Allow coercion from TOML types
        validate_assignment=True,
        extra="ignore",  # Ignore unknown fields in config files
        populate_by_name=True,
        use_enum_values=True,
        revalidate_instances="never",
    )


class OutputConfig(ConfigBaseModel):
    """Output configuration section."""

    quiet: bool = False


class LoggingConfig(ConfigBaseModel):
    """Logging configuration section."""

    level: LogLevel = "warning"
    console: bool = True
    file: bool = False
    log_file: str | None = None


class ExtractionConfig(ConfigBaseModel):
    """Archive extraction configuration section."""

    accepted_prefixes: Annotated[list[str], Field(min_length=1)] = Field(
        default_factory=lambda: list(DEFAULT_ACCEPTED_PREFIXES)
    )
    temp_prefix: Annotated[str, Field(min_length=1)] = "jshellw-"
    temp_dir: str | None = None

    @field_validator("accepted_prefixes")
    @classmethod
    def validate_prefixes(cls, v: list[str]) -> list[str]:
        """Prefixes name top-level directories, so each must end with '/'."""
        for prefix in v:
            if not prefix.endswith("/") or prefix.startswith("/") or ".." in prefix.split("/"):
                raise ValueError(f"Invalid accepted prefix: {prefix!r}")
        return v


class ClasspathConfig(ConfigBaseModel):
    """Classpath composition configuration section."""

    strategy: ClasspathStrategy = "enumerated"


class ShellConfig(ConfigBaseModel):
    """Shell launch configuration section."""

    java_home: str | None = None
    terminate_timeout: Annotated[float, Field(gt=0)] = 5.0

    @field_validator("java_home", mode="before")
    @classmethod
    def empty_to_none(cls, v: str | None) -> str | None:
        """Treat an empty java_home as unset."""
        if v == "":
            return None
        return v
