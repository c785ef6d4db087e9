"""
Pydantic Settings for jshellw configuration.

Provides settings loading from TOML files, environment variables, and defaults.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

try:
    import tomllib
except ImportError:
    import tomli as tomllib

from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from .exceptions import ConfigFileError
from .models.config import (
    ClasspathConfig,
    ExtractionConfig,
    LoggingConfig,
    OutputConfig,
    ShellConfig,
)

CONFIG_FILE_NAME = "jshellw.toml"


def _get_logger():
    from ..services.logging import NullLogger
    from .di import resolve_or_default
    from .interfaces.logger import ILogger

    return resolve_or_default(ILogger, NullLogger)


def find_config_file(start_dir: str | None = None) -> Path | None:
    """
    Find jshellw.toml by walking up from start_dir (or cwd).

    Returns:
        Path to config file, or None if not found.
    """
    start = Path(start_dir) if start_dir else Path.cwd()

    for parent in [start, *list(start.parents)]:
        config_path = parent / CONFIG_FILE_NAME
        if config_path.exists():
            return config_path

        # Also check for pyproject.toml with [tool.jshellw] section
        pyproject = parent / "pyproject.toml"
        if pyproject.exists():
            try:
                with open(pyproject, "rb") as f:
                    data = tomllib.load(f)
                if "tool" in data and "jshellw" in data["tool"]:
                    return pyproject
            except tomllib.TOMLDecodeError as e:
                _get_logger().debug("Failed to parse pyproject.toml at %s: %s", pyproject, e)
            except OSError as e:
                _get_logger().debug("Failed to read pyproject.toml at %s: %s", pyproject, e)

    return None


class TomlConfigSource(PydanticBaseSettingsSource):
    """Custom settings source that loads from TOML config files."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        config_path: Path | None = None,
        start_dir: str | None = None,
    ):
        super().__init__(settings_cls)
        self._config_path = config_path
        self._start_dir = start_dir
        self._data: dict[str, Any] | None = None
        self.config_file: str | None = None
        self.config_error: str | None = None

    def _load_toml(self) -> dict[str, Any]:
        """Load and cache TOML data."""
        if self._data is not None:
            return self._data

        self._data = {}

        path = self._config_path
        if path is None:
            path = find_config_file(self._start_dir)

        if path is None:
            return self._data

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)

            if path.name == "pyproject.toml":
                data = data.get("tool", {}).get("jshellw", {})

            self._data = data
            self.config_file = str(path)

        except tomllib.TOMLDecodeError as e:
            _get_logger().warning("Failed to parse config file %s: %s", path, e)
            self.config_error = f"Failed to parse config file {path}: {e}"
        except OSError as e:
            _get_logger().warning("Failed to read config file %s: %s", path, e)
            self.config_error = f"Failed to read config file {path}: {e}"

        return self._data

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Get field value from TOML data."""
        data = self._load_toml()
        field_value = data.get(field_name)
        return field_value, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return all TOML data for settings initialization."""
        return self._load_toml()


class JShellwSettings(BaseSettings):
    """jshellw configuration settings with TOML and environment variable support.

    Priority (highest to lowest):
    1. Explicit init values
    2. Environment variables (JSHELLW_<section>__<field>)
    3. TOML config file (jshellw.toml or pyproject.toml [tool.jshellw])
    4. Model defaults
    """

    model_config = {
        "env_prefix": "JSHELLW_",
        "env_nested_delimiter": "__",
        "extra": "ignore",
    }

    output: OutputConfig = OutputConfig()
    logging: LoggingConfig = LoggingConfig()
    extraction: ExtractionConfig = ExtractionConfig()
    classpath: ClasspathConfig = ClasspathConfig()
    shell: ShellConfig = ShellConfig()

    # Internal fields (not from config)
    _config_file: str | None = None
    _config_error: str | None = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to add TOML loading.

        Note: settings_customise_sources is a classmethod, so the config
        path for the current load is passed through a module-level variable.
        """
        toml_source = _current_toml_source or TomlConfigSource(settings_cls)
        return (
            init_settings,
            env_settings,
            toml_source,
        )

    @property
    def config_file(self) -> str | None:
        """Path of the TOML file the settings were read from, if any."""
        return self._config_file

    @property
    def config_error(self) -> str | None:
        """Problem encountered reading the TOML file, if any."""
        return self._config_error

    def to_dict(self) -> dict[str, Any]:
        """Convert settings to a plain nested dict."""
        result: dict[str, Any] = {
            "output": self.output.model_dump(),
            "logging": self.logging.model_dump(),
            "extraction": self.extraction.model_dump(),
            "classpath": self.classpath.model_dump(),
            "shell": self.shell.model_dump(),
        }
        if self._config_file:
            result["_config_file"] = self._config_file
        if self._config_error:
            result["_config_error"] = self._config_error
        return result


# Module-level variable for passing to settings_customise_sources
_current_toml_source: TomlConfigSource | None = None


def load_settings(
    config_path: Path | None = None,
    start_dir: str | None = None,
    **overrides: Any,
) -> JShellwSettings:
    """Load jshellw settings from config file and environment.

    Args:
        config_path: Explicit path to config file
        start_dir: Directory to start searching from (if config_path not given)
        **overrides: Explicit section values taking precedence over all sources

    Returns:
        JShellwSettings instance with all sources merged

    Raises:
        ConfigFileError: If an explicit config file is unusable or a value is invalid
    """
    global _current_toml_source

    if config_path is not None and not config_path.is_file():
        raise ConfigFileError("Config file not found", file_path=str(config_path))

    toml_source = TomlConfigSource(JShellwSettings, config_path, start_dir)
    _current_toml_source = toml_source

    try:
        try:
            settings = JShellwSettings(**overrides)
        except ValidationError as e:
            raise ConfigFileError(
                f"Invalid configuration: {e}",
                file_path=toml_source.config_file,
                cause=e,
            ) from e
        settings._config_file = toml_source.config_file
        settings._config_error = toml_source.config_error
        # An explicitly requested file must be usable; a discovered one is best-effort
        if config_path is not None and settings._config_error:
            raise ConfigFileError(settings._config_error, file_path=str(config_path))
        return settings
    finally:
        _current_toml_source = None
