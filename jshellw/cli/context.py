"""
Click context extension for the jshellw CLI.

Provides JShellwContext dataclass holding the settings and host snapshot
for one invocation.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..core.models.host import PlatformSnapshot
from ..core.settings import JShellwSettings, load_settings


@dataclass
class JShellwContext:
    """Everything a run needs from its environment.

    Attributes:
        settings: Merged configuration (options, env, TOML, defaults)
        platform: Host conventions and runtime home
        cwd: Current working directory
        is_interactive: Whether stdin is a TTY
    """

    settings: JShellwSettings
    platform: PlatformSnapshot
    cwd: Path
    is_interactive: bool

    @classmethod
    def create(
        cls,
        cwd: Path | None = None,
        config_path: Path | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> JShellwContext:
        """Create a JShellwContext for the current environment.

        Args:
            cwd: Working directory override (defaults to Path.cwd())
            config_path: Explicit TOML config file
            overrides: Section values from command-line options

        Returns:
            Configured JShellwContext instance

        Raises:
            ConfigFileError: If an explicit config file cannot be used
        """
        if cwd is None:
            cwd = Path.cwd()

        settings = load_settings(config_path=config_path, start_dir=str(cwd), **(overrides or {}))
        platform = PlatformSnapshot.detect(
            java_home=settings.shell.java_home,
            temp_dir=settings.extraction.temp_dir,
        )

        return cls(
            settings=settings,
            platform=platform,
            cwd=cwd,
            is_interactive=sys.stdin.isatty(),
        )
