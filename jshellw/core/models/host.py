"""
Platform snapshot model.

Captures every host-specific value the pipeline depends on in one
immutable object so composition and launch never query the host ad hoc.
"""

from __future__ import annotations

import os
import shutil
import sys
import tempfile
from pathlib import Path

from pydantic import Field

from .base import ImmutableModel


class PlatformSnapshot(ImmutableModel):
    """Host platform conventions and runtime location."""

    path_separator: str = Field(min_length=1, max_length=1)
    dir_separator: str = Field(min_length=1, max_length=1)
    is_windows: bool
    java_home: str | None = None
    temp_dir: str

    @property
    def shell_executable_name(self) -> str:
        """Platform-appropriate name of the interactive shell binary."""
        return "jshell.exe" if self.is_windows else "jshell"

    @classmethod
    def detect(cls, java_home: str | None = None, temp_dir: str | None = None) -> PlatformSnapshot:
        """Capture the current host's conventions.

        Args:
            java_home: Explicit runtime home; resolved from the environment if omitted
            temp_dir: Explicit temp area; defaults to the host's standard one

        Returns:
            PlatformSnapshot for this process
        """
        return cls(
            path_separator=os.pathsep,
            dir_separator=os.sep,
            is_windows=sys.platform.startswith("win"),
            java_home=java_home or find_java_home(),
            temp_dir=temp_dir or tempfile.gettempdir(),
        )


def find_java_home() -> str | None:
    """
    Locate the Java runtime installation root.

    Searches in:
    1. JAVA_HOME environment variable
    2. The real location of `java` on PATH (its bin/ directory's parent)

    Returns:
        Runtime home directory, or None if not found
    """
    env_home = os.environ.get("JAVA_HOME")
    if env_home:
        return env_home

    java = shutil.which("java")
    if java:
        return str(Path(java).resolve().parent.parent)

    return None
