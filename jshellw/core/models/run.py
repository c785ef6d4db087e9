"""
Run domain models.

Values handed from one pipeline stage to the next. All are immutable:
each stage consumes the previous stage's output and never mutates it.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

from pydantic import Field, computed_field

from .base import ImmutableModel
from .config import ClasspathStrategy

WILDCARD_TOKEN = "*"


class ExtractedLayout(ImmutableModel):
    """The subtree materialized on disk by one extraction."""

    extraction_root: Path
    layout_root: Path
    prefix: str | None = None
    files_written: Annotated[int, Field(ge=0)] = 0
    directories_created: Annotated[int, Field(ge=0)] = 0
    entries_skipped: Annotated[int, Field(ge=0)] = 0
    bytes_written: Annotated[int, Field(ge=0)] = 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_empty(self) -> bool:
        """True when no entry matched an accepted prefix."""
        return self.prefix is None


class ClasspathExpression(ImmutableModel):
    """Platform-formatted classpath handed to the shell."""

    value: Annotated[str, Field(min_length=1)]
    separator: Annotated[str, Field(min_length=1, max_length=1)]
    strategy: ClasspathStrategy
    entries: Annotated[list[str], Field(min_length=1)]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def classes_path(self) -> str:
        """The classes directory, always the first entry."""
        return self.entries[0]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def library_entries(self) -> list[str]:
        """Library paths, or the single wildcard entry."""
        return self.entries[1:]

    def segments(self) -> list[str]:
        """Split the expression back into its individual entries."""
        return self.value.split(self.separator)

    def __str__(self) -> str:
        return self.value


class SessionResult(ImmutableModel):
    """Result of one interactive shell session."""

    exit_code: int
    duration: Annotated[float, Field(ge=0)]
    command: Annotated[list[str], Field(min_length=1)]
    interrupt_count: Annotated[int, Field(ge=0)] = 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def succeeded(self) -> bool:
        """Check if the shell exited with code 0."""
        return self.exit_code == 0
