"""Presenters for user-facing output."""

from .console import ConsolePresenter, format_size

__all__ = ["ConsolePresenter", "format_size"]
