"""
Diagnostic logger interface.

Extraction counts, shell commands and signal handling details go here.
What the user should always see (progress lines, errors, warnings) goes
through IPresenter instead.
"""

from abc import ABC, abstractmethod
from typing import Any


class ILogger(ABC):
    """Printf-style diagnostic sink, silent unless the level allows it."""

    @abstractmethod
    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    @abstractmethod
    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    @abstractmethod
    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    @abstractmethod
    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    @abstractmethod
    def set_level(self, level: str) -> None:
        """Change the threshold: 'debug', 'info', 'warning' or 'error'."""
