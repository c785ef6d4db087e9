"""
Presenter interface for user-facing output.

Progress messages go to stdout; errors and warnings go to stderr so they
never interleave with what the launched shell prints.
"""

from abc import ABC, abstractmethod


class IPresenter(ABC):
    """
    Interface for output presentation.
    """

    @abstractmethod
    def print(self, message: str) -> None:
        """Print a progress message."""
        pass

    @abstractmethod
    def print_error(self, message: str) -> None:
        """Print an error message."""
        pass

    @abstractmethod
    def print_warning(self, message: str) -> None:
        """Print a warning message."""
        pass
