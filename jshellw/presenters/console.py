"""
Console presenter for terminal output.

Progress goes to stdout, problems to stderr.
"""

import sys

from ..core.interfaces.presenter import IPresenter


class ConsolePresenter(IPresenter):
    """
    Console output presenter.

    Formats output for human-readable terminal display.
    """

    def __init__(self, use_color: bool = True, quiet: bool = False, file=None, err_file=None) -> None:
        """
        Initialize console presenter.

        Args:
            use_color: Whether to use ANSI color codes
            quiet: Suppress progress messages (errors and warnings still print)
            file: Output file (defaults to sys.stdout)
            err_file: Error output file (defaults to sys.stderr)
        """
        self._file = file or sys.stdout
        self._err_file = err_file or sys.stderr
        self._use_color = use_color and self._err_file.isatty()
        self._quiet = quiet

    def print(self, message: str) -> None:
        """Print a progress message to output."""
        if self._quiet:
            return
        print(message, file=self._file, flush=True)

    def print_error(self, message: str) -> None:
        """Print an error message to stderr."""
        if self._use_color:
            print(f"\033[91mError: {message}\033[0m", file=self._err_file, flush=True)
        else:
            print(f"Error: {message}", file=self._err_file, flush=True)

    def print_warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if self._use_color:
            print(f"\033[93mWarning: {message}\033[0m", file=self._err_file, flush=True)
        else:
            print(f"Warning: {message}", file=self._err_file, flush=True)


def format_size(size_bytes: int | None) -> str:
    """Format byte size as human-readable string."""
    if size_bytes is None:
        return "?"

    if size_bytes < 1024:
        return f"{size_bytes}B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f}KB"
    elif size_bytes < 1024 * 1024 * 1024:
        return f"{size_bytes / (1024 * 1024):.1f}MB"
    else:
        return f"{size_bytes / (1024 * 1024 * 1024):.1f}GB"
