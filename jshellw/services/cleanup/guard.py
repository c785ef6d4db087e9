"""
Cleanup guard for the extraction root.

Owns exactly one temporary directory and removes it exactly once, whichever
trigger fires first: leaving the guarded scope (normally or by any
exception) or an explicit cleanup() call from an interrupt path.
"""

from __future__ import annotations

import os
import stat
import threading
from collections.abc import Callable
from contextlib import AbstractContextManager, nullcontext
from pathlib import Path

from ...core.exceptions import CleanupFailedError, CleanupGuardError
from ...core.interfaces.logger import ILogger
from ...core.interfaces.presenter import IPresenter


class CleanupGuard:
    """
    Scoped owner of a single temporary directory.

    Usage:
        with CleanupGuard() as guard:
            root = tempfile.mkdtemp()
            guard.register(root)
            ...  # root is removed when the block exits, however it exits
    """

    def __init__(
        self,
        logger: ILogger | None = None,
        presenter: IPresenter | None = None,
        shield: Callable[[], AbstractContextManager] | None = None,
    ) -> None:
        """
        Initialize the guard.

        Args:
            logger: Logger for internal diagnostics
            presenter: Presenter for user-visible progress and warnings
            shield: Context the whole deletion runs in, e.g. a signal
                handler's deferred() so termination cannot interrupt it
        """
        self._path: Path | None = None
        self._lock = threading.Lock()
        self._cleaned = False
        self._cleanup_count = 0
        self._last_failure: CleanupFailedError | None = None
        self._logger = logger
        self._presenter = presenter
        self.shield = shield

    @property
    def logger(self) -> ILogger:
        """Get logger, resolving from container or creating NullLogger."""
        if self._logger is None:
            from ...core.di import resolve_or_default
            from ..logging import NullLogger

            self._logger = resolve_or_default(ILogger, NullLogger)  # type: ignore[type-abstract]
        return self._logger

    @property
    def presenter(self) -> IPresenter | None:
        """Get presenter from container, if one is registered."""
        if self._presenter is None:
            from ...core.container import try_resolve

            self._presenter = try_resolve(IPresenter)  # type: ignore[type-abstract]
        return self._presenter

    @property
    def path(self) -> Path | None:
        """The registered directory, or None before registration."""
        return self._path

    @property
    def is_registered(self) -> bool:
        return self._path is not None

    @property
    def is_cleaned(self) -> bool:
        return self._cleaned

    @property
    def cleanup_count(self) -> int:
        """Number of deletions actually performed (0 or 1)."""
        return self._cleanup_count

    @property
    def last_failure(self) -> CleanupFailedError | None:
        """Diagnostic for the deletion, if it did not fully succeed."""
        return self._last_failure

    def register(self, path: str | os.PathLike[str]) -> Path:
        """
        Take ownership of a directory.

        Args:
            path: Directory to remove when the guard fires

        Returns:
            The registered path

        Raises:
            CleanupGuardError: If a path is already registered
        """
        with self._lock:
            if self._path is not None:
                raise CleanupGuardError(
                    "Cleanup guard already owns a directory",
                    context={"registered": str(self._path), "rejected": str(path)},
                )
            self._path = Path(path)
        self.logger.debug("Registered for cleanup: %s", self._path)
        return self._path

    def cleanup(self) -> bool:
        """
        Remove the registered directory tree, at most once.

        Never raises for deletion problems; they are reported as a warning
        and kept in last_failure.

        Returns:
            True if the directory is gone (or nothing was registered),
            False if deletion left something behind

        Raises:
            SessionTerminatedError: From the shield, when a termination
                signal was held back while deleting
        """
        with self.shield() if self.shield else nullcontext():
            return self._cleanup_once()

    def _cleanup_once(self) -> bool:
        with self._lock:
            if self._cleaned or self._path is None:
                return self._last_failure is None
            self._cleaned = True
            self._cleanup_count += 1
            path = self._path

        if self.presenter:
            self.presenter.print(f"Deleting temp directory '{path}'...")

        failures = delete_tree(path, self.logger)
        if failures:
            self._last_failure = CleanupFailedError(
                "Temp directory could not be fully deleted",
                path=str(path),
                failures=failures,
            )
            self.logger.debug("Cleanup failures: %s", failures)
            if self.presenter:
                self.presenter.print_warning(
                    f"Temp directory '{path}' could not be fully deleted "
                    f"({len(failures)} problem(s)): {failures[0]}"
                )
            return False

        if self.presenter:
            self.presenter.print("Temp directory deleted.")
        return True

    def __enter__(self) -> CleanupGuard:
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.cleanup()
        return False


def delete_tree(root: Path, logger: ILogger) -> list[str]:
    """
    Delete a directory tree bottom-up.

    Files are removed before their directory, and every directory only
    after all of its children, ending with root itself. Symlinks are
    removed, never followed.

    Args:
        root: Directory to delete
        logger: Logger for per-entry diagnostics

    Returns:
        Descriptions of entries that could not be removed (empty on success)
    """
    failures: list[str] = []

    if not os.path.lexists(root):
        logger.debug("Nothing to delete at %s", root)
        return failures

    def _on_walk_error(err: OSError) -> None:
        failures.append(f"{err.filename}: {err.strerror}")

    for dirpath, dirnames, filenames in os.walk(root, topdown=False, onerror=_on_walk_error):
        for name in filenames:
            _remove(os.path.join(dirpath, name), os.remove, failures, logger)
        for name in dirnames:
            full = os.path.join(dirpath, name)
            if os.path.islink(full):
                _remove(full, os.remove, failures, logger)
            else:
                _remove(full, os.rmdir, failures, logger)

    _remove(str(root), os.rmdir, failures, logger)
    return failures


def _remove(path: str, remover, failures: list[str], logger: ILogger) -> None:
    try:
        remover(path)
    except FileNotFoundError:
        pass
    except PermissionError:
        # Read-only entries (common on Windows) get one retry as writable
        try:
            os.chmod(path, stat.S_IWRITE | stat.S_IREAD | stat.S_IEXEC)
            remover(path)
        except OSError as e:
            logger.debug("Failed to delete %s: %s", path, e)
            failures.append(f"{path}: {e.strerror or e}")
    except OSError as e:
        logger.debug("Failed to delete %s: %s", path, e)
        failures.append(f"{path}: {e.strerror or e}")
