"""
Custom exception hierarchy for jshellw.

Every failure the adapter can report maps to one exception type carrying
the exit code the CLI should terminate with.
"""

from __future__ import annotations


class JShellwException(Exception):
    """
    Base exception for all jshellw errors.

    Attributes:
        message: Human-readable error description
        context: Additional debugging context (paths, commands, etc.)
        exit_code: Exit code the CLI terminates with
        recoverable: Whether retry/recovery may be possible
    """

    exit_code: int = 1
    recoverable: bool = False

    def __init__(
        self,
        message: str,
        *,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.message = message
        self.context = context or {}
        if cause is not None:
            self.__cause__ = cause
        super().__init__(message)

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigFileError(JShellwException):
    """
    Error reading or parsing a configuration file.

    Raised for TOML parsing errors and unreadable files.
    """

    def __init__(
        self,
        message: str,
        *,
        file_path: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if file_path:
            ctx["file_path"] = file_path
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Input Errors
# =============================================================================


class InvalidInputError(JShellwException, ValueError):
    """
    The archive path is missing, not a file, or unreadable.

    Raised before any temporary directory is created.
    """

    exit_code: int = 2

    def __init__(
        self,
        message: str,
        *,
        archive_path: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if archive_path:
            ctx["archive_path"] = archive_path
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Extraction Errors
# =============================================================================


class ExtractionFailedError(JShellwException):
    """
    I/O failure while reading the archive or writing an extracted entry.

    The extraction root stays registered for cleanup.
    """

    exit_code: int = 3

    def __init__(
        self,
        message: str,
        *,
        archive_path: str | None = None,
        entry: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if archive_path:
            ctx["archive_path"] = archive_path
        if entry:
            ctx["entry"] = entry
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Execution Errors
# =============================================================================


class LaunchFailedError(JShellwException):
    """
    The shell executable is missing, not executable, or failed to spawn.
    """

    exit_code: int = 4

    def __init__(
        self,
        message: str,
        *,
        executable: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if executable:
            ctx["executable"] = executable
        super().__init__(message, context=ctx, cause=cause)


class SessionTerminatedError(JShellwException):
    """
    The run was terminated by an external signal while the shell was running.

    The exit code follows the shell convention of 128 + signal number.
    """

    def __init__(
        self,
        signum: int,
        *,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.signum = signum
        self.exit_code = 128 + signum
        ctx = context or {}
        ctx["signal"] = signum
        super().__init__("Terminated by signal", context=ctx, cause=cause)


# =============================================================================
# Cleanup Errors
# =============================================================================


class CleanupFailedError(JShellwException):
    """
    Temporary directory could not be fully removed.

    Diagnostic only: reported to the user but never raised out of the
    cleanup path and never changes the run's exit status.
    """

    recoverable: bool = True

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        failures: list[str] | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if path:
            ctx["path"] = path
        if failures:
            ctx["failures"] = failures
        super().__init__(message, context=ctx, cause=cause)
        self.failures = failures or []


class CleanupGuardError(JShellwException):
    """
    The cleanup guard was misused (second registration, nothing registered).
    """
