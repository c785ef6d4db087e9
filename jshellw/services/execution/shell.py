"""
Shell session service.

Handles interactive shell discovery and launching the shell with the
composed classpath and the parent's terminal.
"""

from __future__ import annotations

import os
import subprocess
import time
from collections.abc import Callable
from pathlib import Path

from ...core.exceptions import LaunchFailedError, SessionTerminatedError
from ...core.interfaces.logger import ILogger
from ...core.interfaces.presenter import IPresenter
from ...core.models.host import PlatformSnapshot
from ...core.models.run import ClasspathExpression, SessionResult
from .signal_handler import ProcessSignalHandler

FEEDBACK_MODE = "verbose"


def shell_exit_status(returncode: int) -> int:
    """
    Turn a Popen return code into a process exit status.

    A child killed by signal N reports -N; shells report that as 128 + N,
    which is what the wrapper passes on.
    """
    if returncode < 0:
        return 128 - returncode
    return returncode


class ShellSession:
    """
    Launches JShell against a classpath and waits for it to exit.

    The shell inherits stdin, stdout and stderr so it behaves exactly as if
    the user had started it directly.
    """

    def __init__(
        self,
        platform: PlatformSnapshot,
        terminate_timeout: float = 5.0,
        signal_handler_factory: Callable[[], ProcessSignalHandler] | None = None,
        logger: ILogger | None = None,
        presenter: IPresenter | None = None,
    ) -> None:
        """
        Initialize shell session.

        Args:
            platform: Host conventions and runtime home
            terminate_timeout: Seconds to wait after terminating the shell before killing it
            signal_handler_factory: Creates the handler installed around the wait
            logger: Logger for internal diagnostics
            presenter: Presenter for user-visible progress
        """
        self._platform = platform
        self._terminate_timeout = terminate_timeout
        self._signal_handler_factory = signal_handler_factory or ProcessSignalHandler
        self._logger = logger
        self._presenter = presenter

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

    def resolve_executable(self) -> Path:
        """
        Locate the shell binary in the runtime's bin/ directory.

        Returns:
            Absolute path to the executable

        Raises:
            LaunchFailedError: If the runtime home is unknown or the binary
                is missing or not executable
        """
        java_home = self._platform.java_home
        if not java_home:
            raise LaunchFailedError(
                "Java runtime home not found. Set JAVA_HOME or pass --java-home."
            )

        executable = (Path(java_home) / "bin" / self._platform.shell_executable_name).absolute()
        self.logger.debug("Checking shell executable: %s", executable)

        if not executable.is_file():
            raise LaunchFailedError(
                f"JShell executable not found at '{executable}'.",
                executable=str(executable),
            )
        if not self._platform.is_windows and not os.access(executable, os.X_OK):
            raise LaunchFailedError(
                f"JShell executable at '{executable}' is not executable.",
                executable=str(executable),
            )
        return executable

    def build_command(self, classpath: ClasspathExpression, executable: Path | None = None) -> list[str]:
        """Build the fixed shell invocation."""
        executable = executable or self.resolve_executable()
        return [
            str(executable),
            "--feedback",
            FEEDBACK_MODE,
            "--class-path",
            classpath.value,
        ]

    def launch(self, classpath: ClasspathExpression) -> SessionResult:
        """
        Run the shell and block until it exits.

        Args:
            classpath: Composed classpath for --class-path

        Returns:
            SessionResult carrying the shell's exit status (128 + N if killed by signal N)

        Raises:
            LaunchFailedError: If the shell cannot be found or spawned
            SessionTerminatedError: If a termination signal arrived during the wait
        """
        executable = self.resolve_executable()
        command = self.build_command(classpath, executable)
        self.logger.debug("Shell command: %s", command)

        if self.presenter:
            self.presenter.print(f"Starting JShell with '{executable}'...")

        start_time = time.time()
        signal_handler = self._signal_handler_factory()
        signal_handler.install()
        proc: subprocess.Popen | None = None
        try:
            with signal_handler.deferred():
                try:
                    proc = subprocess.Popen(command)
                except OSError as e:
                    raise LaunchFailedError(
                        f"Failed to start JShell at '{executable}': {e}",
                        executable=str(executable),
                        cause=e,
                    ) from e
            self.logger.debug("Process started: pid=%d", proc.pid)
            returncode = proc.wait()
        except (SessionTerminatedError, KeyboardInterrupt):
            if proc is not None:
                self.logger.debug("Wait interrupted, stopping shell pid=%d", proc.pid)
                self._stop(proc)
            raise
        finally:
            signal_handler.restore()

        duration = time.time() - start_time
        exit_code = shell_exit_status(returncode)
        self.logger.debug(
            "Process exited: returncode=%d, exit_code=%d, duration=%.2fs", returncode, exit_code, duration
        )
        if self.presenter:
            self.presenter.print(f"JShell exited with code {exit_code}.")

        return SessionResult(
            exit_code=exit_code,
            duration=duration,
            command=command,
            interrupt_count=signal_handler.get_interrupt_count(),
        )

    def _stop(self, proc: subprocess.Popen) -> None:
        """Terminate the shell, killing it if it does not exit in time."""
        if proc.poll() is not None:
            return
        proc.terminate()
        try:
            proc.wait(timeout=self._terminate_timeout)
        except subprocess.TimeoutExpired:
            self.logger.warning(
                "JShell did not stop within %ss; killing pid %d", self._terminate_timeout, proc.pid
            )
            proc.kill()
            proc.wait()
