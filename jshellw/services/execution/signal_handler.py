"""
Signal handler service for interrupt handling while the shell runs.

Replaces the global shutdown hook with encapsulated instance state that
is installed around one wait and restored afterwards.
"""

import signal
import sys
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from ...core.exceptions import SessionTerminatedError
from ...core.interfaces.logger import ILogger


def termination_signals() -> list[int]:
    """Signals that end the run on this platform."""
    names = ["SIGTERM", "SIGHUP"] if not sys.platform.startswith("win") else ["SIGTERM", "SIGBREAK"]
    return [getattr(signal, name) for name in names if hasattr(signal, name)]


class ProcessSignalHandler:
    """
    Manages signal handling for the interactive shell's lifetime.

    SIGINT reaches the foreground shell too, which uses it to cancel the
    current evaluation, so it is only counted here. Termination signals
    raise SessionTerminatedError into the waiting main thread, which lets
    the surrounding cleanup scope run. Inside deferred() they are only
    recorded, and the first one is raised when that block ends.
    """

    def __init__(
        self,
        on_terminate: Callable[[int], None] | None = None,
        handle_interrupts: bool = True,
        logger: ILogger | None = None,
    ) -> None:
        """
        Initialize signal handler.

        Args:
            on_terminate: Callback invoked with the signal number before raising
            handle_interrupts: Count SIGINT instead of letting it raise KeyboardInterrupt
            logger: Logger for internal diagnostics
        """
        self._interrupt_count = 0
        self._terminated_by: int | None = None
        self._deferring = False
        self._pending: int | None = None
        self._on_terminate = on_terminate
        self._handle_interrupts = handle_interrupts
        self._original_handlers: dict[int, object] = {}
        self._logger = logger

    @property
    def logger(self) -> ILogger:
        """Get logger, resolving from container or creating NullLogger."""
        if self._logger is None:
            from ...core.di import resolve_or_default
            from ..logging import NullLogger

            self._logger = resolve_or_default(ILogger, NullLogger)  # type: ignore[type-abstract]
        return self._logger

    def install(self) -> None:
        """Install signal handlers."""
        if threading.current_thread() is not threading.main_thread():
            self.logger.debug("Not on the main thread, signal handlers not installed")
            return
        self.logger.debug("Installing signal handlers (interrupts=%s)", self._handle_interrupts)
        if self._handle_interrupts:
            self._original_handlers[signal.SIGINT] = signal.signal(
                signal.SIGINT, self._handle_interrupt
            )
        for signum in termination_signals():
            self._original_handlers[signum] = signal.signal(signum, self._handle_termination)

    def restore(self) -> None:
        """Restore original signal handlers."""
        if self._original_handlers:
            self.logger.debug("Restoring original signal handlers")
        for signum, handler in self._original_handlers.items():
            signal.signal(signum, handler)  # type: ignore[arg-type]
        self._original_handlers = {}

    def is_interrupted(self) -> bool:
        """Check if SIGINT arrived while installed."""
        return self._interrupt_count > 0

    def get_interrupt_count(self) -> int:
        """Get number of times interrupted."""
        return self._interrupt_count

    @property
    def terminated_by(self) -> int | None:
        """Signal number that requested termination, if any."""
        return self._terminated_by

    @contextmanager
    def deferred(self) -> Iterator[None]:
        """
        Hold back termination signals for the duration of the block.

        Used around work that must not be cut short, such as deleting the
        extraction root or binding a freshly spawned child. A signal that
        arrived meanwhile is raised as SessionTerminatedError on a normal
        exit from the block.
        """
        if self._deferring:
            yield
            return
        self._deferring = True
        try:
            yield
        finally:
            self._deferring = False
        if self._pending is not None:
            signum, self._pending = self._pending, None
            raise SessionTerminatedError(signum)

    def __enter__(self) -> "ProcessSignalHandler":
        self.install()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.restore()
        return False

    def _handle_interrupt(self, signum: int, frame) -> None:
        """Handle SIGINT signal."""
        self._interrupt_count += 1
        self.logger.debug("SIGINT received: interrupt_count=%d", self._interrupt_count)

    def _handle_termination(self, signum: int, frame) -> None:
        """Handle a termination signal."""
        self.logger.debug("Termination signal received: %d", signum)
        if self._terminated_by is not None:
            return
        self._terminated_by = signum
        if self._on_terminate:
            self._on_terminate(signum)
        if self._deferring:
            self.logger.debug("Termination deferred until the current block ends")
            self._pending = signum
            return
        raise SessionTerminatedError(signum)
