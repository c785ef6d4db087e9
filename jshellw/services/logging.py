"""
Diagnostic logging for jshellw.

Progress the user is meant to see goes through the presenter; this logger
carries the internal detail (entry counts, commands, handler changes) that
is only shown at a raised --log-level or written to the log file.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, ClassVar

from ..core.interfaces.logger import ILogger
from ..core.models.config import LoggingConfig


class JShellwLogger(ILogger):
    """
    ILogger backed by a stdlib logger with its own handlers.

    The stdlib logger itself passes everything; each handler applies the
    configured level, so set_level() changes both outputs at once.
    """

    DEFAULT_LOG_FILE = Path.home() / ".jshellw" / "jshellw.log"
    MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
    BACKUP_COUNT = 3
    FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    LEVELS: ClassVar[dict[str, int]] = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warning": logging.WARNING,
        "error": logging.ERROR,
    }

    def __init__(
        self,
        name: str = "jshellw",
        level: str = "warning",
        console_enabled: bool = True,
        file_enabled: bool = False,
        log_file: Path | None = None,
    ) -> None:
        """
        Initialize logger.

        Args:
            name: Logger name
            level: Initial log level (debug, info, warning, error)
            console_enabled: Write to stderr
            file_enabled: Write to a rotating log file
            log_file: Log file location (DEFAULT_LOG_FILE if None)
        """
        self._logger = logging.getLogger(name)
        self._logger.setLevel(logging.DEBUG)
        self._logger.handlers.clear()
        self._logger.propagate = False

        self._handlers: list[logging.Handler] = []
        formatter = logging.Formatter(self.FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

        if console_enabled:
            self._add_handler(logging.StreamHandler(sys.stderr), formatter)
        if file_enabled:
            path = log_file or self.DEFAULT_LOG_FILE
            path.parent.mkdir(parents=True, exist_ok=True)
            self._add_handler(
                RotatingFileHandler(path, maxBytes=self.MAX_FILE_SIZE, backupCount=self.BACKUP_COUNT),
                formatter,
            )

        self.set_level(level)

    @classmethod
    def from_config(cls, config: LoggingConfig, name: str = "jshellw") -> "JShellwLogger":
        """Build a logger from the [logging] settings section."""
        return cls(
            name=name,
            level=config.level,
            console_enabled=config.console,
            file_enabled=config.file,
            log_file=Path(config.log_file).expanduser() if config.log_file else None,
        )

    def _add_handler(self, handler: logging.Handler, formatter: logging.Formatter) -> None:
        handler.setFormatter(formatter)
        self._logger.addHandler(handler)
        self._handlers.append(handler)

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.debug(message, *args, **kwargs)

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.info(message, *args, **kwargs)

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.warning(message, *args, **kwargs)

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.error(message, *args, **kwargs)

    def set_level(self, level: str) -> None:
        """Apply a level to every handler; unknown names mean warning."""
        lvl = self.LEVELS.get(level.lower(), logging.WARNING)
        for handler in self._handlers:
            handler.setLevel(lvl)


class NullLogger(ILogger):
    """Discards everything. Used when no logger is registered."""

    def _discard(self, *args: Any, **kwargs: Any) -> None:
        pass

    debug = info = warning = error = set_level = _discard
