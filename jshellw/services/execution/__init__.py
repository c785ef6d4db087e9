"""Execution services for launching the interactive shell."""

from .shell import FEEDBACK_MODE, ShellSession, shell_exit_status
from .signal_handler import ProcessSignalHandler, termination_signals

__all__ = [
    "FEEDBACK_MODE",
    "ProcessSignalHandler",
    "ShellSession",
    "shell_exit_status",
    "termination_signals",
]
