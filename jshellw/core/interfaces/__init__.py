"""Abstract interfaces shared by jshellw services."""

from .logger import ILogger
from .presenter import IPresenter

__all__ = ["ILogger", "IPresenter"]
