"""
Classpath composer service.

Turns an extracted layout (classes/ and lib/ under the layout root) into
the classpath string handed to the shell.
"""

from __future__ import annotations

import os
from pathlib import Path

from ...core.interfaces.logger import ILogger
from ...core.interfaces.presenter import IPresenter
from ...core.models.config import ClasspathStrategy
from ...core.models.host import PlatformSnapshot
from ...core.models.run import WILDCARD_TOKEN, ClasspathExpression

CLASSES_DIR_NAME = "classes"
LIB_DIR_NAME = "lib"


class ClasspathComposer:
    """
    Composes a classpath expression from an extracted layout.

    Composition is purely structural: nothing under lib/ is opened or
    checked, and a missing classes/ directory is still listed first.
    """

    def __init__(
        self,
        platform: PlatformSnapshot,
        strategy: ClasspathStrategy = "enumerated",
        logger: ILogger | None = None,
        presenter: IPresenter | None = None,
    ) -> None:
        """
        Initialize composer.

        Args:
            platform: Host conventions (entry and directory separators)
            strategy: 'enumerated' lists each library file,
                'wildcard' lets the shell expand lib/*
            logger: Logger for internal diagnostics
            presenter: Presenter for user-visible progress
        """
        self._platform = platform
        self._strategy = strategy
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

    def compose(
        self,
        layout_root: str | os.PathLike[str],
        strategy: ClasspathStrategy | None = None,
    ) -> ClasspathExpression:
        """
        Build the classpath for a layout root.

        Args:
            layout_root: Directory holding classes/ and lib/
            strategy: Override for the composer's default strategy

        Returns:
            ClasspathExpression with the classes directory first
        """
        strategy = strategy or self._strategy
        sep = self._platform.path_separator
        root = os.path.abspath(os.fspath(layout_root))

        classes_path = self._child(root, CLASSES_DIR_NAME)
        lib_path = self._child(root, LIB_DIR_NAME)

        if strategy == "wildcard":
            libraries = [self._child(lib_path, WILDCARD_TOKEN)]
        elif strategy == "enumerated":
            libraries = self._list_libraries(lib_path)
        else:
            raise ValueError(f"Unknown classpath strategy: {strategy!r}")

        entries = [classes_path, *libraries]
        value = sep.join(entries)

        self.logger.debug("Composed %s classpath with %d entries", strategy, len(entries))
        if self.presenter:
            self.presenter.print(
                f"JShell --class-path option composed: {len(value)} bytes, "
                f"{len(entries)} entries, '{sep}'-separated"
            )

        return ClasspathExpression(
            value=value,
            separator=sep,
            strategy=strategy,
            entries=entries,
        )

    def _child(self, parent: str, name: str) -> str:
        return parent.rstrip(self._platform.dir_separator) + self._platform.dir_separator + name

    def _list_libraries(self, lib_path: str) -> list[str]:
        """Immediate non-directory entries of lib/, in listing order."""
        if not Path(lib_path).is_dir():
            self.logger.debug("No library directory at %s", lib_path)
            return []

        libraries = []
        with os.scandir(lib_path) as it:
            for entry in it:
                if entry.is_dir():
                    continue
                libraries.append(self._child(lib_path, entry.name))
        return libraries
