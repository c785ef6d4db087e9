"""
Adapter service: the extract -> compose -> launch pipeline.

Usage:
    service = AdapterService.from_settings(load_settings())
    result = service.run("app.jar")
"""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from ..core.interfaces.logger import ILogger
from ..core.models.config import ClasspathStrategy
from ..core.models.host import PlatformSnapshot
from ..core.models.run import ClasspathExpression, ExtractedLayout, SessionResult
from ..core.settings import JShellwSettings
from .cleanup.guard import CleanupGuard
from .execution.shell import ShellSession
from .execution.signal_handler import ProcessSignalHandler
from .extraction.classpath import ClasspathComposer
from .extraction.extractor import ArchiveExtractor


@dataclass
class AdapterRun:
    """Everything one run produced, kept for reporting and tests."""

    archive_path: Path
    layout: ExtractedLayout | None = None
    classpath: ClasspathExpression | None = None
    result: SessionResult | None = None
    guard: CleanupGuard | None = None


class AdapterService:
    """
    Sequences extraction, classpath composition and the shell session.

    The extraction root lives inside a CleanupGuard scope, and termination
    signals are turned into exceptions for the whole run, so the root is
    removed exactly once whether the shell exits, a stage fails, or the
    run is killed. Signals arriving while the root is being deleted are
    held until the deletion finishes.
    """

    def __init__(
        self,
        extractor: ArchiveExtractor,
        composer: ClasspathComposer,
        session: ShellSession,
        guard_factory: Callable[[], CleanupGuard] = CleanupGuard,
        signal_handler_factory: Callable[[], ProcessSignalHandler] | None = None,
        logger: ILogger | None = None,
    ) -> None:
        self._extractor = extractor
        self._composer = composer
        self._session = session
        self._guard_factory = guard_factory
        self._signal_handler_factory = signal_handler_factory or (
            lambda: ProcessSignalHandler(handle_interrupts=False)
        )
        self._logger = logger
        self.last_run: AdapterRun | None = None

    @classmethod
    def from_settings(
        cls,
        settings: JShellwSettings,
        platform: PlatformSnapshot | None = None,
    ) -> AdapterService:
        """Wire the pipeline from loaded settings."""
        platform = platform or PlatformSnapshot.detect(
            java_home=settings.shell.java_home,
            temp_dir=settings.extraction.temp_dir,
        )
        return cls(
            extractor=ArchiveExtractor(
                accepted_prefixes=settings.extraction.accepted_prefixes,
                temp_prefix=settings.extraction.temp_prefix,
                temp_dir=platform.temp_dir,
            ),
            composer=ClasspathComposer(platform, strategy=settings.classpath.strategy),
            session=ShellSession(platform, terminate_timeout=settings.shell.terminate_timeout),
        )

    @property
    def logger(self) -> ILogger:
        """Get logger, resolving from container or creating NullLogger."""
        if self._logger is None:
            from ..core.di import resolve_or_default
            from .logging import NullLogger

            self._logger = resolve_or_default(ILogger, NullLogger)  # type: ignore[type-abstract]
        return self._logger

    def run(
        self,
        archive_path: str | os.PathLike[str],
        strategy: ClasspathStrategy | None = None,
    ) -> SessionResult:
        """
        Run the shell against an archive's classpath.

        Args:
            archive_path: Path to the layered archive
            strategy: Classpath strategy override

        Returns:
            SessionResult of the shell

        Raises:
            InvalidInputError: Archive unreadable; nothing was created
            ExtractionFailedError: Extraction failed; the temp directory was removed
            LaunchFailedError: Shell could not start; the temp directory was removed
            SessionTerminatedError: Terminated by signal; the temp directory was removed
        """
        source = self._extractor.validate(archive_path)
        run = AdapterRun(archive_path=source)
        self.last_run = run

        signal_handler = self._signal_handler_factory()
        signal_handler.install()
        try:
            with self._guard_factory() as guard:
                run.guard = guard
                guard.shield = signal_handler.deferred
                run.layout = self._extractor.extract(source, guard)
                run.classpath = self._composer.compose(run.layout.layout_root, strategy)
                run.result = self._session.launch(run.classpath)
        finally:
            signal_handler.restore()
            # A signal raised on the way into the guard's exit skips its cleanup
            if run.guard is not None and not run.guard.is_cleaned:
                run.guard.cleanup()

        self.logger.debug("Run finished: exit_code=%d", run.result.exit_code)
        return run.result
