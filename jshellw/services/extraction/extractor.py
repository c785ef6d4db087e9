"""
Archive extractor service.

Streams a zip-compatible archive and materializes the entries under the
accepted prefixes into a fresh temporary directory.
"""

from __future__ import annotations

import os
import shutil
import tempfile
import zipfile
from collections.abc import Sequence
from pathlib import Path, PurePosixPath, PureWindowsPath

from ...core.exceptions import ExtractionFailedError, InvalidInputError
from ...core.interfaces.logger import ILogger
from ...core.interfaces.presenter import IPresenter
from ...core.models.config import DEFAULT_ACCEPTED_PREFIXES
from ...core.models.run import ExtractedLayout
from ...presenters.console import format_size
from ..cleanup.guard import CleanupGuard

COPY_BUFFER_SIZE = 64 * 1024


class ArchiveExtractor:
    """
    Extracts the class-and-library subtree of a layered archive.

    The returned layout root is the directory of the first accepted prefix
    (in configured order) that was materialized. When nothing matched it
    points at the first prefix's directory, which does not exist.
    """

    def __init__(
        self,
        accepted_prefixes: Sequence[str] | None = None,
        temp_prefix: str = "jshellw-",
        temp_dir: str | None = None,
        logger: ILogger | None = None,
        presenter: IPresenter | None = None,
    ) -> None:
        """
        Initialize extractor.

        Args:
            accepted_prefixes: Top-level archive directories to extract, each ending in '/'
            temp_prefix: Name prefix for the extraction root
            temp_dir: Parent directory for the extraction root (host temp area if None)
            logger: Logger for internal diagnostics
            presenter: Presenter for user-visible progress
        """
        self._accepted_prefixes = tuple(accepted_prefixes or DEFAULT_ACCEPTED_PREFIXES)
        self._temp_prefix = temp_prefix
        self._temp_dir = temp_dir
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

    @property
    def accepted_prefixes(self) -> tuple[str, ...]:
        return self._accepted_prefixes

    def is_accepted(self, entry_name: str) -> bool:
        """Check whether an archive entry lies under an accepted prefix."""
        return entry_name.startswith(self._accepted_prefixes)

    def validate(self, archive_path: str | os.PathLike[str]) -> Path:
        """
        Check that the archive exists and is readable.

        Args:
            archive_path: Path to the archive

        Returns:
            The archive path as an absolute Path

        Raises:
            InvalidInputError: If the path is missing, not a file, or unreadable
        """
        path = Path(archive_path)
        if not path.is_file() or not os.access(path, os.R_OK):
            raise InvalidInputError(
                f"File '{archive_path}' cannot be read. Check its path and permissions.",
                archive_path=str(archive_path),
            )
        return path.absolute()

    def extract(self, archive_path: str | os.PathLike[str], guard: CleanupGuard) -> ExtractedLayout:
        """
        Extract the accepted subtree into a new temporary directory.

        The directory is registered with the guard before anything is
        written into it, so a failure at any later point still gets it
        removed.

        Args:
            archive_path: Path to the archive
            guard: Cleanup guard that takes ownership of the extraction root

        Returns:
            ExtractedLayout describing what was materialized

        Raises:
            InvalidInputError: If the archive cannot be read (nothing is created)
            ExtractionFailedError: On any I/O problem after the root exists
        """
        source = self.validate(archive_path)

        try:
            extraction_root = Path(tempfile.mkdtemp(prefix=self._temp_prefix, dir=self._temp_dir))
        except OSError as e:
            raise ExtractionFailedError(
                f"Could not create temp directory: {e}",
                archive_path=str(archive_path),
                context={"temp_dir": self._temp_dir or tempfile.gettempdir()},
                cause=e,
            ) from e
        guard.register(extraction_root)
        if self.presenter:
            prefixes = ", ".join(p.rstrip("/") for p in self._accepted_prefixes)
            self.presenter.print(
                f"Created temp directory '{extraction_root}'. Extracting {prefixes} content..."
            )

        files_written = 0
        directories_created = 0
        entries_skipped = 0
        bytes_written = 0
        entry_name: str | None = None

        try:
            with zipfile.ZipFile(source) as archive:
                for info in archive.infolist():
                    entry_name = info.filename
                    if not self.is_accepted(entry_name):
                        entries_skipped += 1
                        continue

                    target = self._target_path(extraction_root, entry_name)
                    if info.is_dir():
                        target.mkdir(parents=True, exist_ok=True)
                        directories_created += 1
                        continue

                    target.parent.mkdir(parents=True, exist_ok=True)
                    with archive.open(info) as src, open(target, "wb") as dst:
                        shutil.copyfileobj(src, dst, COPY_BUFFER_SIZE)
                    files_written += 1
                    bytes_written += info.file_size
        except ExtractionFailedError:
            raise
        except (OSError, zipfile.BadZipFile, zipfile.LargeZipFile, EOFError, RuntimeError) as e:
            # RuntimeError covers encrypted entries; EOFError truncated streams
            self.logger.debug("Extraction failed at entry %s: %s", entry_name, e)
            raise ExtractionFailedError(
                f"Failed to extract '{archive_path}': {e}",
                archive_path=str(archive_path),
                entry=entry_name,
                cause=e,
            ) from e

        prefix = self._find_layout_prefix(extraction_root)
        layout_root = self._prefix_dir(extraction_root, prefix or self._accepted_prefixes[0])

        self.logger.debug(
            "Extracted %d files, %d directories, skipped %d entries from %s",
            files_written,
            directories_created,
            entries_skipped,
            source,
        )
        if self.presenter:
            if prefix is None:
                self.presenter.print(
                    f"No {', '.join(self._accepted_prefixes)} entries found in '{archive_path}'."
                )
            else:
                self.presenter.print(
                    f"Extracted {prefix.rstrip('/')} content ({files_written} files, "
                    f"{format_size(bytes_written)}) to '{layout_root}'."
                )

        return ExtractedLayout(
            extraction_root=extraction_root,
            layout_root=layout_root,
            prefix=prefix,
            files_written=files_written,
            directories_created=directories_created,
            entries_skipped=entries_skipped,
            bytes_written=bytes_written,
        )

    def _target_path(self, extraction_root: Path, entry_name: str) -> Path:
        """Mirror an entry path under the root, refusing names that escape it."""
        parts = PurePosixPath(entry_name.replace("\\", "/")).parts
        if not parts or parts[0] == "/" or ".." in parts or PureWindowsPath(entry_name).drive:
            raise ExtractionFailedError(
                f"Unsafe archive entry path detected: {entry_name!r}",
                entry=entry_name,
            )
        return extraction_root.joinpath(*parts)

    def _find_layout_prefix(self, extraction_root: Path) -> str | None:
        for prefix in self._accepted_prefixes:
            if self._prefix_dir(extraction_root, prefix).is_dir():
                return prefix
        return None

    @staticmethod
    def _prefix_dir(extraction_root: Path, prefix: str) -> Path:
        return extraction_root.joinpath(*PurePosixPath(prefix).parts)
