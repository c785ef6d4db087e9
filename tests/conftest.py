"""
Shared pytest fixtures for jshellw tests.

This module provides:
- make_archive: Builds zip archives with chosen entries
- fake_java_home: A runtime home whose bin/jshell is a recording shell script
- posix_platform: A PlatformSnapshot pointing at a private temp area
"""

import zipfile
from collections.abc import Callable
from pathlib import Path

import pytest

from jshellw.core.bootstrap import reset
from jshellw.core.models.host import PlatformSnapshot


@pytest.fixture(autouse=True)
def reset_container():
    """Give every test a fresh, un-bootstrapped service container."""
    reset()
    yield
    reset()


@pytest.fixture
def temp_area(tmp_path: Path) -> Path:
    """Private directory standing in for the host temp area."""
    area = tmp_path / "tmp"
    area.mkdir()
    return area


@pytest.fixture
def make_archive(tmp_path: Path) -> Callable[..., Path]:
    """
    Provide a helper that writes a zip archive.

    Entries map archive names to bytes; a value of None writes a
    directory entry (the name must end with '/').
    """

    def _make(entries: dict[str, bytes | None], name: str = "app.jar") -> Path:
        path = tmp_path / name
        with zipfile.ZipFile(path, "w") as zf:
            for entry_name, content in entries.items():
                if content is None:
                    zf.writestr(zipfile.ZipInfo(entry_name), b"")
                else:
                    zf.writestr(entry_name, content)
        return path

    return _make


@pytest.fixture
def boot_jar(make_archive: Callable[..., Path]) -> Path:
    """A minimal Spring Boot executable jar."""
    return make_archive(
        {
            "META-INF/MANIFEST.MF": b"Manifest-Version: 1.0\n",
            "org/springframework/boot/loader/JarLauncher.class": b"\xca\xfe\xba\xbe",
            "BOOT-INF/": None,
            "BOOT-INF/classes/": None,
            "BOOT-INF/classes/Foo.class": b"\xca\xfe\xba\xbe foo",
            "BOOT-INF/lib/": None,
            "BOOT-INF/lib/a.jar": b"PK a",
        }
    )


@pytest.fixture
def fake_java_home(tmp_path: Path) -> Callable[..., Path]:
    """
    Provide a helper that creates a runtime home with a fake bin/jshell.

    The script writes its arguments one per line to `record`, appends
    "present <path>" to `record`.present for every classpath entry that
    exists while it runs, and exits with `exit_code`.
    """

    def _make(exit_code: int = 0, record: Path | None = None) -> Path:
        home = tmp_path / "jdk"
        bin_dir = home / "bin"
        bin_dir.mkdir(parents=True, exist_ok=True)
        lines = ["#!/bin/sh"]
        if record is not None:
            lines += [
                f"printf '%s\\n' \"$@\" > '{record}'",
                "IFS=':'",
                "for entry in $4; do",
                f"  if [ -e \"$entry\" ]; then echo \"present $entry\" >> '{record}.present'; fi",
                "done",
            ]
        lines.append(f"exit {exit_code}")
        script = bin_dir / "jshell"
        script.write_text("\n".join(lines) + "\n")
        script.chmod(0o755)
        return home

    return _make


@pytest.fixture
def posix_platform(temp_area: Path) -> Callable[..., PlatformSnapshot]:
    """Provide a helper building a POSIX PlatformSnapshot for a runtime home."""

    def _make(java_home: Path | None = None) -> PlatformSnapshot:
        return PlatformSnapshot(
            path_separator=":",
            dir_separator="/",
            is_windows=False,
            java_home=str(java_home) if java_home else None,
            temp_dir=str(temp_area),
        )

    return _make
