"""
Unit tests for ClasspathComposer.

Tests entry order, both strategies, and host separator handling.
"""

import os

import pytest

from jshellw.core.models.host import PlatformSnapshot
from jshellw.services.extraction import ClasspathComposer
from jshellw.services.logging import NullLogger


@pytest.fixture
def composer(posix_platform):
    return ClasspathComposer(posix_platform(), logger=NullLogger())


@pytest.fixture
def layout_root(tmp_path):
    root = tmp_path / "BOOT-INF"
    (root / "classes").mkdir(parents=True)
    (root / "lib").mkdir()
    return root


class TestEnumerated:
    """Default strategy: classes first, then every library file."""

    def test_single_library(self, composer, layout_root):
        (layout_root / "lib" / "a.jar").write_bytes(b"a")

        expr = composer.compose(layout_root)

        assert expr.value == f"{layout_root}/classes:{layout_root}/lib/a.jar"
        assert expr.strategy == "enumerated"
        assert expr.classes_path == f"{layout_root}/classes"
        assert expr.library_entries == [f"{layout_root}/lib/a.jar"]

    def test_every_library_listed_once(self, composer, layout_root):
        names = ["spring-core.jar", "spring-beans.jar", "jackson.jar", "notes.txt"]
        for name in names:
            (layout_root / "lib" / name).write_bytes(b"x")

        expr = composer.compose(layout_root)

        libraries = expr.library_entries
        assert sorted(libraries) == sorted(f"{layout_root}/lib/{n}" for n in names)
        assert len(set(libraries)) == len(libraries)
        assert expr.segments()[0] == f"{layout_root}/classes"

    def test_listing_order_preserved(self, composer, layout_root):
        for name in ("z.jar", "a.jar", "m.jar"):
            (layout_root / "lib" / name).write_bytes(b"x")

        expr = composer.compose(layout_root)

        listed = [entry.name for entry in os.scandir(layout_root / "lib")]
        assert expr.library_entries == [f"{layout_root}/lib/{n}" for n in listed]

    def test_subdirectories_skipped(self, composer, layout_root):
        (layout_root / "lib" / "a.jar").write_bytes(b"a")
        (layout_root / "lib" / "nested").mkdir()
        (layout_root / "lib" / "nested" / "b.jar").write_bytes(b"b")

        expr = composer.compose(layout_root)

        assert expr.library_entries == [f"{layout_root}/lib/a.jar"]

    def test_missing_lib(self, composer, tmp_path):
        root = tmp_path / "BOOT-INF"
        (root / "classes").mkdir(parents=True)

        expr = composer.compose(root)

        assert expr.value == f"{root}/classes"
        assert expr.entries == [f"{root}/classes"]

    def test_missing_classes_still_first(self, composer, tmp_path):
        root = tmp_path / "BOOT-INF"
        (root / "lib").mkdir(parents=True)
        (root / "lib" / "a.jar").write_bytes(b"a")

        expr = composer.compose(root)

        assert expr.value == f"{root}/classes:{root}/lib/a.jar"

    def test_missing_root(self, composer, tmp_path):
        """An archive with no accepted entries still gets a classes entry."""
        root = tmp_path / "empty" / "BOOT-INF"

        expr = composer.compose(root)

        assert expr.value == f"{root}/classes"

    def test_relative_root_made_absolute(self, composer, layout_root, monkeypatch):
        monkeypatch.chdir(layout_root.parent)

        expr = composer.compose("BOOT-INF")

        assert expr.classes_path == f"{layout_root}/classes"


class TestWildcard:
    def test_wildcard_entry(self, posix_platform, layout_root):
        (layout_root / "lib" / "a.jar").write_bytes(b"a")
        composer = ClasspathComposer(posix_platform(), strategy="wildcard", logger=NullLogger())

        expr = composer.compose(layout_root)

        assert expr.value == f"{layout_root}/classes:{layout_root}/lib/*"
        assert expr.strategy == "wildcard"

    def test_wildcard_without_lib(self, posix_platform, tmp_path):
        """Wildcard composition does not look at the filesystem."""
        root = tmp_path / "BOOT-INF"
        composer = ClasspathComposer(posix_platform(), strategy="wildcard", logger=NullLogger())

        expr = composer.compose(root)

        assert expr.segments() == [f"{root}/classes", f"{root}/lib/*"]

    def test_per_call_override(self, composer, layout_root):
        expr = composer.compose(layout_root, strategy="wildcard")

        assert expr.library_entries == [f"{layout_root}/lib/*"]

    def test_unknown_strategy(self, composer, layout_root):
        with pytest.raises(ValueError, match="Unknown classpath strategy"):
            composer.compose(layout_root, strategy="glob")


class TestHostSeparators:
    """Separators come from the platform snapshot, not the running host."""

    def test_windows_separators(self, tmp_path):
        platform = PlatformSnapshot(
            path_separator=";",
            dir_separator="\\",
            is_windows=True,
            java_home=None,
            temp_dir=str(tmp_path),
        )
        composer = ClasspathComposer(platform, strategy="wildcard", logger=NullLogger())
        root = os.path.abspath(tmp_path / "BOOT-INF")

        expr = composer.compose(root)

        assert expr.value == f"{root}\\classes;{root}\\lib\\*"
        assert expr.separator == ";"
        assert expr.segments() == [f"{root}\\classes", f"{root}\\lib\\*"]

    def test_trailing_separator_not_doubled(self, composer, layout_root):
        expr = composer.compose(str(layout_root) + "/")

        assert expr.classes_path == f"{layout_root}/classes"
