"""Tests for DirectoryWalker."""

import io
import json
from collections.abc import Callable
from pathlib import Path

import pytest

from javaimport.classfile import AccessFlag
from javaimport.emitter import JsonLinesEmitter
from javaimport.errors import WalkError
from javaimport.services.path_filter import PathFilter
from javaimport.walkers import DirectoryWalker, WalkerProtocol


def _names(stream: io.StringIO) -> list[str]:
    return [
        f"{r['package']}.{r['simpleName']}"
        for r in map(json.loads, stream.getvalue().splitlines())
    ]


class TestDirectoryWalker:
    """Tests for DirectoryWalker.walk."""

    def test_emits_class_files(self, tmp_path: Path, write_class: Callable[..., Path]) -> None:
        """Every class file below the directory is emitted."""
        write_class("com/acme/Widget")
        write_class("com/acme/api/Client")
        (tmp_path / "classes" / "README.txt").write_text("not a class")

        stream = io.StringIO()
        walker = DirectoryWalker(
            tmp_path / "classes", PathFilter([], []), JsonLinesEmitter(stream)
        )
        stats = walker.walk()

        assert stats.emitted == 2
        assert stats.filtered == 0
        assert sorted(_names(stream)) == ["com.acme.Widget", "com.acme.api.Client"]

    def test_filter_uses_relative_paths(
        self, tmp_path: Path, write_class: Callable[..., Path]
    ) -> None:
        """Excluded packages are skipped before parsing."""
        write_class("com/acme/Widget")
        write_class("com/acme/internal/Helper")
        write_class("com/acme/api/Client")
        write_class("com/acme/Widget$1")

        stream = io.StringIO()
        walker = DirectoryWalker(
            tmp_path / "classes",
            PathFilter(["com.acme.internal"], []),
            JsonLinesEmitter(stream),
        )
        stats = walker.walk()

        assert stats.emitted == 2
        assert stats.filtered == 2
        assert "com.acme.internal.Helper" not in _names(stream)

    def test_include_overrides_exclude(
        self, tmp_path: Path, write_class: Callable[..., Path]
    ) -> None:
        """Included subpackages survive a broader exclude."""
        write_class("com/acme/api/Client")
        write_class("com/acme/impl/ClientImpl")

        stream = io.StringIO()
        walker = DirectoryWalker(
            tmp_path / "classes",
            PathFilter(["com.acme"], ["com.acme.api"]),
            JsonLinesEmitter(stream),
        )
        walker.walk()

        assert _names(stream) == ["com.acme.api.Client"]

    def test_malformed_class_is_counted_and_skipped(
        self, tmp_path: Path, write_class: Callable[..., Path]
    ) -> None:
        """A broken class file does not stop the walk."""
        write_class("com/acme/Widget", access=AccessFlag.PUBLIC)
        broken = tmp_path / "classes" / "com" / "acme" / "Broken.class"
        broken.write_bytes(b"not a class file")

        stream = io.StringIO()
        stats = DirectoryWalker(
            tmp_path / "classes", PathFilter([], []), JsonLinesEmitter(stream)
        ).walk()

        assert stats.emitted == 1
        assert stats.failed == 1

    def test_missing_directory_raises(self, tmp_path: Path) -> None:
        """A missing classpath directory is a WalkError."""
        walker = DirectoryWalker(
            tmp_path / "missing", PathFilter([], []), JsonLinesEmitter(io.StringIO())
        )
        with pytest.raises(WalkError):
            walker.walk()

    def test_satisfies_protocol(self, tmp_path: Path) -> None:
        """DirectoryWalker implements WalkerProtocol."""
        walker = DirectoryWalker(tmp_path, PathFilter([], []), JsonLinesEmitter(io.StringIO()))
        assert isinstance(walker, WalkerProtocol)
