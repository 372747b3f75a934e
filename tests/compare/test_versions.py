"""Tests for compare/versions.py - materializing file versions."""

from __future__ import annotations

from pathlib import Path

import pytest

from sdt.compare.versions import LocalFileVersion, read_text, staged_content
from sdt.core.errors import ErrorCode, StagingError


class TestStagedContent:
    """Tests for staged_content."""

    def test_keeps_base_name_and_content(self) -> None:
        with staged_content(b"x = 1\n", "src/pkg/mod.py") as path:
            assert path.name == "mod.py"
            assert path.read_bytes() == b"x = 1\n"

    def test_removed_after_exit(self) -> None:
        with staged_content(b"data", "a.json") as path:
            staged = path

        assert not staged.exists()
        assert not staged.parent.exists()

    def test_removed_after_error(self) -> None:
        staged: Path | None = None
        with pytest.raises(RuntimeError), staged_content(b"data", "a.json") as path:
            staged = path
            raise RuntimeError("comparison failed")

        assert staged is not None
        assert not staged.exists()


class TestLocalFileVersion:
    """Tests for LocalFileVersion."""

    def test_materializes_in_place(self, tmp_path: Path) -> None:
        target = tmp_path / "a.py"
        target.write_text("pass\n")
        version = LocalFileVersion(target)

        with version.materialize() as path:
            assert path == target

        assert target.exists()
        assert version.label == str(target)

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        version = LocalFileVersion(tmp_path / "gone.py")

        with pytest.raises(StagingError) as exc_info, version.materialize():
            pass

        assert exc_info.value.code is ErrorCode.IO_FAILURE


class TestReadText:
    """Tests for read_text."""

    def test_invalid_utf8_replaced(self, tmp_path: Path) -> None:
        target = tmp_path / "bin.txt"
        target.write_bytes(b"ok\xff\n")

        assert read_text(target) == "ok�\n"

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(StagingError):
            read_text(tmp_path / "missing")
