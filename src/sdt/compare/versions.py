"""File versions: something that can be materialized as a path on disk.

Parser tools only read files, so a version stored in git has to be staged
into a temporary directory first. The temporary copy keeps the original
base name, since some tools (and the tree-sitter dumper) pick a grammar by
extension. It is removed when the context exits, on every exit path.
"""

from __future__ import annotations

import tempfile
from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Protocol

from sdt.core.errors import StagingError
from sdt.core.logging import get_logger
from sdt.git.access import RepoAccess

log = get_logger(__name__)


class FileVersion(Protocol):
    """One side of a comparison."""

    @property
    def label(self) -> str: ...

    def materialize(self) -> AbstractContextManager[Path]: ...


@contextmanager
def staged_content(content: bytes, name: str) -> Iterator[Path]:
    """Write `content` to a temporary file named `name`; remove it afterwards."""
    with tempfile.TemporaryDirectory(prefix="sdt-") as tmp:
        path = Path(tmp) / PurePosixPath(name).name
        try:
            path.write_bytes(content)
        except OSError as e:
            raise StagingError.io_failure(str(path), str(e)) from e
        log.debug("staged", name=name, bytes=len(content))
        yield path


@dataclass(frozen=True, slots=True)
class LocalFileVersion:
    """A file already on disk."""

    path: Path

    @property
    def label(self) -> str:
        return str(self.path)

    @contextmanager
    def materialize(self) -> Iterator[Path]:
        if not self.path.is_file():
            raise StagingError.io_failure(str(self.path), "file does not exist")
        yield self.path


@dataclass(frozen=True, slots=True)
class RevisionFileVersion:
    """A file as stored at a git revision."""

    access: RepoAccess
    rev: str
    path: str

    @property
    def label(self) -> str:
        return f"{self.rev}:{self.path}"

    @contextmanager
    def materialize(self) -> Iterator[Path]:
        content = self.access.read_blob(self.rev, self.path)
        with staged_content(content, self.path) as staged:
            yield staged


def read_text(path: Path) -> str:
    """Read a materialized version as text, replacing undecodable bytes."""
    try:
        return path.read_bytes().decode("utf-8", errors="replace")
    except OSError as e:
        raise StagingError.io_failure(str(path), str(e)) from e
