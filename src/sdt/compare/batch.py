"""Batch comparisons with per-file failure isolation."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from fnmatch import fnmatch
from pathlib import PurePosixPath

from sdt.compare.ops import CompareMode, Comparer
from sdt.compare.versions import FileVersion
from sdt.core.errors import SdtError
from sdt.core.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class ComparisonTarget:
    """A file to compare: a display path plus its two versions."""

    path: str
    before: FileVersion
    after: FileVersion


@dataclass(frozen=True, slots=True)
class FileOutcome:
    """Result for one file: a report, or the error that prevented one."""

    path: str
    report: str | None = None
    error: SdtError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def render(self) -> str:
        if self.error is not None:
            return f"| {self.error.message}"
        return self.report or ""


def matches_glob(path: str, pattern: str) -> bool:
    """Match a repo-relative path, or its base name, against a glob."""
    if pattern in ("", "*"):
        return True
    return fnmatch(path, pattern) or fnmatch(PurePosixPath(path).name, pattern)


def run_batch(
    targets: Iterable[ComparisonTarget],
    comparer: Comparer,
    *,
    mode: CompareMode = CompareMode.SEMANTIC,
    glob: str = "*",
) -> Iterator[FileOutcome]:
    """Compare each target in turn. A failing file never stops the batch."""
    for target in targets:
        if not matches_glob(target.path, glob):
            log.debug("skipped_by_glob", path=target.path, glob=glob)
            continue
        try:
            report = comparer.compare_versions(
                target.before, target.after, mode=mode, display_name=target.path
            )
        except SdtError as e:
            log.warning("comparison_failed", path=target.path, **e.to_dict())
            yield FileOutcome(path=target.path, error=e)
        else:
            yield FileOutcome(path=target.path, report=report)
