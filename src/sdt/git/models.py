"""Data models for repository state."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

import pygit2

DeltaStatus = Literal["added", "deleted", "modified", "renamed", "copied", "unknown"]
StatusSection = Literal["staged", "unstaged", "untracked"]

_DELTA_STATUS_MAP: dict[int, DeltaStatus] = {
    pygit2.GIT_DELTA_ADDED: "added",
    pygit2.GIT_DELTA_DELETED: "deleted",
    pygit2.GIT_DELTA_MODIFIED: "modified",
    pygit2.GIT_DELTA_RENAMED: "renamed",
    pygit2.GIT_DELTA_COPIED: "copied",
    pygit2.GIT_DELTA_TYPECHANGE: "modified",
}

# (flag, section, label), checked in order; one path may appear in two sections
_STATUS_FLAGS: tuple[tuple[int, StatusSection, str], ...] = (
    (pygit2.GIT_STATUS_INDEX_NEW, "staged", "new file"),
    (pygit2.GIT_STATUS_INDEX_MODIFIED, "staged", "modified"),
    (pygit2.GIT_STATUS_INDEX_DELETED, "staged", "deleted"),
    (pygit2.GIT_STATUS_INDEX_RENAMED, "staged", "renamed"),
    (pygit2.GIT_STATUS_INDEX_TYPECHANGE, "staged", "typechange"),
    (pygit2.GIT_STATUS_WT_MODIFIED, "unstaged", "modified"),
    (pygit2.GIT_STATUS_WT_DELETED, "unstaged", "deleted"),
    (pygit2.GIT_STATUS_WT_RENAMED, "unstaged", "renamed"),
    (pygit2.GIT_STATUS_WT_TYPECHANGE, "unstaged", "typechange"),
    (pygit2.GIT_STATUS_WT_NEW, "untracked", "new file"),
)


@dataclass(frozen=True, slots=True)
class StatusEntry:
    """One line of `git status`: a path within a section."""

    path: str
    section: StatusSection
    label: str

    @classmethod
    def from_flags(cls, path: str, flags: int) -> list[StatusEntry]:
        return [cls(path, section, label) for flag, section, label in _STATUS_FLAGS if flags & flag]

    @property
    def is_modified(self) -> bool:
        return self.label == "modified" and self.section != "untracked"


@dataclass(frozen=True, slots=True)
class ChangedFile:
    """A file that differs between two revisions (or a revision and the worktree)."""

    path: str
    status: DeltaStatus
    old_path: str | None = None

    @classmethod
    def from_delta(cls, delta: pygit2.DiffDelta) -> ChangedFile:
        status = _DELTA_STATUS_MAP.get(delta.status, "unknown")
        old = delta.old_file.path if delta.old_file else None
        new = delta.new_file.path if delta.new_file else None
        path = new or old or ""
        return cls(path=path, status=status, old_path=old if old != path else None)
