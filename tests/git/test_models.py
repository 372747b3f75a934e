"""Tests for git/models.py."""

from __future__ import annotations

import pygit2

from sdt.git.models import StatusEntry


class TestStatusEntry:
    """Tests for StatusEntry.from_flags."""

    def test_staged_and_unstaged_edit_gives_two_entries(self) -> None:
        flags = pygit2.GIT_STATUS_INDEX_MODIFIED | pygit2.GIT_STATUS_WT_MODIFIED

        entries = StatusEntry.from_flags("app.py", flags)

        assert entries == [
            StatusEntry("app.py", "staged", "modified"),
            StatusEntry("app.py", "unstaged", "modified"),
        ]
        assert all(e.is_modified for e in entries)

    def test_ignored_file_gives_nothing(self) -> None:
        assert StatusEntry.from_flags("build.log", pygit2.GIT_STATUS_IGNORED) == []

    def test_deleted_is_not_modified(self) -> None:
        (entry,) = StatusEntry.from_flags("old.py", pygit2.GIT_STATUS_WT_DELETED)

        assert entry.label == "deleted"
        assert entry.is_modified is False
