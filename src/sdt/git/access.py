"""Repository access layer - owns pygit2.Repository and exposes computed facts."""

from __future__ import annotations

from pathlib import Path

import pygit2

from sdt.core.errors import RevisionError
from sdt.core.logging import get_logger
from sdt.git.errors import GitError, NotARepositoryError, RefNotFoundError
from sdt.git.models import ChangedFile, StatusEntry

log = get_logger(__name__)

REVISION_SUFFIX = ":"


def is_revision_spec(arg: str) -> bool:
    """True for the 'REV:' spelling that names a revision instead of a file."""
    return arg.endswith(REVISION_SUFFIX)


def strip_revision_spec(arg: str) -> str:
    return arg[: -len(REVISION_SUFFIX)] if is_revision_spec(arg) else arg


class RepoAccess:
    """Owns pygit2.Repository and provides normalized access to repo state."""

    def __init__(self, repo_path: Path | str) -> None:
        self._path = Path(repo_path)
        try:
            discovered = pygit2.discover_repository(str(self._path))
            if discovered is None:
                raise NotARepositoryError(str(self._path))
            self._repo = pygit2.Repository(discovered)
        except pygit2.GitError as e:
            raise NotARepositoryError(str(self._path)) from e

    @property
    def repo(self) -> pygit2.Repository:
        return self._repo

    @property
    def path(self) -> Path:
        return Path(self._repo.workdir) if self._repo.workdir else self._path

    @property
    def is_unborn(self) -> bool:
        return self._repo.head_is_unborn

    def resolve_commit(self, ref: str) -> pygit2.Commit:
        try:
            obj, _ = self._repo.resolve_refish(ref)
        except (pygit2.GitError, KeyError, ValueError) as e:
            raise RefNotFoundError(ref) from e
        if isinstance(obj, pygit2.Tag):
            obj = obj.peel(pygit2.Commit)
        if not isinstance(obj, pygit2.Commit):
            raise RefNotFoundError(f"{ref} is not a commit")
        return obj

    def status_entries(self) -> list[StatusEntry]:
        """Working tree status, sorted by path, ignored files excluded.

        Raises:
            GitError: If the index or working tree cannot be read.
        """
        try:
            status = self._repo.status()
        except pygit2.GitError as e:
            raise GitError(f"Unable to read working tree status: {e}") from e
        entries: list[StatusEntry] = []
        for path, flags in sorted(status.items()):
            entries.extend(StatusEntry.from_flags(path, flags))
        return entries

    def changed_files(self, src_rev: str, dst_rev: str | None = None) -> list[ChangedFile]:
        """Files that differ between src_rev and dst_rev (or the working tree).

        Raises:
            RefNotFoundError: If either revision cannot be resolved.
            GitError: If the diff cannot be computed.
        """
        base = self.resolve_commit(src_rev)
        target = self.resolve_commit(dst_rev) if dst_rev is not None else None
        try:
            if target is None:
                diff = base.tree.diff_to_workdir()
            else:
                diff = self._repo.diff(base.tree, target.tree)
            diff.find_similar(flags=pygit2.GIT_DIFF_FIND_RENAMES)
        except pygit2.GitError as e:
            against = dst_rev or "working tree"
            raise GitError(f"Unable to diff {src_rev} against {against}: {e}") from e
        files = [ChangedFile.from_delta(delta) for delta in diff.deltas]
        log.debug("changed_files", src=src_rev, dst=dst_rev or "worktree", count=len(files))
        return files

    def read_blob(self, rev: str, path: str) -> bytes:
        """Content of `path` at `rev`.

        Raises:
            RevisionError: If the revision or the path within it is missing.
        """
        try:
            commit = self.resolve_commit(rev)
        except RefNotFoundError as e:
            raise RevisionError.unavailable(rev, path) from e
        try:
            entry = commit.tree[path]
        except KeyError as e:
            raise RevisionError.unavailable(rev, path) from e
        blob = self._repo.get(entry.id)
        if not isinstance(blob, pygit2.Blob):
            raise RevisionError.unavailable(rev, path)
        return blob.data
