"""Git access for revision comparisons (pygit2)."""

from sdt.git.access import RepoAccess, is_revision_spec, strip_revision_spec
from sdt.git.errors import GitError, NotARepositoryError, RefNotFoundError
from sdt.git.models import ChangedFile, StatusEntry

__all__ = [
    "ChangedFile",
    "GitError",
    "NotARepositoryError",
    "RefNotFoundError",
    "RepoAccess",
    "StatusEntry",
    "is_revision_spec",
    "strip_revision_spec",
]
