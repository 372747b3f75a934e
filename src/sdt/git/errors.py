"""Errors raised by the repository access layer."""


class GitError(Exception):
    """The repository could not be read."""


class NotARepositoryError(GitError):
    """No git repository contains the given path."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Not a git repository: {path}")
        self.path = path


class RefNotFoundError(GitError):
    """A branch, tag or commit name does not resolve to a commit."""

    def __init__(self, ref: str) -> None:
        super().__init__(f"Reference not found: {ref}")
        self.ref = ref
