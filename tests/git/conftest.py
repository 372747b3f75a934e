"""Test fixtures for git module."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pygit2
import pytest

if TYPE_CHECKING:
    from collections.abc import Generator

CALC_V1 = """def add(a, b):
    total = a + b
    return total
"""

CALC_V2 = """def add(a, b):
    total = b + a
    return total
"""


def commit_all(repo: pygit2.Repository, message: str) -> pygit2.Oid:
    """Stage every change in the working tree and commit it on HEAD."""
    repo.index.add_all()
    workdir = Path(repo.workdir)
    for entry in list(repo.index):
        if not (workdir / entry.path).exists():
            repo.index.remove(entry.path)
    repo.index.write()
    tree = repo.index.write_tree()
    sig = pygit2.Signature("Test User", "test@example.com")
    parents = [] if repo.head_is_unborn else [repo.head.target]
    return repo.create_commit("HEAD", sig, sig, message, tree, parents)


@pytest.fixture
def temp_repo(tmp_path: Path) -> Generator[pygit2.Repository, None, None]:
    """Create a temporary git repository with an initial commit of calc.py."""
    repo_path = tmp_path / "repo"
    repo_path.mkdir()

    repo = pygit2.init_repository(str(repo_path), initial_head="main")

    # Configure user
    repo.config["user.name"] = "Test User"
    repo.config["user.email"] = "test@example.com"

    (repo_path / "calc.py").write_text(CALC_V1)
    (repo_path / "README.md").write_text("# Test Repo\n")
    commit_all(repo, "Initial commit")

    yield repo


@pytest.fixture
def repo_path(temp_repo: pygit2.Repository) -> Path:
    return Path(temp_repo.workdir)


@pytest.fixture
def calc_v2() -> str:
    return CALC_V2


@pytest.fixture
def commit(temp_repo: pygit2.Repository):
    """Commit the working tree: commit(message) -> Oid."""

    def _commit(message: str) -> pygit2.Oid:
        return commit_all(temp_repo, message)

    return _commit
