"""Fixtures for CLI tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pygit2
import pytest
import structlog


@pytest.fixture(autouse=True)
def _reset_logging() -> Generator[None, None, None]:
    """The CLI points log handlers at CliRunner's streams; drop them afterwards."""
    yield
    logging.getLogger().handlers.clear()
    structlog.reset_defaults()


@pytest.fixture
def temp_git_repo(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    """Create a temporary git repository with one committed Python file; cd into it."""
    repo_path = tmp_path / "repo"
    repo_path.mkdir()
    repo = pygit2.init_repository(str(repo_path), initial_head="main")
    repo.config["user.name"] = "Test"
    repo.config["user.email"] = "test@test.com"

    (repo_path / "calc.py").write_text("def add(a, b):\n    total = a + b\n    return total\n")
    repo.index.add("calc.py")
    repo.index.write()
    tree = repo.index.write_tree()
    sig = pygit2.Signature("Test", "test@test.com")
    repo.create_commit("HEAD", sig, sig, "Initial commit", tree, [])

    monkeypatch.chdir(repo_path)
    yield repo_path


@pytest.fixture
def commit_calc(temp_git_repo: Path):
    """Write calc.py with `content`, commit it, return the new commit id."""

    def _commit(content: str, message: str = "update") -> str:
        repo = pygit2.Repository(str(temp_git_repo))
        (temp_git_repo / "calc.py").write_text(content)
        repo.index.add("calc.py")
        repo.index.write()
        tree = repo.index.write_tree()
        sig = pygit2.Signature("Test", "test@test.com")
        return str(repo.create_commit("HEAD", sig, sig, message, tree, [repo.head.target]))

    return _commit
