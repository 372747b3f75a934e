"""Tests for compare/batch.py - per-file isolation in batches."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pygit2
import pytest

from sdt.compare.batch import ComparisonTarget, FileOutcome, matches_glob, run_batch
from sdt.compare.ops import CompareMode, Comparer
from sdt.compare.versions import LocalFileVersion, RevisionFileVersion
from sdt.core.errors import ErrorCode, RevisionError, UnsupportedLanguageError
from sdt.engine.render import NO_DIFF_TYPE
from sdt.git.access import RepoAccess

Write = Callable[[str, str], Path]


def _target(path: str, before: Path, after: Path) -> ComparisonTarget:
    return ComparisonTarget(path=path, before=LocalFileVersion(before), after=LocalFileVersion(after))


class TestMatchesGlob:
    """Tests for matches_glob."""

    @pytest.mark.parametrize(
        ("path", "pattern", "expected"),
        [
            ("src/app.py", "*", True),
            ("src/app.py", "", True),
            ("src/app.py", "*.py", True),
            ("src/app.py", "app.*", True),
            ("src/app.py", "src/*.py", True),
            ("src/app.py", "*.rb", False),
            ("src/app.py", "lib/*", False),
        ],
    )
    def test_patterns(self, path: str, pattern: str, expected: bool) -> None:
        assert matches_glob(path, pattern) is expected


class TestFileOutcome:
    """Tests for FileOutcome."""

    def test_error_renders_as_report_line(self) -> None:
        outcome = FileOutcome(path="x.txt", error=UnsupportedLanguageError.no_analyzer("x.txt"))

        assert outcome.ok is False
        assert outcome.render() == "| No available semantic analyzer for this format"

    def test_report_passthrough(self) -> None:
        outcome = FileOutcome(path="a.py", report="| hello")

        assert outcome.ok is True
        assert outcome.render() == "| hello"


class TestRunBatch:
    """Tests for run_batch."""

    def test_failure_does_not_stop_batch(self, comparer: Comparer, write: Write) -> None:
        good = write("good.py", "x = 1\n")
        missing = Path(good.parent / "missing.py")
        text = write("notes.txt", "hello\n")

        outcomes = list(
            run_batch(
                [
                    _target("missing.py", missing, good),
                    _target("notes.txt", text, text),
                    _target("good.py", good, good),
                ],
                comparer,
                mode=CompareMode.NONE,
            )
        )

        assert [o.path for o in outcomes] == ["missing.py", "notes.txt", "good.py"]
        assert outcomes[0].error is not None
        assert outcomes[0].error.code is ErrorCode.IO_FAILURE
        assert outcomes[1].ok
        assert outcomes[2].report == NO_DIFF_TYPE

    def test_unsupported_file_in_semantic_batch(self, comparer: Comparer, write: Write) -> None:
        before = write("a/notes.txt", "one\n")
        after = write("b/notes.txt", "two\n")
        py = write("calc.py", "x = 1\n")

        outcomes = list(
            run_batch([_target("notes.txt", before, after), _target("calc.py", py, py)], comparer)
        )

        assert outcomes[0].error is not None
        assert outcomes[0].error.code is ErrorCode.UNSUPPORTED_LANGUAGE
        assert outcomes[1].report == "| No semantic differences detected"

    def test_glob_filters_targets(self, comparer: Comparer, write: Write) -> None:
        py = write("calc.py", "x = 1\n")
        rb = write("calc.rb", "x = 1\n")

        outcomes = list(
            run_batch(
                [_target("calc.py", py, py), _target("calc.rb", rb, rb)],
                comparer,
                mode=CompareMode.NONE,
                glob="*.py",
            )
        )

        assert [o.path for o in outcomes] == ["calc.py"]


class TestRunBatchWithRevisions:
    """Failures raised while staging git revisions stay per file."""

    @pytest.fixture
    def access(self, tmp_path: Path) -> RepoAccess:
        repo_path = tmp_path / "repo"
        repo_path.mkdir()
        repo = pygit2.init_repository(str(repo_path), initial_head="main")
        (repo_path / "calc.py").write_text("def add(a, b):\n    return a + b\n")
        repo.index.add("calc.py")
        repo.index.write()
        tree = repo.index.write_tree()
        sig = pygit2.Signature("Test User", "test@example.com")
        repo.create_commit("HEAD", sig, sig, "Initial commit", tree, [])
        return RepoAccess(repo_path)

    def test_missing_blob_does_not_stop_batch(
        self, access: RepoAccess, comparer: Comparer
    ) -> None:
        # Given
        (access.path / "calc.py").write_text("def add(a, b):\n    return b + a\n")
        targets = [
            ComparisonTarget(
                path="gone.py",
                before=RevisionFileVersion(access, "HEAD", "gone.py"),
                after=LocalFileVersion(access.path / "calc.py"),
            ),
            ComparisonTarget(
                path="calc.py",
                before=RevisionFileVersion(access, "HEAD", "calc.py"),
                after=LocalFileVersion(access.path / "calc.py"),
            ),
        ]

        # When
        outcomes = list(run_batch(targets, comparer))

        # Then
        assert [o.path for o in outcomes] == ["gone.py", "calc.py"]
        assert isinstance(outcomes[0].error, RevisionError)
        assert outcomes[0].render() == "| Unable to retrieve HEAD:gone.py"
        assert outcomes[1].ok
        assert "| +    return b + a" in outcomes[1].render().splitlines()

    def test_unknown_revision_does_not_stop_batch(
        self, access: RepoAccess, comparer: Comparer
    ) -> None:
        targets = [
            ComparisonTarget(
                path="calc.py",
                before=RevisionFileVersion(access, "no-such-branch", "calc.py"),
                after=RevisionFileVersion(access, "HEAD", "calc.py"),
            ),
            ComparisonTarget(
                path="calc.py",
                before=RevisionFileVersion(access, "HEAD", "calc.py"),
                after=RevisionFileVersion(access, "HEAD", "calc.py"),
            ),
        ]

        outcomes = list(run_batch(targets, comparer))

        assert outcomes[0].error is not None
        assert outcomes[0].error.code is ErrorCode.REVISION_UNAVAILABLE
        assert outcomes[1].report == "| No semantic differences detected"
