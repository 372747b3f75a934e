"""Canonical SQL: upper-case keywords, no comments, one reindented layout."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from pathlib import Path

import sqlparse

from sdt.dumpers._cli import run


def canonical_sql(text: str) -> str:
    formatted = sqlparse.format(
        text,
        keyword_case="upper",
        strip_comments=True,
        reindent=True,
    )
    lines = (line.rstrip() for line in formatted.splitlines())
    return "\n".join(line for line in lines if line)


def dump_sql(path: Path, content: bytes) -> str:  # noqa: ARG001
    return canonical_sql(content.decode("utf-8", errors="replace"))


def main(argv: Sequence[str] | None = None) -> int:
    return run("sqlformat", "Print a canonical rendering of a SQL file.", dump_sql, argv)


if __name__ == "__main__":
    sys.exit(main())
