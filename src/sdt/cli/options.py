"""Shared comparison options and their consistency rules."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import click

from sdt.git.access import is_revision_spec

DEFAULT_SOURCE = "HEAD:"


def check_targets(src: str, dst: str | None, glob: str | None) -> str | None:
    """Return a usage error message for an impossible combination, or None.

    Allowed combinations:
        -A REV:            (compare a revision with the working tree)
        -A REV: -B REV:    (compare two revisions)
        -A FILE -B FILE    (compare two local files)
    """
    if is_revision_spec(src):
        if dst and not is_revision_spec(dst):
            return "You may only compare a branch/revision with another branch/revision"
        return None

    if not dst or is_revision_spec(dst):
        return "A source of a filepath must be matched by a destination filepath"
    for path in (src, dst):
        if not Path(path).is_file():
            return f"The file {path} does not exist!"
    if glob:
        return "The --glob option may not be used when comparing two local files"
    return None


def comparison_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Options common to status, semantic and parsetree."""
    decorators = [
        click.option(
            "-A",
            "--src",
            default=DEFAULT_SOURCE,
            show_default=True,
            help="File, branch, or revision of source (colon for branch/rev)",
        ),
        click.option(
            "-B",
            "--dst",
            default=None,
            help="File, branch, or rev of destination (current if omitted)",
        ),
        click.option(
            "-g",
            "--glob",
            "glob_pattern",
            default=None,
            help="Limit compared files by a glob pattern",
        ),
        click.option(
            "-m", "--minimal", is_flag=True, help="Show only exact changes in semantic diffs"
        ),
        click.option(
            "-d",
            "--dumbterm",
            is_flag=True,
            help="Monochrome/pipe compatible output (also env CI=true)",
        ),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func
