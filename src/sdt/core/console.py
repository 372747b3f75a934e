"""User-facing terminal output for CLI operations.

Design principles:
- Reports go to stdout, untouched apart from ANSI handling
- Status lines are short, styled, and degrade to plain text in non-TTY (CI, pipes)
- structlog never writes here; logs stay on stderr or in files

Usage::

    from sdt.core.console import status, print_report

    status("Changes to be committed:", style="header")
    status("modified:   src/app.py", style="modified", indent=4)
    print_report(report)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.text import Text

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

_console = Console(highlight=False)

_STYLES = {
    "header": "bold",
    "modified": "yellow",
    "added": "green",
    "deleted": "red",
    "renamed": "cyan",
    "untracked": "red",
    "info": "cyan",
    "error": "red",
    "none": "",
}


def _get_logger() -> BoundLogger:
    """Get logger lazily to respect runtime config."""
    from sdt.core.logging import get_logger

    return get_logger("console")


def get_console() -> Console:
    """Get the shared Rich console instance."""
    return _console


def set_plain_output(plain: bool) -> None:
    """Disable colour entirely, as dumbterm and CI output require."""
    _console.no_color = plain


def status(message: str, *, style: str = "none", indent: int = 0) -> None:
    """Print a styled status line to stdout."""
    padding = " " * indent
    _console.print(
        Text(f"{padding}{message}", style=_STYLES.get(style, "")),
        soft_wrap=True,
    )
    _get_logger().debug("status", message=message, style=style)


def print_report(report: str) -> None:
    """Print a comparison report, translating its ANSI markup for the terminal."""
    _console.print(Text.from_ansi(report), soft_wrap=True)


def pluralize(count: int, singular: str, plural: str | None = None) -> str:
    """Return grammatically correct singular/plural form.

    Args:
        count: The number of items
        singular: Singular form (e.g., "file")
        plural: Plural form (default: singular + "s")

    Returns:
        Formatted string like "1 file" or "3 files"
    """
    if plural is None:
        plural = singular + "s"
    word = singular if count == 1 else plural
    return f"{count} {word}"
