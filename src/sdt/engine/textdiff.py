"""Text diff adapter.

Structural dumps are compared with diff-match-patch, whose character-level
diff and patch hunks are what the correlator consumes. Source files are
compared line by line with difflib to produce the ordinary unified diff that
the renderer filters.

Hunk headers are parsed from their text form in both cases. A header count
may be omitted, which means a count of 1.
"""

from __future__ import annotations

import difflib
import re
from collections.abc import Iterable

from diff_match_patch import diff_match_patch

from sdt.core.errors import HunkHeaderError
from sdt.core.logging import get_logger
from sdt.engine.models import DiffKind, DiffOp, PatchHunk, SourceDiffHunk

log = get_logger(__name__)

_HUNK_HEADER = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@")

SOURCE_CONTEXT_LINES = 3


def parse_hunk_header(line: str) -> PatchHunk:
    """Parse '@@ -a[,b] +c[,d] @@'.

    Raises:
        HunkHeaderError: If the line is not a well-formed hunk header.
    """
    match = _HUNK_HEADER.match(line)
    if match is None:
        raise HunkHeaderError.malformed(line)
    old_start, old_count, new_start, new_count = match.groups()
    return PatchHunk(
        old_start=int(old_start),
        old_count=int(old_count) if old_count is not None else 1,
        new_start=int(new_start),
        new_count=int(new_count) if new_count is not None else 1,
    )


def parse_hunk_headers(lines: Iterable[str]) -> list[PatchHunk]:
    """Parse every '@@' line, skipping malformed headers."""
    hunks: list[PatchHunk] = []
    for line in lines:
        if not line.startswith("@@"):
            continue
        try:
            hunks.append(parse_hunk_header(line))
        except HunkHeaderError as e:
            log.warning("hunk_header_malformed", header=line, code=e.code.value)
    return hunks


class TextDiffer:
    """Character-level diff and patch hunks over diff-match-patch."""

    def __init__(self, timeout: float = 1.0) -> None:
        self._dmp = diff_match_patch()
        self._dmp.Diff_Timeout = timeout

    def diff(self, before: str, after: str) -> list[DiffOp]:
        """Ordered ops transforming `before` into `after`."""
        diffs = self._dmp.diff_main(before, after, False)
        return [DiffOp(DiffKind(op), text) for op, text in diffs]

    def patch_text(self, ops: list[DiffOp]) -> str:
        """Textual patch (headers plus encoded bodies) derived from `ops`."""
        diffs = [(op.kind.value, op.text) for op in ops]
        patches = self._dmp.patch_make(diffs)
        return self._dmp.patch_toText(patches)

    def patch_hunks(self, ops: list[DiffOp]) -> list[PatchHunk]:
        """Hunk headers of the patch for `ops`, in emission order.

        Later hunks are positioned as if earlier ones had already been
        applied, which is what the correlator's drift adjustment undoes.
        """
        if not any(op.kind is not DiffKind.EQUAL for op in ops):
            return []
        return parse_hunk_headers(split_lines(self.patch_text(ops)))


def split_lines(text: str) -> list[str]:
    """Split on line feeds only, the boundary parsers and the offset index count."""
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def unified_source_diff(before: str, after: str, name: str = "") -> str:
    """Unified diff of two source texts, with 3 lines of context."""
    lines = difflib.unified_diff(
        split_lines(before),
        split_lines(after),
        fromfile=f"a/{name}" if name else "before",
        tofile=f"b/{name}" if name else "after",
        n=SOURCE_CONTEXT_LINES,
        lineterm="",
    )
    return "\n".join(lines)


def parse_unified_diff(text: str) -> list[SourceDiffHunk]:
    """Split a unified diff into hunks.

    File headers before the first hunk are dropped. Body lines of a hunk
    whose header is malformed are dropped along with it.
    """
    hunks: list[SourceDiffHunk] = []
    header: str | None = None
    parsed: PatchHunk | None = None
    body: list[str] = []

    def flush() -> None:
        if header is not None and parsed is not None:
            hunks.append(
                SourceDiffHunk(
                    old_start=parsed.old_start,
                    old_count=parsed.old_count,
                    new_start=parsed.new_start,
                    new_count=parsed.new_count,
                    header=header,
                    body=tuple(body),
                )
            )

    for line in split_lines(text):
        if line.startswith("@@"):
            flush()
            header, body = line, []
            try:
                parsed = parse_hunk_header(line)
            except HunkHeaderError as e:
                log.warning("hunk_header_malformed", header=line, code=e.code.value)
                parsed = None
        elif header is not None:
            body.append(line)
    flush()
    return hunks
