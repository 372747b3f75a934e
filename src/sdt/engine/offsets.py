"""Line-offset index: map positions in a text blob to line numbers.

Lines are split on LF only; a CR is ordinary line content. Every record
covers its line plus the terminating LF, so records are contiguous and a
position anywhere before the end of the blob falls in exactly one record.
"""

from __future__ import annotations

from bisect import bisect_right

from sdt.engine.models import LineOffset


def build_index(blob: str | bytes) -> list[LineOffset]:
    """Build one LineOffset per line, including the terminal partial line.

    Offsets count characters for str input and bytes for bytes input.
    """
    sep: str | bytes = b"\n" if isinstance(blob, bytes) else "\n"
    total = len(blob)
    records: list[LineOffset] = []
    start = 0
    for line in blob.split(sep):  # type: ignore[arg-type]
        end = min(start + len(line) + 1, total)
        text = line.decode("utf-8", errors="replace") if isinstance(line, bytes) else line
        records.append(LineOffset(start, end, text))
        start = end
    return records


def line_at(table: list[LineOffset], pos: int) -> int | None:
    """Zero-based index of the record containing `pos`, or None."""
    if pos < 0 or not table:
        return None
    idx = bisect_right(table, pos, key=lambda rec: rec.start) - 1
    if idx < 0 or pos not in table[idx]:
        return None
    return idx
