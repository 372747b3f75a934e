"""Diff-to-source correlation.

Structural hunks are positioned in normalized-tree coordinates. Each hunk is
projected onto a line of the normalized tree, the same line of the raw tree
is read (normalization keeps line structure close enough for a small window
to cover any drift), and the profile's extractor pulls source positions out
of the raw lines in that window.

Patch hunks after the first are reported as if earlier hunks had already
been applied. The running adjustment undoes that so every hunk is located
in the original "before" tree.
"""

from __future__ import annotations

from collections.abc import Sequence

from sdt.core.logging import get_logger
from sdt.engine.models import LineOffset, PatchHunk, PositionUnit
from sdt.engine.offsets import build_index, line_at
from sdt.engine.profiles import LanguageProfile

log = get_logger(__name__)


def correlate(
    hunks: Sequence[PatchHunk],
    raw_tree: str,
    normalized_offsets: list[LineOffset],
    profile: LanguageProfile,
    *,
    source: str | bytes | None = None,
) -> set[int]:
    """Source line numbers (1-based) touched by the structural `hunks`.

    Args:
        hunks: Patch hunks of the normalized-tree diff, in emission order.
        raw_tree: The un-normalized "before" dump.
        normalized_offsets: Offset index of the normalized "before" dump.
        profile: Supplies the extractor, window radius and position unit.
        source: The "before" source file; required to resolve byte offsets.
    """
    lines: set[int] = set()
    if not hunks or profile.extractor is None:
        return lines

    raw_lines = raw_tree.split("\n")
    last = len(raw_lines) - 1
    radius = profile.window_radius
    offsets: list[int] = []
    adjustment = 0

    for hunk in hunks:
        projected = hunk.old_start + adjustment
        adjustment += hunk.old_count - hunk.new_count

        tree_line = line_at(normalized_offsets, projected)
        if tree_line is None:
            log.debug("hunk_out_of_range", position=projected, hunk=hunk)
            continue

        for idx in range(max(tree_line - radius, 0), min(tree_line + radius, last) + 1):
            values = profile.extractor(raw_lines[idx])
            if profile.position_unit is PositionUnit.BYTE_OFFSET:
                offsets.extend(values)
            else:
                lines.update(values)

    if offsets:
        if source is None:
            raise ValueError(f"{profile.name} positions are offsets; the source text is required")
        table = build_index(source)
        for pos in offsets:
            idx = line_at(table, pos)
            if idx is not None:
                lines.add(idx + 1)

    log.debug("hunks_correlated", profile=profile.name, hunks=len(hunks), lines=len(lines))
    return lines
