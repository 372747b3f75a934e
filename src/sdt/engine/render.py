"""Report rendering: filtered source hunks and full tree diffs.

Every report starts with a one-line banner and every line, banner included,
is prefixed with "| ". Markup depends on the style:

- color: ANSI escapes around insertions, deletions and hunk headers
- dumbterm: {{+...}} and {{-...}} markers around changed tree text; marker
  pairs that would wrap only whitespace are dropped and the whitespace kept.
  Source hunks carry no markers, their +/- prefixes already say it all
- plain: no markup at all
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from sdt.engine.models import DiffKind, DiffOp, RenderStyle, SourceDiffHunk
from sdt.engine.normalize import apply_rules
from sdt.engine.profiles import Rule

TREE_BANNER = "Comparison of parse trees or canonical format"
SEGMENTS_BANNER = "Segments with likely semantic changes"
NO_SEMANTIC_DIFFERENCES = "| No semantic differences detected"
NO_DIFF_TYPE = "| No diff type specified"

_ANSI = re.compile(r"\x1b\[[0-9;]*m")
_EMPTY_MARKER = re.compile(r"\{\{[+-](\s+)\}\}")


@dataclass(frozen=True, slots=True)
class Highlights:
    """Markup strings for one render style."""

    header: str = ""
    info: str = ""
    add: str = ""
    delete: str = ""
    clear: str = ""


COLORS = Highlights(
    header="\x1b[33m",
    info="\x1b[36m",
    add="\x1b[32m",
    delete="\x1b[31m",
    clear="\x1b[0m",
)
DUMBTERM = Highlights(add="{{+", delete="{{-", clear="}}")
PLAIN = Highlights()


def tree_highlights(style: RenderStyle) -> Highlights:
    return {RenderStyle.COLOR: COLORS, RenderStyle.DUMBTERM: DUMBTERM}.get(style, PLAIN)


def source_highlights(style: RenderStyle) -> Highlights:
    return COLORS if style is RenderStyle.COLOR else PLAIN


def _wrap(text: str, start: str, end: str) -> str:
    """Wrap each line segment of `text` separately so markup never spans a newline."""
    if not start:
        return text
    return "\n".join(f"{start}{seg}{end}" if seg else seg for seg in text.split("\n"))


def _banner(text: str, marks: Highlights) -> str:
    if not marks.header:
        return text
    return f"{marks.header}{text}{marks.clear}"


def _is_change_line(line: str) -> bool:
    return _ANSI.sub("", line).startswith(("@@", "-", "+"))


def finish_report(
    body: str,
    style: RenderStyle,
    *,
    minimal: bool = False,
    color_left: bool = False,
    changed_lines: set[int] | None = None,
) -> str:
    """Apply style post-processing, optional minimal filtering, and line prefixes.

    In minimal mode the banner (line 0) is always kept. Other lines are kept
    when their index is in `changed_lines`, or, if that is not given, when
    they start with a unified-diff marker.
    """
    if style is RenderStyle.DUMBTERM:
        body = _EMPTY_MARKER.sub(r"\1", body)

    lines = body.rstrip("\n").split("\n")
    if minimal:
        if changed_lines is None:
            lines = [line for i, line in enumerate(lines) if i == 0 or _is_change_line(line)]
        else:
            lines = [line for i, line in enumerate(lines) if i == 0 or i in changed_lines]

    if style is RenderStyle.COLOR and color_left:
        pipe = f"{COLORS.header}| {COLORS.clear}"
    else:
        pipe = "| "
    return "\n".join(f"{pipe}{line}" for line in lines)


def render_tree_diff(
    ops: Iterable[DiffOp],
    style: RenderStyle,
    *,
    display_rules: tuple[Rule, ...] = (),
    minimal: bool = False,
    banner: str = TREE_BANNER,
) -> str:
    """Render a whole structural (or canonical) diff.

    Returns the no-differences sentinel when no op inserts or deletes.
    """
    marks = tree_highlights(style)
    parts = [_banner(banner, marks) + "\n"]
    # Report line indices holding non-blank inserted or deleted text.
    changed_lines: set[int] = set()
    changed = False
    line = 1
    for op in ops:
        text = apply_rules(op.text, display_rules)
        if op.kind is DiffKind.EQUAL:
            parts.append(text)
        else:
            changed = True
            start = marks.add if op.kind is DiffKind.INSERT else marks.delete
            parts.append(_wrap(text, start, marks.clear))
            changed_lines.update(line + i for i, seg in enumerate(text.split("\n")) if seg.strip())
        line += text.count("\n")

    if not changed:
        return NO_SEMANTIC_DIFFERENCES
    return finish_report("".join(parts), style, minimal=minimal, changed_lines=changed_lines)


def filter_hunks(
    hunks: Iterable[SourceDiffHunk], semantic_lines: set[int]
) -> list[SourceDiffHunk]:
    """Hunks whose inclusive line span intersects `semantic_lines`."""
    return [h for h in hunks if not semantic_lines.isdisjoint(h.line_span())]


def _render_line(line: str, marks: Highlights) -> str:
    if line.startswith("@"):
        return f"{marks.info}{line}{marks.clear}"
    if line.startswith("+"):
        return f"{marks.add}{line}{marks.clear}"
    if line.startswith("-"):
        return f"{marks.delete}{line}{marks.clear}"
    return line


def filter_and_render(
    source_hunks: Sequence[SourceDiffHunk],
    semantic_lines: set[int],
    style: RenderStyle,
    *,
    minimal: bool = False,
) -> str:
    """Render only the source hunks that touch a semantically changed line."""
    retained = filter_hunks(source_hunks, semantic_lines)
    if not retained:
        return NO_SEMANTIC_DIFFERENCES

    marks = source_highlights(style)
    out = [_banner(SEGMENTS_BANNER, marks)]
    for hunk in retained:
        out.append(_render_line(hunk.header, marks))
        out.extend(_render_line(line, marks) for line in hunk.body)
    return finish_report("\n".join(out), style, minimal=minimal, color_left=True)
