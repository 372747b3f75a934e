"""Semantic diff engine: normalize, diff, correlate, filter.

Public API:
    normalize: Erase position annotations from a raw dump
    build_index / line_at: Position -> line lookup
    TextDiffer: Character diff and patch hunks (diff-match-patch)
    correlate: Structural hunks -> source line numbers
    filter_and_render / render_tree_diff: Reports
    default_registry: Shipped language profiles
"""

from sdt.engine.correlate import correlate
from sdt.engine.models import (
    DiffKind,
    DiffOp,
    LineOffset,
    PatchHunk,
    PositionUnit,
    RenderStyle,
    SourceDiffHunk,
)
from sdt.engine.normalize import normalize
from sdt.engine.offsets import build_index, line_at
from sdt.engine.profiles import LanguageProfile, ProfileRegistry, default_registry
from sdt.engine.render import (
    NO_DIFF_TYPE,
    NO_SEMANTIC_DIFFERENCES,
    filter_and_render,
    render_tree_diff,
)
from sdt.engine.textdiff import (
    TextDiffer,
    parse_hunk_header,
    parse_unified_diff,
    unified_source_diff,
)

__all__ = [
    "DiffKind",
    "DiffOp",
    "LanguageProfile",
    "LineOffset",
    "NO_DIFF_TYPE",
    "NO_SEMANTIC_DIFFERENCES",
    "PatchHunk",
    "PositionUnit",
    "ProfileRegistry",
    "RenderStyle",
    "SourceDiffHunk",
    "TextDiffer",
    "build_index",
    "correlate",
    "default_registry",
    "filter_and_render",
    "line_at",
    "normalize",
    "parse_hunk_header",
    "parse_unified_diff",
    "render_tree_diff",
    "unified_source_diff",
]
