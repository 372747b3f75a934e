"""Comparison orchestration: acquire, normalize, diff, correlate, render."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from sdt.compare.acquire import acquire_tree
from sdt.compare.dispatch import resolve_profile
from sdt.compare.versions import FileVersion, read_text
from sdt.config.models import SdtConfig
from sdt.core.logging import comparison_scope, get_logger
from sdt.engine.correlate import correlate
from sdt.engine.models import RenderStyle
from sdt.engine.normalize import normalize
from sdt.engine.offsets import build_index
from sdt.engine.profiles import ProfileRegistry, default_registry
from sdt.engine.render import (
    NO_DIFF_TYPE,
    NO_SEMANTIC_DIFFERENCES,
    filter_and_render,
    render_tree_diff,
)
from sdt.engine.textdiff import TextDiffer, parse_unified_diff, unified_source_diff

log = get_logger(__name__)


class CompareMode(Enum):
    """What a comparison reports."""

    SEMANTIC = "semantic"
    PARSETREE = "parsetree"
    NONE = "none"


@dataclass(frozen=True)
class Comparer:
    """Compares two versions of one file. Shares nothing mutable between files."""

    config: SdtConfig
    registry: ProfileRegistry
    differ: TextDiffer

    @classmethod
    def from_config(cls, config: SdtConfig, registry: ProfileRegistry | None = None) -> Comparer:
        base = registry or default_registry()
        return cls(
            config=config,
            registry=base.with_overrides(config.correlation.window_radius),
            differ=TextDiffer(timeout=config.diff.timeout_sec),
        )

    @property
    def style(self) -> RenderStyle:
        return RenderStyle(self.config.render.style)

    def compare_paths(
        self,
        before: Path,
        after: Path,
        *,
        mode: CompareMode = CompareMode.SEMANTIC,
        display_name: str | None = None,
    ) -> str:
        """Report for two files on disk. `display_name` picks the language."""
        name = display_name or after.name
        if mode is CompareMode.NONE:
            return NO_DIFF_TYPE

        resolution = resolve_profile(name, self.config, self.registry)
        profile = resolution.profile
        if mode is CompareMode.PARSETREE and profile.canonical:
            return f"| {profile.display_name} comparison uses canonicalization not AST analysis"

        timeout = self.config.tools.timeout_sec
        raw_before = acquire_tree(resolution, before, timeout=timeout)
        raw_after = acquire_tree(resolution, after, timeout=timeout)
        norm_before = normalize(raw_before, profile)
        norm_after = normalize(raw_after, profile)
        ops = self.differ.diff(norm_before, norm_after)

        minimal = self.config.render.minimal
        if mode is CompareMode.PARSETREE:
            return render_tree_diff(
                ops, self.style, display_rules=profile.display_rules, minimal=minimal
            )
        if profile.canonical:
            return render_tree_diff(
                ops,
                self.style,
                minimal=minimal,
                banner=f"Comparison of canonicalized {profile.display_name}",
            )

        hunks = self.differ.patch_hunks(ops)
        if not hunks:
            return NO_SEMANTIC_DIFFERENCES

        before_text = read_text(before)
        after_text = read_text(after)
        lines = correlate(
            hunks, raw_before, build_index(norm_before), profile, source=before_text
        )
        source_hunks = parse_unified_diff(unified_source_diff(before_text, after_text, name))
        log.debug(
            "semantic_lines",
            profile=profile.name,
            lines=sorted(lines),
            source_hunks=len(source_hunks),
        )
        return filter_and_render(source_hunks, lines, self.style, minimal=minimal)

    def compare_versions(
        self,
        before: FileVersion,
        after: FileVersion,
        *,
        mode: CompareMode = CompareMode.SEMANTIC,
        display_name: str | None = None,
    ) -> str:
        """Materialize both versions, compare them, and clean up staged copies."""
        name = display_name or after.label
        with comparison_scope(name):
            log.info("comparing", before=before.label, after=after.label, mode=mode.value)
            with before.materialize() as before_path, after.materialize() as after_path:
                return self.compare_paths(
                    before_path, after_path, mode=mode, display_name=name
                )


def compare_files(
    before: Path,
    after: Path,
    *,
    mode: CompareMode = CompareMode.SEMANTIC,
    config: SdtConfig | None = None,
) -> str:
    """Compare two local files with default (or given) configuration."""
    comparer = Comparer.from_config(config or SdtConfig())
    return comparer.compare_paths(before, after, mode=mode)
