"""Language profiles: everything language-specific about correlating a parse dump.

A profile is plain data. It names the normalization rules that erase
position annotations, the extractor that pulls source positions back out of
a raw dump line, what those positions mean, and how far around a structural
hunk to look for them. The engine never branches on language; it looks a
profile up and applies it.

The shipped profiles live in one immutable ProfileRegistry built by
default_registry(). Configuration may adjust window radii once, before first
use, through ProfileRegistry.with_overrides().
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from functools import cache
from types import MappingProxyType

from sdt.engine.models import PositionUnit


@dataclass(frozen=True, slots=True)
class Rule:
    """A regex substitution applied to a whole dump (multiline mode)."""

    pattern: re.Pattern[str]
    replacement: str = ""

    @classmethod
    def of(cls, pattern: str, replacement: str = "") -> Rule:
        return cls(re.compile(pattern, re.MULTILINE), replacement)

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text)


@dataclass(frozen=True, slots=True)
class RegexExtractor:
    """Pull integers out of one raw dump line.

    Every match contributes the first non-empty capture group. Lines that
    do not match contribute nothing.
    """

    pattern: re.Pattern[str]

    @classmethod
    def of(cls, pattern: str) -> RegexExtractor:
        return cls(re.compile(pattern))

    def __call__(self, line: str) -> list[int]:
        values: list[int] = []
        for match in self.pattern.finditer(line):
            group = next((g for g in match.groups() if g), None)
            if group is not None:
                values.append(int(group))
        return values


@dataclass(frozen=True, slots=True)
class LanguageProfile:
    """Per-language correlation parameters.

    Attributes:
        name: Registry key, also the config command key by default.
        display_name: Human-facing language name used in report messages.
        rules: Ordered normalization rules (RawTree -> NormalizedTree).
        extractor: Raw-line position extractor; None for canonical formats.
        position_unit: Whether extracted values are lines or byte offsets.
        window_radius: Raw tree lines searched on each side of a hunk.
        canonical: The "tree" is a canonical rendering, not a parse tree.
        display_rules: Extra cleanup applied when rendering a tree diff.
        command_key: Key into the configured commands table.
        expected_tool: False for the generic fallback, where tool failure
            means "no support" instead of a hard error.
    """

    name: str
    display_name: str
    rules: tuple[Rule, ...] = ()
    extractor: RegexExtractor | None = None
    position_unit: PositionUnit = PositionUnit.LINE
    window_radius: int = 4
    canonical: bool = False
    display_rules: tuple[Rule, ...] = ()
    command_key: str = ""
    expected_tool: bool = True

    @property
    def command(self) -> str:
        return self.command_key or self.name


# Fixed-width "NNNNN | " prefix written by the gotree/treesit dumpers.
_FIXED_WIDTH_RULES = (Rule.of(r"^.{5} \| "),)
_FIXED_WIDTH_EXTRACTOR = RegexExtractor.of(r"^(\d{5}) \| ")

_CANONICAL_RULES = (
    Rule.of(r"[ \t]+$"),
    Rule.of(r"^[ \t]*\n"),
)

RUBY = LanguageProfile(
    name="ruby",
    display_name="Ruby",
    rules=(
        Rule.of(r"[ \t]*\((?:id: \d+, )?line: \d+.*$"),
        Rule.of(r"[ \t]*\(location: \(\d+,\d+\)-\(\d+,\d+\)\).*$"),
        Rule.of(r"^(?:# )+"),
    ),
    extractor=RegexExtractor.of(r"\((?:id: \d+, )?line: (\d+)|\(location: \((\d+),"),
    display_rules=(
        Rule.of(r"^##.*$\n?"),
        Rule.of(r"\| |\+-"),
    ),
)

PYTHON = LanguageProfile(
    name="python",
    display_name="Python",
    rules=(Rule.of(r"\b(lineno|end_lineno|col_offset|end_col_offset)=\d+", r"\1=?"),),
    extractor=RegexExtractor.of(r"\b(?:end_)?lineno=(\d+)"),
    display_rules=(
        Rule.of(r"^[ \t]*(?:lineno|end_lineno|col_offset)=\?,[ \t]*\n"),
        Rule.of(r",\s*end_col_offset=\?"),
    ),
)

JAVASCRIPT = LanguageProfile(
    name="javascript",
    display_name="JavaScript",
    rules=(
        Rule.of(r'"start": \d+', '"start": ?'),
        Rule.of(r'"end": \d+', '"end": ?'),
    ),
    extractor=RegexExtractor.of(r'"(?:start|end)": (\d+)'),
    position_unit=PositionUnit.BYTE_OFFSET,
    display_rules=(
        Rule.of(r'^[ \t]*"start": \?,?[ \t]*\n'),
        Rule.of(r'^[ \t]*"end": \?,?[ \t]*\n'),
        Rule.of(r"^[ \t]*[\]}],?[ \t]*\n"),
        Rule.of(r'[\[{,"]'),
        Rule.of(r"^[ \t]*\n"),
    ),
)

GO = LanguageProfile(
    name="go",
    display_name="Go",
    rules=_FIXED_WIDTH_RULES,
    extractor=_FIXED_WIDTH_EXTRACTOR,
    window_radius=0,
)

SQL = LanguageProfile(
    name="sql",
    display_name="SQL",
    rules=_CANONICAL_RULES,
    canonical=True,
)

JSON = LanguageProfile(
    name="json",
    display_name="JSON",
    rules=_CANONICAL_RULES,
    canonical=True,
)

TREESIT = LanguageProfile(
    name="treesit",
    display_name="Tree-sitter",
    rules=_FIXED_WIDTH_RULES,
    extractor=_FIXED_WIDTH_EXTRACTOR,
    window_radius=0,
    expected_tool=False,
)

EXTENSIONS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "ruby": (
            ".rb", ".rake", ".gemspec", ".god", ".irbrc", ".mspec", ".pluginspec",
            ".podspec", ".rabl", ".rbuild", ".rbw", ".rbx", ".ru", ".ruby", ".thor",
            ".watchr",
        ),
        "python": (".py", ".pyw", ".pyde", ".pyt"),
        "sql": (
            ".sql", ".pls", ".bdy", ".ddl", ".fnc", ".pck", ".pkb", ".pks", ".pgsql",
            ".plb", ".plsql", ".prc", ".spc", ".tpb", ".tps", ".trg", ".vw",
        ),
        "javascript": (".js", ".jsx", ".mdx", ".cjs", ".mjs", ".es", ".es6"),
        "json": (
            ".json", ".json5", ".4dform", ".4dproject", ".avsc", ".geojson", ".gltf",
            ".har", ".ice", ".json-tmlanguage", ".jsonl", ".mcmeta", ".tfstate",
            ".tfstate.backup", ".topojson", ".webapp", ".webmanifest", ".yy", ".yyp",
        ),
        "go": (".go", ".v"),
    }
)  # fmt: skip


@dataclass(frozen=True)
class ProfileRegistry:
    """Immutable lookup of language profiles by name and file extension."""

    profiles: Mapping[str, LanguageProfile]
    extensions: Mapping[str, str]
    generic: LanguageProfile
    _compound: tuple[str, ...] = field(default=(), repr=False)

    @classmethod
    def build(
        cls,
        profiles: Iterable[LanguageProfile],
        extensions: Mapping[str, Iterable[str]],
        generic: LanguageProfile,
    ) -> ProfileRegistry:
        by_name = {p.name: p for p in profiles}
        by_ext: dict[str, str] = {}
        for name, exts in extensions.items():
            if name not in by_name:
                raise ValueError(f"Extensions given for unknown profile: {name}")
            for ext in exts:
                by_ext[ext.lower()] = name
        compound = tuple(sorted((e for e in by_ext if e.count(".") > 1), key=len, reverse=True))
        return cls(
            profiles=MappingProxyType(by_name),
            extensions=MappingProxyType(by_ext),
            generic=generic,
            _compound=compound,
        )

    def get(self, name: str) -> LanguageProfile:
        if name == self.generic.name:
            return self.generic
        return self.profiles[name]

    def for_filename(self, filename: str) -> LanguageProfile | None:
        """Profile for a file name by extension, or None when unknown."""
        lowered = filename.lower()
        for ext in self._compound:
            if lowered.endswith(ext):
                return self.profiles[self.extensions[ext]]
        dot = lowered.rfind(".")
        if dot <= lowered.rfind("/"):
            return None
        name = self.extensions.get(lowered[dot:])
        return self.profiles[name] if name else None

    def with_overrides(self, window_radius: Mapping[str, int] | None = None) -> ProfileRegistry:
        """Copy of the registry with adjusted window radii."""
        if not window_radius:
            return self
        unknown = set(window_radius) - set(self.profiles) - {self.generic.name}
        if unknown:
            raise ValueError(f"Unknown profile(s): {', '.join(sorted(unknown))}")

        def adjust(p: LanguageProfile) -> LanguageProfile:
            if p.name in window_radius:
                return replace(p, window_radius=window_radius[p.name])
            return p

        return ProfileRegistry(
            profiles=MappingProxyType({n: adjust(p) for n, p in self.profiles.items()}),
            extensions=self.extensions,
            generic=adjust(self.generic),
            _compound=self._compound,
        )


@cache
def default_registry() -> ProfileRegistry:
    """The shipped profile table."""
    return ProfileRegistry.build(
        profiles=(RUBY, PYTHON, JAVASCRIPT, GO, SQL, JSON),
        extensions=EXTENSIONS,
        generic=TREESIT,
    )
