"""Tree normalization: erase position annotations from a raw parse dump."""

from __future__ import annotations

from sdt.engine.profiles import LanguageProfile, Rule


def apply_rules(text: str, rules: tuple[Rule, ...]) -> str:
    for rule in rules:
        text = rule.apply(text)
    return text


def normalize(raw_tree: str, profile: LanguageProfile) -> str:
    """Position-insensitive form of `raw_tree`.

    Pure and deterministic. Two dumps that differ only in position
    annotations normalize to the same string.
    """
    return apply_rules(raw_tree, profile.rules)
