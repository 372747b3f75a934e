"""Per-language dispatch: file name -> profile and parser command."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePath

from sdt.config.models import CommandConfig, SdtConfig
from sdt.engine.profiles import LanguageProfile, ProfileRegistry


@dataclass(frozen=True, slots=True)
class Resolution:
    """The profile chosen for a file and the command that dumps it."""

    profile: LanguageProfile
    command: CommandConfig

    @property
    def is_generic(self) -> bool:
        return not self.profile.expected_tool


def resolve_profile(filename: str, config: SdtConfig, registry: ProfileRegistry) -> Resolution:
    """Pick a profile by extension, falling back to the generic tree-sitter profile."""
    profile = registry.for_filename(PurePath(filename).name) or registry.generic
    command = config.commands.get(profile.command)
    if command is None:
        raise KeyError(f"No command configured for {profile.command}")
    return Resolution(profile=profile, command=command)
