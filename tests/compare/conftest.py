"""Fixtures for comparison tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from sdt.compare.ops import Comparer
from sdt.config.models import CommandConfig, SdtConfig


@pytest.fixture
def plain_config() -> SdtConfig:
    return SdtConfig(render={"style": "plain"})


@pytest.fixture
def comparer(plain_config: SdtConfig) -> Comparer:
    return Comparer.from_config(plain_config)


@pytest.fixture
def write(tmp_path: Path):
    """Write a file under tmp_path and return its path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    return _write


@pytest.fixture
def fake_tool():
    """Build a parser command that runs a Python snippet; the file path is sys.argv[1]."""

    def _tool(script: str) -> CommandConfig:
        return CommandConfig(executable=sys.executable, switches=["-c", script])

    return _tool
