"""Tests for compare/dispatch.py and compare/acquire.py."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from sdt.compare.acquire import acquire_tree
from sdt.compare.dispatch import Resolution, resolve_profile
from sdt.config.models import CommandConfig, SdtConfig
from sdt.core.errors import ErrorCode, ToolError, UnsupportedLanguageError
from sdt.engine.profiles import PYTHON, TREESIT, default_registry

ToolFactory = Callable[[str], CommandConfig]

ECHO_PATH = "import sys; print('tree of', sys.argv[1])"
FAIL = "import sys; sys.stderr.write('warning\\nSyntaxError: bad input\\n'); sys.exit(1)"
SILENT = "pass"


class TestResolveProfile:
    """Tests for resolve_profile."""

    def test_known_extension(self) -> None:
        config = SdtConfig()

        resolution = resolve_profile("src/app.py", config, default_registry())

        assert resolution.profile.name == "python"
        assert resolution.command is config.commands["python"]
        assert resolution.is_generic is False

    def test_unknown_extension_falls_back_to_generic(self) -> None:
        resolution = resolve_profile("main.c", SdtConfig(), default_registry())

        assert resolution.profile is TREESIT
        assert resolution.is_generic is True

    def test_configured_command_is_used(self) -> None:
        config = SdtConfig(commands={"go": {"executable": "gotree", "switches": ["-d"]}})

        resolution = resolve_profile("main.go", config, default_registry())

        assert resolution.command.argv("main.go") == ["gotree", "-d", "main.go"]


class TestAcquireTree:
    """Tests for acquire_tree."""

    def test_returns_stdout(self, tmp_path: Path, fake_tool: ToolFactory) -> None:
        target = tmp_path / "a.py"
        target.write_text("x = 1\n")

        tree = acquire_tree(Resolution(PYTHON, fake_tool(ECHO_PATH)), target, timeout=30)

        assert tree == f"tree of {target}\n"

    def test_failing_tool_raises_tool_error(self, tmp_path: Path, fake_tool: ToolFactory) -> None:
        target = tmp_path / "a.py"

        with pytest.raises(ToolError) as exc_info:
            acquire_tree(Resolution(PYTHON, fake_tool(FAIL)), target, timeout=30)

        error = exc_info.value
        assert error.code is ErrorCode.TOOL_FAILED
        assert error.message == f"Could not create parse tree for {target}: SyntaxError: bad input"
        assert error.details["returncode"] == 1

    def test_empty_output_is_a_failure(self, tmp_path: Path, fake_tool: ToolFactory) -> None:
        with pytest.raises(ToolError):
            acquire_tree(Resolution(PYTHON, fake_tool(SILENT)), tmp_path / "a.py", timeout=30)

    def test_missing_executable(self, tmp_path: Path) -> None:
        command = CommandConfig(executable=str(tmp_path / "no-such-parser"))

        with pytest.raises(ToolError) as exc_info:
            acquire_tree(Resolution(PYTHON, command), tmp_path / "a.py", timeout=30)

        assert exc_info.value.code is ErrorCode.TOOL_UNAVAILABLE

    def test_timeout(self, tmp_path: Path, fake_tool: ToolFactory) -> None:
        command = fake_tool("import time; time.sleep(10)")

        with pytest.raises(ToolError) as exc_info:
            acquire_tree(Resolution(PYTHON, command), tmp_path / "a.py", timeout=0.5)

        assert exc_info.value.code is ErrorCode.TOOL_TIMEOUT
        assert exc_info.value.retryable is True


class TestGenericFallback:
    """The generic profile turns tool trouble into 'unsupported'."""

    def test_failing_tool_means_unsupported(self, tmp_path: Path, fake_tool: ToolFactory) -> None:
        with pytest.raises(UnsupportedLanguageError) as exc_info:
            acquire_tree(Resolution(TREESIT, fake_tool(FAIL)), tmp_path / "x.txt", timeout=30)

        assert exc_info.value.message == "No available semantic analyzer for this format"

    def test_missing_tool_means_unsupported(self, tmp_path: Path) -> None:
        command = CommandConfig(executable=str(tmp_path / "no-such-parser"))

        with pytest.raises(UnsupportedLanguageError):
            acquire_tree(Resolution(TREESIT, command), tmp_path / "x.txt", timeout=30)

    def test_silent_tool_means_unsupported(self, tmp_path: Path, fake_tool: ToolFactory) -> None:
        with pytest.raises(UnsupportedLanguageError):
            acquire_tree(Resolution(TREESIT, fake_tool(SILENT)), tmp_path / "x.txt", timeout=30)
