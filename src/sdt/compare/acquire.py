"""Parse-tree acquisition: run an external dumper on one file."""

from __future__ import annotations

import subprocess
from pathlib import Path

from sdt.compare.dispatch import Resolution
from sdt.core.errors import ToolError, UnsupportedLanguageError
from sdt.core.logging import get_logger

log = get_logger(__name__)


def acquire_tree(resolution: Resolution, path: Path, *, timeout: float) -> str:
    """Run the resolved parser on `path` and return its stdout.

    For the generic fallback profile, a tool that is missing, fails, or
    prints nothing means the format is unsupported. For every other
    profile those are hard tool failures.

    Raises:
        UnsupportedLanguageError: Generic profile could not produce a tree.
        ToolError: Configured tool missing, failed, or timed out.
    """
    argv = resolution.command.argv(path)
    executable = resolution.command.executable
    log.debug("tool_invoked", argv=argv[:-1], path=str(path), profile=resolution.profile.name)

    try:
        proc = subprocess.run(argv, capture_output=True, timeout=timeout, check=False)
    except subprocess.TimeoutExpired as e:
        log.warning("tool_timeout", executable=executable, path=str(path), timeout=timeout)
        raise ToolError.timed_out(executable, str(path), timeout) from e
    except OSError as e:
        if resolution.is_generic:
            raise UnsupportedLanguageError.no_analyzer(str(path), str(e)) from e
        raise ToolError.unavailable(executable, str(e)) from e

    stdout = proc.stdout.decode("utf-8", errors="replace")
    stderr = proc.stderr.decode("utf-8", errors="replace")
    if proc.returncode != 0 or not stdout.strip():
        log.info(
            "tool_failed",
            executable=executable,
            path=str(path),
            returncode=proc.returncode,
            stderr=stderr.strip()[-500:],
        )
        if resolution.is_generic:
            raise UnsupportedLanguageError.no_analyzer(str(path), stderr.strip())
        raise ToolError.failed(executable, str(path), proc.returncode, stderr)
    return stdout
