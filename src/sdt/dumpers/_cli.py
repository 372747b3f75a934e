"""Shared command-line plumbing for the dumpers."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable, Sequence
from pathlib import Path


class DumpError(Exception):
    """The input could not be dumped; the message goes to stderr."""


def run(
    prog: str,
    description: str,
    dump: Callable[[Path, bytes], str],
    argv: Sequence[str] | None = None,
) -> int:
    """Parse `argv`, read the file, print `dump(path, content)`.

    Returns the process exit status.
    """
    parser = argparse.ArgumentParser(prog=prog, description=description)
    parser.add_argument("path", type=Path, help="File to dump")
    args = parser.parse_args(argv)

    try:
        content = args.path.read_bytes()
    except OSError as e:
        print(f"{prog}: unable to read {args.path}: {e.strerror}", file=sys.stderr)
        return 1

    try:
        output = dump(args.path, content)
    except DumpError as e:
        print(f"{prog}: {e}", file=sys.stderr)
        return 1

    sys.stdout.write(output if output.endswith("\n") else output + "\n")
    return 0
