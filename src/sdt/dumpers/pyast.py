"""Python AST dump with position attributes (lineno=, end_lineno=, ...)."""

from __future__ import annotations

import ast
import sys
from collections.abc import Sequence
from pathlib import Path

from sdt.dumpers._cli import DumpError, run


def dump_python(path: Path, content: bytes) -> str:
    try:
        tree = ast.parse(content, filename=str(path))
    except (SyntaxError, ValueError) as e:
        raise DumpError(f"cannot parse {path}: {e}") from e
    return ast.dump(tree, include_attributes=True, indent=1)


def main(argv: Sequence[str] | None = None) -> int:
    return run("pyast", "Print the Python AST of a file, one field per line.", dump_python, argv)


if __name__ == "__main__":
    sys.exit(main())
