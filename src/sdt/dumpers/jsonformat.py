"""Canonical JSON: parse, then re-serialize with sorted keys and 2-space indent.

Object key order and all insignificant whitespace disappear; array order
and every value survive. JSON Lines files are canonicalized line by line.
"""

from __future__ import annotations

import json
import sys
from collections.abc import Sequence
from pathlib import Path

from sdt.dumpers._cli import DumpError, run


def canonical_json(text: str) -> str:
    data = json.loads(text)
    return json.dumps(data, indent=2, sort_keys=True, ensure_ascii=False)


def dump_json(path: Path, content: bytes) -> str:
    text = content.decode("utf-8-sig", errors="replace")
    try:
        if path.suffix.lower() == ".jsonl":
            return "\n".join(canonical_json(line) for line in text.splitlines() if line.strip())
        return canonical_json(text)
    except json.JSONDecodeError as e:
        raise DumpError(f"invalid JSON in {path}: {e}") from e


def main(argv: Sequence[str] | None = None) -> int:
    return run("jsonformat", "Print a canonical rendering of a JSON file.", dump_json, argv)


if __name__ == "__main__":
    sys.exit(main())
