"""Generic tree-sitter dump in fixed-width line-number format.

Output starts with a ``SrcLn | Node`` header, then one line per node::

    00003 |     (binary_expression)
    00003 |       left: (identifier total)
    00003 |       "+"

The 5-digit prefix is the node's 1-based source line. Named leaves carry
their source text when it fits on one line; anonymous tokens other than
punctuation are kept so operator changes are visible. Comments are omitted
unless SDT_TREESIT_COMMENTS is set.

The grammar is chosen by file extension from the installed
``tree-sitter-<lang>`` packages. Exit status 1 means no grammar is available.
"""

from __future__ import annotations

import importlib
import os
import sys
from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import Any

import tree_sitter

from sdt.dumpers._cli import DumpError, run

COMMENTS_ENV = "SDT_TREESIT_COMMENTS"

# extension -> (grammar module, language function)
GRAMMARS: dict[str, tuple[str, str]] = {
    ".c": ("tree_sitter_c", "language"),
    ".h": ("tree_sitter_c", "language"),
    ".cc": ("tree_sitter_cpp", "language"),
    ".cpp": ("tree_sitter_cpp", "language"),
    ".cxx": ("tree_sitter_cpp", "language"),
    ".hh": ("tree_sitter_cpp", "language"),
    ".hpp": ("tree_sitter_cpp", "language"),
    ".cs": ("tree_sitter_c_sharp", "language"),
    ".go": ("tree_sitter_go", "language"),
    ".rs": ("tree_sitter_rust", "language"),
    ".java": ("tree_sitter_java", "language"),
    ".kt": ("tree_sitter_kotlin", "language"),
    ".scala": ("tree_sitter_scala", "language"),
    ".sh": ("tree_sitter_bash", "language"),
    ".bash": ("tree_sitter_bash", "language"),
    ".lua": ("tree_sitter_lua", "language"),
    ".jl": ("tree_sitter_julia", "language"),
    ".hs": ("tree_sitter_haskell", "language"),
    ".ml": ("tree_sitter_ocaml", "language_ocaml"),
    ".ex": ("tree_sitter_elixir", "language"),
    ".exs": ("tree_sitter_elixir", "language"),
    ".php": ("tree_sitter_php", "language_php"),
    ".ts": ("tree_sitter_typescript", "language_typescript"),
    ".tsx": ("tree_sitter_typescript", "language_tsx"),
    ".swift": ("tree_sitter_swift", "language"),
    ".zig": ("tree_sitter_zig", "language"),
    ".css": ("tree_sitter_css", "language"),
    ".html": ("tree_sitter_html", "language"),
    ".toml": ("tree_sitter_toml", "language"),
    ".yaml": ("tree_sitter_yaml", "language"),
    ".yml": ("tree_sitter_yaml", "language"),
    ".tf": ("tree_sitter_hcl", "language"),
    ".hcl": ("tree_sitter_hcl", "language"),
}

_PUNCTUATION = set("()[]{},;.:'\"`")


def load_language(path: Path) -> tree_sitter.Language:
    """Grammar for `path`'s extension.

    Raises:
        DumpError: If the extension is unknown or its grammar is not installed.
    """
    entry = GRAMMARS.get(path.suffix.lower())
    if entry is None:
        raise DumpError(f"no tree-sitter grammar is known for {path.name}")
    module_name, func = entry
    try:
        module = importlib.import_module(module_name)
        return tree_sitter.Language(getattr(module, func)())
    except (ImportError, AttributeError) as e:
        raise DumpError(f"tree-sitter grammar {module_name} is not installed") from e


def _is_comment(node: Any) -> bool:
    return "comment" in node.type


def _label(node: Any, source: bytes) -> str | None:
    if not node.is_named:
        token = node.type
        if not token.strip() or all(ch in _PUNCTUATION for ch in token):
            return None
        return f'"{token}"'
    if node.child_count == 0 and node.start_point[0] == node.end_point[0]:
        text = source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")
        return f"({node.type} {text})"
    return f"({node.type})"


def dump_nodes(root: Any, source: bytes, *, comments: bool = False) -> Iterator[str]:
    """Yield the formatted dump lines for the tree under `root`."""
    yield "SrcLn | Node"
    stack: list[tuple[Any, int, str | None]] = [(root, 0, None)]
    while stack:
        node, depth, field = stack.pop()
        if _is_comment(node) and not comments:
            continue
        label = _label(node, source)
        if label is not None:
            prefix = f"{field}: " if field else ""
            yield f"{node.start_point[0] + 1:05d} | {'  ' * depth}{prefix}{label}"
        children = [
            (child, depth + 1, node.field_name_for_child(i))
            for i, child in enumerate(node.children)
        ]
        stack.extend(reversed(children))


def dump_tree_sitter(path: Path, content: bytes) -> str:
    language = load_language(path)
    parser = tree_sitter.Parser(language)
    tree = parser.parse(content)
    comments = bool(os.environ.get(COMMENTS_ENV))
    return "\n".join(dump_nodes(tree.root_node, content, comments=comments))


def main(argv: Sequence[str] | None = None) -> int:
    return run(
        "treesit",
        f"Print a tree-sitter parse tree with source line numbers. "
        f"Set {COMMENTS_ENV} to keep comments.",
        dump_tree_sitter,
        argv,
    )


if __name__ == "__main__":
    sys.exit(main())
