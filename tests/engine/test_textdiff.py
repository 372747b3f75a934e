"""Tests for engine/textdiff.py - diff-match-patch and unified diff adapters."""

from __future__ import annotations

import pytest

from sdt.core.errors import ErrorCode, HunkHeaderError
from sdt.engine.models import DiffKind, DiffOp, PatchHunk
from sdt.engine.textdiff import (
    TextDiffer,
    parse_hunk_header,
    parse_hunk_headers,
    parse_unified_diff,
    split_lines,
    unified_source_diff,
)


class TestParseHunkHeader:
    """Tests for parse_hunk_header."""

    @pytest.mark.parametrize(
        ("line", "expected"),
        [
            ("@@ -1,3 +1,4 @@", PatchHunk(1, 3, 1, 4)),
            ("@@ -12,0 +13,2 @@ def f():", PatchHunk(12, 0, 13, 2)),
            ("@@ -5 +7 @@", PatchHunk(5, 1, 7, 1)),
            ("@@ -0,0 +1 @@", PatchHunk(0, 0, 1, 1)),
        ],
    )
    def test_well_formed(self, line: str, expected: PatchHunk) -> None:
        assert parse_hunk_header(line) == expected

    @pytest.mark.parametrize("line", ["@@ garbage @@", "@@ -a,b +c,d @@", "-1,2 +3,4"])
    def test_malformed_raises(self, line: str) -> None:
        with pytest.raises(HunkHeaderError) as exc_info:
            parse_hunk_header(line)

        assert exc_info.value.code is ErrorCode.MALFORMED_HUNK_HEADER

    def test_headers_parsed_in_order_and_bad_ones_skipped(self) -> None:
        lines = [
            "@@ -1,2 +1,2 @@",
            " context",
            "@@ broken @@",
            "-x",
            "@@ -9,1 +9,3 @@",
        ]

        assert parse_hunk_headers(lines) == [PatchHunk(1, 2, 1, 2), PatchHunk(9, 1, 9, 3)]


class TestTextDiffer:
    """Tests for TextDiffer."""

    def test_diff_ops(self) -> None:
        ops = TextDiffer().diff("abc", "abd")

        assert ops == [
            DiffOp(DiffKind.EQUAL, "ab"),
            DiffOp(DiffKind.DELETE, "c"),
            DiffOp(DiffKind.INSERT, "d"),
        ]

    def test_diff_reconstructs_both_sides(self) -> None:
        before = "Module(\n body=[\n  Pass()])\n"
        after = "Module(\n body=[\n  Expr(value=Constant(value=1))])\n"

        ops = TextDiffer().diff(before, after)

        assert "".join(op.text for op in ops if op.kind is not DiffKind.INSERT) == before
        assert "".join(op.text for op in ops if op.kind is not DiffKind.DELETE) == after

    def test_identical_text_has_no_hunks(self) -> None:
        differ = TextDiffer()

        assert differ.patch_hunks(differ.diff("same\n", "same\n")) == []

    def test_patch_hunks_for_single_change(self) -> None:
        differ = TextDiffer()

        hunks = differ.patch_hunks(differ.diff("abc", "abd"))

        assert hunks == [PatchHunk(1, 3, 1, 3)]

    def test_distant_changes_give_separate_hunks(self) -> None:
        differ = TextDiffer()
        before = "x" * 40 + "A" + "y" * 40 + "B" + "z" * 40
        after = before.replace("A", "AA").replace("B", "")

        hunks = differ.patch_hunks(differ.diff(before, after))

        assert len(hunks) == 2
        assert hunks[0].new_count - hunks[0].old_count == 1
        assert hunks[1].old_count - hunks[1].new_count == 1

    def test_patch_text_has_headers(self) -> None:
        differ = TextDiffer()

        text = differ.patch_text(differ.diff("abc", "abd"))

        assert text.startswith("@@ -1,3 +1,3 @@")


class TestUnifiedSourceDiff:
    """Tests for unified_source_diff and parse_unified_diff."""

    def test_round_trip_single_hunk(self) -> None:
        diff = unified_source_diff("a\nb\nc\n", "a\nB\nc\n", "x.py")

        hunks = parse_unified_diff(diff)

        assert diff.startswith("--- a/x.py\n+++ b/x.py\n")
        assert len(hunks) == 1
        hunk = hunks[0]
        assert (hunk.old_start, hunk.old_count, hunk.new_start, hunk.new_count) == (1, 3, 1, 3)
        assert hunk.header == "@@ -1,3 +1,3 @@"
        assert hunk.body == (" a", "-b", "+B", " c")

    def test_identical_sources_have_no_hunks(self) -> None:
        assert parse_unified_diff(unified_source_diff("a\n", "a\n")) == []

    def test_distant_edits_split_into_hunks(self) -> None:
        before = "".join(f"line {i}\n" for i in range(1, 31))
        after = before.replace("line 2\n", "line two\n").replace("line 28\n", "line 28!\n")

        hunks = parse_unified_diff(unified_source_diff(before, after))

        assert [h.old_start for h in hunks] == [1, 25]

    def test_malformed_header_drops_its_body(self) -> None:
        text = "@@ -1,1 +1,1 @@\n-a\n+b\n@@ nonsense @@\n-c\n+d\n"

        hunks = parse_unified_diff(text)

        assert len(hunks) == 1
        assert hunks[0].body == ("-a", "+b")

    def test_file_headers_ignored(self) -> None:
        text = "--- a/f\n+++ b/f\n@@ -2 +2 @@\n-x\n+y"

        hunks = parse_unified_diff(text)

        assert hunks[0].old_start == 2
        assert hunks[0].old_count == 1
        assert hunks[0].body == ("-x", "+y")

    def test_line_span_is_inclusive_of_both_sides(self) -> None:
        hunk = parse_unified_diff("@@ -10,3 +12,4 @@\n x")[0]

        assert hunk.line_span() == range(10, 17)

    def test_only_line_feeds_break_lines(self) -> None:
        """Form feeds and Unicode separators stay inside their line."""
        filler = "".join(f's{i} = "x\u2028y"\f\n' for i in range(5))
        before = filler + "v = 5\n"
        after = filler + "v = 99\n"

        hunks = parse_unified_diff(unified_source_diff(before, after))

        assert len(hunks) == 1
        assert (hunks[0].old_start, hunks[0].old_count) == (3, 4)
        assert hunks[0].body[-2:] == ("-v = 5", "+v = 99")
        assert hunks[0].body[0] == ' s2 = "x\u2028y"\f'


class TestSplitLines:
    """Tests for split_lines."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("", []),
            ("a", ["a"]),
            ("a\n", ["a"]),
            ("a\n\n", ["a", ""]),
            ("a\x0cb\u2028c\x85d\n", ["a\x0cb\u2028c\x85d"]),
            ("a\r\nb\n", ["a\r", "b"]),
        ],
    )
    def test_line_feed_boundaries(self, text: str, expected: list[str]) -> None:
        assert split_lines(text) == expected
