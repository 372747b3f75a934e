"""File comparison: dispatch, tree acquisition, orchestration and batches."""

from sdt.compare.acquire import acquire_tree
from sdt.compare.batch import ComparisonTarget, FileOutcome, matches_glob, run_batch
from sdt.compare.dispatch import Resolution, resolve_profile
from sdt.compare.ops import CompareMode, Comparer, compare_files
from sdt.compare.versions import (
    FileVersion,
    LocalFileVersion,
    RevisionFileVersion,
    staged_content,
)

__all__ = [
    "CompareMode",
    "Comparer",
    "ComparisonTarget",
    "FileOutcome",
    "FileVersion",
    "LocalFileVersion",
    "Resolution",
    "RevisionFileVersion",
    "acquire_tree",
    "compare_files",
    "matches_glob",
    "resolve_profile",
    "run_batch",
    "staged_content",
]
