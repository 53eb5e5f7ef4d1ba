from pr_reviewer.diff.filters import filter_files, is_excluded, split_patterns
from pr_reviewer.diff.models import DEV_NULL, DiffChunk, DiffFile, DiffLineChange
from pr_reviewer.diff.parser import parse_diff

__all__ = [
    "DEV_NULL",
    "DiffChunk",
    "DiffFile",
    "DiffLineChange",
    "filter_files",
    "is_excluded",
    "parse_diff",
    "split_patterns",
]
