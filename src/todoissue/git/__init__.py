"""Git interface layer — adapter, line classification, models."""

from todoissue.git.adapter import (
    GitError,
    get_range_diff,
    get_repo_root,
    get_staged_diff,
)
from todoissue.git.diff_parser import (
    DiffParseError,
    HunkHeaderError,
    LineTracker,
    classify_line,
)
from todoissue.git.models import ChangeKind, Content, FileHeader, HunkHeader

__all__ = [
    "ChangeKind",
    "Content",
    "DiffParseError",
    "FileHeader",
    "GitError",
    "HunkHeader",
    "HunkHeaderError",
    "LineTracker",
    "classify_line",
    "get_range_diff",
    "get_repo_root",
    "get_staged_diff",
]
