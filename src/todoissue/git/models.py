"""Data models for diff line classification."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ChangeKind(str, Enum):
    ADDITION = "addition"
    DELETION = "deletion"
    CONTEXT = "context"


@dataclass(frozen=True, slots=True)
class FileHeader:
    """``diff --git a/<old> b/<new>``: starts a new file context."""

    path: str


@dataclass(frozen=True, slots=True)
class HunkHeader:
    """``@@ -<old> +<new> @@``: resets the new-file line counter."""

    new_start: int


@dataclass(frozen=True, slots=True)
class Content:
    """Any other diff line."""

    kind: ChangeKind
    text: str  # line without the leading change marker

    @property
    def is_change(self) -> bool:
        return self.kind is not ChangeKind.CONTEXT


DiffEvent = FileHeader | HunkHeader | Content
