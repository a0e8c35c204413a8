"""Marker item model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from todoissue.git.models import ChangeKind


@dataclass(frozen=True)
class MarkerItem:
    """A marker comment added or removed by the diff.

    ``body`` is only set for additions; deletions exist solely to close
    the issue that carries the same title.
    """

    title: str
    file: str
    line: int
    change_kind: ChangeKind
    labels: Tuple[str, ...] = ()
    body: Optional[str] = None

    @property
    def is_addition(self) -> bool:
        return self.change_kind is ChangeKind.ADDITION

    @property
    def is_deletion(self) -> bool:
        return self.change_kind is ChangeKind.DELETION

    def request_body(self) -> Dict[str, Any]:
        """Payload for the issue-creation request."""
        return {"title": self.title, "body": self.body or "", "labels": list(self.labels)}

    def __str__(self) -> str:
        return f"{self.title} @ {self.file}:{self.line}"
