"""Reconciliation data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Union

from todoissue.items.models import MarkerItem


@dataclass(frozen=True)
class RemoteIssue:
    """Open issue snapshot as returned by the tracker."""

    id: int
    title: str


@dataclass(frozen=True)
class CreateAction:
    item: MarkerItem

    def describe(self) -> str:
        return f"create issue for {self.item}"


@dataclass(frozen=True)
class CloseAction:
    issue_id: int
    title: str

    def describe(self) -> str:
        return f"close issue #{self.issue_id} ({self.title})"


Action = Union[CreateAction, CloseAction]


@dataclass
class ReconciliationPlan:
    closes: List[CloseAction] = field(default_factory=list)
    creates: List[CreateAction] = field(default_factory=list)

    @property
    def actions(self) -> List[Action]:
        """All actions in execution order: closes, then creates."""
        return [*self.closes, *self.creates]

    @property
    def is_empty(self) -> bool:
        return not self.closes and not self.creates
