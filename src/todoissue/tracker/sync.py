"""Apply a reconciliation plan to the tracker, stopping at the first failure."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Protocol, Sequence

from todoissue.reconcile.models import (
    Action,
    CloseAction,
    CreateAction,
    ReconciliationPlan,
    RemoteIssue,
)
from todoissue.tracker.github import TrackerError

_LOG = logging.getLogger(__name__)


class IssueTracker(Protocol):
    def list_open_issues(self) -> List[RemoteIssue]: ...

    def create_issue(self, title: str, body: str, labels: Sequence[str]) -> int: ...

    def close_issue(self, number: int, comment: str) -> None: ...


@dataclass
class SyncReport:
    created: List[int] = field(default_factory=list)
    closed: List[int] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.created) + len(self.closed)


class SyncError(Exception):
    """A tracker call failed; nothing after it was attempted."""

    def __init__(
        self,
        failed: Action,
        cause: TrackerError,
        remaining: List[Action],
        report: SyncReport,
    ) -> None:
        super().__init__(f"Failed to {failed.describe()}: {cause}")
        self.failed = failed
        self.cause = cause
        self.remaining = remaining
        self.report = report


def close_comment(sha: str) -> str:
    return f"Closed automatically with {sha}"


def apply_plan(plan: ReconciliationPlan, tracker: IssueTracker, sha: str) -> SyncReport:
    """Run every action of *plan* in order: closes, then creates."""
    report = SyncReport()
    actions = plan.actions
    for pos, action in enumerate(actions):
        try:
            if isinstance(action, CloseAction):
                tracker.close_issue(action.issue_id, close_comment(sha))
                report.closed.append(action.issue_id)
            elif isinstance(action, CreateAction):
                number = tracker.create_issue(**action.item.request_body())
                report.created.append(number)
        except TrackerError as exc:
            _LOG.error("Sync aborted on %s", action.describe())
            raise SyncError(action, exc, actions[pos + 1 :], report) from exc
    return report
