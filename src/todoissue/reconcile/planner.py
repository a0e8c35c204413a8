"""Reconciliation planner — decide which issues to open and close.

Identity is the issue title. Two markers with the same text in different
files cannot be told apart, and removing one closes every open issue with
that title. Repeated runs over the same diff create duplicate issues.
"""

from __future__ import annotations

from typing import Iterable, List, Tuple

from todoissue.items.models import MarkerItem
from todoissue.reconcile.models import (
    CloseAction,
    CreateAction,
    ReconciliationPlan,
    RemoteIssue,
)


def partition(items: Iterable[MarkerItem]) -> Tuple[List[MarkerItem], List[MarkerItem]]:
    """Split items into ``(additions, deletions)`` keeping diff order."""
    additions: List[MarkerItem] = []
    deletions: List[MarkerItem] = []
    for item in items:
        if item.is_addition:
            additions.append(item)
        elif item.is_deletion:
            deletions.append(item)
    return additions, deletions


def plan_reconciliation(
    items: Iterable[MarkerItem],
    open_issues: Iterable[RemoteIssue],
) -> ReconciliationPlan:
    additions, deletions = partition(items)
    removed_titles = {d.title for d in deletions}

    closes = [
        CloseAction(issue_id=issue.id, title=issue.title)
        for issue in open_issues
        if issue.title in removed_titles
    ]
    creates = [CreateAction(item=item) for item in additions]
    return ReconciliationPlan(closes=closes, creates=creates)
