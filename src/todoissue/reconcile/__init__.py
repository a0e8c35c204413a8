"""Reconciliation — match extracted markers against open issues."""

from todoissue.reconcile.models import (
    Action,
    CloseAction,
    CreateAction,
    ReconciliationPlan,
    RemoteIssue,
)
from todoissue.reconcile.planner import partition, plan_reconciliation

__all__ = [
    "Action",
    "CloseAction",
    "CreateAction",
    "ReconciliationPlan",
    "RemoteIssue",
    "partition",
    "plan_reconciliation",
]
