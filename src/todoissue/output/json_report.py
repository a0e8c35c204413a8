"""JSON reporter for CI pipelines and scripting."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from todoissue.items.models import MarkerItem
from todoissue.reconcile.models import ReconciliationPlan
from todoissue.scanner.engine import ExtractionResult


def item_to_dict(item: MarkerItem) -> Dict[str, Any]:
    return {
        "title": item.title,
        "file": item.file,
        "line": item.line,
        "kind": item.change_kind.value,
        "labels": list(item.labels),
        **({"body": item.body} if item.body is not None else {}),
    }


def to_dict(result: ExtractionResult, plan: Optional[ReconciliationPlan] = None) -> Dict[str, Any]:
    """Convert an extraction (and optionally its plan) to a JSON-serialisable dict."""
    data: Dict[str, Any] = {
        "version": "1.0",
        "scanned_files": len(result.scanned_files),
        "skipped_files": result.skipped_files,
        "additions": [item_to_dict(i) for i in result.additions],
        "deletions": [item_to_dict(i) for i in result.deletions],
        "duration_ms": result.duration_ms,
    }
    if plan is not None:
        closes: List[Dict[str, Any]] = [
            {"issue": c.issue_id, "title": c.title} for c in plan.closes
        ]
        creates: List[Dict[str, Any]] = [item_to_dict(c.item) for c in plan.creates]
        data["plan"] = {"close": closes, "create": creates}
    return data


def render(result: ExtractionResult, plan: Optional[ReconciliationPlan] = None) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(result, plan), indent=2)
