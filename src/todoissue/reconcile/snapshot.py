"""Load an open-issue snapshot from a YAML (or JSON) file.

Accepted shape: a list of mappings with ``number`` (or ``id``) and
``title``, which is also what ``gh issue list --json number,title`` prints::

    - number: 12
      title: fix bug
"""

from __future__ import annotations

from pathlib import Path
from typing import List

import yaml

from todoissue.reconcile.models import RemoteIssue


class SnapshotError(Exception):
    """Raised when an issue snapshot file cannot be read."""


def load_issue_snapshot(path: Path) -> List[RemoteIssue]:
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as exc:
        raise SnapshotError(f"Failed to read issue snapshot {path}: {exc}") from exc

    if data is None:
        return []
    if not isinstance(data, list):
        raise SnapshotError(f"{path}: expected a list of issues")

    issues: List[RemoteIssue] = []
    for pos, entry in enumerate(data, 1):
        if not isinstance(entry, dict):
            raise SnapshotError(f"{path}: entry {pos} is not a mapping")
        number = entry.get("number", entry.get("id"))
        title = entry.get("title")
        if number is None or title is None:
            raise SnapshotError(f"{path}: entry {pos} needs 'number' and 'title'")
        try:
            issues.append(RemoteIssue(id=int(number), title=str(title)))
        except (TypeError, ValueError) as exc:
            raise SnapshotError(f"{path}: entry {pos} has a non-numeric issue number") from exc
    return issues
