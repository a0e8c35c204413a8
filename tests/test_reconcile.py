"""Tests for the reconciliation planner and issue snapshots."""

import pytest

from todoissue.git.models import ChangeKind
from todoissue.items.models import MarkerItem
from todoissue.reconcile import (
    CloseAction,
    CreateAction,
    RemoteIssue,
    partition,
    plan_reconciliation,
)
from todoissue.reconcile.snapshot import SnapshotError, load_issue_snapshot


def _item(title: str, kind: ChangeKind, line: int = 1, file: str = "a.go") -> MarkerItem:
    return MarkerItem(title=title, file=file, line=line, change_kind=kind, labels=("TODO",))


ADD = ChangeKind.ADDITION
DEL = ChangeKind.DELETION


class TestPartition:
    def test_keeps_diff_order(self):
        items = [_item("a", ADD), _item("b", DEL), _item("c", ADD)]
        additions, deletions = partition(items)
        assert [i.title for i in additions] == ["a", "c"]
        assert [i.title for i in deletions] == ["b"]

    def test_context_items_ignored(self):
        additions, deletions = partition([_item("ctx", ChangeKind.CONTEXT)])
        assert additions == [] and deletions == []


class TestPlanReconciliation:
    def test_create_for_every_addition(self):
        items = [_item("fix bug", ADD), _item("add caching", ADD)]
        plan = plan_reconciliation(items, [])
        assert plan.closes == []
        assert [a.item.title for a in plan.creates] == ["fix bug", "add caching"]

    def test_close_by_exact_title(self):
        issues = [RemoteIssue(3, "old task"), RemoteIssue(4, "Old task"), RemoteIssue(5, "other")]
        plan = plan_reconciliation([_item("old task", DEL)], issues)
        assert plan.closes == [CloseAction(issue_id=3, title="old task")]
        assert plan.creates == []

    def test_all_issues_with_title_close(self):
        issues = [RemoteIssue(10, "dup"), RemoteIssue(11, "dup")]
        plan = plan_reconciliation([_item("dup", DEL, file="x.go")], issues)
        assert [c.issue_id for c in plan.closes] == [10, 11]

    def test_deletion_without_issue_is_noop(self):
        plan = plan_reconciliation([_item("gone", DEL)], [RemoteIssue(1, "kept")])
        assert plan.is_empty

    def test_moved_marker_closes_and_recreates(self):
        items = [_item("task", DEL, file="a.go"), _item("task", ADD, file="b.go")]
        plan = plan_reconciliation(items, [RemoteIssue(7, "task")])
        assert [type(a) for a in plan.actions] == [CloseAction, CreateAction]
        assert plan.creates[0].item.file == "b.go"

    def test_open_issues_iterated_once(self):
        issues = iter([RemoteIssue(1, "x")])
        plan = plan_reconciliation([_item("x", DEL)], issues)
        assert [c.issue_id for c in plan.closes] == [1]

    def test_describe(self):
        item = _item("fix bug", ADD, line=13, file="src/foo.go")
        assert CreateAction(item).describe() == "create issue for fix bug @ src/foo.go:13"
        assert CloseAction(4, "old").describe() == "close issue #4 (old)"


class TestSnapshot:
    def test_yaml_list(self, tmp_path):
        path = tmp_path / "issues.yaml"
        path.write_text("- number: 12\n  title: fix bug\n- id: 13\n  title: add caching\n")
        assert load_issue_snapshot(path) == [
            RemoteIssue(12, "fix bug"),
            RemoteIssue(13, "add caching"),
        ]

    def test_json_from_gh(self, tmp_path):
        path = tmp_path / "issues.json"
        path.write_text('[{"number": 5, "title": "old task"}]')
        assert load_issue_snapshot(path) == [RemoteIssue(5, "old task")]

    def test_empty_file(self, tmp_path):
        path = tmp_path / "issues.yaml"
        path.write_text("")
        assert load_issue_snapshot(path) == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(SnapshotError, match="Failed to read"):
            load_issue_snapshot(tmp_path / "nope.yaml")

    def test_not_a_list(self, tmp_path):
        path = tmp_path / "issues.yaml"
        path.write_text("number: 1\ntitle: x\n")
        with pytest.raises(SnapshotError, match="expected a list"):
            load_issue_snapshot(path)

    def test_missing_title(self, tmp_path):
        path = tmp_path / "issues.yaml"
        path.write_text("- number: 1\n")
        with pytest.raises(SnapshotError, match="entry 1"):
            load_issue_snapshot(path)

    def test_non_numeric_number(self, tmp_path):
        path = tmp_path / "issues.yaml"
        path.write_text("- number: abc\n  title: x\n")
        with pytest.raises(SnapshotError, match="non-numeric"):
            load_issue_snapshot(path)
