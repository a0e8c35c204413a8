"""Tests for marker items and issue body rendering."""

from todoissue.config.schema import FilterConfig
from todoissue.git.models import ChangeKind
from todoissue.items import MarkerItem, permalink, render_body


class TestPermalink:
    def test_repository_link(self):
        config = FilterConfig(repository="octo/repo", sha="abc123")
        assert permalink("src/foo.go", 13, config) == (
            "https://github.com/octo/repo/blob/abc123/src/foo.go#L10-L20"
        )

    def test_start_clamped_at_zero(self):
        config = FilterConfig(repository="octo/repo", sha="abc")
        assert permalink("a.go", 1, config).endswith("#L0-L8")

    def test_head_when_no_sha(self):
        config = FilterConfig(repository="octo/repo", web_url="https://ghe.local/")
        assert permalink("a.go", 5, config) == "https://ghe.local/octo/repo/blob/HEAD/a.go#L2-L12"

    def test_local_reference_without_repository(self):
        assert permalink("a.go", 5, FilterConfig(lines_before=0, lines_after=0)) == "a.go#L5-L5"


class TestRenderBody:
    def test_without_snippet(self):
        config = FilterConfig(repository="octo/repo", sha="abc")
        body = render_body("fix bug", "a.go", 4, config)
        assert body == (
            "**fix bug**\n\nLine: 4\nhttps://github.com/octo/repo/blob/abc/a.go#L1-L11"
        )

    def test_with_snippet(self):
        body = render_body("fix bug", "a.go", 4, FilterConfig(), "```go\nx\n```")
        assert body.endswith("#L1-L11\n\n```go\nx\n```")


class TestMarkerItem:
    def test_request_body(self):
        item = MarkerItem("t", "a.go", 1, ChangeKind.ADDITION, ("TODO", "ui"), "b")
        assert item.request_body() == {"title": "t", "body": "b", "labels": ["TODO", "ui"]}
        assert item.is_addition and not item.is_deletion

    def test_str(self):
        item = MarkerItem("old", "m.go", 6, ChangeKind.DELETION)
        assert str(item) == "old @ m.go:6"
        assert item.request_body()["body"] == ""
