"""GitHub REST client — compare diff, open issues, create and close issues.

Every request goes through a fixed-delay rate limiter and is attempted
exactly once. Any non-success status raises TrackerError.
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any, Dict, List, Optional, Sequence

import httpx

from todoissue.reconcile.models import RemoteIssue
from todoissue.tracker.rate_limit import RateLimiter

_LOG = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"
_PER_PAGE = 100
_JSON = "application/vnd.github+json"
_DIFF = "application/vnd.github.v3.diff"


class TrackerError(Exception):
    """Raised when the tracker answers with an unexpected status."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    def __str__(self) -> str:
        text = super().__str__()
        if self.status_code is not None:
            text = f"{text} (HTTP {self.status_code})"
        if self.body:
            text = f"{text}: {self.body[:200]}"
        return text


class GitHubTracker:
    """Issue tracker backed by one GitHub repository.

    *client* may be injected (tests use ``httpx.MockTransport``); otherwise
    one is created and closed with the tracker.
    """

    def __init__(
        self,
        repository: str,
        token: str,
        *,
        api_url: str = DEFAULT_API_URL,
        limiter: Optional[RateLimiter] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.repository = repository
        self._base = f"{api_url.rstrip('/')}/repos/{repository}"
        self._limiter = limiter or RateLimiter(1.0)
        self._owns_client = client is None
        self._client = client or httpx.Client()
        self._headers = {
            "Authorization": f"Bearer {token}",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    def __enter__(self) -> "GitHubTracker":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    # ---- transport ----

    def _request(
        self,
        method: str,
        path: str,
        *,
        expected: Sequence[int] = (200,),
        accept: str = _JSON,
        **kwargs: Any,
    ) -> httpx.Response:
        self._limiter.wait()
        url = f"{self._base}{path}"
        _LOG.debug("%s %s", method, url)
        try:
            response = self._client.request(
                method, url, headers={**self._headers, "Accept": accept}, **kwargs
            )
        except httpx.HTTPError as exc:
            raise TrackerError(f"{method} {path} failed: {exc}") from exc
        if response.status_code not in expected:
            raise TrackerError(f"{method} {path} failed", response.status_code, response.text)
        return response

    # ---- reads ----

    def get_diff(self, base: str, head: str) -> str:
        """Unified diff between *base* and *head* (GitHub compare)."""
        response = self._request("GET", f"/compare/{base}...{head}", accept=_DIFF)
        return response.text

    def list_open_issues(self) -> List[RemoteIssue]:
        """All open issues, pull requests excluded."""
        issues: List[RemoteIssue] = []
        page = 1
        while True:
            response = self._request(
                "GET",
                "/issues",
                params={"state": "open", "per_page": _PER_PAGE, "page": page},
            )
            batch = response.json()
            if not isinstance(batch, list):
                raise TrackerError("Unexpected issue list payload", response.status_code)
            for entry in batch:
                if "pull_request" in entry:
                    continue
                issues.append(RemoteIssue(id=int(entry["number"]), title=entry["title"]))
            if len(batch) < _PER_PAGE:
                break
            page += 1
        _LOG.info("Fetched %d open issues from %s", len(issues), self.repository)
        return issues

    # ---- writes ----

    def create_issue(self, title: str, body: str, labels: Sequence[str]) -> int:
        """Open an issue, return its number."""
        payload: Dict[str, Any] = {"title": title, "body": body, "labels": list(labels)}
        response = self._request("POST", "/issues", expected=(201,), json=payload)
        number = int(response.json()["number"])
        _LOG.info("Created issue #%d: %s", number, title)
        return number

    def close_issue(self, number: int, comment: str) -> None:
        """Close issue *number* and leave *comment* on it."""
        self._request("PATCH", f"/issues/{number}", json={"state": "closed"})
        self._request("POST", f"/issues/{number}/comments", expected=(201,), json={"body": comment})
        _LOG.info("Closed issue #%d", number)
