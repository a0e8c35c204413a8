"""Issue tracker layer — GitHub client, rate limiting, plan execution."""

from todoissue.tracker.github import GitHubTracker, TrackerError
from todoissue.tracker.rate_limit import RateLimiter
from todoissue.tracker.sync import SyncError, SyncReport, apply_plan

__all__ = [
    "GitHubTracker",
    "RateLimiter",
    "SyncError",
    "SyncReport",
    "TrackerError",
    "apply_plan",
]
