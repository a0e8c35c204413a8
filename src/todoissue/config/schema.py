"""Configuration schema — dataclasses for every config section.

``TodoIssueConfig`` is the mutable, file/env-facing shape. It is resolved
once per run into a frozen ``FilterConfig`` which the extraction pipeline
reads and never modifies.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

MAX_SNIPPET_LINES = 15
DEFAULT_TRIM = ' :"'


@dataclass
class MarkersConfig:
    signatures: List[str] = field(default_factory=lambda: ["TODO"])
    comments: List[str] = field(default_factory=lambda: [r"//"])
    trim: str = DEFAULT_TRIM
    max_line_length: int = 0  # 0 = no limit
    max_title_length: int = 0  # 0 = no truncation


@dataclass
class LabelsConfig:
    issue_label: str = "TODO"
    inline_pattern: str = ""
    strip_pattern: str = ""


@dataclass
class SnippetConfig:
    lines_before: int = 3
    lines_after: int = 7
    indent_char: str = "\t"
    syntax: str = ""  # empty = derive from the file extension


@dataclass
class PathsConfig:
    include: List[str] = field(default_factory=list)
    exclude: List[str] = field(default_factory=list)
    file_pattern: str = ""


@dataclass
class GitHubConfig:
    repository: str = ""
    api_url: str = "https://api.github.com"
    web_url: str = "https://github.com"
    base_sha: str = ""
    sha: str = ""
    token: str = ""
    delay_ms: int = 1000
    no_publish: bool = False


@dataclass
class TodoIssueConfig:
    version: str = "1.0"
    markers: MarkersConfig = field(default_factory=MarkersConfig)
    labels: LabelsConfig = field(default_factory=LabelsConfig)
    snippet: SnippetConfig = field(default_factory=SnippetConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)
    github: GitHubConfig = field(default_factory=GitHubConfig)

    def to_filter_config(self) -> "FilterConfig":
        """Freeze the extraction-relevant options into a FilterConfig."""
        return FilterConfig(
            comment_patterns=tuple(self.markers.comments),
            signatures=tuple(self.markers.signatures),
            inline_label_pattern=self.labels.inline_pattern or None,
            label_strip_pattern=self.labels.strip_pattern or None,
            trim_chars=self.markers.trim,
            lines_before=clamp_window(self.snippet.lines_before),
            lines_after=clamp_window(self.snippet.lines_after),
            included_paths=tuple(self.paths.include),
            excluded_paths=tuple(self.paths.exclude),
            file_pattern=self.paths.file_pattern or None,
            max_line_length=self.markers.max_line_length or None,
            max_title_length=self.markers.max_title_length or None,
            issue_label=self.labels.issue_label,
            indent_char=self.snippet.indent_char,
            snippet_syntax=self.snippet.syntax or None,
            repository=self.github.repository or None,
            sha=self.github.sha or None,
            web_url=self.github.web_url,
        )


def clamp_window(value: int) -> int:
    """Clamp a snippet window size into ``[0, MAX_SNIPPET_LINES]``."""
    return max(0, min(value, MAX_SNIPPET_LINES))


@dataclass(frozen=True)
class FilterConfig:
    """Immutable run configuration consumed by every extraction component."""

    comment_patterns: Tuple[str, ...] = (r"//",)
    signatures: Tuple[str, ...] = ("TODO",)
    inline_label_pattern: Optional[str] = None
    label_strip_pattern: Optional[str] = None
    trim_chars: str = DEFAULT_TRIM
    lines_before: int = 3
    lines_after: int = 7
    included_paths: Tuple[str, ...] = ()
    excluded_paths: Tuple[str, ...] = ()
    file_pattern: Optional[str] = None
    max_line_length: Optional[int] = None
    max_title_length: Optional[int] = None
    issue_label: str = "TODO"
    indent_char: str = "\t"
    snippet_syntax: Optional[str] = None
    repository: Optional[str] = None
    sha: Optional[str] = None
    web_url: str = "https://github.com"
