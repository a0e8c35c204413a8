"""Extraction driver — one sequential pass from diff text to marker items.

State carried across lines:

- the current file (unset until the first ``diff --git`` header; earlier
  lines are ignored) and whether it is eligible under the path filter;
- whether a hunk header has been seen for that file (extended header lines
  such as ``index``, ``---`` and ``+++`` come before it and are not content);
- the new-file line counter.

Ineligible files are skipped wholesale, counter included, until the next
file header.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import List, Optional, Sequence, Union

from todoissue.config.schema import FilterConfig
from todoissue.git.diff_parser import (
    LineTracker,
    classify_line,
    is_no_newline_marker,
    split_lines,
)
from todoissue.git.models import ChangeKind, FileHeader, HunkHeader
from todoissue.items.body import render_body
from todoissue.items.models import MarkerItem
from todoissue.scanner.labels import LabelExtractor
from todoissue.scanner.matcher import MarkerMatcher
from todoissue.scanner.path_filter import PathFilter
from todoissue.scanner.snippet import build_snippet

_FILE_HEADER_PREFIX = "diff --git "


@dataclass
class ExtractionResult:
    """Items found in one diff plus bookkeeping for reporting."""

    items: List[MarkerItem] = field(default_factory=list)
    scanned_files: List[str] = field(default_factory=list)
    skipped_files: List[str] = field(default_factory=list)
    duration_ms: float = 0.0

    @property
    def additions(self) -> List[MarkerItem]:
        return [i for i in self.items if i.is_addition]

    @property
    def deletions(self) -> List[MarkerItem]:
        return [i for i in self.items if i.is_deletion]


def snippet_syntax(file: str, config: FilterConfig) -> str:
    """Fenced-block tag: configured value, else the file extension."""
    if config.snippet_syntax:
        return config.snippet_syntax
    return PurePosixPath(file).suffix.lstrip(".").lower()


class Extractor:
    """Compiles the configured matchers once and runs them over diffs."""

    def __init__(self, config: FilterConfig) -> None:
        self.config = config
        self.matcher = MarkerMatcher.from_config(config)
        self.labels = LabelExtractor.from_config(config)
        self.path_filter = PathFilter.from_config(config)

    def _too_long(self, raw: str) -> bool:
        limit = self.config.max_line_length
        return limit is not None and len(raw) > limit

    def run(self, diff: Union[str, Sequence[str]]) -> ExtractionResult:
        start = time.perf_counter()
        lines = split_lines(diff) if isinstance(diff, str) else list(diff)
        result = ExtractionResult()

        tracker = LineTracker()
        current_file = ""
        eligible = False
        in_hunk = False
        hunk_start_index = 0

        for idx, raw in enumerate(lines):
            # Covers both "no file yet" and "file filtered out".
            if not eligible and not raw.startswith(_FILE_HEADER_PREFIX):
                continue

            event = classify_line(raw)

            if isinstance(event, FileHeader):
                current_file = event.path
                eligible = self.path_filter.is_eligible(current_file)
                in_hunk = False
                if eligible:
                    result.scanned_files.append(current_file)
                else:
                    result.skipped_files.append(current_file)
                continue

            if not eligible:
                continue

            if isinstance(event, HunkHeader):
                tracker.on_hunk_header(event.new_start)
                in_hunk = True
                hunk_start_index = idx + 1
                continue

            if not in_hunk or is_no_newline_marker(raw):
                continue

            line_no = tracker.next_for_content_line(event.kind)
            if not event.is_change or self._too_long(raw):
                continue

            match = self.matcher.match(event.text)
            if match is None:
                continue

            labels, title = self.labels.extract(event.text, match.text)
            if not title:
                continue

            body: Optional[str] = None
            if event.kind is ChangeKind.ADDITION:
                snippet = build_snippet(
                    lines,
                    idx,
                    hunk_start_index,
                    self.config.lines_before,
                    self.config.lines_after,
                    indent_char=self.config.indent_char,
                    syntax=snippet_syntax(current_file, self.config),
                )
                body = render_body(title, current_file, line_no, self.config, snippet)

            result.items.append(
                MarkerItem(
                    title=title,
                    file=current_file,
                    line=line_no,
                    change_kind=event.kind,
                    labels=tuple(labels),
                    body=body,
                )
            )

        result.duration_ms = round((time.perf_counter() - start) * 1000, 2)
        return result


def extract_items(diff: Union[str, Sequence[str]], config: FilterConfig) -> List[MarkerItem]:
    """Return the marker items of *diff* in diff line order."""
    return Extractor(config).run(diff).items
