"""Inline label extraction and title cleanup.

With ``inline_pattern = "\\((\\w+)\\)"`` and ``strip_pattern = "\\(\\w+\\)"``::

    // TODO: fix XSS (security)   ->  labels ["TODO", "security"], title "fix XSS"

Labels are not deduplicated. Empty captures are dropped, since GitHub
rejects a blank label name.
"""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from todoissue.config.schema import FilterConfig


def trim_title(text: str, trim_chars: str) -> str:
    return text.strip(trim_chars).rstrip()


class LabelExtractor:
    def __init__(
        self,
        issue_label: str,
        inline_pattern: Optional[re.Pattern[str]] = None,
        strip_pattern: Optional[re.Pattern[str]] = None,
        trim_chars: str = " ",
        max_title_length: Optional[int] = None,
    ) -> None:
        self.issue_label = issue_label
        self.inline_pattern = inline_pattern
        self.strip_pattern = strip_pattern
        self.trim_chars = trim_chars
        self.max_title_length = max_title_length

    @classmethod
    def from_config(cls, config: FilterConfig) -> "LabelExtractor":
        return cls(
            issue_label=config.issue_label,
            inline_pattern=re.compile(config.inline_label_pattern) if config.inline_label_pattern else None,
            strip_pattern=re.compile(config.label_strip_pattern) if config.label_strip_pattern else None,
            trim_chars=config.trim_chars,
            max_title_length=config.max_title_length,
        )

    def find_labels(self, line: str) -> List[str]:
        """Every non-overlapping inline-label match in *line*, in order."""
        if self.inline_pattern is None:
            return []
        labels: List[str] = []
        for m in self.inline_pattern.finditer(line):
            value = m.group(1) if m.re.groups else m.group(0)
            if value:
                labels.append(value)
        return labels

    def extract(self, line: str, text: str) -> Tuple[List[str], str]:
        """Return ``(labels, title)`` for a matched marker.

        *line* is the full diff line (labels are searched there), *text* is
        the marker text captured by the matcher.
        """
        labels = [self.issue_label]
        if self.inline_pattern is not None:
            labels.extend(self.find_labels(line))
            if self.strip_pattern is not None:
                text = self.strip_pattern.sub("", text)
        title = trim_title(text, self.trim_chars)
        if self.max_title_length and len(title) > self.max_title_length:
            title = title[: self.max_title_length].rstrip()
        return labels, title
