"""Marker matcher — comment fragment × signature patterns, compiled once."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional

from todoissue.config.schema import FilterConfig

_TEXT_GROUP = "text"


def build_pattern(comment: str, signature: str) -> str:
    """Compose the regex for one comment fragment and one signature.

    ``//`` + ``TODO`` matches ``// TODO fix`` and ``//TODO: fix``; the text
    after the separator is captured as ``text``.
    """
    return rf"(?:{comment}) ?(?:{signature})[ :](?P<{_TEXT_GROUP}>.+)"


@dataclass(frozen=True)
class MarkerPattern:
    comment: str
    signature: str
    regex: re.Pattern[str]


@dataclass(frozen=True)
class MarkerMatch:
    signature: str
    text: str


class MarkerMatcher:
    """Ordered set of compiled marker patterns.

    Patterns are tried comment-first, signature-second; the first hit wins.
    """

    def __init__(self, patterns: List[MarkerPattern]) -> None:
        self._patterns = patterns

    @classmethod
    def from_config(cls, config: FilterConfig) -> "MarkerMatcher":
        patterns = [
            MarkerPattern(comment, signature, re.compile(build_pattern(comment, signature)))
            for comment in config.comment_patterns
            for signature in config.signatures
        ]
        return cls(patterns)

    @property
    def patterns(self) -> List[MarkerPattern]:
        return list(self._patterns)

    def match(self, line: str) -> Optional[MarkerMatch]:
        for pattern in self._patterns:
            m = pattern.regex.search(line)
            if m is None:
                continue
            return MarkerMatch(signature=pattern.signature, text=m.group(_TEXT_GROUP))
        return None
