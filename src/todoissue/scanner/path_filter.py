"""Path eligibility — include/exclude prefix lists and a file-name regex."""

from __future__ import annotations

import re
from typing import Iterable, Optional, Tuple

from todoissue.config.schema import FilterConfig


def _normalise(prefixes: Iterable[str]) -> Tuple[str, ...]:
    return tuple(p.strip().lower() for p in prefixes if p.strip())


class PathFilter:
    """Decide whether a file's lines take part in extraction.

    ============  ============  ==================
    excluded      included      dropped when
    ============  ============  ==================
    empty         empty         never
    non-empty     empty         excluded
    empty         non-empty     not included
    non-empty     non-empty     excluded and not included
    ============  ============  ==================

    The included list acts as an allow-list exception to the excluded one.
    Prefix checks are case-insensitive. The file-name regex, when set, must
    match as well.
    """

    def __init__(
        self,
        included: Iterable[str] = (),
        excluded: Iterable[str] = (),
        file_pattern: Optional[re.Pattern[str]] = None,
    ) -> None:
        self._included = _normalise(included)
        self._excluded = _normalise(excluded)
        self._file_pattern = file_pattern

    @classmethod
    def from_config(cls, config: FilterConfig) -> "PathFilter":
        return cls(
            included=config.included_paths,
            excluded=config.excluded_paths,
            file_pattern=re.compile(config.file_pattern) if config.file_pattern else None,
        )

    def _is_excluded(self, path: str) -> bool:
        return any(path.startswith(p) for p in self._excluded)

    def _is_included(self, path: str) -> bool:
        return any(path.startswith(p) for p in self._included)

    def passes_prefixes(self, path: str) -> bool:
        lowered = path.lower()
        if self._excluded and self._included:
            return not (self._is_excluded(lowered) and not self._is_included(lowered))
        if self._excluded:
            return not self._is_excluded(lowered)
        if self._included:
            return self._is_included(lowered)
        return True

    def passes_file_pattern(self, path: str) -> bool:
        if self._file_pattern is None:
            return True
        return self._file_pattern.search(path) is not None

    def is_eligible(self, path: str) -> bool:
        return self.passes_prefixes(path) and self.passes_file_pattern(path)
