"""Unified diff line classifier and new-file line tracker.

The classifier looks at one line at a time and never keeps state. The
tracker owns the only piece of numbering state: the new-file line counter,
reset by each hunk header and advanced by every non-deletion content line.
"""

from __future__ import annotations

import re
from typing import List

from todoissue.git.models import ChangeKind, Content, DiffEvent, FileHeader, HunkHeader

# --- Regex patterns for diff parsing ---

_OLD_PATH = r'(?:a/.*|"a/(?:[^"\\]|\\.)*")'
_DIFF_HEADER_RE = re.compile(rf"^diff --git {_OLD_PATH} b/(.*)$")
_QUOTED_DIFF_HEADER_RE = re.compile(rf'^diff --git {_OLD_PATH} "b/((?:[^"\\]|\\.)*)"$')
_C_ESCAPE_RE = re.compile(r"\\([0-3][0-7]{2}|.)")
_C_ESCAPES = {"a": 7, "b": 8, "t": 9, "n": 10, "v": 11, "f": 12, "r": 13}
_HUNK_HEADER_RE = re.compile(r"^@@ (.+?) @@")
_NEW_RANGE_RE = re.compile(r"\+(\S+)")
_NO_NEWLINE_RE = re.compile(r"^\\ No newline at end of file$")


class DiffParseError(Exception):
    """Raised when the diff cannot be walked any further."""


class HunkHeaderError(DiffParseError):
    """Raised when a hunk header has no parseable new-range start."""

    def __init__(self, line: str) -> None:
        super().__init__(f"Malformed hunk header: {line!r}")
        self.line = line


def split_lines(diff_text: str) -> List[str]:
    r"""Split diff text on ``\n`` only, dropping the CR of CRLF endings.

    Form feeds, ``\u2028`` and other characters ``str.splitlines`` treats as
    breaks belong to the source line they appear in.
    """
    lines = [line[:-1] if line.endswith("\r") else line for line in diff_text.split("\n")]
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def _unescape(m: "re.Match[str]") -> bytes:
    token = m.group(1)
    if len(token) == 3:
        return bytes([int(token, 8)])
    if token in _C_ESCAPES:
        return bytes([_C_ESCAPES[token]])
    return token.encode("utf-8")


def unquote_path(quoted: str) -> str:
    """Undo git's C-style path quoting (``caf\\303\\251.go`` -> ``café.go``)."""
    out = bytearray()
    pos = 0
    for m in _C_ESCAPE_RE.finditer(quoted):
        out += quoted[pos : m.start()].encode("utf-8")
        out += _unescape(m)
        pos = m.end()
    out += quoted[pos:].encode("utf-8")
    return out.decode("utf-8", errors="replace")


def is_no_newline_marker(line: str) -> bool:
    """True for the ``\\ No newline at end of file`` meta line."""
    return _NO_NEWLINE_RE.match(line) is not None


def parse_hunk_start(line: str) -> int:
    """Return the new-range start of a hunk header line.

    ``@@ -10,5 +12,7 @@`` → ``12``. Raises HunkHeaderError when the ``+``
    group is missing or its first comma-delimited token is not a number.
    """
    m = _HUNK_HEADER_RE.match(line)
    if m is None:
        raise HunkHeaderError(line)
    rng = _NEW_RANGE_RE.search(m.group(1))
    if rng is None:
        raise HunkHeaderError(line)
    start = rng.group(1).split(",")[0]
    try:
        return int(start)
    except ValueError:
        raise HunkHeaderError(line) from None


def classify_line(line: str) -> DiffEvent:
    """Classify a single raw diff line."""
    m = _QUOTED_DIFF_HEADER_RE.match(line)
    if m:
        return FileHeader(path=unquote_path(m.group(1)))
    m = _DIFF_HEADER_RE.match(line)
    if m:
        return FileHeader(path=m.group(1))

    if _HUNK_HEADER_RE.match(line):
        return HunkHeader(new_start=parse_hunk_start(line))

    if not line.strip():
        return Content(kind=ChangeKind.CONTEXT, text=line)

    marker = line[0]
    if marker == "+":
        return Content(kind=ChangeKind.ADDITION, text=line[1:])
    if marker == "-":
        return Content(kind=ChangeKind.DELETION, text=line[1:])
    if marker == " ":
        return Content(kind=ChangeKind.CONTEXT, text=line[1:])
    return Content(kind=ChangeKind.CONTEXT, text=line)


def is_header(line: str) -> bool:
    """True for file and hunk header lines."""
    return bool(
        _QUOTED_DIFF_HEADER_RE.match(line)
        or _DIFF_HEADER_RE.match(line)
        or _HUNK_HEADER_RE.match(line)
    )


class LineTracker:
    """New-file line counter.

    Deletion lines describe old-file positions, which are not tracked
    separately: they receive the current counter value without advancing it.
    """

    def __init__(self) -> None:
        self.counter = 0

    def on_hunk_header(self, new_start: int) -> None:
        self.counter = new_start

    def next_for_content_line(self, kind: ChangeKind) -> int:
        line_no = self.counter
        if kind is not ChangeKind.DELETION:
            self.counter += 1
        return line_no
