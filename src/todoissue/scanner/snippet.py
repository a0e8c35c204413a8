"""Code-context snippet for issue bodies."""

from __future__ import annotations

from typing import List, Optional, Sequence

from todoissue.git.diff_parser import is_header, is_no_newline_marker


def _strip_change_marker(line: str) -> str:
    if line[:1] in ("+", "-", " "):
        return line[1:]
    return line


def _leading_count(line: str, indent_char: str) -> int:
    return len(line) - len(line.lstrip(indent_char))


def dedent_lines(lines: List[str], indent_char: str = "\t") -> List[str]:
    """Remove the indentation (in *indent_char* units) common to all lines."""
    if not lines:
        return []
    common = min(_leading_count(line, indent_char) for line in lines)
    return [line[common:] for line in lines]


def build_snippet(
    diff_lines: Sequence[str],
    current_index: int,
    hunk_start_index: int,
    before: int,
    after: int,
    *,
    indent_char: str = "\t",
    syntax: str = "",
) -> Optional[str]:
    """Fenced code block around ``diff_lines[current_index]``.

    Takes up to *before* lines back (never above *hunk_start_index*) and up
    to *after* lines forward (never past the next file or hunk header).
    Blank lines are dropped but still use up window slots. Returns None when
    nothing is left.
    """
    start = max(hunk_start_index, current_index - before, 0)
    end = current_index
    limit = min(len(diff_lines) - 1, current_index + after)
    while end < limit and not is_header(diff_lines[end + 1]):
        end += 1

    kept: List[str] = []
    for raw in diff_lines[start : end + 1]:
        if is_no_newline_marker(raw):
            continue
        line = _strip_change_marker(raw).rstrip()
        if not line.strip():
            continue
        kept.append(line)

    if not kept:
        return None

    body = "\n".join(dedent_lines(kept, indent_char))
    return f"```{syntax}\n{body}\n```"
