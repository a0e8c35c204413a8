"""Issue body rendering for newly added markers."""

from __future__ import annotations

from typing import Optional

from todoissue.config.schema import FilterConfig


def permalink(file: str, line: int, config: FilterConfig) -> str:
    """Link to the marker line with the snippet window highlighted.

    Falls back to a bare ``path#Lx-Ly`` reference when no repository is
    configured (local scans).
    """
    start = max(line - config.lines_before, 0)
    end = line + config.lines_after
    anchor = f"#L{start}-L{end}"
    if not config.repository:
        return f"{file}{anchor}"
    ref = config.sha or "HEAD"
    base = config.web_url.rstrip("/")
    return f"{base}/{config.repository}/blob/{ref}/{file}{anchor}"


def render_body(
    title: str,
    file: str,
    line: int,
    config: FilterConfig,
    snippet: Optional[str] = None,
) -> str:
    parts = [f"**{title}**", "", f"Line: {line}", permalink(file, line, config)]
    if snippet:
        parts.extend(["", snippet])
    return "\n".join(parts)
