"""Load and merge configuration from .todoissue.toml, CLI flags, and env vars.

Environment variables follow the GitHub Actions input convention
(``INPUT_<NAME>``), with ``GITHUB_REPOSITORY`` / ``GITHUB_SHA`` as fallbacks
for the repository and head commit.
"""

from __future__ import annotations

import os
import re
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from todoissue.config.schema import (
    GitHubConfig,
    LabelsConfig,
    MarkersConfig,
    PathsConfig,
    SnippetConfig,
    TodoIssueConfig,
)

CONFIG_FILENAME = ".todoissue.toml"


class ConfigError(Exception):
    """Raised when config is malformed, unreadable, or incomplete."""


def find_config_file(repo_root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = repo_root / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _split_list(value: str) -> List[str]:
    return [p.strip() for p in re.split(r"[,\n]", value) if p.strip()]


def _env_int(name: str) -> Optional[int]:
    val = os.environ.get(name)
    if not val:
        return None
    try:
        return int(val)
    except ValueError:
        return None


def _merge_env_overrides(cfg: TodoIssueConfig) -> None:
    """Apply INPUT_* / GITHUB_* environment variable overrides."""
    env = os.environ

    if val := env.get("INPUT_REPOSITORY") or env.get("GITHUB_REPOSITORY"):
        cfg.github.repository = val
    if val := env.get("INPUT_SHA") or env.get("GITHUB_SHA"):
        cfg.github.sha = val
    if val := env.get("INPUT_BASE_SHA"):
        cfg.github.base_sha = val
    if val := env.get("INPUT_TOKEN") or env.get("GITHUB_TOKEN"):
        cfg.github.token = val
    if val := env.get("INPUT_NOPUBLISH"):
        if val.strip().lower() in ("true", "false"):
            cfg.github.no_publish = val.strip().lower() == "true"
    if (timeout := _env_int("INPUT_TIMEOUT")) is not None:
        cfg.github.delay_ms = max(timeout, 0)

    if val := env.get("INPUT_TODO"):
        cfg.markers.signatures = [val]
    if val := env.get("INPUT_COMMENT"):
        cfg.markers.comments = [val]
    if val := env.get("INPUT_TRIM"):
        cfg.markers.trim = val
    if (max_len := _env_int("INPUT_MAX_LINE_LENGTH")) is not None:
        cfg.markers.max_line_length = max(max_len, 0)

    if val := env.get("INPUT_LABELS_PATTERN"):
        cfg.labels.inline_pattern = val
    if val := env.get("INPUT_LABELS_REPLACE_PATTERN"):
        cfg.labels.strip_pattern = val
    if val := env.get("INPUT_GITHUB_LABEL"):
        cfg.labels.issue_label = val

    if (before := _env_int("INPUT_LINES_BEFORE")) is not None:
        cfg.snippet.lines_before = before
    if (after := _env_int("INPUT_LINES_AFTER")) is not None:
        cfg.snippet.lines_after = after

    if val := env.get("INPUT_INCLUDED_PATHS"):
        cfg.paths.include = _split_list(val)
    if val := env.get("INPUT_EXCLUDED_PATHS"):
        cfg.paths.exclude = _split_list(val)
    if val := env.get("INPUT_FILE_PATTERN"):
        cfg.paths.file_pattern = val


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    import dataclasses

    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in data.get(section, {}).items() if k in valid_fields}
    return cls(**filtered)


def _check_pattern(pattern: str, option: str) -> None:
    try:
        re.compile(pattern)
    except re.error as exc:
        raise ConfigError(f"Invalid regular expression for {option}: {pattern!r} ({exc})") from exc


def validate_config(cfg: TodoIssueConfig) -> None:
    """Reject configurations the extraction pipeline cannot run with."""
    if not cfg.markers.signatures or not all(s.strip() for s in cfg.markers.signatures):
        raise ConfigError("At least one non-empty marker signature is required (markers.signatures)")
    if not cfg.markers.comments:
        raise ConfigError("At least one comment pattern is required (markers.comments)")
    for sig in cfg.markers.signatures:
        _check_pattern(sig, "markers.signatures")
    for comment in cfg.markers.comments:
        _check_pattern(comment, "markers.comments")
    if cfg.labels.inline_pattern:
        _check_pattern(cfg.labels.inline_pattern, "labels.inline_pattern")
    if cfg.labels.strip_pattern:
        _check_pattern(cfg.labels.strip_pattern, "labels.strip_pattern")
    if cfg.paths.file_pattern:
        _check_pattern(cfg.paths.file_pattern, "paths.file_pattern")
    if len(cfg.snippet.indent_char) != 1:
        raise ConfigError("snippet.indent_char must be exactly one character")


def require_sync_options(cfg: TodoIssueConfig, *, need_base: bool = True) -> None:
    """Raise ConfigError unless everything a GitHub sync needs is present.

    The base sha is only needed when the diff comes from the compare API.
    """
    required = [
        ("repository", cfg.github.repository),
        ("base sha", cfg.github.base_sha if need_base else "-"),
        ("head sha", cfg.github.sha),
        ("token", cfg.github.token),
    ]
    missing = [name for name, value in required if not value.strip()]
    if missing:
        raise ConfigError(f"Missing required parameters: {', '.join(missing)}")


def load_config(
    repo_root: Path,
    config_override: Optional[str] = None,
) -> TodoIssueConfig:
    """Load, validate, and return a TodoIssueConfig."""
    config_path = find_config_file(repo_root, config_override)

    if config_path is None:
        cfg = TodoIssueConfig()
    else:
        raw = _parse_toml(config_path)
        try:
            cfg = TodoIssueConfig(
                version=raw.get("version", "1.0"),
                markers=_build_section(raw, MarkersConfig, "markers"),
                labels=_build_section(raw, LabelsConfig, "labels"),
                snippet=_build_section(raw, SnippetConfig, "snippet"),
                paths=_build_section(raw, PathsConfig, "paths"),
                github=_build_section(raw, GitHubConfig, "github"),
            )
        except (TypeError, AttributeError) as exc:
            raise ConfigError(f"Malformed section in {config_path}: {exc}") from exc

    _merge_env_overrides(cfg)
    validate_config(cfg)
    return cfg
