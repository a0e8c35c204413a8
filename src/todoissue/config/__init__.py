"""Configuration loading, schema, and defaults."""

from todoissue.config.loader import ConfigError, load_config, require_sync_options
from todoissue.config.schema import FilterConfig, TodoIssueConfig

__all__ = [
    "ConfigError",
    "FilterConfig",
    "TodoIssueConfig",
    "load_config",
    "require_sync_options",
]
