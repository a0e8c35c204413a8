"""todoissue — turn TODO comments in a diff into GitHub issues."""

__version__ = "0.3.0"
