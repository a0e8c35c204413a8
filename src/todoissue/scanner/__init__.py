"""Scanner — extraction driver, marker matcher, labels, filters, snippets."""

from todoissue.scanner.engine import ExtractionResult, Extractor, extract_items
from todoissue.scanner.labels import LabelExtractor
from todoissue.scanner.matcher import MarkerMatch, MarkerMatcher
from todoissue.scanner.path_filter import PathFilter
from todoissue.scanner.snippet import build_snippet, dedent_lines

__all__ = [
    "ExtractionResult",
    "Extractor",
    "LabelExtractor",
    "MarkerMatch",
    "MarkerMatcher",
    "PathFilter",
    "build_snippet",
    "dedent_lines",
    "extract_items",
]
