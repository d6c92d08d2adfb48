"""
html-analyzer: find the most deeply nested text in a restricted HTML document.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    html-analyzer http://example.com/page.html

Library Usage:
    from html_analyzer import analyze, fetch_document

    text = fetch_document("http://example.com/page.html")
    print(analyze(text))
"""

from .analyzer import analyze, check_document, scan
from .classifier import classify_line, is_valid_tag_name
from .config import AnalyzerConfig, ConfigError
from .constants import MALFORMED_HTML, URL_CONNECTION_ERROR
from .exceptions import DocumentTooLargeError, FetchError, MalformedDocumentError
from .fetcher import fetch_document
from .models import ClassifiedLine, LineKind, MalformedReason, Verdict

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "analyze",
    "scan",
    "check_document",
    "classify_line",
    "fetch_document",
    # Data models
    "AnalyzerConfig",
    "ClassifiedLine",
    "LineKind",
    "MalformedReason",
    "Verdict",
    # Utilities
    "is_valid_tag_name",
    "MALFORMED_HTML",
    "URL_CONNECTION_ERROR",
    # Exceptions
    "ConfigError",
    "DocumentTooLargeError",
    "FetchError",
    "MalformedDocumentError",
    # Version
    "__version__",
]
