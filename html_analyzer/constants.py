"""Constants used across the html-analyzer package."""

from __future__ import annotations

# Restricted-dialect tag syntax
TAG_OPEN = "<"
TAG_CLOSE_PREFIX = "</"
TAG_TERMINATOR = ">"

# Observable outputs
MALFORMED_HTML = "malformed HTML"
URL_CONNECTION_ERROR = "URL connection error"

# Fetch defaults
DEFAULT_CONNECT_TIMEOUT = 10.0
DEFAULT_READ_TIMEOUT = 10.0
DEFAULT_MAX_DOCUMENT_SIZE = 10 * 1024 * 1024
FALLBACK_ENCODING = "utf-8"
DEFAULT_USER_AGENT = "html-analyzer"

TIMEOUT_ENV_VAR = "HTML_ANALYZER_TIMEOUT"
