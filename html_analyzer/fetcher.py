"""HTTP retrieval of documents to analyze."""

from __future__ import annotations

import codecs
import logging

import requests

from .config import AnalyzerConfig
from .constants import FALLBACK_ENCODING
from .exceptions import DocumentTooLargeError, FetchError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


def build_session(config: AnalyzerConfig) -> requests.Session:
    """Create a session sending the configured ``User-Agent``."""
    session = requests.Session()
    session.headers.update({"User-Agent": config.user_agent})
    return session


def _response_encoding(response: requests.Response) -> str:
    """Pick the charset declared by the server, falling back to UTF-8.

    `requests` assumes ISO-8859-1 for ``text/*`` responses without a charset;
    documents are treated as UTF-8 instead unless the header says otherwise.
    """
    content_type = response.headers.get("Content-Type", "")
    if "charset=" not in content_type.lower() or not response.encoding:
        return FALLBACK_ENCODING
    try:
        return codecs.lookup(response.encoding).name
    except LookupError:
        logger.warning("Unknown charset %r, decoding as %s", response.encoding, FALLBACK_ENCODING)
        return FALLBACK_ENCODING


def _read_body(response: requests.Response, url: str, limit: int) -> bytes:
    declared = response.headers.get("Content-Length", "").strip()
    # Unparseable lengths are ignored; the streamed size is still enforced
    if declared.isdecimal() and declared.isascii() and int(declared) > limit:
        raise DocumentTooLargeError(url, limit)

    body = bytearray()
    for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
        body.extend(chunk)
        if len(body) > limit:
            raise DocumentTooLargeError(url, limit)
    return bytes(body)


def fetch_document(
    url: str, config: AnalyzerConfig | None = None, session: requests.Session | None = None
) -> str:
    """Retrieve a document and return its full text.

    Args:
        url: Locator of the document.
        config: Timeouts, size limit, and request headers. Defaults to a new
            `AnalyzerConfig` when omitted.
        session: Optional session to reuse; a new one is created and closed
            when omitted.

    Returns:
        str: The complete decoded body.

    Raises:
        DocumentTooLargeError: If the body exceeds `config.max_document_size`.
        FetchError: If the request fails, times out, or returns a non-2xx status.

    Examples:
        text = fetch_document("http://example.com/page.html")
    """
    config = config or AnalyzerConfig()
    owns_session = session is None
    if session is None:
        session = build_session(config)

    logger.debug("Fetching %s", url)
    try:
        with session.get(
            url,
            timeout=(config.connect_timeout, config.read_timeout),
            stream=True,
        ) as response:
            response.raise_for_status()
            if response.status_code >= 300:
                raise requests.HTTPError(
                    f"Unexpected status {response.status_code} for url: {url}", response=response
                )
            body = _read_body(response, url, config.max_document_size)
            encoding = _response_encoding(response)
    except DocumentTooLargeError as error:
        logger.warning("%s", error)
        raise
    except requests.RequestException as error:
        logger.warning("Failed to fetch %s: %s", url, error)
        raise FetchError(f"Failed to fetch {url}: {error}") from error
    finally:
        if owns_session:
            session.close()

    logger.debug("Fetched %d bytes from %s", len(body), url)
    return body.decode(encoding, errors="replace")
