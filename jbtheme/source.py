"""Retrieve raw scheme documents from the network or the local filesystem."""

from pathlib import Path

import httpx

from jbtheme.logger import get_logger
from jbtheme.resilience import with_retry

logger = get_logger(__name__)

DEFAULT_COLOR_SCHEMES_MANAGER_URL = (
    "https://raw.githubusercontent.com/JetBrains/intellij-community/master/"
    "platform/platform-resources/src/DefaultColorSchemesManager.xml"
)
DEFAULT_TIMEOUT = 10.0


class SchemeSourceError(Exception):
    """Raised when a scheme document cannot be retrieved."""


def is_url(source: str) -> bool:
    """Check whether a source string is an HTTP(S) URL.

    Args:
        source: URL or filesystem path.

    Returns:
        True for http:// and https:// sources.
    """
    return source.startswith(("http://", "https://"))


@with_retry()
def _download(client: httpx.Client, url: str) -> httpx.Response:
    """GET a URL and raise on any error status."""
    return client.get(url).raise_for_status()


def fetch_document(url: str, timeout: float = DEFAULT_TIMEOUT, client: httpx.Client | None = None) -> bytes:
    """Download a scheme document.

    Transport failures and 5xx responses are retried with backoff; other
    error statuses fail straight away.

    Args:
        url: Document URL.
        timeout: Per-request timeout in seconds.
        client: Optional preconfigured client (its own timeout applies).

    Returns:
        The raw response body. Decoding is left to the XML parser.

    Raises:
        SchemeSourceError: If the document could not be downloaded.
    """
    logger.info(f"Fetching color schemes from {url}")
    owns_client = client is None
    http = client if client is not None else httpx.Client(timeout=timeout, follow_redirects=True)
    try:
        response = _download(http, url)
    except httpx.HTTPError as exc:
        raise SchemeSourceError(f"Failed to fetch {url}: {exc}") from exc
    finally:
        if owns_client:
            http.close()

    logger.debug(f"Fetched {len(response.content)} bytes from {url}")
    return response.content


def read_document(path: Path) -> bytes:
    """Read a scheme document from disk.

    The file is returned undecoded so the XML encoding declaration applies.

    Args:
        path: Path to an XML scheme file.

    Returns:
        The raw file contents.

    Raises:
        SchemeSourceError: If the file cannot be read.
    """
    try:
        return path.expanduser().read_bytes()
    except OSError as exc:
        raise SchemeSourceError(f"Failed to read {path}: {exc}") from exc


def load_document(source: str, timeout: float = DEFAULT_TIMEOUT) -> bytes:
    """Load a scheme document from a URL or a file path.

    Args:
        source: HTTP(S) URL or filesystem path.
        timeout: Request timeout for URLs.

    Returns:
        The raw document.

    Raises:
        SchemeSourceError: If the document cannot be retrieved.
    """
    if is_url(source):
        return fetch_document(source, timeout=timeout)
    return read_document(Path(source))
