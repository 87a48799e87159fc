"""Utility functions for loading Dart source text.

Sources are a local file, a URL or a text stream. Every loader returns a
``(source description, text)`` pair; the description is what the CLI shows
next to its output.
"""

import sys
from pathlib import Path
from typing import TextIO
from urllib.parse import urlparse

import requests

from .logging_config import get_logger

logger = get_logger(__name__)

DART_SUFFIX = ".dart"

# Dart source files are always UTF-8
SOURCE_ENCODING = "utf-8"


class SourceLoaderError(Exception):
    """Custom exception for source loading errors."""

    pass


def load_source_from_file(file_path: str | Path) -> tuple[str, str]:
    """Load Dart source from a local file.

    Args:
        file_path: Path to the Dart file.

    Returns:
        Tuple of (source description, source text).

    Raises:
        FileNotFoundError: If file doesn't exist.
        SourceLoaderError: If file cannot be read or decoded.
    """
    file_path = Path(file_path)
    logger.debug("Loading Dart source from file %s", file_path)

    if not file_path.exists():
        logger.error("File not found: %s", file_path)
        raise FileNotFoundError(f"File not found: {file_path}")

    if file_path.suffix.lower() != DART_SUFFIX:
        logger.warning("File does not have .dart extension: %s", file_path)

    try:
        text = file_path.read_text(encoding=SOURCE_ENCODING)
    except UnicodeDecodeError as e:
        logger.error("File %s is not valid UTF-8: %s", file_path, e)
        raise SourceLoaderError(f"File {file_path} is not valid UTF-8: {e}") from e
    except OSError as e:
        logger.error("Error reading file %s: %s", file_path, e, exc_info=True)
        raise SourceLoaderError(f"Error reading file {file_path}: {e}") from e

    logger.info("Loaded %d characters from %s", len(text), file_path)
    return f"📄 {file_path}", text


def _describe_request_error(url: str, error: requests.exceptions.RequestException) -> str:
    """User-facing message for a failed download."""
    if isinstance(error, requests.exceptions.Timeout):
        return f"Request timeout for URL: {url}"
    if isinstance(error, requests.exceptions.ConnectionError):
        return f"Connection error for URL: {url}"
    if isinstance(error, requests.exceptions.HTTPError) and error.response is not None:
        return f"HTTP error {error.response.status_code} for URL: {url}"
    return f"Request error for URL {url}: {error}"


def load_source_from_url(url: str, timeout: int = 30) -> tuple[str, str]:
    """Download Dart source.

    The body is decoded as UTF-8 regardless of the charset the server
    announces, since raw file hosts often serve ``.dart`` files as
    ``text/plain`` without one.

    Raises:
        SourceLoaderError: If the URL is invalid, the request fails or the
            body is not UTF-8.
    """
    parsed_url = urlparse(url)
    if not (parsed_url.scheme and parsed_url.netloc):
        logger.error("Invalid URL format: %s", url)
        raise SourceLoaderError(f"Invalid URL: {url}")

    logger.debug("Fetching Dart source from %s (timeout %ss)", url, timeout)
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.RequestException as e:
        message = _describe_request_error(url, e)
        logger.error(message)
        raise SourceLoaderError(message) from e

    try:
        text = response.content.decode(SOURCE_ENCODING)
    except UnicodeDecodeError as e:
        logger.error("Response from %s is not valid UTF-8: %s", url, e)
        raise SourceLoaderError(f"Response from {url} is not valid UTF-8") from e

    logger.info("Loaded %d characters from %s", len(text), url)
    return f"🌐 {url}", text


def load_source_from_stream(stream: TextIO | None = None) -> tuple[str, str]:
    """Read Dart source from a text stream (standard input by default)."""
    stream = stream or sys.stdin
    text = stream.read()
    logger.info("Loaded %d characters from standard input", len(text))
    return "⌨️ stdin", text


def load_source(
    file_path: str | Path | None = None,
    url: str | None = None,
    stdin: bool = False,
    timeout: int = 30,
) -> tuple[str, str]:
    """Load Dart source from exactly one of a file, a URL or standard input.

    Raises:
        SourceLoaderError: If no source or more than one source is given, or
            loading fails.
        FileNotFoundError: If the file doesn't exist.
    """
    given = [
        name
        for name, value in (("file", file_path), ("url", url), ("stdin", stdin))
        if value
    ]
    if not given:
        raise SourceLoaderError("No input source given (file, URL or stdin)")
    if len(given) > 1:
        raise SourceLoaderError(f"Only one input source allowed, got: {', '.join(given)}")

    if file_path:
        return load_source_from_file(file_path)
    if url:
        return load_source_from_url(url, timeout)
    return load_source_from_stream()
