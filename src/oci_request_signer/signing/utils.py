"""
Utility functions for request signing

This module provides helpers for the OCI signing scheme, including body
digest calculation, URL parsing, HTTP date formatting and base64 string
helpers.
"""

import time
import hashlib
import base64
import binascii
from email.utils import formatdate
from typing import Dict, Optional
from urllib.parse import urlsplit

from ..exceptions import UrlMissingError
from .types import RequestBody


def to_bytes(content: RequestBody) -> bytes:
    """
    Coerce a request body to bytes.

    Args:
        content: Request body content (string, bytes, or None)

    Returns:
        bytes: Body bytes, empty when content is None
    """
    if content is None:
        return b""
    if isinstance(content, str):
        return content.encode('utf-8')
    if isinstance(content, (bytes, bytearray)):
        return bytes(content)
    raise TypeError(f"Content must be string, bytes, or None, got {type(content)}")


def calculate_content_digest(content: RequestBody) -> str:
    """
    Calculate the x-content-sha256 value for a request body.

    Args:
        content: Request body content (string, bytes, or None)

    Returns:
        str: Base64-encoded SHA-256 digest of the body bytes
    """
    digest_bytes = hashlib.sha256(to_bytes(content)).digest()
    return base64.b64encode(digest_bytes).decode('ascii')


def parse_url(url: str) -> Dict[str, str]:
    """
    Parse URL to extract components needed for signing.

    The path and query are returned exactly as they appear in the URL; no
    percent-decoding or re-encoding is applied.

    Args:
        url: URL string to parse

    Returns:
        dict: Dictionary with parsed URL components:
            - host: host[:port] from the network location, without userinfo
            - path: path component ("/" when empty)
            - query: query string without the leading "?"
            - target: path plus "?query" when a query is present

    Raises:
        UrlMissingError: If the URL is empty or not absolute
    """
    if not url:
        raise UrlMissingError("Request URL is missing")

    try:
        parsed = urlsplit(url)
    except ValueError as e:
        raise UrlMissingError(
            f"Failed to parse URL: {e}",
            details={"url": url, "original_error": str(e)}
        ) from e

    if not parsed.scheme or not parsed.netloc:
        raise UrlMissingError(
            f"Invalid URL format: {url}",
            details={"url": url}
        )

    # userinfo never reaches the host header
    host = parsed.netloc.rpartition("@")[2]
    if not host:
        raise UrlMissingError(
            f"Invalid URL format: {url}",
            details={"url": url}
        )

    path = parsed.path or "/"
    query = parsed.query
    target = f"{path}?{query}" if query else path

    return {
        "host": host,
        "path": path,
        "query": query,
        "target": target,
    }


def normalize_header_name(name: str) -> str:
    """
    Normalize header name to lowercase for consistent processing.

    Args:
        name: Header name to normalize

    Returns:
        str: Lowercase header name
    """
    return name.lower().strip()


def format_http_date(timestamp: Optional[float] = None) -> str:
    """
    Format timestamp as an RFC 7231 HTTP date, e.g. "Thu, 05 Jan 2014 21:31:40 GMT".

    Args:
        timestamp: Unix timestamp (uses current time if None)

    Returns:
        str: HTTP date string in GMT
    """
    if timestamp is None:
        timestamp = time.time()
    return formatdate(timestamp, usegmt=True)


def base64_encode(text: str) -> str:
    """Base64-encode the UTF-8 bytes of a string."""
    return base64.b64encode(text.encode('utf-8')).decode('ascii')


def base64_decode(text: str) -> Optional[str]:
    """
    Decode a base64 string into UTF-8 text.

    Returns:
        Decoded text, or None if the input is not valid base64 or not UTF-8
    """
    try:
        return base64.b64decode(text, validate=True).decode('utf-8')
    except (binascii.Error, ValueError):
        return None


class PerformanceTimer:
    """Simple performance timer for monitoring signing operations."""

    def __init__(self):
        self.start_time = time.perf_counter()

    def elapsed_ms(self) -> float:
        """Get elapsed time in milliseconds."""
        return (time.perf_counter() - self.start_time) * 1000
