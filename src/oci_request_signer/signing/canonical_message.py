"""
Canonical signing string construction for OCI request signatures

This module builds the exact string that is signed: one "name: value" line
per selected header, in signing order, joined by newlines.
"""

from typing import List, Sequence

from ..exceptions import (
    MethodMissingError,
    UrlMissingError,
    SigningHeaderMissingError,
)
from .types import SignableRequest, REQUEST_TARGET
from .utils import parse_url, normalize_header_name


class CanonicalMessageBuilder:
    """
    Signing string builder for OCI signatures
    """

    def __init__(self, request: SignableRequest, header_names: Sequence[str]):
        """
        Initialize canonical message builder.

        Args:
            request: Completed request to read header values from
            header_names: Header names to sign, in order
        """
        self.request = request
        self.header_names = [normalize_header_name(name) for name in header_names]

    def build(self) -> str:
        """
        Build the signing string.

        Returns:
            str: Newline-joined "name: value" lines, no trailing newline

        Raises:
            MethodMissingError: If (request-target) is signed and the method is absent
            UrlMissingError: If (request-target) is signed and the URL is absent
            SigningHeaderMissingError: If a selected header is not on the request
        """
        lines = []
        for name in self.header_names:
            if name == REQUEST_TARGET:
                value = build_request_target(self.request)
            else:
                value = self._header_value(name)
            lines.append(f"{name}: {value}")

        return '\n'.join(lines)

    def _header_value(self, name: str) -> str:
        value = self.request.get_header(name)
        if value is None:
            raise SigningHeaderMissingError(
                f"Required header not found: {name}",
                details={"header": name, "available_headers": list(self.request.headers.keys())}
            )
        return value


def build_request_target(request: SignableRequest) -> str:
    """
    Build the (request-target) value: lowercase method, path and optional query.

    Args:
        request: Request to describe

    Returns:
        str: e.g. "get /20160918/instances?availabilityDomain=..."

    Raises:
        MethodMissingError: If the request has no method
        UrlMissingError: If the request has no URL
    """
    if not request.method:
        raise MethodMissingError("Request method is required for (request-target)")

    if not request.url:
        raise UrlMissingError("Request URL is required for (request-target)")

    url_parts = parse_url(request.url)
    return f"{request.method.lower()} {url_parts['target']}"


def build_signing_string(request: SignableRequest, header_names: Sequence[str]) -> str:
    """
    Build the signing string for the given headers.

    Args:
        request: Completed request
        header_names: Header names to sign, in order

    Returns:
        str: Signing string
    """
    return CanonicalMessageBuilder(request, header_names).build()


def extract_signed_headers(signing_string: str) -> List[str]:
    """
    Extract the header names from a signing string, in order.

    Args:
        signing_string: Signing string produced by build_signing_string

    Returns:
        list: Header names
    """
    return [line.split(': ', 1)[0] for line in signing_string.split('\n') if line]
