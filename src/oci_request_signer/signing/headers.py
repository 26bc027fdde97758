"""
Header selection and completion for OCI request signing

Decides which headers participate in a signature and fills in the
body-describing headers that POST and PUT requests must carry.
"""

import logging
from typing import List

from .types import (
    SignableRequest,
    BASE_SIGNING_HEADERS,
    BODY_SIGNING_HEADERS,
    BODY_METHODS,
    DATE_HEADER,
    X_DATE_HEADER,
    CONTENT_LENGTH_HEADER,
    CONTENT_TYPE_HEADER,
    CONTENT_SHA256_HEADER,
    DEFAULT_CONTENT_TYPE,
)
from .utils import calculate_content_digest, to_bytes

logger = logging.getLogger(__name__)


def requires_body_headers(method) -> bool:
    """True when the method signs content-length, content-type and x-content-sha256."""
    return method in BODY_METHODS


def select_signing_headers(request: SignableRequest) -> List[str]:
    """
    Build the ordered list of header names to sign.

    The base set is date, (request-target), host. An x-date header on the
    request takes the place of date. POST and PUT additionally sign
    content-length, content-type and x-content-sha256.

    Args:
        request: Request being signed

    Returns:
        list: Lowercase header names in signing order
    """
    headers = list(BASE_SIGNING_HEADERS)

    if request.has_header(X_DATE_HEADER):
        headers[headers.index(DATE_HEADER)] = X_DATE_HEADER

    if requires_body_headers(request.method):
        headers.extend(BODY_SIGNING_HEADERS)

    return headers


def complete_headers_for_body(request: SignableRequest) -> SignableRequest:
    """
    Return a copy of the request with the body headers filled in.

    Values already present on the request are kept; only missing headers
    are computed from the body.

    Args:
        request: Request to complete

    Returns:
        SignableRequest: Completed copy of the request
    """
    completed = request.copy()
    body = to_bytes(completed.body)

    if not completed.has_header(CONTENT_LENGTH_HEADER):
        completed.headers[CONTENT_LENGTH_HEADER] = str(len(body))

    if not completed.has_header(CONTENT_TYPE_HEADER):
        completed.headers[CONTENT_TYPE_HEADER] = DEFAULT_CONTENT_TYPE

    if not completed.has_header(CONTENT_SHA256_HEADER):
        completed = add_content_digest_header(completed)

    return completed


def add_content_digest_header(request: SignableRequest) -> SignableRequest:
    """
    Return a copy of the request with x-content-sha256 computed from its body.

    The header is always recomputed and replaces any existing value. An
    absent body is digested as empty bytes.

    Args:
        request: Request to update

    Returns:
        SignableRequest: Updated copy of the request
    """
    updated = request.copy()
    digest = calculate_content_digest(updated.body)
    updated.headers[CONTENT_SHA256_HEADER] = digest
    logger.debug(f"Computed {CONTENT_SHA256_HEADER} for {len(to_bytes(updated.body))} body bytes")
    return updated
