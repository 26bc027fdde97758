"""
HTTP client integration for request signing

This module connects the signer to the requests library: a factory for
requests pre-populated with the headers OCI expects, a requests auth hook,
and helpers to sign PreparedRequest objects in place. Sending requests is
left to the caller.
"""

import logging
from typing import Mapping, Optional, Union

from requests.auth import AuthBase
from requests.models import PreparedRequest

from ..exceptions import SigningError, UrlMissingError
from .types import (
    SignableRequest,
    SignerConfig,
    HttpMethod,
    DATE_HEADER,
    HOST_HEADER,
    RequestBody,
)
from .oci_signer import RequestSigner
from .utils import format_http_date, parse_url

logger = logging.getLogger(__name__)


def create_request(
    url: str,
    method: Union[str, HttpMethod] = HttpMethod.GET,
    body: RequestBody = None,
    headers: Optional[Mapping[str, str]] = None,
    now: Optional[float] = None
) -> SignableRequest:
    """
    Create a request carrying the date and host headers OCI expects.

    Args:
        url: Absolute endpoint URL; surrounding whitespace is ignored
        method: HTTP method
        body: Optional request body
        headers: Extra headers; these take precedence over the defaults
        now: Unix timestamp for the date header (current time if None)

    Returns:
        SignableRequest: New request

    Raises:
        UrlMissingError: If the URL is empty or has no scheme or host
    """
    if url is None:
        raise UrlMissingError("Request URL is missing")

    url = url.strip()
    url_parts = parse_url(url)

    request = SignableRequest(
        method=method.value if isinstance(method, HttpMethod) else method,
        url=url,
        body=body
    )
    request.headers[DATE_HEADER] = format_http_date(now)
    request.headers[HOST_HEADER] = url_parts['host']

    if headers:
        request.headers.update(headers)

    return request


def signable_from_prepared(prepared: PreparedRequest) -> SignableRequest:
    """
    Convert a requests PreparedRequest into a SignableRequest.

    Date and host are added when the prepared request does not carry them,
    since requests only adds Host at the transport layer.

    Raises:
        SigningError: If the body is a stream that cannot be digested
    """
    body = prepared.body
    if body is not None and not isinstance(body, (str, bytes, bytearray)):
        raise SigningError(
            f"Cannot sign streaming request body of type {type(body).__name__}",
            details={"body_type": type(body).__name__}
        )

    request = SignableRequest(
        method=prepared.method,
        url=prepared.url,
        headers=prepared.headers.copy() if prepared.headers is not None else None,
        body=body
    )

    if not request.has_header(DATE_HEADER):
        request.headers[DATE_HEADER] = format_http_date()

    if not request.has_header(HOST_HEADER) and request.url:
        request.headers[HOST_HEADER] = parse_url(request.url)['host']

    return request


def sign_prepared_request(
    prepared: PreparedRequest,
    config: Union[SignerConfig, RequestSigner]
) -> PreparedRequest:
    """
    Sign a prepared request in place.

    Args:
        prepared: Prepared request to sign
        config: Signer configuration or an existing signer

    Returns:
        PreparedRequest: The same request with signing headers added
    """
    signer = config if isinstance(config, RequestSigner) else RequestSigner(config)
    signed = signer.sign(signable_from_prepared(prepared))
    prepared.headers.update(signed.headers)

    logger.debug(f"Signed prepared {prepared.method} request to {prepared.url}")
    return prepared


class OCISignerAuth(AuthBase):
    """
    requests authentication hook that signs outgoing requests.

    Usage:
        session.auth = OCISignerAuth(config)
    """

    def __init__(self, config: SignerConfig):
        """
        Initialize the auth hook.

        Args:
            config: Signer configuration

        Raises:
            ParamsNotSetError: If the configuration is incomplete
        """
        self.signer = RequestSigner(config)

    def __call__(self, prepared: PreparedRequest) -> PreparedRequest:
        return sign_prepared_request(prepared, self.signer)
