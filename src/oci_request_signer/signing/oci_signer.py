"""
OCI HTTP-signature implementation with RSA-SHA256

This module provides the main signer: it selects and completes the signed
headers, builds the signing string, signs it with the configured RSA key and
attaches the resulting Authorization header to the request.
"""

import base64
import logging
from typing import Sequence

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey

from ..crypto.rsa_keys import sign_rsa_sha256
from ..exceptions import SigningError
from .types import (
    SignableRequest,
    SignerConfig,
    SignatureResult,
    SignatureAlgorithm,
    AUTHORIZATION_HEADER,
)
from .headers import (
    select_signing_headers,
    complete_headers_for_body,
    requires_body_headers,
)
from .canonical_message import build_signing_string
from .signing_config import validate_signer_config
from .utils import PerformanceTimer

logger = logging.getLogger(__name__)

# Soft latency target for a single signing operation
SLOW_SIGNING_THRESHOLD_MS = 50


def build_authorization_header(
    version: int,
    header_names: Sequence[str],
    key_id: str,
    signature: str
) -> str:
    """
    Format the Authorization header value.

    Args:
        version: Signature scheme version
        header_names: Signed header names, in signing order
        key_id: tenancy/user/fingerprint key identifier
        signature: Base64-encoded signature

    Returns:
        str: Authorization header value
    """
    return (
        f'Signature version="{int(version)}",'
        f'headers="{" ".join(header_names)}",'
        f'keyId="{key_id}",'
        f'algorithm="{SignatureAlgorithm.RSA_SHA256.value}",'
        f'signature="{signature}"'
    )


class RequestSigner:
    """
    OCI request signer

    Holds an immutable SignerConfig; a single instance may be shared
    between threads.
    """

    def __init__(self, config: SignerConfig):
        """
        Initialize the signer with configuration.

        Args:
            config: Signer configuration

        Raises:
            ParamsNotSetError: If the configuration is incomplete
        """
        validate_signer_config(config)
        self.config = config
        logger.info(f"Configured request signing for key ID: {config.key_id}")

    def sign(self, request: SignableRequest) -> SignableRequest:
        """
        Sign a request.

        The caller's request is not modified; a signed copy is returned.

        Args:
            request: Request to sign

        Returns:
            SignableRequest: Copy of the request with the completed body
            headers and the Authorization header

        Raises:
            ParamsNotSetError: If the configuration is incomplete
            MethodMissingError: If the request has no method
            UrlMissingError: If the request has no URL
            SigningHeaderMissingError: If a signed header is absent
            SigningError: If the RSA operation fails
        """
        validate_signer_config(self.config)
        timer = PerformanceTimer()

        signed = request.copy()
        if requires_body_headers(signed.method):
            signed = complete_headers_for_body(signed)

        result = self.compute_signature(signed)
        signed.headers[AUTHORIZATION_HEADER] = build_authorization_header(
            self.config.signature_version,
            result.headers,
            result.key_id,
            result.signature
        )

        elapsed_ms = timer.elapsed_ms()
        if elapsed_ms > SLOW_SIGNING_THRESHOLD_MS:
            logger.warning(f"Signing operation took {elapsed_ms:.2f}ms (target: <{SLOW_SIGNING_THRESHOLD_MS}ms)")

        logger.debug(
            f"Signed {signed.method} request to {signed.url} "
            f"with headers [{' '.join(result.headers)}] in {elapsed_ms:.2f}ms"
        )
        return signed

    def compute_signature(self, request: SignableRequest) -> SignatureResult:
        """
        Compute the signature of an already completed request.

        Body headers are not filled in here; use sign() for the full pipeline.

        Args:
            request: Completed request

        Returns:
            SignatureResult: Signed header names, signature and key id
        """
        header_names = select_signing_headers(request)
        signing_string = build_signing_string(request, header_names)
        logger.debug(f"Signing string:\n{signing_string}")

        signature = base64.b64encode(self._sign_message(signing_string)).decode('ascii')

        return SignatureResult(
            headers=header_names,
            signature=signature,
            key_id=self.config.key_id,
            signing_string=signing_string
        )

    def _sign_message(self, message: str) -> bytes:
        """
        Sign a message using RSA-SHA256.

        Raises:
            SigningError: If signing fails
        """
        private_key = self.config.private_key
        if not isinstance(private_key, RSAPrivateKey):
            raise SigningError(
                f"Key type {type(private_key).__name__} does not support {SignatureAlgorithm.RSA_SHA256.value}",
                details={"key_type": type(private_key).__name__}
            )

        try:
            return sign_rsa_sha256(private_key, message)
        except (ValueError, TypeError, UnsupportedAlgorithm) as e:
            raise SigningError(
                f"Message signing failed: {e}",
                details={"original_error": str(e)}
            ) from e


def create_signer(config: SignerConfig) -> RequestSigner:
    """
    Create a new request signer.

    Args:
        config: Signer configuration

    Returns:
        RequestSigner: Configured signer instance
    """
    return RequestSigner(config)


def sign_request(request: SignableRequest, config: SignerConfig) -> SignableRequest:
    """
    Sign a request with the given configuration.

    Args:
        request: Request to sign
        config: Signer configuration

    Returns:
        SignableRequest: Signed copy of the request
    """
    return create_signer(config).sign(request)
