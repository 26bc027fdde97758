"""
OCI Request Signer - Request Signing Module

HTTP-signature implementation for the Oracle Cloud Infrastructure REST API:
selected headers are canonicalized, signed with RSA-SHA256, and attached as
an Authorization header.
"""

from .types import (
    SignableRequest,
    SignerConfig,
    SignatureResult,
    ApiVersion,
    HttpMethod,
    SignatureAlgorithm,
    BODY_METHODS,
    BASE_SIGNING_HEADERS,
    BODY_SIGNING_HEADERS,
    DEFAULT_CONTENT_TYPE,
)

from .headers import (
    select_signing_headers,
    complete_headers_for_body,
    add_content_digest_header,
)

from .canonical_message import (
    build_request_target,
    build_signing_string,
    extract_signed_headers,
)

from .oci_signer import (
    RequestSigner,
    build_authorization_header,
    create_signer,
    sign_request,
)

from .signing_config import (
    SignerConfigBuilder,
    create_signer_config,
    validate_signer_config,
    load_signer_config_from_env,
)

from .utils import (
    calculate_content_digest,
    parse_url,
    normalize_header_name,
    format_http_date,
    base64_encode,
    base64_decode,
)

from .integration import (
    create_request,
    signable_from_prepared,
    sign_prepared_request,
    OCISignerAuth,
)

# Public API exports
__all__ = [
    # Core signing functionality
    'RequestSigner',
    'create_signer',
    'sign_request',
    'build_authorization_header',
    # Header selection and canonicalization
    'select_signing_headers',
    'complete_headers_for_body',
    'add_content_digest_header',
    'build_request_target',
    'build_signing_string',
    'extract_signed_headers',
    # Types
    'SignableRequest',
    'SignerConfig',
    'SignatureResult',
    'ApiVersion',
    'HttpMethod',
    'SignatureAlgorithm',
    'BODY_METHODS',
    'BASE_SIGNING_HEADERS',
    'BODY_SIGNING_HEADERS',
    'DEFAULT_CONTENT_TYPE',
    # Configuration
    'SignerConfigBuilder',
    'create_signer_config',
    'validate_signer_config',
    'load_signer_config_from_env',
    # Utilities
    'calculate_content_digest',
    'parse_url',
    'normalize_header_name',
    'format_http_date',
    'base64_encode',
    'base64_decode',
    # HTTP Integration
    'create_request',
    'signable_from_prepared',
    'sign_prepared_request',
    'OCISignerAuth',
]
