"""
OCI Request Signer
HTTP-signature request signing for the Oracle Cloud Infrastructure REST API
"""

from .version import __version__
from .crypto.rsa_keys import (
    load_private_key,
    generate_private_key,
    private_key_to_pem,
    public_key_pem,
    verify_signature,
)
from .exceptions import (
    ErrorCodes,
    OCISignerError,
    ParamsNotSetError,
    ConfigurationError,
    CanonicalizationError,
    MethodMissingError,
    UrlMissingError,
    SigningHeaderMissingError,
    SigningError,
    KeyLoadError,
)
from .signing import (
    # Core signing functionality
    RequestSigner,
    create_signer,
    sign_request,
    build_authorization_header,
    select_signing_headers,
    complete_headers_for_body,
    add_content_digest_header,
    build_request_target,
    build_signing_string,
    # Types
    SignableRequest,
    SignerConfig,
    SignatureResult,
    ApiVersion,
    HttpMethod,
    SignatureAlgorithm,
    # Configuration
    SignerConfigBuilder,
    create_signer_config,
    validate_signer_config,
    load_signer_config_from_env,
    # Utilities
    calculate_content_digest,
    format_http_date,
    base64_encode,
    base64_decode,
    # HTTP Integration
    create_request,
    sign_prepared_request,
    OCISignerAuth,
)


# Public API exports
__all__ = [
    '__version__',
    # Keys
    'load_private_key',
    'generate_private_key',
    'private_key_to_pem',
    'public_key_pem',
    'verify_signature',
    # Exceptions
    'ErrorCodes',
    'OCISignerError',
    'ParamsNotSetError',
    'ConfigurationError',
    'CanonicalizationError',
    'MethodMissingError',
    'UrlMissingError',
    'SigningHeaderMissingError',
    'SigningError',
    'KeyLoadError',
    # Request Signing - Core
    'RequestSigner',
    'create_signer',
    'sign_request',
    'build_authorization_header',
    'select_signing_headers',
    'complete_headers_for_body',
    'add_content_digest_header',
    'build_request_target',
    'build_signing_string',
    # Request Signing - Types
    'SignableRequest',
    'SignerConfig',
    'SignatureResult',
    'ApiVersion',
    'HttpMethod',
    'SignatureAlgorithm',
    # Request Signing - Configuration
    'SignerConfigBuilder',
    'create_signer_config',
    'validate_signer_config',
    'load_signer_config_from_env',
    # Request Signing - Utilities
    'calculate_content_digest',
    'format_http_date',
    'base64_encode',
    'base64_decode',
    # Request Signing - HTTP Integration
    'create_request',
    'sign_prepared_request',
    'OCISignerAuth',
]
