"""
Exception classes for the OCI request signer
"""

from typing import Optional, Dict, Any


class ErrorCodes:
    """Standard error codes for signing operations"""

    # Configuration errors
    PARAMS_NOT_SET = "PARAMS_NOT_SET"
    INVALID_CONFIG = "INVALID_CONFIG"

    # Request errors
    METHOD_MISSING = "METHOD_MISSING"
    URL_MISSING = "URL_MISSING"
    SIGNING_HEADER_MISSING = "SIGNING_HEADER_MISSING"

    # Crypto errors
    SIGNING_FAILED = "SIGNING_FAILED"
    KEY_LOAD_FAILED = "KEY_LOAD_FAILED"

    # Key loading details
    INVALID_PEM_INPUT = "INVALID_PEM_INPUT"
    EMPTY_PEM = "EMPTY_PEM"
    PEM_PARSE_FAILED = "PEM_PARSE_FAILED"
    INVALID_PEM_KEY_TYPE = "INVALID_PEM_KEY_TYPE"


class OCISignerError(Exception):
    """Base exception for all OCI request signer errors"""

    default_code = "UNKNOWN_ERROR"

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_code
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (code: {self.error_code}, details: {self.details})"
        return f"{self.message} (code: {self.error_code})"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message='{self.message}', "
            f"error_code='{self.error_code}', details={self.details})"
        )


class ParamsNotSetError(OCISignerError):
    """Raised when tenancy, user, fingerprint or private key is missing"""
    default_code = ErrorCodes.PARAMS_NOT_SET


class ConfigurationError(OCISignerError):
    """Raised when a signer configuration value is present but invalid"""
    default_code = ErrorCodes.INVALID_CONFIG


class CanonicalizationError(OCISignerError):
    """Base class for errors raised while building the signing string"""
    pass


class MethodMissingError(CanonicalizationError):
    """Raised when the request has no HTTP method for (request-target)"""
    default_code = ErrorCodes.METHOD_MISSING


class UrlMissingError(CanonicalizationError):
    """Raised when the request has no usable URL for (request-target)"""
    default_code = ErrorCodes.URL_MISSING


class SigningHeaderMissingError(CanonicalizationError):
    """Raised when a header selected for signing is absent from the request"""
    default_code = ErrorCodes.SIGNING_HEADER_MISSING


class SigningError(OCISignerError):
    """Raised when the RSA signing operation cannot produce a signature"""
    default_code = ErrorCodes.SIGNING_FAILED


class KeyLoadError(OCISignerError):
    """Raised when private key material cannot be parsed"""
    default_code = ErrorCodes.KEY_LOAD_FAILED
