"""
Type definitions for request signing functionality

This module provides the data classes and constants used by the OCI
HTTP-signature implementation (RSA-SHA256 over a canonical header string).
"""

from collections.abc import Mapping
from typing import List, Optional, Union
from dataclasses import dataclass, field, replace
from enum import Enum, IntEnum

from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey
from requests.structures import CaseInsensitiveDict


class HttpMethod(str, Enum):
    """HTTP methods supported for signing"""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


class ApiVersion(IntEnum):
    """Versions of the OCI signature scheme. Version 1 is the only one defined."""
    ONE = 1


class SignatureAlgorithm(str, Enum):
    """Signature algorithm types"""
    RSA_SHA256 = "rsa-sha256"


# Methods whose body headers take part in the signature (exact, case-sensitive match)
BODY_METHODS = frozenset({HttpMethod.POST.value, HttpMethod.PUT.value})

# Header names used by the signing pipeline
REQUEST_TARGET = "(request-target)"
DATE_HEADER = "date"
X_DATE_HEADER = "x-date"
HOST_HEADER = "host"
CONTENT_LENGTH_HEADER = "content-length"
CONTENT_TYPE_HEADER = "content-type"
CONTENT_SHA256_HEADER = "x-content-sha256"
AUTHORIZATION_HEADER = "Authorization"

BASE_SIGNING_HEADERS = (DATE_HEADER, REQUEST_TARGET, HOST_HEADER)
BODY_SIGNING_HEADERS = (CONTENT_LENGTH_HEADER, CONTENT_TYPE_HEADER, CONTENT_SHA256_HEADER)

DEFAULT_CONTENT_TYPE = "application/json"


@dataclass
class SignableRequest:
    """
    Request to be signed

    Attributes:
        method: HTTP method (GET, POST, etc.), may be None
        url: Absolute request URL, may be None
        headers: Case-insensitive, insertion-ordered header mapping
        body: Optional request body; str bodies are UTF-8 encoded
    """
    method: Optional[str] = None
    url: Optional[str] = None
    headers: CaseInsensitiveDict = field(default_factory=CaseInsensitiveDict)
    body: Optional[bytes] = None

    def __post_init__(self):
        """Normalize headers and body after initialization"""
        if self.headers is None:
            self.headers = CaseInsensitiveDict()
        elif not isinstance(self.headers, CaseInsensitiveDict):
            if not isinstance(self.headers, Mapping):
                raise ValueError("Headers must be a mapping")
            self.headers = CaseInsensitiveDict(self.headers)

        if isinstance(self.body, str):
            self.body = self.body.encode('utf-8')
        elif self.body is not None and not isinstance(self.body, (bytes, bytearray)):
            raise ValueError(f"Body must be bytes, str or None, got {type(self.body)}")
        elif isinstance(self.body, bytearray):
            self.body = bytes(self.body)

    def copy(self) -> 'SignableRequest':
        """Return an independent copy; the header mapping is duplicated."""
        return replace(self, headers=self.headers.copy())

    def has_header(self, name: str) -> bool:
        return name in self.headers

    def get_header(self, name: str) -> Optional[str]:
        return self.headers.get(name)


@dataclass(frozen=True)
class SignerConfig:
    """
    Immutable configuration for request signing

    Identity fields may be left unset while a configuration is being
    assembled, but all four must be present before any request is signed.

    Attributes:
        tenancy_id: OCID of the tenancy
        user_id: OCID of the user owning the API key
        key_fingerprint: Fingerprint of the uploaded public key
        private_key: RSA private key used to sign
        signature_version: Signature scheme version
    """
    tenancy_id: Optional[str] = None
    user_id: Optional[str] = None
    key_fingerprint: Optional[str] = None
    private_key: Optional[RSAPrivateKey] = field(default=None, repr=False)
    signature_version: ApiVersion = ApiVersion.ONE

    @property
    def key_id(self) -> str:
        """Composite key identifier: tenancy/user/fingerprint"""
        return f"{self.tenancy_id}/{self.user_id}/{self.key_fingerprint}"

    def missing_params(self) -> List[str]:
        """Names of identity fields that are not set."""
        missing = []
        for name in ('tenancy_id', 'user_id', 'key_fingerprint'):
            if not getattr(self, name):
                missing.append(name)
        if self.private_key is None:
            missing.append('private_key')
        return missing


@dataclass
class SignatureResult:
    """
    Signature produced for a single request

    Attributes:
        headers: Ordered header names that were signed
        signature: Base64-encoded RSA signature
        key_id: Key identifier placed in the Authorization header
        signing_string: Canonical string that was signed
    """
    headers: List[str]
    signature: str
    key_id: str
    signing_string: str

    def __post_init__(self):
        """Validate signature result"""
        if not self.signature:
            raise ValueError("Signature cannot be empty")

        if len(set(self.headers)) != len(self.headers):
            raise ValueError("Signed header names must be unique")


# Type alias for request bodies
RequestBody = Union[str, bytes, None]
