"""
RSA key handling for the OCI request signer

This module parses PEM-encoded RSA private keys held in memory and provides
the RSA-SHA256 primitives used to sign and verify OCI signing strings.
"""

import base64
import binascii
import logging
from typing import Optional, Union

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from ..exceptions import ErrorCodes, KeyLoadError

logger = logging.getLogger(__name__)

# OCI API keys must be at least 2048 bits
DEFAULT_KEY_SIZE = 2048
PUBLIC_EXPONENT = 65537


def _to_pem_bytes(pem: Union[str, bytes]) -> bytes:
    if isinstance(pem, str):
        try:
            return pem.strip().encode('ascii')
        except UnicodeEncodeError as e:
            logger.error(f"Private key PEM contains non-ASCII characters: {e}")
            raise KeyLoadError(
                "PEM data must be ASCII text",
                ErrorCodes.PEM_PARSE_FAILED,
                {"original_error": str(e)}
            ) from e
    if isinstance(pem, (bytes, bytearray)):
        return bytes(pem).strip()
    raise KeyLoadError(f"PEM data must be str or bytes, got {type(pem)}", ErrorCodes.INVALID_PEM_INPUT)


def load_private_key(
    pem: Union[str, bytes],
    passphrase: Optional[Union[str, bytes]] = None
) -> rsa.RSAPrivateKey:
    """
    Parse a PEM-encoded RSA private key.

    Both PKCS#1 ("BEGIN RSA PRIVATE KEY") and PKCS#8 ("BEGIN PRIVATE KEY")
    encodings are accepted, optionally encrypted with a passphrase.

    Args:
        pem: PEM text or bytes
        passphrase: Optional passphrase for encrypted keys

    Returns:
        RSAPrivateKey: Parsed private key

    Raises:
        KeyLoadError: If the data cannot be parsed or is not an RSA private key
    """
    pem_bytes = _to_pem_bytes(pem)
    if not pem_bytes:
        raise KeyLoadError("PEM data is empty", ErrorCodes.EMPTY_PEM)

    password = passphrase.encode('utf-8') if isinstance(passphrase, str) else passphrase

    try:
        key = serialization.load_pem_private_key(pem_bytes, password=password)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        logger.error(f"Failed to parse private key: {e}")
        raise KeyLoadError(
            f"Failed to parse PEM private key: {e}",
            ErrorCodes.PEM_PARSE_FAILED,
            {"original_error": str(e)}
        ) from e

    if not isinstance(key, rsa.RSAPrivateKey):
        raise KeyLoadError(
            f"PEM does not contain an RSA private key: {type(key).__name__}",
            ErrorCodes.INVALID_PEM_KEY_TYPE
        )

    return key


def generate_private_key(key_size: int = DEFAULT_KEY_SIZE) -> rsa.RSAPrivateKey:
    """
    Generate a new RSA private key.

    Args:
        key_size: Modulus size in bits

    Returns:
        RSAPrivateKey: New private key
    """
    return rsa.generate_private_key(public_exponent=PUBLIC_EXPONENT, key_size=key_size)


def private_key_to_pem(
    private_key: rsa.RSAPrivateKey,
    passphrase: Optional[bytes] = None
) -> str:
    """Serialize a private key to PKCS#8 PEM text, encrypted when a passphrase is given."""
    if passphrase:
        encryption = serialization.BestAvailableEncryption(passphrase)
    else:
        encryption = serialization.NoEncryption()

    return private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=encryption
    ).decode('ascii')


def public_key_pem(private_key: rsa.RSAPrivateKey) -> str:
    """Serialize the public half of a private key to SubjectPublicKeyInfo PEM text."""
    return private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo
    ).decode('ascii')


def sign_rsa_sha256(private_key: rsa.RSAPrivateKey, message: Union[str, bytes]) -> bytes:
    """
    Sign a message with RSASSA-PKCS1-v1_5 over SHA-256.

    Args:
        private_key: RSA private key
        message: Message to sign; str is UTF-8 encoded

    Returns:
        bytes: Raw signature bytes
    """
    data = message.encode('utf-8') if isinstance(message, str) else message
    return private_key.sign(data, padding.PKCS1v15(), hashes.SHA256())


def verify_signature(
    public_key: rsa.RSAPublicKey,
    message: Union[str, bytes],
    signature_b64: str
) -> bool:
    """
    Verify a base64 RSA-SHA256 signature.

    Args:
        public_key: RSA public key
        message: Signed message; str is UTF-8 encoded
        signature_b64: Base64-encoded signature

    Returns:
        bool: True if the signature is valid
    """
    data = message.encode('utf-8') if isinstance(message, str) else message
    try:
        signature = base64.b64decode(signature_b64, validate=True)
    except (binascii.Error, ValueError):
        return False

    try:
        public_key.verify(signature, data, padding.PKCS1v15(), hashes.SHA256())
        return True
    except InvalidSignature:
        return False
