"""
Cryptographic operations for the OCI request signer
"""

from .rsa_keys import (
    load_private_key,
    generate_private_key,
    private_key_to_pem,
    public_key_pem,
    sign_rsa_sha256,
    verify_signature,
)

__all__ = [
    'load_private_key',
    'generate_private_key',
    'private_key_to_pem',
    'public_key_pem',
    'sign_rsa_sha256',
    'verify_signature',
]
