"""
Configuration management for request signing

This module provides the fluent builder for SignerConfig, environment
loading, and the precondition check run before every signing operation.
"""

import os
from typing import Mapping, Optional, Union

from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey

from ..crypto.rsa_keys import load_private_key
from ..exceptions import ConfigurationError, ParamsNotSetError
from .types import ApiVersion, SignerConfig

# Environment variable suffixes read by load_signer_config_from_env
ENV_TENANCY_ID = "TENANCY_ID"
ENV_USER_ID = "USER_ID"
ENV_KEY_FINGERPRINT = "KEY_FINGERPRINT"
ENV_PRIVATE_KEY = "PRIVATE_KEY"
ENV_PRIVATE_KEY_PASSPHRASE = "PRIVATE_KEY_PASSPHRASE"


class SignerConfigBuilder:
    """
    Builder for creating signer configurations with fluent API
    """

    def __init__(self):
        self._tenancy_id: Optional[str] = None
        self._user_id: Optional[str] = None
        self._key_fingerprint: Optional[str] = None
        self._private_key: Optional[RSAPrivateKey] = None
        self._signature_version: ApiVersion = ApiVersion.ONE

    def tenancy_id(self, tenancy_id: str) -> 'SignerConfigBuilder':
        """
        Set the tenancy OCID.

        Args:
            tenancy_id: Tenancy OCID

        Returns:
            SignerConfigBuilder: Self for method chaining
        """
        self._tenancy_id = tenancy_id
        return self

    def user_id(self, user_id: str) -> 'SignerConfigBuilder':
        """
        Set the user OCID.

        Args:
            user_id: User OCID

        Returns:
            SignerConfigBuilder: Self for method chaining
        """
        self._user_id = user_id
        return self

    def key_fingerprint(self, fingerprint: str) -> 'SignerConfigBuilder':
        """
        Set the API key fingerprint.

        Args:
            fingerprint: Colon-separated MD5 fingerprint of the public key

        Returns:
            SignerConfigBuilder: Self for method chaining
        """
        self._key_fingerprint = fingerprint
        return self

    def private_key(self, private_key: RSAPrivateKey) -> 'SignerConfigBuilder':
        """
        Set an already parsed private key.

        Returns:
            SignerConfigBuilder: Self for method chaining
        """
        self._private_key = private_key
        return self

    def private_key_pem(
        self,
        pem: Union[str, bytes],
        passphrase: Optional[Union[str, bytes]] = None
    ) -> 'SignerConfigBuilder':
        """
        Parse and set the private key from PEM text.

        Args:
            pem: PEM-encoded RSA private key
            passphrase: Optional passphrase for encrypted keys

        Returns:
            SignerConfigBuilder: Self for method chaining

        Raises:
            KeyLoadError: If the key cannot be parsed
        """
        self._private_key = load_private_key(pem, passphrase)
        return self

    def signature_version(self, version: Union[int, ApiVersion]) -> 'SignerConfigBuilder':
        """
        Set the signature scheme version.

        Raises:
            ConfigurationError: If the version is not supported
        """
        try:
            self._signature_version = ApiVersion(version)
        except ValueError as e:
            raise ConfigurationError(
                f"Unsupported signature version: {version}",
                details={"supported_versions": [v.value for v in ApiVersion]}
            ) from e
        return self

    def build(self) -> SignerConfig:
        """
        Build the signer configuration.

        Returns:
            SignerConfig: Complete signer configuration

        Raises:
            ParamsNotSetError: If any identity field or the key is missing
            ConfigurationError: If the key is not an RSA private key
        """
        config = SignerConfig(
            tenancy_id=self._tenancy_id,
            user_id=self._user_id,
            key_fingerprint=self._key_fingerprint,
            private_key=self._private_key,
            signature_version=self._signature_version,
        )
        validate_signer_config(config)

        if not isinstance(config.private_key, RSAPrivateKey):
            raise ConfigurationError(
                f"Private key must be an RSA private key, got {type(config.private_key).__name__}"
            )

        return config


def create_signer_config() -> SignerConfigBuilder:
    """
    Create a new signer configuration builder.

    Returns:
        SignerConfigBuilder: New configuration builder
    """
    return SignerConfigBuilder()


def validate_signer_config(config: SignerConfig) -> None:
    """
    Check that a configuration can be used for signing.

    Args:
        config: Signer configuration to validate

    Raises:
        ConfigurationError: If config is not a SignerConfig
        ParamsNotSetError: If tenancy, user, fingerprint or private key is missing
    """
    if not isinstance(config, SignerConfig):
        raise ConfigurationError("Configuration must be SignerConfig instance")

    missing = config.missing_params()
    if missing:
        raise ParamsNotSetError(
            f"Signer parameters not set: {', '.join(missing)}",
            details={"missing_params": missing}
        )


def load_signer_config_from_env(
    environ: Optional[Mapping[str, str]] = None,
    prefix: str = "OCI_"
) -> SignerConfig:
    """
    Load a signer configuration from environment variables.

    Reads <prefix>TENANCY_ID, <prefix>USER_ID, <prefix>KEY_FINGERPRINT,
    <prefix>PRIVATE_KEY (PEM text; literal "\\n" sequences are accepted) and
    the optional <prefix>PRIVATE_KEY_PASSPHRASE.

    Args:
        environ: Mapping to read from (defaults to os.environ)
        prefix: Variable name prefix

    Returns:
        SignerConfig: Complete signer configuration

    Raises:
        ParamsNotSetError: If a required variable is missing
        KeyLoadError: If the private key cannot be parsed
    """
    env = os.environ if environ is None else environ
    builder = create_signer_config()

    builder.tenancy_id(env.get(prefix + ENV_TENANCY_ID))
    builder.user_id(env.get(prefix + ENV_USER_ID))
    builder.key_fingerprint(env.get(prefix + ENV_KEY_FINGERPRINT))

    pem = env.get(prefix + ENV_PRIVATE_KEY)
    if pem:
        builder.private_key_pem(
            pem.replace('\\n', '\n'),
            env.get(prefix + ENV_PRIVATE_KEY_PASSPHRASE) or None
        )

    return builder.build()
