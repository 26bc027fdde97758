"""
Shared fixtures for the OCI request signer test suite
"""

import base64
import re

import pytest
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding

from oci_request_signer import SignerConfig, generate_private_key

TENANCY_OCID = "ocid1.tenancy.oc1..aaaaaaaaba3pv6wkcr4jqae5f15p2b2m2yt2j6rx32uzr4h25vqstifsfdsq"
USER_OCID = "ocid1.user.oc1..aaaaaaaat5nvwcna5j6aqzjcaty5eqbb6qt2jvpkanghtgdaqedqw3rynjq"
KEY_FINGERPRINT = "73:61:a2:21:67:e0:df:be:7e:4b:93:1e:15:98:a5:b7"
KEY_ID = f"{TENANCY_OCID}/{USER_OCID}/{KEY_FINGERPRINT}"

FIXED_DATE = "Thu, 05 Jan 2014 21:31:40 GMT"
HOST = "iaas.us-phoenix-1.oraclecloud.com"

GET_URL = (
    "https://iaas.us-phoenix-1.oraclecloud.com/20160918/instances"
    "?availabilityDomain=Pjwf%3A%20PHX-AD-1"
    "&compartmentId=ocid1.compartment.oc1..aaaaaaaam3we6vgnherjq5q2idnccdflvjsnog7mlr6rtdb25gilchfeyjxa"
    "&displayName=TeamXInstances"
    "&volumeId=ocid1.volume.oc1.phx.abyhqljrgvttnlx73nmrwfaux7kcvzfs3s66izvxf2h4lgvyndsdsnoiwr5q"
)
POST_URL = "https://iaas.us-phoenix-1.oraclecloud.com/20160918/volumeAttachments"

POST_BODY = (
    b'{\n'
    b'    "compartmentId": "ocid1.compartment.oc1..aaaaaaaam3we6vgnherjq5q2idnccdflvjsnog7mlr6rtdb25gilchfeyjxa",\n'
    b'    "instanceId": "ocid1.instance.oc1.phx.abuw4ljrlsfiqw6vzzxb43vyypt4pkodawglp3wqxjqofakrwvou52gb6s5a",\n'
    b'    "volumeId": "ocid1.volume.oc1.phx.abyhqljrgvttnlx73nmrwfaux7kcvzfs3s66izvxf2h4lgvyndsdsnoiwr5q"\n'
    b'}'
)

# base64(sha256(b""))
EMPTY_BODY_SHA256 = "47DEQpj8HBSa+/TImW+5JCeuQeRkm5NMpJWZG3hSuFU="

AUTHORIZATION_PATTERN = re.compile(
    r'^Signature version="(?P<version>\d+)",'
    r'headers="(?P<headers>[^"]*)",'
    r'keyId="(?P<key_id>[^"]*)",'
    r'algorithm="(?P<algorithm>[^"]*)",'
    r'signature="(?P<signature>[^"]*)"$'
)


def parse_authorization(value):
    """Split an Authorization header value into its named fields."""
    match = AUTHORIZATION_PATTERN.match(value)
    assert match is not None, f"Malformed Authorization header: {value}"
    return match.groupdict()


@pytest.fixture(scope="session")
def private_key():
    """RSA test key shared by the whole session."""
    return generate_private_key()


@pytest.fixture
def signer_config(private_key):
    """Complete signer configuration with the fixed test identities."""
    return SignerConfig(
        tenancy_id=TENANCY_OCID,
        user_id=USER_OCID,
        key_fingerprint=KEY_FINGERPRINT,
        private_key=private_key,
    )


@pytest.fixture
def expected_authorization(private_key):
    """
    Build the expected Authorization value for a literal signing string.

    PKCS#1 v1.5 signatures are deterministic, so signing the expected
    string independently reproduces the signer's output exactly.
    """
    def _expected(signing_string, headers):
        raw = private_key.sign(signing_string.encode('utf-8'), padding.PKCS1v15(), hashes.SHA256())
        signature = base64.b64encode(raw).decode('ascii')
        return (
            f'Signature version="1",headers="{headers}",keyId="{KEY_ID}",'
            f'algorithm="rsa-sha256",signature="{signature}"'
        )
    return _expected
