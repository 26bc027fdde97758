#!/usr/bin/env python3
"""
OCI Request Signer - Request Signing Example

This example signs GET and POST requests for the OCI REST API with a freshly
generated RSA key and shows the signing string and Authorization header.
Nothing is sent over the network.
"""

import json
import sys
import os

# Add src to path for development
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from oci_request_signer import (
    # Keys
    generate_private_key,
    private_key_to_pem,
    # Request signing
    create_signer_config,
    create_request,
    RequestSigner,
    HttpMethod,
    # Errors
    OCISignerError,
    SignableRequest,
)

TENANCY_OCID = "ocid1.tenancy.oc1..aaaaaaaaba3pv6wkcr4jqae5f15p2b2m2yt2j6rx32uzr4h25vqstifsfdsq"
USER_OCID = "ocid1.user.oc1..aaaaaaaat5nvwcna5j6aqzjcaty5eqbb6qt2jvpkanghtgdaqedqw3rynjq"
KEY_FINGERPRINT = "73:61:a2:21:67:e0:df:be:7e:4b:93:1e:15:98:a5:b7"


def build_signer():
    """Create a signer from a PEM key, as an application would."""
    print("1. Generating RSA key and signer configuration...")
    pem = private_key_to_pem(generate_private_key())

    config = (create_signer_config()
              .tenancy_id(TENANCY_OCID)
              .user_id(USER_OCID)
              .key_fingerprint(KEY_FINGERPRINT)
              .private_key_pem(pem)
              .build())

    print(f"   Key ID: {config.key_id}")
    return RequestSigner(config)


def get_example(signer):
    """Sign a GET request"""
    print("\n=== GET Request ===")
    request = create_request(
        "https://iaas.us-phoenix-1.oraclecloud.com/20160918/instances"
        "?availabilityDomain=Pjwf%3A%20PHX-AD-1&displayName=TeamXInstances"
    )

    result = signer.compute_signature(request)
    signed = signer.sign(request)

    print("   Signing string:")
    print("   " + "\n   ".join(result.signing_string.split('\n')))
    print(f"   Authorization: {signed.headers['Authorization']}")


def post_example(signer):
    """Sign a POST request whose body headers are computed automatically"""
    print("\n=== POST Request ===")
    body = json.dumps({
        "compartmentId": "ocid1.compartment.oc1..aaaaaaaam3we6vgnherjq5q2idnccdflvjsnog7mlr6rtdb25gilchfeyjxa",
        "instanceId": "ocid1.instance.oc1.phx.abuw4ljrlsfiqw6vzzxb43vyypt4pkodawglp3wqxjqofakrwvou52gb6s5a",
    })
    request = create_request(
        "https://iaas.us-phoenix-1.oraclecloud.com/20160918/volumeAttachments",
        method=HttpMethod.POST,
        body=body
    )

    signed = signer.sign(request)

    for name in ("content-length", "content-type", "x-content-sha256", "Authorization"):
        print(f"   {name}: {signed.headers[name]}")


def error_handling_example(signer):
    """Show the error raised for a request without a host header"""
    print("\n=== Error Handling ===")
    request = SignableRequest(
        method="GET",
        url="https://iaas.us-phoenix-1.oraclecloud.com/20160918/instances",
        headers={"date": "Thu, 05 Jan 2014 21:31:40 GMT"}
    )

    try:
        signer.sign(request)
    except OCISignerError as e:
        print(f"   {type(e).__name__} [{e.error_code}]: {e.message}")


def main():
    """Run all examples"""
    print("OCI Request Signer - Request Signing Examples")
    print("=" * 50)

    signer = build_signer()
    get_example(signer)
    post_example(signer)
    error_handling_example(signer)


if __name__ == "__main__":
    main()
