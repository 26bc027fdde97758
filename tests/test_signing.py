"""
Test suite for OCI request signing

This module tests the complete signing pipeline: fixture scenarios for GET
and POST requests, signature properties, and error conditions.
"""

import hashlib
import base64
from dataclasses import FrozenInstanceError
from unittest.mock import patch

import pytest
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from oci_request_signer import (
    RequestSigner,
    create_signer,
    sign_request,
    build_authorization_header,
    create_request,
    SignableRequest,
    SignerConfig,
    ApiVersion,
    ParamsNotSetError,
    MethodMissingError,
    UrlMissingError,
    SigningHeaderMissingError,
    SigningError,
    verify_signature,
)
from oci_request_signer.signing import extract_signed_headers

from conftest import (
    TENANCY_OCID,
    USER_OCID,
    KEY_FINGERPRINT,
    KEY_ID,
    FIXED_DATE,
    HOST,
    GET_URL,
    POST_URL,
    POST_BODY,
    EMPTY_BODY_SHA256,
    parse_authorization,
)

GET_SIGNING_STRING = (
    "date: Thu, 05 Jan 2014 21:31:40 GMT\n"
    "(request-target): get /20160918/instances"
    "?availabilityDomain=Pjwf%3A%20PHX-AD-1"
    "&compartmentId=ocid1.compartment.oc1..aaaaaaaam3we6vgnherjq5q2idnccdflvjsnog7mlr6rtdb25gilchfeyjxa"
    "&displayName=TeamXInstances"
    "&volumeId=ocid1.volume.oc1.phx.abyhqljrgvttnlx73nmrwfaux7kcvzfs3s66izvxf2h4lgvyndsdsnoiwr5q\n"
    "host: iaas.us-phoenix-1.oraclecloud.com"
)

BODY_HEADERS = "date (request-target) host content-length content-type x-content-sha256"


def _post_signing_string(content_length, content_sha256):
    return (
        "date: Thu, 05 Jan 2014 21:31:40 GMT\n"
        "(request-target): post /20160918/volumeAttachments\n"
        "host: iaas.us-phoenix-1.oraclecloud.com\n"
        f"content-length: {content_length}\n"
        "content-type: application/json\n"
        f"x-content-sha256: {content_sha256}"
    )


def _get_request(**overrides):
    headers = {"date": FIXED_DATE, "host": HOST}
    headers.update(overrides.pop("headers", {}))
    return SignableRequest(method=overrides.pop("method", "GET"), url=overrides.pop("url", GET_URL),
                           headers=headers, **overrides)


def _post_request(body=None, headers=None):
    request_headers = {"date": FIXED_DATE, "host": HOST}
    request_headers.update(headers or {})
    return SignableRequest(method="POST", url=POST_URL, headers=request_headers, body=body)


class TestFixtureScenarios:
    """Reproducible Authorization values for fixed inputs"""

    def test_hard_coded_get(self, signer_config, expected_authorization):
        """GET request with date and host supplied by the caller"""
        signed = sign_request(_get_request(), signer_config)

        assert signed.headers["Authorization"] == expected_authorization(
            GET_SIGNING_STRING, "date (request-target) host"
        )

    def test_dynamic_get(self, signer_config, expected_authorization):
        """GET request built with create_request matches the hard-coded one"""
        request = create_request(GET_URL)
        request.headers["date"] = FIXED_DATE

        signed = create_signer(signer_config).sign(request)

        assert signed.headers["Authorization"] == expected_authorization(
            GET_SIGNING_STRING, "date (request-target) host"
        )

    def test_hard_coded_post(self, signer_config, expected_authorization):
        """POST request with every body header supplied by the caller"""
        digest = base64.b64encode(hashlib.sha256(POST_BODY).digest()).decode('ascii')
        request = _post_request(body=POST_BODY, headers={
            "content-type": "application/json",
            "content-length": str(len(POST_BODY)),
            "x-content-sha256": digest,
        })

        signed = sign_request(request, signer_config)

        assert signed.headers["Authorization"] == expected_authorization(
            _post_signing_string(len(POST_BODY), digest), BODY_HEADERS
        )

    def test_dynamic_post(self, signer_config, expected_authorization):
        """POST request whose body headers are all computed by the signer"""
        digest = base64.b64encode(hashlib.sha256(POST_BODY).digest()).decode('ascii')
        request = create_request(POST_URL, method="POST", body=POST_BODY)
        request.headers["date"] = FIXED_DATE

        signed = sign_request(request, signer_config)

        assert signed.headers["content-length"] == str(len(POST_BODY))
        assert signed.headers["content-type"] == "application/json"
        assert signed.headers["x-content-sha256"] == digest
        assert signed.headers["Authorization"] == expected_authorization(
            _post_signing_string(len(POST_BODY), digest), BODY_HEADERS
        )

    def test_empty_post(self, signer_config, expected_authorization):
        """POST without a body signs a zero length and the empty-bytes digest"""
        signed = sign_request(_post_request(), signer_config)

        assert signed.headers["content-length"] == "0"
        assert signed.headers["x-content-sha256"] == EMPTY_BODY_SHA256
        assert signed.headers["Authorization"] == expected_authorization(
            _post_signing_string(0, EMPTY_BODY_SHA256), BODY_HEADERS
        )

    def test_empty_post_differs_from_body_post(self, signer_config):
        """Empty and body-bearing POST requests produce different signatures"""
        empty = sign_request(_post_request(), signer_config)
        with_body = sign_request(_post_request(body=POST_BODY), signer_config)

        assert empty.headers["Authorization"] != with_body.headers["Authorization"]

    def test_put_signs_body_headers(self, signer_config):
        """PUT extends the header list like POST"""
        request = _get_request(method="PUT", url=POST_URL, body=b'{"a": 1}')

        signed = sign_request(request, signer_config)

        assert parse_authorization(signed.headers["Authorization"])["headers"] == BODY_HEADERS


class TestSignatureProperties:
    """Properties that hold for every signed request"""

    def test_signing_is_deterministic(self, signer_config):
        """Signing the same input twice yields the same header"""
        first = sign_request(_get_request(), signer_config)
        second = sign_request(_get_request(), signer_config)

        assert first.headers["Authorization"] == second.headers["Authorization"]

    def test_signature_verifies_with_public_key(self, signer_config, private_key):
        """The signature verifies against the canonical string"""
        signer = RequestSigner(signer_config)
        result = signer.compute_signature(_get_request())

        assert result.signing_string == GET_SIGNING_STRING
        assert verify_signature(private_key.public_key(), result.signing_string, result.signature)

    def test_header_list_matches_signing_string_order(self, signer_config):
        """headers="..." lists exactly the signed lines, in order"""
        signer = RequestSigner(signer_config)
        request = _post_request(body=POST_BODY, headers={"x-date": FIXED_DATE})

        signed = signer.sign(request)
        fields = parse_authorization(signed.headers["Authorization"])
        result = signer.compute_signature(signed)

        assert fields["headers"].split(" ") == extract_signed_headers(result.signing_string)
        assert fields["headers"].split(" ") == result.headers

    def test_authorization_fields(self, signer_config):
        """Version, key id and algorithm are formatted as expected"""
        signed = sign_request(_get_request(), signer_config)
        fields = parse_authorization(signed.headers["Authorization"])

        assert fields["version"] == "1"
        assert fields["key_id"] == KEY_ID
        assert fields["algorithm"] == "rsa-sha256"

    def test_signed_header_change_changes_signature(self, signer_config):
        """Changing a signed header value changes the signature"""
        original = sign_request(_get_request(), signer_config)
        changed = sign_request(
            _get_request(headers={"date": "Fri, 06 Jan 2014 21:31:40 GMT"}), signer_config
        )

        assert original.headers["Authorization"] != changed.headers["Authorization"]

    def test_unsigned_header_change_keeps_signature(self, signer_config):
        """Adding or changing an unsigned header does not affect the signature"""
        original = sign_request(_get_request(), signer_config)
        first = sign_request(_get_request(headers={"opc-request-id": "one"}), signer_config)
        second = sign_request(_get_request(headers={"opc-request-id": "two"}), signer_config)

        assert original.headers["Authorization"] == first.headers["Authorization"]
        assert first.headers["Authorization"] == second.headers["Authorization"]

    def test_body_change_changes_post_signature(self, signer_config):
        """The body is covered through x-content-sha256"""
        first = sign_request(_post_request(body=b'{"a": 1}'), signer_config)
        second = sign_request(_post_request(body=b'{"a": 2}'), signer_config)

        assert first.headers["Authorization"] != second.headers["Authorization"]

    def test_caller_request_is_not_modified(self, signer_config):
        """Signing returns a new request and leaves the input untouched"""
        request = _post_request(body=POST_BODY)

        signed = sign_request(request, signer_config)

        assert signed is not request
        assert "Authorization" not in request.headers
        assert "x-content-sha256" not in request.headers
        assert "Authorization" in signed.headers

    def test_existing_headers_are_kept(self, signer_config):
        """Headers that are not signed survive signing"""
        signed = sign_request(_get_request(headers={"opc-request-id": "abc"}), signer_config)

        assert signed.headers["opc-request-id"] == "abc"
        assert signed.headers["host"] == HOST

    def test_existing_authorization_is_replaced(self, signer_config):
        """A stale Authorization value is overwritten, not duplicated"""
        request = _get_request(headers={"authorization": "stale"})

        signed = sign_request(request, signer_config)

        values = [v for k, v in signed.headers.items() if k.lower() == "authorization"]
        assert len(values) == 1
        assert values[0].startswith('Signature version="1"')

    def test_mixed_case_header_names(self, signer_config, expected_authorization):
        """Header names are matched case-insensitively and emitted lowercase"""
        request = SignableRequest(
            method="GET",
            url=GET_URL,
            headers={"Date": FIXED_DATE, "Host": HOST},
        )

        signed = sign_request(request, signer_config)

        assert signed.headers["Authorization"] == expected_authorization(
            GET_SIGNING_STRING, "date (request-target) host"
        )

    def test_x_date_replaces_date(self, signer_config):
        """An x-date header is signed in place of date"""
        request = SignableRequest(
            method="GET",
            url=GET_URL,
            headers={"x-date": FIXED_DATE, "host": HOST},
        )

        signed = sign_request(request, signer_config)
        fields = parse_authorization(signed.headers["Authorization"])

        assert fields["headers"] == "x-date (request-target) host"

    def test_lowercase_post_uses_base_headers(self, signer_config):
        """Method matching for body headers is case-sensitive"""
        request = _get_request(method="post", url=POST_URL)

        signed = sign_request(request, signer_config)

        assert parse_authorization(signed.headers["Authorization"])["headers"] == "date (request-target) host"
        assert "content-length" not in signed.headers

    @pytest.mark.parametrize("method", ["DELETE", "PATCH", "HEAD", "BREW"])
    def test_other_methods_use_base_headers(self, signer_config, method):
        """Only POST and PUT extend the header list"""
        signed = sign_request(_get_request(method=method), signer_config)

        assert parse_authorization(signed.headers["Authorization"])["headers"] == "date (request-target) host"


class TestSigningErrors:
    """Failure conditions surfaced by the signer"""

    @pytest.mark.parametrize("missing", ["tenancy_id", "user_id", "key_fingerprint", "private_key"])
    def test_params_not_set(self, signer_config, missing):
        """Every identity field and the key are required"""
        config = SignerConfig(**{
            "tenancy_id": signer_config.tenancy_id,
            "user_id": signer_config.user_id,
            "key_fingerprint": signer_config.key_fingerprint,
            "private_key": signer_config.private_key,
            missing: None,
        })
        request = _get_request()

        with pytest.raises(ParamsNotSetError) as exc_info:
            sign_request(request, config)

        assert exc_info.value.error_code == "PARAMS_NOT_SET"
        assert exc_info.value.details["missing_params"] == [missing]
        assert "Authorization" not in request.headers

    def test_empty_config(self):
        """A default SignerConfig cannot sign"""
        with pytest.raises(ParamsNotSetError):
            RequestSigner(SignerConfig())

    def test_missing_host(self, signer_config):
        """A request without host fails instead of signing without it"""
        request = SignableRequest(method="GET", url=GET_URL, headers={"date": FIXED_DATE})

        with pytest.raises(SigningHeaderMissingError) as exc_info:
            sign_request(request, signer_config)

        assert exc_info.value.details["header"] == "host"

    def test_missing_date(self, signer_config):
        """date is required when x-date is absent"""
        request = SignableRequest(method="GET", url=GET_URL, headers={"host": HOST})

        with pytest.raises(SigningHeaderMissingError):
            sign_request(request, signer_config)

    def test_missing_method(self, signer_config):
        """(request-target) needs a method"""
        request = SignableRequest(method=None, url=GET_URL, headers={"date": FIXED_DATE, "host": HOST})

        with pytest.raises(MethodMissingError):
            sign_request(request, signer_config)

    def test_missing_url(self, signer_config):
        """(request-target) needs a URL"""
        request = SignableRequest(method="GET", url=None, headers={"date": FIXED_DATE, "host": HOST})

        with pytest.raises(UrlMissingError):
            sign_request(request, signer_config)

    def test_non_rsa_key(self, signer_config):
        """A key that cannot do RSA-SHA256 raises SigningError"""
        config = SignerConfig(
            tenancy_id=TENANCY_OCID,
            user_id=USER_OCID,
            key_fingerprint=KEY_FINGERPRINT,
            private_key=Ed25519PrivateKey.generate(),
        )

        with pytest.raises(SigningError) as exc_info:
            sign_request(_get_request(), config)

        assert exc_info.value.error_code == "SIGNING_FAILED"

    def test_rsa_failure_is_wrapped(self, signer_config):
        """Errors from the RSA operation are wrapped in SigningError"""
        with patch(
            'oci_request_signer.signing.oci_signer.sign_rsa_sha256',
            side_effect=ValueError("digest too big for key"),
        ):
            with pytest.raises(SigningError) as exc_info:
                sign_request(_get_request(), signer_config)

        assert "digest too big for key" in exc_info.value.details["original_error"]
        assert isinstance(exc_info.value.__cause__, ValueError)


class TestSignerConfig:
    """SignerConfig behaviour"""

    def test_key_id(self, signer_config):
        assert signer_config.key_id == KEY_ID

    def test_default_version(self, signer_config):
        assert signer_config.signature_version == ApiVersion.ONE

    def test_config_is_immutable(self, signer_config):
        with pytest.raises(FrozenInstanceError):
            signer_config.tenancy_id = "other"

    def test_private_key_not_in_repr(self, signer_config):
        assert "private_key" not in repr(signer_config)


class TestAuthorizationHeader:
    """Formatting of the Authorization value"""

    def test_format(self):
        value = build_authorization_header(
            ApiVersion.ONE,
            ["date", "(request-target)", "host"],
            "t/u/f",
            "c2lnbmF0dXJl"
        )

        assert value == (
            'Signature version="1",headers="date (request-target) host",'
            'keyId="t/u/f",algorithm="rsa-sha256",signature="c2lnbmF0dXJl"'
        )
