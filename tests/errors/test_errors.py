"""Tests for the error taxonomy, classification and messages."""

from __future__ import annotations

import httpx
import msgspec
import pytest

from gtokenchecker.errors.classify import classify_decode_error
from gtokenchecker.errors.classify import classify_transport_error
from gtokenchecker.errors.messages import describe_error
from gtokenchecker.errors.messages import get_remediation
from gtokenchecker.errors.types import ApiError
from gtokenchecker.errors.types import DecodeFailure
from gtokenchecker.errors.types import ErrorCategory
from gtokenchecker.errors.types import ErrorSeverity
from gtokenchecker.errors.types import RateLimited
from gtokenchecker.errors.types import TransportFailure
from gtokenchecker.errors.types import TransportKind
from gtokenchecker.errors.types import Unauthorized
from gtokenchecker.errors.types import UnexpectedStatus


class TestErrorTypes:
    """Tests for the ApiError variants."""

    def test_categories(self):
        assert Unauthorized().category == ErrorCategory.AUTHENTICATION
        assert RateLimited().category == ErrorCategory.RATE_LIMITED
        assert UnexpectedStatus(status=500).category == ErrorCategory.SERVER
        assert TransportFailure(kind=TransportKind.CONNECT).category == ErrorCategory.NETWORK
        assert DecodeFailure(detail="x").category == ErrorCategory.PARSE

    def test_severities(self):
        assert Unauthorized().severity == ErrorSeverity.FATAL
        assert RateLimited().severity == ErrorSeverity.TRANSIENT
        assert TransportFailure(kind=TransportKind.TIMEOUT).severity == ErrorSeverity.TRANSIENT

    def test_str(self):
        assert str(Unauthorized(code=0, message="401: Unauthorized")) == (
            "Unauthorized (0): 401: Unauthorized"
        )
        assert str(UnexpectedStatus(status=502, body="Bad Gateway")) == (
            "Unexpected status code: 502. Body: Bad Gateway"
        )
        assert str(RateLimited(message="slow down", retry_after=1.5)) == (
            "Rate limited: slow down (retry after 1.5s)"
        )
        assert str(TransportFailure(kind=TransportKind.CONNECT, detail="refused")) == (
            "Request error (connect): refused"
        )

    def test_errors_are_tagged_for_encoding(self):
        encoded = msgspec.json.encode(UnexpectedStatus(status=500, body="oops"))
        decoded = msgspec.json.decode(encoded, type=ApiError)

        assert b'"type":"UnexpectedStatus"' in encoded
        assert decoded == UnexpectedStatus(status=500, body="oops")


class TestClassifyTransportError:
    """Tests for classify_transport_error."""

    @pytest.mark.parametrize(
        ("exc", "kind"),
        [
            (httpx.ConnectTimeout("t"), TransportKind.TIMEOUT),
            (httpx.ReadTimeout("t"), TransportKind.TIMEOUT),
            (httpx.PoolTimeout("t"), TransportKind.TIMEOUT),
            (httpx.ConnectError("c"), TransportKind.CONNECT),
            (httpx.ReadError("r"), TransportKind.REQUEST),
            (httpx.RemoteProtocolError("p"), TransportKind.REQUEST),
            (httpx.UnsupportedProtocol("u"), TransportKind.OTHER),
            (httpx.TooManyRedirects("r"), TransportKind.OTHER),
        ],
    )
    def test_kinds(self, exc, kind):
        assert classify_transport_error(exc).kind == kind

    def test_detail_falls_back_to_type_name(self):
        failure = classify_transport_error(httpx.ConnectError(""))

        assert failure.detail == "ConnectError"


def test_classify_decode_error():
    try:
        msgspec.json.decode(b"{", type=dict)
    except msgspec.DecodeError as e:
        failure = classify_decode_error(e)

    assert isinstance(failure, DecodeFailure)
    assert failure.detail


class TestDescribeError:
    """Tests for describe_error."""

    def test_unauthorized(self):
        message = describe_error(Unauthorized(code=0, message="401: Unauthorized"))

        assert message == "Invalid token (0: 401: Unauthorized)"

    def test_rate_limited_counts_attempts(self):
        assert describe_error(RateLimited(), attempts=3) == "Rate limited after 3 attempts"
        assert describe_error(RateLimited(), attempts=1) == "Rate limited after 1 attempt"

    def test_network(self):
        message = describe_error(
            TransportFailure(kind=TransportKind.TIMEOUT, detail="read timed out"), attempts=2
        )

        assert message == "Network error after 2 attempts (timeout): read timed out"

    def test_unexpected_status(self):
        assert describe_error(UnexpectedStatus(status=418, body="teapot")) == (
            "Unexpected status 418: teapot"
        )

    def test_decode(self):
        assert describe_error(DecodeFailure(detail="Expected `str`")) == (
            "Could not decode response: Expected `str`"
        )


class TestGetRemediation:
    """Tests for get_remediation."""

    @pytest.mark.parametrize(
        "error",
        [
            Unauthorized(),
            RateLimited(),
            TransportFailure(kind=TransportKind.CONNECT),
            UnexpectedStatus(status=500),
            DecodeFailure(detail="x"),
        ],
    )
    def test_every_variant_has_a_hint(self, error):
        assert get_remediation(error)
