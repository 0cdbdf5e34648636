"""Conversion of library exceptions into structured errors."""

from __future__ import annotations

import httpx
import msgspec

from gtokenchecker.errors.types import DecodeFailure
from gtokenchecker.errors.types import TransportFailure
from gtokenchecker.errors.types import TransportKind


def classify_transport_error(error: httpx.HTTPError) -> TransportFailure:
    """Classify an exception raised while sending a request.

    Connection and timeout failures are told apart so the retry loop can
    decide whether to try again. Other transport level faults (reads, writes,
    protocol errors) are reported as ``request``; anything that is not a
    transport problem at all, such as an invalid URL, becomes ``other``.
    """
    detail = str(error) or type(error).__name__

    if isinstance(error, httpx.TimeoutException):
        return TransportFailure(kind=TransportKind.TIMEOUT, detail=detail)

    if isinstance(error, httpx.ConnectError):
        return TransportFailure(kind=TransportKind.CONNECT, detail=detail)

    if isinstance(error, (httpx.NetworkError, httpx.ProtocolError, httpx.ProxyError)):
        return TransportFailure(kind=TransportKind.REQUEST, detail=detail)

    return TransportFailure(kind=TransportKind.OTHER, detail=detail)


def classify_decode_error(error: msgspec.DecodeError) -> DecodeFailure:
    """Wrap a msgspec decode or validation error."""
    return DecodeFailure(detail=str(error))
