"""Error handling for gtokenchecker."""

from gtokenchecker.errors.classify import classify_decode_error
from gtokenchecker.errors.classify import classify_transport_error
from gtokenchecker.errors.messages import REMEDIATIONS
from gtokenchecker.errors.messages import describe_error
from gtokenchecker.errors.messages import get_remediation
from gtokenchecker.errors.types import (
    ApiError,
    DecodeFailure,
    ErrorCategory,
    ErrorSeverity,
    RateLimited,
    TransportFailure,
    TransportKind,
    Unauthorized,
    UnexpectedStatus,
)

__all__ = [
    # Core types
    "ApiError",
    "ErrorCategory",
    "ErrorSeverity",
    "TransportKind",
    "Unauthorized",
    "RateLimited",
    "UnexpectedStatus",
    "TransportFailure",
    "DecodeFailure",
    # Classification
    "classify_transport_error",
    "classify_decode_error",
    # Messages
    "REMEDIATIONS",
    "describe_error",
    "get_remediation",
]
