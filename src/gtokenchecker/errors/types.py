"""Error types and classifications."""

from __future__ import annotations

from enum import StrEnum
from typing import ClassVar

import msgspec


class ErrorCategory(StrEnum):
    """Error categories for handling decisions."""

    AUTHENTICATION = "authentication"
    RATE_LIMITED = "rate_limited"
    NETWORK = "network"
    SERVER = "server"
    PARSE = "parse"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


class ErrorSeverity(StrEnum):
    """Error severity levels."""

    FATAL = "fatal"
    RECOVERABLE = "recoverable"
    TRANSIENT = "transient"


class TransportKind(StrEnum):
    """Where a request failed before any status was received."""

    CONNECT = "connect"
    TIMEOUT = "timeout"
    REQUEST = "request"
    OTHER = "other"


class Unauthorized(msgspec.Struct, frozen=True, tag=True):
    """Discord rejected the token (401)."""

    code: int = 401
    message: str = "Unauthorized"

    category: ClassVar[ErrorCategory] = ErrorCategory.AUTHENTICATION
    severity: ClassVar[ErrorSeverity] = ErrorSeverity.FATAL

    def __str__(self) -> str:
        return f"Unauthorized ({self.code}): {self.message}"


class RateLimited(msgspec.Struct, frozen=True, tag=True):
    """Discord asked the client to back off (429)."""

    code: int | None = None
    message: str | None = None
    retry_after: float | None = None

    category: ClassVar[ErrorCategory] = ErrorCategory.RATE_LIMITED
    severity: ClassVar[ErrorSeverity] = ErrorSeverity.TRANSIENT

    def __str__(self) -> str:
        text = "Rate limited"
        if self.message:
            text = f"{text}: {self.message}"
        if self.retry_after is not None:
            text = f"{text} (retry after {self.retry_after:g}s)"
        return text


class UnexpectedStatus(msgspec.Struct, frozen=True, tag=True):
    """Any other non-200 status."""

    status: int
    body: str = ""

    category: ClassVar[ErrorCategory] = ErrorCategory.SERVER
    severity: ClassVar[ErrorSeverity] = ErrorSeverity.RECOVERABLE

    def __str__(self) -> str:
        return f"Unexpected status code: {self.status}. Body: {self.body}"


class TransportFailure(msgspec.Struct, frozen=True, tag=True):
    """The request never produced a response."""

    kind: TransportKind
    detail: str = ""

    category: ClassVar[ErrorCategory] = ErrorCategory.NETWORK
    severity: ClassVar[ErrorSeverity] = ErrorSeverity.TRANSIENT

    def __str__(self) -> str:
        return f"Request error ({self.kind}): {self.detail}"


class DecodeFailure(msgspec.Struct, frozen=True, tag=True):
    """A 200 response whose body did not match the expected schema."""

    detail: str

    category: ClassVar[ErrorCategory] = ErrorCategory.PARSE
    severity: ClassVar[ErrorSeverity] = ErrorSeverity.RECOVERABLE

    def __str__(self) -> str:
        return f"JSON parse error: {self.detail}"


ApiError = Unauthorized | RateLimited | UnexpectedStatus | TransportFailure | DecodeFailure
