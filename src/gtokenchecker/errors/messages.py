"""User-facing error messages with remediation."""

from __future__ import annotations

from gtokenchecker.errors.types import ApiError
from gtokenchecker.errors.types import DecodeFailure
from gtokenchecker.errors.types import RateLimited
from gtokenchecker.errors.types import TransportFailure
from gtokenchecker.errors.types import Unauthorized
from gtokenchecker.errors.types import UnexpectedStatus

REMEDIATIONS: dict[str, str] = {
    "unauthorized": "The token is invalid, expired or was reset by a password change.",
    "rate_limited": "Wait a few minutes or raise [cyan]--rate-limit-delay[/cyan].",
    "network": "Check your internet connection or raise [cyan]--network-delay[/cyan].",
    "unexpected": "Discord returned something unexpected. Try again later.",
    "decode": "The Discord API response format may have changed.",
}


def describe_error(error: ApiError, attempts: int = 1) -> str:
    """Describe a terminal check failure.

    Args:
        error: Last error observed for the token
        attempts: Number of attempts that were made

    Returns:
        One line classification, suitable for the report
    """
    tries = f"{attempts} attempt" + ("" if attempts == 1 else "s")

    match error:
        case Unauthorized(code=code, message=message):
            return f"Invalid token ({code}: {message})"
        case RateLimited():
            return f"Rate limited after {tries}"
        case TransportFailure(kind=kind, detail=detail):
            return f"Network error after {tries} ({kind}): {detail}"
        case UnexpectedStatus(status=status, body=body):
            return f"Unexpected status {status}: {body}"
        case DecodeFailure(detail=detail):
            return f"Could not decode response: {detail}"
    return str(error)


def get_remediation(error: ApiError) -> str | None:
    """Hint on what to do about an error."""
    match error:
        case Unauthorized():
            return REMEDIATIONS["unauthorized"]
        case RateLimited():
            return REMEDIATIONS["rate_limited"]
        case TransportFailure():
            return REMEDIATIONS["network"]
        case UnexpectedStatus():
            return REMEDIATIONS["unexpected"]
        case DecodeFailure():
            return REMEDIATIONS["decode"]
    return None
