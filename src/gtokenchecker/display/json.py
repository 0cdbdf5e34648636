"""JSON output utilities for gtokenchecker."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from datetime import datetime

import msgspec
from rich.text import Text

from gtokenchecker.errors.messages import describe_error
from gtokenchecker.errors.messages import get_remediation
from gtokenchecker.errors.types import ApiError
from gtokenchecker.errors.types import Unauthorized
from gtokenchecker.models import CheckOutcome
from gtokenchecker.tokens import mask_token

__all__ = [
    "ErrorData",
    "error_to_data",
    "outcome_status",
    "outcome_to_dict",
    "outcomes_to_dict",
    "output_json",
    "output_json_pretty",
    "output_json_error",
    "encode_json",
]


class ErrorData(msgspec.Struct, frozen=True, omit_defaults=True):
    """Error data with category, severity, and remediation."""

    message: str
    category: str
    severity: str
    kind: str | None = None
    remediation: str | None = None
    details: dict | None = None


def _plain(markup: str | None) -> str | None:
    """Remediation text without rich markup."""
    if markup is None:
        return None
    return Text.from_markup(markup).plain


def error_to_data(error: ApiError, attempts: int = 1) -> ErrorData:
    """Convert a check error into its JSON shape."""
    return ErrorData(
        message=describe_error(error, attempts),
        category=str(error.category),
        severity=str(error.severity),
        kind=type(error).__name__,
        remediation=_plain(get_remediation(error)),
        details=msgspec.to_builtins(error),
    )


def outcome_status(outcome: CheckOutcome) -> str:
    """``valid``, ``invalid`` or ``error``."""
    if outcome.result is not None:
        return "valid"
    if isinstance(outcome.error, Unauthorized):
        return "invalid"
    return "error"


def outcome_to_dict(outcome: CheckOutcome, mask: bool = False) -> dict:
    """Convert one outcome to a JSON-ready dict.

    Args:
        outcome: Outcome to convert
        mask: Mask the token wherever it appears

    Returns:
        Dict with the token, its status, the gathered data or the error,
        and the attempt history
    """
    token = mask_token(outcome.token) if mask else outcome.token
    data: dict = {
        "index": outcome.index,
        "token": token,
        "status": outcome_status(outcome),
    }

    if outcome.result is not None:
        result = msgspec.to_builtins(outcome.result)
        result["token"] = token
        data["result"] = result
    if outcome.error is not None:
        data["error"] = msgspec.to_builtins(
            error_to_data(outcome.error, len(outcome.attempts) or 1)
        )

    data["attempts"] = msgspec.to_builtins(outcome.attempts)
    return data


def outcomes_to_dict(outcomes: Sequence[CheckOutcome], mask: bool = False) -> dict:
    """Convert all outcomes, with summary counts, to a JSON-ready dict."""
    tokens = [outcome_to_dict(o, mask) for o in outcomes]
    summary: dict[str, int] = {"total": len(tokens), "valid": 0, "invalid": 0, "error": 0}
    for entry in tokens:
        summary[entry["status"]] += 1
    return {
        "checked_at": datetime.now().astimezone().isoformat(),
        "summary": summary,
        "tokens": tokens,
    }


def output_json(data: object) -> None:
    """Output data as JSON to stdout.

    Args:
        data: Any msgspec-serializable object (Struct, dict, list, etc.)
    """
    sys.stdout.buffer.write(msgspec.json.encode(data))
    sys.stdout.buffer.write(b"\n")


def output_json_pretty(data: object, indent: int = 2) -> None:
    """Output data as pretty-printed JSON to stdout.

    Args:
        data: Any msgspec-serializable object
        indent: Number of spaces for indentation
    """
    json_bytes = msgspec.json.format(msgspec.json.encode(data), indent=indent)
    sys.stdout.write(json_bytes.decode())
    sys.stdout.write("\n")


def output_json_error(
    message: str,
    category: str = "unknown",
    severity: str = "fatal",
    remediation: str | None = None,
    indent: int = 2,
) -> None:
    """Output an error that is not tied to a token, e.g. bad input."""
    error = ErrorData(
        message=message,
        category=category,
        severity=severity,
        remediation=remediation,
    )
    output_json_pretty({"error": error}, indent=indent)


def encode_json(data: object) -> bytes:
    """Encode data as JSON bytes."""
    return msgspec.json.encode(data)
