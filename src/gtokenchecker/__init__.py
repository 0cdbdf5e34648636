"""gtokenchecker: Check Discord account tokens and report what they can see."""

from __future__ import annotations

__version__ = "0.1.0"

from gtokenchecker.models import CheckAttempt
from gtokenchecker.models import CheckOutcome
from gtokenchecker.models import TokenInfo
from gtokenchecker.models import TokenResult
from gtokenchecker.tokens import TokenInputError
from gtokenchecker.tokens import mask_token
from gtokenchecker.tokens import resolve_tokens

__all__ = [
    "__version__",
    "CheckAttempt",
    "CheckOutcome",
    "TokenInfo",
    "TokenResult",
    "TokenInputError",
    "mask_token",
    "resolve_tokens",
]


def main() -> None:
    """Entry point for the gtokenchecker CLI."""
    from gtokenchecker.cli.app import run_app

    run_app()
