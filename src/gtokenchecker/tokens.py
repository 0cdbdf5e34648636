"""Token masking and token input resolution."""

from __future__ import annotations

import os
from pathlib import Path

TOKEN_FILE_SUFFIXES = {".txt", ".lst", ".tokens"}


class TokenInputError(ValueError):
    """The token argument could not be turned into a list of tokens."""


def mask_token(token: str) -> str:
    """Replace the last dot-delimited segment of a token with asterisks.

    ``"x.y.z"`` becomes ``"x.y.***"``. Tokens without a dot are returned
    unchanged.
    """
    head, sep, tail = token.rpartition(".")
    if not sep:
        return token
    return f"{head}.{'*' * len(tail)}"


def read_token_file(path: Path) -> list[str]:
    """Read a newline-delimited token list.

    Whitespace is stripped; blank lines and ``#`` comments are skipped.
    Order and duplicates are kept.

    Raises:
        TokenInputError: If the file cannot be read or holds no tokens
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise TokenInputError(f"Cannot read token file {path}: {e}") from e

    tokens = [
        line.strip()
        for line in text.splitlines()
        if line.strip() and not line.lstrip().startswith("#")
    ]
    if not tokens:
        raise TokenInputError(f"Token file {path} is empty")
    return tokens


def _looks_like_path(value: str) -> bool:
    if os.sep in value or "/" in value:
        return True
    return Path(value).suffix.lower() in TOKEN_FILE_SUFFIXES


def resolve_tokens(source: str) -> list[str]:
    """Turn the CLI argument into a list of tokens.

    An existing file is read as a token list; anything else is taken as a
    single token literal.

    Raises:
        TokenInputError: If the argument is empty, names a missing file or
            names a file without tokens
    """
    value = source.strip()
    if not value:
        raise TokenInputError("No token given")

    path = Path(value).expanduser()
    if path.is_file():
        return read_token_file(path)
    if _looks_like_path(value):
        raise TokenInputError(f"Token file {value} does not exist")
    return [value]
