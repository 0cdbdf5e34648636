"""Logging configuration using structlog.

Call ``configure_logging()`` once at startup (the CLI does this). Modules log
through structlog::

    import structlog
    logger = structlog.get_logger(__name__)
    logger.warning("slot failed", account=mask_token(token), slot="guilds")

Diagnostics go to stderr so they never interleave with the report or JSON
written to stdout.
"""

from __future__ import annotations

import logging
import sys

import structlog
from structlog.types import EventDict, WrappedLogger

_SECRET_SUBSTRINGS: frozenset[str] = frozenset({
    "token",
    "authorization",
    "password",
    "secret",
})
"""Lower-cased substrings that identify event-dict keys whose values must be
redacted before the record reaches the renderer. Log the masked token under
``account`` instead."""


def _redact_secrets(
    logger: WrappedLogger,  # noqa: ARG001
    method_name: str,  # noqa: ARG001
    event_dict: EventDict,
) -> EventDict:
    """Replace values of secret-bearing keys with a redaction marker.

    Scans top-level keys and one level of nested ``dict`` values (for
    example ``headers={...}``).
    """
    redacted = "[REDACTED]"
    for key in list(event_dict.keys()):
        if any(secret in key.lower() for secret in _SECRET_SUBSTRINGS):
            event_dict[key] = redacted
            continue
        val = event_dict[key]
        if isinstance(val, dict):
            for nested_key in list(val.keys()):
                if any(secret in str(nested_key).lower() for secret in _SECRET_SUBSTRINGS):
                    val[nested_key] = redacted
    return event_dict


def configure_logging(log_level: str = "WARNING", colors: bool = True) -> None:
    """Configure structlog and stdlib logging.

    Records from both ``structlog.get_logger()`` and ``logging.getLogger()``
    are rendered by structlog's ``ConsoleRenderer`` on stderr. Calling this
    more than once replaces the previous configuration.

    Args:
        log_level: ``"DEBUG"``, ``"INFO"``, ``"WARNING"``, ``"ERROR"`` or
            ``"CRITICAL"``, case-insensitive. Unknown values fall back to
            WARNING.
        colors: Whether the console renderer may use colours.
    """
    level_upper = log_level.upper()
    numeric_level = getattr(logging, level_upper, logging.WARNING)
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING
    is_debug = numeric_level <= logging.DEBUG

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        _redact_secrets,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="%H:%M:%S"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.dev.ConsoleRenderer(colors=colors),
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(numeric_level)

    if not is_debug:
        for noisy_logger in ("httpx", "httpcore"):
            logging.getLogger(noisy_logger).setLevel(logging.WARNING)

    structlog.configure(
        processors=shared_processors
        + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
