"""Core orchestration and utilities for gtokenchecker."""

from gtokenchecker.core.aggregate import SLOT_DEFAULTS, fetch_token_details, fold_outcomes
from gtokenchecker.core.gateway import DiscordAPI, Outcome, Success, translate_response
from gtokenchecker.core.http import create_client, get_timeout_config
from gtokenchecker.core.orchestrator import (
    categorize_outcomes,
    check_token,
    check_tokens,
)
from gtokenchecker.core.retry import (
    RetryConfig,
    calculate_retry_delay,
    should_retry,
)

__all__ = [
    # http
    "create_client",
    "get_timeout_config",
    # gateway
    "DiscordAPI",
    "Outcome",
    "Success",
    "translate_response",
    # retry
    "RetryConfig",
    "calculate_retry_delay",
    "should_retry",
    # aggregate
    "SLOT_DEFAULTS",
    "fetch_token_details",
    "fold_outcomes",
    # orchestrator
    "check_token",
    "check_tokens",
    "categorize_outcomes",
]
