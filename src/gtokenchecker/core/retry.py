"""Retry policy for token checks."""

from __future__ import annotations

import math
from dataclasses import dataclass

from gtokenchecker.config.settings import Config
from gtokenchecker.errors.types import ApiError
from gtokenchecker.errors.types import RateLimited
from gtokenchecker.errors.types import TransportFailure
from gtokenchecker.errors.types import TransportKind

RETRYABLE_TRANSPORT_KINDS = frozenset(
    {TransportKind.CONNECT, TransportKind.TIMEOUT, TransportKind.REQUEST}
)


@dataclass(frozen=True)
class RetryConfig:
    """Configuration for retry behavior."""

    max_attempts: int = 3
    network_delay: float = 1.0  # seconds
    rate_limit_delay: float = 5.0  # seconds
    respect_retry_after: bool = True
    max_retry_after: float = 60.0  # seconds

    @classmethod
    def from_config(cls, config: Config) -> RetryConfig:
        return cls(
            max_attempts=config.check.max_attempts,
            network_delay=config.check.network_delay,
            rate_limit_delay=config.check.rate_limit_delay,
            respect_retry_after=config.check.respect_retry_after,
            max_retry_after=config.check.max_retry_after,
        )


def should_retry(error: ApiError) -> bool:
    """Determine if an identity fetch failure should trigger another attempt.

    Rate limits and connect, timeout or request level transport failures are
    retryable. Everything else is terminal.
    """
    match error:
        case RateLimited():
            return True
        case TransportFailure(kind=kind):
            return kind in RETRYABLE_TRANSPORT_KINDS
    return False


def calculate_retry_delay(error: ApiError, config: RetryConfig) -> float:
    """Calculate the delay before the next attempt.

    A server supplied ``retry_after`` can lengthen the rate limit delay but
    never past ``max_retry_after``.

    Args:
        error: Error of the attempt that just failed
        config: Retry configuration

    Returns:
        Delay in seconds
    """
    if isinstance(error, RateLimited):
        delay = config.rate_limit_delay
        retry_after = error.retry_after
        usable = retry_after is not None and math.isfinite(retry_after)
        if config.respect_retry_after and usable:
            delay = max(delay, min(retry_after, config.max_retry_after))
        return delay
    return config.network_delay
