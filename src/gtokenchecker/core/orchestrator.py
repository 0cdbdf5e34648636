"""Orchestration of token checks: per-token retry loop and multi-token fan-out."""

from __future__ import annotations

import asyncio
import contextlib
import time
from collections.abc import Callable
from collections.abc import Sequence

import httpx
import structlog

from gtokenchecker.config.settings import Config
from gtokenchecker.config.settings import get_config
from gtokenchecker.core.aggregate import fetch_token_details
from gtokenchecker.core.gateway import DiscordAPI
from gtokenchecker.core.gateway import Success
from gtokenchecker.core.http import create_client
from gtokenchecker.core.retry import RetryConfig
from gtokenchecker.core.retry import calculate_retry_delay
from gtokenchecker.core.retry import should_retry
from gtokenchecker.errors.types import ApiError
from gtokenchecker.errors.types import TransportFailure
from gtokenchecker.errors.types import TransportKind
from gtokenchecker.errors.types import Unauthorized
from gtokenchecker.models import CheckAttempt
from gtokenchecker.models import CheckOutcome
from gtokenchecker.tokens import mask_token

logger = structlog.get_logger(__name__)


async def check_token(
    token: str,
    index: int = 0,
    config: Config | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> CheckOutcome:
    """Check a single token, retrying transient identity failures.

    Each attempt fetches the identity with a fresh client and, when that
    succeeds, fans out to the remaining endpoints. Only identity failures are
    retried: rate limits wait ``rate_limit_delay``, connect/timeout/request
    failures wait ``network_delay``. Anything else ends the check.

    Args:
        token: Discord token
        index: Position of the token in the input, kept for ordering
        config: Settings (uses the global config if None)
        transport: Optional transport override passed to the client

    Returns:
        CheckOutcome with the result or the last error
    """
    config = config or get_config()
    retry = RetryConfig.from_config(config)
    log = logger.bind(account=mask_token(token), index=index)

    if not token.isascii():
        # httpx cannot encode the Authorization header
        error = TransportFailure(
            kind=TransportKind.OTHER,
            detail="token contains non-ASCII characters",
        )
        return CheckOutcome(index=index, token=token, error=error)

    attempts: list[CheckAttempt] = []
    last_error: ApiError | None = None

    for number in range(1, retry.max_attempts + 1):
        start_time = time.monotonic()

        async with create_client(token, config, transport=transport) as client:
            api = DiscordAPI(client, token)
            identity = await api.get_me()

            if isinstance(identity, Success):
                result = await fetch_token_details(api, identity.value, config.api.locale)
                duration_ms = int((time.monotonic() - start_time) * 1000)
                attempts.append(CheckAttempt(number=number, duration_ms=duration_ms))
                log.debug("token checked", attempt=number, rate_limited=result.rate_limited)
                return CheckOutcome(
                    index=index,
                    token=token,
                    result=result,
                    attempts=attempts,
                )

        duration_ms = int((time.monotonic() - start_time) * 1000)
        attempts.append(
            CheckAttempt(number=number, error=str(identity), duration_ms=duration_ms)
        )
        last_error = identity

        if not should_retry(identity) or number >= retry.max_attempts:
            break

        delay = calculate_retry_delay(identity, retry)
        log.info(
            "retrying token check",
            attempt=number,
            max_attempts=retry.max_attempts,
            category=identity.category,
            delay=delay,
        )
        await asyncio.sleep(delay)

    log.info("token check failed", attempts=len(attempts), error=str(last_error))
    return CheckOutcome(index=index, token=token, error=last_error, attempts=attempts)


async def check_tokens(
    tokens: Sequence[str],
    config: Config | None = None,
    on_complete: Callable[[CheckOutcome], None] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[CheckOutcome]:
    """Check all tokens concurrently.

    Concurrency is bounded by ``check.max_concurrent`` (0 means unbounded).
    Outcomes are returned in input order whatever order they finish in.

    Args:
        tokens: Tokens to check
        config: Settings (uses the global config if None)
        on_complete: Optional callback called with each outcome as it finishes
        transport: Optional transport override passed to every client

    Returns:
        List of CheckOutcome, one per token, in input order
    """
    config = config or get_config()
    max_concurrent = config.check.max_concurrent
    semaphore = asyncio.Semaphore(max_concurrent) if max_concurrent > 0 else None

    outcomes: list[CheckOutcome] = []

    async def run(index: int, token: str) -> None:
        limiter = semaphore if semaphore is not None else contextlib.nullcontext()
        async with limiter:
            outcome = await check_token(token, index, config, transport)
        outcomes.append(outcome)
        if on_complete:
            on_complete(outcome)

    await asyncio.gather(*(run(i, t) for i, t in enumerate(tokens)))

    return sorted(outcomes, key=lambda o: o.index)


def categorize_outcomes(outcomes: Sequence[CheckOutcome]) -> dict[str, list[int]]:
    """Group outcome indexes by result type.

    Returns dict with keys: 'valid', 'rate_limited', 'invalid', 'failed'
    """
    categories: dict[str, list[int]] = {}
    for outcome in outcomes:
        if outcome.result is not None:
            key = "rate_limited" if outcome.result.rate_limited else "valid"
        elif isinstance(outcome.error, Unauthorized):
            key = "invalid"
        else:
            key = "failed"
        categories.setdefault(key, []).append(outcome.index)
    return categories
