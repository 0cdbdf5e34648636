"""Concurrent fetch of everything behind a token, merged into one result."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

import structlog

from gtokenchecker.core.gateway import DiscordAPI
from gtokenchecker.core.gateway import Success
from gtokenchecker.errors.types import RateLimited
from gtokenchecker.models import NitroCredits
from gtokenchecker.models import TokenInfo
from gtokenchecker.models import TokenResult

logger = structlog.get_logger(__name__)

# Value a slot takes when its request fails
SLOT_DEFAULTS: dict[str, Callable[[], Any]] = {
    "connections": tuple,
    "promotions": tuple,
    "boosts": tuple,
    "relationships": tuple,
    "guilds": tuple,
    "nitro": tuple,
    "nitro_credits": NitroCredits,
    "gifts": tuple,
}


def fan_out_calls(api: DiscordAPI, info: TokenInfo, locale: str | None = None) -> dict:
    """Coroutines for every slot, keyed by slot name."""
    return {
        "connections": api.get_connections(),
        "promotions": api.get_promotions(info.locale or locale),
        "boosts": api.get_boosts(),
        "relationships": api.get_relationships(),
        "guilds": api.get_guilds(),
        "nitro": api.get_nitro(),
        "nitro_credits": api.get_nitro_credits(),
        "gifts": api.get_gifts(),
    }


def fold_outcomes(
    token: str,
    info: TokenInfo,
    outcomes: dict[str, object],
    log=logger,
) -> TokenResult:
    """Merge per-slot outcomes into a ``TokenResult``.

    A failed slot gets its empty default and never affects the others. Rate
    limits only set ``rate_limited``; other failures are logged and recorded
    in ``failed``.
    """
    values: dict[str, Any] = {}
    failed: dict[str, str] = {}
    rate_limited = False

    for slot, default in SLOT_DEFAULTS.items():
        outcome = outcomes.get(slot)
        match outcome:
            case Success(value=value):
                values[slot] = value
                continue
            case RateLimited():
                rate_limited = True
            case BaseException():
                log.warning(
                    "request raised",
                    slot=slot,
                    exc_info=outcome,
                )
                failed[slot] = f"{type(outcome).__name__}: {outcome}"
            case None:
                failed[slot] = "not requested"
            case _:
                log.warning("request failed", slot=slot, error=str(outcome))
                failed[slot] = str(outcome)
        values[slot] = default()

    return TokenResult(
        token=token,
        info=info,
        rate_limited=rate_limited,
        failed=failed,
        **values,
    )


async def fetch_token_details(
    api: DiscordAPI,
    info: TokenInfo,
    locale: str | None = None,
) -> TokenResult:
    """Fetch every auxiliary slot concurrently and fold the outcomes.

    All requests are awaited even when some of them fail, so partial data is
    always returned.

    Args:
        api: Gateway bound to the token's client
        info: Identity already fetched for the token
        locale: Fallback locale for promotions when the account has none

    Returns:
        TokenResult with every slot populated
    """
    calls = fan_out_calls(api, info, locale)
    results = await asyncio.gather(*calls.values(), return_exceptions=True)
    return fold_outcomes(api.token, info, dict(zip(calls, results)), log=api.log)
