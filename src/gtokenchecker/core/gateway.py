"""Typed wrappers around the Discord endpoints used by the checker.

Every method performs exactly one GET and never raises for HTTP or decode
problems: the response is translated into ``Success`` or one of the
``ApiError`` variants. Retrying is left to the orchestrator.
"""

from __future__ import annotations

import math
from http import HTTPStatus
from typing import Any

import httpx
import msgspec
import structlog

from gtokenchecker.constants import NITRO_APPLICATION_ID
from gtokenchecker.errors.classify import classify_decode_error
from gtokenchecker.errors.classify import classify_transport_error
from gtokenchecker.errors.types import ApiError
from gtokenchecker.errors.types import RateLimited
from gtokenchecker.errors.types import Unauthorized
from gtokenchecker.errors.types import UnexpectedStatus
from gtokenchecker.models import Boost
from gtokenchecker.models import Connection
from gtokenchecker.models import ErrorBody
from gtokenchecker.models import Gift
from gtokenchecker.models import Guild
from gtokenchecker.models import NitroCredits
from gtokenchecker.models import NitroSubscription
from gtokenchecker.models import Promotion
from gtokenchecker.models import RateLimitBody
from gtokenchecker.models import Relationship
from gtokenchecker.models import TokenInfo
from gtokenchecker.tokens import mask_token
from gtokenchecker.utils import get_avatar_url
from gtokenchecker.utils import get_banner_url

logger = structlog.get_logger(__name__)

DEFAULT_LOCALE = "en-US"


class Success(msgspec.Struct, frozen=True):
    """Decoded payload of a successful call."""

    value: Any


Outcome = Success | ApiError


def parse_unauthorized(response: httpx.Response) -> Unauthorized:
    """Build the error for a 401, tolerating an unparsable body."""
    try:
        body = msgspec.json.decode(response.content, type=ErrorBody)
    except msgspec.DecodeError:
        return Unauthorized(code=401, message="Unauthorized (parsing failed)")
    return Unauthorized(code=body.code, message=body.message)


def _usable_retry_after(value: float | None) -> float | None:
    """Drop ``retry_after`` values that cannot be slept on."""
    if value is None or not math.isfinite(value) or value < 0:
        return None
    return value


def parse_rate_limited(response: httpx.Response) -> RateLimited:
    """Build the error for a 429; the body is optional."""
    try:
        body = msgspec.json.decode(response.content, type=RateLimitBody)
    except msgspec.DecodeError:
        body = RateLimitBody()

    retry_after = _usable_retry_after(body.retry_after)
    if retry_after is None:
        header = response.headers.get("Retry-After")
        if header:
            try:
                retry_after = _usable_retry_after(float(header))
            except ValueError:
                retry_after = None

    return RateLimited(code=body.code, message=body.message, retry_after=retry_after)


def parse_unexpected(response: httpx.Response) -> UnexpectedStatus:
    """Build the error for any other status, keeping the raw body."""
    try:
        body = response.text
    except httpx.StreamError:
        body = ""
    if not body:
        try:
            phrase = HTTPStatus(response.status_code).phrase
        except ValueError:
            phrase = response.reason_phrase
        body = f"Status: {response.status_code} {phrase}".strip()
    return UnexpectedStatus(status=response.status_code, body=body)


def translate_response(response: httpx.Response, payload_type: Any) -> Outcome:
    """Translate a response into ``Success`` or an ``ApiError``."""
    status = response.status_code

    if status == 200:
        try:
            return Success(msgspec.json.decode(response.content, type=payload_type))
        except msgspec.DecodeError as e:
            return classify_decode_error(e)

    if status == 401:
        return parse_unauthorized(response)

    if status == 429:
        return parse_rate_limited(response)

    return parse_unexpected(response)


def finalize_identity(info: TokenInfo) -> TokenInfo:
    """Fill in the fields derived from the raw identity payload."""
    return msgspec.structs.replace(
        info,
        fullname=f"{info.username}#{info.discriminator}",
        avatar_url=get_avatar_url(info.id, info.avatar),
        banner_url=get_banner_url(info.id, info.banner),
    )


class DiscordAPI:
    """Read-only Discord endpoints for one token.

    Args:
        client: Client created with ``create_client`` for this token
        token: The same token (used for log context only)
    """

    def __init__(self, client: httpx.AsyncClient, token: str) -> None:
        self.client = client
        self.token = token
        self.log = logger.bind(account=mask_token(token))

    async def _get(
        self,
        endpoint: str,
        path: str,
        payload_type: Any,
        params: dict[str, str] | None = None,
    ) -> Outcome:
        try:
            response = await self.client.get(path, params=params)
        except httpx.HTTPError as e:
            outcome = classify_transport_error(e)
        else:
            outcome = translate_response(response, payload_type)

        if not isinstance(outcome, Success):
            self.log.debug(
                "request failed",
                endpoint=endpoint,
                error=str(outcome),
                category=outcome.category,
            )
        return outcome

    async def get_me(self) -> Outcome:
        """``GET /users/@me``: who the token belongs to."""
        outcome = await self._get("identity", "/users/@me", TokenInfo)
        if isinstance(outcome, Success):
            return Success(finalize_identity(outcome.value))
        return outcome

    async def get_connections(self) -> Outcome:
        return await self._get(
            "connections", "/users/@me/connections", tuple[Connection, ...]
        )

    async def get_promotions(self, locale: str | None = None) -> Outcome:
        return await self._get(
            "promotions",
            "/users/@me/outbound-promotions/codes",
            tuple[Promotion, ...],
            params={"locale": locale or DEFAULT_LOCALE},
        )

    async def get_boosts(self) -> Outcome:
        return await self._get(
            "boosts",
            "/users/@me/guilds/premium/subscription-slots",
            tuple[Boost, ...],
        )

    async def get_relationships(self) -> Outcome:
        return await self._get(
            "relationships", "/users/@me/relationships", tuple[Relationship, ...]
        )

    async def get_guilds(self) -> Outcome:
        return await self._get(
            "guilds",
            "/users/@me/guilds",
            tuple[Guild, ...],
            params={"with_counts": "true"},
        )

    async def get_nitro(self) -> Outcome:
        return await self._get(
            "nitro",
            "/users/@me/billing/subscriptions",
            tuple[NitroSubscription, ...],
        )

    async def get_nitro_credits(self) -> Outcome:
        """Count unused Nitro credits from the Nitro application entitlements."""
        outcome = await self._get(
            "nitro_credits",
            f"/users/@me/applications/{NITRO_APPLICATION_ID}/entitlements",
            list[Gift],
            params={"exclude_consumed": "true"},
        )
        if isinstance(outcome, Success):
            return Success(NitroCredits.from_entitlements(outcome.value))
        return outcome

    async def get_gifts(self) -> Outcome:
        return await self._get(
            "gifts", "/users/@me/entitlements/gifts", tuple[Gift, ...]
        )
