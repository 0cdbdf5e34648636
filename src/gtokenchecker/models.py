"""Data models for gtokenchecker.

Payload structs mirror the Discord API responses closely enough to decode them
with msgspec; unknown fields are ignored. ``TokenResult`` and ``CheckOutcome``
are the records produced by the checker.
"""

from __future__ import annotations

from datetime import datetime

import msgspec

from gtokenchecker.constants import NITRO_CLASSIC_SKU_ID
from gtokenchecker.constants import NITRO_SKU_ID
from gtokenchecker.constants import NITRO_SUBSCRIPTION_STATUS
from gtokenchecker.constants import PREMIUM_TYPES
from gtokenchecker.errors.types import ApiError
from gtokenchecker.utils import get_relationship_type
from gtokenchecker.utils import snowflake_to_datetime


class ErrorBody(msgspec.Struct, frozen=True):
    """Error body returned with 401 responses."""

    code: int
    message: str


class RateLimitBody(msgspec.Struct, frozen=True):
    """Body returned with 429 responses. Every field is optional."""

    code: int | None = None
    message: str | None = None
    retry_after: float | None = None
    is_global: bool = msgspec.field(name="global", default=False)


class TokenInfo(msgspec.Struct, frozen=True):
    """Account behind a token (``GET /users/@me``)."""

    id: str
    username: str
    discriminator: str
    email: str | None
    locale: str
    mfa_enabled: bool
    public_flags: int
    global_name: str | None = None
    avatar: str | None = None
    banner: str | None = None
    banner_color: str | None = None
    phone: str | None = None
    bio: str | None = None
    verified: bool | None = None
    premium_type: int | None = None
    flags: int | None = None

    # Filled in after decoding
    fullname: str | None = None
    avatar_url: str | None = None
    banner_url: str | None = None

    @property
    def created_at(self) -> datetime:
        """Account creation time derived from the snowflake id."""
        return snowflake_to_datetime(self.id)

    @property
    def premium_label(self) -> str:
        if self.premium_type is None:
            return "Unknown"
        return PREMIUM_TYPES.get(self.premium_type, "Unknown")


class Connection(msgspec.Struct, frozen=True):
    """Third-party account connected to the user."""

    connection_type: str = msgspec.field(name="type")
    name: str = ""
    visibility: int = 0
    verified: bool = False
    revoked: bool = False
    id: str | None = None

    @property
    def visible(self) -> bool:
        return self.visibility != 0


class PromotionDetails(msgspec.Struct, frozen=True):
    """Nested promotion object of an outbound promotion code."""

    outbound_title: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    outbound_redemption_page_link: str | None = None


class Promotion(msgspec.Struct, frozen=True):
    """Claimed outbound promotion code.

    Discord nests the promotion details under ``promotion``; older responses
    carried them at the top level, so both shapes are accepted.
    """

    code: str
    promotion: PromotionDetails | None = None
    outbound_title: str | None = None
    start_time: str | None = None
    end_date: str | None = None
    outbound_redemption_page_link: str | None = None
    claimed_at: str | None = None

    @property
    def title(self) -> str | None:
        if self.promotion and self.promotion.outbound_title:
            return self.promotion.outbound_title
        return self.outbound_title

    @property
    def starts(self) -> str | None:
        if self.promotion and self.promotion.start_date:
            return self.promotion.start_date
        return self.start_time

    @property
    def ends(self) -> str | None:
        if self.promotion and self.promotion.end_date:
            return self.promotion.end_date
        return self.end_date

    @property
    def link(self) -> str | None:
        if self.promotion and self.promotion.outbound_redemption_page_link:
            return self.promotion.outbound_redemption_page_link
        return self.outbound_redemption_page_link


class PremiumGuildSubscription(msgspec.Struct, frozen=True):
    """Guild a boost slot is applied to."""

    id: str
    guild_id: str
    user_id: str | None = None
    ended: bool = False
    pause_ends_at: str | None = None


class Boost(msgspec.Struct, frozen=True):
    """Guild boost slot."""

    id: str
    subscription_id: str
    canceled: bool = False
    premium_guild_subscription: PremiumGuildSubscription | None = None
    cooldown_ends_at: str | None = None

    @property
    def is_used(self) -> bool:
        return self.premium_guild_subscription is not None


class PublicUser(msgspec.Struct, frozen=True):
    """User embedded in a relationship."""

    id: str
    username: str
    discriminator: str = "0"
    public_flags: int = 0
    avatar: str | None = None
    global_name: str | None = None


class Relationship(msgspec.Struct, frozen=True):
    """Friend, block or pending request."""

    id: str
    user: PublicUser
    relationship_type: int = msgspec.field(name="type", default=0)
    is_spam_request: bool = False
    nickname: str | None = None
    since: str | None = None

    @property
    def type_label(self) -> str:
        return get_relationship_type(self.relationship_type)


class Guild(msgspec.Struct, frozen=True):
    """Guild the user is a member of (``with_counts=true``)."""

    id: str
    name: str
    owner: bool = False
    permissions: str = "0"
    icon: str | None = None
    banner: str | None = None
    approximate_member_count: int = 0


class SubscriptionItem(msgspec.Struct, frozen=True):
    """Plan line of a billing subscription."""

    id: str
    plan_id: str
    quantity: int = 1


class NitroSubscription(msgspec.Struct, frozen=True):
    """Billing subscription (``GET /users/@me/billing/subscriptions``)."""

    id: str
    subscription_type: int = msgspec.field(name="type", default=1)
    status: int = 0
    created_at: str | None = None
    current_period_start: str | None = None
    current_period_end: str | None = None
    canceled_at: str | None = None
    trial_ends_at: str | None = None
    payment_gateway: int | None = None
    items: tuple[SubscriptionItem, ...] = ()

    @property
    def status_label(self) -> str:
        return NITRO_SUBSCRIPTION_STATUS.get(self.status, "Unknown")


class SubscriptionPlan(msgspec.Struct, frozen=True):
    """Plan attached to a gift entitlement."""

    id: str
    name: str
    interval: int | None = None
    interval_count: int | None = None
    sku_id: str | None = None


class Gift(msgspec.Struct, frozen=True):
    """Entitlement record.

    Used both for the gift inventory and for Nitro credits, which are
    unconsumed entitlements of the Nitro application.
    """

    id: str
    sku_id: str
    application_id: str | None = None
    entitlement_type: int | None = msgspec.field(name="type", default=None)
    consumed: bool = False
    subscription_plan: SubscriptionPlan | None = None

    @property
    def plan_name(self) -> str:
        if self.subscription_plan:
            return self.subscription_plan.name
        return "Unknown"


class NitroCredits(msgspec.Struct, frozen=True):
    """Unconsumed Nitro credits."""

    classic: int = 0
    boost: int = 0

    @classmethod
    def from_entitlements(cls, entitlements: list[Gift]) -> NitroCredits:
        unused = [e for e in entitlements if not e.consumed]
        return cls(
            classic=sum(1 for e in unused if e.sku_id == NITRO_CLASSIC_SKU_ID),
            boost=sum(1 for e in unused if e.sku_id == NITRO_SKU_ID),
        )

    @property
    def total(self) -> int:
        return self.classic + self.boost


class TokenResult(msgspec.Struct, frozen=True):
    """Everything gathered for one token.

    Every slot is always populated; a slot whose request failed holds its
    empty default. ``rate_limited`` is set when at least one request was
    rate limited. ``failed`` maps slot names to the reason of any other
    failure.
    """

    token: str
    info: TokenInfo
    connections: tuple[Connection, ...] = ()
    relationships: tuple[Relationship, ...] = ()
    guilds: tuple[Guild, ...] = ()
    boosts: tuple[Boost, ...] = ()
    promotions: tuple[Promotion, ...] = ()
    nitro: tuple[NitroSubscription, ...] = ()
    nitro_credits: NitroCredits = msgspec.field(default_factory=NitroCredits)
    gifts: tuple[Gift, ...] = ()
    rate_limited: bool = False
    failed: dict[str, str] = msgspec.field(default_factory=dict)


class CheckAttempt(msgspec.Struct, frozen=True):
    """Record of one identity fetch (plus fan-out on success)."""

    number: int
    error: str | None = None
    duration_ms: int = 0


class CheckOutcome(msgspec.Struct):
    """Final result of checking one token."""

    index: int
    token: str
    result: TokenResult | None = None
    error: ApiError | None = None
    attempts: list[CheckAttempt] = []

    @property
    def success(self) -> bool:
        return self.result is not None
