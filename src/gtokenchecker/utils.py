"""CDN URL helpers, snowflake dates and flag lookups."""

from __future__ import annotations

from datetime import UTC
from datetime import datetime
from enum import StrEnum

from gtokenchecker.constants import ADMINISTRATOR
from gtokenchecker.constants import DISCORD_CDN_BASE
from gtokenchecker.constants import DISCORD_EPOCH_MS
from gtokenchecker.constants import PERMISSIONS
from gtokenchecker.constants import RELATIONSHIP_TYPES
from gtokenchecker.constants import USER_FLAGS

DEFAULT_DATE_FORMAT = "%d.%m.%Y %H:%M:%S"
ANIMATED_HASH_PREFIX = "a_"


class CdnType(StrEnum):
    """CDN path segment for an image kind."""

    USER_AVATAR = "avatars"
    GUILD_ICON = "icons"
    BANNER = "banners"


class ImageType(StrEnum):
    """Image file extensions served by the CDN."""

    PNG = "png"
    JPG = "jpg"
    JPEG = "jpeg"
    WEBP = "webp"
    GIF = "gif"
    SVG = "svg"


def image_type_for(image_hash: str) -> ImageType:
    """Animated hashes carry the ``a_`` prefix and are served as gif."""
    if image_hash.lower().startswith(ANIMATED_HASH_PREFIX):
        return ImageType.GIF
    return ImageType.PNG


def gen_url(
    cdn_type: CdnType,
    type_id: str,
    image_hash: str,
    image_type: ImageType,
) -> str:
    """Build a fully qualified CDN URL."""
    return f"{DISCORD_CDN_BASE}/{cdn_type}/{type_id}/{image_hash}.{image_type}"


def get_avatar_url(user_id: str, image_hash: str | None) -> str | None:
    """Avatar URL for a user, or None when no avatar is set."""
    if not image_hash:
        return None
    return gen_url(CdnType.USER_AVATAR, user_id, image_hash, image_type_for(image_hash))


def get_banner_url(type_id: str, image_hash: str | None) -> str | None:
    """Banner URL for a user or guild, or None when no banner is set."""
    if not image_hash:
        return None
    return gen_url(CdnType.BANNER, type_id, image_hash, image_type_for(image_hash))


def get_guild_icon_url(guild_id: str, image_hash: str | None) -> str | None:
    """Icon URL for a guild, or None when no icon is set."""
    if not image_hash:
        return None
    return gen_url(CdnType.GUILD_ICON, guild_id, image_hash, image_type_for(image_hash))


def snowflake_to_datetime(snowflake_id: int | str) -> datetime:
    """Creation time encoded in a Discord snowflake."""
    timestamp_ms = (int(snowflake_id) >> 22) + DISCORD_EPOCH_MS
    return datetime.fromtimestamp(timestamp_ms / 1000, tz=UTC)


def get_account_creation(
    snowflake_id: int | str,
    fmt: str | None = None,
) -> str:
    """Format the creation date of a snowflake.

    Args:
        snowflake_id: User (or any other) snowflake id
        fmt: strftime format (defaults to ``%d.%m.%Y %H:%M:%S``)

    Returns:
        Formatted UTC creation time
    """
    return snowflake_to_datetime(snowflake_id).strftime(fmt or DEFAULT_DATE_FORMAT)


def format_time(value: str | None, fmt: str | None = None) -> str:
    """Reformat an ISO 8601 timestamp, leaving unparsable input unchanged."""
    if not value:
        return "Unknown"
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return value
    return parsed.strftime(fmt or DEFAULT_DATE_FORMAT)


def get_user_flags(flags: int) -> list[str]:
    """Labels of the public flags set in ``flags``, in table order."""
    return [label for bit, label in USER_FLAGS if flags & bit]


def get_user_permissions(permissions: str | int) -> list[str]:
    """Labels of the permission bits set in a (string encoded) bitfield.

    Administrator implies every other permission, so it is reported alone.
    """
    try:
        value = int(permissions)
    except (TypeError, ValueError):
        return []

    if value & ADMINISTRATOR:
        return ["Administrator"]
    return [label for bit, label in PERMISSIONS if value & bit]


def get_relationship_type(relationship_type: int) -> str:
    """Human label for a relationship type."""
    return RELATIONSHIP_TYPES.get(relationship_type, "Unknown type")
