"""Static lookup tables for Discord flags, permissions and SKUs."""

from __future__ import annotations

DISCORD_CDN_BASE = "https://cdn.discordapp.com"
DISCORD_EPOCH_MS = 1420070400000

# Nitro credits are entitlements of the Nitro application
NITRO_APPLICATION_ID = "521842831262875670"
NITRO_CLASSIC_SKU_ID = "521846918637420545"
NITRO_SKU_ID = "521847234246082599"

USER_FLAGS: tuple[tuple[int, str], ...] = (
    (1 << 0, "Staff"),
    (1 << 1, "Guild Partner"),
    (1 << 2, "HypeSquad Events Member"),
    (1 << 3, "Bug Hunter Level 1"),
    (1 << 4, "SMS 2FA Enabled"),
    (1 << 5, "Dismissed Nitro promotion"),
    (1 << 6, "House Bravery Member"),
    (1 << 7, "House Brilliance Member"),
    (1 << 8, "House Balance Member"),
    (1 << 9, "Early Nitro Supporter"),
    (1 << 10, "Team Supporter"),
    (1 << 13, "Unread urgent system messages"),
    (1 << 14, "Bug Hunter Level 2"),
    (1 << 15, "Under age account"),
    (1 << 16, "Verified Bot"),
    (1 << 17, "Early Verified Bot Developer"),
    (1 << 18, "Moderator Programs Alumni"),
    (1 << 19, "Bot uses only http interactions"),
    (1 << 20, "Marked as spammer"),
    (1 << 22, "Active Developer"),
    (1 << 23, "Provisional Account"),
    (1 << 33, "Global ratelimit"),  # raised to 1,200 requests per second
    (1 << 34, "Deleted account"),
    (1 << 35, "Disabled for suspicious activity"),
    (1 << 36, "Self-deleted account"),
    (1 << 41, "User account is disabled"),
)

ADMINISTRATOR = 1 << 3

PERMISSIONS: tuple[tuple[int, str], ...] = (
    (1 << 0, "Create Instant Invite"),
    (1 << 1, "Kick Members"),
    (1 << 2, "Ban Members"),
    (ADMINISTRATOR, "Administrator"),
    (1 << 4, "Manage Channels"),
    (1 << 5, "Manage Guild"),
    (1 << 6, "Add Reactions"),
    (1 << 7, "View Audit Log"),
    (1 << 8, "Priority Speaker"),
    (1 << 9, "Stream"),
    (1 << 10, "View Channel"),
    (1 << 11, "Send Messages"),
    (1 << 12, "Send TTS Messages"),
    (1 << 13, "Manage Messages"),
    (1 << 14, "Embed Links"),
    (1 << 15, "Attach Files"),
    (1 << 16, "Read Message History"),
    (1 << 17, "Mention Everyone"),
    (1 << 18, "Use External Emojis"),
    (1 << 19, "View Guild Insights"),
    (1 << 20, "Connect"),
    (1 << 21, "Speak"),
    (1 << 22, "Mute Members"),
    (1 << 23, "Deafen Members"),
    (1 << 24, "Move Members"),
    (1 << 25, "Use Voice Activity"),
    (1 << 26, "Change Nickname"),
    (1 << 27, "Manage Nicknames"),
    (1 << 28, "Manage Roles"),
    (1 << 29, "Manage Webhooks"),
    (1 << 30, "Manage Guild Expressions"),
    (1 << 31, "Use Application Commands"),
    (1 << 32, "Request To Speak"),
    (1 << 33, "Manage Events"),
    (1 << 34, "Manage Threads"),
    (1 << 35, "Create Public Threads"),
    (1 << 36, "Create Private Threads"),
    (1 << 37, "Use External Stickers"),
    (1 << 38, "Send Messages In Threads"),
    (1 << 39, "Use Embedded Activities"),
    (1 << 40, "Moderate Members"),
    (1 << 41, "View Creator Monetization Analytics"),
    (1 << 42, "Use Soundboard"),
    (1 << 43, "Create Guild Expressions"),
    (1 << 44, "Create Events"),
    (1 << 45, "Use External Sounds"),
    (1 << 46, "Send Voice Messages"),
    (1 << 49, "Send Polls"),
    (1 << 50, "Use External Apps"),
)

RELATIONSHIP_TYPES: dict[int, str] = {
    0: "None",
    1: "Friend",
    2: "Blocked",
    3: "Incoming request",
    4: "Outgoing request",
    5: "Implicit",
}

PREMIUM_TYPES: dict[int, str] = {
    0: "None",
    1: "Nitro Classic",
    2: "Nitro",
    3: "Nitro Basic",
}

NITRO_SUBSCRIPTION_STATUS: dict[int, str] = {
    0: "Unpaid",
    1: "Active",
    2: "Past due",
    3: "Canceled",
    4: "Ended",
    5: "Inactive",
    6: "Account hold",
}
