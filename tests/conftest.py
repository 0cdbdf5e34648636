"""Pytest configuration and shared fixtures for gtokenchecker tests."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Generator

import httpx
import pytest
import structlog

import gtokenchecker.config.settings as settings_module
from gtokenchecker.config.settings import ApiConfig
from gtokenchecker.config.settings import CheckConfig
from gtokenchecker.config.settings import Config
from gtokenchecker.constants import NITRO_CLASSIC_SKU_ID
from gtokenchecker.constants import NITRO_SKU_ID
from gtokenchecker.models import TokenInfo

BASE_URL = "https://discord.test/api/v9"
API_PREFIX = "/api/v9"

TOKEN = "MTAxMjM0NTY3ODkwMTIzNDU2.GhIjKl.abcdefghijklmnopqrstuvwxyz0123"


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch) -> Generator[Path, None, None]:
    """Point the config directory at a temp dir and clear cached settings."""
    config_dir = tmp_path / "config"
    monkeypatch.setenv("GTOKENCHECKER_CONFIG_DIR", str(config_dir))
    for env_var in (
        "GTOKENCHECKER_MAX_ATTEMPTS",
        "GTOKENCHECKER_RATE_LIMIT_DELAY",
        "GTOKENCHECKER_NETWORK_DELAY",
        "GTOKENCHECKER_MAX_CONCURRENT",
        "GTOKENCHECKER_MASK_TOKENS",
        "GTOKENCHECKER_LOG_LEVEL",
    ):
        monkeypatch.delenv(env_var, raising=False)
    settings_module._config = None
    root_logger = logging.getLogger()
    handlers, level = root_logger.handlers[:], root_logger.level
    yield config_dir
    settings_module._config = None
    # configure_logging replaces the root handlers
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
    structlog.reset_defaults()


@pytest.fixture
def token() -> str:
    """A well-formed (fake) token."""
    return TOKEN


@pytest.fixture
def config() -> Config:
    """Config pointed at a fake host with instant retries."""
    return Config(
        api=ApiConfig(base_url=BASE_URL),
        check=CheckConfig(
            max_attempts=3,
            rate_limit_delay=0.0,
            network_delay=0.0,
            max_concurrent=4,
        ),
    )


@pytest.fixture
def me_payload() -> dict:
    """``/users/@me`` body."""
    return {
        "id": "80351110224678912",
        "username": "nelly",
        "discriminator": "1337",
        "global_name": "Nelly",
        "avatar": "8342729096ea3675442027381ff50dfe",
        "banner": "a_06c16474723fe537c283b8efa61a30c8",
        "banner_color": "#5865f2",
        "email": "nelly@discord.com",
        "phone": None,
        "verified": True,
        "locale": "en-GB",
        "mfa_enabled": True,
        "premium_type": 2,
        "flags": 64,
        "public_flags": 64 | (1 << 22),
        "bio": "hi",
        "accent_color": None,
    }


@pytest.fixture
def token_info(me_payload: dict) -> TokenInfo:
    """Decoded identity without the derived fields."""
    import msgspec

    return msgspec.convert(me_payload, type=TokenInfo)


@pytest.fixture
def detail_payloads() -> dict[str, object]:
    """Bodies for every auxiliary endpoint, keyed by path below the API prefix."""
    return {
        "/users/@me/connections": [
            {
                "type": "github",
                "id": "1",
                "name": "nelly-gh",
                "visibility": 1,
                "verified": True,
                "revoked": False,
            },
            {
                "type": "spotify",
                "id": "2",
                "name": "nelly",
                "visibility": 0,
                "verified": True,
                "revoked": False,
            },
        ],
        "/users/@me/outbound-promotions/codes": [
            {
                "code": "PROMO-123",
                "claimed_at": "2024-01-02T03:04:05+00:00",
                "promotion": {
                    "id": "9",
                    "outbound_title": "Three months of something",
                    "start_date": "2024-01-01T00:00:00+00:00",
                    "end_date": "2024-03-01T00:00:00+00:00",
                    "outbound_redemption_page_link": "https://example.com/redeem",
                },
            }
        ],
        "/users/@me/guilds/premium/subscription-slots": [
            {
                "id": "100",
                "subscription_id": "200",
                "canceled": False,
                "cooldown_ends_at": None,
                "premium_guild_subscription": {
                    "id": "300",
                    "guild_id": "400",
                    "user_id": "80351110224678912",
                    "ended": False,
                },
            },
            {
                "id": "101",
                "subscription_id": "200",
                "canceled": False,
                "cooldown_ends_at": None,
                "premium_guild_subscription": None,
            },
        ],
        "/users/@me/relationships": [
            {
                "id": "500",
                "type": 1,
                "nickname": None,
                "since": "2020-05-06T07:08:09.123000+00:00",
                "user": {
                    "id": "500",
                    "username": "friend",
                    "discriminator": "0",
                    "avatar": None,
                    "public_flags": 0,
                },
            }
        ],
        "/users/@me/guilds": [
            {
                "id": "400",
                "name": "Test Guild",
                "icon": "a_1234",
                "banner": None,
                "owner": True,
                "permissions": "8",
                "approximate_member_count": 42,
                "features": [],
            }
        ],
        "/users/@me/billing/subscriptions": [
            {
                "id": "600",
                "type": 1,
                "status": 1,
                "current_period_start": "2024-06-01T00:00:00+00:00",
                "current_period_end": "2024-07-01T00:00:00+00:00",
                "canceled_at": None,
                "items": [{"id": "601", "plan_id": "511651880837840896", "quantity": 1}],
            }
        ],
        "/users/@me/applications/521842831262875670/entitlements": [
            {"id": "700", "sku_id": NITRO_CLASSIC_SKU_ID, "consumed": False},
            {"id": "701", "sku_id": NITRO_SKU_ID, "consumed": False},
            {"id": "702", "sku_id": NITRO_SKU_ID, "consumed": False},
            {"id": "703", "sku_id": NITRO_SKU_ID, "consumed": True},
        ],
        "/users/@me/entitlements/gifts": [
            {
                "id": "800",
                "sku_id": NITRO_SKU_ID,
                "type": 3,
                "consumed": False,
                "subscription_plan": {
                    "id": "511651880837840896",
                    "name": "Nitro Monthly",
                    "interval": 1,
                },
            }
        ],
    }


@pytest.fixture
def make_transport() -> Callable[..., httpx.MockTransport]:
    """Factory for a MockTransport serving fixed responses per path.

    Routes map a path below the API prefix to a ``(status, body)`` pair
    (body encoded as JSON, or sent as-is when it is bytes), a callable
    taking the request, or an exception instance to raise. Every handled
    request is recorded on ``transport.requests``.
    """

    def factory(routes: dict[str, object]) -> httpx.MockTransport:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            path = request.url.path.removeprefix(API_PREFIX)
            route = routes.get(path)
            if route is None:
                return httpx.Response(404, json={"message": "404: Not Found", "code": 0})
            if isinstance(route, Exception):
                raise route
            if callable(route):
                return route(request)
            status, body = route
            if isinstance(body, bytes):
                return httpx.Response(status, content=body)
            return httpx.Response(status, json=body)

        transport = httpx.MockTransport(handler)
        transport.requests = requests
        return transport

    return factory


@pytest.fixture
def valid_routes(me_payload: dict, detail_payloads: dict) -> dict[str, object]:
    """Routes for a token where every endpoint succeeds."""
    routes: dict[str, object] = {"/users/@me": (200, me_payload)}
    for path, body in detail_payloads.items():
        routes[path] = (200, body)
    return routes
