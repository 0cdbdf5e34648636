"""Per-token HTTP client for gtokenchecker."""

from __future__ import annotations

import httpx

from gtokenchecker.config.settings import Config
from gtokenchecker.config.settings import get_config


def get_timeout_config(config: Config | None = None) -> httpx.Timeout:
    """Get timeout configuration from settings.

    The request timeout bounds every read/write/pool wait, so a single hung
    endpoint call ends as a timeout instead of stalling its token forever.
    """
    config = config or get_config()
    return httpx.Timeout(
        config.check.request_timeout,
        connect=config.check.connect_timeout,
    )


def create_client(
    token: str,
    config: Config | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create the client used for every request made with one token.

    The token is sent verbatim as the ``Authorization`` header. The client
    must not be shared between tokens; use it as an async context manager so
    its connections are closed when the attempt ends::

        async with create_client(token) as client:
            response = await client.get("/users/@me")

    Args:
        token: Discord token
        config: Settings (uses the global config if None)
        transport: Optional transport override (e.g. ``httpx.MockTransport``)
    """
    config = config or get_config()
    limits = httpx.Limits(
        max_connections=10,
        max_keepalive_connections=5,
    )
    return httpx.AsyncClient(
        base_url=config.api.base_url,
        headers={
            "Authorization": token,
            "User-Agent": config.api.user_agent,
            "Accept": "application/json",
        },
        timeout=get_timeout_config(config),
        limits=limits,
        transport=transport,
        follow_redirects=True,
    )
