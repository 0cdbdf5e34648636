"""Configuration structures and loading for gtokenchecker."""

import os
from pathlib import Path
from typing import Annotated

import msgspec

from gtokenchecker import __version__

# Default values
DEFAULT_BASE_URL = "https://discord.com/api/v9"
DEFAULT_LOCALE = "en-US"
DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_RATE_LIMIT_DELAY = 5.0
DEFAULT_NETWORK_DELAY = 1.0
DEFAULT_MAX_RETRY_AFTER = 60.0
DEFAULT_MAX_CONCURRENT = 10
DEFAULT_REQUEST_TIMEOUT = 15.0
DEFAULT_CONNECT_TIMEOUT = 10.0
DEFAULT_DATE_FORMAT = "%d.%m.%Y %H:%M:%S"

NonNegativeFloat = Annotated[float, msgspec.Meta(ge=0)]
NonNegativeInt = Annotated[int, msgspec.Meta(ge=0)]
PositiveInt = Annotated[int, msgspec.Meta(ge=1)]
PositiveFloat = Annotated[float, msgspec.Meta(gt=0)]


# API configuration
class ApiConfig(msgspec.Struct, omit_defaults=True):
    """Discord API settings."""

    base_url: str = DEFAULT_BASE_URL
    user_agent: str = f"gtokenchecker/{__version__}"
    locale: str = DEFAULT_LOCALE


# Check configuration
class CheckConfig(msgspec.Struct, omit_defaults=True):
    """Retry and concurrency settings for token checks."""

    max_attempts: PositiveInt = DEFAULT_MAX_ATTEMPTS
    rate_limit_delay: NonNegativeFloat = DEFAULT_RATE_LIMIT_DELAY
    network_delay: NonNegativeFloat = DEFAULT_NETWORK_DELAY
    max_concurrent: NonNegativeInt = DEFAULT_MAX_CONCURRENT  # 0 = unbounded
    request_timeout: PositiveFloat = DEFAULT_REQUEST_TIMEOUT
    connect_timeout: PositiveFloat = DEFAULT_CONNECT_TIMEOUT
    respect_retry_after: bool = True
    max_retry_after: NonNegativeFloat = DEFAULT_MAX_RETRY_AFTER


# Display configuration
class DisplayConfig(msgspec.Struct, omit_defaults=True):
    """Display settings."""

    mask_tokens: bool = False
    date_format: str = DEFAULT_DATE_FORMAT


# Main configuration
class Config(msgspec.Struct, omit_defaults=True):
    """Main configuration structure."""

    api: ApiConfig = msgspec.field(default_factory=ApiConfig)
    check: CheckConfig = msgspec.field(default_factory=CheckConfig)
    display: DisplayConfig = msgspec.field(default_factory=DisplayConfig)
    log_level: str = "WARNING"


def _load_from_toml(path: Path) -> dict:
    """Load configuration from TOML file."""
    import tomllib

    if not path.exists():
        return {}

    with path.open("rb") as f:
        return tomllib.load(f)


def _save_to_toml(data: dict, path: Path) -> None:
    """Save configuration to TOML file."""
    import tomli_w

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("wb") as f:
        tomli_w.dump(data, f)


def convert_config(data: dict) -> Config:
    """Convert raw dict to Config struct.

    Raises:
        msgspec.ValidationError: If a value has the wrong type or is out of range
    """
    return msgspec.convert(data, type=Config)


def _env_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _apply_env_overrides(config: Config) -> Config:
    """Apply environment variable overrides to config.

    GTOKENCHECKER_MAX_ATTEMPTS: Attempts per token
    GTOKENCHECKER_RATE_LIMIT_DELAY: Seconds to wait after a rate limit
    GTOKENCHECKER_NETWORK_DELAY: Seconds to wait after a network error
    GTOKENCHECKER_MAX_CONCURRENT: Tokens checked at once (0 = unbounded)
    GTOKENCHECKER_MASK_TOKENS: Mask tokens in output
    GTOKENCHECKER_LOG_LEVEL: Logging level
    """
    check_overrides = {}
    for env_var, field, cast in (
        ("GTOKENCHECKER_MAX_ATTEMPTS", "max_attempts", int),
        ("GTOKENCHECKER_RATE_LIMIT_DELAY", "rate_limit_delay", float),
        ("GTOKENCHECKER_NETWORK_DELAY", "network_delay", float),
        ("GTOKENCHECKER_MAX_CONCURRENT", "max_concurrent", int),
    ):
        if env_var in os.environ:
            check_overrides[field] = cast(os.environ[env_var])

    config = with_check_overrides(config, **check_overrides)

    if "GTOKENCHECKER_MASK_TOKENS" in os.environ:
        display = msgspec.structs.replace(
            config.display,
            mask_tokens=_env_bool(os.environ["GTOKENCHECKER_MASK_TOKENS"]),
        )
        config = msgspec.structs.replace(config, display=display)

    if "GTOKENCHECKER_LOG_LEVEL" in os.environ:
        config = msgspec.structs.replace(
            config, log_level=os.environ["GTOKENCHECKER_LOG_LEVEL"]
        )

    return config


def with_check_overrides(config: Config, **overrides) -> Config:
    """Return a copy of ``config`` with non-None check settings replaced.

    Used by the CLI so that flags win over the config file. The result is
    re-validated.
    """
    values = {k: v for k, v in overrides.items() if v is not None}
    if not values:
        return config
    data = msgspec.to_builtins(config)
    data.setdefault("check", {}).update(values)
    return convert_config(data)


# Config state storage
_config: Config | None = None


def get_config() -> Config:
    """Get the current configuration (singleton)."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config() -> Config:
    """Reload configuration from disk."""
    global _config
    _config = load_config()
    return _config


def load_config(path: Path | None = None) -> Config:
    """Load configuration from file with defaults."""
    from .paths import config_file

    config_path = path or config_file()

    raw_data = _load_from_toml(config_path)
    if not raw_data:
        config = Config()
    else:
        config = convert_config(raw_data)

    return _apply_env_overrides(config)


def save_config(config: Config, path: Path | None = None) -> Path:
    """Save configuration to file and return the path written."""
    from .paths import config_file

    config_path = path or config_file()

    # omit_defaults keeps the file down to what differs from defaults
    data = msgspec.to_builtins(config)

    _save_to_toml(data, config_path)

    global _config
    _config = config
    return config_path
