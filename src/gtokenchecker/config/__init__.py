"""Configuration management for gtokenchecker."""

from gtokenchecker.config.paths import config_dir
from gtokenchecker.config.paths import config_file
from gtokenchecker.config.settings import (
    ApiConfig,
    CheckConfig,
    Config,
    DisplayConfig,
    get_config,
    load_config,
    reload_config,
    save_config,
    with_check_overrides,
)

__all__ = [
    # paths
    "config_dir",
    "config_file",
    # settings
    "Config",
    "ApiConfig",
    "CheckConfig",
    "DisplayConfig",
    "get_config",
    "load_config",
    "reload_config",
    "save_config",
    "with_check_overrides",
]
