"""Tests for config/settings.py and config/paths.py."""

from __future__ import annotations

import tomllib
from pathlib import Path

import msgspec
import pytest

from gtokenchecker.config.paths import config_dir
from gtokenchecker.config.paths import config_file
from gtokenchecker.config.settings import CheckConfig
from gtokenchecker.config.settings import Config
from gtokenchecker.config.settings import DisplayConfig
from gtokenchecker.config.settings import get_config
from gtokenchecker.config.settings import load_config
from gtokenchecker.config.settings import reload_config
from gtokenchecker.config.settings import save_config
from gtokenchecker.config.settings import with_check_overrides


class TestPaths:
    """Tests for config paths."""

    def test_env_override(self, isolated_config):
        assert config_dir() == isolated_config
        assert config_file() == isolated_config / "config.toml"


class TestDefaults:
    """Tests for default values."""

    def test_check_defaults(self):
        check = Config().check

        assert check.max_attempts == 3
        assert check.rate_limit_delay == 5.0
        assert check.network_delay == 1.0
        assert check.max_concurrent == 10
        assert check.respect_retry_after is True

    def test_api_defaults(self):
        api = Config().api

        assert api.base_url == "https://discord.com/api/v9"
        assert api.locale == "en-US"
        assert api.user_agent.startswith("gtokenchecker/")

    def test_display_defaults(self):
        assert Config().display == DisplayConfig(
            mask_tokens=False, date_format="%d.%m.%Y %H:%M:%S"
        )


class TestLoadConfig:
    """Tests for load_config."""

    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_config(tmp_path / "nope.toml") == Config()

    def test_reads_toml(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text(
            "[check]\nmax_attempts = 5\nnetwork_delay = 0.25\n\n[display]\nmask_tokens = true\n"
        )

        config = load_config(path)

        assert config.check.max_attempts == 5
        assert config.check.network_delay == 0.25
        assert config.check.rate_limit_delay == 5.0
        assert config.display.mask_tokens is True

    def test_invalid_value_rejected(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("[check]\nmax_attempts = 0\n")

        with pytest.raises(msgspec.ValidationError):
            load_config(path)

    def test_negative_delay_rejected(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("[check]\nrate_limit_delay = -1.0\n")

        with pytest.raises(msgspec.ValidationError):
            load_config(path)

    def test_malformed_toml(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("[check\n")

        with pytest.raises(tomllib.TOMLDecodeError):
            load_config(path)


class TestEnvOverrides:
    """Tests for environment variable overrides."""

    def test_check_overrides(self, tmp_path, monkeypatch):
        monkeypatch.setenv("GTOKENCHECKER_MAX_ATTEMPTS", "9")
        monkeypatch.setenv("GTOKENCHECKER_RATE_LIMIT_DELAY", "2.5")
        monkeypatch.setenv("GTOKENCHECKER_NETWORK_DELAY", "0")
        monkeypatch.setenv("GTOKENCHECKER_MAX_CONCURRENT", "0")

        config = load_config(tmp_path / "none.toml")

        assert config.check.max_attempts == 9
        assert config.check.rate_limit_delay == 2.5
        assert config.check.network_delay == 0.0
        assert config.check.max_concurrent == 0

    def test_env_wins_over_file(self, tmp_path, monkeypatch):
        path = tmp_path / "config.toml"
        path.write_text("[check]\nmax_attempts = 5\n")
        monkeypatch.setenv("GTOKENCHECKER_MAX_ATTEMPTS", "2")

        assert load_config(path).check.max_attempts == 2

    def test_invalid_env_value_rejected(self, tmp_path, monkeypatch):
        monkeypatch.setenv("GTOKENCHECKER_MAX_ATTEMPTS", "0")

        with pytest.raises(msgspec.ValidationError):
            load_config(tmp_path / "none.toml")

    @pytest.mark.parametrize(("value", "expected"), [("1", True), ("yes", True), ("0", False)])
    def test_mask_tokens(self, tmp_path, monkeypatch, value, expected):
        monkeypatch.setenv("GTOKENCHECKER_MASK_TOKENS", value)

        assert load_config(tmp_path / "none.toml").display.mask_tokens is expected

    def test_log_level(self, tmp_path, monkeypatch):
        monkeypatch.setenv("GTOKENCHECKER_LOG_LEVEL", "DEBUG")

        assert load_config(tmp_path / "none.toml").log_level == "DEBUG"


class TestWithCheckOverrides:
    """Tests for with_check_overrides."""

    def test_none_values_ignored(self):
        config = Config()

        assert with_check_overrides(config, max_attempts=None) is config

    def test_overrides_applied(self):
        config = with_check_overrides(Config(), max_attempts=1, network_delay=0.0)

        assert config.check.max_attempts == 1
        assert config.check.network_delay == 0.0
        assert config.check.rate_limit_delay == 5.0

    def test_overrides_validated(self):
        with pytest.raises(msgspec.ValidationError):
            with_check_overrides(Config(), max_concurrent=-1)


class TestSingleton:
    """Tests for get_config / reload_config / save_config."""

    def test_get_config_is_cached(self):
        assert get_config() is get_config()

    def test_save_and_reload(self, isolated_config):
        config = Config(check=CheckConfig(max_attempts=6))

        path = save_config(config)

        assert path == isolated_config / "config.toml"
        assert get_config() is config
        with path.open("rb") as f:
            assert tomllib.load(f)["check"]["max_attempts"] == 6
        assert reload_config().check.max_attempts == 6

    def test_save_to_explicit_path(self, tmp_path):
        path = tmp_path / "nested" / "custom.toml"

        assert save_config(Config(), path) == path
        assert Path(path).exists()
