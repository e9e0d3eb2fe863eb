"""Tests for environment configuration."""

from __future__ import annotations

import pytest

from summaly.config import (
    DEFAULT_BOT_UA,
    DEFAULT_MAX_RESPONSE_SIZE,
    DEFAULT_OPERATION_TIMEOUT,
    DEFAULT_RESPONSE_TIMEOUT,
    Config,
)

_VARS = [
    "SUMMALY_ALLOW_PRIVATE_IP",
    "SUMMALY_USER_AGENT",
    "SUMMALY_RESPONSE_TIMEOUT",
    "SUMMALY_OPERATION_TIMEOUT",
    "SUMMALY_MAX_RESPONSE_SIZE",
    "SUMMALY_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch) -> None:
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


class TestConfigFromEnv:
    def test_defaults(self) -> None:
        config = Config.from_env()
        assert config == Config()
        assert config.allow_private_ip is False
        assert config.user_agent == DEFAULT_BOT_UA
        assert config.response_timeout == DEFAULT_RESPONSE_TIMEOUT
        assert config.operation_timeout == DEFAULT_OPERATION_TIMEOUT
        assert config.max_response_size == DEFAULT_MAX_RESPONSE_SIZE
        assert config.log_level == "WARNING"

    def test_overrides(self, monkeypatch) -> None:
        monkeypatch.setenv("SUMMALY_ALLOW_PRIVATE_IP", "true")
        monkeypatch.setenv("SUMMALY_USER_AGENT", "Preview/1.0")
        monkeypatch.setenv("SUMMALY_RESPONSE_TIMEOUT", "2.5")
        monkeypatch.setenv("SUMMALY_OPERATION_TIMEOUT", "7")
        monkeypatch.setenv("SUMMALY_MAX_RESPONSE_SIZE", "1024")
        monkeypatch.setenv("SUMMALY_LOG_LEVEL", "debug")

        config = Config.from_env()

        assert config.allow_private_ip is True
        assert config.user_agent == "Preview/1.0"
        assert config.response_timeout == 2.5
        assert config.operation_timeout == 7.0
        assert config.max_response_size == 1024
        assert config.log_level == "DEBUG"

    @pytest.mark.parametrize("value", ["0", "no", "", "off"])
    def test_falsy_private_ip(self, monkeypatch, value: str) -> None:
        monkeypatch.setenv("SUMMALY_ALLOW_PRIVATE_IP", value)
        assert Config.from_env().allow_private_ip is False

    def test_empty_user_agent_uses_default(self, monkeypatch) -> None:
        monkeypatch.setenv("SUMMALY_USER_AGENT", "")
        assert Config.from_env().user_agent == DEFAULT_BOT_UA

    def test_ua_names_the_bot(self) -> None:
        assert DEFAULT_BOT_UA.startswith("SummalyBot/")
        assert DEFAULT_BOT_UA.endswith(
            "(https://github.com/AmaseCocoa/summaly/blob/master/README.md)"
        )
