"""Tests for configuration management."""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from logifly.config import Settings


def test_settings_defaults(test_settings: Settings) -> None:
    """Test default settings values."""
    assert test_settings.discord_webhook_urls is None
    assert test_settings.slack_webhook_urls is None
    assert test_settings.username == "logifly Bot"
    assert test_settings.default_color == 0x3498DB
    assert test_settings.http_timeout_seconds == 5.0
    assert test_settings.log_json is False
    assert test_settings.dry_run is False
    assert test_settings.has_webhooks() is False


def test_settings_from_env() -> None:
    """Test settings loaded from environment variables."""
    env_vars = {
        "LOGIFLY_DISCORD_WEBHOOK_URLS": "https://discord.com/api/webhooks/1/a",
        "LOGIFLY_USERNAME": "Ops Bot",
        "LOGIFLY_LOG_LEVEL": "DEBUG",
        "LOGIFLY_DRY_RUN": "true",
        "LOGIFLY_HTTP_TIMEOUT_SECONDS": "2.5",
    }

    with patch.dict(os.environ, env_vars, clear=True):
        settings = Settings(_env_file=None)

        assert settings.get_discord_webhooks() == [
            "https://discord.com/api/webhooks/1/a"
        ]
        assert settings.username == "Ops Bot"
        assert settings.log_level == "DEBUG"
        assert settings.dry_run is True
        assert settings.http_timeout_seconds == 2.5
        assert settings.has_webhooks() is True


def test_webhook_lists_are_trimmed() -> None:
    with patch.dict(os.environ, {}, clear=True):
        settings = Settings(
            _env_file=None,
            slack_webhook_urls=(
                " https://hooks.slack.com/services/A ,,"
                " https://hooks.slack.com/services/B "
            ),
        )

    assert settings.get_slack_webhooks() == [
        "https://hooks.slack.com/services/A",
        "https://hooks.slack.com/services/B",
    ]
    assert settings.get_discord_webhooks() == []


def test_log_level_is_normalized() -> None:
    with patch.dict(os.environ, {"LOGIFLY_LOG_LEVEL": "warning"}, clear=True):
        settings = Settings(_env_file=None)

    assert settings.log_level == "WARNING"


def test_unknown_log_level_rejected() -> None:
    """An unknown level fails at load time instead of in logging setup."""
    with patch.dict(os.environ, {"LOGIFLY_LOG_LEVEL": "verbose"}, clear=True):
        with pytest.raises(ValidationError, match="log_level"):
            Settings(_env_file=None)
