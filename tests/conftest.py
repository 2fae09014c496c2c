"""Pytest configuration and fixtures."""

import os
from typing import Generator
from unittest.mock import patch

import pytest
import requests_mock

from logifly.config import Settings
from logifly.notifiers.discord import DiscordClient
from logifly.notifiers.slack import SlackClient
from tests.client_stubs import DISCORD_URL, SLACK_URL


@pytest.fixture
def mock_discord_webhook() -> Generator[requests_mock.Mocker, None, None]:
    """Mock Discord webhook requests."""
    with requests_mock.Mocker() as m:
        m.post(DISCORD_URL, status_code=204)
        yield m


@pytest.fixture
def mock_slack_webhook() -> Generator[requests_mock.Mocker, None, None]:
    """Mock Slack webhook requests."""
    with requests_mock.Mocker() as m:
        m.post(SLACK_URL, text="ok")
        yield m


@pytest.fixture
def discord_client() -> DiscordClient:
    """Create a test Discord client."""
    return DiscordClient(DISCORD_URL)


@pytest.fixture
def slack_client() -> SlackClient:
    """Create a test Slack client."""
    return SlackClient(SLACK_URL)


@pytest.fixture
def test_settings() -> Generator[Settings, None, None]:
    """Settings isolated from the environment and any .env file."""
    with patch.dict(os.environ, {}, clear=True):
        yield Settings(_env_file=None, log_level="DEBUG")
