"""Tests for the Logifly facade and its group registry."""

import pytest

import logifly
from logifly import BroadcastGroup, DiscordClient, Logifly, LogiflyError, SlackClient
from logifly.config import Settings
from tests.client_stubs import DISCORD_URL, SECOND_DISCORD_URL, SLACK_URL, StubClient


class TestLogifly:
    """Group registry and client factories."""

    def test_version(self) -> None:
        assert Logifly().get_version() == "1.0.0"
        assert logifly.__version__ == "1.0.0"

    def test_default_instance(self) -> None:
        assert isinstance(logifly.logifly, Logifly)

    def test_client_factories(self) -> None:
        sdk = Logifly()

        discord = sdk.new_discord_client(DISCORD_URL, username="Ops", timeout=2.0)
        slack = sdk.new_slack_client(SLACK_URL)

        assert isinstance(discord, DiscordClient)
        assert discord.username == "Ops"
        assert discord.timeout == 2.0
        assert isinstance(slack, SlackClient)

    def test_group_lifecycle(self) -> None:
        sdk = Logifly()

        group = sdk.create_group("alerts", [StubClient()])

        assert isinstance(group, BroadcastGroup)
        assert sdk.get_group("alerts") is group
        assert sdk.has_group("alerts")
        assert sdk.list_groups() == ["alerts"]
        assert sdk.delete_group("alerts") is True
        assert sdk.delete_group("alerts") is False
        assert not sdk.has_group("alerts")

    def test_create_group_replaces_existing(self) -> None:
        sdk = Logifly()
        sdk.create_group("alerts", [StubClient()])

        replacement = sdk.create_group("alerts")

        assert sdk.get_group("alerts") is replacement
        assert sdk.get_group("alerts").size() == 0

    def test_get_missing_group(self) -> None:
        sdk = Logifly()
        sdk.create_group("alerts")
        sdk.create_group("ops")

        with pytest.raises(LogiflyError) as exc_info:
            sdk.get_group("deploys")

        assert str(exc_info.value) == (
            "Group 'deploys' not found. Available groups: alerts, ops"
        )
        assert exc_info.value.code == "GROUP_NOT_FOUND"

    def test_get_group_when_none_exist(self) -> None:
        with pytest.raises(LogiflyError, match="Available groups: none"):
            Logifly().get_group("alerts")

    def test_group_from_settings(self) -> None:
        settings = Settings(
            _env_file=None,
            discord_webhook_urls=f"{DISCORD_URL}, {SECOND_DISCORD_URL}",
            slack_webhook_urls=SLACK_URL,
            username="Deploy Bot",
            http_timeout_seconds=3.0,
        )
        sdk = Logifly()

        group = sdk.group_from_settings("configured", settings)

        assert sdk.get_group("configured") is group
        assert group.list_clients() == [
            {"alias": "discord_1", "platform": "discord"},
            {"alias": "discord_2", "platform": "discord"},
            {"alias": "slack_1", "platform": "slack"},
        ]
        assert group.get_client("discord_1").username == "Deploy Bot"
        assert group.get_client("slack_1").timeout == 3.0
