"""Main logifly SDK class."""

import logging
from typing import Any, Dict, Iterable, List, Optional

from .broadcast import BroadcastGroup
from .config import Settings
from .errors import LogiflyError
from .notifiers.discord import DiscordClient
from .notifiers.slack import SlackClient

logger = logging.getLogger(__name__)

__version__ = "1.0.0"


class Logifly:
    """Creates platform clients and keeps a registry of broadcast groups.

    Example:
        log = Logifly()
        discord = log.new_discord_client("https://discord.com/api/webhooks/1/abc")
        group = log.create_group("alerts", [discord])
        summary = await group.broadcast("Server is down!")
    """

    def __init__(self) -> None:
        self._version = __version__
        self._groups: Dict[str, BroadcastGroup] = {}

    def new_discord_client(self, webhook_url: str, **config: Any) -> DiscordClient:
        """Create a Discord webhook client.

        Args:
            webhook_url: Discord webhook URL
            **config: ``username``, ``avatar_url``, ``default_color``, ``timeout``
        """
        return DiscordClient(webhook_url, **config)

    def new_slack_client(self, webhook_url: str, **config: Any) -> SlackClient:
        """Create a Slack incoming-webhook client."""
        return SlackClient(webhook_url, **config)

    def create_group(
        self, name: str, clients: Optional[Iterable[Any]] = None
    ) -> BroadcastGroup:
        """Create a group and register it under ``name``.

        An existing group with the same name is replaced.
        """
        group = BroadcastGroup(name, clients)
        if name in self._groups:
            logger.debug(f"Replacing existing group '{name}'")
        self._groups[name] = group
        return group

    def group_from_settings(
        self, name: str = "default", settings: Optional[Settings] = None
    ) -> BroadcastGroup:
        """Create a group holding one client per configured webhook URL.

        Aliases are ``discord_N`` and ``slack_N``.
        """
        if settings is None:
            from .config import settings as global_settings

            settings = global_settings

        group = self.create_group(name)
        for index, url in enumerate(settings.get_discord_webhooks(), start=1):
            client = self.new_discord_client(
                url,
                username=settings.username,
                avatar_url=settings.avatar_url,
                default_color=settings.default_color,
                timeout=settings.http_timeout_seconds,
            )
            group.add_client(client, alias=f"discord_{index}")

        for index, url in enumerate(settings.get_slack_webhooks(), start=1):
            client = self.new_slack_client(
                url,
                username=settings.username,
                icon_emoji=settings.slack_icon_emoji,
                timeout=settings.http_timeout_seconds,
            )
            group.add_client(client, alias=f"slack_{index}")

        return group

    def get_group(self, name: str) -> BroadcastGroup:
        """Return a registered group.

        Raises:
            LogiflyError: If no group has that name
        """
        group = self._groups.get(name)
        if group is None:
            available = ", ".join(self._groups) or "none"
            raise LogiflyError(
                f"Group '{name}' not found. Available groups: {available}",
                "GROUP_NOT_FOUND",
            )
        return group

    def list_groups(self) -> List[str]:
        return list(self._groups)

    def has_group(self, name: str) -> bool:
        return name in self._groups

    def delete_group(self, name: str) -> bool:
        """Remove a group; returns False if it did not exist."""
        return self._groups.pop(name, None) is not None

    def get_version(self) -> str:
        return self._version
