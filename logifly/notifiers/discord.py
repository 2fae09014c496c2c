"""Discord webhook client implementation."""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional, Union

import requests

from ..errors import ConfigurationError, MessageSendError
from ..validators import is_valid_webhook_url, validate_required
from .base import Embed, MessageContent, severity_embed

logger = logging.getLogger(__name__)


class DiscordClient:
    """Sends notifications to a Discord channel via webhook URL."""

    platform = "discord"

    def __init__(
        self,
        webhook_url: str,
        username: str = "logifly Bot",
        avatar_url: str = "",
        default_color: int = 0x3498DB,
        timeout: float = 5.0,
    ):
        """Initialize Discord client.

        Args:
            webhook_url: Discord webhook URL
            username: Display name used for messages
            avatar_url: Avatar image URL used for messages
            default_color: Embed color when none is given
            timeout: Request timeout in seconds

        Raises:
            ConfigurationError: If the webhook URL is missing or malformed
        """
        self.webhook_url = webhook_url
        self.username = username or "logifly Bot"
        self.avatar_url = avatar_url or ""
        self.default_color = default_color
        self.timeout = timeout

        self._validate_config()

    def _validate_config(self) -> None:
        validate_required({"webhook_url": self.webhook_url}, ["webhook_url"], "Discord")

        if not is_valid_webhook_url(self.webhook_url, "discord"):
            raise ConfigurationError(
                "Invalid Discord webhook URL format. "
                "Expected: https://discord.com/api/webhooks/..."
            )

    async def send(
        self, message: MessageContent, options: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Send a text message or structured payload to Discord.

        Args:
            message: Message text, or a payload merged into the request body
            options: Optional ``username`` / ``avatar_url`` overrides

        Returns:
            Result with ``success``, ``platform`` and ISO ``timestamp``

        Raises:
            MessageSendError: If the request to Discord fails
        """
        payload = self._build_payload(message, options or {})

        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._post, payload)

        return {
            "success": True,
            "platform": self.platform,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    def _post(self, payload: Dict[str, Any]) -> None:
        try:
            response = requests.post(
                self.webhook_url,
                json=payload,
                timeout=self.timeout,
                headers={"Content-Type": "application/json"},
            )
            response.raise_for_status()
            logger.debug("Successfully sent Discord notification")

        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else "Unknown"
            body = e.response.text if e.response is not None else str(e)
            logger.error(f"Discord API rejected notification: {status}")
            raise MessageSendError(
                "Discord", Exception(f"Discord API Error: {status} - {body}")
            ) from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Failed to send Discord notification: {e}")
            raise MessageSendError("Discord", e) from e

    async def send_embed(
        self, embed: Union[Embed, Mapping[str, Any]]
    ) -> Dict[str, Any]:
        """Send a Discord embed.

        Color falls back to ``default_color`` and timestamp to now. Keys
        Discord does not know (``Embed.extra``) are not posted.
        """
        embed = Embed.from_mapping(embed)
        body = embed.to_dict(include_extra=False)
        if body.get("color") is None:
            body["color"] = self.default_color
        body.setdefault("fields", [])
        body.setdefault("timestamp", datetime.now(timezone.utc).isoformat())

        return await self.send({"embeds": [body]})

    async def success(self, title: str, description: str) -> Dict[str, Any]:
        """Send a green success embed."""
        return await self.send_embed(severity_embed("success", title, description))

    async def error(self, title: str, description: str) -> Dict[str, Any]:
        """Send a red error embed."""
        return await self.send_embed(severity_embed("error", title, description))

    async def warn(self, title: str, description: str) -> Dict[str, Any]:
        """Send a yellow warning embed."""
        return await self.send_embed(severity_embed("warning", title, description))

    async def info(self, title: str, description: str) -> Dict[str, Any]:
        """Send a blue informational embed."""
        return await self.send_embed(severity_embed("info", title, description))

    async def test_connection(self) -> bool:
        """Send a sample message; True if Discord accepted it."""
        try:
            await self.send("logifly connection test successful! 🚀")
            return True
        except MessageSendError as e:
            logger.warning(f"Discord connection test failed: {e}")
            return False

    def _build_payload(
        self, message: MessageContent, options: Mapping[str, Any]
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "username": options.get("username") or self.username,
        }
        avatar_url = options.get("avatar_url") or self.avatar_url
        if avatar_url:
            payload["avatar_url"] = avatar_url

        if isinstance(message, str):
            payload["content"] = message
        elif isinstance(message, Mapping):
            payload.update(message)

        return payload
