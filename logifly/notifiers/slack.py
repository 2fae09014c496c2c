"""Slack notifier implementation."""

import logging
from typing import Any, Dict, Mapping, Optional

import requests

from ..errors import ConfigurationError, MessageSendError
from ..validators import is_valid_webhook_url, validate_required
from .base import MessageContent

logger = logging.getLogger(__name__)


class SlackClient:
    """Sends notifications to Slack via incoming webhook URL.

    Slack incoming webhooks have no embed support, so this client only
    exposes ``send``. Requests are blocking; broadcast groups run them in
    an executor.
    """

    platform = "slack"

    def __init__(
        self,
        webhook_url: str,
        username: str = "logifly Bot",
        icon_emoji: str = ":bell:",
        timeout: float = 30.0,
    ):
        """Initialize Slack client.

        Args:
            webhook_url: Slack incoming webhook URL
            username: Display name used for messages
            icon_emoji: Emoji shown as the message icon
            timeout: Request timeout in seconds

        Raises:
            ConfigurationError: If the webhook URL is missing or malformed
        """
        validate_required({"webhook_url": webhook_url}, ["webhook_url"], "Slack")
        if not is_valid_webhook_url(webhook_url, "slack"):
            raise ConfigurationError(
                "Invalid Slack webhook URL format. "
                "Expected: https://hooks.slack.com/services/..."
            )

        self.webhook_url = webhook_url
        self.username = username
        self.icon_emoji = icon_emoji
        self.timeout = timeout

    def send(
        self, message: MessageContent, options: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Send message to Slack.

        Args:
            message: Message text, or a payload merged into the request body
            options: Optional ``username`` / ``icon_emoji`` overrides

        Raises:
            MessageSendError: If the message fails to send
        """
        options = options or {}
        payload: Dict[str, Any] = {
            "username": options.get("username") or self.username,
            "icon_emoji": options.get("icon_emoji") or self.icon_emoji,
            "unfurl_links": True,
            "unfurl_media": True,
        }
        if isinstance(message, Mapping):
            payload.update(message)
        else:
            payload["text"] = message

        try:
            response = requests.post(
                self.webhook_url,
                json=payload,
                timeout=self.timeout,
                headers={"Content-Type": "application/json"},
            )
            response.raise_for_status()

        except requests.exceptions.RequestException as e:
            logger.error(f"Failed to send Slack notification: {e}")
            raise MessageSendError("Slack", e) from e

        if response.text.strip() != "ok":
            raise MessageSendError(
                "Slack", Exception(f"Slack webhook returned: {response.text}")
            )

        logger.debug("Successfully sent Slack notification")
        return {"success": True, "platform": self.platform}
