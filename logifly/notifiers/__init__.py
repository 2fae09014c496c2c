"""Platform clients for logifly."""

from .base import (
    ConnectionTestable,
    Embed,
    EmbedSender,
    PlatformClient,
    SEVERITY_PRESETS,
    severity_embed,
)
from .discord import DiscordClient
from .slack import SlackClient

__all__ = [
    "ConnectionTestable",
    "DiscordClient",
    "Embed",
    "EmbedSender",
    "PlatformClient",
    "SEVERITY_PRESETS",
    "SlackClient",
    "severity_embed",
]
