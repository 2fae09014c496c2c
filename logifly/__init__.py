"""logifly: broadcast notifications to Discord, Slack and other platforms."""

from . import errors
from .broadcast import (
    BroadcastGroup,
    BroadcastResult,
    BroadcastSummary,
    TestConnectionResult,
)
from .errors import ConfigurationError, LogiflyError, MessageSendError
from .notifiers import DiscordClient, Embed, PlatformClient, SlackClient
from .sdk import Logifly, __version__

logifly = Logifly()

__all__ = [
    "BroadcastGroup",
    "BroadcastResult",
    "BroadcastSummary",
    "ConfigurationError",
    "DiscordClient",
    "Embed",
    "Logifly",
    "LogiflyError",
    "MessageSendError",
    "PlatformClient",
    "SlackClient",
    "TestConnectionResult",
    "__version__",
    "errors",
    "logifly",
]
