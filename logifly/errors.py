"""Error types raised by logifly."""

from typing import Optional


class LogiflyError(Exception):
    """Base error for the SDK, carrying a machine-readable code."""

    def __init__(self, message: str, code: str = "LOGIFLY_ERROR"):
        super().__init__(message)
        self.message = message
        self.code = code


class ConfigurationError(LogiflyError):
    """Raised when a client or group is set up with invalid configuration."""

    def __init__(self, message: str):
        super().__init__(message, "CONFIGURATION_ERROR")


class MessageSendError(LogiflyError):
    """Raised when a platform client fails to deliver a message."""

    def __init__(self, platform: str, original_error: Optional[BaseException]):
        detail = str(original_error) if original_error is not None else "unknown error"
        super().__init__(
            f"Failed to send message via {platform}: {detail}", "MESSAGE_SEND_ERROR"
        )
        self.platform = platform
        self.original_error = original_error
