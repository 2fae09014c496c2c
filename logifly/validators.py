"""Validation helpers for webhook URLs and client configuration."""

import re
from typing import Any, Iterable, Mapping
from urllib.parse import urlparse

from .errors import ConfigurationError

WEBHOOK_PATTERNS = {
    "discord": re.compile(
        r"^https://(?:(?:ptb|canary)\.)?(?:discord\.com|discordapp\.com)"
        r"/api/webhooks/\d+/[\w-]+/?$"
    ),
    "slack": re.compile(r"^https://hooks\.slack\.com/services/[\w/-]+$"),
}


def is_valid_url(url: str) -> bool:
    """Return True if ``url`` is an absolute URL with a scheme and host."""
    if not url or not isinstance(url, str):
        return False

    try:
        parsed = urlparse(url)
    except ValueError:
        return False

    return bool(parsed.scheme and parsed.netloc)


def is_valid_webhook_url(url: str, platform: str) -> bool:
    """Check a webhook URL against the known pattern for ``platform``.

    Unknown platforms are never valid.
    """
    if not is_valid_url(url):
        return False

    pattern = WEBHOOK_PATTERNS.get(platform)
    return bool(pattern and pattern.match(url))


def validate_required(
    config: Mapping[str, Any], required_fields: Iterable[str], platform_name: str
) -> None:
    """Ensure every required field of ``config`` is set.

    Raises:
        ConfigurationError: If one or more fields are missing or empty
    """
    missing = [field for field in required_fields if not config.get(field)]
    if missing:
        raise ConfigurationError(
            f"{platform_name} configuration missing required fields: "
            + ", ".join(missing)
        )
