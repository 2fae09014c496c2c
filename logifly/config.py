"""Configuration management for logifly."""

from typing import List, Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


def _split_csv(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseSettings):
    """SDK settings loaded from ``LOGIFLY_*`` environment variables."""

    # Webhooks (comma-separated)
    discord_webhook_urls: Optional[str] = Field(default=None)
    slack_webhook_urls: Optional[str] = Field(default=None)

    # Message defaults
    username: str = Field(default="logifly Bot")
    avatar_url: str = Field(default="")
    default_color: int = Field(default=0x3498DB)
    slack_icon_emoji: str = Field(default=":bell:")

    # HTTP Client Defaults
    http_timeout_seconds: float = Field(default=5.0)

    # Runtime
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")
    log_json: bool = Field(default=False, description="Emit logs as JSON lines")
    dry_run: bool = Field(default=False)

    model_config = {
        "env_prefix": "LOGIFLY_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value):
        if isinstance(value, str):
            return value.strip().upper()
        return value

    def get_discord_webhooks(self) -> List[str]:
        """Return parsed Discord webhook URLs."""
        return _split_csv(self.discord_webhook_urls)

    def get_slack_webhooks(self) -> List[str]:
        """Return parsed Slack webhook URLs."""
        return _split_csv(self.slack_webhook_urls)

    def has_webhooks(self) -> bool:
        """Check if at least one webhook is configured."""
        return bool(self.get_discord_webhooks() or self.get_slack_webhooks())


# Global settings instance
settings = Settings()
