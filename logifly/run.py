"""Command line entry point for logifly."""

import asyncio
import json
import logging
import sys
from typing import Dict, Sequence

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .broadcast import BroadcastGroup, BroadcastSummary, TestConnectionResult
from .config import settings
from .errors import ConfigurationError
from .notifiers.base import SEVERITY_PRESETS
from .sdk import Logifly
from .validators import is_valid_webhook_url

console = Console()


# Configure logging
def setup_logging(level: str) -> None:
    """Set up logging with Rich handler or JSON lines."""
    log_level = getattr(logging, level.upper())
    if settings.log_json:

        class JsonFormatter(logging.Formatter):
            def format(self, record: logging.LogRecord) -> str:
                payload = {
                    "level": record.levelname,
                    "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%SZ"),
                    "message": record.getMessage(),
                    "name": record.name,
                }
                return json.dumps(payload)

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JsonFormatter())
        logging.basicConfig(level=log_level, handlers=[handler], force=True)
    else:
        logging.basicConfig(
            level=log_level,
            format="%(message)s",
            datefmt="[%X]",
            handlers=[RichHandler(console=console, rich_tracebacks=True)],
            force=True,
        )


logger = logging.getLogger(__name__)


def build_group(webhooks: Sequence[str], name: str = "default") -> BroadcastGroup:
    """Build a group from explicit webhook URLs, or from settings if none given.

    Slack URLs get a SlackClient; anything else is treated as Discord.

    Raises:
        ConfigurationError: If a webhook URL is invalid
    """
    sdk = Logifly()
    if not webhooks:
        return sdk.group_from_settings(name, settings)

    group = sdk.create_group(name)
    for url in webhooks:
        if is_valid_webhook_url(url, "slack"):
            client = sdk.new_slack_client(
                url,
                username=settings.username,
                icon_emoji=settings.slack_icon_emoji,
                timeout=settings.http_timeout_seconds,
            )
        else:
            client = sdk.new_discord_client(
                url,
                username=settings.username,
                avatar_url=settings.avatar_url,
                default_color=settings.default_color,
                timeout=settings.http_timeout_seconds,
            )
        group.add_client(client)
    return group


def _load_group(webhooks: Sequence[str], name: str) -> BroadcastGroup:
    try:
        group = build_group(webhooks, name)
    except ConfigurationError as e:
        console.print(f"[red]❌ Configuration error:[/red] {e}")
        sys.exit(1)

    if group.size() == 0:
        console.print(
            "[red]❌ No webhooks configured.[/red] Pass --webhook or set "
            "LOGIFLY_DISCORD_WEBHOOK_URLS / LOGIFLY_SLACK_WEBHOOK_URLS."
        )
        sys.exit(1)
    return group


def print_summary(summary: BroadcastSummary) -> None:
    """Render a broadcast summary as a table."""
    table = Table(title=f"Group '{summary.group_name}' ({summary.total_clients})")
    table.add_column("Alias")
    table.add_column("Platform")
    table.add_column("Status")
    table.add_column("Detail")

    for alias, result in summary.results.items():
        status = "[green]sent[/green]" if result.success else "[red]failed[/red]"
        detail = (result.note or "") if result.success else (result.error or "")
        table.add_row(alias, result.platform, status, detail)

    console.print(table)


def print_connections(results: Dict[str, TestConnectionResult]) -> None:
    """Render connection test results as a table."""
    table = Table(title="Connection test")
    table.add_column("Alias")
    table.add_column("Platform")
    table.add_column("Connected")

    for alias, result in results.items():
        connected = "[green]yes[/green]" if result.connected else "[red]no[/red]"
        if result.error:
            connected += f" ({result.error})"
        table.add_row(alias, result.platform, connected)

    console.print(table)


def _finish(summary: BroadcastSummary) -> None:
    print_summary(summary)
    if not summary.all_succeeded:
        logger.error(f"Delivery failed for: {', '.join(summary.failed)}")
        sys.exit(1)
    logger.info("✅ Broadcast delivered to all clients")


webhook_option = click.option(
    "--webhook",
    "webhooks",
    multiple=True,
    help="Webhook URL (repeatable). Defaults to configured webhooks.",
)
group_option = click.option(
    "--group", "group_name", default="default", help="Name of the broadcast group"
)
dry_run_option = click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Show what would be sent without sending",
)


@click.group()
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    help="Set logging level",
)
@click.version_option(package_name="logifly")
def cli(log_level: str) -> None:
    """Broadcast notifications to Discord, Slack and other platforms."""
    if log_level:
        settings.log_level = log_level

    setup_logging(settings.log_level)


@cli.command()
@click.argument("message")
@webhook_option
@group_option
@dry_run_option
def send(
    message: str, webhooks: Sequence[str], group_name: str, dry_run: bool
) -> None:
    """Send a plain text MESSAGE to every client."""
    group = _load_group(webhooks, group_name)

    if dry_run or settings.dry_run:
        console.print(
            f"[yellow]DRY RUN - Would send to {group.size()} clients:[/yellow]"
        )
        console.print(message)
        return

    _finish(asyncio.run(group.broadcast(message)))


@cli.command()
@click.argument("level", type=click.Choice(sorted(SEVERITY_PRESETS)))
@click.argument("title")
@click.argument("description")
@webhook_option
@group_option
@dry_run_option
def notify(
    level: str,
    title: str,
    description: str,
    webhooks: Sequence[str],
    group_name: str,
    dry_run: bool,
) -> None:
    """Send a severity-tagged embed (success, error, warning, info)."""
    group = _load_group(webhooks, group_name)

    if dry_run or settings.dry_run:
        glyph = SEVERITY_PRESETS[level]["glyph"]
        console.print(
            f"[yellow]DRY RUN - Would send to {group.size()} clients:[/yellow]"
        )
        console.print(f"{glyph} {title}\n{description}")
        return

    broadcast = getattr(group, f"broadcast_{level}")
    _finish(asyncio.run(broadcast(title, description)))


@cli.command(name="test")
@webhook_option
@group_option
def check_connections(webhooks: Sequence[str], group_name: str) -> None:
    """Check connectivity of every client."""
    group = _load_group(webhooks, group_name)

    results = asyncio.run(group.test_connections())
    print_connections(results)

    failed = [alias for alias, result in results.items() if not result.connected]
    if failed:
        logger.error(f"Connection failed for: {', '.join(failed)}")
        sys.exit(1)


if __name__ == "__main__":
    cli()
