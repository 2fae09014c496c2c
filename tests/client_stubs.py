"""In-memory platform clients for exercising broadcast groups."""

import asyncio
from typing import Any, Dict, List, Optional, Tuple

DISCORD_URL = "https://discord.com/api/webhooks/123456789/abcdefgh"
SECOND_DISCORD_URL = "https://discord.com/api/webhooks/987654321/zyxwvuts"
SLACK_URL = "https://hooks.slack.com/services/TEST/TEST/TEST"


class StubClient:
    """Async client exposing only send()."""

    def __init__(
        self,
        result: Any = "ok",
        error: Optional[Exception] = None,
        delay: float = 0.0,
    ) -> None:
        self.result = result
        self.error = error
        self.delay = delay
        self.calls: List[Tuple[Any, Optional[Dict[str, Any]]]] = []

    async def send(
        self, message: Any, options: Optional[Dict[str, Any]] = None
    ) -> Any:
        self.calls.append((message, options))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.result


class StubEmbedClient(StubClient):
    """Async client with native embed support."""

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.embeds: List[Any] = []

    async def send_embed(self, embed: Any) -> Any:
        self.embeds.append(embed)
        if self.error is not None:
            raise self.error
        return {"embed": True}


class StubTestableClient(StubClient):
    """Async client with its own connection check."""

    def __init__(
        self,
        connected: bool = True,
        test_error: Optional[Exception] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.connected = connected
        self.test_error = test_error
        self.tested = 0

    async def test_connection(self) -> bool:
        self.tested += 1
        if self.test_error is not None:
            raise self.test_error
        return self.connected


class BlockingClient:
    """Synchronous client, like a plain requests-based notifier."""

    platform = "blocking"

    def __init__(self, error: Optional[Exception] = None) -> None:
        self.error = error
        self.sent: List[Any] = []

    def send(
        self, message: Any, options: Optional[Dict[str, Any]] = None
    ) -> str:
        if self.error is not None:
            raise self.error
        self.sent.append(message)
        return "delivered"


class BarrierClient:
    """Client whose send only completes once every peer has started sending."""

    def __init__(
        self, started: List[str], expected: int, event: asyncio.Event
    ) -> None:
        self.started = started
        self.expected = expected
        self.event = event

    async def send(
        self, message: Any, options: Optional[Dict[str, Any]] = None
    ) -> str:
        self.started.append(message)
        if len(self.started) >= self.expected:
            self.event.set()
        await asyncio.wait_for(self.event.wait(), timeout=1.0)
        return "released"


class NoSendClient:
    """Has every capability except send()."""

    async def send_embed(self, embed: Any) -> None:
        return None
