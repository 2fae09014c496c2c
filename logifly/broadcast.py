"""Broadcast groups.

A broadcast group holds a named, ordered set of platform clients and fans a
single logical send out to all of them concurrently. Each member's outcome is
captured on its own: a failing client shows up as ``success=False`` in the
summary and never interrupts delivery to the others.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from .errors import ConfigurationError
from .notifiers.base import (
    ConnectionTestable,
    Embed,
    EmbedSender,
    MessageContent,
    has_capability,
    run_capability,
    severity_embed,
)

logger = logging.getLogger(__name__)

EMBED_FALLBACK_NOTE = "Embed not supported, sent as text"
CONNECTION_PROBE_MESSAGE = "Test"


@dataclass
class ClientEntry:
    """A client registered in a group, with its alias and capabilities."""

    client: Any
    alias: str
    platform: str
    supports_embed: bool = False
    supports_test: bool = False


@dataclass
class BroadcastResult:
    """Outcome of one member's dispatch.

    ``result`` is set on success and ``error`` on failure, never both.
    """

    success: bool
    platform: str
    result: Any = None
    error: Optional[str] = None
    note: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"success": self.success, "platform": self.platform}
        if self.success:
            data["result"] = self.result
        else:
            data["error"] = self.error
        if self.note:
            data["note"] = self.note
        return data


@dataclass
class BroadcastSummary:
    """Aggregate of a broadcast: one result per alias dispatched to."""

    group_name: str
    total_clients: int
    results: Dict[str, BroadcastResult] = field(default_factory=dict)

    @property
    def succeeded(self) -> List[str]:
        return [alias for alias, res in self.results.items() if res.success]

    @property
    def failed(self) -> List[str]:
        return [alias for alias, res in self.results.items() if not res.success]

    @property
    def all_succeeded(self) -> bool:
        return not self.failed

    def to_dict(self) -> Dict[str, Any]:
        return {
            "group_name": self.group_name,
            "total_clients": self.total_clients,
            "results": {alias: res.to_dict() for alias, res in self.results.items()},
        }


@dataclass
class TestConnectionResult:
    """Connectivity status of one member."""

    __test__ = False  # not a pytest test class

    platform: str
    connected: bool
    error: Optional[str] = None


def _error_message(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__


def _platform_tag(client: Any, platform: Optional[str]) -> str:
    if platform:
        return platform

    declared = getattr(client, "platform", None)
    if isinstance(declared, str) and declared:
        return declared

    name = type(client).__name__
    if name.endswith("Client") and name != "Client":
        name = name[: -len("Client")]
    return name.lower()


class BroadcastGroup:
    """Named collection of platform clients targeted by a single send.

    Example:
        group = BroadcastGroup("alerts", [discord, slack])
        summary = await group.broadcast_error("Deploy failed", "rollback started")
        for alias in summary.failed:
            print(alias, summary.results[alias].error)
    """

    def __init__(self, name: str, clients: Optional[Iterable[Any]] = None):
        """Create a group and register any initial clients.

        Args:
            name: Group name (immutable)
            clients: Clients to add with auto-generated aliases

        Raises:
            ConfigurationError: If an initial client has no send() method
        """
        self._name = name
        self._clients: List[ClientEntry] = []

        for client in clients or []:
            self.add_client(client)

    @property
    def name(self) -> str:
        return self._name

    def add_client(
        self, client: Any, alias: Optional[str] = None, platform: Optional[str] = None
    ) -> "BroadcastGroup":
        """Register a client; returns the group for chaining.

        Args:
            client: Object exposing a ``send`` method, optionally ``send_embed``
                and ``test_connection``
            alias: Name of the member; defaults to ``client_{n+1}``
            platform: Platform label; defaults to ``client.platform`` or the
                class name without its ``Client`` suffix

        Raises:
            ConfigurationError: If the client has no send() method
        """
        if client is None or not has_capability(client, "send"):
            raise ConfigurationError("Invalid client: must have a send() method")

        entry = ClientEntry(
            client=client,
            alias=alias or f"client_{len(self._clients) + 1}",
            platform=_platform_tag(client, platform),
            supports_embed=isinstance(client, EmbedSender),
            supports_test=isinstance(client, ConnectionTestable),
        )
        self._clients.append(entry)
        logger.debug(
            f"Added {entry.platform} client '{entry.alias}' to group '{self._name}'"
        )
        return self

    def remove_client(self, alias: str) -> bool:
        """Remove the first member registered under ``alias``."""
        for index, entry in enumerate(self._clients):
            if entry.alias == alias:
                del self._clients[index]
                logger.debug(f"Removed client '{alias}' from group '{self._name}'")
                return True
        return False

    def get_client(self, alias: str) -> Optional[Any]:
        """Return the client registered under ``alias`` (latest wins)."""
        for entry in reversed(self._clients):
            if entry.alias == alias:
                return entry.client
        return None

    def list_clients(self) -> List[Dict[str, str]]:
        """Return ``{alias, platform}`` for each member in insertion order."""
        return [
            {"alias": entry.alias, "platform": entry.platform}
            for entry in self._clients
        ]

    def size(self) -> int:
        return len(self._clients)

    def __len__(self) -> int:
        return len(self._clients)

    def __repr__(self) -> str:
        return f"BroadcastGroup(name={self._name!r}, clients={len(self._clients)})"

    async def broadcast(
        self, message: MessageContent, options: Optional[Dict[str, Any]] = None
    ) -> BroadcastSummary:
        """Send ``message`` to every member concurrently.

        Args:
            message: Text or structured payload passed to each ``send``
            options: Per-call options passed to each ``send``

        Returns:
            Summary with one result per member present at call time
        """
        entries = list(self._clients)
        options = options or {}
        logger.info(
            f"📣 Broadcasting to group '{self._name}' ({len(entries)} clients)"
        )

        # each member gets its own copy of the options
        outcomes = await asyncio.gather(
            *(self._send(entry, message, dict(options)) for entry in entries)
        )
        return self._summarize(entries, outcomes)

    async def broadcast_embed(
        self, embed: Union[Embed, Mapping[str, Any]]
    ) -> BroadcastSummary:
        """Send an embed to every member concurrently.

        Members without ``send_embed`` receive a ``**title**\\ndescription``
        text message instead, and their result carries a note saying so.
        """
        embed = Embed.from_mapping(embed)
        entries = list(self._clients)
        logger.info(
            f"📣 Broadcasting embed '{embed.title}' to group '{self._name}' "
            f"({len(entries)} clients)"
        )

        outcomes = await asyncio.gather(
            *(self._send_embed(entry, embed) for entry in entries)
        )
        return self._summarize(entries, outcomes)

    async def broadcast_success(
        self, title: str, description: str
    ) -> BroadcastSummary:
        return await self.broadcast_embed(severity_embed("success", title, description))

    async def broadcast_error(
        self, title: str, description: str
    ) -> BroadcastSummary:
        return await self.broadcast_embed(severity_embed("error", title, description))

    async def broadcast_warning(
        self, title: str, description: str
    ) -> BroadcastSummary:
        return await self.broadcast_embed(severity_embed("warning", title, description))

    async def broadcast_info(
        self, title: str, description: str
    ) -> BroadcastSummary:
        return await self.broadcast_embed(severity_embed("info", title, description))

    async def test_connections(self) -> Dict[str, TestConnectionResult]:
        """Check connectivity of every member concurrently.

        Members without ``test_connection`` are probed with ``send("Test")``;
        any failure of that probe only marks the member as disconnected.
        """
        entries = list(self._clients)
        logger.info(f"🔌 Testing {len(entries)} connections in group '{self._name}'")

        outcomes = await asyncio.gather(*(self._test(entry) for entry in entries))

        results: Dict[str, TestConnectionResult] = {}
        for entry, outcome in zip(entries, outcomes):
            results[entry.alias] = outcome
        return results

    async def _send(
        self, entry: ClientEntry, message: MessageContent, options: Dict[str, Any]
    ) -> BroadcastResult:
        try:
            result = await run_capability(entry.client.send, message, options)
        except Exception as e:
            logger.warning(
                f"⚠️ Client '{entry.alias}' ({entry.platform}) failed: {e}"
            )
            return BroadcastResult(
                success=False, platform=entry.platform, error=_error_message(e)
            )
        return BroadcastResult(success=True, platform=entry.platform, result=result)

    async def _send_embed(self, entry: ClientEntry, embed: Embed) -> BroadcastResult:
        try:
            if entry.supports_embed:
                result = await run_capability(entry.client.send_embed, embed)
                return BroadcastResult(
                    success=True, platform=entry.platform, result=result
                )

            result = await run_capability(entry.client.send, embed.as_text())
        except Exception as e:
            logger.warning(
                f"⚠️ Client '{entry.alias}' ({entry.platform}) failed: {e}"
            )
            return BroadcastResult(
                success=False, platform=entry.platform, error=_error_message(e)
            )

        return BroadcastResult(
            success=True,
            platform=entry.platform,
            result=result,
            note=EMBED_FALLBACK_NOTE,
        )

    async def _test(self, entry: ClientEntry) -> TestConnectionResult:
        try:
            if entry.supports_test:
                connected = bool(await run_capability(entry.client.test_connection))
            else:
                connected = await self._probe_with_send(entry)
        except Exception as e:
            logger.warning(f"⚠️ Connection test for '{entry.alias}' raised: {e}")
            return TestConnectionResult(
                platform=entry.platform, connected=False, error=_error_message(e)
            )
        return TestConnectionResult(platform=entry.platform, connected=connected)

    async def _probe_with_send(self, entry: ClientEntry) -> bool:
        try:
            await run_capability(entry.client.send, CONNECTION_PROBE_MESSAGE)
        except Exception as e:
            logger.debug(f"Probe send for '{entry.alias}' failed: {e}")
            return False
        return True

    def _summarize(
        self, entries: List[ClientEntry], outcomes: List[BroadcastResult]
    ) -> BroadcastSummary:
        summary = BroadcastSummary(group_name=self._name, total_clients=len(entries))
        for entry, outcome in zip(entries, outcomes):
            summary.results[entry.alias] = outcome

        logger.info(
            f"Group '{self._name}': {len(summary.succeeded)}/{len(entries)} delivered"
        )
        return summary
