"""Platform client interfaces and the embed payload type."""

import asyncio
import functools
import inspect
from dataclasses import dataclass, field, fields
from typing import (
    Any,
    Callable,
    Dict,
    List,
    Mapping,
    Optional,
    Protocol,
    Union,
    runtime_checkable,
)

MessageContent = Union[str, Mapping[str, Any]]


@dataclass
class Embed:
    """Rich message payload (title/description/color/fields).

    Keys without a dedicated attribute are kept in ``extra`` and merged back
    by ``to_dict``.
    """

    title: str = ""
    description: str = ""
    color: Optional[int] = None
    fields: List[Dict[str, Any]] = field(default_factory=list)
    timestamp: Optional[str] = None
    footer: Optional[Dict[str, Any]] = None
    author: Optional[Dict[str, Any]] = None
    thumbnail: Optional[Dict[str, Any]] = None
    image: Optional[Dict[str, Any]] = None
    url: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Union["Embed", Mapping[str, Any]]) -> "Embed":
        """Build an Embed from a mapping, or return ``data`` if already one."""
        if isinstance(data, Embed):
            return data

        known = {f.name for f in fields(cls) if f.name != "extra"}
        kwargs = {key: value for key, value in data.items() if key in known}
        extra = {key: value for key, value in data.items() if key not in known}
        if kwargs.get("fields") is None:
            kwargs.pop("fields", None)
        return cls(**kwargs, extra=extra)

    def to_dict(self, include_extra: bool = True) -> Dict[str, Any]:
        """Return the payload form, dropping unset attributes.

        Args:
            include_extra: Merge the ``extra`` keys into the payload
        """
        payload: Dict[str, Any] = {}
        for f in fields(self):
            if f.name == "extra":
                continue
            value = getattr(self, f.name)
            if value is not None:
                payload[f.name] = value
        if include_extra:
            payload.update(self.extra)
        return payload

    def as_text(self) -> str:
        """Plain-text rendering used when a platform has no embed support."""
        return f"**{self.title}**\n{self.description}"


@runtime_checkable
class PlatformClient(Protocol):
    """Protocol for anything that can deliver a message to one platform.

    Clients may also expose a ``platform`` attribute naming the platform.
    """

    def send(
        self, message: MessageContent, options: Optional[Dict[str, Any]] = None
    ) -> Any:
        """Send a message.

        Args:
            message: Text or a structured platform payload
            options: Per-call overrides (username, avatar, ...)

        Raises:
            MessageSendError: If the message fails to send
        """
        ...


@runtime_checkable
class EmbedSender(Protocol):
    """Optional capability: native embed delivery."""

    def send_embed(self, embed: Embed) -> Any:
        ...


@runtime_checkable
class ConnectionTestable(Protocol):
    """Optional capability: connectivity check."""

    def test_connection(self) -> bool:
        ...


def has_capability(client: Any, name: str) -> bool:
    """Return True if ``client`` exposes a callable attribute ``name``."""
    return callable(getattr(client, name, None))


async def run_capability(method: Callable[..., Any], *args: Any) -> Any:
    """Invoke a client capability from a coroutine.

    Coroutine functions are awaited directly. Blocking callables run in the
    loop's default executor so sibling dispatches keep interleaving.
    """
    if inspect.iscoroutinefunction(method):
        return await method(*args)

    loop = asyncio.get_running_loop()
    result = await loop.run_in_executor(None, functools.partial(method, *args))
    if inspect.isawaitable(result):
        return await result
    return result


SEVERITY_PRESETS: Dict[str, Dict[str, Any]] = {
    "success": {"glyph": "✅", "color": 0x00FF00},
    "error": {"glyph": "❌", "color": 0xFF0000},
    "warning": {"glyph": "⚠️", "color": 0xFFFF00},
    "info": {"glyph": "ℹ️", "color": 0x3498DB},
}


def severity_embed(level: str, title: str, description: str) -> Embed:
    """Build the embed preset for a severity level.

    Raises:
        KeyError: If ``level`` is not one of SEVERITY_PRESETS
    """
    preset = SEVERITY_PRESETS[level]
    return Embed(
        title=f"{preset['glyph']} {title}",
        description=description,
        color=preset["color"],
    )
