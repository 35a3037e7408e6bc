"""Intents sent to the runtime and the fulfillments it answers with."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional, Union

from .value import Value


class IntentKind(enum.Enum):
    """The kinds of intent a provider can be registered for."""

    DISCOVER = "discover"
    INSPECT = "inspect"
    READ = "read"
    WRITE = "write"
    INVOKE = "invoke"
    SUBSCRIBE = "subscribe"


class ExecutionLocality(enum.Enum):
    """Where a provider executes."""

    LOCAL = "local"
    CLOUD = "cloud"


class RegistrationState(enum.Enum):
    """State reported by the runtime when a provider announces itself."""

    ANNOUNCED = "announced"
    REGISTERED = "registered"


@dataclass(frozen=True)
class InvokeIntent:
    """Request to run ``command`` with ``args``."""

    command: str
    args: tuple[Value, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", tuple(Value.from_python(a) for a in self.args))


@dataclass(frozen=True)
class SubscribeIntent:
    """Request to stream events from ``sources`` on the channel ``channel_id``."""

    channel_id: str
    sources: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "sources", tuple(str(s) for s in self.sources))


@dataclass(frozen=True)
class DiscoverIntent:
    """Request for the services a namespace offers."""


@dataclass(frozen=True)
class InspectIntent:
    """Request for the entries whose path matches ``query``."""

    query: str


@dataclass(frozen=True)
class WriteIntent:
    """Request to store ``value`` under ``key``."""

    key: str
    value: Optional[Value] = None

    def __post_init__(self) -> None:
        if self.value is not None:
            object.__setattr__(self, "value", Value.from_python(self.value))


@dataclass(frozen=True)
class ReadIntent:
    """Request for the value stored under ``key``."""

    key: str


@dataclass(frozen=True)
class ServiceMessage:
    """A service endpoint as reported in a discover fulfillment."""

    url: str
    schema_kind: str
    schema_reference: str
    metadata: dict[str, str] = field(default_factory=dict, hash=False)


@dataclass(frozen=True)
class InspectEntryMessage:
    """An inspected member: its path and its properties."""

    path: str
    items: dict[str, Optional[Value]] = field(default_factory=dict, hash=False)


@dataclass(frozen=True)
class InvokeFulfillment:
    """Answer to an invoke intent."""

    return_value: Optional[Value] = None


@dataclass(frozen=True)
class SubscribeFulfillment:
    """Answer to a subscribe intent."""


@dataclass(frozen=True)
class DiscoverFulfillment:
    """Answer to a discover intent."""

    services: tuple[ServiceMessage, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "services", tuple(self.services))


@dataclass(frozen=True)
class InspectFulfillment:
    """Answer to an inspect intent."""

    entries: tuple[InspectEntryMessage, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "entries", tuple(self.entries))


@dataclass(frozen=True)
class WriteFulfillment:
    """Answer to a write intent."""


@dataclass(frozen=True)
class ReadFulfillment:
    """Answer to a read intent; ``value`` is ``None`` when nothing is stored."""

    value: Optional[Value] = None


Intent = Union[
    InvokeIntent, SubscribeIntent, DiscoverIntent, InspectIntent, WriteIntent, ReadIntent
]

Fulfillment = Union[
    InvokeFulfillment,
    SubscribeFulfillment,
    DiscoverFulfillment,
    InspectFulfillment,
    WriteFulfillment,
    ReadFulfillment,
]

_INTENT_KINDS: dict[type, IntentKind] = {
    DiscoverIntent: IntentKind.DISCOVER,
    InspectIntent: IntentKind.INSPECT,
    ReadIntent: IntentKind.READ,
    WriteIntent: IntentKind.WRITE,
    InvokeIntent: IntentKind.INVOKE,
    SubscribeIntent: IntentKind.SUBSCRIBE,
}


def intent_kind(intent: object) -> IntentKind:
    """Return the kind of ``intent``; raise ``TypeError`` if it is not an intent."""
    try:
        return _INTENT_KINDS[type(intent)]
    except KeyError:
        raise TypeError(f"{type(intent).__name__} is not an intent.") from None