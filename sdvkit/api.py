"""High-level client interface over the runtime's intent API."""

from __future__ import annotations

import abc
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional, TypeVar

from .inspection import Entry
from .messages import (
    DiscoverFulfillment,
    DiscoverIntent,
    InspectFulfillment,
    InspectIntent,
    Intent,
    InvokeFulfillment,
    InvokeIntent,
    ReadFulfillment,
    ReadIntent,
    ServiceMessage,
    SubscribeFulfillment,
    SubscribeIntent,
    WriteFulfillment,
    WriteIntent,
)
from .value import Value

_log = logging.getLogger(__name__)

F = TypeVar("F")


class ChariottError(Exception):
    """An intent could not be fulfilled or its answer could not be used."""


@dataclass(frozen=True)
class Event:
    """A value published on a streaming channel."""

    id: str
    data: Value
    seq: int


@dataclass(frozen=True)
class Service:
    """A service endpoint offered by a namespace."""

    url: str
    schema_kind: str
    schema_reference: str

    @classmethod
    def from_message(cls, message: ServiceMessage) -> "Service":
        return cls(message.url, message.schema_kind, message.schema_reference)


def expect_fulfillment(fulfillment: object, expected_type: type[F]) -> F:
    """Return ``fulfillment`` if it is of ``expected_type``; raise otherwise."""
    if fulfillment is None:
        raise ChariottError("Did not receive fulfillment")
    if not isinstance(fulfillment, expected_type):
        raise ChariottError("Unexpected fulfillment")
    return fulfillment


class Chariott(abc.ABC):
    """The operations an application performs against the runtime."""

    @abc.abstractmethod
    async def invoke(self, namespace: str, command: str, args: Iterable[object]) -> Value:
        """Run ``command`` in ``namespace`` and return its result."""

    @abc.abstractmethod
    async def subscribe(
        self, namespace: str, channel_id: str, event_ids: Iterable[str]
    ) -> None:
        """Subscribe the channel ``channel_id`` to ``event_ids``."""

    @abc.abstractmethod
    async def discover(self, namespace: str) -> list[Service]:
        """Return the services offered by ``namespace``."""

    @abc.abstractmethod
    async def inspect(self, namespace: str, query: str) -> list[Entry]:
        """Return the entries of ``namespace`` matching ``query``."""

    @abc.abstractmethod
    async def write(self, namespace: str, key: str, value: object) -> None:
        """Store ``value`` under ``key`` in ``namespace``."""

    @abc.abstractmethod
    async def read(self, namespace: str, key: str) -> Optional[Value]:
        """Return the value under ``key`` in ``namespace``, or ``None``."""


class FulfillingChariott(Chariott):
    """Implements every operation on top of a single ``fulfill`` call.

    Subclasses supply the transport by implementing :meth:`fulfill`.
    """

    @abc.abstractmethod
    async def fulfill(self, namespace: str, intent: Intent) -> object:
        """Send ``intent`` to ``namespace`` and return the fulfillment, if any."""

    async def invoke(self, namespace: str, command: str, args: Iterable[object]) -> Value:
        command = str(command)
        _log.debug("Invoking command %r.", command)
        fulfillment = expect_fulfillment(
            await self.fulfill(str(namespace), InvokeIntent(command, tuple(args))),
            InvokeFulfillment,
        )
        if fulfillment.return_value is None:
            raise ChariottError("Return value could not be parsed.")
        return fulfillment.return_value

    async def subscribe(
        self, namespace: str, channel_id: str, event_ids: Iterable[str]
    ) -> None:
        channel_id = str(channel_id)
        _log.debug("Subscribing to events on channel %r.", channel_id)
        intent = SubscribeIntent(channel_id, tuple(event_ids))
        expect_fulfillment(await self.fulfill(str(namespace), intent), SubscribeFulfillment)

    async def discover(self, namespace: str) -> list[Service]:
        namespace = str(namespace)
        _log.debug("Discovering services for namespace %r.", namespace)
        fulfillment = expect_fulfillment(
            await self.fulfill(namespace, DiscoverIntent()), DiscoverFulfillment
        )
        return [Service.from_message(s) for s in fulfillment.services]

    async def inspect(self, namespace: str, query: str) -> list[Entry]:
        namespace, query = str(namespace), str(query)
        _log.debug("Inspecting namespace %r with query %r.", namespace, query)
        fulfillment = expect_fulfillment(
            await self.fulfill(namespace, InspectIntent(query)), InspectFulfillment
        )
        entries = []
        for message in fulfillment.entries:
            if any(value is None for value in message.items.values()):
                raise ChariottError("Could not parse value.")
            entries.append(Entry(message.path, message.items))
        return entries

    async def write(self, namespace: str, key: str, value: object) -> None:
        key = str(key)
        value = Value.from_python(value)
        _log.debug("Writing key %r with value %r.", key, value)
        expect_fulfillment(
            await self.fulfill(str(namespace), WriteIntent(key, value)), WriteFulfillment
        )

    async def read(self, namespace: str, key: str) -> Optional[Value]:
        namespace, key = str(namespace), str(key)
        _log.debug("Reading key %r on namespace %r.", key, namespace)
        fulfillment = expect_fulfillment(
            await self.fulfill(namespace, ReadIntent(key)), ReadFulfillment
        )
        return fulfillment.value