"""In-memory key-value store that can notify an observer on every write.

The store is not thread safe; callers are responsible for synchronisation.
"""

from __future__ import annotations

from collections.abc import Hashable
from typing import Generic, Optional, Protocol, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class Observer(Protocol):
    """Receives a notification for every value written to a store."""

    def on_set(self, key: Hashable, value: object) -> None:
        """Called with the key and value of each write, before it is stored."""


class InMemoryKeyValueStore(Generic[K, V]):
    """A dictionary-backed store that reports each write to an optional observer."""

    def __init__(self, observer: Optional[Observer] = None) -> None:
        self._store: dict[K, V] = {}
        self._observer = observer

    @property
    def observer(self) -> Optional[Observer]:
        """The observer notified on writes, if any."""
        return self._observer

    def get(self, key: K) -> Optional[V]:
        """Return the value stored under ``key``, or ``None`` if there is none."""
        return self._store.get(key)

    def set(self, key: K, value: V) -> None:
        """Store ``value`` under ``key``, notifying the observer first.

        The observer is notified on every write, even if the value is unchanged.
        """
        if self._observer is not None:
            self._observer.on_set(key, value)
        self._store[key] = value

    def __contains__(self, key: object) -> bool:
        return key in self._store

    def __len__(self) -> int:
        return len(self._store)