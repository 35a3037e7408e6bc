"""Entries describing the members a provider exposes for inspection."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Optional

from .value import Value


class Entry:
    """A path together with named properties describing it."""

    __slots__ = ("_path", "_items")

    def __init__(
        self,
        path: str,
        items: Mapping[str, object] | Iterable[tuple[str, object]] = (),
    ) -> None:
        pairs = items.items() if isinstance(items, Mapping) else items
        self._path = str(path)
        self._items = {str(key): Value.from_python(value) for key, value in pairs}

    @property
    def path(self) -> str:
        return self._path

    @property
    def items(self) -> Mapping[str, Value]:
        """Read-only view of the entry's properties."""
        return MappingProxyType(self._items)

    def get(self, key: str) -> Optional[Value]:
        """Return the property named ``key``, or ``None``."""
        return self._items.get(key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entry):
            return NotImplemented
        return self._path == other._path and self._items == other._items

    def __repr__(self) -> str:
        return f"Entry({self._path!r}, {self._items!r})"