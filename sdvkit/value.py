"""Typed values exchanged with the runtime."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import ClassVar

_INT32_RANGE = range(-(2**31), 2**31)
_INT64_RANGE = range(-(2**63), 2**63)


class InvalidType(TypeError):
    """A value did not hold the requested type."""

    def __init__(self, message: str = "Invalid type.") -> None:
        super().__init__(message)


class InvalidValueType(TypeError):
    """A value did not hold the requested type; the value is kept on ``value``."""

    def __init__(self, value: "Value") -> None:
        super().__init__("Invalid type.")
        self.value = value


class ValueKind(enum.Enum):
    """The kinds of payload a :class:`Value` can carry."""

    NULL = "null"
    BOOL = "bool"
    INT32 = "int32"
    INT64 = "int64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    STRING = "string"
    ANY = "any"
    BLOB = "blob"


@dataclass(frozen=True)
class Blob:
    """Binary data tagged with a media type."""

    media_type: str
    data: bytes

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", bytes(self.data))


@dataclass(frozen=True)
class Any:
    """An encoded message tagged with its type URL."""

    type_url: str
    value: bytes

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", bytes(self.value))


def _is_int(payload: object) -> bool:
    return isinstance(payload, int) and not isinstance(payload, bool)


@dataclass(frozen=True)
class Value:
    """A single typed value: a kind together with its payload."""

    kind: ValueKind
    payload: object = None

    TRUE: ClassVar["Value"]
    FALSE: ClassVar["Value"]
    NULL: ClassVar["Value"]

    def __post_init__(self) -> None:
        kind, payload = self.kind, self.payload
        if kind is ValueKind.NULL:
            if payload is not None:
                raise InvalidType("A null value carries no payload.")
        elif kind is ValueKind.BOOL:
            if not isinstance(payload, bool):
                raise InvalidType()
        elif kind in (ValueKind.INT32, ValueKind.INT64):
            if not _is_int(payload):
                raise InvalidType()
            bounds = _INT32_RANGE if kind is ValueKind.INT32 else _INT64_RANGE
            if payload not in bounds:
                raise ValueError(f"{payload} is out of range for {kind.value}.")
        elif kind in (ValueKind.FLOAT32, ValueKind.FLOAT64):
            if not (isinstance(payload, float) or _is_int(payload)):
                raise InvalidType()
            object.__setattr__(self, "payload", float(payload))
        elif kind is ValueKind.STRING:
            if not isinstance(payload, str):
                raise InvalidType()
        elif kind is ValueKind.ANY:
            if not isinstance(payload, Any):
                raise InvalidType()
        elif kind is ValueKind.BLOB:
            if not isinstance(payload, Blob):
                raise InvalidType()

    @classmethod
    def new_any(cls, type_url: str, value: bytes) -> "Value":
        """Build a value holding an encoded message."""
        return cls(ValueKind.ANY, Any(type_url, value))

    @classmethod
    def new_blob(cls, media_type: str, data: bytes) -> "Value":
        """Build a value holding binary data with a media type."""
        return cls(ValueKind.BLOB, Blob(media_type, data))

    @classmethod
    def from_python(cls, obj: object) -> "Value":
        """Convert a plain Python object into a value.

        Integers become ``INT32`` when they fit and ``INT64`` otherwise;
        floats become ``FLOAT64``.
        """
        if isinstance(obj, Value):
            return obj
        if obj is None:
            return cls.NULL
        if isinstance(obj, bool):
            return cls(ValueKind.BOOL, obj)
        if isinstance(obj, int):
            if obj in _INT32_RANGE:
                return cls(ValueKind.INT32, obj)
            if obj in _INT64_RANGE:
                return cls(ValueKind.INT64, obj)
            raise ValueError(f"{obj} does not fit in a 64-bit integer.")
        if isinstance(obj, float):
            return cls(ValueKind.FLOAT64, obj)
        if isinstance(obj, str):
            return cls(ValueKind.STRING, obj)
        if isinstance(obj, Any):
            return cls(ValueKind.ANY, obj)
        if isinstance(obj, Blob):
            return cls(ValueKind.BLOB, obj)
        raise InvalidType(f"Cannot convert {type(obj).__name__} to a value.")

    def to_i32(self) -> int:
        if self.kind is not ValueKind.INT32:
            raise InvalidType()
        return self.payload  # type: ignore[return-value]

    def to_i64(self) -> int:
        if self.kind is not ValueKind.INT64:
            raise InvalidType()
        return self.payload  # type: ignore[return-value]

    def to_bool(self) -> bool:
        if self.kind is not ValueKind.BOOL:
            raise InvalidType()
        return self.payload  # type: ignore[return-value]

    def as_str(self) -> str:
        if self.kind is not ValueKind.STRING:
            raise InvalidType()
        return self.payload  # type: ignore[return-value]

    def into_string(self) -> str:
        if self.kind is not ValueKind.STRING:
            raise InvalidValueType(self)
        return self.payload  # type: ignore[return-value]

    def into_any(self) -> tuple[str, bytes]:
        """Return ``(type_url, value)`` of an ``ANY`` value."""
        if not isinstance(self.payload, Any):
            raise InvalidValueType(self)
        return self.payload.type_url, self.payload.value

    def into_blob(self) -> tuple[str, bytes]:
        """Return ``(media_type, data)`` of a ``BLOB`` value."""
        if not isinstance(self.payload, Blob):
            raise InvalidValueType(self)
        return self.payload.media_type, self.payload.data


Value.TRUE = Value(ValueKind.BOOL, True)
Value.FALSE = Value(ValueKind.BOOL, False)
Value.NULL = Value(ValueKind.NULL)