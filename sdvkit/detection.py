"""Object detection results and the parsing of detection service responses."""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class DetectionObject:
    """A detected object category together with the detector's confidence."""

    object: str
    confidence: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "object", str(self.object))
        object.__setattr__(self, "confidence", float(self.confidence))


@dataclass(frozen=True)
class DetectResponse:
    """The objects found in one image."""

    objects: tuple[DetectionObject, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "objects", tuple(self.objects))

    def __iter__(self) -> Iterator[DetectionObject]:
        return iter(self.objects)

    def __len__(self) -> int:
        return len(self.objects)


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(frozen=True)
class DetectedObject:
    """An object reported by a detection service, possibly with a parent category."""

    object: str
    confidence: float
    parent: Optional["DetectedObject"] = None

    def ascendants_and_self(self) -> Iterator["DetectedObject"]:
        """Yield this object, then its parent, then the parent's parent, and so on."""
        current: Optional[DetectedObject] = self
        while current is not None:
            yield current
            current = current.parent

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> "DetectedObject":
        """Build an object from its decoded JSON form.

        Raises ``ValueError`` when a field is missing or has the wrong type.
        """
        if not isinstance(data, Mapping):
            raise ValueError("Deserialization failed: object must be a mapping.")
        name = data.get("object")
        if not isinstance(name, str):
            raise ValueError("Deserialization failed: 'object' must be a string.")
        confidence = data.get("confidence")
        if not _is_number(confidence):
            raise ValueError("Deserialization failed: 'confidence' must be a number.")
        raw_parent = data.get("parent")
        parent = None if raw_parent is None else cls.from_dict(raw_parent)  # type: ignore[arg-type]
        return cls(name, float(confidence), parent)  # type: ignore[arg-type]


def _flatten(objects: Iterable[DetectedObject]) -> Iterator[DetectionObject]:
    for detected in objects:
        for item in detected.ascendants_and_self():
            yield DetectionObject(item.object, item.confidence)


def parse_detection_response(
    data: Union[str, bytes, Mapping[str, object]],
) -> DetectResponse:
    """Turn a detection service's JSON answer into a :class:`DetectResponse`.

    Every reported object contributes itself followed by all of its ancestors.
    """
    if isinstance(data, (str, bytes, bytearray)):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as error:
            raise ValueError("Deserialization failed") from error
    if not isinstance(data, Mapping):
        raise ValueError("Deserialization failed: response must be an object.")
    raw_objects = data.get("objects")
    if not isinstance(raw_objects, list):
        raise ValueError("Deserialization failed: 'objects' must be a list.")
    detected = [DetectedObject.from_dict(item) for item in raw_objects]
    return DetectResponse(tuple(_flatten(detected)))