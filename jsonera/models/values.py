"""Generic value model for parsed JSON documents.

Every node of a document is one member of the closed ``Value`` union.
Absence of a property is never a ``Value``: the walker and classifier
express it as ``None`` so a real document can never contain the
"missing" marker by accident.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType


class ValueConversionError(TypeError):
    """Raised when a Python object has no representation in the value model."""


class DocumentTooDeepError(ValueError):
    """Raised when a document nests deeper than the configured limit."""

    def __init__(self, max_depth: int, path: tuple[str, ...]) -> None:
        super().__init__(f"Document nesting exceeds max depth {max_depth} at {list(path)}")
        self.max_depth = max_depth
        self.path = path


class ValueKind(StrEnum):
    """Structural kind of a value.  All scalars share the BASIC kind."""

    BASIC = "basic"
    OBJECT = "object"
    ARRAY = "array"


@dataclass(frozen=True)
class JsonNull:
    """JSON ``null``."""


@dataclass(frozen=True)
class JsonBool:
    value: bool


@dataclass(frozen=True)
class JsonNumber:
    """JSON number, always held as a double."""

    value: float

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JsonNumber):
            return NotImplemented
        if math.isnan(self.value) and math.isnan(other.value):
            return True
        return self.value == other.value

    def __hash__(self) -> int:
        if math.isnan(self.value):
            return hash(("number", "nan"))
        return hash(("number", self.value))


@dataclass(frozen=True)
class JsonString:
    value: str


@dataclass(frozen=True)
class JsonArray:
    items: tuple[Value, ...] = ()


@dataclass(frozen=True)
class JsonObject:
    """JSON object.  Member order is irrelevant to equality."""

    members: Mapping[str, Value] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "members", MappingProxyType(dict(self.members)))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JsonObject):
            return NotImplemented
        return dict(self.members) == dict(other.members)

    def __hash__(self) -> int:
        return hash(frozenset(self.members.items()))


Value = JsonNull | JsonBool | JsonNumber | JsonString | JsonArray | JsonObject


def kind_of(value: Value) -> ValueKind:
    """Return the structural kind of *value*."""
    if isinstance(value, JsonObject):
        return ValueKind.OBJECT
    if isinstance(value, JsonArray):
        return ValueKind.ARRAY
    if isinstance(value, JsonNull | JsonBool | JsonNumber | JsonString):
        return ValueKind.BASIC
    raise ValueConversionError(f"Not a document value: {type(value).__name__}")


def child_items(value: Value) -> list[tuple[str, Value]]:
    """Return ``(name, child)`` pairs; array indices become decimal strings."""
    if isinstance(value, JsonObject):
        return list(value.members.items())
    if isinstance(value, JsonArray):
        return [(str(i), item) for i, item in enumerate(value.items)]
    return []


def _to_double(num: int) -> float:
    # Integers beyond double range saturate instead of raising.
    try:
        return float(num)
    except OverflowError:
        return math.copysign(math.inf, num)


def from_python(obj: object, *, max_depth: int | None = None) -> Value:
    """Convert a decoded JSON object (``json.loads`` output) into a ``Value``.

    Integers are normalised to doubles here, so ``1`` and ``1.0`` produce
    equal values.  Precision is lost for integers outside the exactly
    representable double range, as it would be in any JSON consumer that
    uses doubles.

    *max_depth* counts nested containers, the root container being level 1.

    Raises:
        ValueConversionError: *obj* contains a non-string object key or a
            type JSON cannot express.
        DocumentTooDeepError: containers nest deeper than *max_depth*.
    """
    return _convert(obj, (), max_depth)


def _convert(obj: object, path: tuple[str, ...], max_depth: int | None) -> Value:
    if obj is None:
        return JsonNull()
    if isinstance(obj, bool):
        return JsonBool(obj)
    if isinstance(obj, int):
        return JsonNumber(_to_double(obj))
    if isinstance(obj, float):
        return JsonNumber(obj)
    if isinstance(obj, str):
        return JsonString(obj)

    if not isinstance(obj, list | tuple | Mapping):
        raise ValueConversionError(f"Unsupported type for a JSON value: {type(obj).__name__}")
    if max_depth is not None and len(path) >= max_depth:
        raise DocumentTooDeepError(max_depth, path)

    # Plain loops keep the cost at one interpreter frame per nesting level.
    if isinstance(obj, Mapping):
        members: dict[str, Value] = {}
        for key, item in obj.items():
            if not isinstance(key, str):
                raise ValueConversionError(f"Object keys must be strings, got {type(key).__name__}")
            members[key] = _convert(item, (*path, key), max_depth)
        return JsonObject(members)
    items: list[Value] = []
    for i, item in enumerate(obj):
        items.append(_convert(item, (*path, str(i)), max_depth))
    return JsonArray(tuple(items))


def to_python(value: Value) -> object:
    """Convert a ``Value`` back into plain Python objects for ``json.dumps``.

    Integral finite numbers come back as ``int`` so documents written back
    to disk keep their original spelling.
    """
    if isinstance(value, JsonNull):
        return None
    if isinstance(value, JsonBool | JsonString):
        return value.value
    if isinstance(value, JsonNumber):
        num = value.value
        if math.isfinite(num) and num.is_integer():
            return int(num)
        return num
    if isinstance(value, JsonArray):
        return [to_python(item) for item in value.items]
    if isinstance(value, JsonObject):
        return {key: to_python(item) for key, item in value.members.items()}
    raise ValueConversionError(f"Not a document value: {type(value).__name__}")
