"""Core data structures for jsonera."""

from jsonera.models.changes import Change, ChangeMode
from jsonera.models.config import JsonEraConfig
from jsonera.models.values import (
    DocumentTooDeepError,
    JsonArray,
    JsonBool,
    JsonNull,
    JsonNumber,
    JsonObject,
    JsonString,
    Value,
    ValueConversionError,
    ValueKind,
    from_python,
    kind_of,
    to_python,
)

__all__ = [
    "Change",
    "ChangeMode",
    "DocumentTooDeepError",
    "JsonArray",
    "JsonBool",
    "JsonEraConfig",
    "JsonNull",
    "JsonNumber",
    "JsonObject",
    "JsonString",
    "Value",
    "ValueConversionError",
    "ValueKind",
    "from_python",
    "kind_of",
    "to_python",
]
