"""RFC 6901 JSON Pointer formatting and parsing.

A pointer renders a property path as a single string token: every segment
is prefixed with ``/``, and within a segment ``~`` is escaped as ``~0`` and
``/`` as ``~1``.
"""

from __future__ import annotations

from collections.abc import Iterable


class PointerError(ValueError):
    """Base class for JSON Pointer decoding errors."""


class MissingTokenPrefixError(PointerError):
    """Raised when a non-empty pointer does not start with ``/``."""

    def __init__(self, pointer: str) -> None:
        super().__init__(f"Missing token prefix '/' in pointer: {pointer!r}")
        self.pointer = pointer


def _escape(segment: str) -> str:
    return segment.replace("~", "~0").replace("/", "~1")


def _unescape(segment: str) -> str:
    # ~1 first, so "~01" decodes to "~1" and not "/".
    return segment.replace("~1", "/").replace("~0", "~")


def format_pointer(segments: Iterable[str]) -> str:
    """Format a property path as a JSON Pointer.  ``[]`` formats as ``""``."""
    return "".join("/" + _escape(segment) for segment in segments)


def parse_pointer(pointer: str) -> list[str]:
    """Split a JSON Pointer back into its unescaped segments.

    Raises:
        MissingTokenPrefixError: *pointer* is non-empty and does not start
            with ``/``.
    """
    if pointer == "":
        return []
    if not pointer.startswith("/"):
        raise MissingTokenPrefixError(pointer)
    return [_unescape(part) for part in pointer[1:].split("/")]
