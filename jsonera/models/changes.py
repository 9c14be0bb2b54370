"""Change records produced by the era diff engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from jsonera.pointer import format_pointer


class ChangeMode(StrEnum):
    """Kind of change a property went through between two snapshots."""

    EQUAL = "equal"
    NEW = "new"
    UPDATED = "updated"
    DELETED = "deleted"


@dataclass(frozen=True)
class Change:
    """A single property-level difference.

    Immutable: created once per difference during a diff pass and handed
    to the caller, never stored in the era document.
    """

    path: tuple[str, ...]
    era: int  # era the property held before this update
    mode: ChangeMode

    @property
    def pointer(self) -> str:
        """RFC 6901 JSON Pointer for ``path``."""
        return format_pointer(self.path)
