"""Change classification for a single property.

Decides the ChangeMode of one property from its new and old values.
Containers of matching kind are only tentatively Equal here; the diff
engine escalates them once it knows whether their membership changed.
"""

from __future__ import annotations

from jsonera.models.changes import ChangeMode
from jsonera.models.values import Value, ValueKind, kind_of


class ClassifierPreconditionError(TypeError):
    """Raised when a non-basic value reaches ``compare_basic``.

    This is a programming error in the caller, not a bad document.
    """


def compare_basic(a: Value, b: Value) -> ChangeMode:
    """Compare two basic values (null, bool, number, string).

    Numbers are doubles in the value model, so ``1`` and ``1.0`` are Equal.
    """
    for side in (a, b):
        if side is None or kind_of(side) is not ValueKind.BASIC:
            raise ClassifierPreconditionError(f"compare_basic expects basic values, got {side!r}")
    if a == b:
        return ChangeMode.EQUAL
    return ChangeMode.UPDATED


def classify(new: Value | None, old: Value | None) -> ChangeMode:
    """Classify one property.  ``None`` means absent from that tree.

    Precedence: absence beats kind mismatch, kind mismatch beats value
    comparison.
    """
    if new is None:
        return ChangeMode.DELETED
    if old is None:
        return ChangeMode.NEW
    new_kind = kind_of(new)
    if new_kind is not kind_of(old):
        return ChangeMode.UPDATED
    if new_kind is ValueKind.BASIC:
        return compare_basic(new, old)
    return ChangeMode.EQUAL
