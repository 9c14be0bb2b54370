"""Lockstep traversal of two value trees.

``walk_pairs`` visits every path present in either tree exactly once and
hands the callback both sides, with ``None`` for the side where the path
is absent.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from jsonera.models.values import Value, child_items

PairVisitor = Callable[[tuple[str, ...], Value | None, Value | None], bool]


def _child_pairs(new: Value | None, old: Value | None) -> list[tuple[str, Value | None, Value | None]]:
    new_children = dict(child_items(new)) if new is not None else {}
    old_children = dict(child_items(old)) if old is not None else {}

    # New-tree names first in their own order, then names only the old tree has.
    names = list(new_children)
    names.extend(name for name in old_children if name not in new_children)
    return [(name, new_children.get(name), old_children.get(name)) for name in names]


def walk_pairs(
    path: Sequence[str],
    new: Value | None,
    old: Value | None,
    visit: PairVisitor,
) -> None:
    """Walk *new* and *old* together, starting at *path*.

    The start path itself is visited first.  ``visit`` returns True to
    descend into the children of the path it was given.  Uses an explicit
    stack, so depth is bounded only by memory.

    Children are paired by name alone, whatever the container kinds.  When
    an object meets an array, array indices are matched as decimal strings,
    so object member ``"0"`` pairs with array index 0 and an identical
    child is visited as present on both sides even though its parent
    changed kind.
    """
    stack: list[tuple[tuple[str, ...], Value | None, Value | None]] = [(tuple(path), new, old)]
    while stack:
        cur_path, cur_new, cur_old = stack.pop()
        if not visit(cur_path, cur_new, cur_old):
            continue
        children = _child_pairs(cur_new, cur_old)
        # Reversed so siblings pop in name order.
        for name, child_new, child_old in reversed(children):
            stack.append(((*cur_path, name), child_new, child_old))
