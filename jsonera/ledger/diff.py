"""Era diff engine.

Walks a new and an old document in lockstep, classifies every property,
and builds a fresh era tree alongside the walk.

Both documents are first wrapped as the only member of a synthetic object
under the empty-string name.  A change to the document root itself (for
example an array becoming an object) is then an ordinary property change,
recorded under the ``"."``/``"_"`` keys of the returned era node.

Membership changes propagate one level per return: a container whose
immediate children were added or removed is reported as Updated even when
no leaf value changed.  Each ancestor re-evaluates independently.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from jsonera.ledger.classifier import classify
from jsonera.ledger.era_tree import EraNode
from jsonera.ledger.walker import walk_pairs
from jsonera.models.changes import Change, ChangeMode
from jsonera.models.values import DocumentTooDeepError, JsonObject, Value, ValueKind, kind_of
from jsonera.observability.logging import get_logger

_logger = get_logger("ledger.diff")

DEFAULT_MAX_DEPTH = 128

# Name of the synthetic property that wraps the document root.
_ROOT_NAME = ""


@dataclass
class DiffResult:
    """Outcome of one diff pass."""

    era: EraNode
    changes: list[Change] = field(default_factory=list)


def _wrap(doc: Value | None) -> JsonObject:
    if doc is None:
        return JsonObject({})
    return JsonObject({_ROOT_NAME: doc})


def diff(
    new_doc: Value | None,
    old_doc: Value | None,
    old_era: EraNode,
    new_era: int,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> DiffResult:
    """Compute the new era tree and the changes from *old_doc* to *new_doc*.

    Args:
        new_doc:   Incoming document, or None to treat it as absent.
        old_doc:   Previous document, or None when there is none yet.
        old_era:   Era node committed together with *old_doc*.
        new_era:   Era number stamped on every property that changed.
        max_depth: Nesting limit; deeper documents raise DocumentTooDeepError.

    Returns:
        DiffResult whose ``era`` node has the same persisted shape as
        *old_era* and whose ``changes`` are listed children-first.
    """
    era, changes, _ = _build_sub_era(
        (),
        _wrap(new_doc),
        _wrap(old_doc),
        old_era,
        new_era,
        depth=0,
        max_depth=max_depth,
    )
    _logger.debug("diff_complete", new_era=new_era, changes=len(changes))
    return DiffResult(era=era, changes=changes)


def _build_sub_era(
    path: tuple[str, ...],
    new_val: Value | None,
    old_val: Value | None,
    old_node: EraNode,
    new_era: int,
    *,
    depth: int,
    max_depth: int,
) -> tuple[EraNode, list[Change], bool]:
    """Diff the children of one container.

    Returns the container's new era node, the changes found beneath it and
    whether any immediate child was added or removed.
    """
    if depth > max_depth:
        raise DocumentTooDeepError(max_depth, path[1:])

    start_len = len(path)
    node = EraNode()
    changes: list[Change] = []
    schema_changed = False

    def visit(child_path: tuple[str, ...], child_new: Value | None, child_old: Value | None) -> bool:
        nonlocal schema_changed
        if len(child_path) == start_len:
            # the container itself; only its children are diffed here
            return True

        mode = classify(child_new, child_old)
        if mode in (ChangeMode.NEW, ChangeMode.DELETED):
            schema_changed = True

        name = child_path[-1]
        new_is_container = _is_container(child_new)
        if new_is_container or _is_container(child_old):
            # Deleted or retyped containers are still walked so their
            # descendants are reported too.
            sub_node, sub_changes, sub_schema_changed = _build_sub_era(
                child_path,
                child_new,
                child_old,
                old_node.child(name) or EraNode(),
                new_era,
                depth=depth + 1,
                max_depth=max_depth,
            )
            changes.extend(sub_changes)
            if new_is_container:
                node.children[name] = sub_node
            if sub_schema_changed and mode is ChangeMode.EQUAL:
                mode = ChangeMode.UPDATED

        # No prior record means the property is treated as already current.
        previous = old_node.era_of(name)
        if previous is None:
            previous = new_era

        era_value = previous
        if mode is not ChangeMode.EQUAL:
            era_value = new_era
            changes.append(Change(path=child_path[1:], era=previous, mode=mode))

        if mode is not ChangeMode.DELETED:
            node.eras[name] = era_value

        # children were handled by the recursive call above
        return False

    walk_pairs(path, new_val, old_val, visit)
    return node, changes, schema_changed


def _is_container(value: Value | None) -> bool:
    return value is not None and kind_of(value) is not ValueKind.BASIC
