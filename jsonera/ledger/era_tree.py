"""Era tree: per-property era numbers mirroring a document's shape.

Persisted shape (one mapping per container)::

    {".name": 3, "_name": {...children of name...}}

A ``"." + name`` entry exists for every current property; a ``"_" + name``
entry exists only while that property is an object or an array.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

from jsonera.observability.logging import get_logger

_logger = get_logger("ledger.era_tree")

ERA_PREFIX_PROP = "."
ERA_PREFIX_OBJ = "_"


class EraTreeError(ValueError):
    """Raised in strict mode when a persisted era tree is malformed."""


@dataclass
class EraNode:
    """Era numbers and nested child nodes of one container."""

    eras: dict[str, int] = field(default_factory=dict)
    children: dict[str, EraNode] = field(default_factory=dict)

    def era_of(self, name: str) -> int | None:
        return self.eras.get(name)

    def child(self, name: str) -> EraNode | None:
        return self.children.get(name)

    def to_dict(self) -> dict[str, Any]:
        """Render the persisted prefix-keyed shape."""
        out: dict[str, Any] = {}
        for name, era in self.eras.items():
            out[ERA_PREFIX_PROP + name] = era
        for name, node in self.children.items():
            out[ERA_PREFIX_OBJ + name] = node.to_dict()
        return out

    @classmethod
    def from_dict(
        cls,
        data: Any,
        *,
        strict: bool = False,
        max_depth: int | None = None,
        _path: str = "",
        _depth: int = 0,
    ) -> EraNode:
        """Parse the persisted shape.

        Permissive by default: malformed entries are dropped (and logged),
        which makes the diff treat those properties as already current.
        With ``strict=True`` the first malformed entry raises EraTreeError.

        Nesting deeper than *max_depth* raises EraTreeError in both modes;
        depth is counted the way the diff engine counts it, the top node
        being level 0.
        """
        if max_depth is not None and _depth > max_depth:
            raise EraTreeError(f"era tree nests deeper than {max_depth} at {_path}")
        node = cls()
        if not isinstance(data, dict):
            _reject(f"era node at {_path or '/'} is not an object", strict)
            return node

        for key, raw in data.items():
            prefix, name = key[:1], key[1:]
            where = f"{_path}/{key}"
            if prefix == ERA_PREFIX_PROP:
                valid = isinstance(raw, int | float) and not isinstance(raw, bool)
                if not valid or not math.isfinite(raw) or raw < 0:
                    _reject(f"era entry {where} is not a non-negative number: {raw!r}", strict)
                    continue
                node.eras[name] = int(raw)
            elif prefix == ERA_PREFIX_OBJ:
                if not isinstance(raw, dict):
                    _reject(f"child entry {where} is not an object", strict)
                    continue
                node.children[name] = cls.from_dict(
                    raw, strict=strict, max_depth=max_depth, _path=where, _depth=_depth + 1
                )
            else:
                _reject(f"unknown era key {where}", strict)
        return node


def _reject(message: str, strict: bool) -> None:
    if strict:
        raise EraTreeError(message)
    _logger.warning("era_tree_entry_ignored", detail=message)
