"""Era document: the persisted state of a tracked document.

Holds the current document, its era tree and the current era counter.
``update`` is the only mutation point.  There is no internal locking; a
caller sharing one instance between threads must serialise ``update``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

from jsonera.ledger.diff import DEFAULT_MAX_DEPTH, diff
from jsonera.ledger.era_tree import EraNode, EraTreeError
from jsonera.models.changes import Change
from jsonera.models.values import Value, from_python, to_python
from jsonera.observability.logging import get_logger

_logger = get_logger("ledger.era_document")


@dataclass
class EraDocument:
    """Current document, era tree and era counter.

    ``doc`` is None only before the first successful update.
    """

    doc: Value | None = None
    era: EraNode = field(default_factory=EraNode)
    doc_era: int = 0
    max_depth: int = field(default=DEFAULT_MAX_DEPTH, compare=False, repr=False)

    @classmethod
    def create(cls, doc: Value, *, max_depth: int = DEFAULT_MAX_DEPTH) -> tuple[EraDocument, list[Change]]:
        """Create a document and record every property of *doc* as New.

        Returns the era document (at era 1 unless *doc* produced no
        changes) together with the initial changes.
        """
        era_doc = cls(max_depth=max_depth)
        changes = era_doc.update(doc)
        return era_doc, changes

    @property
    def root_era(self) -> EraNode | None:
        """Era node of the document root's children."""
        return self.era.child("")

    def update(self, new_doc: Value) -> list[Change]:
        """Diff *new_doc* against the current state and commit if it changed.

        Doc, era tree and era counter are replaced together, and only when
        at least one change was found.  A no-op update leaves the state
        untouched and returns an empty list.
        """
        next_era = self.doc_era + 1
        result = diff(new_doc, self.doc, self.era, next_era, max_depth=self.max_depth)
        if not result.changes:
            _logger.debug("update_unchanged", doc_era=self.doc_era)
            return []

        self.doc, self.era, self.doc_era = new_doc, result.era, next_era
        _logger.info("update_committed", doc_era=self.doc_era, changes=len(result.changes))
        return result.changes

    def to_dict(self) -> dict[str, Any]:
        """Persisted form: ``{"doc": ..., "era": ..., "docEra": N}``."""
        return {
            "doc": to_python(self.doc) if self.doc is not None else None,
            "era": self.era.to_dict(),
            "docEra": self.doc_era,
        }

    @classmethod
    def from_dict(
        cls,
        data: Any,
        *,
        strict: bool = False,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> EraDocument:
        """Rebuild an era document from its persisted form.

        Raises:
            EraTreeError: the top level is not an object or ``docEra`` is
                not a non-negative integer, or the era tree nests deeper than
                *max_depth*.  Other era-tree entries follow
                ``EraNode.from_dict``'s strictness.
            DocumentTooDeepError: the stored document nests deeper than
                *max_depth*.
        """
        if not isinstance(data, dict):
            raise EraTreeError("era document must be a JSON object")
        doc_era = data.get("docEra", 0)
        valid = isinstance(doc_era, int | float) and not isinstance(doc_era, bool)
        if not valid or not math.isfinite(doc_era) or doc_era < 0:
            raise EraTreeError(f"docEra must be a non-negative integer, got {doc_era!r}")

        # A stored null document is indistinguishable from "never initialised"
        # only when docEra is 0.
        raw_doc = data.get("doc")
        doc = from_python(raw_doc, max_depth=max_depth) if raw_doc is not None or doc_era else None

        return cls(
            doc=doc,
            era=EraNode.from_dict(data.get("era", {}), strict=strict, max_depth=max_depth),
            doc_era=int(doc_era),
            max_depth=max_depth,
        )
