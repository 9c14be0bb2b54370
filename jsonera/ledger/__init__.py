"""Era ledger for jsonera.

Tracks when each property of a document last changed, as an era number
rather than a timestamp.

Submodules:
    classifier    -- Per-property ChangeMode classification.
    walker        -- Lockstep traversal of two value trees.
    era_tree      -- EraNode and its persisted prefix-keyed shape.
    diff          -- Era diff engine producing a new era tree and Change list.
    era_document  -- EraDocument state container with atomic commit.
    store         -- JSON file persistence for documents and era documents.
"""

from jsonera.ledger.classifier import ClassifierPreconditionError, classify, compare_basic
from jsonera.ledger.diff import DiffResult, DocumentTooDeepError, diff
from jsonera.ledger.era_document import EraDocument
from jsonera.ledger.era_tree import EraNode, EraTreeError
from jsonera.ledger.walker import walk_pairs

__all__ = [
    "ClassifierPreconditionError",
    "DiffResult",
    "DocumentTooDeepError",
    "EraDocument",
    "EraNode",
    "EraTreeError",
    "classify",
    "compare_basic",
    "diff",
    "walk_pairs",
]
