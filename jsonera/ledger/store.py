"""File persistence for documents and era documents.

The diff core never touches the filesystem; this module is the boundary
where I/O and JSON decoding failures are turned into StoreError.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

from jsonera.ledger.diff import DEFAULT_MAX_DEPTH
from jsonera.ledger.era_document import EraDocument
from jsonera.models.values import Value, ValueConversionError, from_python
from jsonera.observability.logging import get_logger

_logger = get_logger("ledger.store")


class StoreError(Exception):
    """Raised when a document or era file cannot be read or written."""

    def __init__(self, path: Path, cause: Exception) -> None:
        super().__init__(f"{path}: {cause}")
        self.path = path
        self.cause = cause


def _read_json(path: Path) -> object:
    # ValueError covers malformed JSON and undecodable bytes alike;
    # RecursionError comes from the decoder on pathologically nested input.
    with path.open(encoding="utf-8") as fh:
        return json.load(fh)


def load_document(path: Path, *, max_depth: int = DEFAULT_MAX_DEPTH) -> Value:
    """Read a JSON file and convert it into the value model.

    Raises:
        StoreError: the file cannot be read or decoded, is not valid JSON,
            or nests deeper than *max_depth*.
    """
    try:
        value = from_python(_read_json(path), max_depth=max_depth)
    except (OSError, ValueError, RecursionError, ValueConversionError) as exc:
        raise StoreError(path, exc) from exc
    _logger.debug("document_loaded", path=str(path))
    return value


def load_era_document(
    path: Path,
    *,
    strict: bool = False,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> EraDocument | None:
    """Load an era document, or return None if *path* does not exist yet."""
    try:
        raw = _read_json(path)
    except FileNotFoundError:
        _logger.debug("era_document_missing", path=str(path))
        return None
    except (OSError, ValueError, RecursionError) as exc:
        raise StoreError(path, exc) from exc

    try:
        era_doc = EraDocument.from_dict(raw, strict=strict, max_depth=max_depth)
    except (ValueError, ValueConversionError) as exc:
        raise StoreError(path, exc) from exc
    _logger.debug("era_document_loaded", path=str(path), doc_era=era_doc.doc_era)
    return era_doc


def save_era_document(path: Path, era_doc: EraDocument, *, pretty: bool = False) -> None:
    """Write *era_doc* to *path* atomically (temporary file, then rename)."""
    indent = 4 if pretty else None
    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(era_doc.to_dict(), fh, indent=indent)
                fh.write("\n")
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
    except OSError as exc:
        raise StoreError(path, exc) from exc
    _logger.debug("era_document_saved", path=str(path), doc_era=era_doc.doc_era)
