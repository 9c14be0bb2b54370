"""Shared fixtures for jsonera integration tests.

Provides a helper that writes JSON documents into the pytest temporary
directory so store and CLI tests can work against real files.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture
def write_json(tmp_path: Path) -> Callable[[str, object], Path]:
    """Return a function that writes *obj* as JSON to ``tmp_path / name``."""

    def _write(name: str, obj: object) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(obj), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def era_path(tmp_path: Path) -> Path:
    """Path of a not-yet-existing era file."""
    return tmp_path / "doc.era.json"
