"""Tests for the era diff engine."""

from __future__ import annotations

import pytest

from jsonera.ledger.diff import DiffResult, DocumentTooDeepError, diff
from jsonera.ledger.era_tree import EraNode
from jsonera.models.changes import Change, ChangeMode
from jsonera.models.values import from_python

NEW = ChangeMode.NEW
UPDATED = ChangeMode.UPDATED
DELETED = ChangeMode.DELETED


def _diff(new: object, old: object, old_era: dict | None = None, new_era: int = 2, **kwargs) -> DiffResult:
    new_val = from_python(new)
    old_val = from_python(old) if old is not None else None
    return diff(new_val, old_val, EraNode.from_dict(old_era or {}), new_era, **kwargs)


def _changes(result: DiffResult) -> list[tuple[tuple[str, ...], int, ChangeMode]]:
    return [(c.path, c.era, c.mode) for c in result.changes]


class TestInitialDiff:
    def test_everything_new(self) -> None:
        result = _diff({"a": 1}, None, new_era=1)
        assert _changes(result) == [(("a",), 1, NEW), ((), 1, NEW)]

    def test_era_tree_shape(self) -> None:
        result = _diff({"a": 1, "b": [True]}, None, new_era=1)
        assert result.era.to_dict() == {".": 1, "_": {".a": 1, ".b": 1, "_b": {".0": 1}}}

    def test_scalar_document(self) -> None:
        result = _diff("hello", None, new_era=1)
        assert _changes(result) == [((), 1, NEW)]
        assert result.era.to_dict() == {".": 1}


class TestLeafChanges:
    _ERA = {".": 1, "_": {".a": 1, ".b": 1}}

    def test_updated_leaf_keeps_parent_equal(self) -> None:
        result = _diff({"a": 2, "b": 1}, {"a": 1, "b": 1}, self._ERA)
        assert _changes(result) == [(("a",), 1, UPDATED)]
        assert result.era.to_dict() == {".": 1, "_": {".a": 2, ".b": 1}}

    def test_int_float_equal(self) -> None:
        result = _diff({"a": 1.0, "b": 1}, {"a": 1, "b": 1}, self._ERA)
        assert result.changes == []

    def test_null_is_a_value(self) -> None:
        result = _diff({"a": None, "b": 1}, {"a": 1, "b": 1}, self._ERA)
        assert _changes(result) == [(("a",), 1, UPDATED)]

    def test_added_leaf_updates_parent(self) -> None:
        result = _diff({"a": 1, "b": 1, "c": 0}, {"a": 1, "b": 1}, self._ERA)
        assert _changes(result) == [(("c",), 2, NEW), ((), 1, UPDATED)]
        assert result.era.to_dict() == {".": 2, "_": {".a": 1, ".b": 1, ".c": 2}}


class TestSchemaPropagation:
    def test_emptied_array_is_updated(self) -> None:
        old_era = {".": 1, "_": {".a": 1, "_a": {".0": 1}}}
        result = _diff({"a": []}, {"a": [0]}, old_era)
        assert _changes(result) == [(("a", "0"), 1, DELETED), (("a",), 1, UPDATED)]
        assert result.era.to_dict() == {".": 1, "_": {".a": 2, "_a": {}}}

    def test_propagates_one_level_only(self) -> None:
        old = {"x": {"y": {"z": 1}}}
        old_era = _diff(old, None, new_era=1).era.to_dict()
        result = _diff({"x": {"y": {}}}, old, old_era)
        assert _changes(result) == [(("x", "y", "z"), 1, DELETED), (("x", "y"), 1, UPDATED)]
        assert result.era.to_dict()["_"][".x"] == 1

    def test_deleted_property_has_no_era_entry(self) -> None:
        old = {"a": {"b": 1}, "c": 1}
        old_era = _diff(old, None, new_era=1).era.to_dict()
        result = _diff({"c": 1}, old, old_era)
        assert _changes(result) == [
            (("a", "b"), 1, DELETED),
            (("a",), 1, DELETED),
            ((), 1, UPDATED),
        ]
        assert result.era.to_dict() == {".": 2, "_": {".c": 1}}


class TestKindChanges:
    def test_object_to_array(self) -> None:
        old = {"a": {"b": 1}}
        old_era = _diff(old, None, new_era=1).era.to_dict()
        result = _diff({"a": [1]}, old, old_era)
        assert _changes(result) == [
            (("a", "0"), 2, NEW),
            (("a", "b"), 1, DELETED),
            (("a",), 1, UPDATED),
        ]
        assert result.era.to_dict() == {".": 1, "_": {".a": 2, "_a": {".0": 2}}}

    def test_object_to_array_matching_index_stays_equal(self) -> None:
        old = {"a": {"0": 1}}
        old_era = _diff(old, None, new_era=1).era.to_dict()
        result = _diff({"a": [1]}, old, old_era)
        assert _changes(result) == [(("a",), 1, UPDATED)]
        assert result.era.to_dict() == {".": 1, "_": {".a": 2, "_a": {".0": 1}}}

    def test_container_to_scalar_drops_child_slot(self) -> None:
        old = {"a": [1, 2]}
        old_era = _diff(old, None, new_era=1).era.to_dict()
        result = _diff({"a": "flat"}, old, old_era)
        assert (("a",), 1, UPDATED) in _changes(result)
        assert result.era.to_dict() == {".": 1, "_": {".a": 2}}

    def test_root_type_change(self) -> None:
        old = {"a": 1}
        old_era = _diff(old, None, new_era=1).era.to_dict()
        result = _diff([1], old, old_era)
        assert _changes(result) == [(("0",), 2, NEW), (("a",), 1, DELETED), ((), 1, UPDATED)]
        assert result.era.to_dict() == {".": 2, "_": {".0": 2}}


class TestEraBookkeeping:
    def test_missing_era_defaults_to_new_era(self) -> None:
        result = _diff({"a": 2}, {"a": 1}, {}, new_era=5)
        assert _changes(result) == [(("a",), 5, UPDATED)]

    def test_missing_era_for_equal_property_is_stamped(self) -> None:
        result = _diff({"a": 1}, {"a": 1}, {}, new_era=5)
        assert result.changes == []
        assert result.era.to_dict() == {".": 5, "_": {".a": 5}}

    def test_no_op_is_stable(self) -> None:
        old_era = {".": 2, "_": {}}
        result = _diff({}, {}, old_era, new_era=3)
        assert result.changes == []
        assert result.era.to_dict() == old_era

    def test_previous_era_reported(self) -> None:
        old_era = {".": 1, "_": {".a": 7}}
        result = _diff({"a": 2}, {"a": 1}, old_era, new_era=9)
        assert result.changes == [Change(path=("a",), era=7, mode=UPDATED)]
        assert result.era.to_dict()["_"][".a"] == 9


class TestPaths:
    def test_pointer_of_nested_change(self) -> None:
        result = _diff({"a/b": {"~": [1]}}, None, new_era=1)
        pointers = [c.pointer for c in result.changes]
        assert pointers == ["/a~1b/~0/0", "/a~1b/~0", "/a~1b", ""]

    def test_empty_key(self) -> None:
        result = _diff({"": 1}, None, new_era=1)
        assert [c.path for c in result.changes] == [("",), ()]


class TestDepthLimit:
    def test_too_deep_raises(self) -> None:
        doc: object = 1
        for _ in range(10):
            doc = {"n": doc}
        with pytest.raises(DocumentTooDeepError):
            _diff(doc, None, new_era=1, max_depth=5)

    def test_within_limit(self) -> None:
        doc: object = 1
        for _ in range(5):
            doc = {"n": doc}
        result = _diff(doc, None, new_era=1, max_depth=6)
        assert len(result.changes) == 6
