"""Tests for per-property change classification."""

from __future__ import annotations

import pytest

from jsonera.ledger.classifier import ClassifierPreconditionError, classify, compare_basic
from jsonera.models.changes import ChangeMode
from jsonera.models.values import JsonNumber, from_python


class TestCompareBasic:
    def test_int_and_float_equal(self) -> None:
        assert compare_basic(from_python(1), from_python(1.0)) is ChangeMode.EQUAL

    def test_int_and_float_literal_equal(self) -> None:
        assert compare_basic(JsonNumber(1), JsonNumber(1.0)) is ChangeMode.EQUAL

    def test_different_numbers_updated(self) -> None:
        assert compare_basic(from_python(1), from_python(2)) is ChangeMode.UPDATED

    def test_strings(self) -> None:
        assert compare_basic(from_python("a"), from_python("a")) is ChangeMode.EQUAL
        assert compare_basic(from_python("a"), from_python("b")) is ChangeMode.UPDATED

    def test_null_vs_false_updated(self) -> None:
        assert compare_basic(from_python(None), from_python(False)) is ChangeMode.UPDATED

    def test_bool_vs_number_updated(self) -> None:
        assert compare_basic(from_python(True), from_python(1)) is ChangeMode.UPDATED

    @pytest.mark.parametrize("container", [{}, []])
    def test_container_rejected(self, container: object) -> None:
        with pytest.raises(ClassifierPreconditionError):
            compare_basic(from_python(container), from_python(1))

    def test_absent_rejected(self) -> None:
        with pytest.raises(ClassifierPreconditionError):
            compare_basic(from_python(1), None)  # type: ignore[arg-type]


class TestClassify:
    def test_absent_new_is_deleted(self) -> None:
        assert classify(None, from_python(1)) is ChangeMode.DELETED

    def test_absent_old_is_new(self) -> None:
        assert classify(from_python(1), None) is ChangeMode.NEW

    def test_null_is_not_absent(self) -> None:
        assert classify(from_python(None), from_python(None)) is ChangeMode.EQUAL
        assert classify(from_python(None), None) is ChangeMode.NEW

    def test_kind_mismatch_updated(self) -> None:
        assert classify(from_python([]), from_python({})) is ChangeMode.UPDATED
        assert classify(from_python(1), from_python([1])) is ChangeMode.UPDATED

    def test_same_container_kind_tentatively_equal(self) -> None:
        assert classify(from_python({"a": 1}), from_python({"b": 2})) is ChangeMode.EQUAL

    def test_basic_delegates(self) -> None:
        assert classify(from_python("x"), from_python("y")) is ChangeMode.UPDATED
