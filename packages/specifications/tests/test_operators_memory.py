"""Tests for in-memory specification operators (comparison, set, string, fts)."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from storefront_specifications.evaluator import MemoryOperator
from storefront_specifications.exceptions import OperatorNotFoundError
from storefront_specifications.operators import SpecificationOperator as Op
from storefront_specifications.operators_memory import (
    MemoryOperatorRegistry,
    OrderingOperator,
)
from storefront_specifications.operators_memory.fts import FtsOperator
from storefront_specifications.operators_memory.string import SubstringOperator


class TestComparisonOperators:
    def test_equal_and_not_equal(self, registry) -> None:
        assert registry.evaluate(Op.EQ, "urgent", "urgent") is True
        assert registry.evaluate(Op.EQ, "low", "urgent") is False
        assert registry.evaluate(Op.NE, "low", "urgent") is True

    def test_missing_field_is_not_equal(self, registry) -> None:
        assert registry.evaluate(Op.EQ, None, "completed") is False
        assert registry.evaluate(Op.NE, None, "completed") is True

    def test_array_field_equals_member(self, registry) -> None:
        assert registry.evaluate(Op.EQ, ["lamp", "desk"], "desk") is True
        assert registry.evaluate(Op.NE, ["lamp", "desk"], "desk") is False

    def test_ordering(self, registry) -> None:
        assert registry.evaluate(Op.GT, 11, 10) is True
        assert registry.evaluate(Op.GE, 10, 10) is True
        assert registry.evaluate(Op.LT, 9, 10) is True
        assert registry.evaluate(Op.LE, 10, 10) is True

    @pytest.mark.parametrize("op", [Op.GT, Op.GE, Op.LT, Op.LE])
    def test_ordering_rejects_missing_and_mismatched(self, registry, op) -> None:
        assert registry.evaluate(op, None, 1) is False
        assert registry.evaluate(op, "ten", 1) is False

    def test_naive_datetimes_are_utc(self, registry) -> None:
        stored = datetime(2024, 3, 1, 10, 0)
        bound = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)

        assert registry.evaluate(Op.GT, stored, bound) is True
        assert registry.evaluate(Op.EQ, stored, stored.replace(tzinfo=timezone.utc))

    def test_ordering_operator_rejects_other_operators(self) -> None:
        with pytest.raises(ValueError):
            OrderingOperator(Op.EQ)


class TestSetOperators:
    def test_in_and_not_in(self, registry) -> None:
        assert registry.evaluate(Op.IN, "high", ["high", "urgent"]) is True
        assert registry.evaluate(Op.NOT_IN, "low", ["high", "urgent"]) is True

    def test_in_with_array_field(self, registry) -> None:
        assert registry.evaluate(Op.IN, ["sale", "new"], ["new"]) is True
        assert registry.evaluate(Op.NOT_IN, ["sale"], ["new"]) is True

    def test_between_is_inclusive(self, registry) -> None:
        assert registry.evaluate(Op.BETWEEN, 1, (1, 10)) is True
        assert registry.evaluate(Op.BETWEEN, 10, (1, 10)) is True
        assert registry.evaluate(Op.BETWEEN, 11, (1, 10)) is False
        assert registry.evaluate(Op.BETWEEN, 0, (1, 10)) is False

    def test_between_open_ended(self, registry) -> None:
        assert registry.evaluate(Op.BETWEEN, 500, (11, None)) is True
        assert registry.evaluate(Op.BETWEEN, 3, (None, 10)) is True
        assert registry.evaluate(Op.BETWEEN, None, (None, 10)) is False

    def test_between_dates(self, registry) -> None:
        low = datetime(2024, 1, 1, tzinfo=timezone.utc)
        high = datetime(2024, 1, 31, tzinfo=timezone.utc)

        assert registry.evaluate(Op.BETWEEN, datetime(2024, 1, 15), (low, high))
        assert not registry.evaluate(Op.BETWEEN, datetime(2024, 2, 1), (low, high))


class TestSubstringOperators:
    def test_contains_is_case_sensitive(self, registry) -> None:
        assert registry.evaluate(Op.CONTAINS, "Mumbai", "mum") is False
        assert registry.evaluate(Op.CONTAINS, "Mumbai", "Mum") is True

    def test_icontains(self, registry) -> None:
        assert registry.evaluate(Op.ICONTAINS, "Navi Mumbai", "MUMBAI") is True
        assert registry.evaluate(Op.ICONTAINS, None, "x") is False

    def test_operand_is_literal(self) -> None:
        op = SubstringOperator(Op.ICONTAINS, ignore_case=True)

        assert op.evaluate("a.b", ".") is True
        assert op.evaluate("ab", ".") is False

    def test_arrays_never_match(self) -> None:
        op = SubstringOperator(Op.ICONTAINS, ignore_case=True)

        assert op.evaluate(["pune"], "pune") is False


class TestFtsOperator:
    def test_any_token_matches(self) -> None:
        op = FtsOperator()
        assert op.evaluate("Wireless Headphones", "headphones speaker") is True
        assert op.evaluate("Wireless Headphones", "speaker") is False

    def test_list_fields_are_joined(self) -> None:
        assert FtsOperator().evaluate(["audio", "bluetooth"], "Bluetooth") is True

    def test_empty_query_matches_nothing(self) -> None:
        assert FtsOperator().evaluate("anything", "   ") is False


class TestRegistry:
    def test_default_registry_covers_every_leaf_operator(self, registry) -> None:
        leaves = {op for op in Op if not op.is_logical}

        assert registry.supported_operators == leaves

    def test_unregistered_operator_raises(self, registry) -> None:
        with pytest.raises(OperatorNotFoundError):
            registry.evaluate(Op.AND, 1, 1)

    def test_later_registration_replaces(self, registry) -> None:
        class AlwaysEqual(MemoryOperator):
            name = Op.EQ

            def evaluate(self, field_value, condition_value) -> bool:
                return True

        registry.register(AlwaysEqual())

        assert registry.evaluate(Op.EQ, 1, 2) is True
        assert len([op for op in registry if op.name == Op.EQ]) == 1

    def test_registry_from_operators(self) -> None:
        registry = MemoryOperatorRegistry(FtsOperator())

        assert registry.supported_operators == {Op.FTS}
