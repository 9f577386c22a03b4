# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Tests for rulechain.rules.numeric."""

from __future__ import annotations

from decimal import Decimal

import pytest

from rulechain.errors import InvalidRuleParametersError, ValidationFailure
from rulechain.rules._utils import display_number, to_number


class TestNumberHelpers:
    """Tests for value coercion helpers."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (5, 5),
            (2.5, 2.5),
            ("10", 10),
            (" 1.5 ", 1.5),
            (Decimal("3.25"), 3.25),
            (True, None),
            (None, None),
            ("", None),
            ("abc", None),
            (float("nan"), None),
            ([1], None),
        ],
    )
    def test_to_number(self, value, expected):
        assert to_number(value) == expected

    def test_display_number(self):
        assert display_number(10.0) == "10"
        assert display_number(2.5) == "2.5"
        assert display_number(7) == "7"


class TestNumberRules:
    """Tests for Number and Integer."""

    @pytest.mark.anyio
    async def test_number(self, validator):
        assert await validator.is_valid(3.14, "Number") is True
        assert await validator.is_valid(Decimal("1"), "Number") is True
        assert await validator.is_valid("3", "Number") is False
        assert await validator.is_valid(True, "Number") is False

    @pytest.mark.anyio
    @pytest.mark.parametrize(
        ("value", "expected"), [(4, True), ("12", True), (4.0, True), (4.5, False), ("x", False)]
    )
    async def test_integer(self, validator, value, expected):
        assert await validator.is_valid(value, "Integer") is expected


class TestBetween:
    """Tests for NumberBetween and its Between alias."""

    @pytest.mark.anyio
    @pytest.mark.parametrize("value", [10, 15, 20, "12", 10.5])
    async def test_inside_range(self, validator, value):
        assert await validator.is_valid(value, "NumberBetween[10,20]") is True

    @pytest.mark.anyio
    async def test_outside_range_message(self, validator):
        with pytest.raises(ValidationFailure) as exc_info:
            await validator.validate(5, "Between[10.0, 20]", field_name="age")
        assert exc_info.value.message == "age must be between 10 and 20"

    @pytest.mark.anyio
    async def test_non_numeric_value(self, validator):
        with pytest.raises(ValidationFailure, match="must be a number"):
            await validator.validate("many", "Between[1,5]")

    @pytest.mark.anyio
    @pytest.mark.parametrize("rules", ["Between", "Between[1]", "Between[a,b]"])
    async def test_invalid_params(self, validator, rules):
        with pytest.raises(InvalidRuleParametersError):
            await validator.validate(3, rules)


class TestComparisons:
    """Tests for the single-limit comparison rules."""

    @pytest.mark.anyio
    @pytest.mark.parametrize(
        ("rule", "passing", "failing"),
        [
            ("NumberLessThan[10]", 9, 10),
            ("NumberLessThanOrEquals[10]", 10, 11),
            ("NumberGreaterThan[10]", 11, 10),
            ("NumberGreaterThanOrEquals[10]", 10, 9),
            ("NumberEquals[10]", "10", 9),
            ("NumberIsDifferentFrom[10]", 9, 10),
        ],
    )
    async def test_comparison(self, validator, rule, passing, failing):
        assert await validator.is_valid(passing, rule) is True
        with pytest.raises(ValidationFailure, match="10"):
            await validator.validate(failing, rule)

    @pytest.mark.anyio
    async def test_non_numeric_value_fails(self, validator):
        assert await validator.is_valid("ten", "NumberLessThan[10]") is False

    @pytest.mark.anyio
    async def test_missing_limit(self, validator):
        with pytest.raises(InvalidRuleParametersError):
            await validator.validate(3, "NumberLessThan")


class TestDecimalPlaces:
    """Tests for DecimalPlaces."""

    @pytest.mark.anyio
    async def test_exact_places(self, validator):
        assert await validator.is_valid("1.25", "DecimalPlaces[2]") is True
        with pytest.raises(ValidationFailure) as exc_info:
            await validator.validate(1.5, "DecimalPlaces[2]")
        assert exc_info.value.message == "This field must have 2 decimal places"

    @pytest.mark.anyio
    async def test_places_range(self, validator):
        assert await validator.is_valid(3, "DecimalPlaces[0,2]") is True
        assert await validator.is_valid("3.125", "DecimalPlaces[0,2]") is False

    @pytest.mark.anyio
    async def test_not_a_number(self, validator):
        assert await validator.is_valid("abc", "DecimalPlaces[2]") is False

    @pytest.mark.anyio
    async def test_invalid_range(self, validator):
        with pytest.raises(InvalidRuleParametersError):
            await validator.validate("1.5", "DecimalPlaces[3,1]")
