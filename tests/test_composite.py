# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Tests for rulechain.composite - OneOf alternatives."""

from __future__ import annotations

import pytest

from rulechain.composite import one_of
from rulechain.errors import InvalidRuleParametersError, ValidationFailure
from rulechain.validator import Validator

EMAIL = "jane.doe@gmail.com"
PHONE = "+16502530000"


class TestOneOfInline:
    """Tests for the one_of() rule factory."""

    @pytest.mark.anyio
    @pytest.mark.parametrize("value", [EMAIL, PHONE])
    async def test_any_alternative_passes(self, validator, value):
        rule = one_of(["Email"], ["PhoneNumber"])
        assert (await validator.validate(value, rule)).value == value

    @pytest.mark.anyio
    async def test_all_alternatives_fail(self, validator):
        rule = one_of(["Email"], ["PhoneNumber"])
        with pytest.raises(ValidationFailure) as exc_info:
            await validator.validate("nope", rule)

        message = exc_info.value.message
        assert message.startswith("This field must match one of: Email, PhoneNumber")
        assert "must be a valid email address" in message
        assert "must be a valid phone number" in message

    @pytest.mark.anyio
    async def test_combined_with_other_rules(self, validator):
        rules = ["Required", one_of(["Email"], ["PhoneNumber"])]
        with pytest.raises(ValidationFailure) as exc_info:
            await validator.validate("", rules)
        assert exc_info.value.rule_name == "Required"

    @pytest.mark.anyio
    async def test_nested(self, validator):
        rule = one_of(["Required", "Email"], one_of(["PhoneNumber"], ["Integer"]))
        assert (await validator.validate("12", rule)).value == "12"
        assert await validator.is_valid("twelve", rule) is False

    def test_requires_alternatives(self):
        with pytest.raises(ValueError):
            one_of()


class TestOneOfRegistered:
    """Tests for the OneOf[...] rule expression form."""

    @pytest.mark.anyio
    @pytest.mark.parametrize("value", [EMAIL, PHONE])
    async def test_string_form(self, validator, value):
        outcome = await validator.validate(value, "Required|OneOf[Email, PhoneNumber]")
        assert outcome.value == value

    @pytest.mark.anyio
    async def test_alternative_with_chain(self, validator):
        rules = "OneOf[Email, Integer|Between[1,5]]"
        assert await validator.is_valid("3", rules) is True
        assert await validator.is_valid("9", rules) is False

    @pytest.mark.anyio
    async def test_failure_message_uses_label(self, validator):
        with pytest.raises(ValidationFailure) as exc_info:
            await validator.validate("nope", "OneOf[Email,PhoneNumber]", label="Contact")
        assert exc_info.value.message.startswith("Contact must match one of")
        assert exc_info.value.rule_name == "OneOf"

    @pytest.mark.anyio
    async def test_first_success_wins(self, registry):
        calls = []

        def passes(ctx):
            calls.append("A")
            return True

        def tracked(ctx):
            calls.append("B")
            return True

        registry.register("A", passes)
        registry.register("B", tracked)
        validator = Validator(registry)

        await validator.validate("x", "OneOf[A, B]")
        assert calls == ["A"]

    @pytest.mark.anyio
    async def test_params_from_rule_params(self, validator):
        outcome = await validator.validate(
            PHONE, "OneOf", rule_params=["Email", "PhoneNumber"]
        )
        assert outcome.value == PHONE

    @pytest.mark.anyio
    async def test_no_alternatives(self, validator):
        with pytest.raises(InvalidRuleParametersError) as exc_info:
            await validator.validate("x", "OneOf")
        assert exc_info.value.rule_name == "OneOf"
