# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Tests for rulechain.messages - message catalog and translators."""

from __future__ import annotations

import pytest

from rulechain.errors import UnknownRuleError, ValidationFailure
from rulechain.messages import (
    DEFAULT_MESSAGES,
    MessageCatalog,
    Translator,
    interpolate,
    resolve_translator,
)
from rulechain.validator import Validator

FRENCH = {
    "validator": {
        "required": "%{field} est obligatoire",
        "minLength": "%{field} doit contenir au moins %{minLength} caractères",
    }
}


class TestInterpolate:
    """Tests for %{name} placeholder replacement."""

    def test_replaces_placeholders(self):
        assert interpolate("%{a} and %{b}", {"a": 1, "b": "two"}) == "1 and two"

    def test_missing_field_uses_generic_label(self):
        assert interpolate("%{field} is required", {}) == "This field is required"

    def test_missing_other_names_render_empty(self):
        assert interpolate("[%{missing}]", {}) == "[]"

    def test_lists_joined(self):
        assert interpolate("%{values}", {"values": ["a", "b"]}) == "a, b"

    def test_text_without_placeholders(self):
        assert interpolate("plain text", {"field": "x"}) == "plain text"


class TestMessageCatalog:
    """Tests for MessageCatalog lookup and locales."""

    def test_default_messages(self):
        catalog = MessageCatalog()
        assert catalog.translate("validator.required", {"field": "Name"}) == "Name is required"
        assert catalog.lookup("validator.minLength") == DEFAULT_MESSAGES["validator"]["minLength"]

    def test_unknown_key_returns_key(self):
        assert MessageCatalog().translate("validator.nothingHere") == "validator.nothingHere"

    def test_non_leaf_key_returns_key(self):
        assert MessageCatalog().translate("validator") == "validator"

    def test_locale_with_fallback(self):
        catalog = MessageCatalog(FRENCH, locale="fr")
        assert catalog.translate("validator.required", {"field": "Nom"}) == "Nom est obligatoire"
        assert catalog.translate("validator.email", {"field": "Email"}) == (
            "Email must be a valid email address"
        )
        assert set(catalog.locales()) == {"en", "fr"}

    def test_register_deep_merges(self):
        catalog = MessageCatalog()
        catalog.register("en", {"validator": {"required": "%{field} is missing"}})
        assert catalog.translate("validator.required", {}) == "This field is missing"
        assert catalog.lookup("validator.email") is not None

    def test_callable(self):
        catalog = MessageCatalog()
        assert catalog("validator.required", {"field": "Age"}) == "Age is required"

    def test_is_translator(self):
        assert isinstance(MessageCatalog(), Translator)

    def test_repr(self):
        assert repr(MessageCatalog()) == "MessageCatalog(locale='en', locales=['en'])"


class TestResolveTranslator:
    """Tests for translator normalization."""

    def test_none_uses_default_catalog(self):
        translate = resolve_translator(None)
        assert translate("validator.required", {"field": "X"}) == "X is required"

    def test_plain_callable(self):
        def translate(key, params):
            return key.upper()

        assert resolve_translator(translate) is translate

    def test_translator_object(self):
        class Upper:
            def translate(self, key, params):
                return key.upper()

        assert resolve_translator(Upper())("a.b", {}) == "A.B"

    def test_rejects_other_objects(self):
        with pytest.raises(TypeError):
            resolve_translator(42)


class TestValidatorMessages:
    """Messages flow from the translator into raised errors."""

    @pytest.mark.anyio
    async def test_localized_failure(self, registry):
        validator = Validator(registry, translator=MessageCatalog(FRENCH, locale="fr"))
        with pytest.raises(ValidationFailure) as exc_info:
            await validator.validate("ab", "MinLength[3]", label="Nom")
        assert exc_info.value.message == "Nom doit contenir au moins 3 caractères"

    @pytest.mark.anyio
    async def test_translator_receives_params(self, registry):
        seen = []

        def translate(key, params):
            seen.append((key, dict(params)))
            return f"{key} failed"

        validator = Validator(registry, translator=translate)
        with pytest.raises(ValidationFailure, match="validator.numberBetween failed"):
            await validator.validate(30, "Between[1,5]", field_name="age")

        key, params = seen[-1]
        assert key == "validator.numberBetween"
        assert params["field"] == "age"
        assert params["value"] == 30
        assert params["rule"] == "Between"
        assert params["min"] == "1"
        assert params["max"] == "5"

    @pytest.mark.anyio
    async def test_unknown_rule_message(self, validator):
        with pytest.raises(UnknownRuleError) as exc_info:
            await validator.validate("x", "Nope")
        assert exc_info.value.message == 'Invalid validation rule "Nope"'
