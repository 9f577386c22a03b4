# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""rulechain - Declarative rule-based validation.

Rules are named functions held in a RuleRegistry and referenced through a
small grammar ("Required|MinLength[3]|OneOf[Email, PhoneNumber]"). A
Validator parses the expression once, runs rules strictly in order, and
raises a ValidationError for the first failure.

    from rulechain import Validator, ValidationError

    validator = Validator()
    try:
        await validator.validate("ab", "Required|MinLength[3]")
    except ValidationError as e:
        print(e.message)  # This field must be at least 3 characters long

Core concepts:
- RuleRegistry: name -> rule function, last registration wins
- parse_rules: rule expression -> [InlineRule | NamedRule]
- Validator: sequential async executor with short-circuit failure
- one_of / OneOf: composite rule passing if any alternative passes
- FieldRules / validate_target: per-field rule lists over a mapping
"""

from __future__ import annotations

from typing import TYPE_CHECKING

# Lazy import mapping
_LAZY_IMPORTS: dict[str, tuple[str, str]] = {
    # composite
    "OneOf": ("rulechain.composite", "OneOf"),
    "one_of": ("rulechain.composite", "one_of"),
    # config
    "ValidatorConfig": ("rulechain.config", "ValidatorConfig"),
    # errors
    "ConfigurationError": ("rulechain.errors", "ConfigurationError"),
    "InvalidRuleParametersError": ("rulechain.errors", "InvalidRuleParametersError"),
    "RuleExecutionError": ("rulechain.errors", "RuleExecutionError"),
    "RulechainError": ("rulechain.errors", "RulechainError"),
    "UnknownRuleError": ("rulechain.errors", "UnknownRuleError"),
    "ValidationError": ("rulechain.errors", "ValidationError"),
    "ValidationFailure": ("rulechain.errors", "ValidationFailure"),
    # fields
    "FieldRules": ("rulechain.fields", "FieldRules"),
    "TargetValidationResult": ("rulechain.fields", "TargetValidationResult"),
    "field": ("rulechain.fields", "field"),
    "validate_target": ("rulechain.fields", "validate_target"),
    # messages
    "MessageCatalog": ("rulechain.messages", "MessageCatalog"),
    "Translator": ("rulechain.messages", "Translator"),
    # parser
    "InlineRule": ("rulechain.parser", "InlineRule"),
    "NamedRule": ("rulechain.parser", "NamedRule"),
    "parse_rule": ("rulechain.parser", "parse_rule"),
    "parse_rules": ("rulechain.parser", "parse_rules"),
    # registry
    "RuleRegistry": ("rulechain.registry", "RuleRegistry"),
    "get_default_registry": ("rulechain.registry", "get_default_registry"),
    "register_rule": ("rulechain.registry", "register_rule"),
    "reset_default_registry": ("rulechain.registry", "reset_default_registry"),
    # validator
    "RuleContext": ("rulechain.validator", "RuleContext"),
    "ValidationOutcome": ("rulechain.validator", "ValidationOutcome"),
    "Validator": ("rulechain.validator", "Validator"),
    "get_default_validator": ("rulechain.validator", "get_default_validator"),
    "reset_default_validator": ("rulechain.validator", "reset_default_validator"),
    "validate": ("rulechain.validator", "validate"),
}

_LOADED: dict[str, object] = {}


def __getattr__(name: str) -> object:
    """Lazy import attributes on first access."""
    if name in _LOADED:
        return _LOADED[name]

    if name in _LAZY_IMPORTS:
        from importlib import import_module

        module_name, attr_name = _LAZY_IMPORTS[name]
        module = import_module(module_name)
        value = getattr(module, attr_name)
        _LOADED[name] = value
        return value

    raise AttributeError(f"module 'rulechain' has no attribute {name!r}")


def __dir__() -> list[str]:
    """Return all available attributes for autocomplete."""
    return list(__all__)


# TYPE_CHECKING block for static analysis
if TYPE_CHECKING:
    from rulechain.composite import OneOf, one_of
    from rulechain.config import ValidatorConfig
    from rulechain.errors import (
        ConfigurationError,
        InvalidRuleParametersError,
        RuleExecutionError,
        RulechainError,
        UnknownRuleError,
        ValidationError,
        ValidationFailure,
    )
    from rulechain.fields import FieldRules, TargetValidationResult, field, validate_target
    from rulechain.messages import MessageCatalog, Translator
    from rulechain.parser import InlineRule, NamedRule, parse_rule, parse_rules
    from rulechain.registry import (
        RuleRegistry,
        get_default_registry,
        register_rule,
        reset_default_registry,
    )
    from rulechain.validator import (
        RuleContext,
        ValidationOutcome,
        Validator,
        get_default_validator,
        reset_default_validator,
        validate,
    )

__all__ = tuple(_LAZY_IMPORTS)
