# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Error hierarchy for rulechain.

Every failure produced by ``Validator.validate`` is a ``ValidationError``:
callers catch one type and read ``message`` for display, ``rule``/``value``
for diagnostics.

    RulechainError
    ├── ConfigurationError
    └── ValidationError
        ├── ValidationFailure
        ├── UnknownRuleError
        ├── InvalidRuleParametersError
        └── RuleExecutionError
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from .parser import RuleSpec

__all__ = (
    "ConfigurationError",
    "InvalidRuleParametersError",
    "RuleExecutionError",
    "RulechainError",
    "UnknownRuleError",
    "ValidationError",
    "ValidationFailure",
)


class RulechainError(Exception):
    """Base error carrying a message, structured details and an optional cause."""

    default_message: ClassVar[str] = "rulechain error"

    def __init__(
        self,
        message: str | None = None,
        *,
        details: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message or self.default_message)
        if cause is not None:
            self.__cause__ = cause
        self.message = message or self.default_message
        self.details = details or {}

    def to_dict(self, *, include_cause: bool = False) -> dict[str, Any]:
        data = {
            "error": self.__class__.__name__,
            "message": self.message,
            **({"details": self.details} if self.details else {}),
        }
        if include_cause and self.__cause__ is not None:
            data["cause"] = repr(self.__cause__)
        return data


class ConfigurationError(RulechainError):
    """Invalid registry or validator configuration."""

    default_message = "Invalid configuration"


class ValidationError(RulechainError):
    """Failure outcome of a validation call.

    Attributes:
        value: The value that was validated.
        rule: The offending rule specification (None before execution).
        rules: The full parsed rule list.
        field_name: Optional field the value belongs to.
        context: Optional caller context passed through to rules.
        extra: Arbitrary pass-through keyword fields of the request.
    """

    default_message = "Validation failed"

    def __init__(
        self,
        message: str | None = None,
        *,
        value: Any = None,
        rule: RuleSpec | None = None,
        rules: tuple[RuleSpec, ...] = (),
        field_name: str | None = None,
        context: Any = None,
        extra: dict[str, Any] | None = None,
        details: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message, details=details, cause=cause)
        self.value = value
        self.rule = rule
        self.rules = tuple(rules)
        self.field_name = field_name
        self.context = context
        self.extra = dict(extra or {})

    @property
    def rule_name(self) -> str | None:
        """Name of the offending rule, None for inline rules."""
        return getattr(self.rule, "name", None)

    def bind(
        self,
        *,
        value: Any,
        rule: RuleSpec | None,
        rules: tuple[RuleSpec, ...],
        field_name: str | None = None,
        context: Any = None,
        extra: dict[str, Any] | None = None,
    ) -> ValidationError:
        """Fill in outcome fields a rule could not know when it raised."""
        self.value = value
        self.rule = rule
        self.rules = tuple(rules)
        self.field_name = field_name
        self.context = context
        self.extra = dict(extra or {})
        return self

    def to_dict(self, *, include_cause: bool = False) -> dict[str, Any]:
        data = super().to_dict(include_cause=include_cause)
        data.update(
            value=self.value,
            rule=self.rule_name,
            rules=[str(r) for r in self.rules],
            **({"field_name": self.field_name} if self.field_name else {}),
            **self.extra,
        )
        return data


class ValidationFailure(ValidationError):
    """A rule legitimately rejected the value."""


class UnknownRuleError(ValidationError):
    """A named rule specification does not resolve in the registry."""

    default_message = "Unknown validation rule"


class InvalidRuleParametersError(ValidationError):
    """A rule's parameters are missing or malformed."""

    default_message = "Invalid rule parameters"


class RuleExecutionError(ValidationError):
    """A rule raised an unexpected exception or timed out."""

    default_message = "Rule execution failed"
