# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Validator - sequential asynchronous rule executor.

Execution contract:
    1. Yield to the event loop once, so every call is deferred.
    2. Parse the rule expression into RuleSpecs (one pass).
    3. Run rules strictly left to right, awaiting each one.
    4. Stop at the first failure and raise a ValidationError subclass.
    5. Otherwise return a ValidationOutcome echoing value and rules.

Example:
    validator = Validator()
    outcome = await validator.validate("hello", "Required|MinLength[3]")
    assert outcome.value == "hello"

    try:
        await validator.validate("", ["Required", "MinLength[5]"])
    except ValidationError as e:
        print(e.rule_name, e.message)  # Required, This field is required
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import anyio
import anyio.lowlevel

from .config import ValidatorConfig
from .errors import (
    RuleExecutionError,
    UnknownRuleError,
    ValidationError,
    ValidationFailure,
)
from .messages import TranslatorLike, resolve_translator
from .parser import InlineRule, RuleSpec, format_rules, parse_rules
from .registry import RuleFunction, RuleRegistry, get_default_registry

__all__ = (
    "RuleContext",
    "ValidationOutcome",
    "Validator",
    "get_default_validator",
    "reset_default_validator",
    "validate",
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RuleContext:
    """Everything a rule function receives for one invocation.

    Attributes:
        value: Value under validation
        rule: The spec being executed
        rules: Full parsed rule list of the call
        params: Rule params (per-rule params, else request-level rule_params)
        field_name: Optional field name of the value
        context: Optional caller object passed through untouched
        extra: Pass-through keyword fields of the validate() call
        validator: Executing Validator, for rules that re-enter the engine
    """

    value: Any
    rule: RuleSpec
    rules: tuple[RuleSpec, ...] = ()
    params: tuple[Any, ...] = ()
    field_name: str | None = None
    context: Any = None
    extra: Mapping[str, Any] = field(default_factory=dict)
    validator: Validator | None = None

    @property
    def rule_name(self) -> str | None:
        return self.rule.name

    @property
    def label(self) -> str | None:
        """Display name of the field: extra 'label', else field_name."""
        return self.extra.get("label") or self.field_name

    def param(self, index: int, default: Any = None) -> Any:
        return self.params[index] if 0 <= index < len(self.params) else default

    def get(self, key: str, default: Any = None) -> Any:
        return self.extra.get(key, default)

    def translate(self, key: str, **params: Any) -> str:
        """Resolve a message with field/value/rule/params defaults filled in."""
        merged = {
            **self.extra,
            "field": self.label,
            "value": self.value,
            "rule": self.rule_name or str(self.rule),
            "params": list(self.params),
            **params,
        }
        validator = self.validator or get_default_validator()
        return validator.translate(key, merged)


@dataclass(frozen=True, slots=True)
class ValidationOutcome:
    """Successful validation: echoes the value and the parsed rule list."""

    value: Any
    rules: tuple[RuleSpec, ...] = ()
    field_name: str | None = None
    context: Any = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return True

    def to_dict(self) -> dict[str, Any]:
        return {
            "value": self.value,
            "rules": [str(r) for r in self.rules],
            **({"field_name": self.field_name} if self.field_name else {}),
            **self.extra,
        }


def _error_message(exc: BaseException) -> str:
    """Message attribute if present, else str(), else the exception repr."""
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(exc) or repr(exc)


def _normalize_params(rule_params: Any) -> tuple[Any, ...]:
    if rule_params is None:
        return ()
    if isinstance(rule_params, (list, tuple)):
        return tuple(rule_params)
    return (rule_params,)


class Validator:
    """Run parsed rule lists against values.

    Args:
        registry: Rule registry. Defaults to the process-wide registry,
            resolved on each access so resets are picked up.
        translator: Message resolver (Translator or (key, params) callable).
        config: ValidatorConfig.
    """

    def __init__(
        self,
        registry: RuleRegistry | None = None,
        *,
        translator: TranslatorLike | None = None,
        config: ValidatorConfig | None = None,
    ):
        self._registry = registry
        self.config = config or ValidatorConfig()
        self._translate = resolve_translator(translator)

    @property
    def registry(self) -> RuleRegistry:
        return self._registry if self._registry is not None else get_default_registry()

    def parse(self, rules: Any) -> list[RuleSpec]:
        return parse_rules(rules, self.config.separator)

    def translate(self, key: str, params: Mapping[str, Any] | None = None) -> str:
        """Resolve a message key. A failing translator yields the key itself."""
        try:
            message = self._translate(key, dict(params or {}))
        except Exception:
            logger.debug("Translator failed for '%s'", key, exc_info=True)
            return key
        return message if isinstance(message, str) and message else key

    def resolve(self, spec: RuleSpec) -> RuleFunction | None:
        """Rule function for a spec; looked up at call time, never cached."""
        if isinstance(spec, InlineRule):
            return spec.fn
        return self.registry.get(spec.name)

    async def validate(
        self,
        value: Any,
        rules: Any = None,
        *,
        rule_params: Any = None,
        field_name: str | None = None,
        context: Any = None,
        **extra: Any,
    ) -> ValidationOutcome:
        """Validate value against a rule expression.

        Args:
            value: Value to validate.
            rules: Callable, "A|B[1,2]" string, mapping or list of those.
            rule_params: Params for rules that carry none of their own.
            field_name: Field the value belongs to (used in messages).
            context: Arbitrary object passed through to rules.
            **extra: Extra fields passed through to rules and outcomes
                (e.g. label="Email", phone_region="FR").

        Returns:
            ValidationOutcome on success.

        Raises:
            ValidationError: ValidationFailure, UnknownRuleError,
                InvalidRuleParametersError or RuleExecutionError. Nothing else
                escapes, apart from cancellation.
        """
        await anyio.lowlevel.checkpoint()

        specs = tuple(self.parse(rules))
        outcome_fields: dict[str, Any] = {
            "value": value,
            "rules": specs,
            "field_name": field_name,
            "context": context,
            "extra": extra,
        }
        if not specs:
            return ValidationOutcome(**outcome_fields)

        if self.config.honor_skip_markers and self._skipped(specs, value):
            logger.debug("Skipping %s for %r", format_rules(specs), value)
            return ValidationOutcome(**outcome_fields)

        fallback_params = _normalize_params(rule_params)

        for spec in specs:
            fn = self.resolve(spec)
            if fn is None:
                message = self.translate(
                    "validator.invalidRule",
                    {**extra, "rule": spec.name, "field": extra.get("label") or field_name},
                )
                logger.debug("Unknown rule '%s'", spec.name)
                raise UnknownRuleError(
                    message,
                    rule=spec,
                    details={"rule": spec.name},
                    **outcome_fields,
                )

            ctx = RuleContext(
                value=value,
                rule=spec,
                rules=specs,
                params=spec.params or fallback_params,
                field_name=field_name,
                context=context,
                extra=extra,
                validator=self,
            )
            result = await self._invoke(fn, ctx, outcome_fields)

            if result is False:
                message = ctx.translate("validator.invalidMessage")
            elif isinstance(result, str) and result:
                message = result
            else:
                logger.debug("Rule '%s' passed", spec)
                continue

            logger.debug("Rule '%s' failed: %s", spec, message)
            raise ValidationFailure(message, rule=spec, **outcome_fields)

        return ValidationOutcome(**outcome_fields)

    async def _invoke(
        self, fn: RuleFunction, ctx: RuleContext, outcome_fields: dict[str, Any]
    ) -> Any:
        """Call a rule (sync or async), normalizing every exception."""
        timeout = self.config.rule_timeout
        try:
            if timeout is None:
                return await self._call(fn, ctx)
            with anyio.move_on_after(timeout):
                return await self._call(fn, ctx)
        except ValidationError as e:
            raise e.bind(rule=ctx.rule, **outcome_fields)
        except Exception as e:
            logger.debug("Rule '%s' raised %s", ctx.rule, type(e).__name__, exc_info=True)
            raise RuleExecutionError(
                _error_message(e),
                rule=ctx.rule,
                details={"exception": type(e).__name__},
                cause=e,
                **outcome_fields,
            ) from e

        # move_on_after swallowed the cancellation: the rule timed out
        logger.debug("Rule '%s' timed out after %ss", ctx.rule, timeout)
        raise RuleExecutionError(
            ctx.translate("validator.ruleTimeout", timeout=timeout),
            rule=ctx.rule,
            details={"timeout": timeout},
            **outcome_fields,
        )

    @staticmethod
    async def _call(fn: RuleFunction, ctx: RuleContext) -> Any:
        result = fn(ctx)
        if inspect.isawaitable(result):
            result = await result
        return result

    @staticmethod
    def _skipped(specs: tuple[RuleSpec, ...], value: Any) -> bool:
        names = {s.name.casefold() for s in specs if s.name}
        if value is None and "nullable" in names:
            return True
        return isinstance(value, str) and value == "" and "empty" in names

    async def is_valid(self, value: Any, rules: Any = None, **kwargs: Any) -> bool:
        """True if validate() succeeds, False on any ValidationError."""
        try:
            await self.validate(value, rules, **kwargs)
        except ValidationError:
            return False
        return True

    async def validate_target(self, fields: Any, data: Mapping[str, Any], **kwargs: Any):
        """Validate a mapping of field values. See rulechain.fields.validate_target."""
        from .fields import validate_target

        return await validate_target(self, fields, data, **kwargs)

    def __repr__(self) -> str:
        return f"Validator(registry={self.registry!r}, config={self.config!r})"


_default_validator: Validator | None = None


def get_default_validator() -> Validator:
    """Process-wide Validator bound to the default registry."""
    global _default_validator
    if _default_validator is None:
        _default_validator = Validator()
    return _default_validator


def reset_default_validator() -> None:
    global _default_validator
    _default_validator = None


async def validate(value: Any, rules: Any = None, **kwargs: Any) -> ValidationOutcome:
    """Validate with the default validator."""
    return await get_default_validator().validate(value, rules, **kwargs)
