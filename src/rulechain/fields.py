# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Field rules - attach ordered rule lists to named fields.

A FieldRules value is an immutable builder: each call returns a new value
with one more rule appended. validate_target runs every field's chain
concurrently (each chain stays sequential) and collects per-field errors.

Example:
    signup = [
        field("email", "Required|Email", label="Email"),
        field("age").add("Integer").add("Between[18,130]"),
        field("website").sometimes().add("Url"),
    ]
    result = await validate_target(Validator(), signup, {"email": "", "age": 42})
    result.success          # False
    result.errors_by_field  # {"email": "Email is required"}
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field as dc_field, replace
from typing import TYPE_CHECKING, Any

import anyio

from .errors import ValidationError
from .parser import RuleSpec, parse_rules

if TYPE_CHECKING:
    from .validator import Validator

__all__ = (
    "ErrorBuilder",
    "FieldRules",
    "TargetValidationResult",
    "field",
    "validate_target",
)

ErrorBuilder = Callable[[str, ValidationError], str]
"""(label, error) -> display text for the errors list."""


@dataclass(frozen=True, slots=True)
class FieldRules:
    """Ordered rule expressions for one field.

    Attributes:
        name: Key of the field in the validated mapping
        rules: Rule expressions in order (strings, callables, mappings)
        label: Display name used in messages (defaults to name)
    """

    name: str
    rules: tuple[Any, ...] = ()
    label: str | None = None

    def add(self, *rules: Any) -> FieldRules:
        return replace(self, rules=(*self.rules, *rules))

    def required(self) -> FieldRules:
        return self.add("Required")

    def nullable(self) -> FieldRules:
        return self.add("Nullable")

    def sometimes(self) -> FieldRules:
        return self.add("Sometimes")

    def specs(self, separator: str = "|") -> list[RuleSpec]:
        return parse_rules(list(self.rules), separator)

    @property
    def display_name(self) -> str:
        return self.label or self.name


def field(name: str, *rules: Any, label: str | None = None) -> FieldRules:
    """Shorthand for FieldRules(name, rules, label)."""
    return FieldRules(name=name, rules=tuple(rules), label=label)


@dataclass(slots=True)
class TargetValidationResult:
    """Outcome of validating a mapping of fields.

    Attributes:
        success: True when no field failed
        result: Validated values of fields that passed
        errors: Display messages, one per failed field, in field order
        errors_by_field: Field name -> failure message
        failures: Field name -> the ValidationError raised
    """

    success: bool = True
    result: dict[str, Any] = dc_field(default_factory=dict)
    errors: list[str] = dc_field(default_factory=list)
    errors_by_field: dict[str, str] = dc_field(default_factory=dict)
    failures: dict[str, ValidationError] = dc_field(default_factory=dict)


def _default_error_builder(label: str, error: ValidationError) -> str:
    return f"[{label}] : {error.message}"


def _normalize_fields(fields: Any) -> list[FieldRules]:
    if isinstance(fields, FieldRules):
        return [fields]
    if isinstance(fields, Mapping):
        return [
            rules if isinstance(rules, FieldRules) else FieldRules(name, (rules,))
            for name, rules in fields.items()
        ]
    return list(fields)


_PER_FIELD_KEYS = frozenset({"field_name", "label", "data", "rule_params"})


async def validate_target(
    validator: Validator,
    fields: Iterable[FieldRules] | Mapping[str, Any] | FieldRules,
    data: Mapping[str, Any],
    *,
    context: Any = None,
    error_builder: ErrorBuilder | None = None,
    **extra: Any,
) -> TargetValidationResult:
    """Validate each field of data against its rules.

    Args:
        validator: Validator running each field chain.
        fields: FieldRules list, or a mapping of field name -> rule expression.
        data: Values keyed by field name. Missing keys validate as None,
            unless the field's rules name Sometimes, in which case the field
            is skipped.
        context: Caller object passed through to every rule.
        error_builder: (label, error) -> text for result.errors.
        **extra: Pass-through fields for every rule (data is always passed).

    Returns:
        TargetValidationResult. Never raises ValidationError. When several
        FieldRules share a name, every failure is listed in errors and the
        first one is kept in errors_by_field.

    Raises:
        TypeError: If extra names a key set per field (field_name, label,
            data, rule_params).
    """
    reserved = sorted(_PER_FIELD_KEYS.intersection(extra))
    if reserved:
        raise TypeError(f"validate_target() sets {', '.join(reserved)} per field")

    build_error = error_builder or _default_error_builder
    field_list = _normalize_fields(fields)
    outcomes: dict[int, Any] = {}

    async def run(index: int, fr: FieldRules) -> None:
        try:
            outcome = await validator.validate(
                data.get(fr.name),
                fr.specs(validator.config.separator),
                field_name=fr.name,
                context=context,
                label=fr.display_name,
                data=data,
                **extra,
            )
        except ValidationError as e:
            outcomes[index] = e
        else:
            outcomes[index] = outcome.value

    async with anyio.create_task_group() as tg:
        for index, fr in enumerate(field_list):
            specs = fr.specs(validator.config.separator)
            if fr.name not in data and any(
                s.name and s.name.casefold() == "sometimes" for s in specs
            ):
                continue
            tg.start_soon(run, index, fr)

    result = TargetValidationResult()
    for index, fr in enumerate(field_list):
        if index not in outcomes:
            continue
        outcome = outcomes[index]
        if isinstance(outcome, ValidationError):
            result.success = False
            result.failures.setdefault(fr.name, outcome)
            result.errors_by_field.setdefault(fr.name, outcome.message)
            result.errors.append(build_error(fr.display_name, outcome))
        else:
            result.result[fr.name] = outcome
    for name in result.failures:
        result.result.pop(name, None)
    return result
