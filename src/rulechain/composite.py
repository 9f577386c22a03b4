# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""OneOf composite rule: passes when any alternative rule list passes.

Alternatives run in order through the executing Validator; the first success
wins and later alternatives are not tried. When every alternative fails, the
message lists each alternative with its failure.

Two entry points:
    one_of(["Email"], ["PhoneNumber"])    # inline rule function
    "OneOf[Email, PhoneNumber|MinLength[8]]"   # registered rule, one param per alternative
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .errors import InvalidRuleParametersError, ValidationError
from .parser import format_rules

if TYPE_CHECKING:
    from .validator import RuleContext, Validator

__all__ = ("OneOf", "check_alternatives", "one_of")


async def check_alternatives(ctx: RuleContext, alternatives: list[Any]) -> bool | str:
    """Run alternatives in order; True on first success, else aggregated message."""
    from .validator import get_default_validator

    validator: Validator = ctx.validator or get_default_validator()
    labels: list[str] = []
    errors: list[str] = []

    for alternative in alternatives:
        specs = validator.parse(alternative)
        label = format_rules(specs, validator.config.separator) or "<empty>"
        try:
            await validator.validate(
                ctx.value,
                specs,
                field_name=ctx.field_name,
                context=ctx.context,
                **ctx.extra,
            )
        except ValidationError as e:
            labels.append(label)
            errors.append(e.message)
            continue
        return True

    return ctx.translate(
        "validator.oneOf",
        alternatives=", ".join(labels),
        errors="; ".join(errors),
    )


def one_of(*alternatives: Any):
    """Build an inline rule passing when any alternative rule expression passes.

    Args:
        *alternatives: Rule expressions (string, callable, list) tried in order.

    Raises:
        ValueError: If no alternatives are given.
    """
    if not alternatives:
        raise ValueError("one_of() requires at least one alternative")

    async def one_of_rule(ctx: RuleContext) -> bool | str:
        return await check_alternatives(ctx, list(alternatives))

    return one_of_rule


async def OneOf(ctx: RuleContext) -> bool | str:
    """Registered form: each param of OneOf[...] is one alternative expression."""
    alternatives = [p for p in ctx.params if p not in (None, "")]
    if not alternatives:
        raise InvalidRuleParametersError(
            ctx.translate("validator.invalidRuleParams", rule="OneOf")
        )
    return await check_alternatives(ctx, alternatives)
