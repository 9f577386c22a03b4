# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Shared helpers for built-in rule modules."""

from __future__ import annotations

import math
from collections.abc import Callable
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from rulechain.errors import InvalidRuleParametersError

if TYPE_CHECKING:
    from rulechain.validator import RuleContext

__all__ = (
    "BUILTIN_RULES",
    "builtin",
    "display_number",
    "invalid_params",
    "is_empty",
    "number_param",
    "to_number",
)

BUILTIN_RULES: dict[str, Callable[..., Any]] = {}
"""Populated as a side effect of importing the rule modules."""


def builtin(name: str, *aliases: str):
    """Record a rule function in BUILTIN_RULES under name and aliases."""

    def decorator(fn):
        for n in (name, *aliases):
            BUILTIN_RULES[n] = fn
        return fn

    return decorator


def is_empty(value: Any) -> bool:
    """None, blank strings and empty collections are empty; 0 and False are not."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict, set, frozenset)):
        return len(value) == 0
    return False


def to_number(value: Any) -> int | float | None:
    """Coerce int/float/Decimal/numeric strings. Booleans and NaN are not numbers."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, (float, Decimal)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    return None if math.isnan(number) else number


def display_number(number: int | float) -> str:
    """Render 10.0 as '10' for messages."""
    if isinstance(number, float) and number.is_integer():
        return str(int(number))
    return str(number)


def invalid_params(ctx: RuleContext, **params: Any) -> InvalidRuleParametersError:
    return InvalidRuleParametersError(
        ctx.translate("validator.invalidRuleParams", **params),
        details={"rule": ctx.rule_name, "params": list(ctx.params)},
    )


def number_param(ctx: RuleContext, index: int, *, minimum: float | None = None) -> int | float:
    """Numeric param at index, raising InvalidRuleParametersError if missing/invalid."""
    number = to_number(ctx.param(index))
    if number is None or (minimum is not None and number < minimum):
        raise invalid_params(ctx)
    return number
