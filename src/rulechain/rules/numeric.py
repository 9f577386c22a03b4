# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Numeric rules.

Values may be numbers or numeric strings; params are raw strings coerced
here. Missing or non-numeric params raise InvalidRuleParametersError.
"""

from __future__ import annotations

import operator
from collections.abc import Callable
from decimal import Decimal, InvalidOperation

from ._utils import builtin, display_number, invalid_params, number_param, to_number


@builtin("Number")
def number(ctx):
    value = ctx.value
    valid = isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)
    return valid or ctx.translate("validator.isNumber")


@builtin("Integer")
def integer(ctx):
    value = to_number(ctx.value)
    valid = value is not None and float(value).is_integer()
    return valid or ctx.translate("validator.integer")


@builtin("NumberBetween", "Between")
def number_between(ctx):
    """NumberBetween[min,max], inclusive on both ends."""
    if len(ctx.params) < 2:
        raise invalid_params(ctx)
    lo = number_param(ctx, 0)
    hi = number_param(ctx, 1)
    value = to_number(ctx.value)
    if value is None:
        return ctx.translate("validator.isNumber")
    return lo <= value <= hi or ctx.translate(
        "validator.numberBetween", min=display_number(lo), max=display_number(hi)
    )


def _compare(ctx, compare: Callable[[float, float], bool], message_key: str):
    limit = number_param(ctx, 0)
    value = to_number(ctx.value)
    message = ctx.translate(message_key, limit=display_number(limit))
    if value is None:
        return message
    return compare(value, limit) or message


@builtin("NumberLessThan")
def number_less_than(ctx):
    return _compare(ctx, operator.lt, "validator.numberLessThan")


@builtin("NumberLessThanOrEquals")
def number_less_than_or_equals(ctx):
    return _compare(ctx, operator.le, "validator.numberLessThanOrEquals")


@builtin("NumberGreaterThan")
def number_greater_than(ctx):
    return _compare(ctx, operator.gt, "validator.numberGreaterThan")


@builtin("NumberGreaterThanOrEquals")
def number_greater_than_or_equals(ctx):
    return _compare(ctx, operator.ge, "validator.numberGreaterThanOrEquals")


@builtin("NumberEquals")
def number_equals(ctx):
    return _compare(ctx, operator.eq, "validator.numberEquals")


@builtin("NumberIsDifferentFrom")
def number_is_different_from(ctx):
    return _compare(ctx, operator.ne, "validator.numberIsDifferentFrom")


def _decimal_places(value) -> int | None:
    if isinstance(value, bool) or value is None:
        return None
    try:
        exponent = Decimal(str(value).strip()).as_tuple().exponent
    except InvalidOperation:
        return None
    if not isinstance(exponent, int):
        return None
    return max(-exponent, 0)


@builtin("DecimalPlaces")
def decimal_places(ctx):
    """DecimalPlaces[n] exactly n places; DecimalPlaces[min,max] a range."""
    lo = int(number_param(ctx, 0, minimum=0))
    hi = int(number_param(ctx, 1, minimum=lo)) if len(ctx.params) > 1 else lo
    places = _decimal_places(ctx.value)
    label = str(lo) if lo == hi else f"{lo}-{hi}"
    if places is None:
        return ctx.translate("validator.isNumber")
    return lo <= places <= hi or ctx.translate("validator.decimalPlaces", places=label)
