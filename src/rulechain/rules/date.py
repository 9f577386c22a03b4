# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Date rules.

Values and params may be datetime/date objects, ISO 8601 strings, or POSIX
timestamps in seconds. Naive datetimes are treated as UTC so every comparison
is between aware datetimes.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any

from ._utils import builtin, invalid_params


def to_datetime(value: Any) -> datetime | None:
    """Coerce a value to an aware datetime, or None if it is not a date."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def _date_param(ctx, index: int) -> datetime:
    parsed = to_datetime(ctx.param(index))
    if parsed is None:
        raise invalid_params(ctx)
    return parsed


def _now() -> datetime:
    return datetime.now(timezone.utc)


@builtin("Date")
def date_rule(ctx):
    return to_datetime(ctx.value) is not None or ctx.translate("validator.date")


@builtin("DateAfter")
def date_after(ctx):
    limit = _date_param(ctx, 0)
    value = to_datetime(ctx.value)
    return (value is not None and value > limit) or ctx.translate(
        "validator.dateAfter", date=ctx.param(0)
    )


@builtin("DateBefore")
def date_before(ctx):
    limit = _date_param(ctx, 0)
    value = to_datetime(ctx.value)
    return (value is not None and value < limit) or ctx.translate(
        "validator.dateBefore", date=ctx.param(0)
    )


@builtin("DateBetween")
def date_between(ctx):
    """DateBetween[start,end], inclusive."""
    start = _date_param(ctx, 0)
    end = _date_param(ctx, 1)
    value = to_datetime(ctx.value)
    return (value is not None and start <= value <= end) or ctx.translate(
        "validator.dateBetween", start=ctx.param(0), end=ctx.param(1)
    )


@builtin("DateEquals")
def date_equals(ctx):
    limit = _date_param(ctx, 0)
    value = to_datetime(ctx.value)
    return (value is not None and value == limit) or ctx.translate(
        "validator.dateEquals", date=ctx.param(0)
    )


@builtin("FutureDate")
def future_date(ctx):
    value = to_datetime(ctx.value)
    return (value is not None and value > _now()) or ctx.translate("validator.futureDate")


@builtin("PastDate")
def past_date(ctx):
    value = to_datetime(ctx.value)
    return (value is not None and value < _now()) or ctx.translate("validator.pastDate")
