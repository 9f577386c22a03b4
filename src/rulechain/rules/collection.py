# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""List rules. Lists and tuples count as arrays."""

from __future__ import annotations

from ._utils import builtin, display_number, invalid_params, number_param


def _is_array(value) -> bool:
    return isinstance(value, (list, tuple))


@builtin("Array")
def array(ctx):
    return _is_array(ctx.value) or ctx.translate("validator.array")


@builtin("ArrayMinLength")
def array_min_length(ctx):
    if not _is_array(ctx.value):
        return ctx.translate("validator.array")
    limit = number_param(ctx, 0, minimum=0)
    return len(ctx.value) >= limit or ctx.translate(
        "validator.arrayMinLength", minLength=display_number(limit)
    )


@builtin("ArrayMaxLength")
def array_max_length(ctx):
    if not _is_array(ctx.value):
        return ctx.translate("validator.array")
    limit = number_param(ctx, 0, minimum=0)
    return len(ctx.value) <= limit or ctx.translate(
        "validator.arrayMaxLength", maxLength=display_number(limit)
    )


@builtin("ArrayLength")
def array_length(ctx):
    if not _is_array(ctx.value):
        return ctx.translate("validator.array")
    size = number_param(ctx, 0, minimum=0)
    return len(ctx.value) == size or ctx.translate(
        "validator.arrayLength", length=display_number(size)
    )


@builtin("ArrayContains")
def array_contains(ctx):
    """Every param must appear in the list (compared as-is or as text)."""
    if not ctx.params:
        raise invalid_params(ctx)
    values = ", ".join(str(p) for p in ctx.params)
    if not _is_array(ctx.value):
        return ctx.translate("validator.arrayContains", values=values)
    contains_all = all(
        any(item == required or str(item) == str(required) for item in ctx.value)
        for required in ctx.params
    )
    return contains_all or ctx.translate("validator.arrayContains", values=values)


@builtin("ArrayUnique")
def array_unique(ctx):
    if not _is_array(ctx.value):
        return ctx.translate("validator.array")
    seen: list = []
    for item in ctx.value:
        if item in seen:
            return ctx.translate("validator.arrayUnique")
        seen.append(item)
    return True
