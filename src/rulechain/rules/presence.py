# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Presence rules and skip markers.

Nullable, Empty and Sometimes always pass. Their presence in a rule list is
what matters: the Validator skips the whole list for a None value (Nullable)
or an empty string (Empty), and validate_target skips absent fields
(Sometimes).
"""

from __future__ import annotations

from ._utils import builtin, is_empty


@builtin("Required")
def required(ctx):
    return not is_empty(ctx.value) or ctx.translate("validator.required")


@builtin("NonNullString")
def non_null_string(ctx):
    value = ctx.value
    return (isinstance(value, str) and bool(value.strip())) or ctx.translate(
        "validator.isNonNullString"
    )


@builtin("Nullable")
def nullable(ctx):
    return True


@builtin("Empty")
def empty(ctx):
    return True


@builtin("Sometimes")
def sometimes(ctx):
    return True
