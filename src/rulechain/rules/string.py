# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""String rules: lengths, affixes, file names, email, URL and phone numbers.

Empty values pass every rule here except Length; pair them with Required.
"""

from __future__ import annotations

import re
from urllib.parse import urlparse

import phonenumbers
from email_validator import EmailNotValidError, validate_email

from ._utils import builtin, display_number, invalid_params, is_empty, number_param, to_number

_FORBIDDEN_FILE_CHARS = re.compile(r'^[^\\/:*?"<>|]+$')
_RESERVED_FILE_NAMES = re.compile(r"^(nul|prn|con|aux|lpt[0-9]|com[0-9])(\.|$)", re.I)
_URL_SCHEMES = frozenset({"http", "https", "ftp", "ftps"})


@builtin("String")
def string(ctx):
    return isinstance(ctx.value, str) or ctx.translate("validator.string")


@builtin("Length")
def length(ctx):
    """Length[n]: exactly n characters. Length[min,max]: inclusive range."""
    value = "" if ctx.value is None else str(ctx.value)
    lo = to_number(ctx.param(0))
    hi = to_number(ctx.param(1))
    if lo is None:
        raise invalid_params(ctx)
    if hi is not None:
        return lo <= len(value) <= hi or ctx.translate(
            "validator.lengthRange",
            minLength=display_number(lo),
            maxLength=display_number(hi),
        )
    return len(value.strip()) == lo or ctx.translate(
        "validator.length", length=display_number(lo)
    )


@builtin("MinLength")
def min_length(ctx):
    limit = number_param(ctx, 0, minimum=0)
    if is_empty(ctx.value):
        return True
    return (isinstance(ctx.value, str) and len(ctx.value) >= limit) or ctx.translate(
        "validator.minLength", minLength=display_number(limit)
    )


@builtin("MaxLength")
def max_length(ctx):
    limit = number_param(ctx, 0, minimum=0)
    if is_empty(ctx.value):
        return True
    return (isinstance(ctx.value, str) and len(ctx.value) <= limit) or ctx.translate(
        "validator.maxLength", maxLength=display_number(limit)
    )


def _affix_rule(ctx, check: str, message_key: str):
    values = [p for p in ctx.params if p not in (None, "")]
    if not values:
        raise invalid_params(ctx)
    if is_empty(ctx.value):
        return True
    value = ctx.value
    if isinstance(value, str) and any(getattr(value, check)(str(v)) for v in values):
        return True
    return ctx.translate(message_key, values=", ".join(str(v) for v in values))


@builtin("StartsWithOneOf")
def starts_with_one_of(ctx):
    return _affix_rule(ctx, "startswith", "validator.startsWithOneOf")


@builtin("EndsWithOneOf")
def ends_with_one_of(ctx):
    return _affix_rule(ctx, "endswith", "validator.endsWithOneOf")


@builtin("FileName")
def file_name(ctx):
    value = ctx.value
    valid = (
        isinstance(value, str)
        and bool(_FORBIDDEN_FILE_CHARS.match(value))
        and not value.startswith(".")
        and not _RESERVED_FILE_NAMES.match(value)
    )
    return valid or ctx.translate("validator.fileName")


def is_valid_email(value) -> bool:
    if not isinstance(value, str):
        return False
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def is_valid_phone_number(value, region: str | None = None) -> bool:
    if not isinstance(value, (str, int)) or isinstance(value, bool):
        return False
    try:
        number = phonenumbers.parse(str(value), region.upper() if region else None)
    except phonenumbers.NumberParseException:
        return False
    return phonenumbers.is_valid_number(number)


def _phone_region(ctx) -> str | None:
    region = ctx.param(0) or ctx.get("phone_region")
    if not region and ctx.validator is not None:
        region = ctx.validator.config.default_phone_region
    return region or None


@builtin("Email")
def email(ctx):
    if is_empty(ctx.value) or not isinstance(ctx.value, str):
        return True
    return is_valid_email(ctx.value) or ctx.translate("validator.email")


@builtin("Url")
def url(ctx):
    value = ctx.value
    if is_empty(value) or not isinstance(value, str):
        return True
    parsed = urlparse(value.strip())
    valid = parsed.scheme.lower() in _URL_SCHEMES and bool(parsed.netloc)
    return valid or ctx.translate("validator.url")


@builtin("PhoneNumber")
def phone_number(ctx):
    """PhoneNumber[region]: region as ISO code (e.g. FR); E.164 numbers need none."""
    if is_empty(ctx.value):
        return True
    return is_valid_phone_number(ctx.value, _phone_region(ctx)) or ctx.translate(
        "validator.phoneNumber"
    )


@builtin("EmailOrPhoneNumber")
def email_or_phone_number(ctx):
    value = ctx.value
    if is_empty(value):
        return True
    valid = is_valid_email(value) or is_valid_phone_number(value, _phone_region(ctx))
    return valid or ctx.translate("validator.emailOrPhoneNumber")
