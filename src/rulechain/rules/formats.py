# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Format rules: identifiers, encodings, network addresses, patterns.

Empty values pass; non-string values fail.
"""

from __future__ import annotations

import base64
import binascii
import ipaddress
import json
import re
import uuid

from ._utils import builtin, invalid_params, is_empty

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
_MAC_ADDRESS = re.compile(r"^(?:[0-9A-Fa-f]{2}([:-])(?:[0-9A-Fa-f]{2}\1){4}[0-9A-Fa-f]{2}|[0-9A-Fa-f]{12})$")
_REGEX_FLAGS = {"i": re.IGNORECASE, "m": re.MULTILINE, "s": re.DOTALL, "x": re.VERBOSE}


def _string_rule(ctx, check, message_key: str):
    if is_empty(ctx.value):
        return True
    value = ctx.value
    return (isinstance(value, str) and check(value)) or ctx.translate(message_key)


def _is_uuid(value: str) -> bool:
    try:
        parsed = uuid.UUID(value)
    except ValueError:
        return False
    return str(parsed) == value.lower()


def _is_json(value: str) -> bool:
    try:
        json.loads(value)
    except ValueError:
        return False
    return True


def _is_base64(value: str) -> bool:
    if len(value) % 4:
        return False
    try:
        base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        return False
    return True


def _luhn(digits: str) -> bool:
    total = 0
    for i, ch in enumerate(reversed(digits)):
        d = int(ch)
        if i % 2:
            d *= 2
            if d > 9:
                d -= 9
        total += d
    return total % 10 == 0


def _is_credit_card(value: str) -> bool:
    digits = re.sub(r"[\s-]", "", value)
    return digits.isdigit() and 13 <= len(digits) <= 19 and _luhn(digits)


@builtin("UUID")
def uuid_rule(ctx):
    return _string_rule(ctx, _is_uuid, "validator.uuid")


@builtin("JSON")
def json_rule(ctx):
    return _string_rule(ctx, _is_json, "validator.json")


@builtin("Base64")
def base64_rule(ctx):
    return _string_rule(ctx, _is_base64, "validator.base64")


@builtin("HexColor")
def hex_color(ctx):
    return _string_rule(ctx, lambda v: bool(_HEX_COLOR.match(v)), "validator.hexColor")


@builtin("MACAddress")
def mac_address(ctx):
    return _string_rule(ctx, lambda v: bool(_MAC_ADDRESS.match(v)), "validator.macAddress")


@builtin("CreditCard")
def credit_card(ctx):
    return _string_rule(ctx, _is_credit_card, "validator.creditCard")


@builtin("IP")
def ip(ctx):
    """IP accepts v4 or v6; IP[4] / IP[6] restrict the version."""
    version = ctx.param(0)
    if version not in (None, "", "4", "6", 4, 6):
        raise invalid_params(ctx)

    def check(value: str) -> bool:
        try:
            address = ipaddress.ip_address(value.strip())
        except ValueError:
            return False
        return not version or address.version == int(version)

    return _string_rule(ctx, check, "validator.ip")


@builtin("Regex")
def regex(ctx):
    """Regex[pattern] or Regex[pattern,flags] with flags from 'imsx'.

    Params split on top-level commas, so a pattern containing a comma
    (e.g. ``^\\d{1,3}$``) must use the mapping form:
    ``{"Regex": [r"^\\d{1,3}$"]}``.
    """
    pattern = ctx.param(0)
    flags_param = ctx.param(1) or ""
    if not pattern or any(f not in _REGEX_FLAGS for f in str(flags_param)):
        raise invalid_params(ctx)
    flags = 0
    for f in str(flags_param):
        flags |= _REGEX_FLAGS[f]
    try:
        compiled = re.compile(str(pattern), flags)
    except re.error as e:
        raise invalid_params(ctx, reason=str(e)) from e
    return _string_rule(ctx, lambda v: bool(compiled.search(v)), "validator.regex")
