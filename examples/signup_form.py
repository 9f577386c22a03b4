# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Signup form validation with field rules, a custom rule and OneOf.

Demonstrates:
1. register_rule: add a project-specific rule to the default registry
2. field(): attach rule expressions to form fields
3. OneOf[...]: accept an email address or a phone number as contact
4. validate_target: validate every field concurrently, collect errors

Usage:
    uv run python examples/signup_form.py
"""

from __future__ import annotations

import logging

import anyio

from rulechain import (
    MessageCatalog,
    ValidationError,
    Validator,
    field,
    register_rule,
)

RESERVED_USERNAMES = {"admin", "root", "support"}


@register_rule("NotReserved")
def not_reserved(ctx):
    if not isinstance(ctx.value, str):
        return True
    return ctx.value.lower() not in RESERVED_USERNAMES or ctx.translate(
        "signup.reserved", username=ctx.value
    )


def passwords_match(ctx):
    return ctx.get("data", {}).get("password") == ctx.value or ctx.translate(
        "signup.passwordMismatch"
    )


SIGNUP = [
    field("username", "Required|MinLength[3]|MaxLength[20]|NotReserved", label="Username"),
    field("contact", "Required|OneOf[Email, PhoneNumber]", label="Contact"),
    field("password", "Required|MinLength[8]", label="Password"),
    field("confirm", "Required", passwords_match, label="Confirmation"),
    field("age", label="Age").sometimes().add("Integer", "Between[13,130]"),
]

MESSAGES = {
    "signup": {
        "reserved": '"%{username}" is reserved',
        "passwordMismatch": "%{field} does not match the password",
    }
}

SUBMISSIONS = [
    {
        "username": "jane",
        "contact": "jane.doe@gmail.com",
        "password": "correct-horse",
        "confirm": "correct-horse",
    },
    {
        "username": "admin",
        "contact": "call me maybe",
        "password": "short",
        "confirm": "shorter",
        "age": 9,
    },
]


async def main() -> None:
    validator = Validator(translator=MessageCatalog(MESSAGES))

    for data in SUBMISSIONS:
        result = await validator.validate_target(SIGNUP, data)
        print(f"\n{data['username']}: {'ok' if result.success else 'rejected'}")
        for error in result.errors:
            print(f"  {error}")

    # Single values go through validate(); failures raise.
    try:
        await validator.validate("+33612345678", "OneOf[Email, PhoneNumber]")
        await validator.validate("06 12", "PhoneNumber[FR]", label="Phone")
    except ValidationError as e:
        print(f"\n{e.rule_name}: {e.message}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    anyio.run(main)
