# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""rulechain Usage Examples

Form Patterns:
    signup_form     - Field rules, a custom registered rule, OneOf and
                      localized messages over a submitted mapping

Run any example:
    uv run python examples/signup_form.py
"""

__all__ = [
    "signup_form",
]
