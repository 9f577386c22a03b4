# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Rule expression parser.

Turns a rule expression into an ordered list of typed rule specifications.

Accepted inputs:
    fn                                  # a single callable
    "Required|MinLength[3]"             # pipe-delimited string
    ["Required", "MinLength[3]", fn]    # list of strings/callables
    {"MinLength": [3], "Required": []}  # mapping of name -> params

Grammar of one token:
    name                                # no params
    name[p1, p2, ...]                   # comma-separated raw string params

Separators and commas nested inside brackets do not split, so
"OneOf[Email, PhoneNumber|MinLength[8]]" is a single rule whose two params
are themselves rule expressions.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Literal

__all__ = (
    "InlineRule",
    "NamedRule",
    "RuleSpec",
    "format_rules",
    "parse_rule",
    "parse_rules",
    "split_top_level",
)

DEFAULT_SEPARATOR = "|"


@dataclass(frozen=True, slots=True)
class InlineRule:
    """A rule given directly as a callable."""

    fn: Callable[..., Any]
    kind: Literal["inline"] = field(default="inline", init=False)

    @property
    def name(self) -> None:
        return None

    @property
    def params(self) -> tuple[str, ...]:
        return ()

    def __str__(self) -> str:
        return getattr(self.fn, "__name__", repr(self.fn))


@dataclass(frozen=True, slots=True)
class NamedRule:
    """A rule referenced by registry name, with raw string params.

    Attributes:
        name: Registry key (e.g. "MinLength")
        params: Raw params in order (e.g. ("3",))
        raw: Original token text (e.g. "MinLength[3]")
    """

    name: str
    params: tuple[str, ...] = ()
    raw: str = ""
    kind: Literal["named"] = field(default="named", init=False)

    def __str__(self) -> str:
        if not self.params:
            return self.name
        return f"{self.name}[{','.join(self.params)}]"


RuleSpec = InlineRule | NamedRule


def split_top_level(text: str, sep: str) -> list[str]:
    """Split on ``sep`` only where it is not nested inside ``[...]``."""
    parts: list[str] = []
    depth = 0
    start = 0
    for i, ch in enumerate(text):
        if ch == "[":
            depth += 1
        elif ch == "]":
            depth = max(depth - 1, 0)
        elif ch == sep and depth == 0:
            parts.append(text[start:i])
            start = i + 1
    parts.append(text[start:])
    return parts


def _matching_bracket(text: str, open_idx: int) -> int:
    """Index of the ']' closing the '[' at open_idx, or -1 if unbalanced."""
    depth = 0
    for i in range(open_idx, len(text)):
        if text[i] == "[":
            depth += 1
        elif text[i] == "]":
            depth -= 1
            if depth == 0:
                return i
    return -1


def parse_rule(token: str, separator: str = DEFAULT_SEPARATOR) -> NamedRule | None:
    """Parse one rule token into a NamedRule.

    Returns None for tokens that are empty once whitespace and separator
    characters are stripped.
    """
    raw = token
    token = token.strip().strip(separator).strip()
    if not token:
        return None

    open_idx = token.find("[")
    if open_idx == -1:
        return NamedRule(name=token, raw=raw.strip())

    name = token[:open_idx].strip()
    if not name:
        return None

    close_idx = _matching_bracket(token, open_idx)
    # Unbalanced: take everything after '[' and drop stray closing brackets
    inner = (
        token[open_idx + 1 : close_idx]
        if close_idx != -1
        else token[open_idx + 1 :].rstrip("]")
    )
    params = tuple(p.strip() for p in split_top_level(inner, ",")) if inner.strip() else ()
    return NamedRule(name=name, params=params, raw=raw.strip())


def _params_from_mapping_value(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, (list, tuple)):
        return tuple(str(v) for v in value)
    return (str(value),)


def parse_rules(rules: Any, separator: str = DEFAULT_SEPARATOR) -> list[RuleSpec]:
    """Parse a rule expression into an ordered list of RuleSpec.

    Args:
        rules: Callable, string, mapping, or any other iterable of those.
        separator: Character splitting string expressions.

    Returns:
        Rule specifications in input order. Empty or blank input yields [].
        Elements of unsupported types are skipped.
    """
    if rules is None:
        return []
    if isinstance(rules, (InlineRule, NamedRule)):
        return [rules]
    if callable(rules):
        return [InlineRule(rules)]

    if isinstance(rules, (str, Mapping)) or not isinstance(rules, Iterable):
        items = [rules]
    else:
        # lists, tuples, sets, generators: walked in iteration order
        items = list(rules)
    specs: list[RuleSpec] = []

    for item in items:
        if isinstance(item, (InlineRule, NamedRule)):
            specs.append(item)
        elif isinstance(item, str):
            for token in split_top_level(item, separator):
                spec = parse_rule(token, separator)
                if spec is not None:
                    specs.append(spec)
        elif isinstance(item, Mapping):
            for name, value in item.items():
                if isinstance(name, str) and name.strip():
                    specs.append(
                        NamedRule(
                            name=name.strip(),
                            params=_params_from_mapping_value(value),
                            raw=name,
                        )
                    )
        elif callable(item):
            specs.append(InlineRule(item))

    return specs


def format_rules(specs: list[RuleSpec] | tuple[RuleSpec, ...], separator: str = DEFAULT_SEPARATOR) -> str:
    """Render specs back to the string grammar (inline rules by function name)."""
    return separator.join(str(s) for s in specs)
