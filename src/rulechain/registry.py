# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Rule registry: maps rule names to rule functions.

Registries are plain objects so independent validators (e.g. one per test)
do not interfere. A lazily-built default registry, pre-loaded with the
built-in rules, backs the module-level helpers.

Rule function signature: (ctx: RuleContext) -> bool | str | Awaitable[bool | str]

Example:
    registry = RuleRegistry.with_builtins()

    @registry.rule("Even")
    def even(ctx):
        return ctx.value % 2 == 0 or "Value must be even"

    registry.get("even")  # case-insensitive fallback
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from .errors import ConfigurationError

__all__ = (
    "RuleFunction",
    "RuleRegistry",
    "get_default_registry",
    "register_rule",
    "reset_default_registry",
)

logger = logging.getLogger(__name__)

RuleFunction = Callable[..., Any]
"""Rule signature: (ctx) -> True | False | message, sync or async."""


class RuleRegistry:
    """Map rule names to rule functions. Last registration for a name wins.

    Args:
        rules: Initial name -> function mapping.
        strict: Raise ConfigurationError on invalid registrations instead of
            ignoring them.
        case_sensitive: Disable the case-insensitive lookup fallback.
    """

    def __init__(
        self,
        rules: Mapping[str, RuleFunction] | None = None,
        *,
        strict: bool = False,
        case_sensitive: bool = False,
    ):
        self.strict = strict
        self.case_sensitive = case_sensitive
        self._rules: dict[str, RuleFunction] = {}
        self._folded: dict[str, str] = {}
        if rules:
            self.update(rules)

    @classmethod
    def with_builtins(cls, **kwargs: Any) -> RuleRegistry:
        """Create a registry pre-loaded with the built-in rule catalog."""
        from .rules import BUILTIN_RULES

        return cls(BUILTIN_RULES, **kwargs)

    def register(self, name: str, fn: RuleFunction) -> None:
        """Register fn under name, replacing any previous entry.

        Invalid names (non-string or blank) and non-callables are ignored,
        or raise ConfigurationError when the registry is strict.
        """
        if not isinstance(name, str) or not name.strip() or not callable(fn):
            if self.strict:
                raise ConfigurationError(
                    "Rule registration requires a non-empty name and a callable",
                    details={"name": repr(name), "handler": type(fn).__name__},
                )
            logger.warning("Ignoring invalid rule registration: name=%r", name)
            return

        name = name.strip()
        if name in self._rules:
            logger.debug("Overriding rule '%s'", name)
        self._rules[name] = fn
        self._folded[name.casefold()] = name

    def rule(self, name: str, *aliases: str) -> Callable[[RuleFunction], RuleFunction]:
        """Decorator registering a function under name and any aliases."""

        def decorator(fn: RuleFunction) -> RuleFunction:
            for n in (name, *aliases):
                self.register(n, fn)
            return fn

        return decorator

    def get(self, name: str) -> RuleFunction | None:
        """Get rule by name: exact match, then case-insensitive. None if absent."""
        if not isinstance(name, str) or not name:
            return None
        fn = self._rules.get(name)
        if fn is not None or self.case_sensitive:
            return fn
        canonical = self._folded.get(name.casefold())
        return self._rules.get(canonical) if canonical is not None else None

    def has(self, name: str) -> bool:
        return self.get(name) is not None

    def update(self, rules: Mapping[str, RuleFunction]) -> None:
        """Register every entry of a mapping, in order."""
        for name, fn in rules.items():
            self.register(name, fn)

    def copy(self) -> RuleRegistry:
        """Independent registry with the same entries and settings."""
        return RuleRegistry(
            self._rules, strict=self.strict, case_sensitive=self.case_sensitive
        )

    def clear(self) -> None:
        self._rules.clear()
        self._folded.clear()

    def list_names(self) -> list[str]:
        """Return all registered rule names in registration order."""
        return list(self._rules)

    def __contains__(self, name: str) -> bool:
        return self.has(name)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"RuleRegistry(rules={len(self)})"


_default_registry: RuleRegistry | None = None


def get_default_registry() -> RuleRegistry:
    """Process-wide registry, created on first use with the built-in rules."""
    global _default_registry
    if _default_registry is None:
        _default_registry = RuleRegistry.with_builtins()
    return _default_registry


def reset_default_registry() -> None:
    """Drop the default registry; the next access rebuilds it from built-ins."""
    global _default_registry
    _default_registry = None


def register_rule(name: str, fn: RuleFunction | None = None):
    """Register into the default registry. Usable as ``@register_rule("Name")``."""
    registry = get_default_registry()
    if fn is None:
        return registry.rule(name)
    registry.register(name, fn)
    return fn
