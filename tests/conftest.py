# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Shared fixtures for rulechain tests."""

from __future__ import annotations

import pytest

from rulechain.registry import RuleRegistry, reset_default_registry
from rulechain.validator import Validator, reset_default_validator


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def registry() -> RuleRegistry:
    """Private registry with the built-in rules."""
    return RuleRegistry.with_builtins()


@pytest.fixture
def validator(registry) -> Validator:
    """Validator bound to the private registry."""
    return Validator(registry)


@pytest.fixture(autouse=True)
def _fresh_defaults():
    """Rebuild the process-wide registry/validator around each test."""
    reset_default_registry()
    reset_default_validator()
    yield
    reset_default_registry()
    reset_default_validator()
