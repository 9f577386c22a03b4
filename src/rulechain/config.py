# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Validator configuration."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = ("ValidatorConfig",)


class ValidatorConfig(BaseModel):
    """Configuration for a Validator instance.

    Attributes:
        separator: Character splitting rule expressions ("required|email").
        rule_timeout: Optional per-rule timeout in seconds. None disables it.
        honor_skip_markers: Short-circuit to success when the rule list names
            Nullable (value is None) or Empty (value is "").
        default_phone_region: Region used by phone rules when none is given.
    """

    model_config = ConfigDict(frozen=True)

    separator: str = Field(default="|", min_length=1, max_length=1)
    rule_timeout: float | None = Field(default=None, gt=0)
    honor_skip_markers: bool = Field(default=True)
    default_phone_region: str | None = Field(default=None)

    @field_validator("separator")
    @classmethod
    def _separator_not_bracket(cls, v: str) -> str:
        if v in "[],":
            raise ValueError(f"separator cannot be a grammar character: {v!r}")
        return v

    @field_validator("default_phone_region")
    @classmethod
    def _upper_region(cls, v: str | None) -> str | None:
        return v.upper() if v else None
