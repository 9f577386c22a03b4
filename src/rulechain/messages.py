# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Message resolution for validation failures.

The engine only depends on the ``Translator`` contract:
``translate(key, params) -> str``. ``MessageCatalog`` is the default
implementation: a nested per-locale dictionary with ``%{name}`` placeholders.

Example:
    catalog = MessageCatalog()
    catalog.register("fr", {"validator": {"required": "%{field} est obligatoire."}})
    catalog.locale = "fr"
    catalog.translate("validator.required", {"field": "Email"})
    # 'Email est obligatoire.'
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from typing import Any, Protocol, runtime_checkable

__all__ = (
    "DEFAULT_MESSAGES",
    "MessageCatalog",
    "Translator",
    "TranslatorLike",
    "interpolate",
    "resolve_translator",
)

_PLACEHOLDER = re.compile(r"%\{\s*(\w+)\s*\}")

DEFAULT_FIELD_LABEL = "This field"


@runtime_checkable
class Translator(Protocol):
    def translate(self, key: str, params: Mapping[str, Any]) -> str: ...


TranslatorLike = Translator | Callable[[str, Mapping[str, Any]], str]


DEFAULT_MESSAGES: dict[str, Any] = {
    "validator": {
        # engine
        "invalidRule": 'Invalid validation rule "%{rule}"',
        "invalidMessage": "%{field} is invalid",
        "invalidRuleParams": 'Invalid parameters for rule "%{rule}": %{params}',
        "ruleTimeout": 'Rule "%{rule}" did not complete within %{timeout} seconds',
        "oneOf": "%{field} must match one of: %{alternatives} (%{errors})",
        # presence
        "required": "%{field} is required",
        "isNonNullString": "%{field} must be a non-empty string",
        # string
        "string": "%{field} must be a string",
        "length": "%{field} must be exactly %{length} characters long",
        "lengthRange": "%{field} must be between %{minLength} and %{maxLength} characters long",
        "minLength": "%{field} must be at least %{minLength} characters long",
        "maxLength": "%{field} must be at most %{maxLength} characters long",
        "startsWithOneOf": "%{field} must start with one of: %{values}",
        "endsWithOneOf": "%{field} must end with one of: %{values}",
        "fileName": "%{field} must be a valid file name",
        "email": "%{field} must be a valid email address",
        "url": "%{field} must be a valid URL",
        "phoneNumber": "%{field} must be a valid phone number",
        "emailOrPhoneNumber": "%{field} must be a valid email address or phone number",
        # numeric
        "isNumber": "%{field} must be a number",
        "integer": "%{field} must be an integer",
        "numberBetween": "%{field} must be between %{min} and %{max}",
        "numberLessThan": "%{field} must be less than %{limit}",
        "numberLessThanOrEquals": "%{field} must be less than or equal to %{limit}",
        "numberGreaterThan": "%{field} must be greater than %{limit}",
        "numberGreaterThanOrEquals": "%{field} must be greater than or equal to %{limit}",
        "numberEquals": "%{field} must be equal to %{limit}",
        "numberIsDifferentFrom": "%{field} must be different from %{limit}",
        "decimalPlaces": "%{field} must have %{places} decimal places",
        # format
        "uuid": "%{field} must be a valid UUID",
        "json": "%{field} must be a valid JSON string",
        "base64": "%{field} must be a valid Base64 string",
        "hexColor": "%{field} must be a valid hexadecimal color",
        "ip": "%{field} must be a valid IP address",
        "macAddress": "%{field} must be a valid MAC address",
        "regex": "%{field} has an invalid format",
        "creditCard": "%{field} must be a valid credit card number",
        # collection
        "array": "%{field} must be a list",
        "arrayMinLength": "%{field} must contain at least %{minLength} items",
        "arrayMaxLength": "%{field} must contain at most %{maxLength} items",
        "arrayLength": "%{field} must contain exactly %{length} items",
        "arrayContains": "%{field} must contain: %{values}",
        "arrayUnique": "%{field} must not contain duplicate items",
        # date
        "date": "%{field} must be a valid date",
        "dateAfter": "%{field} must be after %{date}",
        "dateBefore": "%{field} must be before %{date}",
        "dateBetween": "%{field} must be between %{start} and %{end}",
        "dateEquals": "%{field} must be equal to %{date}",
        "futureDate": "%{field} must be a date in the future",
        "pastDate": "%{field} must be a date in the past",
        # file
        "file": "%{field} must be a file",
        "fileSize": "%{field} must not be larger than %{maxSize} bytes",
        "minFileSize": "%{field} must be at least %{minSize} bytes",
        "fileType": "%{field} must be a file of type: %{allowedTypes}",
        "fileExtension": "%{field} must have one of these extensions: %{allowedExtensions}",
        "image": "%{field} must be an image",
    }
}


def interpolate(template: str, params: Mapping[str, Any]) -> str:
    """Replace ``%{name}`` placeholders. Unknown names render as empty strings,
    except ``field`` which falls back to a generic label."""

    def _sub(match: re.Match[str]) -> str:
        name = match.group(1)
        value = params.get(name)
        if value is None:
            return DEFAULT_FIELD_LABEL if name == "field" else ""
        if isinstance(value, (list, tuple)):
            return ", ".join(str(v) for v in value)
        return str(value)

    return _PLACEHOLDER.sub(_sub, template)


def _deep_merge(base: dict[str, Any], other: Mapping[str, Any]) -> dict[str, Any]:
    for key, value in other.items():
        if isinstance(value, Mapping) and isinstance(base.get(key), dict):
            _deep_merge(base[key], value)
        elif isinstance(value, Mapping):
            base[key] = _deep_merge({}, value)
        else:
            base[key] = value
    return base


class MessageCatalog:
    """Per-locale message dictionary implementing ``Translator``.

    Keys are dotted paths into the nested dictionary ("validator.required").
    Lookup order: current locale, then fallback locale, then the key itself.
    """

    def __init__(
        self,
        messages: Mapping[str, Any] | None = None,
        *,
        locale: str = "en",
        fallback_locale: str = "en",
    ):
        self.locale = locale
        self.fallback_locale = fallback_locale
        self._catalogs: dict[str, dict[str, Any]] = {}
        self.register(fallback_locale, DEFAULT_MESSAGES)
        if messages:
            self.register(locale, messages)

    def register(self, locale: str, messages: Mapping[str, Any]) -> None:
        """Deep-merge messages into a locale's catalog."""
        catalog = self._catalogs.setdefault(locale, {})
        _deep_merge(catalog, messages)

    def locales(self) -> list[str]:
        return list(self._catalogs)

    def lookup(self, key: str, locale: str | None = None) -> str | None:
        node: Any = self._catalogs.get(locale or self.locale)
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return None
            node = node[part]
        return node if isinstance(node, str) else None

    def translate(self, key: str, params: Mapping[str, Any] | None = None) -> str:
        template = self.lookup(key) or self.lookup(key, self.fallback_locale)
        if template is None:
            return key
        return interpolate(template, params or {})

    def __call__(self, key: str, params: Mapping[str, Any] | None = None) -> str:
        return self.translate(key, params)

    def __repr__(self) -> str:
        return f"MessageCatalog(locale={self.locale!r}, locales={self.locales()})"


def resolve_translator(
    translator: TranslatorLike | None,
) -> Callable[[str, Mapping[str, Any]], str]:
    """Normalize a Translator object or plain callable to a callable."""
    if translator is None:
        return MessageCatalog().translate
    if isinstance(translator, Translator):
        return translator.translate
    if callable(translator):
        return translator
    raise TypeError(
        f"translator must implement translate(key, params) or be callable, "
        f"got {type(translator).__name__}"
    )
