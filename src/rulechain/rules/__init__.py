# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Built-in rule catalog.

Importing this package imports every rule module, which records its rules
in BUILTIN_RULES. Registries load the catalog through
RuleRegistry.with_builtins(); the default registry does so on first use.

Categories:
- presence: Required, NonNullString, Nullable, Empty, Sometimes
- string: String, Length, MinLength, MaxLength, StartsWithOneOf, EndsWithOneOf,
  FileName, Email, Url, PhoneNumber, EmailOrPhoneNumber
- numeric: Number, Integer, NumberBetween (Between), NumberLessThan,
  NumberLessThanOrEquals, NumberGreaterThan, NumberGreaterThanOrEquals,
  NumberEquals, NumberIsDifferentFrom, DecimalPlaces
- formats: UUID, JSON, Base64, HexColor, MACAddress, CreditCard, IP, Regex
- collection: Array, ArrayMinLength, ArrayMaxLength, ArrayLength,
  ArrayContains, ArrayUnique
- date: Date, DateAfter, DateBefore, DateBetween, DateEquals, FutureDate,
  PastDate
- file: File, FileSize, MinFileSize, FileType, FileExtension, Image
- composite: OneOf
"""

from rulechain.composite import OneOf

from . import collection, date, file, formats, numeric, presence, string
from ._utils import BUILTIN_RULES, builtin

builtin("OneOf")(OneOf)

__all__ = (
    "BUILTIN_RULES",
    "builtin",
    "collection",
    "date",
    "file",
    "formats",
    "numeric",
    "presence",
    "string",
)
