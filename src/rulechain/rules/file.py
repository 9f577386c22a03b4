# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""File rules.

A value is file-like when it is one of:
    - bytes / bytearray (size only)
    - an os.PathLike (name from the path, size from the file if it exists)
    - a mapping or object exposing any of ``name``/``filename``/``originalname``,
      ``size`` and ``content_type``/``mimetype``/``type``

Missing content types are guessed from the file name. Unknown sizes count as 0.
Sizes are in bytes.
"""

from __future__ import annotations

import mimetypes
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ._utils import builtin, display_number, invalid_params, number_param

_NAME_KEYS = ("name", "filename", "originalname")
_TYPE_KEYS = ("content_type", "mimetype", "type")

IMAGE_TYPES = frozenset(
    {
        "image/jpeg",
        "image/jpg",
        "image/png",
        "image/gif",
        "image/webp",
        "image/svg+xml",
        "image/bmp",
    }
)


@dataclass(frozen=True, slots=True)
class FileInfo:
    name: str | None = None
    size: int | None = None
    content_type: str | None = None

    @property
    def extension(self) -> str:
        if not self.name or "." not in self.name:
            return ""
        return self.name.rsplit(".", 1)[-1].lower()


def _lookup(value: Any, keys: tuple[str, ...], kind: type) -> Any:
    for key in keys:
        found = value.get(key) if isinstance(value, Mapping) else getattr(value, key, None)
        if isinstance(found, kind) and not isinstance(found, bool):
            return found
    return None


def file_info(value: Any) -> FileInfo | None:
    """Describe a file-like value, or None if it is not one."""
    if value is None or isinstance(value, (str, bool, int, float)):
        return None
    if isinstance(value, (bytes, bytearray)):
        return FileInfo(size=len(value))
    if isinstance(value, os.PathLike):
        path = Path(value)
        size = path.stat().st_size if path.is_file() else None
        return FileInfo(path.name, size, mimetypes.guess_type(path.name)[0])

    name = _lookup(value, _NAME_KEYS, str)
    size = _lookup(value, ("size",), int)
    content_type = _lookup(value, _TYPE_KEYS, str)
    if name is None and size is None and content_type is None:
        return None
    if name is not None:
        name = os.path.basename(name)
        if content_type is None:
            content_type = mimetypes.guess_type(name)[0]
    return FileInfo(name, size, content_type)


@builtin("File")
def file(ctx):
    return file_info(ctx.value) is not None or ctx.translate("validator.file")


@builtin("FileSize")
def file_size(ctx):
    """FileSize[max]: at most max bytes."""
    limit = number_param(ctx, 0, minimum=0)
    info = file_info(ctx.value)
    message = ctx.translate("validator.fileSize", maxSize=display_number(limit))
    if info is None:
        return message
    return (info.size or 0) <= limit or message


@builtin("MinFileSize")
def min_file_size(ctx):
    """MinFileSize[min]: at least min bytes."""
    limit = number_param(ctx, 0, minimum=0)
    info = file_info(ctx.value)
    message = ctx.translate("validator.minFileSize", minSize=display_number(limit))
    if info is None:
        return message
    return (info.size or 0) >= limit or message


@builtin("FileType")
def file_type(ctx):
    """FileType[image, application/pdf]: exact type or major type prefix."""
    allowed = [str(p).strip().lower() for p in ctx.params if p not in (None, "")]
    if not allowed:
        raise invalid_params(ctx)
    info = file_info(ctx.value)
    actual = (info.content_type or "").lower() if info else ""
    valid = bool(actual) and any(
        actual == t or actual.startswith(t + "/") for t in allowed
    )
    return valid or ctx.translate(
        "validator.fileType", allowedTypes=", ".join(allowed), actualType=actual
    )


@builtin("FileExtension")
def file_extension(ctx):
    """FileExtension[pdf, .docx]: leading dots optional, case-insensitive."""
    allowed = [str(p).strip().lower().lstrip(".") for p in ctx.params if p not in (None, "")]
    if not allowed:
        raise invalid_params(ctx)
    info = file_info(ctx.value)
    actual = info.extension if info else ""
    return (bool(actual) and actual in allowed) or ctx.translate(
        "validator.fileExtension",
        allowedExtensions=", ".join(allowed),
        actualExtension=actual,
    )


@builtin("Image")
def image(ctx):
    info = file_info(ctx.value)
    actual = (info.content_type or "").lower() if info else ""
    return actual in IMAGE_TYPES or ctx.translate("validator.image", actualType=actual)
