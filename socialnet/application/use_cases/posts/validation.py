# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from socialnet.shared.errors.base import ValidationError


def clean_text(value: str | None, *, field: str, max_length: int) -> str:
    text = (value or "").strip()
    if not text:
        raise ValidationError.for_field(field, "empty")
    if len(text) > max_length:
        raise ValidationError.for_field(field, "too_long", max_length=max_length)
    return text
