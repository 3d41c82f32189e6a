# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from enum import Enum


class ValidationErrorType(str, Enum):
    MISSING = "missing"
    EMAIL_INVALID = "email_invalid"
    NAME_INVALID = "name_invalid"
    HANDLE_INVALID_CHARS = "handle_invalid_chars"
    PASSWORD_TOO_SHORT = "password_too_short"
    PASSWORD_NO_LETTER = "password_no_letter"
    PASSWORD_NO_DIGIT = "password_no_digit"
    URL_INVALID = "url_invalid"
