# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import (
    BEARER_PREFIX,
    Identity,
    IssuedToken,
    RejectionReason,
    SessionState,
    TokenClaims,
    TokenRejection,
    strip_bearer,
)

__all__ = [
    "BEARER_PREFIX",
    "Identity",
    "IssuedToken",
    "RejectionReason",
    "SessionState",
    "TokenClaims",
    "TokenRejection",
    "strip_bearer",
]
