# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .settings import (
    AppConfig,
    AuthConfig,
    ContentConfig,
    DatabaseConfig,
    SecurityConfig,
    StoreConfig,
    load_config,
)

__all__ = [
    "AppConfig",
    "AuthConfig",
    "ContentConfig",
    "DatabaseConfig",
    "SecurityConfig",
    "StoreConfig",
    "load_config",
]
