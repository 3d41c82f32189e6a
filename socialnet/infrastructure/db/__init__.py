# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .models import Base
from .session import Database

__all__ = ["Base", "Database"]
