# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import Profile
from .exceptions import HandleTakenError, ProfileNotFoundError
from .repositories import ProfileRepository

__all__ = ["HandleTakenError", "Profile", "ProfileNotFoundError", "ProfileRepository"]
