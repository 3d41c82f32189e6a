# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .error_handler import configure_error_handling
from .rate_limit import rate_limit
from .request_logger import configure_request_logging

__all__ = ["configure_error_handling", "configure_request_logging", "rate_limit"]
