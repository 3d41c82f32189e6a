from .base import (
    AppError,
    AuthenticationError,
    AuthorizationError,
    AuthReason,
    ConflictError,
    DomainError,
    InfrastructureError,
    MutationTimeoutError,
    NotFoundError,
    ValidationError,
)
from .http import handle_app_error, register_error_handler

__all__ = [
    "AppError",
    "AuthReason",
    "AuthenticationError",
    "AuthorizationError",
    "ConflictError",
    "DomainError",
    "InfrastructureError",
    "MutationTimeoutError",
    "NotFoundError",
    "ValidationError",
    "handle_app_error",
    "register_error_handler",
]
