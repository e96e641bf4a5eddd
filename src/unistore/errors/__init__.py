"""Public error exports for unistore."""

from __future__ import annotations

from .exceptions import (
    AlreadyExistsError,
    AuthError,
    BackendError,
    ConflictError,
    HttpErrorInfo,
    InvalidArgumentError,
    NetworkError,
    NotFoundError,
    OperationCancelledError,
    PermissionDeniedError,
    ProtectedRootError,
    QuotaExceededError,
    RateLimitError,
    UniStoreError,
    map_http_error,
    map_os_error,
)

__all__ = [
    "UniStoreError",
    "NotFoundError",
    "AlreadyExistsError",
    "OperationCancelledError",
    "InvalidArgumentError",
    "ProtectedRootError",
    "BackendError",
    "AuthError",
    "PermissionDeniedError",
    "ConflictError",
    "RateLimitError",
    "QuotaExceededError",
    "NetworkError",
    "HttpErrorInfo",
    "map_http_error",
    "map_os_error",
]
