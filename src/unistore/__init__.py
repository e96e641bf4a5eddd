"""unistore public API."""

from __future__ import annotations

import logging

from unistore.backends import LocalBackend, MemoryBackend, StorageBackend
from unistore.backends.drive import AuthInfo, DriveBackend, GoogleDriveController, RetryPolicy
from unistore.core import CancellationToken
from unistore.errors import (
    AlreadyExistsError,
    AuthError,
    BackendError,
    ConflictError,
    InvalidArgumentError,
    NetworkError,
    NotFoundError,
    OperationCancelledError,
    PermissionDeniedError,
    ProtectedRootError,
    QuotaExceededError,
    RateLimitError,
    UniStoreError,
)
from unistore.filesystem import FileSystem
from unistore.items import StorageFile, StorageFolder, StorageItem
from unistore.models import BasicProperties, CollisionPolicy, ExistenceState, FileAccess

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # High-level
    "FileSystem",
    "StorageItem",
    "StorageFile",
    "StorageFolder",
    "CancellationToken",
    # Models
    "CollisionPolicy",
    "ExistenceState",
    "FileAccess",
    "BasicProperties",
    # Backends
    "StorageBackend",
    "LocalBackend",
    "MemoryBackend",
    "DriveBackend",
    "GoogleDriveController",
    "RetryPolicy",
    "AuthInfo",
    # Errors
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
]
