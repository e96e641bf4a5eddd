"""Google Drive backend (opaque-handle storage)."""

from __future__ import annotations

from .auth import AuthInfo, DriveAuth
from .backend import DriveBackend
from .controller import GoogleDriveController, RetryPolicy
from .models import DriveFileInfo

__all__ = [
    "AuthInfo",
    "DriveAuth",
    "DriveBackend",
    "DriveFileInfo",
    "GoogleDriveController",
    "RetryPolicy",
]
