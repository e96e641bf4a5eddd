"""Storage items (files and folders)."""

from __future__ import annotations

from .file import StorageFile
from .folder import StorageFolder
from .item import StorageItem

__all__ = [
    "StorageItem",
    "StorageFile",
    "StorageFolder",
]
