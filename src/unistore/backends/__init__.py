"""Storage backends."""

from __future__ import annotations

from .base import STREAM_MODES, StorageBackend
from .local import LocalBackend
from .memory import MemoryBackend

__all__ = [
    "STREAM_MODES",
    "StorageBackend",
    "LocalBackend",
    "MemoryBackend",
]
