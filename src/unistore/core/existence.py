"""Existence probes and item identity."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from unistore.models import ExistenceState
from unistore.util.path import combine

from .cancellation import CancellationToken
from .dispatch import run_off_main_thread

if TYPE_CHECKING:
    from unistore.backends.base import StorageBackend


async def probe(
    backend: StorageBackend,
    path: str,
    *,
    cancel: Optional[CancellationToken] = None,
) -> ExistenceState:
    """
    Ask the backend what occupies path right now.

    Never cached: every call is a fresh backend query, because another
    process may change the store between two probes.
    """
    return await run_off_main_thread(backend.exists, path, cancel=cancel)


async def probe_child(
    backend: StorageBackend,
    parent_path: str,
    name: str,
    *,
    cancel: Optional[CancellationToken] = None,
) -> ExistenceState:
    return await probe(backend, combine(parent_path, name), cancel=cancel)


def same_item(a: object, b: object) -> bool:
    """Two items are the same entity iff their paths are equal strings."""
    path_a = getattr(a, "path", None)
    path_b = getattr(b, "path", None)
    if not isinstance(path_a, str) or not isinstance(path_b, str):
        return False
    return path_a == path_b
