"""Argument validation helpers shared by the item operations."""

from __future__ import annotations

from typing import Any

from unistore.errors import InvalidArgumentError
from unistore.models import CollisionPolicy, FileAccess
from unistore.util.path import SEP


def require_name(name: Any, what: str) -> str:
    """A leaf name: non-empty str, single segment, not '.' or '..'."""
    if not isinstance(name, str) or not name:
        raise InvalidArgumentError(f"{what} must be a non-empty string")
    if SEP in name or name in (".", ".."):
        raise InvalidArgumentError(
            f"{what} must be a single path segment",
            details={what: name},
        )
    return name


def require_path(path: Any, what: str) -> str:
    if not isinstance(path, str) or not path.strip():
        raise InvalidArgumentError(f"{what} must be a non-empty string")
    return path


def coerce_policy(policy: Any, *, allow_open: bool) -> CollisionPolicy:
    """
    Validate a collision policy.

    OPEN_IF_EXISTS is only meaningful for creation (allow_open=True).
    """
    try:
        value = CollisionPolicy(policy)
    except ValueError as exc:
        raise InvalidArgumentError(
            f"Unrecognized collision policy: {policy!r}",
            cause=exc,
        ) from exc

    if value is CollisionPolicy.OPEN_IF_EXISTS and not allow_open:
        raise InvalidArgumentError("OPEN_IF_EXISTS is only valid when creating items")
    return value


def coerce_access(access: Any) -> FileAccess:
    try:
        return FileAccess(access)
    except ValueError as exc:
        raise InvalidArgumentError(
            f"Unrecognized file access value: {access!r}",
            cause=exc,
        ) from exc
