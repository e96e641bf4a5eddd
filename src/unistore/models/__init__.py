"""Public model exports for unistore."""

from __future__ import annotations

from .enums import CollisionPolicy, ExistenceState, FileAccess
from .properties import BasicProperties

__all__ = [
    "CollisionPolicy",
    "ExistenceState",
    "FileAccess",
    "BasicProperties",
]
