"""Path helpers for store-relative item paths.

Every item path is an absolute, separator-normalized string rooted at the
storage root (``/`` for the root itself). These helpers are pure: they never
touch a backend.
"""

from __future__ import annotations

import posixpath
from typing import Optional

SEP: str = "/"


def normalize(path: str, sep: str = SEP) -> str:
    """Collapse adjacent separators, drop a trailing one and force a leading one."""
    if not isinstance(path, str):
        raise TypeError("path must be a str")

    parts = [p for p in path.split(sep) if p]
    return sep + sep.join(parts)


def combine(base: str, leaf: str, sep: str = SEP) -> str:
    """
    Join a base path and a leaf fragment.

    Rules:
        - An absolute leaf (starting with sep) replaces base entirely.
        - Adjacent separators collapse; a trailing separator on base is
          redundant and stripped.
        - No existence checks are performed.
    """
    if leaf.startswith(sep):
        return normalize(leaf, sep)
    if not leaf:
        return normalize(base, sep)
    return normalize(base.rstrip(sep) + sep + leaf, sep)


def is_root(path: str, sep: str = SEP) -> bool:
    return normalize(path, sep) == sep


def parent_of(path: str, sep: str = SEP) -> Optional[str]:
    """Return the parent path, or None for the root."""
    norm = normalize(path, sep)
    if norm == sep:
        return None
    head = norm.rsplit(sep, 1)[0]
    return head or sep


def name_of(path: str, sep: str = SEP) -> str:
    """Return the last segment of path ("" for the root)."""
    return normalize(path, sep).rsplit(sep, 1)[-1]


def split_name(name: str) -> tuple[str, str]:
    """
    Split a leaf name into (stem, extension).

    Leading-dot names such as ".bashrc" have no extension.
    """
    return posixpath.splitext(name)


def is_within(path: str, ancestor: str, sep: str = SEP) -> bool:
    """Return True if path equals ancestor or lies below it."""
    p = normalize(path, sep)
    a = normalize(ancestor, sep)
    if a == sep:
        return True
    return p == a or p.startswith(a + sep)
