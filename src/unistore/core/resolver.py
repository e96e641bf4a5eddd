"""Collision resolution for create/rename/move/copy targets."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from unistore.errors import AlreadyExistsError
from unistore.models import CollisionPolicy, ExistenceState
from unistore.util.path import combine, split_name

from .cancellation import CancellationToken, check_cancelled
from .validators import coerce_policy, require_name

logger = logging.getLogger(__name__)

Probe = Callable[[str], Awaitable[ExistenceState]]
Replace = Callable[[str], Awaitable[Any]]
Numbering = Callable[[str, int], str]


def append_counter(name: str, counter: int) -> str:
    """'Sub' -> 'Sub (2)'; 'a.txt' -> 'a.txt (2)'."""
    return f"{name} ({counter})"


def insert_counter(name: str, counter: int) -> str:
    """'a.txt' -> 'a (2).txt'; extensionless names behave like append_counter."""
    stem, ext = split_name(name)
    return f"{stem} ({counter}){ext}"


@dataclass(frozen=True)
class ResolvedName:
    """
    Outcome of a successful resolution.

    Attributes:
        name: Final leaf name to use.
        path: combine(parent_path, name).
        existing: True when OPEN_IF_EXISTS accepted an existing entity as-is.
        replaced: True when REPLACE_EXISTING deleted the previous occupant.
    """

    name: str
    path: str
    existing: bool = False
    replaced: bool = False


async def resolve_name(
    parent_path: str,
    desired_name: str,
    policy: CollisionPolicy | str,
    probe: Probe,
    *,
    expected: ExistenceState,
    replace: Optional[Replace] = None,
    numbering: Numbering = append_counter,
    allow_open: bool = False,
    cancel: Optional[CancellationToken] = None,
) -> ResolvedName:
    """
    Decide which name to actually use in parent_path.

    Loop:
        1. Check cancellation (every iteration).
        2. candidate = desired_name, or numbering(desired_name, counter) once
           counter > 1.
        3. Probe combine(parent_path, candidate).
        4. NOT_FOUND -> accept. Otherwise branch on policy:
             GENERATE_UNIQUE_NAME -> counter += 1, retry (any occupant counts)
             occupant of the other kind -> AlreadyExistsError
             FAIL_IF_EXISTS -> AlreadyExistsError
             REPLACE_EXISTING -> await replace(path), accept
             OPEN_IF_EXISTS -> accept the existing entity

    The counter is unbounded; a probe that always reports an occupant is only
    stopped by cancellation.

    Args:
        expected: The kind of entity this operation works on (FILE_EXISTS or
            FOLDER_EXISTS). Only an occupant of this kind may be replaced or
            opened.
        replace: Deletes the occupant at a path. Required for REPLACE_EXISTING.
    """
    require_name(desired_name, "desired_name")
    mode = coerce_policy(policy, allow_open=allow_open)
    if mode is CollisionPolicy.REPLACE_EXISTING and replace is None:
        raise ValueError("replace callback is required for REPLACE_EXISTING")

    counter = 1
    while True:
        check_cancelled(cancel)

        candidate = desired_name if counter == 1 else numbering(desired_name, counter)
        path = combine(parent_path, candidate)
        state = await probe(path)

        if state is ExistenceState.NOT_FOUND:
            logger.debug("resolved %r -> %s (policy=%s)", desired_name, path, mode.value)
            return ResolvedName(name=candidate, path=path)

        if mode is CollisionPolicy.GENERATE_UNIQUE_NAME:
            counter += 1
            continue

        if state is not expected:
            raise AlreadyExistsError(
                "Target name is occupied by an item of another kind",
                details={"path": path, "existing": state.value},
            )

        if mode is CollisionPolicy.FAIL_IF_EXISTS:
            raise AlreadyExistsError(
                f"Item already exists: {path}",
                details={"path": path},
            )

        if mode is CollisionPolicy.REPLACE_EXISTING:
            logger.debug("replacing existing item at %s", path)
            await replace(path)  # type: ignore[misc]
            return ResolvedName(name=candidate, path=path, replaced=True)

        return ResolvedName(name=candidate, path=path, existing=True)
