"""Behaviour shared by files and folders."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Optional, TypeVar

from unistore.core import (
    CancellationToken,
    ResolvedName,
    check_cancelled,
    coerce_policy,
    probe,
    require_name,
    require_path,
    resolve_name,
    run_off_main_thread,
    same_item,
)
from unistore.core.resolver import Numbering
from unistore.errors import NotFoundError
from unistore.models import BasicProperties, CollisionPolicy, ExistenceState
from unistore.util.path import name_of, normalize, parent_of

if TYPE_CHECKING:
    from unistore.backends.base import StorageBackend
    from unistore.filesystem import FileSystem

    from .folder import StorageFolder

T = TypeVar("T")


class StorageItem:
    """
    A file or folder addressed by its store path.

    The item owns only its path. Rename/move re-point this object in place;
    an item whose entity was deleted or moved by someone else is simply stale
    and fails with NotFoundError on next use.

    Items compare equal iff their paths are equal. They are unhashable
    because their identity can change.
    """

    _kind: ExistenceState = ExistenceState.NOT_FOUND

    def __init__(self, path: str, fs: FileSystem) -> None:
        self._path = normalize(path)
        self._fs = fs

    @property
    def path(self) -> str:
        """The full store path, unique within the storage root."""
        return self._path

    @property
    def name(self) -> str:
        return name_of(self._path)

    @property
    def filesystem(self) -> FileSystem:
        return self._fs

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StorageItem):
            return NotImplemented
        return same_item(self, other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(path={self._path!r})"

    # ----------------------------
    # Shared operations
    # ----------------------------
    async def get_parent(self, *, cancel: Optional[CancellationToken] = None) -> StorageFolder:
        """Resolve the containing folder through the storage root."""
        parent = parent_of(self._path)
        if parent is None:
            raise NotFoundError("The root folder has no parent", details={"path": self._path})
        return await self._fs.get_folder_from_path(parent, cancel=cancel)

    async def get_basic_properties(
        self,
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> BasicProperties:
        await self._ensure_exists(cancel)
        return await self._call(self._backend.stat, self._path, cancel=cancel)

    # ----------------------------
    # Internals
    # ----------------------------
    @property
    def _backend(self) -> StorageBackend:
        return self._fs.backend

    async def _call(
        self,
        work: Callable[..., T],
        *args: Any,
        cancel: Optional[CancellationToken] = None,
    ) -> T:
        return await run_off_main_thread(work, *args, cancel=cancel)

    def _prober(self, cancel: Optional[CancellationToken]):
        async def _probe(path: str) -> ExistenceState:
            return await probe(self._backend, path, cancel=cancel)

        return _probe

    async def _ensure_exists(self, cancel: Optional[CancellationToken]) -> None:
        state = await probe(self._backend, self._path, cancel=cancel)
        if state is not self._kind:
            what = "Folder" if self._kind is ExistenceState.FOLDER_EXISTS else "File"
            raise NotFoundError(f"{what} does not exist: {self._path}", details={"path": self._path})

    def _destination(
        self,
        dest_folder_path: str,
        desired_new_name: Optional[str],
        policy: CollisionPolicy | str,
    ) -> tuple[str, str, CollisionPolicy]:
        """Normalized destination folder, the name this item takes there and the policy."""
        dest = normalize(require_path(dest_folder_path, "dest_folder_path"))
        target_name = require_name(desired_new_name or self.name, "desired_new_name")
        return dest, target_name, coerce_policy(policy, allow_open=False)

    async def _resolve_destination(
        self,
        dest: str,
        target_name: str,
        mode: CollisionPolicy,
        *,
        numbering: Numbering,
        replace: Callable[[str], Any],
        cancel: Optional[CancellationToken],
    ) -> ResolvedName:
        """
        Run the collision resolver inside the destination folder.

        The source must exist as this item's kind and the destination must
        exist as a folder. Callers deal with a target equal to this item's
        own path before getting here.
        """
        check_cancelled(cancel)
        await self._ensure_exists(cancel)
        dest_state = await probe(self._backend, dest, cancel=cancel)
        if dest_state is not ExistenceState.FOLDER_EXISTS:
            raise NotFoundError(f"Destination folder does not exist: {dest}", details={"path": dest})

        return await resolve_name(
            dest,
            target_name,
            mode,
            self._prober(cancel),
            expected=self._kind,
            replace=replace,
            numbering=numbering,
            allow_open=False,
            cancel=cancel,
        )
