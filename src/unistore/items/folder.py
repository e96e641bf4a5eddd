"""Folder items."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Awaitable, BinaryIO, Callable, Optional

from unistore.core import (
    CancellationToken,
    append_counter,
    probe_child,
    require_name,
    resolve_name,
)
from unistore.errors import InvalidArgumentError, NotFoundError, ProtectedRootError
from unistore.models import CollisionPolicy, ExistenceState, FileAccess
from unistore.util.path import combine, is_within, parent_of

from .file import StorageFile
from .item import StorageItem

if TYPE_CHECKING:
    from unistore.filesystem import FileSystem

logger = logging.getLogger(__name__)


class StorageFolder(StorageItem):
    """
    A folder in a storage root.

    The root folder handed out by FileSystem.root_folder is created with
    can_delete=False; delete() and move() refuse it before any I/O.
    """

    _kind = ExistenceState.FOLDER_EXISTS

    def __init__(self, path: str, fs: FileSystem, *, can_delete: bool = True) -> None:
        super().__init__(path, fs)
        self._can_delete = can_delete

    @property
    def can_delete(self) -> bool:
        return self._can_delete

    # ----------------------------
    # Files
    # ----------------------------
    async def create_file(
        self,
        desired_name: str,
        policy: CollisionPolicy | str = CollisionPolicy.FAIL_IF_EXISTS,
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> StorageFile:
        """
        Create an empty file in this folder.

        GENERATE_UNIQUE_NAME yields "name", "name (2)", "name (3)", ...;
        OPEN_IF_EXISTS returns the present file without touching it.
        """
        require_name(desired_name, "desired_name")
        await self._ensure_exists(cancel)

        resolved = await resolve_name(
            self._path,
            desired_name,
            policy,
            self._prober(cancel),
            expected=ExistenceState.FILE_EXISTS,
            replace=self._delete_at(self._backend.delete_file, cancel),
            numbering=append_counter,
            allow_open=True,
            cancel=cancel,
        )
        if not resolved.existing:
            await self._call(self._backend.create_empty_file, resolved.path, cancel=cancel)
            logger.debug("created file %s", resolved.path)
        return StorageFile(resolved.path, self._fs)

    async def get_file(self, name: str, *, cancel: Optional[CancellationToken] = None) -> StorageFile:
        require_name(name, "name")
        state = await probe_child(self._backend, self._path, name, cancel=cancel)
        if state is not ExistenceState.FILE_EXISTS:
            path = combine(self._path, name)
            raise NotFoundError(f"File does not exist: {path}", details={"path": path})
        return StorageFile(combine(self._path, name), self._fs)

    async def list_files(self, *, cancel: Optional[CancellationToken] = None) -> list[StorageFile]:
        names = await self._call(self._backend.list_file_names, self._path, cancel=cancel)
        return [StorageFile(combine(self._path, n), self._fs) for n in sorted(names)]

    async def open_file(
        self,
        name: str,
        access: FileAccess | str = FileAccess.READ,
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> BinaryIO:
        file = await self.get_file(name, cancel=cancel)
        return await file.open(access, cancel=cancel)

    # ----------------------------
    # Folders
    # ----------------------------
    async def create_folder(
        self,
        desired_name: str,
        policy: CollisionPolicy | str = CollisionPolicy.FAIL_IF_EXISTS,
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> StorageFolder:
        """Create a sub-folder. REPLACE_EXISTING removes the old tree first."""
        require_name(desired_name, "desired_name")
        await self._ensure_exists(cancel)

        resolved = await resolve_name(
            self._path,
            desired_name,
            policy,
            self._prober(cancel),
            expected=ExistenceState.FOLDER_EXISTS,
            replace=self._delete_at(self._backend.delete_folder_recursive, cancel),
            numbering=append_counter,
            allow_open=True,
            cancel=cancel,
        )
        if not resolved.existing:
            await self._call(self._backend.create_folder, resolved.path, cancel=cancel)
            logger.debug("created folder %s", resolved.path)
        return StorageFolder(resolved.path, self._fs)

    async def get_folder(
        self,
        name: str,
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> StorageFolder:
        require_name(name, "name")
        state = await probe_child(self._backend, self._path, name, cancel=cancel)
        if state is not ExistenceState.FOLDER_EXISTS:
            path = combine(self._path, name)
            raise NotFoundError(f"Folder does not exist: {path}", details={"path": path})
        return StorageFolder(combine(self._path, name), self._fs)

    async def list_folders(
        self,
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> list[StorageFolder]:
        names = await self._call(self._backend.list_folder_names, self._path, cancel=cancel)
        return [StorageFolder(combine(self._path, n), self._fs) for n in sorted(names)]

    async def list_items(self, *, cancel: Optional[CancellationToken] = None) -> list[StorageItem]:
        """Folders first, then files."""
        items: list[StorageItem] = []
        items.extend(await self.list_folders(cancel=cancel))
        items.extend(await self.list_files(cancel=cancel))
        return items

    async def check_exists(
        self,
        name: str,
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> ExistenceState:
        require_name(name, "name")
        return await probe_child(self._backend, self._path, name, cancel=cancel)

    # ----------------------------
    # Self
    # ----------------------------
    async def delete(self, *, cancel: Optional[CancellationToken] = None) -> None:
        """Delete this folder and everything below it."""
        self._refuse_if_protected("delete")
        await self._ensure_exists(cancel)
        await self._call(self._backend.delete_folder_recursive, self._path, cancel=cancel)
        logger.debug("deleted folder %s", self._path)

    async def rename(
        self,
        new_name: str,
        policy: CollisionPolicy | str = CollisionPolicy.FAIL_IF_EXISTS,
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> None:
        self._refuse_if_protected("rename")
        require_name(new_name, "new_name")
        await self.move(parent_of(self._path) or "/", new_name, policy, cancel=cancel)

    async def move(
        self,
        dest_folder_path: str,
        desired_new_name: Optional[str] = None,
        policy: CollisionPolicy | str = CollisionPolicy.FAIL_IF_EXISTS,
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> None:
        """
        Move this folder (with its contents) into dest_folder_path.

        Unique names are "name (n)". A folder cannot be moved into itself or
        one of its descendants, nor replace one of its ancestors. Mutates this
        item in place.
        """
        self._refuse_if_protected("move")
        dest, target_name, mode = self._destination(dest_folder_path, desired_new_name, policy)
        target = combine(dest, target_name)
        if target == self._path:
            return
        if is_within(dest, self._path):
            raise InvalidArgumentError(
                "Cannot move a folder into itself",
                details={"path": self._path, "destination": dest},
            )
        if mode is CollisionPolicy.REPLACE_EXISTING and is_within(self._path, target):
            raise InvalidArgumentError(
                "Cannot replace a folder that contains the folder being moved",
                details={"path": self._path, "target": target},
            )

        resolved = await self._resolve_destination(
            dest,
            target_name,
            mode,
            numbering=append_counter,
            replace=self._delete_at(self._backend.delete_folder_recursive, cancel),
            cancel=cancel,
        )
        await self._call(self._backend.move_entity, self._path, resolved.path, cancel=cancel)
        logger.debug("moved folder %s -> %s (replaced=%s)", self._path, resolved.path, resolved.replaced)
        self._path = resolved.path

    # ----------------------------
    # Internals
    # ----------------------------
    def _refuse_if_protected(self, action: str) -> None:
        if not self._can_delete:
            raise ProtectedRootError(
                f"Cannot {action} the root folder",
                details={"path": self._path},
            )

    def _delete_at(
        self,
        primitive: Callable[[str], None],
        cancel: Optional[CancellationToken],
    ) -> Callable[[str], Awaitable[None]]:
        async def _replace(path: str) -> None:
            await self._call(primitive, path, cancel=cancel)

        return _replace
