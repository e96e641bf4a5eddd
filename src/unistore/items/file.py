"""File items."""

from __future__ import annotations

import logging
from typing import BinaryIO, Optional

from unistore.core import CancellationToken, coerce_access, insert_counter, require_name
from unistore.errors import InvalidArgumentError
from unistore.models import CollisionPolicy, ExistenceState, FileAccess
from unistore.util.path import combine, parent_of

from .item import StorageItem

logger = logging.getLogger(__name__)

LINE_TERMINATOR: str = "\n"
TEXT_ENCODING: str = "utf-8"


class StorageFile(StorageItem):
    """A file in a storage root."""

    _kind = ExistenceState.FILE_EXISTS

    async def open(
        self,
        access: FileAccess | str = FileAccess.READ,
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> BinaryIO:
        """
        Open the file as a binary stream.

        READ gives a read-only stream; READ_AND_WRITE a read/write stream at
        offset 0 without truncating. The caller owns (and must close) the
        stream.
        """
        mode = "rb" if coerce_access(access) is FileAccess.READ else "r+b"
        await self._ensure_exists(cancel)
        return await self._call(self._backend.open_stream, self._path, mode, cancel=cancel)

    async def delete(self, *, cancel: Optional[CancellationToken] = None) -> None:
        await self._ensure_exists(cancel)
        await self._call(self._backend.delete_file, self._path, cancel=cancel)
        logger.debug("deleted file %s", self._path)

    async def rename(
        self,
        new_name: str,
        policy: CollisionPolicy | str = CollisionPolicy.FAIL_IF_EXISTS,
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> None:
        """Rename within the current folder. Mutates this item in place."""
        require_name(new_name, "new_name")
        await self.move(parent_of(self._path) or "/", new_name, policy, cancel=cancel)

    async def move(
        self,
        dest_folder_path: str,
        desired_new_name: Optional[str] = None,
        policy: CollisionPolicy | str = CollisionPolicy.REPLACE_EXISTING,
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> None:
        """
        Move into dest_folder_path, keeping the name unless desired_new_name
        is given. Collisions are resolved in the destination folder and
        unique names are "stem (n).ext". Mutates this item in place.
        """
        dest, target_name, mode = self._destination(dest_folder_path, desired_new_name, policy)
        if combine(dest, target_name) == self._path:
            return

        resolved = await self._resolve_destination(
            dest,
            target_name,
            mode,
            numbering=insert_counter,
            replace=self._delete_file_at(cancel),
            cancel=cancel,
        )
        await self._call(self._backend.move_entity, self._path, resolved.path, cancel=cancel)
        logger.debug("moved file %s -> %s (replaced=%s)", self._path, resolved.path, resolved.replaced)
        self._path = resolved.path

    async def copy(
        self,
        dest_folder_path: str,
        desired_new_name: Optional[str] = None,
        policy: CollisionPolicy | str = CollisionPolicy.REPLACE_EXISTING,
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> StorageFile:
        """
        Copy into dest_folder_path and return a handle to the copy.

        This item keeps referring to the original file. Copying onto its own
        path is only allowed when a new name will be generated.
        """
        dest, target_name, mode = self._destination(dest_folder_path, desired_new_name, policy)
        if combine(dest, target_name) == self._path and mode is CollisionPolicy.REPLACE_EXISTING:
            raise InvalidArgumentError(
                "Cannot replace a file with a copy of itself",
                details={"path": self._path},
            )

        resolved = await self._resolve_destination(
            dest,
            target_name,
            mode,
            numbering=insert_counter,
            replace=self._delete_file_at(cancel),
            cancel=cancel,
        )
        await self._call(self._backend.copy_entity, self._path, resolved.path, cancel=cancel)
        logger.debug("copied file %s -> %s (replaced=%s)", self._path, resolved.path, resolved.replaced)
        return StorageFile(resolved.path, self._fs)

    async def append_text(
        self,
        text: str,
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> None:
        """Append text plus a line terminator (UTF-8), creating the file if needed."""
        if not isinstance(text, str):
            raise InvalidArgumentError("text must be a str")
        data = (text + LINE_TERMINATOR).encode(TEXT_ENCODING)
        await self._call(self._append_bytes, data, cancel=cancel)

    async def read_all_bytes(self, *, cancel: Optional[CancellationToken] = None) -> bytes:
        await self._ensure_exists(cancel)
        return await self._call(self._read_all, cancel=cancel)

    # ----------------------------
    # Internals
    # ----------------------------
    def _delete_file_at(self, cancel: Optional[CancellationToken]):
        async def _replace(path: str) -> None:
            await self._call(self._backend.delete_file, path, cancel=cancel)

        return _replace

    def _append_bytes(self, data: bytes) -> None:
        with self._backend.open_stream(self._path, "ab") as stream:
            stream.write(data)

    def _read_all(self) -> bytes:
        with self._backend.open_stream(self._path, "rb") as stream:
            return stream.read()
