"""FileSystem: the storage-root resolver handing out items."""

from __future__ import annotations

import os
from typing import Optional, Sequence

from unistore.backends import LocalBackend, MemoryBackend, StorageBackend
from unistore.backends.drive import AuthInfo, DriveBackend, GoogleDriveController
from unistore.core import CancellationToken, probe, require_path
from unistore.errors import InvalidArgumentError, NotFoundError
from unistore.items import StorageFile, StorageFolder
from unistore.models import ExistenceState
from unistore.util.path import SEP, is_root, normalize


class FileSystem:
    """
    Entry point bound to one storage root.

    The root folder is protected: it cannot be deleted, renamed or moved.
    Every other folder or file is reached through it or through the
    path lookups below.
    """

    def __init__(self, backend: StorageBackend) -> None:
        if not isinstance(backend, StorageBackend):
            raise InvalidArgumentError("backend must be a StorageBackend")
        self._backend = backend

    @classmethod
    def local(cls, root_dir: str | os.PathLike[str], *, create: bool = False) -> "FileSystem":
        """Store rooted at a directory on the local filesystem."""
        return cls(LocalBackend(root_dir, create=create))

    @classmethod
    def memory(cls) -> "FileSystem":
        """Fresh, empty in-process store."""
        return cls(MemoryBackend())

    @classmethod
    def drive(
        cls,
        auth_info: AuthInfo,
        root_id: str,
        *,
        scopes: Optional[Sequence[str]] = None,
        supports_all_drives: bool = True,
    ) -> "FileSystem":
        """Store rooted at a Google Drive folder id."""
        controller = GoogleDriveController(
            auth_info,
            scopes=scopes,
            supports_all_drives=supports_all_drives,
        )
        return cls(DriveBackend(controller, root_id))

    @classmethod
    def from_drive_controller(
        cls,
        controller: GoogleDriveController,
        root_id: str,
    ) -> "FileSystem":
        """Create a Drive-backed store with an injected controller (useful for tests)."""
        return cls(DriveBackend(controller, root_id))

    @property
    def backend(self) -> StorageBackend:
        return self._backend

    @property
    def root_folder(self) -> StorageFolder:
        return StorageFolder(SEP, self, can_delete=False)

    def __repr__(self) -> str:
        return f"FileSystem(backend={self._backend!r})"

    async def get_folder_from_path(
        self,
        path: str,
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> StorageFolder:
        """
        Resolve a folder by store path.

        Returns the protected root for "/". Raises NotFoundError when no
        folder lives at the path.
        """
        target = normalize(require_path(path, "path"))
        if is_root(target):
            return self.root_folder
        if await probe(self._backend, target, cancel=cancel) is not ExistenceState.FOLDER_EXISTS:
            raise NotFoundError(f"Folder does not exist: {target}", details={"path": target})
        return StorageFolder(target, self)

    async def get_file_from_path(
        self,
        path: str,
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> StorageFile:
        target = normalize(require_path(path, "path"))
        if await probe(self._backend, target, cancel=cancel) is not ExistenceState.FILE_EXISTS:
            raise NotFoundError(f"File does not exist: {target}", details={"path": target})
        return StorageFile(target, self)
