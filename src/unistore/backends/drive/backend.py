"""Google Drive backend: store paths resolved to opaque Drive file ids."""

from __future__ import annotations

import logging
from typing import BinaryIO, Optional

from unistore.errors import AlreadyExistsError, BackendError, InvalidArgumentError, NotFoundError
from unistore.models import BasicProperties, ExistenceState
from unistore.util.mime import has_binary_content
from unistore.util.path import SEP, name_of, normalize, parent_of
from unistore.util.time import now_utc

from ..base import StorageBackend, check_stream_mode
from ..streams import CommitOnCloseStream
from .controller import GoogleDriveController
from .models import DriveFileInfo

logger = logging.getLogger(__name__)


class DriveBackend(StorageBackend):
    """
    Store rooted at a Drive folder id.

    Drive items are addressed by opaque ids, not paths. Each call resolves
    a path by walking names down from root_id; nothing is cached, so every
    probe reflects the current Drive state. Streams buffer the whole file in
    memory and upload on close.
    """

    def __init__(self, controller: GoogleDriveController, root_id: str) -> None:
        if not isinstance(root_id, str) or not root_id.strip():
            raise InvalidArgumentError("root_id must be a non-empty string")
        self._controller = controller
        self.root_id = root_id

    def __repr__(self) -> str:
        return f"DriveBackend(root_id={self.root_id!r})"

    # ----------------------------
    # Primitives
    # ----------------------------
    def exists(self, path: str) -> ExistenceState:
        info = self._resolve(path)
        if info is None:
            return ExistenceState.NOT_FOUND
        if info.is_folder:
            return ExistenceState.FOLDER_EXISTS
        return ExistenceState.FILE_EXISTS

    def create_empty_file(self, path: str) -> None:
        parent, name = self._parent_and_name(path)
        current = self._controller.find_child(parent.file_id, name)
        if current is not None:
            if current.is_folder:
                raise AlreadyExistsError("A folder exists at this path", details={"path": path})
            self._controller.upload_bytes(current.file_id, b"")
            return
        self._controller.create_file(name, parent.file_id)

    def delete_file(self, path: str) -> None:
        info = self._require(path, folder=False)
        self._controller.delete_permanently(info.file_id)

    def delete_folder_recursive(self, path: str) -> None:
        if normalize(path) == SEP:
            raise BackendError("Refusing to delete the storage root")
        info = self._require(path, folder=True)
        self._controller.delete_permanently(info.file_id)

    def create_folder(self, path: str) -> None:
        parent, name = self._parent_and_name(path)
        if self._controller.find_child(parent.file_id, name) is not None:
            raise AlreadyExistsError(f"Item already exists: {path}", details={"path": path})
        self._controller.create_folder(name, parent.file_id)

    def list_file_names(self, path: str) -> set[str]:
        folder = self._require(path, folder=True)
        return {c.name for c in self._controller.list_children(folder.file_id) if not c.is_folder}

    def list_folder_names(self, path: str) -> set[str]:
        folder = self._require(path, folder=True)
        return {c.name for c in self._controller.list_children(folder.file_id) if c.is_folder}

    def move_entity(self, src: str, dst: str) -> None:
        info = self._require(src)
        dst_parent, dst_name = self._parent_and_name(dst)
        if self._controller.find_child(dst_parent.file_id, dst_name) is not None:
            raise AlreadyExistsError(f"Item already exists: {dst}", details={"path": dst})

        new_name = dst_name if dst_name != info.name else None
        if dst_parent.file_id in info.parents:
            if new_name is not None:
                self._controller.rename(info.file_id, new_name)
            return
        self._controller.move(info.file_id, dst_parent.file_id, new_name=new_name)

    def copy_entity(self, src: str, dst: str) -> None:
        info = self._require(src, folder=False)
        dst_parent, dst_name = self._parent_and_name(dst)
        if self._controller.find_child(dst_parent.file_id, dst_name) is not None:
            raise AlreadyExistsError(f"Item already exists: {dst}", details={"path": dst})
        self._controller.copy(info.file_id, dst_parent.file_id, new_name=dst_name)

    def open_stream(self, path: str, mode: str) -> BinaryIO:
        check_stream_mode(mode)
        info = self._resolve(path)
        if info is None and mode == "ab":
            parent, name = self._parent_and_name(path)
            info = self._controller.create_file(name, parent.file_id)
        if info is None or info.is_folder:
            raise NotFoundError(f"File does not exist: {path}", details={"path": path})
        if not has_binary_content(info.mime_type):
            raise InvalidArgumentError(
                "Google Docs types have no byte content to open",
                details={"path": path, "mime_type": info.mime_type},
            )

        content = b"" if info.size == 0 else self._controller.download_bytes(info.file_id)
        file_id = info.file_id
        mime_type = info.mime_type
        return CommitOnCloseStream(
            content,
            writable=mode != "rb",
            append=mode == "ab",
            commit=lambda data: self._upload(file_id, data, mime_type),
        )

    def stat(self, path: str) -> BasicProperties:
        info = self._require(path)
        size = 0 if info.is_folder else (info.size or 0)
        return BasicProperties(date_modified=info.modified_time or now_utc(), size=size)

    # ----------------------------
    # Internals
    # ----------------------------
    def _resolve(self, path: str) -> Optional[DriveFileInfo]:
        """Walk path segments from the root id; None if any segment is missing."""
        info = self._controller.get(self.root_id)
        for part in normalize(path).split(SEP):
            if not part:
                continue
            if not info.is_folder:
                return None
            child = self._controller.find_child(info.file_id, part)
            if child is None:
                return None
            info = child
        return info

    def _require(self, path: str, *, folder: Optional[bool] = None) -> DriveFileInfo:
        info = self._resolve(path)
        if info is None or (folder is not None and info.is_folder != folder):
            kind = "Item" if folder is None else ("Folder" if folder else "File")
            raise NotFoundError(f"{kind} does not exist: {path}", details={"path": path})
        return info

    def _parent_and_name(self, path: str) -> tuple[DriveFileInfo, str]:
        parent_path = parent_of(path)
        if parent_path is None:
            raise BackendError("The storage root has no parent", details={"path": path})
        return self._require(parent_path, folder=True), name_of(path)

    def _upload(self, file_id: str, data: bytes, mime_type: str) -> None:
        logger.debug("uploading %d bytes to %s", len(data), file_id)
        self._controller.upload_bytes(file_id, data, mime_type=mime_type)
