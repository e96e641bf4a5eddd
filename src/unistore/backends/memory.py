"""In-process isolated store (name-within-parent keyed)."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import BinaryIO, Optional

from unistore.errors import AlreadyExistsError, BackendError, NotFoundError
from unistore.models import BasicProperties, ExistenceState
from unistore.util.path import SEP, name_of, normalize, parent_of
from unistore.util.time import now_utc

from .base import StorageBackend, check_stream_mode
from .streams import CommitOnCloseStream


@dataclass(slots=True)
class _Node:
    is_folder: bool
    modified_time: datetime = field(default_factory=now_utc)
    data: bytes = b""
    children: dict[str, _Node] = field(default_factory=dict)

    def clone(self) -> _Node:
        return _Node(
            is_folder=self.is_folder,
            modified_time=now_utc(),
            data=self.data,
            children={name: child.clone() for name, child in self.children.items()},
        )


class MemoryBackend(StorageBackend):
    """
    Store kept entirely in memory.

    Each folder node owns a name -> child index, like an isolated-storage
    sandbox that resolves names within their parent. Names are case-sensitive.
    A single RLock keeps the tree consistent across worker threads.
    """

    def __init__(self) -> None:
        self._root = _Node(is_folder=True)
        self._lock = threading.RLock()

    # ----------------------------
    # Primitives
    # ----------------------------
    def exists(self, path: str) -> ExistenceState:
        with self._lock:
            node = self._find(path)
            if node is None:
                return ExistenceState.NOT_FOUND
            if node.is_folder:
                return ExistenceState.FOLDER_EXISTS
            return ExistenceState.FILE_EXISTS

    def create_empty_file(self, path: str) -> None:
        with self._lock:
            parent, name = self._parent_and_name(path)
            current = parent.children.get(name)
            if current is not None and current.is_folder:
                raise AlreadyExistsError("A folder exists at this path", details={"path": path})
            parent.children[name] = _Node(is_folder=False)
            parent.modified_time = now_utc()

    def delete_file(self, path: str) -> None:
        with self._lock:
            parent, name = self._parent_and_name(path)
            node = parent.children.get(name)
            if node is None or node.is_folder:
                raise NotFoundError(f"File does not exist: {path}", details={"path": path})
            del parent.children[name]
            parent.modified_time = now_utc()

    def delete_folder_recursive(self, path: str) -> None:
        with self._lock:
            if normalize(path) == SEP:
                raise BackendError("Refusing to delete the storage root")
            parent, name = self._parent_and_name(path)
            node = parent.children.get(name)
            if node is None or not node.is_folder:
                raise NotFoundError(f"Folder does not exist: {path}", details={"path": path})
            del parent.children[name]
            parent.modified_time = now_utc()

    def create_folder(self, path: str) -> None:
        with self._lock:
            parent, name = self._parent_and_name(path)
            if name in parent.children:
                raise AlreadyExistsError(f"Item already exists: {path}", details={"path": path})
            parent.children[name] = _Node(is_folder=True)
            parent.modified_time = now_utc()

    def list_file_names(self, path: str) -> set[str]:
        with self._lock:
            folder = self._require_folder(path)
            return {name for name, node in folder.children.items() if not node.is_folder}

    def list_folder_names(self, path: str) -> set[str]:
        with self._lock:
            folder = self._require_folder(path)
            return {name for name, node in folder.children.items() if node.is_folder}

    def move_entity(self, src: str, dst: str) -> None:
        with self._lock:
            src_parent, src_name = self._parent_and_name(src)
            node = src_parent.children.get(src_name)
            if node is None:
                raise NotFoundError(f"Item does not exist: {src}", details={"path": src})
            dst_parent, dst_name = self._parent_and_name(dst)
            if dst_name in dst_parent.children:
                raise AlreadyExistsError(f"Item already exists: {dst}", details={"path": dst})

            del src_parent.children[src_name]
            dst_parent.children[dst_name] = node
            stamp = now_utc()
            src_parent.modified_time = stamp
            dst_parent.modified_time = stamp

    def copy_entity(self, src: str, dst: str) -> None:
        with self._lock:
            node = self._find(src)
            if node is None:
                raise NotFoundError(f"Item does not exist: {src}", details={"path": src})
            dst_parent, dst_name = self._parent_and_name(dst)
            if dst_name in dst_parent.children:
                raise AlreadyExistsError(f"Item already exists: {dst}", details={"path": dst})
            dst_parent.children[dst_name] = node.clone()
            dst_parent.modified_time = now_utc()

    def open_stream(self, path: str, mode: str) -> BinaryIO:
        check_stream_mode(mode)
        with self._lock:
            node = self._find(path)
            if node is None and mode == "ab":
                self.create_empty_file(path)
                node = self._find(path)
            if node is None or node.is_folder:
                raise NotFoundError(f"File does not exist: {path}", details={"path": path})

            return CommitOnCloseStream(
                node.data,
                writable=mode != "rb",
                append=mode == "ab",
                commit=lambda data: self._commit(path, data),
            )

    def stat(self, path: str) -> BasicProperties:
        with self._lock:
            node = self._find(path)
            if node is None:
                raise NotFoundError(f"Item does not exist: {path}", details={"path": path})
            size = 0 if node.is_folder else len(node.data)
            return BasicProperties(date_modified=node.modified_time, size=size)

    # ----------------------------
    # Internals
    # ----------------------------
    def _find(self, path: str) -> Optional[_Node]:
        node = self._root
        for part in normalize(path).split(SEP):
            if not part:
                continue
            if not node.is_folder:
                return None
            child = node.children.get(part)
            if child is None:
                return None
            node = child
        return node

    def _require_folder(self, path: str) -> _Node:
        node = self._find(path)
        if node is None or not node.is_folder:
            raise NotFoundError(f"Folder does not exist: {path}", details={"path": path})
        return node

    def _parent_and_name(self, path: str) -> tuple[_Node, str]:
        parent_path = parent_of(path)
        if parent_path is None:
            raise BackendError("The storage root has no parent", details={"path": path})
        return self._require_folder(parent_path), name_of(path)

    def _commit(self, path: str, data: bytes) -> None:
        with self._lock:
            node = self._find(path)
            if node is None or node.is_folder:
                # Deleted or replaced while the stream was open.
                raise NotFoundError(f"File does not exist: {path}", details={"path": path})
            node.data = data
            node.modified_time = now_utc()
