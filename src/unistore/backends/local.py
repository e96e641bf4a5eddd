"""Hierarchical filesystem backend (path-keyed)."""

from __future__ import annotations

import errno
import logging
import os
import shutil
from typing import BinaryIO

from unistore.errors import BackendError, InvalidArgumentError, NotFoundError, map_os_error
from unistore.models import BasicProperties, ExistenceState
from unistore.util.path import SEP, normalize
from unistore.util.time import from_timestamp

from .base import StorageBackend, check_stream_mode

logger = logging.getLogger(__name__)


class LocalBackend(StorageBackend):
    """
    Store rooted at a directory on the local disk.

    Store path "/a/b.txt" maps to os.path.join(root_dir, "a", "b.txt").
    Case sensitivity follows the host filesystem.
    """

    def __init__(self, root_dir: str | os.PathLike[str], *, create: bool = False) -> None:
        root = os.path.abspath(os.fspath(root_dir))
        if create:
            os.makedirs(root, exist_ok=True)
        if not os.path.isdir(root):
            raise NotFoundError("Storage root directory does not exist", details={"root_dir": root})
        self.root_dir = root

    def __repr__(self) -> str:
        return f"LocalBackend({self.root_dir!r})"

    # ----------------------------
    # Primitives
    # ----------------------------
    def exists(self, path: str) -> ExistenceState:
        native = self._native(path)
        if os.path.isfile(native):
            return ExistenceState.FILE_EXISTS
        if os.path.isdir(native):
            return ExistenceState.FOLDER_EXISTS
        return ExistenceState.NOT_FOUND

    def create_empty_file(self, path: str) -> None:
        native = self._native(path)
        try:
            with open(native, "wb"):
                pass
        except OSError as exc:
            raise map_os_error(exc, path=path) from exc

    def delete_file(self, path: str) -> None:
        try:
            os.remove(self._native(path))
        except OSError as exc:
            raise map_os_error(exc, path=path) from exc

    def delete_folder_recursive(self, path: str) -> None:
        native = self._native(path)
        if native == self.root_dir:
            raise BackendError("Refusing to delete the storage root", details={"root_dir": self.root_dir})
        logger.debug("removing tree %s", native)
        try:
            shutil.rmtree(native)
        except OSError as exc:
            raise map_os_error(exc, path=path) from exc

    def create_folder(self, path: str) -> None:
        try:
            os.mkdir(self._native(path))
        except OSError as exc:
            raise map_os_error(exc, path=path) from exc

    def list_file_names(self, path: str) -> set[str]:
        return self._list(path, want_dirs=False)

    def list_folder_names(self, path: str) -> set[str]:
        return self._list(path, want_dirs=True)

    def move_entity(self, src: str, dst: str) -> None:
        dst_native = self._native(dst)
        if os.path.lexists(dst_native):
            raise map_os_error(FileExistsError(errno.EEXIST, "Destination exists"), path=dst)
        logger.debug("moving %s -> %s", src, dst)
        try:
            shutil.move(self._native(src), dst_native)
        except OSError as exc:
            raise map_os_error(exc, path=src) from exc

    def copy_entity(self, src: str, dst: str) -> None:
        dst_native = self._native(dst)
        if os.path.lexists(dst_native):
            raise map_os_error(FileExistsError(errno.EEXIST, "Destination exists"), path=dst)
        try:
            shutil.copy2(self._native(src), dst_native)
        except OSError as exc:
            raise map_os_error(exc, path=src) from exc

    def open_stream(self, path: str, mode: str) -> BinaryIO:
        check_stream_mode(mode)
        try:
            return open(self._native(path), mode)
        except OSError as exc:
            raise map_os_error(exc, path=path) from exc

    def stat(self, path: str) -> BasicProperties:
        native = self._native(path)
        try:
            st = os.stat(native)
        except OSError as exc:
            raise map_os_error(exc, path=path) from exc

        size = 0 if os.path.isdir(native) else st.st_size
        return BasicProperties(date_modified=from_timestamp(st.st_mtime), size=size)

    # ----------------------------
    # Internals
    # ----------------------------
    def _native(self, path: str) -> str:
        parts = [p for p in normalize(path).split(SEP) if p]
        if any(p in (".", "..") for p in parts):
            raise InvalidArgumentError("Path segments '.' and '..' are not allowed", details={"path": path})
        return os.path.join(self.root_dir, *parts)

    def _list(self, path: str, *, want_dirs: bool) -> set[str]:
        names: set[str] = set()
        try:
            with os.scandir(self._native(path)) as it:
                for entry in it:
                    if entry.is_dir() == want_dirs:
                        names.add(entry.name)
        except OSError as exc:
            raise map_os_error(exc, path=path) from exc
        return names
