"""Storage primitive contract consumed by the item layer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import BinaryIO

from unistore.models import BasicProperties, ExistenceState

STREAM_MODES: tuple[str, ...] = ("rb", "r+b", "ab")


class StorageBackend(ABC):
    """
    Native storage primitives for one storage root.

    All methods are blocking; the item layer runs them off the event loop.
    Paths are absolute store paths ("/", "/docs", "/docs/a.txt"). Nothing
    here is assumed atomic across a probe-then-act gap.

    Failure contract:
        - Missing target/parent -> NotFoundError
        - Other failures -> BackendError (or a subclass)
    """

    @abstractmethod
    def exists(self, path: str) -> ExistenceState:
        ...

    @abstractmethod
    def create_empty_file(self, path: str) -> None:
        """Create (or truncate) a zero-length file. The parent must exist."""

    @abstractmethod
    def delete_file(self, path: str) -> None:
        ...

    @abstractmethod
    def delete_folder_recursive(self, path: str) -> None:
        ...

    @abstractmethod
    def create_folder(self, path: str) -> None:
        """Create a single folder. The parent must exist."""

    @abstractmethod
    def list_file_names(self, path: str) -> set[str]:
        ...

    @abstractmethod
    def list_folder_names(self, path: str) -> set[str]:
        ...

    @abstractmethod
    def move_entity(self, src: str, dst: str) -> None:
        """Move a file or folder. dst must not be occupied."""

    @abstractmethod
    def copy_entity(self, src: str, dst: str) -> None:
        """Copy a file. dst must not be occupied."""

    @abstractmethod
    def open_stream(self, path: str, mode: str) -> BinaryIO:
        """
        Open a byte stream.

        Modes:
            "rb"  - read-only; the file must exist
            "r+b" - read/write from offset 0, no truncation; the file must exist
            "ab"  - append; created if missing
        """

    @abstractmethod
    def stat(self, path: str) -> BasicProperties:
        ...


def check_stream_mode(mode: str) -> None:
    if mode not in STREAM_MODES:
        raise ValueError(f"Unsupported stream mode: {mode!r}")
