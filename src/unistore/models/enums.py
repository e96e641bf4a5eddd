"""Closed value sets shared by every backend."""

from __future__ import annotations

from enum import Enum


class CollisionPolicy(str, Enum):
    """What to do when a create/rename/move/copy target name is occupied."""

    FAIL_IF_EXISTS = "FAIL_IF_EXISTS"
    REPLACE_EXISTING = "REPLACE_EXISTING"
    GENERATE_UNIQUE_NAME = "GENERATE_UNIQUE_NAME"
    # Creation only.
    OPEN_IF_EXISTS = "OPEN_IF_EXISTS"


class ExistenceState(str, Enum):
    """Result of an existence probe. A path is never both a file and a folder."""

    NOT_FOUND = "NOT_FOUND"
    FILE_EXISTS = "FILE_EXISTS"
    FOLDER_EXISTS = "FOLDER_EXISTS"


class FileAccess(str, Enum):
    """Access mode for StorageFile.open."""

    READ = "READ"
    READ_AND_WRITE = "READ_AND_WRITE"
