"""Data model for Drive items."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from unistore.util.mime import is_folder


@dataclass(slots=True)
class DriveFileInfo:
    """
    A Drive item as returned by the API.

    file_id is the opaque handle; names are not unique within a parent on
    Drive, so the backend treats the first match as the occupant.
    """

    file_id: str
    name: str
    mime_type: str
    parents: list[str] = field(default_factory=list)

    modified_time: Optional[datetime] = None
    size: Optional[int] = None

    @property
    def is_folder(self) -> bool:
        return is_folder(self.mime_type)
