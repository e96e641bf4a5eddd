"""Basic properties snapshot."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from unistore.util.time import normalize_dt


@dataclass(slots=True, frozen=True)
class BasicProperties:
    """
    Point-in-time snapshot of an item's basic properties.

    Notes:
        - date_modified is always tz-aware.
        - size is in bytes; folders report 0 unless the backend can aggregate.
    """

    date_modified: datetime
    size: int = 0

    def __post_init__(self) -> None:
        normalize_dt(self.date_modified)
        if not isinstance(self.size, int) or self.size < 0:
            raise ValueError("BasicProperties.size must be a non-negative int")
