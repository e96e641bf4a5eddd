"""Cooperative cancellation signal."""

from __future__ import annotations

import threading
from typing import Optional

from unistore.errors import OperationCancelledError


class CancellationToken:
    """
    A one-shot cancellation flag shared between the caller and an operation.

    The flag is backed by a threading.Event, so it may be set from any thread
    and observed from worker threads as well as the event loop.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise OperationCancelledError("Operation was cancelled")

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self.cancelled})"


def check_cancelled(cancel: Optional[CancellationToken]) -> None:
    """Raise OperationCancelledError if cancel is set. None means 'never cancelled'."""
    if cancel is not None:
        cancel.raise_if_cancelled()
