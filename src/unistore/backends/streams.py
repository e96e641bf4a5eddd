"""Buffered byte streams for backends without native file handles."""

from __future__ import annotations

import io
from typing import Callable, Optional


class CommitOnCloseStream(io.BytesIO):
    """
    BytesIO that hands its contents back to the store when closed.

    The whole file is buffered in memory; nothing reaches the store until
    close() (or leaving a with-block), and only if the stream was written.
    """

    def __init__(
        self,
        initial: bytes,
        *,
        writable: bool,
        append: bool,
        commit: Callable[[bytes], None],
    ) -> None:
        super().__init__(initial)
        self._writable = writable
        self._append = append
        self._commit = commit
        self._dirty = False
        if append:
            self.seek(0, io.SEEK_END)

    def writable(self) -> bool:
        return self._writable

    def write(self, b) -> int:  # type: ignore[override]
        if not self._writable:
            raise io.UnsupportedOperation("stream is opened read-only")
        if self._append:
            self.seek(0, io.SEEK_END)
        self._dirty = True
        return super().write(b)

    def truncate(self, size: Optional[int] = None) -> int:
        if not self._writable:
            raise io.UnsupportedOperation("stream is opened read-only")
        self._dirty = True
        return super().truncate(size)

    def close(self) -> None:
        if self.closed:
            return
        try:
            if self._dirty:
                self._commit(self.getvalue())
                self._dirty = False
        finally:
            super().close()
