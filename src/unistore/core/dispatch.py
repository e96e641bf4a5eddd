"""Run blocking backend primitives off the event loop."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Optional, TypeVar

from unistore.errors import BackendError, UniStoreError

from .cancellation import CancellationToken, check_cancelled

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def run_off_main_thread(
    work: Callable[..., T],
    *args: Any,
    cancel: Optional[CancellationToken] = None,
) -> T:
    """
    Run a blocking call on a worker thread and resume the caller when done.

    Cancellation is checked before the call is issued. Once issued, the call
    runs to completion; its effects are not rolled back.

    Raises:
        OperationCancelledError: if cancel was set before the call.
        UniStoreError: re-raised unchanged from the backend.
        BackendError: for any other exception raised by work.
    """
    check_cancelled(cancel)

    name = getattr(work, "__name__", repr(work))
    logger.debug("backend call %s%r", name, args)
    try:
        return await asyncio.to_thread(work, *args)
    except UniStoreError:
        raise
    except Exception as exc:
        raise BackendError(
            "Storage backend call failed",
            details={"operation": name},
            cause=exc,
        ) from exc
