"""Exception hierarchy and native error mapping for unistore."""

from __future__ import annotations

import builtins
import errno
from dataclasses import dataclass
from typing import Any, Optional


class UniStoreError(Exception):
    """
    Base exception for unistore.

    Attributes:
        details: Optional structured information (e.g., path, HTTP status).
        cause: Optional original exception that triggered this error.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause


class NotFoundError(UniStoreError):
    """Raised when a required file/folder (or its parent) does not exist."""


class AlreadyExistsError(UniStoreError):
    """Raised when a target name is occupied and the policy forbids replacing it."""


class OperationCancelledError(UniStoreError):
    """Raised when a cancellation token is observed before or during an operation."""


class InvalidArgumentError(UniStoreError):
    """Raised for empty names, unknown policies/access modes and similar misuse."""


class ProtectedRootError(UniStoreError):
    """Raised when deleting (or moving) a root storage folder."""


class BackendError(UniStoreError):
    """Raised for opaque storage failures that are not interpreted further."""


class AuthError(BackendError):
    """Raised when backend authentication/refresh fails."""


class PermissionDeniedError(BackendError):
    """Raised when the backend denies access (EACCES, HTTP 403 non-quota)."""


class ConflictError(BackendError):
    """Raised when the backend reports a conflict (HTTP 409/412)."""


class RateLimitError(BackendError):
    """Raised when rate-limited (HTTP 429)."""


class QuotaExceededError(BackendError):
    """Raised when quota is exceeded (HTTP 403 with quota-related reason)."""


class NetworkError(BackendError):
    """Raised when network/timeout issues prevent the request."""


def map_os_error(
    exc: OSError,
    *,
    path: Optional[str] = None,
) -> UniStoreError:
    """
    Map an OSError raised by a local primitive to a unistore exception.

    Policy:
        - ENOENT / ENOTDIR -> NotFoundError
        - EEXIST / ENOTEMPTY -> AlreadyExistsError
        - EACCES / EPERM -> PermissionDeniedError
        - otherwise -> BackendError
    """
    details: dict[str, Any] = {"errno": exc.errno}
    if path is not None:
        details["path"] = path

    message = exc.strerror or str(exc) or exc.__class__.__name__

    if isinstance(exc, (FileNotFoundError, NotADirectoryError)):
        return NotFoundError(message, details=details, cause=exc)
    if isinstance(exc, FileExistsError) or exc.errno == errno.ENOTEMPTY:
        return AlreadyExistsError(message, details=details, cause=exc)
    if isinstance(exc, builtins.PermissionError):
        return PermissionDeniedError(message, details=details, cause=exc)

    return BackendError(message, details=details, cause=exc)


@dataclass(frozen=True)
class HttpErrorInfo:
    """Lightweight HTTP error information for mapping to unistore exceptions."""

    status_code: int
    reason: str | None = None
    message: str | None = None
    details: dict[str, Any] | None = None


_STATUS_ERRORS: dict[int, type[UniStoreError]] = {
    400: InvalidArgumentError,
    401: AuthError,
    404: NotFoundError,
    409: ConflictError,
    412: ConflictError,
    429: RateLimitError,
}

# Lower-cased substrings of Drive 403 reasons that mean "out of quota".
_QUOTA_MARKERS: tuple[str, ...] = ("quota", "dailylimitexceeded", "usagelimits")


def _forbidden_error(reason: str | None) -> type[UniStoreError]:
    key = (reason or "").lower()
    if key.endswith("ratelimitexceeded"):
        return RateLimitError
    if any(marker in key for marker in _QUOTA_MARKERS):
        return QuotaExceededError
    return PermissionDeniedError


def map_http_error(
    info: HttpErrorInfo,
    *,
    cause: Optional[BaseException] = None,
) -> UniStoreError:
    """
    Map an HTTP error from a remote backend to a unistore exception.

    Policy:
        - 400 -> InvalidArgumentError
        - 401 -> AuthError
        - 403 -> PermissionDeniedError, but QuotaExceededError if quota-related
                 and RateLimitError for (user)RateLimitExceeded
        - 404 -> NotFoundError
        - 409/412 -> ConflictError
        - 429 -> RateLimitError
        - otherwise -> BackendError
    """
    details: dict[str, Any] = {"status_code": info.status_code, "reason": info.reason}
    details.update(info.details or {})

    if info.status_code == 403:
        error_cls = _forbidden_error(info.reason)
    else:
        error_cls = _STATUS_ERRORS.get(info.status_code, BackendError)
    return error_cls(info.message or f"HTTP error {info.status_code}", details=details, cause=cause)
