"""Google Drive API controller used by DriveBackend."""

from __future__ import annotations

import io
import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, TypeVar

from googleapiclient.errors import HttpError
from googleapiclient.http import MediaIoBaseDownload, MediaIoBaseUpload

from unistore.errors import (
    BackendError,
    HttpErrorInfo,
    NetworkError,
    RateLimitError,
    UniStoreError,
    map_http_error,
)
from unistore.util.mime import DEFAULT_FILE_MIME, FOLDER_MIME
from unistore.util.time import parse_rfc3339

from .auth import AuthInfo, DriveAuth
from .fields import FILE_FIELDS, LIST_FIELDS
from .models import DriveFileInfo

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """Exponential backoff for rate-limit, network and 5xx failures."""

    max_retries: int = 3
    initial_delay_sec: float = 1.0


class GoogleDriveController:
    """
    Drive v3 `files` resource, keyed by opaque file ids.

    Every request is sent through _execute, which retries transient failures
    and maps the rest into unistore errors. The underlying service object is
    kept private.
    """

    DEFAULT_SCOPES: tuple[str, ...] = ("https://www.googleapis.com/auth/drive",)

    def __init__(
        self,
        auth_info: AuthInfo,
        *,
        scopes: Optional[Sequence[str]] = None,
        supports_all_drives: bool = True,
        retry_policy: Optional[RetryPolicy] = None,
    ) -> None:
        use_scopes = list(scopes) if scopes is not None else list(self.DEFAULT_SCOPES)
        service = DriveAuth(auth_info).build_drive_service(use_scopes, ensure_valid=True)
        self._setup(service, supports_all_drives, retry_policy)

    @classmethod
    def from_service(
        cls,
        service: Any,
        *,
        supports_all_drives: bool = True,
        retry_policy: Optional[RetryPolicy] = None,
    ) -> "GoogleDriveController":
        """Wrap an already-built Drive service (useful for tests)."""
        obj = cls.__new__(cls)
        obj._setup(service, supports_all_drives, retry_policy)
        return obj

    def _setup(
        self,
        service: Any,
        supports_all_drives: bool,
        retry_policy: Optional[RetryPolicy],
    ) -> None:
        self._service = service
        self._supports_all_drives = supports_all_drives
        self._retry_policy = retry_policy or RetryPolicy()

    # ----------------------------
    # Lookups
    # ----------------------------
    def get(self, file_id: str) -> DriveFileInfo:
        return self._file_call("get", fileId=file_id)

    def list_children(self, parent_id: str) -> list[DriveFileInfo]:
        return self._query(_build_parent_query(parent_id))

    def find_child(self, parent_id: str, name: str) -> Optional[DriveFileInfo]:
        """
        Child of parent_id named exactly `name`, or None.

        Drive allows several children with one name; the first match is used.
        The name clause in the query is case-insensitive on Drive's side, so
        candidates are filtered again here.
        """
        q = f"({_build_parent_query(parent_id)}) and name = '{_escape_query(name)}'"
        return next((c for c in self._query(q) if c.name == name), None)

    # ----------------------------
    # Mutations
    # ----------------------------
    def create_folder(self, name: str, parent_id: str) -> DriveFileInfo:
        return self._file_call(
            "create",
            body={"name": name, "mimeType": FOLDER_MIME, "parents": [parent_id]},
        )

    def create_file(
        self,
        name: str,
        parent_id: str,
        *,
        content: bytes = b"",
        mime_type: str = DEFAULT_FILE_MIME,
    ) -> DriveFileInfo:
        return self._file_call(
            "create",
            body={"name": name, "mimeType": mime_type, "parents": [parent_id]},
            media_body=_media(content, mime_type),
        )

    def rename(self, file_id: str, new_name: str) -> DriveFileInfo:
        return self._file_call("update", fileId=file_id, body={"name": new_name})

    def move(
        self,
        file_id: str,
        new_parent_id: str,
        *,
        new_name: Optional[str] = None,
    ) -> DriveFileInfo:
        """Re-parent under new_parent_id (dropping other parents), renaming in the same call."""
        current = self._files_request("get", fileId=file_id, fields="parents")
        old_parents: list[str] = current.get("parents") or []
        stale = [p for p in old_parents if p != new_parent_id]

        return self._file_call(
            "update",
            fileId=file_id,
            body={} if new_name is None else {"name": new_name},
            addParents=None if new_parent_id in old_parents else new_parent_id,
            removeParents=",".join(stale) or None,
        )

    def copy(
        self,
        file_id: str,
        new_parent_id: str,
        *,
        new_name: Optional[str] = None,
    ) -> DriveFileInfo:
        body: dict[str, Any] = {"parents": [new_parent_id]}
        if new_name is not None:
            body["name"] = new_name
        return self._file_call("copy", fileId=file_id, body=body)

    def delete_permanently(self, file_id: str) -> None:
        """Bypasses the trash. Drive deletes a folder's descendants with it."""
        self._files_request("delete", fileId=file_id)

    # ----------------------------
    # Content
    # ----------------------------
    def download_bytes(self, file_id: str) -> bytes:
        request = self._service.files().get_media(fileId=file_id, **self._drive_kwargs())
        buf = io.BytesIO()
        downloader = MediaIoBaseDownload(buf, request)
        done = False
        while not done:
            _, done = self._execute(downloader.next_chunk)
        return buf.getvalue()

    def upload_bytes(
        self,
        file_id: str,
        content: bytes,
        *,
        mime_type: str = DEFAULT_FILE_MIME,
    ) -> DriveFileInfo:
        """Overwrite the content of an existing file."""
        return self._file_call("update", fileId=file_id, media_body=_media(content, mime_type))

    # ----------------------------
    # Internals
    # ----------------------------
    def _drive_kwargs(self, *, listing: bool = False) -> dict[str, Any]:
        if not self._supports_all_drives:
            return {}
        if listing:
            return {"supportsAllDrives": True, "includeItemsFromAllDrives": True}
        return {"supportsAllDrives": True}

    def _files_request(self, method: str, *, listing: bool = False, **kwargs: Any) -> Any:
        request = getattr(self._service.files(), method)(**kwargs, **self._drive_kwargs(listing=listing))
        return self._execute(request.execute)

    def _file_call(self, method: str, **kwargs: Any) -> DriveFileInfo:
        return _file_dict_to_info(self._files_request(method, fields=FILE_FIELDS, **kwargs))

    def _query(self, q: str) -> list[DriveFileInfo]:
        found: list[DriveFileInfo] = []
        page_token: Optional[str] = None
        while True:
            page = self._files_request(
                "list",
                listing=True,
                q=q,
                fields=LIST_FIELDS,
                pageToken=page_token,
            )
            found.extend(_file_dict_to_info(f) for f in page.get("files", []))
            page_token = page.get("nextPageToken")
            if not page_token:
                return found

    def _execute(self, func: Callable[[], T]) -> T:
        policy = self._retry_policy
        delay = policy.initial_delay_sec
        attempt = 0
        while True:
            try:
                return func()
            except Exception as exc:
                mapped = self._map_exception(exc)
                if attempt >= policy.max_retries or not self._should_retry(mapped):
                    raise mapped from exc

            attempt += 1
            logger.warning(
                "Drive request failed (%s), retry %d/%d in %.1fs",
                type(mapped).__name__,
                attempt,
                policy.max_retries,
                delay,
            )
            time.sleep(delay)
            delay *= 2

    def _should_retry(self, exc: UniStoreError) -> bool:
        if isinstance(exc, (RateLimitError, NetworkError)):
            return True
        if type(exc) is BackendError:
            status_code = exc.details.get("status_code")
            return isinstance(status_code, int) and 500 <= status_code <= 599
        return False

    def _map_exception(self, exc: Exception) -> UniStoreError:
        if isinstance(exc, UniStoreError):
            return exc
        if isinstance(exc, HttpError):
            return map_http_error(_http_error_to_info(exc), cause=exc)
        if isinstance(exc, (OSError, TimeoutError)):
            return NetworkError("Network error talking to Drive", cause=exc)
        return BackendError("Drive API error", cause=exc)


def _media(content: bytes, mime_type: str) -> MediaIoBaseUpload:
    return MediaIoBaseUpload(io.BytesIO(content), mimetype=mime_type, resumable=False)


def _escape_query(value: str) -> str:
    return value.replace("\\", "\\\\").replace("'", "\\'")


def _build_parent_query(parent_id: str) -> str:
    return f"('{_escape_query(parent_id)}' in parents) and trashed=false"


def _str_or(value: Any, default: Optional[str]) -> Optional[str]:
    return value if isinstance(value, str) else default


def _file_dict_to_info(data: dict[str, Any]) -> DriveFileInfo:
    modified_time = None
    raw_time = data.get("modifiedTime")
    if isinstance(raw_time, str):
        try:
            modified_time = parse_rfc3339(raw_time)
        except ValueError:
            logger.debug("ignoring unparseable modifiedTime %r", raw_time)

    # Drive sends int64 fields as decimal strings.
    raw_size = data.get("size")
    size = None
    if isinstance(raw_size, int):
        size = raw_size
    elif isinstance(raw_size, str) and raw_size.isdigit():
        size = int(raw_size)

    parents = data.get("parents")
    return DriveFileInfo(
        file_id=_str_or(data.get("id"), ""),
        name=_str_or(data.get("name"), ""),
        mime_type=_str_or(data.get("mimeType"), ""),
        parents=list(parents) if isinstance(parents, list) else [],
        modified_time=modified_time,
        size=size,
    )


def _http_error_to_info(exc: HttpError) -> HttpErrorInfo:
    resp = getattr(exc, "resp", None)
    status_code = getattr(resp, "status", None)
    reason = getattr(resp, "reason", None)
    message = None
    details: dict[str, Any] = {}

    # Drive error bodies: {"error": {"message": ..., "errors": [{"reason": ..., "domain": ...}]}}
    payload: Any = {}
    content = getattr(exc, "content", None)
    if isinstance(content, (bytes, bytearray)):
        try:
            payload = json.loads(content.decode("utf-8"))
        except (UnicodeDecodeError, ValueError):
            payload = {}
    error = payload.get("error") if isinstance(payload, dict) else None
    if isinstance(error, dict):
        message = error.get("message") or None
        first = (error.get("errors") or [None])[0]
        if isinstance(first, dict):
            details["domain"] = first.get("domain")
            reason = _str_or(first.get("reason"), reason)

    if isinstance(status_code, str) and status_code.isdigit():
        status_code = int(status_code)

    return HttpErrorInfo(
        status_code=status_code if isinstance(status_code, int) else 0,
        reason=_str_or(reason, None),
        message=message,
        details=details or None,
    )
