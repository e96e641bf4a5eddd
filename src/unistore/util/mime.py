from __future__ import annotations

FOLDER_MIME: str = "application/vnd.google-apps.folder"
DEFAULT_FILE_MIME: str = "application/octet-stream"


def is_folder(mime_type: str) -> bool:
    return mime_type == FOLDER_MIME


def is_google_app(mime_type: str) -> bool:
    """
    Returns True if the MIME type is a Google 'apps' type (Docs, Sheets, ...).

    Folders are Google apps types too; callers that care check is_folder first.
    """
    return mime_type.startswith("application/vnd.google-apps.")


def has_binary_content(mime_type: str) -> bool:
    """
    Google Docs/Sheets/Slides have no byte content reachable via media
    download; only regular files can be opened as streams.
    """
    return not is_google_app(mime_type)
