from .mime import DEFAULT_FILE_MIME, FOLDER_MIME, has_binary_content, is_folder, is_google_app
from .path import SEP, combine, is_root, is_within, name_of, normalize, parent_of, split_name
from .time import from_timestamp, normalize_dt, now_utc, parse_rfc3339

__all__ = [
    "FOLDER_MIME",
    "DEFAULT_FILE_MIME",
    "is_folder",
    "is_google_app",
    "has_binary_content",
    "SEP",
    "combine",
    "normalize",
    "is_root",
    "parent_of",
    "name_of",
    "split_name",
    "is_within",
    "now_utc",
    "parse_rfc3339",
    "normalize_dt",
    "from_timestamp",
]
