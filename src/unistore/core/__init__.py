"""Backend-agnostic core: cancellation, dispatch, existence and collision resolution."""

from __future__ import annotations

from .cancellation import CancellationToken, check_cancelled
from .dispatch import run_off_main_thread
from .existence import probe, probe_child, same_item
from .resolver import ResolvedName, append_counter, insert_counter, resolve_name
from .validators import coerce_access, coerce_policy, require_name, require_path

__all__ = [
    "CancellationToken",
    "check_cancelled",
    "run_off_main_thread",
    "probe",
    "probe_child",
    "same_item",
    "ResolvedName",
    "append_counter",
    "insert_counter",
    "resolve_name",
    "coerce_access",
    "coerce_policy",
    "require_name",
    "require_path",
]
