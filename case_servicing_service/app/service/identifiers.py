# ULID helpers for entity identifiers
import threading
from typing import Optional

from ulid import ULID

_lock = threading.Lock()
_last_issued: Optional[ULID] = None


def new_ulid() -> str:
    """
    Returns a new 26-character ULID string.

    Values issued by this process are strictly increasing: when two ULIDs are
    requested in the same millisecond the random part of the previous one is
    incremented instead of drawing a fresh value.
    """
    global _last_issued
    with _lock:
        candidate = ULID()
        if _last_issued is not None and int(candidate) <= int(_last_issued):
            candidate = ULID.from_int(int(_last_issued) + 1)
        _last_issued = candidate
        return str(candidate)


def is_valid_ulid(value: Optional[str]) -> bool:
    return try_parse_ulid(value) is not None


def try_parse_ulid(value: Optional[str]) -> Optional[ULID]:
    if value is None or not value.strip():
        return None
    try:
        return ULID.from_str(value.strip())
    except ValueError:
        return None
