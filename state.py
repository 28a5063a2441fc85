from __future__ import annotations

"""Process-level state for the scouting service.

Holds:
  - the SQLite db_path (set once at startup, fail loud when missing)
  - an optional "today" override used by game_time (tests / backfills)

Persisted data never lives here; ScoutRepo / SQLite is the SSOT.
"""

import datetime as _dt
import threading
from typing import Optional

_LOCK = threading.RLock()
_DB_PATH: Optional[str] = None
_TODAY_OVERRIDE: Optional[_dt.date] = None


def set_db_path(db_path: str) -> None:
    global _DB_PATH
    p = str(db_path or "").strip()
    if not p:
        raise ValueError("db_path is required")
    with _LOCK:
        _DB_PATH = p


def get_db_path() -> str:
    with _LOCK:
        p = _DB_PATH
    if not p:
        raise RuntimeError("db_path is not configured (call state.set_db_path first)")
    return p


def set_today_override(value: Optional[_dt.date]) -> None:
    """Pin the service clock to a fixed date (None restores the host clock)."""
    global _TODAY_OVERRIDE
    if value is not None and not isinstance(value, _dt.date):
        raise ValueError(f"today override must be a date, got: {value!r}")
    with _LOCK:
        _TODAY_OVERRIDE = value


def get_today_override() -> Optional[_dt.date]:
    with _LOCK:
        return _TODAY_OVERRIDE


def reset() -> None:
    global _DB_PATH, _TODAY_OVERRIDE
    with _LOCK:
        _DB_PATH = None
        _TODAY_OVERRIDE = None
