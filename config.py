from __future__ import annotations

"""
Service-wide configuration.

Constants are tuning knobs; environment lookups are read once at import time.
Domain tables (stat weights, coach map, ...) do NOT live here; see
analytics/stats/tables.py and recruiting/config.py.
"""

import os


# ----------------------------
# Environment
# ----------------------------

# Required by the API at startup (no default db_path).
DB_PATH_ENV = "SCOUT_DB_PATH"

# Optional shared tokens. When either is set, mutating /api calls must send one of them
# (X-Admin-Token or X-Staff-Token). Only the admin token may write grade admin_notes.
ADMIN_TOKEN_ENV = "SCOUT_ADMIN_TOKEN"
STAFF_TOKEN_ENV = "SCOUT_STAFF_TOKEN"

LOG_LEVEL: str = (os.environ.get("SCOUT_LOG_LEVEL") or "INFO").strip().upper()


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


# ----------------------------
# Weekly recruiting reports
# ----------------------------

# Reports cover [week_start, week_start + span]. Tuesday + 5 = Sunday.
REPORT_WEEK_SPAN_DAYS: int = 5

# datetime.date.weekday(): Monday=0 ... Sunday=6
REPORT_WEEK_ANCHOR_WEEKDAY: int = 1

# Reject week_start dates that are not on the anchor weekday (default: warn only).
STRICT_WEEK_ANCHOR: bool = _env_flag("SCOUT_STRICT_WEEK_ANCHOR")

# ----------------------------
# Performance endpoints
# ----------------------------

TOP_PERFORMANCES_DEFAULT_LIMIT: int = 5
LEADERBOARD_DEFAULT_LIMIT: int = 10
BREAKOUT_DEFAULT_LIMIT: int = 10
BREAKOUT_DEFAULT_THRESHOLD: float = 1.5

# Hard caps for user-supplied limits.
MAX_LIST_LIMIT: int = 200

# Seconds to wait for the recruiting sync/populate lock before failing the request.
RECRUITING_LOCK_TIMEOUT_S: float = 30.0
