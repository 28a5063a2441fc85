from __future__ import annotations

import datetime as _dt
import logging
import re
from typing import Any, Dict, Optional, Tuple

import config
import state

logger = logging.getLogger(__name__)

_SLASH_DATE_RE = re.compile(r"^\s*(\d{1,2})/(\d{1,2})/(\d{4})\s*$")


def today() -> _dt.date:
    pinned = state.get_today_override()
    if pinned is not None:
        return pinned
    return _dt.date.today()


def now_utc_iso() -> str:
    return _dt.datetime.now(_dt.timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def require_date_iso(value: Any, *, field: str = "date_iso") -> str:
    """
    Ensure value is a valid YYYY-MM-DD (ISO date) and return normalized date ISO.
    Fail-loud.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError(f"{field} is required")
    if isinstance(value, _dt.date):
        return value.isoformat()[:10]
    s = str(value).strip()[:10]
    try:
        parsed = _dt.date.fromisoformat(s)
    except ValueError as exc:
        raise ValueError(f"Invalid {field}: {value!r}") from exc
    return parsed.isoformat()


def optional_date_iso(value: Any, *, field: str = "date_iso") -> Optional[str]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return require_date_iso(value, field=field)


def current_week_range(ref: Optional[_dt.date] = None) -> Tuple[_dt.date, _dt.date]:
    """Calendar week containing `ref` (Sunday..Saturday)."""
    d = ref or today()
    # weekday(): Monday=0 .. Sunday=6 -> days since Sunday
    since_sunday = (d.weekday() + 1) % 7
    start = d - _dt.timedelta(days=since_sunday)
    return start, start + _dt.timedelta(days=6)


def week_label(start: _dt.date, end: _dt.date) -> str:
    """'Oct 18 - Oct 24, 2026'"""
    return f"{start.strftime('%b')} {start.day} - {end.strftime('%b')} {end.day}, {end.year}"


def week_payload(start: _dt.date, end: _dt.date) -> Dict[str, str]:
    return {"start": start.isoformat(), "end": end.isoformat(), "label": week_label(start, end)}


def report_week_window(week_start: Any) -> Tuple[str, str]:
    """Return (week_start_iso, week_end_iso) for a weekly recruiting report.

    The span is a configurable constant. The anchor weekday is only enforced in
    strict mode; otherwise an off-anchor start is logged and accepted.
    """
    start_iso = require_date_iso(week_start, field="week_start_date")
    start = _dt.date.fromisoformat(start_iso)
    if start.weekday() != config.REPORT_WEEK_ANCHOR_WEEKDAY:
        if config.STRICT_WEEK_ANCHOR:
            raise ValueError(
                f"week_start_date must fall on weekday {config.REPORT_WEEK_ANCHOR_WEEKDAY} "
                f"(got {start_iso}, weekday {start.weekday()})"
            )
        logger.warning(
            "week_start_date %s is not on the report anchor weekday (%s != %s)",
            start_iso,
            start.weekday(),
            config.REPORT_WEEK_ANCHOR_WEEKDAY,
        )
    end = start + _dt.timedelta(days=config.REPORT_WEEK_SPAN_DAYS)
    return start_iso, end.isoformat()


def normalize_slash_date(value: Any) -> Optional[str]:
    """'10/24/2026' -> '2026-10-24'. Anything else is returned verbatim (None/blank -> None)."""
    if value is None:
        return None
    s = str(value).strip()
    if not s:
        return None
    m = _SLASH_DATE_RE.match(s)
    if not m:
        return s
    month, day, year = m.group(1), m.group(2), m.group(3)
    return f"{year}-{int(month):02d}-{int(day):02d}"
