from __future__ import annotations

"""Canonical identifiers and normalization helpers.

- All row ids are positive integers (SQLite INTEGER PRIMARY KEY).
- Positions are short upper-case codes ("QB", "DE", ...).
- Recruiting tags are free-form strings stored as a JSON array on the player row.
"""

import json
from typing import Any, Iterable, List, Optional

SCHEMA_VERSION = "3"


def normalize_id(value: Any, *, field: str = "id") -> int:
    """Coerce a path/body id into a positive int. Raises ValueError on garbage."""
    if value is None or isinstance(value, bool):
        raise ValueError(f"{field} is required")
    try:
        n = int(str(value).strip())
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid {field}: {value!r}") from exc
    if n <= 0:
        raise ValueError(f"Invalid {field}: {value!r}")
    return n


def normalize_position(value: Any) -> Optional[str]:
    if value is None:
        return None
    s = str(value).strip().upper()
    return s or None


def effective_position(primary: Any, offense: Any = None, defense: Any = None) -> Optional[str]:
    """Primary position, else offense position, else defense position."""
    for candidate in (primary, offense, defense):
        pos = normalize_position(candidate)
        if pos:
            return pos
    return None


def clean_tags(values: Optional[Iterable[Any]]) -> List[str]:
    """Trim tags, drop blanks and exact duplicates (first occurrence wins)."""
    out: List[str] = []
    seen = set()
    for v in values or ():
        if v is None:
            continue
        s = str(v).strip()
        if not s or s in seen:
            continue
        seen.add(s)
        out.append(s)
    return out


def parse_tags(raw: Any) -> List[str]:
    """Decode a stored tag list.

    Accepts a JSON array (SSOT form), a python list, or a legacy comma/semicolon
    separated string (Excel imports).
    """
    if raw is None:
        return []
    if isinstance(raw, (list, tuple, set)):
        return clean_tags(raw)
    s = str(raw).strip()
    if not s:
        return []
    if s.startswith("["):
        try:
            decoded = json.loads(s)
        except (json.JSONDecodeError, TypeError):
            decoded = None
        if isinstance(decoded, list):
            return clean_tags(decoded)
    return clean_tags(s.replace(";", ",").split(","))
