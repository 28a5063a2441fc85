from __future__ import annotations

"""Canonical recruiting status from a player's free-form tags."""

from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Tuple, Union

from .config import ELIGIBLE_STATUSES, STATUS_PRIORITY, STATUS_SYNONYMS, STATUS_WATCHING


@dataclass(frozen=True)
class StatusResolution:
    status: str
    eligible: bool
    normalized: Tuple[str, ...]


def normalize_status_tag(tag: Any) -> Optional[str]:
    """Map one tag to its canonical status.

    Known synonyms map through the table; any other non-empty tag passes through
    upper-cased. Blank tags return None.
    """
    if tag is None:
        return None
    key = str(tag).strip().lower()
    if not key:
        return None
    return STATUS_SYNONYMS.get(key, key.upper())


def canonical_recruit_status(value: Any) -> Optional[str]:
    """Canonical status for a manual recruit write, or None for a blank value.

    Raises ValueError when the value does not map into the status vocabulary.
    """
    status = normalize_status_tag(value)
    if status is None:
        return None
    if status not in STATUS_PRIORITY:
        raise ValueError(f"unknown recruit status: {value!r} (expected one of {', '.join(STATUS_PRIORITY)})")
    return status


def resolve_recruiting_status(tags: Union[str, Iterable[Any], None]) -> StatusResolution:
    """Resolve the canonical status and dossier eligibility of a tag set.

    A single string is treated as a one-element tag list. The highest-priority
    status present wins; when none of the normalized values is a priority status
    the first normalized value is used. No tags at all resolves to WATCHING.
    """
    if tags is None:
        raw: List[Any] = []
    elif isinstance(tags, str):
        raw = [tags]
    else:
        raw = list(tags)

    normalized: List[str] = []
    for t in raw:
        s = normalize_status_tag(t)
        if s is not None and s not in normalized:
            normalized.append(s)

    if not normalized:
        return StatusResolution(status=STATUS_WATCHING, eligible=False, normalized=())

    present = set(normalized)
    status = next((s for s in STATUS_PRIORITY if s in present), normalized[0])
    return StatusResolution(
        status=status,
        eligible=bool(present & ELIGIBLE_STATUSES),
        normalized=tuple(normalized),
    )
