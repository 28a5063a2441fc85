from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class RecruitingError(Exception):
    """Structured error for recruiting flows (sync, weekly reports, notes).

    The server layer maps these to HTTP 4xx/5xx while keeping a stable
    machine-readable code for the client.
    """

    code: str
    message: str
    details: Optional[Any] = None

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.code}: {self.message}"


# Error codes (stable API surface)
RECRUIT_NOT_FOUND = "RECRUIT_NOT_FOUND"
RECRUIT_NOTE_NOT_FOUND = "RECRUIT_NOTE_NOT_FOUND"
REPORT_BAD_PAYLOAD = "REPORT_BAD_PAYLOAD"
REPORT_BAD_WEEK = "REPORT_BAD_WEEK"
RECRUITING_BUSY = "RECRUITING_BUSY"
RECRUITING_SYNC_FAILED = "RECRUITING_SYNC_FAILED"
RECRUITING_POPULATE_FAILED = "RECRUITING_POPULATE_FAILED"
