from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

import game_time
from recruiting.status import canonical_recruit_status


def _required_date(v: str) -> str:
    return game_time.require_date_iso(v, field="date")


def _optional_date(v: Optional[str]) -> Optional[str]:
    return game_time.optional_date_iso(v, field="date")


class RecruitCreateRequest(BaseModel):
    name: str = Field(..., min_length=1)
    player_id: Optional[int] = None
    school: Optional[str] = None
    state: Optional[str] = None
    class_year: Optional[int] = None
    position: Optional[str] = None
    side_of_ball: Optional[str] = None
    status: Optional[str] = None
    assigned_coach: Optional[str] = None
    committed_school: Optional[str] = None
    committed_date: Optional[str] = None

    @field_validator("status")
    @classmethod
    def check_status(cls, v: Optional[str]) -> Optional[str]:
        return canonical_recruit_status(v)


class RecruitUpdateRequest(BaseModel):
    """Partial update; omitted (or null) fields keep the stored value."""

    name: Optional[str] = None
    player_id: Optional[int] = None
    school: Optional[str] = None
    state: Optional[str] = None
    class_year: Optional[int] = None
    position: Optional[str] = None
    side_of_ball: Optional[str] = None
    status: Optional[str] = None
    assigned_coach: Optional[str] = None
    committed_school: Optional[str] = None
    committed_date: Optional[str] = None

    @field_validator("status")
    @classmethod
    def check_status(cls, v: Optional[str]) -> Optional[str]:
        return canonical_recruit_status(v)


class WeeklyReportUpsertRequest(BaseModel):
    week_start_date: str
    week_end_date: str
    last_game_date: Optional[str] = None
    last_game_opponent: Optional[str] = None
    last_game_score: Optional[str] = None
    last_game_result: Optional[str] = None
    next_game_date: Optional[str] = None
    next_game_time: Optional[str] = None
    next_game_opponent: Optional[str] = None
    next_game_location: Optional[str] = None
    stats: Dict[str, Any] = Field(default_factory=dict)
    other_stats: List[Any] = Field(default_factory=list)
    notes: Optional[str] = None

    @field_validator("week_start_date", "week_end_date")
    @classmethod
    def check_week_dates(cls, v: str) -> str:
        return _required_date(v)


class RecruitNoteCreateRequest(BaseModel):
    recruit_id: int
    week_start_date: str
    note_date: Optional[str] = None
    source: Optional[str] = None
    link: Optional[str] = None
    summary: Optional[str] = None
    quote: Optional[str] = None

    @field_validator("week_start_date")
    @classmethod
    def check_week_date(cls, v: str) -> str:
        return _required_date(v)

    @field_validator("note_date")
    @classmethod
    def check_note_date(cls, v: Optional[str]) -> Optional[str]:
        return _optional_date(v)


class RecruitNoteUpdateRequest(BaseModel):
    note_date: Optional[str] = None
    source: Optional[str] = None
    link: Optional[str] = None
    summary: Optional[str] = None
    quote: Optional[str] = None

    @field_validator("note_date")
    @classmethod
    def check_note_date(cls, v: Optional[str]) -> Optional[str]:
        return _optional_date(v)
