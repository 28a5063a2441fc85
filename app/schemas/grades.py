from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, field_validator

from analytics.stats.tables import GRADE_LETTERS


class GradeUpsertRequest(BaseModel):
    grade: Optional[str] = None  # A+ .. F
    notes: Optional[str] = None
    admin_notes: Optional[str] = None  # admin callers only
    game_score: Optional[str] = None  # "W 35-14"
    team_record: Optional[str] = None
    next_opponent: Optional[str] = None
    next_game_date: Optional[str] = None  # MM/DD/YYYY or YYYY-MM-DD
    verified: Optional[bool] = None

    @field_validator("grade")
    @classmethod
    def check_grade(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        g = v.strip().upper()
        if g not in GRADE_LETTERS:
            raise ValueError(f"grade must be one of {', '.join(GRADE_LETTERS)}")
        return g
