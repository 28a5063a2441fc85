from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

import game_time


class GameCreateRequest(BaseModel):
    opponent: str = Field(..., min_length=1)
    date: Optional[str] = None  # YYYY-MM-DD
    location: Optional[str] = None
    competition_level: Optional[str] = None
    video_url: Optional[str] = None
    notes: Optional[str] = None
    player_ids: List[int] = Field(default_factory=list)

    @field_validator("date")
    @classmethod
    def check_date(cls, v: Optional[str]) -> Optional[str]:
        return game_time.optional_date_iso(v, field="date")
