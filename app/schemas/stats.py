from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class StatCreateRequest(BaseModel):
    game_id: int
    player_id: int
    stat_type: str = Field(..., min_length=1)
    value: float = 0.0
    timestamp: Optional[str] = None  # game clock, free text
    period: Optional[str] = None
    note: Optional[str] = None


class StatUpdateRequest(BaseModel):
    stat_type: Optional[str] = None
    value: Optional[float] = None
    timestamp: Optional[str] = None
    period: Optional[str] = None
    note: Optional[str] = None
