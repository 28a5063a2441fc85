from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from recruiting.config import PLAYER_TAG_VOCABULARY, is_known_player_tag


def _check_tags(values: Optional[List[str]]) -> Optional[List[str]]:
    if values is None:
        return None
    out: List[str] = []
    for v in values:
        tag = str(v).strip()
        if not tag:
            continue
        if not is_known_player_tag(tag):
            raise ValueError(f"unknown recruiting status {tag!r} (allowed: {', '.join(PLAYER_TAG_VOCABULARY)})")
        if tag not in out:
            out.append(tag)
    return out


class PlayerCreateRequest(BaseModel):
    name: str = Field(..., min_length=1)
    position: Optional[str] = None
    offense_position: Optional[str] = None
    defense_position: Optional[str] = None
    school: Optional[str] = None
    state: Optional[str] = None
    grad_year: Optional[int] = None
    notes: Optional[str] = None
    flagged: bool = False
    recruiting_statuses: List[str] = Field(default_factory=list)
    status_notes: Optional[str] = None
    committed_school: Optional[str] = None
    committed_date: Optional[str] = None
    composite_rating: Optional[float] = None

    @field_validator("recruiting_statuses")
    @classmethod
    def check_tags(cls, v):
        return _check_tags(v)


class PlayerUpdateRequest(BaseModel):
    """Partial update; only fields present in the body are written."""

    name: Optional[str] = None
    position: Optional[str] = None
    offense_position: Optional[str] = None
    defense_position: Optional[str] = None
    school: Optional[str] = None
    state: Optional[str] = None
    grad_year: Optional[int] = None
    notes: Optional[str] = None
    flagged: Optional[bool] = None
    recruiting_statuses: Optional[List[str]] = None
    status_notes: Optional[str] = None
    committed_school: Optional[str] = None
    committed_date: Optional[str] = None
    composite_rating: Optional[float] = None

    @field_validator("recruiting_statuses")
    @classmethod
    def check_tags(cls, v):
        return _check_tags(v)
