from __future__ import annotations

"""Typed containers used by the performance analytics layer.

Raw inputs come straight from ScoutRepo as dict rows:

    grade row  -> {"game_id", "opponent", "date", "competition_level",
                   "player_id", "player_name", "player_school", "player_position",
                   "grade", "grade_notes"}
    stat event -> {"stat_type": str, "value": float}

This module defines:
- Normalized dataclasses used internally (`PlayerRef`, `GameRef`)
- TypedDicts used for JSON-like outputs (`LeaderboardRow`, `PerformanceEntry`, ...)
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, TypedDict


# ----------------------------
# Normalized internal records
# ----------------------------


@dataclass(frozen=True)
class PlayerRef:
    player_id: int
    name: str
    school: Optional[str]
    position: Optional[str]

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "PlayerRef":
        return cls(
            player_id=int(row["player_id"]),
            name=str(row.get("player_name") or ""),
            school=row.get("player_school"),
            position=row.get("player_position"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.player_id, "name": self.name, "school": self.school, "position": self.position}


@dataclass(frozen=True)
class GameRef:
    game_id: int
    opponent: Optional[str]
    date: Optional[str]
    competition_level: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "GameRef":
        return cls(
            game_id=int(row["game_id"]),
            opponent=row.get("opponent"),
            date=row.get("date") or row.get("game_date"),
            competition_level=row.get("competition_level"),
        )


# ----------------------------
# Output shapes
# ----------------------------


class PlayerPayload(TypedDict):
    id: int
    name: str
    school: Optional[str]
    position: Optional[str]


class ScoreBreakdown(TypedDict):
    grade: int
    stats: float
    composite: float


class PerformanceEntry(TypedDict):
    player: PlayerPayload
    game: Dict[str, Any]
    grade: Optional[str]
    gradeNotes: Optional[str]
    stats: Dict[str, float]
    scores: ScoreBreakdown


class LeaderboardRow(TypedDict):
    rank: int
    player: PlayerPayload
    gamesPlayed: int
    averageGrade: Optional[float]


class KeyStat(TypedDict):
    statType: str
    gameValue: float
    seasonAvg: float
    unit: str


class BreakoutEntry(TypedDict):
    player: PlayerPayload
    game: Dict[str, Any]
    grade: Optional[str]
    breakoutScore: float
    keyStats: List[KeyStat]


# ----------------------------
# Helpers
# ----------------------------


def coerce_float(value: Any, default: float = 0.0) -> float:
    try:
        if value is None:
            return float(default)
        return float(value)
    except (TypeError, ValueError):
        return float(default)
