from __future__ import annotations

"""Fixed scoring tables.

Everything here is immutable (MappingProxyType / frozenset / tuple) and built once
at import time. Read through the lookup functions rather than the raw tables.
"""

from types import MappingProxyType
from typing import Any, Mapping, Optional


# Per-event weight. Magnitude types are weighted per unit (yards), so
# 100 rushing yards ~= one touchdown.
STAT_WEIGHTS: Mapping[str, float] = MappingProxyType(
    {
        # Touchdowns
        "Rush TD": 10.0,
        "Rec TD": 10.0,
        "Pass TD": 8.0,
        "TD": 10.0,
        # Defensive big plays
        "INT": 8.0,
        "Forced Fumble": 6.0,
        "Sack": 6.0,
        "TFL": 4.0,
        "PBU": 4.0,
        # Tackles
        "Tackle Solo": 2.0,
        "Tackle Assist": 1.0,
        # Receiving / passing (value = yards)
        "Reception": 0.1,
        "Pass Comp": 0.5,
        "Target": 0.0,
        # Kicking
        "FG": 5.0,
        "PAT": 1.0,
        "Kickoff": 0.0,
        "Punt": 0.0,
        # Yardage (value = yards)
        "Rush": 0.1,
        "Return": 0.1,
        # Negative plays
        "Fumble": -5.0,
        "Pass Inc": -0.5,
        "Sack Taken": -3.0,
    }
)

# Stat types where every event counts as exactly 1, whatever value was entered
# (the value column may hold the yardage of the play).
COUNT_STAT_TYPES: frozenset = frozenset(
    {
        "Rush TD",
        "Rec TD",
        "Pass TD",
        "TD",
        "INT",
        "Forced Fumble",
        "Sack",
        "TFL",
        "PBU",
        "Tackle Solo",
        "Tackle Assist",
        "FG",
        "PAT",
        "Fumble",
        "Sack Taken",
        # kicking attempt/make labels used by the K report
        "PAT Att",
        "PAT Made",
        "FG Att",
        "FG Made",
    }
)

GRADE_VALUES: Mapping[str, int] = MappingProxyType(
    {
        "A+": 100,
        "A": 95,
        "A-": 92,
        "B+": 88,
        "B": 85,
        "B-": 82,
        "C+": 78,
        "C": 75,
        "C-": 72,
        "D+": 68,
        "D": 65,
        "D-": 62,
        "F": 50,
    }
)

GRADE_LETTERS: tuple = tuple(GRADE_VALUES.keys())


def stat_weight(stat_type: Any) -> float:
    """Weight for a stat label. Unknown labels weigh 0."""
    if stat_type is None:
        return 0.0
    return STAT_WEIGHTS.get(str(stat_type), 0.0)


def is_count_stat(stat_type: Any) -> bool:
    return stat_type is not None and str(stat_type) in COUNT_STAT_TYPES


def grade_value(grade: Any) -> Optional[int]:
    if grade is None:
        return None
    key = str(grade).strip().upper()
    if not key:
        return None
    return GRADE_VALUES.get(key)
