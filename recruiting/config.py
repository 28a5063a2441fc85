from __future__ import annotations

"""Fixed recruiting tables.

Immutable (MappingProxyType / frozenset / tuple), built at import time and read
through the lookup helpers at the bottom of this module.
"""

from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple

from schema import normalize_position

# ----------------------------
# Canonical statuses
# ----------------------------

STATUS_WATCHING = "WATCHING"
STATUS_EVALUATED = "EVALUATED"
STATUS_RECRUIT = "RECRUIT"
STATUS_OFFERED = "OFFERED"
STATUS_COMMITTED = "COMMITTED"
STATUS_COMMITTED_ELSEWHERE = "COMMITTED ELSEWHERE"
STATUS_SIGNED = "SIGNED"
STATUS_PASSED = "PASSED"

# lower-cased tag -> canonical status
STATUS_SYNONYMS: Mapping[str, str] = MappingProxyType(
    {
        "committed": STATUS_COMMITTED,
        "offered": STATUS_OFFERED,
        "offer": STATUS_OFFERED,
        "committed elsewhere": STATUS_COMMITTED_ELSEWHERE,
        "recruit": STATUS_RECRUIT,
        "interested": STATUS_RECRUIT,
        "priority": STATUS_RECRUIT,
        "evaluated": STATUS_EVALUATED,
        "evaluating": STATUS_EVALUATED,
        "signed": STATUS_SIGNED,
        "passed": STATUS_PASSED,
        "not interested": STATUS_PASSED,
        "watching": STATUS_WATCHING,
    }
)

# Highest first.
STATUS_PRIORITY: Tuple[str, ...] = (
    STATUS_SIGNED,
    STATUS_COMMITTED_ELSEWHERE,
    STATUS_COMMITTED,
    STATUS_OFFERED,
    STATUS_EVALUATED,
    STATUS_RECRUIT,
    STATUS_PASSED,
    STATUS_WATCHING,
)

# A player enters the weekly dossier once any of these is present.
ELIGIBLE_STATUSES: frozenset = frozenset(
    {STATUS_OFFERED, STATUS_COMMITTED, STATUS_COMMITTED_ELSEWHERE, STATUS_SIGNED}
)

# Tags accepted on the player record at the HTTP boundary.
PLAYER_TAG_VOCABULARY: Tuple[str, ...] = (
    "Watching",
    "Evaluating",
    "Interested",
    "Priority",
    "Offer",
    "Offered",
    "Committed",
    "Committed Elsewhere",
    "Signed",
    "Passed",
    "Not Interested",
)

# ----------------------------
# Positions
# ----------------------------

SIDE_OFFENSE = "OFFENSE"
SIDE_DEFENSE = "DEFENSE"
SIDE_SPECIAL = "SPECIAL"

POSITION_SIDE: Mapping[str, str] = MappingProxyType(
    {
        "QB": SIDE_OFFENSE,
        "RB": SIDE_OFFENSE,
        "WR": SIDE_OFFENSE,
        "TE": SIDE_OFFENSE,
        "OL": SIDE_OFFENSE,
        "DL": SIDE_DEFENSE,
        "DE": SIDE_DEFENSE,
        "LB": SIDE_DEFENSE,
        "C": SIDE_DEFENSE,
        "S": SIDE_DEFENSE,
        "K": SIDE_SPECIAL,
        "P": SIDE_SPECIAL,
    }
)

POSITION_COACH: Mapping[str, str] = MappingProxyType(
    {
        "QB": "Aaron Roderick",
        "RB": "Harvey Unga",
        "WR": "Fesi Sitake",
        "TE": "Kevin Gilbride",
        "OL": "TJ Woods",
        "DL": "Sione Po'uha",
        "DE": "Sione Po'uha",
        "LB": "Kelly Poppinga / Chad Kauha'aha'a",
        "C": "Lewis Walker",
        "S": "Demario Warren",
        "K": "Justin Ena",
        "P": "Justin Ena",
    }
)


def side_of_ball(position: Any) -> Optional[str]:
    pos = normalize_position(position)
    return POSITION_SIDE.get(pos) if pos else None


def coach_for_position(position: Any) -> Optional[str]:
    pos = normalize_position(position)
    return POSITION_COACH.get(pos) if pos else None


def is_known_player_tag(tag: str) -> bool:
    return tag in PLAYER_TAG_VOCABULARY
