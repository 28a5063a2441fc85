from __future__ import annotations

"""Grade leaderboard.

Turns (player, game, grade) rows into a ranked leaderboard of average letter grades.

Key features:
- Games played counts distinct games, graded or not
- Averages ignore missing/unknown grades; players without any numeric grade are
  kept and ranked after every graded player
- Deterministic ordering (unrounded average desc, then name, then player id);
  the average is rounded to one decimal only in the output
"""

import math
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set, Tuple

from .scoring import grade_value_for_average, round_half_up
from .types import LeaderboardRow, PlayerRef


class _Accumulator:
    __slots__ = ("player", "games", "grades")

    def __init__(self, player: PlayerRef):
        self.player = player
        self.games: Set[int] = set()
        self.grades: List[float] = []

    def average(self) -> Optional[float]:
        if not self.grades:
            return None
        return math.fsum(self.grades) / len(self.grades)


def _sort_key(acc: _Accumulator, avg: Optional[float]) -> Tuple:
    missing = avg is None
    return (missing, -(avg or 0.0), acc.player.name.lower(), acc.player.player_id)


def compute_grade_leaderboard(rows: Iterable[Mapping[str, Any]], *, limit: int = 10) -> List[LeaderboardRow]:
    """Rank players by average numeric grade.

    `rows` are appearance rows (one per game/player, grade may be None), already
    filtered to the requested date range. A (game, player) pair seen twice is
    counted once.
    """
    by_player: Dict[int, _Accumulator] = {}
    seen: Set[Tuple[int, int]] = set()
    for r in rows:
        pid = int(r["player_id"])
        gid = int(r["game_id"])
        acc = by_player.get(pid)
        if acc is None:
            acc = by_player[pid] = _Accumulator(PlayerRef.from_row(r))
        if (gid, pid) in seen:
            continue
        seen.add((gid, pid))
        acc.games.add(gid)
        value = grade_value_for_average(r.get("grade"))
        if value is not None:
            acc.grades.append(float(value))

    scored = [(acc, acc.average()) for acc in by_player.values()]
    scored.sort(key=lambda x: _sort_key(x[0], x[1]))

    out: List[LeaderboardRow] = []
    for i, (acc, avg) in enumerate(scored[: max(int(limit), 0)], start=1):
        out.append(
            {
                "rank": i,
                "player": acc.player.to_dict(),  # type: ignore[typeddict-item]
                "gamesPlayed": len(acc.games),
                "averageGrade": round_half_up(avg, 1) if avg is not None else None,
            }
        )
    return out
