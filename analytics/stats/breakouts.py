from __future__ import annotations

"""Breakout detection.

A player "breaks out" when their latest game clearly beats their own baseline from
earlier games:

- magnitude stats (yards): z-score of the latest-game total against the per-event
  mean / population std-dev of earlier games
- count stats (TDs, sacks, ...): latest-game count against the per-game rate of
  earlier games; a ratio above 1.5 contributes `ratio - 1`

The breakout score is the mean of the contributing terms. Players with no stat type
seen at least twice in earlier games have no baseline and are skipped.
"""

import math
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from .scoring import aggregate_stats, round_half_up
from .tables import COUNT_STAT_TYPES, is_count_stat
from .types import BreakoutEntry, GameRef, KeyStat, PlayerRef, coerce_float

MIN_BASELINE_SAMPLES = 2
COUNT_RATIO_TRIGGER = 1.5
KEY_STATS_LIMIT = 3

GradeLookup = Callable[[int, int], Optional[str]]


def _key_stat_ratio(ks: KeyStat) -> float:
    avg = ks["seasonAvg"]
    return ks["gameValue"] / avg if avg > 0 else ks["gameValue"]


def _score_player(events: List[Mapping[str, Any]]) -> Optional[Tuple[GameRef, float, float, int, List[KeyStat]]]:
    games: Dict[int, GameRef] = {}
    for ev in events:
        gid = int(ev["game_id"])
        if gid not in games:
            games[gid] = GameRef.from_row(ev)
    if len(games) < 2:
        return None

    latest = max(games.values(), key=lambda g: (g.date or "", g.game_id))
    latest_events = [ev for ev in events if int(ev["game_id"]) == latest.game_id]
    earlier = [ev for ev in events if int(ev["game_id"]) != latest.game_id]

    values_by_type: Dict[str, List[float]] = {}
    games_by_type: Dict[str, set] = {}
    for ev in earlier:
        t = str(ev["stat_type"])
        values_by_type.setdefault(t, []).append(coerce_float(ev.get("value"), 0.0))
        games_by_type.setdefault(t, set()).add(int(ev["game_id"]))

    if not any(len(v) >= MIN_BASELINE_SAMPLES for v in values_by_type.values()):
        return None

    game_stats = aggregate_stats(latest_events)
    raw = 0.0
    scored = 0
    key_stats: List[KeyStat] = []

    for stat_type, game_value in game_stats.items():
        if is_count_stat(stat_type):
            continue
        baseline = values_by_type.get(stat_type) or []
        if len(baseline) < MIN_BASELINE_SAMPLES:
            continue
        mean = math.fsum(baseline) / len(baseline)
        std = math.sqrt(math.fsum((x - mean) ** 2 for x in baseline) / len(baseline))
        if std <= 0:
            continue
        z = (float(game_value) - mean) / std
        if z > 0:
            raw += z
            scored += 1
            key_stats.append(
                {
                    "statType": stat_type,
                    "gameValue": round_half_up(game_value, 1),
                    "seasonAvg": round_half_up(mean, 1),
                    "unit": "yds",
                }
            )

    for stat_type in sorted(COUNT_STAT_TYPES):
        n_games = len(games_by_type.get(stat_type) or ())
        if n_games < MIN_BASELINE_SAMPLES:
            continue
        game_value = game_stats.get(stat_type)
        if game_value is None:
            continue
        rate = len(values_by_type[stat_type]) / n_games
        if rate <= 0:
            continue
        ratio = float(game_value) / rate
        if ratio > COUNT_RATIO_TRIGGER:
            raw += ratio - 1
            scored += 1
            key_stats.append(
                {
                    "statType": stat_type,
                    "gameValue": game_value,
                    "seasonAvg": round_half_up(rate, 1),
                    "unit": "",
                }
            )

    return latest, raw, 0.0 if scored == 0 else raw / scored, scored, key_stats


def compute_breakouts(
    history: Iterable[Mapping[str, Any]],
    *,
    grade_lookup: GradeLookup,
    limit: int = 10,
    threshold: float = 1.5,
) -> List[BreakoutEntry]:
    """Rank breakout players from every stat event on record.

    `history` rows carry player_id/player_name/player_school/player_position,
    game_id/game_date/opponent and stat_type/value.
    """
    by_player: Dict[int, List[Mapping[str, Any]]] = {}
    for ev in history:
        by_player.setdefault(int(ev["player_id"]), []).append(ev)

    out: List[BreakoutEntry] = []
    for pid, events in by_player.items():
        result = _score_player(events)
        if result is None:
            continue
        latest, raw, mean_term, scored, key_stats = result
        if scored == 0 or raw < threshold:
            continue
        score = round_half_up(mean_term, 1)
        if score < threshold:
            continue
        key_stats.sort(key=_key_stat_ratio, reverse=True)
        out.append(
            {
                "player": PlayerRef.from_row(events[0]).to_dict(),  # type: ignore[typeddict-item]
                "game": {"id": latest.game_id, "opponent": latest.opponent, "date": latest.date},
                "grade": grade_lookup(latest.game_id, pid),
                "breakoutScore": score,
                "keyStats": key_stats[:KEY_STATS_LIMIT],
            }
        )

    out.sort(key=lambda b: (-b["breakoutScore"], b["player"]["id"]))
    return out[: max(int(limit), 0)]


def find_breakout_players(repo, *, limit: int = 10, threshold: float = 1.5) -> Dict[str, Any]:
    def _grade(game_id: int, player_id: int) -> Optional[str]:
        row = repo.get_grade(game_id, player_id)
        return (row or {}).get("grade") or None

    players = compute_breakouts(repo.list_stat_history(), grade_lookup=_grade, limit=limit, threshold=threshold)
    return {"breakoutPlayers": players}
