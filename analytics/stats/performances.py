from __future__ import annotations

"""Top performances of the current calendar week."""

import datetime as _dt
import logging
from typing import Any, Dict, List, Optional

import game_time

from .scoring import aggregate_stats, calculate_stat_score, grade_to_numeric
from .types import GameRef, PerformanceEntry, PlayerRef

logger = logging.getLogger(__name__)


def build_top_performances(repo, *, limit: int = 5, ref: Optional[_dt.date] = None) -> Dict[str, Any]:
    """Score every reviewed (game, player) pair of the week and return the best `limit`.

    Ranking uses the stats score only; the letter grade is reported alongside.
    """
    start, end = game_time.current_week_range(ref)
    week = game_time.week_payload(start, end)

    rows = repo.list_grade_rows(start_date=start.isoformat(), end_date=end.isoformat())
    if not rows:
        return {
            "week": week,
            "performances": [],
            "totalEvaluated": 0,
            "message": "No games found for this week",
        }

    combos: Dict[tuple, Dict[str, Any]] = {}
    for r in rows:
        combos.setdefault((int(r["game_id"]), int(r["player_id"])), r)

    events_by_pair = repo.list_stat_events_for_pairs(combos.keys())

    performances: List[PerformanceEntry] = []
    for key, r in combos.items():
        events = events_by_pair.get(key, [])
        stat_score = calculate_stat_score(events)
        game = GameRef.from_row(r)
        performances.append(
            {
                "player": PlayerRef.from_row(r).to_dict(),  # type: ignore[typeddict-item]
                "game": {
                    "id": game.game_id,
                    "opponent": game.opponent,
                    "date": game.date,
                    "competitionLevel": game.competition_level,
                },
                "grade": r.get("grade"),
                "gradeNotes": r.get("grade_notes"),
                "stats": aggregate_stats(events),
                "scores": {
                    "grade": grade_to_numeric(r.get("grade")),
                    "stats": stat_score,
                    "composite": stat_score,
                },
            }
        )

    # stable sort: equal composites keep the (date desc, game id desc) row order
    performances.sort(key=lambda p: -p["scores"]["composite"])
    logger.debug("top performances: week=%s evaluated=%s", week["label"], len(performances))
    return {
        "week": week,
        "performances": performances[: max(int(limit), 0)],
        "totalEvaluated": len(performances),
    }
