from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException

import config
import game_time
import state
from analytics.stats import build_top_performances, compute_grade_leaderboard, find_breakout_players
from scout_repo import ScoutRepo

router = APIRouter()


def _clamp_limit(limit: Optional[int], default: int) -> int:
    if limit is None or limit <= 0:
        return default
    return min(int(limit), config.MAX_LIST_LIMIT)


@router.get("/api/performances/top")
async def api_top_performances(limit: Optional[int] = None):
    """Best stat lines of the current calendar week (Sunday..Saturday)."""
    lim = _clamp_limit(limit, config.TOP_PERFORMANCES_DEFAULT_LIMIT)
    try:
        with ScoutRepo(state.get_db_path()) as repo:
            return build_top_performances(repo, limit=lim, ref=game_time.today())
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to fetch top performances: {e}") from e


@router.get("/api/performances/leaderboard")
async def api_grade_leaderboard(
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    limit: Optional[int] = None,
):
    """Players ranked by average letter grade over an optional date range."""
    lim = _clamp_limit(limit, config.LEADERBOARD_DEFAULT_LIMIT)
    try:
        start = game_time.optional_date_iso(start_date, field="start_date")
        end = game_time.optional_date_iso(end_date, field="end_date")
        with ScoutRepo(state.get_db_path()) as repo:
            rows = repo.list_grade_rows(start_date=start, end_date=end)
        return {"leaderboard": compute_grade_leaderboard(rows, limit=lim)}
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to fetch leaderboard: {e}") from e


@router.get("/api/performances/breakouts")
async def api_breakout_players(limit: Optional[int] = None, threshold: Optional[float] = None):
    lim = _clamp_limit(limit, config.BREAKOUT_DEFAULT_LIMIT)
    thr = threshold if threshold is not None and threshold > 0 else config.BREAKOUT_DEFAULT_THRESHOLD
    try:
        with ScoutRepo(state.get_db_path()) as repo:
            return find_breakout_players(repo, limit=lim, threshold=thr)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to fetch breakout players: {e}") from e
