"""Performance analytics: stat scoring, grade leaderboard, weekly top performances
and breakout detection.

All functions are deterministic and read-only with respect to the SQLite store.
"""

from __future__ import annotations

from .breakouts import compute_breakouts, find_breakout_players
from .leaders import compute_grade_leaderboard
from .performances import build_top_performances
from .scoring import aggregate_stats, calculate_stat_score, grade_to_numeric, grade_value_for_average

__all__ = [
    "aggregate_stats",
    "calculate_stat_score",
    "grade_to_numeric",
    "grade_value_for_average",
    "compute_grade_leaderboard",
    "build_top_performances",
    "compute_breakouts",
    "find_breakout_players",
]
