"""Top-level package for derived analytics.

This package is *read-only* with respect to the source of truth (the SQLite store
behind ScoutRepo). Analytics modules compute derived views such as weekly top
performances, grade leaderboards and breakout candidates.
"""

from __future__ import annotations

from . import stats

__all__ = ["stats"]
