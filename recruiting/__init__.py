"""Recruiting pipeline: status resolution, recruit sync and weekly reports.

Public API:
- resolve_recruiting_status(tags)
- sync_players_to_recruits(repo)
- populate_weekly_reports(repo, week_start_date)
- build_weekly_dossier(repo, week_start_date)
- save_weekly_report(repo, recruit_id, payload)
"""

from __future__ import annotations

from .errors import RecruitingError
from .reports import build_weekly_dossier, populate_weekly_reports, save_weekly_report
from .status import StatusResolution, resolve_recruiting_status
from .sync import sync_players_to_recruits

__all__ = [
    "RecruitingError",
    "StatusResolution",
    "resolve_recruiting_status",
    "sync_players_to_recruits",
    "populate_weekly_reports",
    "build_weekly_dossier",
    "save_weekly_report",
]
