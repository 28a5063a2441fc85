from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException

import state
from app.api.errors import recruiting_http_error
from app.schemas.recruiting import WeeklyReportUpsertRequest
from recruiting import RecruitingError, build_weekly_dossier, save_weekly_report
from scout_repo import ScoutRepo

router = APIRouter()


@router.get("/api/recruit-reports")
def api_recruit_reports(week_start_date: Optional[str] = None):
    """Weekly dossier: sync recruits, fill the week's reports, return recruits + notes.

    Plain def so each request runs on a worker thread and recruiting_serial_lock
    serializes concurrent dossier builds.
    """
    if not week_start_date:
        raise HTTPException(status_code=400, detail="week_start_date is required")
    try:
        with ScoutRepo(state.get_db_path()) as repo:
            return build_weekly_dossier(repo, week_start_date)
    except RecruitingError as e:
        raise recruiting_http_error(e) from e
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to build recruit reports: {e}") from e


@router.put("/api/recruit-reports/{recruit_id}")
async def api_upsert_recruit_report(recruit_id: int, req: WeeklyReportUpsertRequest):
    """Manual report edit. Every field in the body replaces the stored value."""
    try:
        with ScoutRepo(state.get_db_path()) as repo:
            return save_weekly_report(repo, recruit_id, req.model_dump())
    except RecruitingError as e:
        raise recruiting_http_error(e) from e
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to save recruit report: {e}") from e
