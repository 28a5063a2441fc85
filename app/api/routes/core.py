from __future__ import annotations

from fastapi import APIRouter, HTTPException

import game_time
import state
from schema import SCHEMA_VERSION
from scout_repo import ScoutRepo

router = APIRouter()


@router.get("/")
async def root():
    """Simple landing / health hint."""
    return {"message": "Scouting board API. See /api/health and /docs."}


@router.get("/api/health")
async def api_health():
    try:
        with ScoutRepo(state.get_db_path()) as repo:
            repo.validate_integrity()
        return {"ok": True, "schema_version": SCHEMA_VERSION, "today": game_time.today().isoformat()}
    except ValueError as e:
        raise HTTPException(status_code=503, detail=f"Store integrity check failed: {e}") from e
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Health check failed: {e}") from e
