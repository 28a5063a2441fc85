from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

import state
from app.api.access import is_admin, require_admin
from app.schemas.grades import GradeUpsertRequest
from scout_repo import ScoutRepo

router = APIRouter()


@router.get("/api/grades/{game_id}")
async def api_game_grades(game_id: int, request: Request):
    """Grades for every graded player in a game. admin_notes is only shown to admins."""
    try:
        with ScoutRepo(state.get_db_path()) as repo:
            repo.get_game(game_id)
            grades = repo.list_game_grades(game_id)
        if not is_admin(request):
            for g in grades:
                g.pop("admin_notes", None)
        return grades
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to fetch grades: {e}") from e


@router.put("/api/grades/{game_id}/{player_id}")
async def api_upsert_grade(game_id: int, player_id: int, req: GradeUpsertRequest, request: Request):
    """Create or merge a grade. Omitted/null fields keep their stored value."""
    sent = req.model_dump(exclude_unset=True)
    writes_admin_notes = "admin_notes" in sent
    if writes_admin_notes:
        require_admin(request, what="admin_notes")
    try:
        with ScoutRepo(state.get_db_path()) as repo:
            grade = repo.upsert_grade(game_id, player_id, sent, include_admin_notes=writes_admin_notes)
        if not is_admin(request):
            grade.pop("admin_notes", None)
        return grade
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to save grade: {e}") from e


@router.delete("/api/grades/{game_id}/{player_id}")
async def api_delete_grade(game_id: int, player_id: int):
    try:
        with ScoutRepo(state.get_db_path()) as repo:
            repo.delete_grade(game_id, player_id)
        return {"ok": True, "game_id": game_id, "player_id": player_id}
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to delete grade: {e}") from e
