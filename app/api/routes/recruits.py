from __future__ import annotations

from fastapi import APIRouter, HTTPException

import state
from app.schemas.recruiting import (
    RecruitCreateRequest,
    RecruitNoteCreateRequest,
    RecruitNoteUpdateRequest,
    RecruitUpdateRequest,
)
from scout_repo import ScoutRepo

router = APIRouter()


# -------------------------------------------------------------------------
# Recruits
# -------------------------------------------------------------------------


@router.get("/api/recruits")
async def api_list_recruits():
    try:
        with ScoutRepo(state.get_db_path()) as repo:
            return repo.list_recruits()
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to list recruits: {e}") from e


@router.post("/api/recruits", status_code=201)
async def api_create_recruit(req: RecruitCreateRequest):
    try:
        with ScoutRepo(state.get_db_path()) as repo:
            if req.player_id is not None:
                repo.get_player(req.player_id)
            return repo.create_recruit(req.model_dump())
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to create recruit: {e}") from e


@router.put("/api/recruits/{recruit_id}")
async def api_update_recruit(recruit_id: int, req: RecruitUpdateRequest):
    """Partial update: omitted fields keep their stored value."""
    try:
        with ScoutRepo(state.get_db_path()) as repo:
            return repo.update_recruit(recruit_id, req.model_dump(exclude_unset=True))
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to update recruit: {e}") from e


# -------------------------------------------------------------------------
# Recruit notes
# -------------------------------------------------------------------------


@router.post("/api/recruit-notes", status_code=201)
async def api_create_recruit_note(req: RecruitNoteCreateRequest):
    try:
        with ScoutRepo(state.get_db_path()) as repo:
            return repo.create_note(req.model_dump())
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to create recruit note: {e}") from e


@router.put("/api/recruit-notes/{note_id}")
async def api_update_recruit_note(note_id: int, req: RecruitNoteUpdateRequest):
    try:
        with ScoutRepo(state.get_db_path()) as repo:
            return repo.update_note(note_id, req.model_dump(exclude_unset=True))
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to update recruit note: {e}") from e


@router.delete("/api/recruit-notes/{note_id}")
async def api_delete_recruit_note(note_id: int):
    try:
        with ScoutRepo(state.get_db_path()) as repo:
            repo.delete_note(note_id)
        return {"ok": True, "note_id": note_id}
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to delete recruit note: {e}") from e
