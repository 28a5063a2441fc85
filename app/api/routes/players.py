from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException

import state
from app.schemas.players import PlayerCreateRequest, PlayerUpdateRequest
from scout_repo import ScoutRepo

router = APIRouter()


@router.get("/api/players")
async def api_list_players(recruiting_status: Optional[str] = None):
    """All scouted players, optionally filtered by one recruiting tag."""
    try:
        with ScoutRepo(state.get_db_path()) as repo:
            return repo.list_players(recruiting_status=recruiting_status)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to list players: {e}") from e


@router.get("/api/players/{player_id}")
async def api_get_player(player_id: int):
    try:
        with ScoutRepo(state.get_db_path()) as repo:
            return repo.get_player(player_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to fetch player: {e}") from e


@router.post("/api/players", status_code=201)
async def api_create_player(req: PlayerCreateRequest):
    try:
        with ScoutRepo(state.get_db_path()) as repo:
            return repo.create_player(req.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to create player: {e}") from e


@router.put("/api/players/{player_id}")
async def api_update_player(player_id: int, req: PlayerUpdateRequest):
    """Partial update: only fields present in the body are written."""
    try:
        with ScoutRepo(state.get_db_path()) as repo:
            return repo.update_player(player_id, req.model_dump(exclude_unset=True))
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to update player: {e}") from e
