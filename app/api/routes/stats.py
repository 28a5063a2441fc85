from __future__ import annotations

from fastapi import APIRouter, HTTPException

import state
from app.schemas.stats import StatCreateRequest, StatUpdateRequest
from scout_repo import ScoutRepo

router = APIRouter()


@router.post("/api/stats", status_code=201)
async def api_add_stat(req: StatCreateRequest):
    """Record one observed stat event (also links the player to the game)."""
    try:
        with ScoutRepo(state.get_db_path()) as repo:
            repo.get_game(req.game_id)
            repo.get_player(req.player_id)
            return repo.add_stat(req.model_dump())
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to add stat: {e}") from e


@router.get("/api/stats/game/{game_id}")
async def api_game_stats(game_id: int):
    try:
        with ScoutRepo(state.get_db_path()) as repo:
            repo.get_game(game_id)
            return repo.list_game_stats(game_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to fetch game stats: {e}") from e


@router.put("/api/stats/{stat_id}")
async def api_update_stat(stat_id: int, req: StatUpdateRequest):
    try:
        with ScoutRepo(state.get_db_path()) as repo:
            return repo.update_stat(stat_id, req.model_dump(exclude_unset=True))
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to update stat: {e}") from e


@router.delete("/api/stats/{stat_id}")
async def api_delete_stat(stat_id: int):
    try:
        with ScoutRepo(state.get_db_path()) as repo:
            deleted = repo.delete_stat(stat_id)
        return {"ok": True, "stat": deleted}
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to delete stat: {e}") from e
