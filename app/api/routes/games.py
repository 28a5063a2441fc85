from __future__ import annotations

from fastapi import APIRouter, HTTPException

import state
from app.schemas.games import GameCreateRequest
from scout_repo import ScoutRepo

router = APIRouter()


@router.get("/api/games")
async def api_list_games():
    try:
        with ScoutRepo(state.get_db_path()) as repo:
            return repo.list_games()
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to list games: {e}") from e


@router.get("/api/games/{game_id}")
async def api_get_game(game_id: int):
    """Game detail with the players reviewed in it."""
    try:
        with ScoutRepo(state.get_db_path()) as repo:
            return repo.get_game(game_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to fetch game: {e}") from e


@router.post("/api/games", status_code=201)
async def api_create_game(req: GameCreateRequest):
    try:
        with ScoutRepo(state.get_db_path()) as repo:
            for pid in req.player_ids:
                repo.get_player(pid)
            return repo.create_game(req.model_dump(exclude={"player_ids"}), req.player_ids)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to create game: {e}") from e


@router.delete("/api/games/{game_id}")
async def api_delete_game(game_id: int):
    """Delete a game; its player links, stats and grades cascade."""
    try:
        with ScoutRepo(state.get_db_path()) as repo:
            repo.delete_game(game_id)
        return {"ok": True, "game_id": game_id}
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to delete game: {e}") from e
