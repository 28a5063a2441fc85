"""
Pytest fixtures for the scouting board.

Provides:
- a fresh SQLite store per test (tmp_path) with the schema applied
- a pinned service clock (Wednesday 2026-10-21)
- small factories for players / games / stats / grades
- a FastAPI TestClient bound to the temp store
"""

import datetime as dt
from typing import Any, Dict, Iterable, Optional

import pytest

import state
from scout_repo import ScoutRepo

# Wednesday. Calendar week = Sun 2026-10-18 .. Sat 2026-10-24,
# report week (Tuesday anchor) = 2026-10-20 .. 2026-10-25.
PINNED_TODAY = dt.date(2026, 10, 21)
REPORT_WEEK = "2026-10-20"


@pytest.fixture(autouse=True)
def _reset_state():
    state.reset()
    yield
    state.reset()


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "scouting.sqlite3")


@pytest.fixture
def repo(db_path):
    r = ScoutRepo(db_path)
    r.init_db()
    try:
        yield r
    finally:
        r.close()


@pytest.fixture
def pinned_today():
    state.set_today_override(PINNED_TODAY)
    return PINNED_TODAY


# ============================================================================
# FACTORIES
# ============================================================================


@pytest.fixture
def make_player(repo):
    def _make(name: str = "Jalen Moana", *, position: Optional[str] = "QB", tags: Iterable[str] = (), **extra: Any) -> Dict[str, Any]:
        payload = {"name": name, "position": position, "recruiting_statuses": list(tags), "school": "Timpview HS", "state": "UT", "grad_year": 2027}
        payload.update(extra)
        return repo.create_player(payload)

    return _make


@pytest.fixture
def make_game(repo):
    def _make(date: str, *, opponent: str = "Lone Peak", player_ids: Iterable[int] = ()) -> Dict[str, Any]:
        return repo.create_game({"opponent": opponent, "date": date}, player_ids)

    return _make


@pytest.fixture
def add_stats(repo):
    def _add(game_id: int, player_id: int, events: Iterable[tuple]) -> None:
        for stat_type, value in events:
            repo.add_stat({"game_id": game_id, "player_id": player_id, "stat_type": stat_type, "value": value})

    return _add


# ============================================================================
# HTTP
# ============================================================================


@pytest.fixture
def client(db_path, pinned_today, monkeypatch):
    from fastapi.testclient import TestClient

    from app.main import app

    monkeypatch.setenv("SCOUT_DB_PATH", db_path)
    monkeypatch.delenv("SCOUT_ADMIN_TOKEN", raising=False)
    monkeypatch.delenv("SCOUT_STAFF_TOKEN", raising=False)
    with TestClient(app) as c:
        yield c
