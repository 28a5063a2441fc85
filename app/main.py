from __future__ import annotations

import logging
import os

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import config
import state
from app.api.access import auth_enabled, is_authorized_writer
from app.api.router import api_router
from scout_repo import ScoutRepo

logger = logging.getLogger(__name__)

app = FastAPI(title="Scouting board API")

_MUTATING_METHODS = {"POST", "PUT", "PATCH", "DELETE"}


@app.on_event("startup")
def _startup_init_store() -> None:
    # 1) logging level from SCOUT_LOG_LEVEL
    # 2) DB path (required, no default) + schema apply/migrate
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    db_path = os.environ.get(config.DB_PATH_ENV)
    if not db_path:
        raise RuntimeError(f"{config.DB_PATH_ENV} is required (no default db_path).")
    state.set_db_path(db_path)

    try:
        with ScoutRepo(db_path) as repo:
            repo.init_db()
    except Exception as e:
        raise RuntimeError(f"init_db() failed during startup: {e}") from e
    logger.info("scouting store ready: db_path=%s", db_path)


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def _auth_guard_middleware(request: Request, call_next):
    """Optional auth guard.

    If SCOUT_ADMIN_TOKEN or SCOUT_STAFF_TOKEN is configured, require one of them on
    state-changing API calls.
    """
    if not auth_enabled():
        return await call_next(request)

    path = request.url.path or ""
    method = (request.method or "GET").upper()
    if method not in _MUTATING_METHODS or not path.startswith("/api/"):
        return await call_next(request)

    if not is_authorized_writer(request):
        return JSONResponse(status_code=401, content={"detail": "Unauthorized: invalid or missing token"})

    return await call_next(request)


@app.exception_handler(RequestValidationError)
async def _validation_error_handler(request: Request, exc: RequestValidationError):
    details = []
    for err in exc.errors():
        loc = [str(x) for x in (err.get("loc") or ()) if x not in ("body", "query", "path")]
        details.append({"field": ".".join(loc), "message": str(err.get("msg") or "")})
    return JSONResponse(status_code=400, content={"error": "Validation failed", "details": details})


app.include_router(api_router)
