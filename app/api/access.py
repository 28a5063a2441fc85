from __future__ import annotations

"""Caller access checks shared by the auth middleware and the routes.

Tokens come from the environment (read per request so tests can monkeypatch them):
- SCOUT_ADMIN_TOKEN: full access, including grade admin_notes
- SCOUT_STAFF_TOKEN: may mutate data, but not admin-only fields

With neither token configured the service runs in single-user mode and every
caller is treated as admin.
"""

import os
from typing import Optional

from fastapi import HTTPException, Request

import config

ADMIN_HEADER = "X-Admin-Token"
STAFF_HEADER = "X-Staff-Token"


def _env_token(name: str) -> str:
    return (os.environ.get(name) or "").strip()


def auth_enabled() -> bool:
    return bool(_env_token(config.ADMIN_TOKEN_ENV) or _env_token(config.STAFF_TOKEN_ENV))


def _header(request: Request, name: str) -> str:
    return (request.headers.get(name) or "").strip()


def is_admin(request: Request) -> bool:
    if not auth_enabled():
        return True
    admin_token = _env_token(config.ADMIN_TOKEN_ENV)
    return bool(admin_token) and _header(request, ADMIN_HEADER) == admin_token


def is_authorized_writer(request: Request) -> bool:
    if is_admin(request):
        return True
    staff_token = _env_token(config.STAFF_TOKEN_ENV)
    return bool(staff_token) and _header(request, STAFF_HEADER) == staff_token


def require_admin(request: Request, *, what: Optional[str] = None) -> None:
    if not is_admin(request):
        raise HTTPException(status_code=403, detail=f"Forbidden: admin only{f' ({what})' if what else ''}")
