from __future__ import annotations

from fastapi import HTTPException

from recruiting.errors import RECRUITING_BUSY, RecruitingError


def recruiting_http_error(exc: RecruitingError) -> HTTPException:
    """Map a structured recruiting error to an HTTP error with the code preserved."""
    code = str(exc.code or "")
    if code.endswith("_NOT_FOUND"):
        status = 404
    elif "_BAD_" in code:
        status = 400
    elif code == RECRUITING_BUSY:
        status = 503
    else:
        status = 500
    return HTTPException(status_code=status, detail={"code": code, "message": exc.message, "details": exc.details})
