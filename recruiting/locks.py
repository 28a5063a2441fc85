from __future__ import annotations

"""recruiting.locks

Process-local lock serializing the recruit sync -> weekly report population
sequence, so two dossier requests in the same process do not interleave their
read-then-write phases.

Constraints:
- SQLite (ScoutRepo) is the SSOT. The store-level conditional upsert is what makes
  concurrent writers safe; this lock only narrows the window inside one process.
- threading.RLock based: it gives no cross-process exclusion (multiple uvicorn
  workers each hold their own lock). Callers must run on worker threads (sync
  FastAPI handlers); taken on the event-loop thread it excludes nothing.
- Lock order: recruiting_serial_lock -> ScoutRepo.transaction(...).
"""

import logging
from contextlib import contextmanager
from threading import RLock
from typing import Iterator

logger = logging.getLogger(__name__)

_RECRUITING_SERIAL_LOCK = RLock()


@contextmanager
def recruiting_serial_lock(*, reason: str = "", timeout_s: float | None = None) -> Iterator[None]:
    """Serialize recruiting sync/populate critical sections within a single process.

    Args:
        reason: free text for logs.
        timeout_s: seconds to wait for the lock. None waits forever.

    Raises:
        TimeoutError: the lock was not acquired within timeout_s.
        ValueError: timeout_s is not a number.

    Usage:
        with recruiting_serial_lock(reason="DOSSIER"):
            ...  # sync recruits + populate weekly reports
    """

    acquired = False
    if timeout_s is None:
        _RECRUITING_SERIAL_LOCK.acquire()
        acquired = True
    else:
        try:
            timeout = float(timeout_s)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"timeout_s must be a float seconds value, got: {timeout_s!r}") from exc
        if timeout < 0:
            timeout = 0.0
        acquired = _RECRUITING_SERIAL_LOCK.acquire(timeout=timeout)

    if not acquired:
        msg = f"recruiting_serial_lock timeout (timeout_s={timeout_s})"
        if reason:
            msg += f": {reason}"
        logger.warning(msg)
        raise TimeoutError(msg)

    try:
        yield
    finally:
        _RECRUITING_SERIAL_LOCK.release()


__all__ = [
    "recruiting_serial_lock",
]
