"""db_schema package.

SQLite DDL + migrations for the scouting store, applied by ScoutRepo.init_db().

Public API:
- apply_schema(...)
"""

from .init import apply_schema  # noqa: F401

__all__ = ["apply_schema"]
