# db_schema/registry.py
"""Schema registry + applier.

Each schema module exposes:
- ddl(now=..., schema_version=...) -> str   (idempotent CREATE ... IF NOT EXISTS)
- migrate(cur, ensure_columns=...)          (optional, post-DDL column backfills)
"""

from __future__ import annotations

import sqlite3
from types import ModuleType
from typing import Callable, Iterable, Mapping


# Signature compatible with ScoutRepo._ensure_table_columns(cur, table, columns)
EnsureColumnsFn = Callable[[sqlite3.Cursor, str, Mapping[str, str]], None]


def apply_all(
    cur: sqlite3.Cursor,
    *,
    modules: Iterable[ModuleType],
    now: str,
    schema_version: str,
    ensure_columns: EnsureColumnsFn,
) -> None:
    """Apply schema modules.

    Steps:
    1) execute each module's DDL script (in order)
    2) run migrate() for modules that define it
    """
    modules = list(modules)
    for m in modules:
        # executescript() would COMMIT the caller's transaction; run statements one by one.
        for stmt in _split_statements(m.ddl(now=now, schema_version=schema_version)):
            cur.execute(stmt)

    for m in modules:
        migrate = getattr(m, "migrate", None)
        if migrate is None:
            continue
        migrate(cur, ensure_columns=ensure_columns)


def _split_statements(script: str) -> list[str]:
    out: list[str] = []
    buf: list[str] = []
    for line in script.splitlines():
        if line.strip().startswith("--"):
            continue
        buf.append(line)
        candidate = "\n".join(buf)
        if sqlite3.complete_statement(candidate):
            stmt = candidate.strip()
            if stmt and stmt != ";":
                out.append(stmt)
            buf = []
    tail = "\n".join(buf).strip()
    if tail:
        out.append(tail)
    return out
