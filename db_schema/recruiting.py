"""SQLite SSOT schema: recruiting tables.

Tables:
- recruits:
    Recruit tracking rows. Optionally linked to a scouted player (player_id).
    At most one recruit per linked player (partial unique index) so concurrent
    synchronizations cannot create duplicates.

- recruit_weekly_reports:
    Per-recruit, per-week dossier rows. Unique per (recruit_id, week_start_date).
    stats_json is the position-shaped stats object; once it is non-empty the row
    belongs to a human editor and automated population never rewrites it.

- recruit_notes:
    Dated news/notes attached to a recruit for a given report week.
"""

from __future__ import annotations

import sqlite3
from typing import Callable, Mapping

# Signature compatible with ScoutRepo._ensure_table_columns(cur, table, columns)
EnsureColumnsFn = Callable[[sqlite3.Cursor, str, Mapping[str, str]], None]


def ddl(*, now: str, schema_version: str) -> str:
    """Return DDL SQL for recruiting tables."""
    _ = (now, schema_version)
    return """

                -- ---------------------------------------------------------------------
                -- Recruits
                -- ---------------------------------------------------------------------
                CREATE TABLE IF NOT EXISTS recruits (
                    recruit_id INTEGER PRIMARY KEY AUTOINCREMENT,
                    player_id INTEGER,                       -- NULL for manually entered prospects
                    name TEXT NOT NULL,
                    school TEXT NOT NULL DEFAULT '',
                    state TEXT,
                    class_year INTEGER,
                    position TEXT,
                    side_of_ball TEXT,                       -- OFFENSE / DEFENSE / SPECIAL
                    status TEXT NOT NULL DEFAULT 'WATCHING', -- canonical status
                    assigned_coach TEXT,
                    committed_school TEXT,
                    committed_date TEXT,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL,
                    FOREIGN KEY(player_id) REFERENCES players(player_id) ON DELETE SET NULL
                );

                CREATE UNIQUE INDEX IF NOT EXISTS uq_recruits_player
                    ON recruits(player_id)
                    WHERE player_id IS NOT NULL;

                CREATE INDEX IF NOT EXISTS idx_recruits_status
                    ON recruits(status);


                -- ---------------------------------------------------------------------
                -- Weekly reports
                -- ---------------------------------------------------------------------
                CREATE TABLE IF NOT EXISTS recruit_weekly_reports (
                    report_id INTEGER PRIMARY KEY AUTOINCREMENT,
                    recruit_id INTEGER NOT NULL,
                    week_start_date TEXT NOT NULL,           -- YYYY-MM-DD
                    week_end_date TEXT NOT NULL,             -- YYYY-MM-DD
                    last_game_date TEXT,
                    last_game_opponent TEXT,
                    last_game_score TEXT,
                    last_game_result TEXT,                   -- Win / Loss
                    next_game_date TEXT,
                    next_game_time TEXT,
                    next_game_opponent TEXT,
                    next_game_location TEXT,
                    stats_json TEXT NOT NULL DEFAULT '{}',
                    other_stats_json TEXT NOT NULL DEFAULT '[]',
                    notes TEXT NOT NULL DEFAULT '',
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL,
                    FOREIGN KEY(recruit_id) REFERENCES recruits(recruit_id) ON DELETE CASCADE
                );

                -- Idempotency: one report per recruit per week
                CREATE UNIQUE INDEX IF NOT EXISTS uq_recruit_weekly_reports_recruit_week
                    ON recruit_weekly_reports(recruit_id, week_start_date);

                CREATE INDEX IF NOT EXISTS idx_recruit_weekly_reports_week
                    ON recruit_weekly_reports(week_start_date);


                -- ---------------------------------------------------------------------
                -- Notes
                -- ---------------------------------------------------------------------
                CREATE TABLE IF NOT EXISTS recruit_notes (
                    note_id INTEGER PRIMARY KEY AUTOINCREMENT,
                    recruit_id INTEGER NOT NULL,
                    week_start_date TEXT NOT NULL,
                    note_date TEXT,
                    source TEXT,
                    link TEXT,
                    summary TEXT,
                    quote TEXT,
                    created_at TEXT NOT NULL,
                    FOREIGN KEY(recruit_id) REFERENCES recruits(recruit_id) ON DELETE CASCADE
                );

                CREATE INDEX IF NOT EXISTS idx_recruit_notes_week
                    ON recruit_notes(week_start_date);
"""


def migrate(cur: sqlite3.Cursor, *, ensure_columns: EnsureColumnsFn) -> None:
    """Optional post-DDL migrations for recruiting tables."""
    ensure_columns(
        cur,
        "recruit_weekly_reports",
        {
            "next_game_time": "TEXT",
            "next_game_location": "TEXT",
        },
    )
