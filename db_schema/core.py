# db_schema/core.py
"""SQLite SSOT schema: core scouting tables.

Tables:
- meta:               schema_version / created_at
- players:            scouted players (recruiting tags stored as a JSON array)
- games:              reviewed games
- game_players:       which players were reviewed in which game
- stats:              raw stat events (no uniqueness on game/player/stat_type)
- game_player_grades: at most one grade row per (game, player)

This module contains *only* DDL and schema migrations.
It must not import ScoutRepo (to avoid circular imports).
"""

from __future__ import annotations

import sqlite3
from typing import Callable, Mapping


# Signature compatible with ScoutRepo._ensure_table_columns(cur, table, columns)
EnsureColumnsFn = Callable[[sqlite3.Cursor, str, Mapping[str, str]], None]


def ddl(*, now: str, schema_version: str) -> str:
    """Return DDL SQL for core tables."""
    return f"""
                CREATE TABLE IF NOT EXISTS meta (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                );

                INSERT INTO meta(key, value) VALUES ('schema_version', '{schema_version}')
                ON CONFLICT(key) DO UPDATE SET value=excluded.value;
                INSERT OR IGNORE INTO meta(key, value) VALUES ('created_at', '{now}');

                CREATE TABLE IF NOT EXISTS players (
                    player_id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT NOT NULL,
                    position TEXT,
                    offense_position TEXT,
                    defense_position TEXT,
                    school TEXT,
                    state TEXT,
                    grad_year INTEGER,
                    notes TEXT,
                    flagged INTEGER NOT NULL DEFAULT 0,
                    recruiting_statuses_json TEXT NOT NULL DEFAULT '[]', -- free-form tags
                    status_notes TEXT,
                    committed_school TEXT,
                    committed_date TEXT,
                    composite_rating REAL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );

                CREATE INDEX IF NOT EXISTS idx_players_name ON players(name);

                CREATE TABLE IF NOT EXISTS games (
                    game_id INTEGER PRIMARY KEY AUTOINCREMENT,
                    opponent TEXT NOT NULL,
                    date TEXT,                       -- YYYY-MM-DD
                    location TEXT,
                    competition_level TEXT,
                    video_url TEXT,
                    notes TEXT,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );

                CREATE INDEX IF NOT EXISTS idx_games_date ON games(date);

                CREATE TABLE IF NOT EXISTS game_players (
                    game_id INTEGER NOT NULL,
                    player_id INTEGER NOT NULL,
                    PRIMARY KEY (game_id, player_id),
                    FOREIGN KEY(game_id) REFERENCES games(game_id) ON DELETE CASCADE,
                    FOREIGN KEY(player_id) REFERENCES players(player_id) ON DELETE CASCADE
                );

                CREATE INDEX IF NOT EXISTS idx_game_players_player ON game_players(player_id);

                CREATE TABLE IF NOT EXISTS stats (
                    stat_id INTEGER PRIMARY KEY AUTOINCREMENT,
                    game_id INTEGER NOT NULL,
                    player_id INTEGER NOT NULL,
                    stat_type TEXT NOT NULL,
                    value REAL NOT NULL DEFAULT 0,
                    timestamp TEXT,                  -- game clock, free text
                    period TEXT,
                    note TEXT,
                    created_at TEXT NOT NULL,
                    FOREIGN KEY(game_id) REFERENCES games(game_id) ON DELETE CASCADE,
                    FOREIGN KEY(player_id) REFERENCES players(player_id) ON DELETE CASCADE
                );

                CREATE INDEX IF NOT EXISTS idx_stats_game_player ON stats(game_id, player_id);
                CREATE INDEX IF NOT EXISTS idx_stats_player ON stats(player_id);

                CREATE TABLE IF NOT EXISTS game_player_grades (
                    game_id INTEGER NOT NULL,
                    player_id INTEGER NOT NULL,
                    grade TEXT,                      -- letter grade (A+ .. F)
                    notes TEXT,
                    admin_notes TEXT,
                    game_score TEXT,                 -- e.g. 'W 35-14'
                    team_record TEXT,
                    next_opponent TEXT,
                    next_game_date TEXT,             -- MM/DD/YYYY or YYYY-MM-DD (as entered)
                    verified INTEGER NOT NULL DEFAULT 0,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL,
                    PRIMARY KEY (game_id, player_id),
                    FOREIGN KEY(game_id) REFERENCES games(game_id) ON DELETE CASCADE,
                    FOREIGN KEY(player_id) REFERENCES players(player_id) ON DELETE CASCADE
                );
"""


def migrate(cur: sqlite3.Cursor, *, ensure_columns: EnsureColumnsFn) -> None:
    """Backfill columns added after the first schema release."""
    ensure_columns(
        cur,
        "players",
        {
            "composite_rating": "REAL",
            "status_notes": "TEXT",
        },
    )
    ensure_columns(
        cur,
        "game_player_grades",
        {
            "team_record": "TEXT",
            "verified": "INTEGER NOT NULL DEFAULT 0",
        },
    )
