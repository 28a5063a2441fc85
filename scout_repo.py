# scout_repo.py
# Developer note:
# - SQLite DB is the single source of truth (SSOT) for persisted scouting data.
# - Excel files are import/export only (no runtime reads/writes).
# - Row ids are SQLite integers; always normalize path/body ids with schema.normalize_id.
"""
ScoutRepo: persisted-data SSOT (SQLite)

Usage (CLI):
  python scout_repo.py init --db <db_path>
  python scout_repo.py import_players --db <db_path> --excel players.xlsx
  python scout_repo.py export_reports --db <db_path> --week 2026-10-20 --excel week.xlsx
  python scout_repo.py validate --db <db_path>

Python:
  from scout_repo import ScoutRepo
  with ScoutRepo("<db_path>") as repo:
      repo.init_db()
      player = repo.get_player(1)
"""

from __future__ import annotations

import argparse
import contextlib
import json
import logging
import sqlite3
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import game_time
from schema import SCHEMA_VERSION, clean_tags, normalize_id, normalize_position, parse_tags

logger = logging.getLogger(__name__)
_WARN_COUNTS: Dict[str, int] = {}


# ----------------------------
# Helpers
# ----------------------------

def _warn_limited(code: str, msg: str, *, limit: int = 5) -> None:
    n = _WARN_COUNTS.get(code, 0)
    if n < limit:
        logger.warning("%s %s", code, msg)
    _WARN_COUNTS[code] = n + 1


def _json_dumps(obj: Any) -> str:
    return json.dumps(
        obj,
        ensure_ascii=False,
        separators=(",", ":"),
        sort_keys=True,
        default=str,
    )


def _json_loads(value: Any, default: Any):
    """
    Safe JSON loader:
    - None -> default
    - already dict/list -> returns as-is
    - invalid JSON -> default
    """
    if value is None:
        return default
    if isinstance(value, (dict, list)):
        return value
    try:
        return json.loads(value)
    except (json.JSONDecodeError, TypeError):
        _warn_limited("JSON_DECODE_FAILED", f"value_preview={repr(str(value))[:120]}", limit=3)
        return default


def _blank_to_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    s = str(value).strip()
    if not s or s.lower() in {"nan", "none"}:
        return None
    return s


def _recruit_status(value: Any, fallback: str) -> str:
    # recruiting imports this module at load time
    from recruiting.status import canonical_recruit_status

    return canonical_recruit_status(value) or fallback


def _int_or_none(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        f = float(value)
    except (TypeError, ValueError):
        return None
    if f != f:  # NaN from Excel cells
        return None
    return int(f)


PLAYER_FIELDS: Tuple[str, ...] = (
    "name",
    "position",
    "offense_position",
    "defense_position",
    "school",
    "state",
    "grad_year",
    "notes",
    "flagged",
    "status_notes",
    "committed_school",
    "committed_date",
    "composite_rating",
)

GRADE_FIELDS: Tuple[str, ...] = (
    "grade",
    "notes",
    "game_score",
    "team_record",
    "next_opponent",
    "next_game_date",
    "verified",
)

RECRUIT_FIELDS: Tuple[str, ...] = (
    "player_id",
    "name",
    "school",
    "state",
    "class_year",
    "position",
    "side_of_ball",
    "status",
    "assigned_coach",
    "committed_school",
    "committed_date",
)

NOTE_FIELDS: Tuple[str, ...] = ("note_date", "source", "link", "summary", "quote")

COMMITTED_ELSEWHERE_TAG = "committed elsewhere"


def player_row_to_dict(row: Mapping[str, Any]) -> Dict[str, Any]:
    d = dict(row)
    d["recruiting_statuses"] = parse_tags(d.pop("recruiting_statuses_json", None))
    if "flagged" in d:
        d["flagged"] = bool(d.get("flagged") or 0)
    return d


def report_row_to_dict(row: Mapping[str, Any]) -> Dict[str, Any]:
    d = dict(row)
    stats = _json_loads(d.pop("stats_json", None), {})
    other = _json_loads(d.pop("other_stats_json", None), [])
    d["stats"] = stats if isinstance(stats, dict) else {}
    d["other_stats"] = other if isinstance(other, list) else []
    return d


# ----------------------------
# Repository
# ----------------------------

class ScoutRepo:
    def __init__(self, db_path: str | Path):
        self.db_path = str(db_path)
        self._conn = sqlite3.connect(self.db_path)
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA foreign_keys = ON;")
        self._conn.execute("PRAGMA journal_mode = WAL;")
        self._conn.execute("PRAGMA busy_timeout = 5000;")
        # Nested transaction support (SAVEPOINT) for callers that compose repo methods.
        self._savepoint_seq = 0

    def close(self) -> None:
        try:
            self._conn.close()
        except sqlite3.Error:
            logger.warning("ScoutRepo close failed: db_path=%s", self.db_path, exc_info=True)

    @contextlib.contextmanager
    def transaction(self):
        """
        Atomic transaction helper.

        Supports nesting via SAVEPOINT:
        - outermost: BEGIN IMMEDIATE ... COMMIT/ROLLBACK
        - nested: SAVEPOINT ... RELEASE (or ROLLBACK TO + RELEASE on error)
        """
        cur = self._conn.cursor()
        nested = bool(getattr(self._conn, "in_transaction", False))
        sp_name = None
        try:
            if nested:
                self._savepoint_seq += 1
                sp_name = f"sp_{self._savepoint_seq}"
                cur.execute(f"SAVEPOINT {sp_name};")
            else:
                self._conn.execute("BEGIN IMMEDIATE;")

            yield cur

            if nested and sp_name:
                cur.execute(f"RELEASE SAVEPOINT {sp_name};")
            else:
                self._conn.commit()
        except Exception:
            if nested and sp_name:
                # Roll back to the savepoint only; the outer transaction decides for itself.
                try:
                    cur.execute(f"ROLLBACK TO SAVEPOINT {sp_name};")
                finally:
                    cur.execute(f"RELEASE SAVEPOINT {sp_name};")
            else:
                self._conn.rollback()
            raise
        finally:
            cur.close()

    # ------------------------
    # Schema
    # ------------------------

    def _ensure_table_columns(self, cur: sqlite3.Cursor, table: str, columns: Mapping[str, str]) -> None:
        """SQLite has no ADD COLUMN IF NOT EXISTS; check PRAGMA table_info first."""
        rows = cur.execute(f"PRAGMA table_info({table});").fetchall()
        existing = {r["name"] for r in rows}
        for col, ddl in columns.items():
            if col in existing:
                continue
            cur.execute(f"ALTER TABLE {table} ADD COLUMN {col} {ddl};")

    def init_db(self) -> None:
        """Apply SQLite schema (DDL + migrations) via db_schema."""
        from db_schema import apply_schema

        now = game_time.now_utc_iso()
        with self.transaction() as cur:
            apply_schema(
                cur,
                now=now,
                schema_version=SCHEMA_VERSION,
                ensure_columns=self._ensure_table_columns,
            )

    # ------------------------
    # Players
    # ------------------------

    @staticmethod
    def _effective_committed(tags: Sequence[str], school: Any, date: Any) -> Tuple[Optional[str], Optional[str]]:
        # committed school/date are only meaningful for players committed elsewhere
        if any(t.strip().lower() == COMMITTED_ELSEWHERE_TAG for t in tags):
            return _blank_to_none(school), _blank_to_none(date)
        return None, None

    def create_player(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        name = _blank_to_none(data.get("name"))
        if not name:
            raise ValueError("name is required")
        tags = clean_tags(data.get("recruiting_statuses"))
        committed_school, committed_date = self._effective_committed(
            tags, data.get("committed_school"), data.get("committed_date")
        )
        now = game_time.now_utc_iso()
        with self.transaction() as cur:
            cur.execute(
                """
                INSERT INTO players(
                    name, position, offense_position, defense_position, school, state, grad_year,
                    notes, flagged, recruiting_statuses_json, status_notes, committed_school,
                    committed_date, composite_rating, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?);
                """,
                (
                    name,
                    normalize_position(data.get("position")),
                    normalize_position(data.get("offense_position")),
                    normalize_position(data.get("defense_position")),
                    _blank_to_none(data.get("school")),
                    _blank_to_none(data.get("state")),
                    _int_or_none(data.get("grad_year")),
                    _blank_to_none(data.get("notes")),
                    1 if data.get("flagged") else 0,
                    _json_dumps(tags),
                    _blank_to_none(data.get("status_notes")),
                    committed_school,
                    committed_date,
                    data.get("composite_rating"),
                    now,
                    now,
                ),
            )
            player_id = int(cur.lastrowid)
        return self.get_player(player_id)

    def update_player(self, player_id: Any, data: Mapping[str, Any]) -> Dict[str, Any]:
        """Partial update: keys absent from `data` keep their stored value."""
        pid = normalize_id(player_id, field="player_id")
        current = self.get_player(pid)

        merged: Dict[str, Any] = {k: current.get(k) for k in PLAYER_FIELDS}
        for k in PLAYER_FIELDS:
            if k in data:
                merged[k] = data[k]
        tags = clean_tags(data["recruiting_statuses"]) if "recruiting_statuses" in data else current["recruiting_statuses"]
        committed_school, committed_date = self._effective_committed(
            tags, merged.get("committed_school"), merged.get("committed_date")
        )
        if not _blank_to_none(merged.get("name")):
            raise ValueError("name is required")

        with self.transaction() as cur:
            cur.execute(
                """
                UPDATE players
                SET name=?, position=?, offense_position=?, defense_position=?, school=?, state=?,
                    grad_year=?, notes=?, flagged=?, recruiting_statuses_json=?, status_notes=?,
                    committed_school=?, committed_date=?, composite_rating=?, updated_at=?
                WHERE player_id=?;
                """,
                (
                    str(merged["name"]).strip(),
                    normalize_position(merged.get("position")),
                    normalize_position(merged.get("offense_position")),
                    normalize_position(merged.get("defense_position")),
                    _blank_to_none(merged.get("school")),
                    _blank_to_none(merged.get("state")),
                    _int_or_none(merged.get("grad_year")),
                    _blank_to_none(merged.get("notes")),
                    1 if merged.get("flagged") else 0,
                    _json_dumps(tags),
                    _blank_to_none(merged.get("status_notes")),
                    committed_school,
                    committed_date,
                    merged.get("composite_rating"),
                    game_time.now_utc_iso(),
                    pid,
                ),
            )
        return self.get_player(pid)

    def get_player(self, player_id: Any) -> Dict[str, Any]:
        pid = normalize_id(player_id, field="player_id")
        row = self._conn.execute("SELECT * FROM players WHERE player_id=?;", (pid,)).fetchone()
        if not row:
            raise KeyError(f"player not found: {player_id}")
        return player_row_to_dict(row)

    def list_players(self, *, recruiting_status: Optional[str] = None) -> List[Dict[str, Any]]:
        rows = self._conn.execute("SELECT * FROM players ORDER BY name ASC, player_id ASC;").fetchall()
        out = [player_row_to_dict(r) for r in rows]
        if recruiting_status:
            wanted = recruiting_status.strip().lower()
            out = [p for p in out if any(t.lower() == wanted for t in p["recruiting_statuses"])]
        return out

    def list_tagged_players(self) -> List[Dict[str, Any]]:
        """Players carrying at least one recruiting tag (input of the recruit sync)."""
        rows = self._conn.execute(
            """
            SELECT *
            FROM players
            WHERE recruiting_statuses_json IS NOT NULL
              AND TRIM(recruiting_statuses_json) NOT IN ('', '[]')
            ORDER BY player_id ASC;
            """
        ).fetchall()
        return [p for p in (player_row_to_dict(r) for r in rows) if p["recruiting_statuses"]]

    # ------------------------
    # Games
    # ------------------------

    def create_game(self, data: Mapping[str, Any], player_ids: Iterable[Any] = ()) -> Dict[str, Any]:
        opponent = _blank_to_none(data.get("opponent"))
        if not opponent:
            raise ValueError("opponent is required")
        pids = sorted({normalize_id(p, field="player_id") for p in player_ids or ()})
        now = game_time.now_utc_iso()
        with self.transaction() as cur:
            cur.execute(
                """
                INSERT INTO games(opponent, date, location, competition_level, video_url, notes, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?);
                """,
                (
                    opponent,
                    game_time.optional_date_iso(data.get("date"), field="date"),
                    _blank_to_none(data.get("location")),
                    _blank_to_none(data.get("competition_level")),
                    _blank_to_none(data.get("video_url")),
                    _blank_to_none(data.get("notes")),
                    now,
                    now,
                ),
            )
            game_id = int(cur.lastrowid)
            cur.executemany(
                "INSERT OR IGNORE INTO game_players(game_id, player_id) VALUES (?, ?);",
                [(game_id, pid) for pid in pids],
            )
        return self.get_game(game_id)

    def add_game_players(self, game_id: Any, player_ids: Iterable[Any]) -> None:
        gid = normalize_id(game_id, field="game_id")
        pids = sorted({normalize_id(p, field="player_id") for p in player_ids})
        with self.transaction() as cur:
            cur.executemany(
                "INSERT OR IGNORE INTO game_players(game_id, player_id) VALUES (?, ?);",
                [(gid, pid) for pid in pids],
            )

    def get_game(self, game_id: Any) -> Dict[str, Any]:
        gid = normalize_id(game_id, field="game_id")
        row = self._conn.execute("SELECT * FROM games WHERE game_id=?;", (gid,)).fetchone()
        if not row:
            raise KeyError(f"game not found: {game_id}")
        game = dict(row)
        players = self._conn.execute(
            """
            SELECT p.*
            FROM players p
            JOIN game_players gp ON gp.player_id = p.player_id
            WHERE gp.game_id=?
            ORDER BY p.name ASC, p.player_id ASC;
            """,
            (gid,),
        ).fetchall()
        game["players"] = [player_row_to_dict(p) for p in players]
        return game

    def list_games(self) -> List[Dict[str, Any]]:
        rows = self._conn.execute(
            """
            SELECT g.*, GROUP_CONCAT(gp.player_id) AS player_ids_csv
            FROM games g
            LEFT JOIN game_players gp ON gp.game_id = g.game_id
            GROUP BY g.game_id
            ORDER BY g.date DESC, g.game_id DESC;
            """
        ).fetchall()
        out: List[Dict[str, Any]] = []
        for r in rows:
            d = dict(r)
            csv = d.pop("player_ids_csv", None)
            d["player_ids"] = sorted(int(x) for x in str(csv).split(",")) if csv else []
            out.append(d)
        return out

    def delete_game(self, game_id: Any) -> None:
        gid = normalize_id(game_id, field="game_id")
        with self.transaction() as cur:
            cur.execute("DELETE FROM games WHERE game_id=?;", (gid,))
            if cur.rowcount == 0:
                raise KeyError(f"game not found: {game_id}")

    # ------------------------
    # Stat events
    # ------------------------

    def add_stat(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        gid = normalize_id(data.get("game_id"), field="game_id")
        pid = normalize_id(data.get("player_id"), field="player_id")
        stat_type = _blank_to_none(data.get("stat_type"))
        if not stat_type:
            raise ValueError("stat_type is required")
        value = data.get("value")
        with self.transaction() as cur:
            cur.execute(
                """
                INSERT INTO stats(game_id, player_id, stat_type, value, timestamp, period, note, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?);
                """,
                (
                    gid,
                    pid,
                    stat_type,
                    float(value) if value is not None else 0.0,
                    _blank_to_none(data.get("timestamp")),
                    _blank_to_none(data.get("period")),
                    _blank_to_none(data.get("note")),
                    game_time.now_utc_iso(),
                ),
            )
            stat_id = int(cur.lastrowid)
            # A stat entry implies the player appeared in the game.
            cur.execute("INSERT OR IGNORE INTO game_players(game_id, player_id) VALUES (?, ?);", (gid, pid))
        return self.get_stat(stat_id)

    def get_stat(self, stat_id: Any) -> Dict[str, Any]:
        sid = normalize_id(stat_id, field="stat_id")
        row = self._conn.execute(
            """
            SELECT s.*, p.name AS player_name, p.position AS player_position
            FROM stats s
            LEFT JOIN players p ON p.player_id = s.player_id
            WHERE s.stat_id=?;
            """,
            (sid,),
        ).fetchone()
        if not row:
            raise KeyError(f"stat not found: {stat_id}")
        return dict(row)

    def update_stat(self, stat_id: Any, data: Mapping[str, Any]) -> Dict[str, Any]:
        current = self.get_stat(stat_id)
        merged = {k: data.get(k, current.get(k)) for k in ("stat_type", "value", "timestamp", "period", "note")}
        if not _blank_to_none(merged["stat_type"]):
            raise ValueError("stat_type is required")
        with self.transaction() as cur:
            cur.execute(
                """
                UPDATE stats
                SET stat_type=?, value=?, timestamp=?, period=?, note=?
                WHERE stat_id=?;
                """,
                (
                    str(merged["stat_type"]).strip(),
                    float(merged["value"]) if merged["value"] is not None else 0.0,
                    _blank_to_none(merged["timestamp"]),
                    _blank_to_none(merged["period"]),
                    _blank_to_none(merged["note"]),
                    int(current["stat_id"]),
                ),
            )
        return self.get_stat(current["stat_id"])

    def delete_stat(self, stat_id: Any) -> Dict[str, Any]:
        current = self.get_stat(stat_id)
        with self.transaction() as cur:
            cur.execute("DELETE FROM stats WHERE stat_id=?;", (int(current["stat_id"]),))
        return current

    def list_game_stats(self, game_id: Any) -> List[Dict[str, Any]]:
        gid = normalize_id(game_id, field="game_id")
        rows = self._conn.execute(
            """
            SELECT s.*, p.name AS player_name, p.position AS player_position
            FROM stats s
            LEFT JOIN players p ON p.player_id = s.player_id
            WHERE s.game_id=?
            ORDER BY s.created_at DESC, s.stat_id DESC;
            """,
            (gid,),
        ).fetchall()
        return [dict(r) for r in rows]

    def list_stat_events_for_pairs(self, pairs: Iterable[Tuple[int, int]]) -> Dict[Tuple[int, int], List[Dict[str, Any]]]:
        """Batch fetch raw stat events for many (game_id, player_id) pairs in one query."""
        wanted = sorted({(int(g), int(p)) for g, p in pairs})
        out: Dict[Tuple[int, int], List[Dict[str, Any]]] = {k: [] for k in wanted}
        if not wanted:
            return out
        game_ids = sorted({g for g, _ in wanted})
        player_ids = sorted({p for _, p in wanted})
        sql = f"""
            SELECT game_id, player_id, stat_type, value
            FROM stats
            WHERE game_id IN ({",".join("?" * len(game_ids))})
              AND player_id IN ({",".join("?" * len(player_ids))})
            ORDER BY stat_id ASC;
        """
        for r in self._conn.execute(sql, (*game_ids, *player_ids)).fetchall():
            key = (int(r["game_id"]), int(r["player_id"]))
            if key in out:
                out[key].append({"stat_type": r["stat_type"], "value": r["value"]})
        return out

    def list_stat_history(self) -> List[Dict[str, Any]]:
        """Every stat event joined with its game (breakout detection input)."""
        rows = self._conn.execute(
            """
            SELECT s.player_id, p.name AS player_name, p.school AS player_school, p.position AS player_position,
                   s.game_id, g.date AS game_date, g.opponent, s.stat_type, s.value
            FROM stats s
            JOIN games g ON g.game_id = s.game_id
            JOIN players p ON p.player_id = s.player_id
            ORDER BY s.player_id ASC, s.stat_id ASC;
            """
        ).fetchall()
        return [dict(r) for r in rows]

    # ------------------------
    # Grades
    # ------------------------

    def list_game_grades(self, game_id: Any) -> List[Dict[str, Any]]:
        gid = normalize_id(game_id, field="game_id")
        rows = self._conn.execute(
            """
            SELECT gr.*, p.name AS player_name
            FROM game_player_grades gr
            LEFT JOIN players p ON p.player_id = gr.player_id
            WHERE gr.game_id=?
            ORDER BY p.name ASC;
            """,
            (gid,),
        ).fetchall()
        out = []
        for r in rows:
            d = dict(r)
            d["verified"] = bool(d.get("verified") or 0)
            out.append(d)
        return out

    def get_grade(self, game_id: Any, player_id: Any) -> Optional[Dict[str, Any]]:
        gid = normalize_id(game_id, field="game_id")
        pid = normalize_id(player_id, field="player_id")
        row = self._conn.execute(
            "SELECT * FROM game_player_grades WHERE game_id=? AND player_id=?;",
            (gid, pid),
        ).fetchone()
        if not row:
            return None
        d = dict(row)
        d["verified"] = bool(d.get("verified") or 0)
        return d

    def upsert_grade(
        self,
        game_id: Any,
        player_id: Any,
        data: Mapping[str, Any],
        *,
        include_admin_notes: bool = False,
    ) -> Dict[str, Any]:
        """Insert or merge a grade row. Omitted/None fields keep the stored value.

        admin_notes is only written when include_admin_notes is True (admin callers);
        in that case the caller's value replaces the stored one, None included.
        """
        gid = normalize_id(game_id, field="game_id")
        pid = normalize_id(player_id, field="player_id")
        self.get_game(gid)
        self.get_player(pid)

        existing = self.get_grade(gid, pid) or {}
        merged: Dict[str, Any] = {}
        for k in GRADE_FIELDS:
            v = data.get(k)
            merged[k] = v if v is not None else existing.get(k)
        admin_notes = data.get("admin_notes") if include_admin_notes else existing.get("admin_notes")
        now = game_time.now_utc_iso()

        with self.transaction() as cur:
            cur.execute(
                """
                INSERT INTO game_player_grades(
                    game_id, player_id, grade, notes, admin_notes, game_score, team_record,
                    next_opponent, next_game_date, verified, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(game_id, player_id) DO UPDATE SET
                    grade=excluded.grade,
                    notes=excluded.notes,
                    admin_notes=excluded.admin_notes,
                    game_score=excluded.game_score,
                    team_record=excluded.team_record,
                    next_opponent=excluded.next_opponent,
                    next_game_date=excluded.next_game_date,
                    verified=excluded.verified,
                    updated_at=excluded.updated_at;
                """,
                (
                    gid,
                    pid,
                    _blank_to_none(merged["grade"]),
                    merged["notes"],
                    admin_notes,
                    _blank_to_none(merged["game_score"]),
                    _blank_to_none(merged["team_record"]),
                    _blank_to_none(merged["next_opponent"]),
                    _blank_to_none(merged["next_game_date"]),
                    1 if merged["verified"] else 0,
                    now,
                    now,
                ),
            )
            # keep the game/player link consistent with graded appearances
            cur.execute("INSERT OR IGNORE INTO game_players(game_id, player_id) VALUES (?, ?);", (gid, pid))
        out = self.get_grade(gid, pid)
        assert out is not None
        return out

    def delete_grade(self, game_id: Any, player_id: Any) -> None:
        gid = normalize_id(game_id, field="game_id")
        pid = normalize_id(player_id, field="player_id")
        with self.transaction() as cur:
            cur.execute("DELETE FROM game_player_grades WHERE game_id=? AND player_id=?;", (gid, pid))
            if cur.rowcount == 0:
                raise KeyError(f"grade not found: game_id={gid} player_id={pid}")

    # ------------------------
    # Performance reads
    # ------------------------

    def list_grade_rows(self, *, start_date: Optional[str] = None, end_date: Optional[str] = None) -> List[Dict[str, Any]]:
        """(game, player, grade) rows for every reviewed appearance in a date range.

        Bounds are inclusive and applied independently. Ordered by game date desc.
        """
        where: List[str] = []
        params: List[Any] = []
        if start_date:
            where.append("g.date >= ?")
            params.append(start_date)
        if end_date:
            where.append("g.date <= ?")
            params.append(end_date)
        sql = f"""
            SELECT
                g.game_id, g.opponent, g.date, g.competition_level,
                p.player_id, p.name AS player_name, p.school AS player_school,
                p.position AS player_position,
                gr.grade, gr.notes AS grade_notes
            FROM games g
            JOIN game_players gp ON gp.game_id = g.game_id
            JOIN players p ON p.player_id = gp.player_id
            LEFT JOIN game_player_grades gr ON gr.game_id = g.game_id AND gr.player_id = p.player_id
            {("WHERE " + " AND ".join(where)) if where else ""}
            ORDER BY g.date DESC, g.game_id DESC, p.player_id ASC;
        """
        return [dict(r) for r in self._conn.execute(sql, tuple(params)).fetchall()]

    # ------------------------
    # Recruits
    # ------------------------

    def list_recruits(self) -> List[Dict[str, Any]]:
        rows = self._conn.execute("SELECT * FROM recruits ORDER BY created_at DESC, recruit_id DESC;").fetchall()
        return [dict(r) for r in rows]

    def get_recruit(self, recruit_id: Any) -> Dict[str, Any]:
        rid = normalize_id(recruit_id, field="recruit_id")
        row = self._conn.execute("SELECT * FROM recruits WHERE recruit_id=?;", (rid,)).fetchone()
        if not row:
            raise KeyError(f"recruit not found: {recruit_id}")
        return dict(row)

    @contextlib.contextmanager
    def _recruit_write(self):
        try:
            with self.transaction() as cur:
                yield cur
        except sqlite3.IntegrityError as e:
            # uq_recruits_player or the players foreign key
            raise ValueError(f"Recruit player link conflict: {e}") from e

    def create_recruit(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        name = _blank_to_none(data.get("name"))
        if not name:
            raise ValueError("name is required")
        player_id = data.get("player_id")
        pid = normalize_id(player_id, field="player_id") if player_id is not None else None
        status = _recruit_status(data.get("status"), "WATCHING")
        now = game_time.now_utc_iso()
        with self._recruit_write() as cur:
            cur.execute(
                """
                INSERT INTO recruits(
                    player_id, name, school, state, class_year, position, side_of_ball, status,
                    assigned_coach, committed_school, committed_date, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?);
                """,
                (
                    pid,
                    name,
                    str(data.get("school") or ""),
                    _blank_to_none(data.get("state")),
                    _int_or_none(data.get("class_year")),
                    normalize_position(data.get("position")),
                    _blank_to_none(data.get("side_of_ball")),
                    status,
                    _blank_to_none(data.get("assigned_coach")),
                    _blank_to_none(data.get("committed_school")),
                    _blank_to_none(data.get("committed_date")),
                    now,
                    now,
                ),
            )
            recruit_id = int(cur.lastrowid)
        return self.get_recruit(recruit_id)

    def update_recruit(self, recruit_id: Any, data: Mapping[str, Any]) -> Dict[str, Any]:
        """Partial update: None/absent fields keep the stored value."""
        current = self.get_recruit(recruit_id)
        merged = {k: (data.get(k) if data.get(k) is not None else current.get(k)) for k in RECRUIT_FIELDS}
        if data.get("status") is not None:
            merged["status"] = _recruit_status(data["status"], current["status"])
        with self._recruit_write() as cur:
            cur.execute(
                """
                UPDATE recruits
                SET player_id=?, name=?, school=?, state=?, class_year=?, position=?, side_of_ball=?,
                    status=?, assigned_coach=?, committed_school=?, committed_date=?, updated_at=?
                WHERE recruit_id=?;
                """,
                (
                    normalize_id(merged["player_id"], field="player_id") if merged["player_id"] is not None else None,
                    merged["name"],
                    merged["school"] or "",
                    merged["state"],
                    _int_or_none(merged["class_year"]),
                    normalize_position(merged["position"]),
                    merged["side_of_ball"],
                    merged["status"],
                    merged["assigned_coach"],
                    merged["committed_school"],
                    merged["committed_date"],
                    game_time.now_utc_iso(),
                    int(current["recruit_id"]),
                ),
            )
        return self.get_recruit(current["recruit_id"])

    # ------------------------
    # Weekly reports (manual path)
    # ------------------------

    def get_weekly_report(self, recruit_id: Any, week_start_date: str) -> Optional[Dict[str, Any]]:
        rid = normalize_id(recruit_id, field="recruit_id")
        row = self._conn.execute(
            "SELECT * FROM recruit_weekly_reports WHERE recruit_id=? AND week_start_date=?;",
            (rid, week_start_date),
        ).fetchone()
        return report_row_to_dict(row) if row else None

    def upsert_weekly_report(self, recruit_id: Any, week_start_date: Any, data: Mapping[str, Any]) -> Dict[str, Any]:
        """Manual upsert of one week's report. Caller-supplied fields always win."""
        recruit = self.get_recruit(recruit_id)
        rid = int(recruit["recruit_id"])
        week_start = game_time.require_date_iso(week_start_date, field="week_start_date")
        week_end = game_time.require_date_iso(data.get("week_end_date"), field="week_end_date")
        stats = data.get("stats") or {}
        other_stats = data.get("other_stats") or []
        if not isinstance(stats, dict):
            raise ValueError("stats must be an object")
        if not isinstance(other_stats, list):
            raise ValueError("other_stats must be a list")
        now = game_time.now_utc_iso()
        with self.transaction() as cur:
            cur.execute(
                """
                INSERT INTO recruit_weekly_reports(
                    recruit_id, week_start_date, week_end_date, last_game_date, last_game_opponent,
                    last_game_score, last_game_result, next_game_date, next_game_time,
                    next_game_opponent, next_game_location, stats_json, other_stats_json, notes,
                    created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(recruit_id, week_start_date) DO UPDATE SET
                    week_end_date=excluded.week_end_date,
                    last_game_date=excluded.last_game_date,
                    last_game_opponent=excluded.last_game_opponent,
                    last_game_score=excluded.last_game_score,
                    last_game_result=excluded.last_game_result,
                    next_game_date=excluded.next_game_date,
                    next_game_time=excluded.next_game_time,
                    next_game_opponent=excluded.next_game_opponent,
                    next_game_location=excluded.next_game_location,
                    stats_json=excluded.stats_json,
                    other_stats_json=excluded.other_stats_json,
                    notes=excluded.notes,
                    updated_at=excluded.updated_at;
                """,
                (
                    rid,
                    week_start,
                    week_end,
                    data.get("last_game_date"),
                    data.get("last_game_opponent"),
                    data.get("last_game_score"),
                    data.get("last_game_result"),
                    data.get("next_game_date"),
                    data.get("next_game_time"),
                    data.get("next_game_opponent"),
                    data.get("next_game_location"),
                    _json_dumps(stats),
                    _json_dumps(other_stats),
                    data.get("notes") or "",
                    now,
                    now,
                ),
            )
        out = self.get_weekly_report(rid, week_start)
        assert out is not None
        return out

    # ------------------------
    # Recruit notes
    # ------------------------

    def create_note(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        recruit = self.get_recruit(data.get("recruit_id"))
        week_start = game_time.require_date_iso(data.get("week_start_date"), field="week_start_date")
        with self.transaction() as cur:
            cur.execute(
                """
                INSERT INTO recruit_notes(recruit_id, week_start_date, note_date, source, link, summary, quote, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?);
                """,
                (
                    int(recruit["recruit_id"]),
                    week_start,
                    game_time.optional_date_iso(data.get("note_date"), field="note_date"),
                    data.get("source"),
                    data.get("link"),
                    data.get("summary"),
                    data.get("quote"),
                    game_time.now_utc_iso(),
                ),
            )
            note_id = int(cur.lastrowid)
        return self.get_note(note_id)

    def get_note(self, note_id: Any) -> Dict[str, Any]:
        nid = normalize_id(note_id, field="note_id")
        row = self._conn.execute("SELECT * FROM recruit_notes WHERE note_id=?;", (nid,)).fetchone()
        if not row:
            raise KeyError(f"note not found: {note_id}")
        return dict(row)

    def update_note(self, note_id: Any, data: Mapping[str, Any]) -> Dict[str, Any]:
        current = self.get_note(note_id)
        merged = {k: (data.get(k) if data.get(k) is not None else current.get(k)) for k in NOTE_FIELDS}
        with self.transaction() as cur:
            cur.execute(
                """
                UPDATE recruit_notes
                SET note_date=?, source=?, link=?, summary=?, quote=?
                WHERE note_id=?;
                """,
                (
                    game_time.optional_date_iso(merged["note_date"], field="note_date"),
                    merged["source"],
                    merged["link"],
                    merged["summary"],
                    merged["quote"],
                    int(current["note_id"]),
                ),
            )
        return self.get_note(current["note_id"])

    def delete_note(self, note_id: Any) -> None:
        current = self.get_note(note_id)
        with self.transaction() as cur:
            cur.execute("DELETE FROM recruit_notes WHERE note_id=?;", (int(current["note_id"]),))

    def list_notes_for_week(self, week_start_date: str) -> List[Dict[str, Any]]:
        rows = self._conn.execute(
            """
            SELECT *
            FROM recruit_notes
            WHERE week_start_date=?
            ORDER BY note_date IS NULL, note_date DESC, created_at DESC, note_id DESC;
            """,
            (week_start_date,),
        ).fetchall()
        return [dict(r) for r in rows]

    # ------------------------
    # Excel import/export
    # ------------------------

    def import_players_excel(self, excel_path: str | Path, *, sheet_name: Optional[str] = None) -> int:
        """Import scouted players from Excel (one row per player). Returns rows imported.

        Required column: name. recruiting_statuses may be a comma/semicolon separated list.
        """
        import pandas as pd

        df = pd.read_excel(str(excel_path), sheet_name=sheet_name or 0)
        cols = [str(c).strip() for c in df.columns]
        df.columns = cols
        if "name" not in cols:
            raise ValueError(f"Excel is missing required column 'name' (found: {cols})")

        count = 0
        for i, row in df.iterrows():
            name = _blank_to_none(row.get("name"))
            if not name:
                _warn_limited("EXCEL_ROW_WITHOUT_NAME", f"row_index={i}", limit=5)
                continue
            payload: Dict[str, Any] = {k: row.get(k) for k in PLAYER_FIELDS if k in cols}
            for k in ("position", "offense_position", "defense_position", "school", "state", "notes",
                      "status_notes", "committed_school", "committed_date"):
                if k in payload:
                    payload[k] = _blank_to_none(payload[k])
            if "grad_year" in payload:
                payload["grad_year"] = _int_or_none(payload["grad_year"])
            if "composite_rating" in payload:
                rating = payload["composite_rating"]
                payload["composite_rating"] = None if rating is None or rating != rating else float(rating)
            payload["flagged"] = bool(_int_or_none(payload.get("flagged")) or 0)
            payload["recruiting_statuses"] = parse_tags(_blank_to_none(row.get("recruiting_statuses")))
            self.create_player(payload)
            count += 1
        logger.info("imported %s players from %s", count, excel_path)
        return count

    def export_weekly_reports_excel(self, week_start_date: Any, excel_path: str | Path) -> int:
        """Export one week's reports (flattened stats columns) to Excel. Returns rows written."""
        import pandas as pd

        week_start = game_time.require_date_iso(week_start_date, field="week_start_date")
        rows = self._conn.execute(
            """
            SELECT r.name, r.position, r.side_of_ball, r.status, r.school, r.assigned_coach,
                   rr.*
            FROM recruit_weekly_reports rr
            JOIN recruits r ON r.recruit_id = rr.recruit_id
            WHERE rr.week_start_date=?
            ORDER BY r.side_of_ball IS NULL, r.side_of_ball, r.position IS NULL, r.position, r.name;
            """,
            (week_start,),
        ).fetchall()

        out: List[Dict[str, Any]] = []
        for r in rows:
            d = report_row_to_dict(r)
            stats = d.pop("stats")
            d["other_stats"] = "; ".join(str(x) for x in d.get("other_stats") or [])
            for k, v in sorted(stats.items()):
                d[f"stat_{k}"] = v
            out.append(d)

        df = pd.DataFrame(out)
        df.to_excel(str(excel_path), index=False)
        return len(out)

    # ------------------------
    # Integrity
    # ------------------------

    def validate_integrity(self) -> None:
        """Fail fast on schema drift / dangling references / bad JSON payloads."""
        row = self._conn.execute("SELECT value FROM meta WHERE key='schema_version';").fetchone()
        if not row:
            raise ValueError("DB meta.schema_version missing (run init_db)")
        if row["value"] != SCHEMA_VERSION:
            raise ValueError(f"DB schema_version {row['value']} != expected {SCHEMA_VERSION}")

        bad = self._conn.execute(
            """
            SELECT s.stat_id
            FROM stats s
            LEFT JOIN game_players gp ON gp.game_id = s.game_id AND gp.player_id = s.player_id
            WHERE gp.game_id IS NULL;
            """
        ).fetchall()
        if bad:
            raise ValueError(f"stats rows without a game_players link: {[x['stat_id'] for x in bad]}")

        for r in self._conn.execute("SELECT player_id, recruiting_statuses_json FROM players;").fetchall():
            raw = r["recruiting_statuses_json"]
            try:
                obj = json.loads(raw) if raw else []
            except json.JSONDecodeError as exc:
                raise ValueError(f"players.recruiting_statuses_json invalid JSON (player_id={r['player_id']}): {exc}") from exc
            if not isinstance(obj, list):
                raise ValueError(f"players.recruiting_statuses_json must be a list (player_id={r['player_id']})")

        for r in self._conn.execute("SELECT report_id, stats_json FROM recruit_weekly_reports;").fetchall():
            try:
                obj = json.loads(r["stats_json"] or "{}")
            except json.JSONDecodeError as exc:
                raise ValueError(f"recruit_weekly_reports.stats_json invalid JSON (report_id={r['report_id']}): {exc}") from exc
            if not isinstance(obj, dict):
                raise ValueError(f"recruit_weekly_reports.stats_json must be an object (report_id={r['report_id']})")

    # ------------------------
    # Convenience
    # ------------------------

    def __enter__(self) -> "ScoutRepo":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


# ----------------------------
# CLI
# ----------------------------

def _cmd_init(args) -> None:
    with ScoutRepo(args.db) as repo:
        repo.init_db()
    print(f"OK: initialized {args.db}")


def _cmd_import_players(args) -> None:
    with ScoutRepo(args.db) as repo:
        repo.init_db()
        n = repo.import_players_excel(args.excel, sheet_name=args.sheet)
    print(f"OK: imported {n} players from {args.excel} into {args.db}")


def _cmd_export_reports(args) -> None:
    with ScoutRepo(args.db) as repo:
        n = repo.export_weekly_reports_excel(args.week, args.excel)
    print(f"OK: exported {n} weekly reports to {args.excel}")


def _cmd_validate(args) -> None:
    with ScoutRepo(args.db) as repo:
        repo.validate_integrity()
    print(f"OK: validation passed for {args.db}")


def main(argv: Optional[Sequence[str]] = None) -> None:
    p = argparse.ArgumentParser(description="ScoutRepo (SQLite single source of truth)")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_init = sub.add_parser("init", help="initialize DB schema")
    p_init.add_argument("--db", required=True, help="path to sqlite db file")
    p_init.set_defaults(func=_cmd_init)

    p_imp = sub.add_parser("import_players", help="import scouted players from excel")
    p_imp.add_argument("--db", required=True, help="path to sqlite db file")
    p_imp.add_argument("--excel", required=True, help="path to players excel file")
    p_imp.add_argument("--sheet", default=None, help="sheet name (optional)")
    p_imp.set_defaults(func=_cmd_import_players)

    p_exp = sub.add_parser("export_reports", help="export one week of recruit reports to excel")
    p_exp.add_argument("--db", required=True, help="path to sqlite db file")
    p_exp.add_argument("--week", required=True, help="week_start_date (YYYY-MM-DD)")
    p_exp.add_argument("--excel", required=True, help="output excel path")
    p_exp.set_defaults(func=_cmd_export_reports)

    p_val = sub.add_parser("validate", help="validate DB integrity")
    p_val.add_argument("--db", required=True, help="path to sqlite db file")
    p_val.set_defaults(func=_cmd_validate)

    args = p.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
