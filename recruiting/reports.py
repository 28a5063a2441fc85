from __future__ import annotations

"""Weekly recruit reports.

populate_weekly_reports():
    Fills (recruit, week) report rows from reviewed games. Data is batch-fetched
    (one query per source for every recruit in scope) and joined in memory. Each
    row is written with a single conditional upsert:

    - no row yet                         -> insert the computed row
    - row with empty stats, new stats    -> fill stats + game/next-game/notes fields
    - row with non-empty stats           -> untouched (human-owned)

build_weekly_dossier():
    sync recruits -> populate reports -> eligible recruits joined with their report
    and that week's notes. Serialized in-process by recruiting_serial_lock.
"""

import logging
import re
from typing import Any, Dict, List, Mapping, Optional, Tuple

import config
import game_time
from schema import parse_tags
from scout_repo import _json_dumps, report_row_to_dict

from .config import ELIGIBLE_STATUSES
from .errors import (
    RECRUIT_NOT_FOUND,
    RECRUITING_BUSY,
    REPORT_BAD_PAYLOAD,
    REPORT_BAD_WEEK,
    RecruitingError,
)
from .locks import recruiting_serial_lock
from .stat_lines import stats_for_events
from .sync import sync_players_to_recruits

logger = logging.getLogger(__name__)

_GAME_SCORE_RE = re.compile(r"^([WL])\s*(.*)$")

_MERGE_SQL = """
    INSERT INTO recruit_weekly_reports(
        recruit_id, week_start_date, week_end_date, last_game_date, last_game_opponent,
        last_game_score, last_game_result, next_game_date, next_game_opponent,
        stats_json, other_stats_json, notes, created_at, updated_at
    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, '[]', ?, ?, ?)
    ON CONFLICT(recruit_id, week_start_date) DO UPDATE SET
        stats_json=excluded.stats_json,
        last_game_date=COALESCE(excluded.last_game_date, recruit_weekly_reports.last_game_date),
        last_game_opponent=COALESCE(excluded.last_game_opponent, recruit_weekly_reports.last_game_opponent),
        last_game_score=COALESCE(excluded.last_game_score, recruit_weekly_reports.last_game_score),
        last_game_result=COALESCE(excluded.last_game_result, recruit_weekly_reports.last_game_result),
        next_game_date=COALESCE(excluded.next_game_date, recruit_weekly_reports.next_game_date),
        next_game_opponent=COALESCE(excluded.next_game_opponent, recruit_weekly_reports.next_game_opponent),
        notes=COALESCE(excluded.notes, recruit_weekly_reports.notes),
        updated_at=excluded.updated_at
    WHERE COALESCE(recruit_weekly_reports.stats_json, '{}') IN ('{}', '')
      AND excluded.stats_json <> '{}';
"""


def parse_game_score(raw: Any) -> Tuple[Optional[str], Optional[str]]:
    """'W 35-14' -> ('35-14', 'Win'); unparseable text -> (text, None)."""
    if raw is None:
        return None, None
    s = str(raw).strip()
    if not s:
        return None, None
    m = _GAME_SCORE_RE.match(s)
    if not m:
        return s, None
    return m.group(2).strip(), "Win" if m.group(1) == "W" else "Loss"


def _latest_games(cur, start_iso: str, end_iso: str) -> Dict[int, Dict[str, Any]]:
    """player_id -> most recent game in [start, end] (ties: highest game_id)."""
    rows = cur.execute(
        """
        SELECT gp.player_id, g.game_id, g.date, g.opponent
        FROM games g
        JOIN game_players gp ON gp.game_id = g.game_id
        JOIN recruits r ON r.player_id = gp.player_id
        WHERE g.date >= ? AND g.date <= ?
        ORDER BY g.date ASC, g.game_id ASC;
        """,
        (start_iso, end_iso),
    ).fetchall()
    out: Dict[int, Dict[str, Any]] = {}
    for r in rows:
        # ascending order: the last row seen per player wins
        out[int(r["player_id"])] = dict(r)
    return out


def _grades_for(cur, pairs: List[Tuple[int, int]]) -> Dict[Tuple[int, int], Dict[str, Any]]:
    if not pairs:
        return {}
    wanted = set(pairs)
    game_ids = sorted({g for g, _ in pairs})
    rows = cur.execute(
        f"""
        SELECT game_id, player_id, game_score, next_opponent, next_game_date, admin_notes
        FROM game_player_grades
        WHERE game_id IN ({",".join("?" * len(game_ids))});
        """,
        tuple(game_ids),
    ).fetchall()
    out: Dict[Tuple[int, int], Dict[str, Any]] = {}
    for r in rows:
        key = (int(r["game_id"]), int(r["player_id"]))
        if key in wanted:
            out[key] = dict(r)
    return out


def compute_report_fields(
    position: Any,
    game: Optional[Mapping[str, Any]],
    grade: Optional[Mapping[str, Any]],
    events: List[Mapping[str, Any]],
) -> Dict[str, Any]:
    """Report columns derived from one recruit's game of the week (pure)."""
    fields: Dict[str, Any] = {
        "last_game_date": None,
        "last_game_opponent": None,
        "last_game_score": None,
        "last_game_result": None,
        "next_game_date": None,
        "next_game_opponent": None,
        "notes": "",
        "stats": {},
    }
    if not game:
        return fields
    fields["last_game_date"] = game.get("date")
    fields["last_game_opponent"] = game.get("opponent")
    if grade:
        fields["last_game_score"], fields["last_game_result"] = parse_game_score(grade.get("game_score"))
        fields["next_game_opponent"] = grade.get("next_opponent") or None
        fields["next_game_date"] = game_time.normalize_slash_date(grade.get("next_game_date"))
        fields["notes"] = grade.get("admin_notes") or ""
    fields["stats"] = stats_for_events(position, events)
    return fields


def populate_weekly_reports(repo, week_start_date: Any) -> Dict[str, int]:
    """Create/fill the week's report rows for every recruit linked to a player.

    Returns {recruits_seen, written, untouched}.
    """
    start_iso, end_iso = game_time.report_week_window(week_start_date)
    now = game_time.now_utc_iso()

    with repo.transaction() as cur:
        recruits = cur.execute(
            """
            SELECT recruit_id, player_id, position
            FROM recruits
            WHERE player_id IS NOT NULL
            ORDER BY recruit_id ASC;
            """
        ).fetchall()
        summary = {"recruits_seen": len(recruits), "written": 0, "untouched": 0}
        if not recruits:
            return summary

        latest = _latest_games(cur, start_iso, end_iso)
        pairs = [(int(g["game_id"]), pid) for pid, g in latest.items()]
        grades = _grades_for(cur, pairs)
        events = repo.list_stat_events_for_pairs(pairs)

        for r in recruits:
            pid = int(r["player_id"])
            game = latest.get(pid)
            key = (int(game["game_id"]), pid) if game else None
            fields = compute_report_fields(
                r["position"],
                game,
                grades.get(key) if key else None,
                events.get(key, []) if key else [],
            )
            cur.execute(
                _MERGE_SQL,
                (
                    int(r["recruit_id"]),
                    start_iso,
                    end_iso,
                    fields["last_game_date"],
                    fields["last_game_opponent"],
                    fields["last_game_score"],
                    fields["last_game_result"],
                    fields["next_game_date"],
                    fields["next_game_opponent"],
                    _json_dumps(fields["stats"]),
                    fields["notes"],
                    now,
                    now,
                ),
            )
            summary["written" if cur.rowcount > 0 else "untouched"] += 1

    logger.info(
        "weekly reports: week=%s recruits_seen=%s written=%s untouched=%s",
        start_iso,
        summary["recruits_seen"],
        summary["written"],
        summary["untouched"],
    )
    return summary


def _dossier_rows(repo, week_start_iso: str) -> List[Dict[str, Any]]:
    eligible = sorted(ELIGIBLE_STATUSES)
    rows = repo._conn.execute(
        f"""
        SELECT r.*,
               rr.report_id,
               rr.week_start_date,
               rr.week_end_date,
               rr.last_game_date,
               rr.last_game_opponent,
               rr.last_game_score,
               rr.last_game_result,
               rr.next_game_date,
               rr.next_game_time,
               rr.next_game_opponent,
               rr.next_game_location,
               rr.stats_json,
               rr.other_stats_json,
               rr.notes AS report_notes,
               p.recruiting_statuses_json
        FROM recruits r
        LEFT JOIN players p ON p.player_id = r.player_id
        LEFT JOIN recruit_weekly_reports rr
          ON rr.recruit_id = r.recruit_id AND rr.week_start_date = ?
        WHERE r.status IN ({",".join("?" * len(eligible))})
        ORDER BY r.side_of_ball IS NULL, r.side_of_ball,
                 r.position IS NULL, r.position,
                 r.name;
        """,
        (week_start_iso, *eligible),
    ).fetchall()

    out: List[Dict[str, Any]] = []
    for row in rows:
        has_report = row["report_id"] is not None
        d = report_row_to_dict(row)
        tags = parse_tags(d.pop("recruiting_statuses_json", None))
        d["status_list"] = tags if (d.get("player_id") is not None and tags) else [d["status"]]
        if not has_report:
            d["stats"] = None
            d["other_stats"] = None
        out.append(d)
    return out


def build_weekly_dossier(repo, week_start_date: Any) -> Dict[str, Any]:
    """Sync recruits, populate the week's reports, return {recruits, notes}."""
    try:
        start_iso, _ = game_time.report_week_window(week_start_date)
    except ValueError as exc:
        raise RecruitingError(REPORT_BAD_WEEK, str(exc), {"week_start_date": week_start_date}) from exc

    try:
        with recruiting_serial_lock(reason=f"DOSSIER {start_iso}", timeout_s=config.RECRUITING_LOCK_TIMEOUT_S):
            sync_players_to_recruits(repo)
            populate_weekly_reports(repo, start_iso)
    except TimeoutError as exc:
        raise RecruitingError(RECRUITING_BUSY, str(exc)) from exc

    return {
        "recruits": _dossier_rows(repo, start_iso),
        "notes": repo.list_notes_for_week(start_iso),
    }


def save_weekly_report(repo, recruit_id: Any, payload: Mapping[str, Any]) -> Dict[str, Any]:
    """Manual upsert from an editor. Caller-supplied fields always win."""
    try:
        return repo.upsert_weekly_report(recruit_id, payload.get("week_start_date"), payload)
    except KeyError as exc:
        raise RecruitingError(RECRUIT_NOT_FOUND, f"Recruit not found: {recruit_id}", {"recruit_id": recruit_id}) from exc
    except ValueError as exc:
        raise RecruitingError(REPORT_BAD_PAYLOAD, str(exc)) from exc
