from __future__ import annotations

"""Recruit synchronization: scouted players with recruiting tags -> recruits rows.

Rules:
- a player already linked to a recruit only refreshes that recruit's `status` and
  `committed_school`
- an unlinked player is inserted as a recruit only when eligible
- recruits are never deleted, even when a player's eligibility lapses
"""

import logging
from typing import Any, Dict

import game_time
from schema import effective_position

from .config import coach_for_position, side_of_ball
from .status import resolve_recruiting_status

logger = logging.getLogger(__name__)


def sync_players_to_recruits(repo) -> Dict[str, int]:
    """Bring the recruits table in line with player recruiting tags.

    Returns {players_seen, created, refreshed, skipped}. `refreshed` counts linked
    recruits whose status/committed_school actually changed.
    """
    players = repo.list_tagged_players()
    summary = {"players_seen": len(players), "created": 0, "refreshed": 0, "skipped": 0}
    if not players:
        return summary

    now = game_time.now_utc_iso()
    with repo.transaction() as cur:
        linked = {
            int(r["player_id"]): int(r["recruit_id"])
            for r in cur.execute(
                "SELECT player_id, recruit_id FROM recruits WHERE player_id IS NOT NULL;"
            ).fetchall()
        }

        for p in players:
            pid = int(p["player_id"])
            resolution = resolve_recruiting_status(p["recruiting_statuses"])
            committed_school = p.get("committed_school") or None

            if pid in linked:
                cur.execute(
                    """
                    UPDATE recruits
                    SET status=?, committed_school=?, updated_at=?
                    WHERE recruit_id=?
                      AND (status IS NOT ? OR committed_school IS NOT ?);
                    """,
                    (resolution.status, committed_school, now, linked[pid], resolution.status, committed_school),
                )
                summary["refreshed" if cur.rowcount > 0 else "skipped"] += 1
                continue

            if not resolution.eligible:
                summary["skipped"] += 1
                continue

            position = effective_position(p.get("position"), p.get("offense_position"), p.get("defense_position"))
            cur.execute(
                """
                INSERT INTO recruits(
                    player_id, name, school, state, class_year, position, side_of_ball, status,
                    assigned_coach, committed_school, committed_date, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(player_id) WHERE player_id IS NOT NULL DO NOTHING;
                """,
                (
                    pid,
                    p["name"],
                    p.get("school") or "",
                    p.get("state"),
                    p.get("grad_year"),
                    position,
                    side_of_ball(position),
                    resolution.status,
                    coach_for_position(position),
                    committed_school,
                    p.get("committed_date") or None,
                    now,
                    now,
                ),
            )
            # rowcount 0: another writer linked this player first
            summary["created" if cur.rowcount > 0 else "skipped"] += 1

    logger.info(
        "recruit sync: players_seen=%s created=%s refreshed=%s skipped=%s",
        summary["players_seen"],
        summary["created"],
        summary["refreshed"],
        summary["skipped"],
    )
    return summary
