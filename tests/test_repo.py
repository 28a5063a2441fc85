import json

import pytest

from schema import SCHEMA_VERSION
from scout_repo import ScoutRepo


def test_init_db_is_idempotent(db_path):
    with ScoutRepo(db_path) as r:
        r.init_db()
        r.init_db()
        r.validate_integrity()
        row = r._conn.execute("SELECT value FROM meta WHERE key='schema_version';").fetchone()
        assert row["value"] == SCHEMA_VERSION


def test_player_round_trip_and_partial_update(repo, make_player):
    p = make_player("Kai Tuilagi", position="rb", tags=["Offered", "Offered", " Priority "], flagged=True)
    assert p["position"] == "RB"
    assert p["recruiting_statuses"] == ["Offered", "Priority"]
    assert p["flagged"] is True

    updated = repo.update_player(p["player_id"], {"school": "Skyridge HS"})
    assert updated["school"] == "Skyridge HS"
    assert updated["name"] == "Kai Tuilagi"
    assert updated["recruiting_statuses"] == ["Offered", "Priority"]

    raw = repo._conn.execute("SELECT recruiting_statuses_json FROM players WHERE player_id=?;", (p["player_id"],)).fetchone()
    assert json.loads(raw[0]) == ["Offered", "Priority"]


def test_committed_school_only_kept_for_committed_elsewhere(make_player):
    kept = make_player("A", tags=["Committed Elsewhere"], committed_school="Utah", committed_date="2026-09-01")
    dropped = make_player("B", tags=["Offered"], committed_school="Utah", committed_date="2026-09-01")
    assert (kept["committed_school"], kept["committed_date"]) == ("Utah", "2026-09-01")
    assert (dropped["committed_school"], dropped["committed_date"]) == (None, None)


def test_unknown_ids_raise_key_error(repo):
    with pytest.raises(KeyError):
        repo.get_player(999)
    with pytest.raises(KeyError):
        repo.get_game(999)
    with pytest.raises(KeyError):
        repo.delete_grade(1, 1)
    with pytest.raises(ValueError):
        repo.get_player("abc")


def test_stat_links_player_to_game_and_cascades_on_delete(repo, make_player, make_game, add_stats):
    p = make_player()
    g = make_game("2026-10-23")
    add_stats(g["game_id"], p["player_id"], [("Rush", 10), ("Rush TD", 1)])

    game = repo.get_game(g["game_id"])
    assert [x["player_id"] for x in game["players"]] == [p["player_id"]]
    assert len(repo.list_game_stats(g["game_id"])) == 2

    repo.delete_game(g["game_id"])
    assert repo._conn.execute("SELECT COUNT(*) FROM stats;").fetchone()[0] == 0
    assert repo._conn.execute("SELECT COUNT(*) FROM game_players;").fetchone()[0] == 0


def test_grade_merge_keeps_unsent_fields_and_guards_admin_notes(repo, make_player, make_game):
    p = make_player()
    g = make_game("2026-10-23", player_ids=[p["player_id"]])
    gid, pid = g["game_id"], p["player_id"]

    repo.upsert_grade(gid, pid, {"grade": "B+", "game_score": "W 21-7", "admin_notes": "ignored"})
    first = repo.get_grade(gid, pid)
    assert first["grade"] == "B+"
    assert first["admin_notes"] is None

    repo.upsert_grade(gid, pid, {"notes": "strong finish", "admin_notes": "film study"}, include_admin_notes=True)
    second = repo.get_grade(gid, pid)
    assert second["grade"] == "B+"
    assert second["game_score"] == "W 21-7"
    assert second["notes"] == "strong finish"
    assert second["admin_notes"] == "film study"

    repo.upsert_grade(gid, pid, {"grade": "A"})
    assert repo.get_grade(gid, pid)["admin_notes"] == "film study"


def test_nested_transaction_rolls_back_to_savepoint(repo, make_player):
    p = make_player()
    with repo.transaction() as cur:
        cur.execute("UPDATE players SET school='Outer' WHERE player_id=?;", (p["player_id"],))
        with pytest.raises(RuntimeError):
            with repo.transaction() as inner:
                inner.execute("UPDATE players SET school='Inner' WHERE player_id=?;", (p["player_id"],))
                raise RuntimeError("boom")
    assert repo.get_player(p["player_id"])["school"] == "Outer"


def test_recruit_writes_keep_status_canonical(repo):
    walk_on = repo.create_recruit({"name": "Walk On", "status": "evaluating"})
    assert walk_on["status"] == "EVALUATED"
    assert repo.create_recruit({"name": "Blank Status", "status": "  "})["status"] == "WATCHING"
    assert repo.update_recruit(walk_on["recruit_id"], {"status": "Signed"})["status"] == "SIGNED"
    assert repo.update_recruit(walk_on["recruit_id"], {"school": "Orem HS"})["status"] == "SIGNED"

    with pytest.raises(ValueError):
        repo.create_recruit({"name": "Bad", "status": "maybe"})
    with pytest.raises(ValueError):
        repo.update_recruit(walk_on["recruit_id"], {"status": "bogus"})
    assert repo.get_recruit(walk_on["recruit_id"])["status"] == "SIGNED"


def test_recruit_player_link_conflict_raises_value_error(repo, make_player):
    p = make_player()
    linked = repo.create_recruit({"name": p["name"], "player_id": p["player_id"]})
    other = repo.create_recruit({"name": "Other"})
    with pytest.raises(ValueError):
        repo.create_recruit({"name": "Dup", "player_id": p["player_id"]})
    with pytest.raises(ValueError):
        repo.update_recruit(other["recruit_id"], {"player_id": p["player_id"]})
    assert repo.get_recruit(linked["recruit_id"])["player_id"] == p["player_id"]
    assert repo.get_recruit(other["recruit_id"])["player_id"] is None


def test_manual_report_upsert_replaces_fields(repo, make_player):
    p = make_player()
    recruit = repo.create_recruit({"name": p["name"], "player_id": p["player_id"], "status": "OFFERED"})
    rid = recruit["recruit_id"]

    repo.upsert_weekly_report(rid, "2026-10-20", {"week_end_date": "2026-10-25", "stats": {"passComp": 4}, "notes": "x"})
    out = repo.upsert_weekly_report(rid, "2026-10-20", {"week_end_date": "2026-10-25", "other_stats": ["2 KR"]})
    assert out["stats"] == {}
    assert out["other_stats"] == ["2 KR"]
    assert out["notes"] == ""

    with pytest.raises(KeyError):
        repo.upsert_weekly_report(9999, "2026-10-20", {"week_end_date": "2026-10-25"})
    with pytest.raises(ValueError):
        repo.upsert_weekly_report(rid, "2026-10-20", {"week_end_date": None})


def test_validate_integrity_rejects_bad_tag_json(repo, make_player):
    p = make_player()
    repo._conn.execute("UPDATE players SET recruiting_statuses_json='{oops' WHERE player_id=?;", (p["player_id"],))
    repo._conn.commit()
    with pytest.raises(ValueError):
        repo.validate_integrity()
