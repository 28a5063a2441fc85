from recruiting.sync import sync_players_to_recruits


def _recruit_for(repo, player_id):
    row = repo._conn.execute("SELECT * FROM recruits WHERE player_id=?;", (player_id,)).fetchone()
    return dict(row) if row else None


def test_creates_only_eligible_players(repo, make_player):
    offered = make_player("Offered QB", position="QB", tags=["Offered"])
    make_player("Watched WR", position="WR", tags=["Watching"])
    elsewhere = make_player("Gone DE", position="DE", tags=["Committed Elsewhere"], committed_school="Utah")
    make_player("No Tags", position="RB")

    summary = sync_players_to_recruits(repo)
    assert summary == {"players_seen": 3, "created": 2, "refreshed": 0, "skipped": 1}

    r = _recruit_for(repo, offered["player_id"])
    assert r["status"] == "OFFERED"
    assert r["side_of_ball"] == "OFFENSE"
    assert r["assigned_coach"] == "Aaron Roderick"
    assert r["class_year"] == 2027
    assert r["school"] == "Timpview HS"

    r2 = _recruit_for(repo, elsewhere["player_id"])
    assert r2["status"] == "COMMITTED ELSEWHERE"
    assert r2["committed_school"] == "Utah"
    assert r2["side_of_ball"] == "DEFENSE"


def test_rerun_is_a_no_op(repo, make_player):
    make_player(tags=["Committed"])
    sync_players_to_recruits(repo)
    before = [dict(r) for r in repo._conn.execute("SELECT * FROM recruits;").fetchall()]

    summary = sync_players_to_recruits(repo)
    assert summary == {"players_seen": 1, "created": 0, "refreshed": 0, "skipped": 1}
    after = [dict(r) for r in repo._conn.execute("SELECT * FROM recruits;").fetchall()]
    assert before == after


def test_linked_recruit_is_refreshed_and_never_deleted(repo, make_player):
    p = make_player(tags=["Offered"])
    sync_players_to_recruits(repo)

    repo.update_player(p["player_id"], {"recruiting_statuses": ["Watching"]})
    summary = sync_players_to_recruits(repo)
    assert summary["refreshed"] == 1

    r = _recruit_for(repo, p["player_id"])
    assert r is not None
    assert r["status"] == "WATCHING"


def test_refresh_only_touches_status_and_committed_school(repo, make_player):
    p = make_player(tags=["Offered"])
    sync_players_to_recruits(repo)
    rid = _recruit_for(repo, p["player_id"])["recruit_id"]
    repo.update_recruit(rid, {"assigned_coach": "Custom Coach", "name": "Edited Name"})

    repo.update_player(p["player_id"], {"recruiting_statuses": ["Committed Elsewhere"], "committed_school": "BYU"})
    sync_players_to_recruits(repo)

    r = _recruit_for(repo, p["player_id"])
    assert r["status"] == "COMMITTED ELSEWHERE"
    assert r["committed_school"] == "BYU"
    assert r["assigned_coach"] == "Custom Coach"
    assert r["name"] == "Edited Name"


def test_position_falls_back_to_side_specific_positions(repo, make_player):
    p = make_player("Two Way", position=None, tags=["Signed"], defense_position="lb")
    sync_players_to_recruits(repo)
    r = _recruit_for(repo, p["player_id"])
    assert r["position"] == "LB"
    assert r["side_of_ball"] == "DEFENSE"
    assert r["assigned_coach"] == "Kelly Poppinga / Chad Kauha'aha'a"
    assert r["status"] == "SIGNED"


def test_manual_recruit_without_player_is_left_alone(repo, make_player):
    manual = repo.create_recruit({"name": "Walk On", "status": "OFFERED", "position": "K"})
    make_player(tags=["Offered"])
    sync_players_to_recruits(repo)
    assert repo.get_recruit(manual["recruit_id"])["name"] == "Walk On"
    assert repo._conn.execute("SELECT COUNT(*) FROM recruits;").fetchone()[0] == 2
