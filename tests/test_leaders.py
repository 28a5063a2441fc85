import datetime as dt

from analytics.stats import build_top_performances, compute_grade_leaderboard


def _row(player_id, name, game_id, grade):
    return {
        "player_id": player_id,
        "player_name": name,
        "player_school": "Lehi HS",
        "player_position": "WR",
        "game_id": game_id,
        "grade": grade,
    }


def test_leaderboard_orders_by_average_then_name():
    rows = [
        _row(1, "Micah Fonoti", 10, "A-"),
        _row(1, "Micah Fonoti", 11, "A"),
        _row(1, "Micah Fonoti", 12, "B+"),
        _row(1, "Micah Fonoti", 10, "A-"),  # duplicate appearance
        _row(2, "Ty Reed", 10, "A+"),
        _row(3, "Never Graded", 10, None),
        _row(3, "Never Graded", 11, None),
        _row(4, "bob Lake", 11, "B"),
        _row(4, "bob Lake", 12, "zz"),
        _row(5, "Alice Young", 12, "b"),
    ]
    board = compute_grade_leaderboard(rows)

    assert [(r["rank"], r["player"]["name"], r["averageGrade"]) for r in board] == [
        (1, "Ty Reed", 100.0),
        (2, "Micah Fonoti", 91.7),
        (3, "Alice Young", 85.0),
        (4, "bob Lake", 85.0),
        (5, "Never Graded", None),
    ]
    by_name = {r["player"]["name"]: r for r in board}
    assert by_name["Micah Fonoti"]["gamesPlayed"] == 3
    assert by_name["bob Lake"]["gamesPlayed"] == 2
    assert by_name["Never Graded"]["gamesPlayed"] == 2
    assert by_name["Ty Reed"]["player"] == {"id": 2, "name": "Ty Reed", "school": "Lehi HS", "position": "WR"}


def test_leaderboard_orders_on_unrounded_average():
    rows = [
        _row(1, "Aaron Low", 10, "A"),
        _row(1, "Aaron Low", 11, "B+"),
        _row(1, "Aaron Low", 12, "B+"),
        _row(1, "Aaron Low", 13, "B-"),
        _row(2, "Zach High", 10, "A-"),
        _row(2, "Zach High", 11, "B+"),
        _row(2, "Zach High", 12, "B"),
    ]
    board = compute_grade_leaderboard(rows)
    # 88.333 and 88.25 both display as 88.3
    assert [(r["player"]["name"], r["averageGrade"]) for r in board] == [
        ("Zach High", 88.3),
        ("Aaron Low", 88.3),
    ]


def test_leaderboard_limit():
    rows = [_row(i, f"P{i}", 1, "A") for i in range(1, 6)]
    assert len(compute_grade_leaderboard(rows, limit=2)) == 2
    assert compute_grade_leaderboard(rows, limit=0) == []
    assert compute_grade_leaderboard([]) == []


def test_top_performances_rank_by_stat_score(repo, make_player, make_game, add_stats):
    qb = make_player("Cole Hansen", position="QB")
    rb = make_player("Kai Tuilagi", position="RB")
    late = make_player("Next Week", position="WR")

    g1 = make_game("2026-10-23", opponent="Lone Peak", player_ids=[qb["player_id"], rb["player_id"]])
    add_stats(g1["game_id"], qb["player_id"], [("Pass TD", 40), ("Rush", 65)])
    add_stats(g1["game_id"], rb["player_id"], [("Rush TD", 3)])
    repo.upsert_grade(g1["game_id"], qb["player_id"], {"grade": "A-", "notes": "sharp"})

    g2 = make_game("2026-10-25", opponent="Orem")
    add_stats(g2["game_id"], late["player_id"], [("Rec TD", 50), ("Rec TD", 20)])

    out = build_top_performances(repo, ref=dt.date(2026, 10, 21))
    assert out["week"] == {"start": "2026-10-18", "end": "2026-10-24", "label": "Oct 18 - Oct 24, 2026"}
    assert out["totalEvaluated"] == 2

    first, second = out["performances"]
    assert first["player"]["name"] == "Cole Hansen"
    assert first["grade"] == "A-"
    assert first["gradeNotes"] == "sharp"
    assert first["stats"] == {"Pass TD": 1, "Rush": 65}
    assert first["scores"] == {"grade": 92, "stats": 14.5, "composite": 14.5}
    assert first["game"] == {"id": g1["game_id"], "opponent": "Lone Peak", "date": "2026-10-23", "competitionLevel": None}

    assert second["player"]["name"] == "Kai Tuilagi"
    assert second["grade"] is None
    assert second["scores"] == {"grade": 0, "stats": 10.0, "composite": 10.0}


def test_top_performances_empty_week(repo):
    out = build_top_performances(repo, limit=3, ref=dt.date(2026, 10, 21))
    assert out["performances"] == []
    assert out["totalEvaluated"] == 0
    assert out["message"] == "No games found for this week"
