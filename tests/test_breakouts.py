import math

from analytics.stats import compute_breakouts, find_breakout_players


def _history_rows(player_id, name, games):
    rows = []
    for game_id, date, events in games:
        for stat_type, value in events:
            rows.append(
                {
                    "player_id": player_id,
                    "player_name": name,
                    "player_school": "Corner Canyon HS",
                    "player_position": "RB",
                    "game_id": game_id,
                    "game_date": date,
                    "opponent": f"Opponent {game_id}",
                    "stat_type": stat_type,
                    "value": value,
                }
            )
    return rows


def _no_grade(game_id, player_id):
    return None


def test_breakout_mixes_yardage_z_score_and_touchdown_rate(repo, make_player, make_game, add_stats):
    rb = make_player("Kai Tuilagi", position="RB")
    pid = rb["player_id"]
    g1 = make_game("2026-10-02")
    g2 = make_game("2026-10-09")
    g3 = make_game("2026-10-16", opponent="American Fork")
    add_stats(g1["game_id"], pid, [("Rush", 50), ("Rush", 30), ("Rush TD", 12)])
    add_stats(g2["game_id"], pid, [("Rush", 40), ("Rush", 40), ("Rush TD", 4)])
    add_stats(g3["game_id"], pid, [("Rush", 100), ("Rush", 50), ("Rush TD", 1), ("Rush TD", 7), ("Rush TD", 60)])
    repo.upsert_grade(g3["game_id"], pid, {"grade": "A"})

    out = find_breakout_players(repo)
    [entry] = out["breakoutPlayers"]

    z = (150 - 40) / math.sqrt(50)
    expected = math.floor(((z + (3 - 1)) / 2) * 10 + 0.5) / 10
    assert entry["breakoutScore"] == expected
    assert entry["player"]["name"] == "Kai Tuilagi"
    assert entry["game"] == {"id": g3["game_id"], "opponent": "American Fork", "date": "2026-10-16"}
    assert entry["grade"] == "A"
    assert entry["keyStats"] == [
        {"statType": "Rush", "gameValue": 150.0, "seasonAvg": 40.0, "unit": "yds"},
        {"statType": "Rush TD", "gameValue": 3, "seasonAvg": 1.0, "unit": ""},
    ]


def test_player_without_repeated_baseline_is_skipped():
    rows = _history_rows(
        1,
        "One Sample",
        [
            (1, "2026-10-02", [("Rush", 20), ("Reception", 5)]),
            (2, "2026-10-09", [("Rush", 250), ("Reception", 90)]),
        ],
    )
    assert compute_breakouts(rows, grade_lookup=_no_grade) == []


def test_small_improvement_stays_under_threshold():
    rows = _history_rows(
        1,
        "Steady",
        [
            (1, "2026-10-02", [("Rush", 40)]),
            (2, "2026-10-09", [("Rush", 50)]),
            (3, "2026-10-16", [("Rush", 46)]),
        ],
    )
    assert compute_breakouts(rows, grade_lookup=_no_grade) == []


def test_flat_baseline_has_no_z_score():
    rows = _history_rows(
        1,
        "Flat",
        [
            (1, "2026-10-02", [("Rush", 40), ("Rush", 40)]),
            (2, "2026-10-09", [("Rush", 300)]),
        ],
    )
    assert compute_breakouts(rows, grade_lookup=_no_grade) == []


def test_ordering_limit_and_threshold():
    big = _history_rows(
        7,
        "Big Jump",
        [
            (1, "2026-10-02", [("Rush", 10), ("Rush", 30)]),
            (2, "2026-10-09", [("Rush", 200)]),
        ],
    )
    small = _history_rows(
        3,
        "Small Jump",
        [
            (1, "2026-10-02", [("Rush", 10), ("Rush", 30)]),
            (2, "2026-10-09", [("Rush", 60)]),
        ],
    )
    out = compute_breakouts(small + big, grade_lookup=_no_grade)
    # mean 20, std 10: z = 18.0 and 4.0
    assert [(b["player"]["id"], b["breakoutScore"]) for b in out] == [(7, 18.0), (3, 4.0)]
    assert len(compute_breakouts(small + big, grade_lookup=_no_grade, limit=1)) == 1
    assert [b["player"]["id"] for b in compute_breakouts(small + big, grade_lookup=_no_grade, threshold=5.0)] == [7]
