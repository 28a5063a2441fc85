import itertools

import pytest

from analytics.stats.scoring import (
    aggregate_stats,
    calculate_stat_score,
    grade_to_numeric,
    grade_value_for_average,
    round_half_up,
)
from analytics.stats.tables import COUNT_STAT_TYPES, STAT_WEIGHTS, stat_weight


def test_touchdown_plus_rushing_yards():
    events = [("Rush TD", 1), ("Rush", 45)]
    assert calculate_stat_score(events) == 14.5
    assert aggregate_stats(events) == {"Rush TD": 1, "Rush": 45}


def test_count_types_ignore_stored_value():
    assert calculate_stat_score([("Rush TD", 7)]) == calculate_stat_score([("Rush TD", 1)]) == 10.0
    assert aggregate_stats([("Sack", 9), ("Sack", 3)]) == {"Sack": 2}


def test_magnitude_without_value_counts_as_one_unit():
    assert calculate_stat_score([("Rush", 0)]) == 0.1
    assert calculate_stat_score([("Rush", None)]) == 0.1
    # display totals add 0 for a missing magnitude
    assert aggregate_stats([("Rush", None), ("Rush", 12)]) == {"Rush": 12}


def test_unknown_stat_types_weigh_nothing():
    assert calculate_stat_score([("Hurdle", 40), ("Pancake", 1)]) == 0.0
    assert stat_weight("Hurdle") == 0.0


def test_negative_plays():
    assert calculate_stat_score([("Fumble", 1), ("Pass Inc", 0)]) == -5.5
    assert calculate_stat_score([("Sack Taken", 12)]) == -3.0


def test_score_is_order_independent():
    events = [("Rush", 33), ("Reception", 17), ("Pass Inc", 0), ("Sack Taken", 1), ("Rush TD", 1), ("Pass Comp", 7)]
    expected = calculate_stat_score(events)
    for perm in itertools.permutations(events):
        assert calculate_stat_score(list(perm)) == expected


def test_inputs_are_not_mutated():
    events = [{"stat_type": "Rush", "value": 12.0}, {"stat_type": "TD", "value": 3}]
    snapshot = [dict(e) for e in events]
    calculate_stat_score(events)
    aggregate_stats(events)
    assert events == snapshot


def test_accepts_db_style_rows():
    rows = [{"stat_type": "Reception", "value": 55}, {"stat_type": "Rec TD", "value": 20}]
    assert calculate_stat_score(rows) == 15.5
    assert aggregate_stats(rows) == {"Reception": 55, "Rec TD": 1}


@pytest.mark.parametrize(
    "value, expected",
    [(0.25, 0.3), (-0.25, -0.2), (13.25, 13.3), (14.5, 14.5), (1.04, 1.0)],
)
def test_round_half_up(value, expected):
    assert round_half_up(value, 1) == expected


def test_kicking_labels_are_count_classified():
    for label in ("PAT Att", "PAT Made", "FG Att", "FG Made", "FG", "PAT"):
        assert label in COUNT_STAT_TYPES
    assert STAT_WEIGHTS["FG"] == 5.0


def test_grade_numerics():
    assert grade_to_numeric("A-") == 92
    assert grade_to_numeric(" b+ ") == 88
    assert grade_to_numeric("F") == 50
    assert grade_to_numeric("Z") == 0
    assert grade_to_numeric(None) == 0
    assert grade_value_for_average("Z") is None
    assert grade_value_for_average("") is None
    assert grade_value_for_average("a+") == 100
