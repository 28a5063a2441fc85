from recruiting.stat_lines import build_position_stats, stats_for_events, summarize_events


def _ev(stat_type, value=0):
    return {"stat_type": stat_type, "value": value}


def test_quarterback_line():
    events = [
        _ev("Pass Comp", 12),
        _ev("Pass Comp", 8),
        _ev("Pass Inc"),
        _ev("Pass TD", 30),
        _ev("Rush", 12.4),
        _ev("Rush TD", 5),
        _ev("INT"),
    ]
    assert stats_for_events("QB", events) == {
        "passComp": 2,
        "passAtt": 3,
        "completionPct": 67,
        "passYards": 20,
        "passTD": 1,
        "rushYards": 17,
        "rushTD": 1,
        "interceptions": 1,
        "fumbles": 0,
    }


def test_completion_pct_without_attempts_is_zero():
    assert stats_for_events("QB", [_ev("Rush", 5)])["completionPct"] == 0


def test_running_back_line():
    events = [_ev("Rush", 40), _ev("Rush", 22), _ev("Rush TD", 8), _ev("Reception", 15), _ev("Fumble")]
    assert stats_for_events("rb", events) == {
        "carries": 3,
        "rushYds": 70,
        "rushTD": 1,
        "receptions": 1,
        "recYds": 15,
        "recTD": 0,
        "fumbles": 1,
    }


def test_tight_end_counts_all_touchdowns():
    out = stats_for_events("TE", [_ev("Rec TD", 12), _ev("TD", 0), _ev("Reception", 9)])
    assert out == {"receptions": 2, "recYds": 21, "tds": 2, "fumbles": 0}


def test_defensive_lines():
    events = [_ev("Tackle Solo"), _ev("Tackle Assist"), _ev("Sack"), _ev("TFL"), _ev("Forced Fumble"), _ev("INT")]
    assert stats_for_events("DE", events) == {"tackles": 2, "tfl": 1, "pbu": 0, "sack": 1, "ff": 1}
    assert stats_for_events("LB", events) == {"tackles": 2, "pbu": 0, "ff": 1, "interceptions": 1, "sack": 1, "tfl": 1}
    assert stats_for_events("S", events) == {"pbu": 0, "tackles": 2, "interceptions": 1}
    assert stats_for_events("C", events) == stats_for_events("S", events)


def test_kicker_and_punter():
    kicks = [_ev("PAT Att"), _ev("PAT Att"), _ev("PAT Made"), _ev("FG Att", 42)]
    assert stats_for_events("K", kicks) == {"patAtt": 2, "patMade": 1, "fgAtt": 1, "fgMade": 0}
    punts = [_ev("Punt", 41), _ev("Punt", 38), _ev("Net Avg", 36.6)]
    assert stats_for_events("P", punts) == {"punts": 2, "netAvg": 37}


def test_unmapped_position_or_no_events_is_empty():
    assert stats_for_events("OL", [_ev("Tackle Solo")]) == {}
    assert stats_for_events(None, [_ev("Rush", 10)]) == {}
    assert stats_for_events("QB", []) == {}


def test_sums_are_rounded_to_whole_numbers():
    counts, sums = summarize_events([_ev("Rush", 2.5), _ev("Rush", None)])
    assert counts == {"Rush": 2}
    assert sums == {"Rush": 3}
    assert build_position_stats("WR", counts, sums)["rushYds"] == 3
