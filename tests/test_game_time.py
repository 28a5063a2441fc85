import datetime as dt

import pytest

import config
import game_time
import state


def test_current_week_is_sunday_to_saturday():
    for day in (18, 21, 24):
        start, end = game_time.current_week_range(dt.date(2026, 10, day))
        assert (start, end) == (dt.date(2026, 10, 18), dt.date(2026, 10, 24))


def test_week_label_and_payload():
    start, end = dt.date(2026, 12, 27), dt.date(2027, 1, 2)
    assert game_time.week_label(start, end) == "Dec 27 - Jan 2, 2027"
    assert game_time.week_payload(start, end) == {
        "start": "2026-12-27",
        "end": "2027-01-02",
        "label": "Dec 27 - Jan 2, 2027",
    }


def test_today_override():
    state.set_today_override(dt.date(2026, 10, 21))
    assert game_time.today() == dt.date(2026, 10, 21)
    assert game_time.current_week_range()[0] == dt.date(2026, 10, 18)
    with pytest.raises(ValueError):
        state.set_today_override("2026-10-21")


def test_report_week_window_uses_configured_span():
    assert game_time.report_week_window("2026-10-20") == ("2026-10-20", "2026-10-25")


def test_off_anchor_week_start_warns_unless_strict(monkeypatch, caplog):
    with caplog.at_level("WARNING"):
        assert game_time.report_week_window("2026-10-21") == ("2026-10-21", "2026-10-26")
    assert "anchor weekday" in caplog.text

    monkeypatch.setattr(config, "STRICT_WEEK_ANCHOR", True)
    with pytest.raises(ValueError):
        game_time.report_week_window("2026-10-21")
    assert game_time.report_week_window("2026-10-20")[1] == "2026-10-25"


def test_require_date_iso():
    assert game_time.require_date_iso("2026-10-20") == "2026-10-20"
    assert game_time.require_date_iso(dt.date(2026, 1, 2)) == "2026-01-02"
    with pytest.raises(ValueError):
        game_time.require_date_iso("10/20/2026")
    with pytest.raises(ValueError):
        game_time.require_date_iso("  ")
    assert game_time.optional_date_iso(None) is None


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("10/24/2026", "2026-10-24"),
        ("1/5/2027", "2027-01-05"),
        ("2026-10-30", "2026-10-30"),
        ("TBD", "TBD"),
        ("", None),
        (None, None),
    ],
)
def test_normalize_slash_date(raw, expected):
    assert game_time.normalize_slash_date(raw) == expected
