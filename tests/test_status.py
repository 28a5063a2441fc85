import pytest

from recruiting.config import coach_for_position, side_of_ball
from recruiting.status import normalize_status_tag, resolve_recruiting_status


def test_committed_beats_watching():
    res = resolve_recruiting_status(["Committed", "Watching"])
    assert res.status == "COMMITTED"
    assert res.eligible is True


def test_empty_input_is_watching_and_ineligible():
    for empty in ([], None, ["", "   "]):
        res = resolve_recruiting_status(empty)
        assert res.status == "WATCHING"
        assert res.eligible is False


def test_single_string_is_one_tag():
    res = resolve_recruiting_status("Offer")
    assert res.status == "OFFERED"
    assert res.eligible is True


@pytest.mark.parametrize(
    "tags, status, eligible",
    [
        (["Interested"], "RECRUIT", False),
        (["Priority", "Watching"], "RECRUIT", False),
        (["Not Interested", "Evaluating"], "EVALUATED", False),
        (["Committed Elsewhere", "Signed"], "SIGNED", True),
        (["committed elsewhere"], "COMMITTED ELSEWHERE", True),
        (["  OFFERED  ", "passed"], "OFFERED", True),
    ],
)
def test_priority_and_eligibility(tags, status, eligible):
    res = resolve_recruiting_status(tags)
    assert res.status == status
    assert res.eligible is eligible


def test_unmapped_tags_pass_through_upper_cased():
    res = resolve_recruiting_status(["Mystery Tag"])
    assert res.status == "MYSTERY TAG"
    assert res.eligible is False
    assert normalize_status_tag("  ") is None


def test_resolution_is_order_independent():
    a = resolve_recruiting_status(["Watching", "Offered", "Evaluating"])
    b = resolve_recruiting_status(["Evaluating", "Watching", "Offered"])
    assert a.status == b.status == "OFFERED"


def test_position_lookups():
    assert side_of_ball("qb") == "OFFENSE"
    assert side_of_ball("C") == "DEFENSE"
    assert side_of_ball("P") == "SPECIAL"
    assert side_of_ball("ATH") is None
    assert side_of_ball(None) is None
    assert coach_for_position("DE") == "Sione Po'uha"
    assert coach_for_position("LB") == "Kelly Poppinga / Chad Kauha'aha'a"
    assert coach_for_position("K") == coach_for_position("P") == "Justin Ena"
    assert coach_for_position("ATH") is None
