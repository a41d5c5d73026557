# tests/test_budget.py

import pytest

from core.budget import summarize
from core.models import Activity, Itinerary, ItineraryDay


def _itin(*day_totals):
    return Itinerary(days=[ItineraryDay(i, [Activity("x", estimated_cost=t)], t)
                           for i, t in enumerate(day_totals, start=1)])


def test_totals_within_budget():
    s = summarize(_itin(3000, 2800, 3000), 9000)
    assert (s.trip_total, s.remaining, s.percent_used) == (8800, 200, 98)
    assert not s.over_budget


def test_over_budget_remaining_is_negative_and_percent_clamped():
    s = summarize(_itin(6000, 6000), 10000)
    assert s.remaining == -2000
    assert s.percent_used == 100
    assert s.over_budget


@pytest.mark.parametrize("total, expected", [(0, 0), (1, 100), (500, 100)])
def test_zero_budget_does_not_divide_by_zero(total, expected):
    s = summarize(_itin(total), 0)
    assert s.percent_used == expected
    assert s.remaining == -total


def test_empty_itinerary():
    s = summarize(Itinerary(), 5000)
    assert (s.trip_total, s.remaining, s.percent_used) == (0, 5000, 0)


def test_summary_follows_budget_changes():
    itin = _itin(2500)
    assert summarize(itin, 5000).percent_used == 50
    assert summarize(itin, 10000).percent_used == 25
