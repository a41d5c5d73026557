# tests/test_prompt.py

import pytest

from ai import gemini
from core.errors import UpstreamUnavailable
from core.models import Activity, Itinerary, ItineraryDay, TimeOfDay, TripPreferences


def test_prompt_contains_every_preference():
    prefs = TripPreferences(
        duration=4,
        interests={"Waterfalls", "Heritage"},
        budget=15000,
        group_size=3,
        start_location="Jamshedpur",
        custom_stops=["Dalma Hills", "Jubilee Park"],
    )
    prompt = gemini.build_prompt(prefs)

    for text in ("Waterfalls", "Heritage", "15000", "4 days", "3 people",
                 "Jamshedpur", "Dalma Hills, Jubilee Park"):
        assert text in prompt


def test_prompt_defaults_for_empty_fields():
    prompt = gemini.build_prompt(TripPreferences(interests=set(), custom_stops=[]))
    assert "Interests: General sightseeing" in prompt
    assert "Custom stops: None" in prompt


def test_prompt_states_format_rules():
    prompt = gemini.build_prompt(TripPreferences())
    assert "Return ONLY the JSON array" in prompt
    assert "nearest 50" in prompt
    assert '"estimatedCost"' in prompt and '"dayTotal"' in prompt


def test_prompt_is_deterministic():
    prefs = TripPreferences(interests={"Food", "Culture", "Nature"})
    assert gemini.build_prompt(prefs) == gemini.build_prompt(
        TripPreferences(interests={"Nature", "Food", "Culture"})
    )


def test_modify_prompt_embeds_current_plan():
    itin = Itinerary(days=[ItineraryDay(1, [Activity("Rock Garden", TimeOfDay.EVENING, None, 100)], 100)])
    prompt = gemini.build_modify_prompt(itin, "Add a museum on day 1")
    assert '"Rock Garden"' in prompt
    assert "Add a museum on day 1" in prompt


def test_missing_api_key_is_upstream_failure(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    with pytest.raises(UpstreamUnavailable):
        gemini.generate_text("hello")
