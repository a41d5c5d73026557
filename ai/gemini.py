# ai/gemini.py
# ------------------------------------------------------------------------------
import json
import logging
import os
import textwrap

import google.generativeai as genai

from core import config
from core.errors import UpstreamUnavailable
from core.models import Itinerary, TripPreferences

log = logging.getLogger(__name__)

DEFAULT_INTERESTS = "General sightseeing"
DEFAULT_STOPS = "None"

# ──────────────────────────────────────────────────────────────────────────────
# Helper: get a configured Gemini model
# ──────────────────────────────────────────────────────────────────────────────
def _get_model():
    api_key = os.getenv("GEMINI_API_KEY")
    if not api_key:
        raise UpstreamUnavailable("Environment variable GEMINI_API_KEY is missing.")
    genai.configure(api_key=api_key)
    return genai.GenerativeModel(config.GEMINI_MODEL)

# ──────────────────────────────────────────────────────────────────────────────
# Prompt template – create a *new* itinerary
# ──────────────────────────────────────────────────────────────────────────────
_PROMPT_TEMPLATE = textwrap.dedent(
    """\
    You are an expert travel planner for Jharkhand, India. Build a day-by-day
    travel itinerary for the trip described below.

    Return the itinerary in exactly this JSON shape:
    [
      {{
        "day": 1,
        "dayTotal": 3500,
        "activities": [
          {{
            "name": "Hundru Falls",
            "time": "Morning",
            "description": "Walk down to the base of the 98 m waterfall.",
            "estimatedCost": 1500
          }},
          {{
            "name": "Tagore Hill",
            "time": "Evening",
            "description": "Sunset views over Ranchi.",
            "estimatedCost": 2000
          }}
        ]
      }}
    ]

    Trip preferences:
    - Duration: {duration} days
    - Interests: {interests}
    - Total budget: {budget} {currency}
    - Group size: {group_size} people
    - Starting location: {start_location}
    - Custom stops: {custom_stops}

    Rules:
    * Return ONLY the JSON array, with no text before or after it.
    * "time" must be one of "Morning", "Afternoon" or "Evening".
    * Estimate every cost as a number in {currency}, rounded to the nearest 50.
    * Group activities by area to minimise travel between them.
    """
)


def _amount(value) -> str:
    value = float(value)
    return str(int(value)) if value.is_integer() else str(value)


def build_prompt(prefs: TripPreferences) -> str:
    """Return the itinerary prompt for the given preferences."""
    return _PROMPT_TEMPLATE.format(
        duration=prefs.duration,
        interests=", ".join(sorted(prefs.interests)) or DEFAULT_INTERESTS,
        budget=_amount(prefs.budget),
        currency=config.BASE_CURRENCY,
        group_size=prefs.group_size,
        start_location=prefs.start_location,
        custom_stops=", ".join(prefs.custom_stops) or DEFAULT_STOPS,
    )

# ──────────────────────────────────────────────────────────────────────────────
# Prompt – modify an existing itinerary
# ──────────────────────────────────────────────────────────────────────────────
def build_modify_prompt(current: Itinerary, change_request: str) -> str:
    """
    Ask the model to update `current` according to `change_request` written in
    natural language. The answer must be the full plan in the same JSON shape.
    """
    return (
        "You are an expert travel planner for Jharkhand, India. Current itinerary (JSON):\n"
        f"{json.dumps(current.to_list(), indent=2, ensure_ascii=False)}\n\n"
        "The user requests this change:\n"
        f"{change_request}\n\n"
        "Return ONLY the **full** updated itinerary as a JSON array in the exact same "
        'shape (keys: day, dayTotal, activities[name, time, description, estimatedCost]). '
        f"Estimate costs in {config.BASE_CURRENCY}, rounded to the nearest 50."
    )

# ──────────────────────────────────────────────────────────────────────────────
# Text-generation call
# ──────────────────────────────────────────────────────────────────────────────
def generate_text(prompt: str) -> str:
    """Send `prompt` to Gemini and return the raw answer text."""
    model = _get_model()
    try:
        resp = model.generate_content(
            prompt, request_options={"timeout": config.GEMINI_TIMEOUT}
        )
        text = resp.candidates[0].content.parts[0].text
    except Exception as exc:
        log.warning("Gemini call failed: %s", exc)
        raise UpstreamUnavailable(f"Gemini call failed: {exc}") from exc

    if not text or not text.strip():
        raise UpstreamUnavailable("Gemini returned an empty response.")
    return text
