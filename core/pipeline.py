# core/pipeline.py
# One generation cycle: prompt → model text → payload → canonical itinerary → session.

from __future__ import annotations

import logging
from typing import Callable, Optional

from ai import gemini
from ai.extraction import extract_payload
from core.errors import GenerationFailed, UpstreamUnavailable, ValidationFailure
from core.models import Itinerary
from core.normalizer import normalize_itinerary
from core.session import PlannerSession

log = logging.getLogger(__name__)

TextGenerator = Callable[[str], str]


def parse_itinerary(raw: str) -> Itinerary:
    """Model text → canonical itinerary. Raises ExtractionFailure / ValidationFailure."""
    return normalize_itinerary(extract_payload(raw))


def _call_model(generate: TextGenerator, prompt: str) -> str:
    try:
        return generate(prompt)
    except GenerationFailed:
        raise
    except Exception as exc:
        raise UpstreamUnavailable(f"text generation failed: {exc}") from exc


def run_cycle(session: PlannerSession, prompt: str,
              generate: Optional[TextGenerator] = None) -> Optional[Itinerary]:
    """
    Run one cycle against `session`.

    Returns the new itinerary once it replaced the session's one, or None when
    the result arrived stale (session cleared or cancelled meanwhile). Raises
    GenerationFailed after recording it on the session; the previous itinerary
    is left untouched.
    """
    generate = generate or gemini.generate_text
    token = session.begin()
    try:
        itinerary = parse_itinerary(_call_model(generate, prompt))
    except GenerationFailed as exc:
        log.warning("Generation cycle %s failed: %s", token, exc)
        if session.fail(token, exc):
            raise
        return None
    except Exception as exc:
        # anything else the payload triggers still ends the cycle with a retry prompt
        log.exception("Generation cycle %s hit an unexpected payload error", token)
        failure = ValidationFailure(f"unexpected payload error: {exc}")
        if session.fail(token, failure):
            raise failure from exc
        return None

    if not session.complete(token, itinerary):
        return None
    log.info("Generation cycle %s produced %d days, total %d",
             token, len(itinerary.days), itinerary.trip_total)
    return itinerary


def generate_itinerary(session: PlannerSession,
                       generate: Optional[TextGenerator] = None) -> Optional[Itinerary]:
    return run_cycle(session, gemini.build_prompt(session.preferences), generate)


def modify_itinerary(session: PlannerSession, change_request: str,
                     generate: Optional[TextGenerator] = None) -> Optional[Itinerary]:
    if session.itinerary is None:
        raise ValueError("There is no itinerary to modify.")
    prompt = gemini.build_modify_prompt(session.itinerary, change_request)
    return run_cycle(session, prompt, generate)
