# ai/extraction.py
"""
Recover the JSON payload embedded in a model answer.

The model is asked for a bare JSON array but routinely wraps it in prose
("Sure! Here's your plan: ..."), leaves trailing commas or breaks lines inside
strings. This module only *finds and parses* the payload; typing and
validation of what it contains happen in core.normalizer.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, List

from core.errors import ExtractionFailure

log = logging.getLogger(__name__)

_PAIRS = {"[": "]", "{": "}"}
WRAPPER_KEYS = ("days", "itinerary", "plan")

_TRAILING_COMMA = re.compile(r",\s*([\]}])")
_SMART_QUOTES = str.maketrans({"“": '"', "”": '"', "„": '"'})
_LOG_PREVIEW = 500


def find_payload(raw: str) -> str | None:
    """
    Return the outermost bracketed region of `raw`: from the first opening
    bracket to the last closing bracket of the same kind, or None.
    """
    regions = []
    for opener, closer in _PAIRS.items():
        start = raw.find(opener)
        end = raw.rfind(closer)
        if start != -1 and end > start:
            regions.append((start, end))
    if not regions:
        return None
    start, end = min(regions)
    return raw[start:end + 1]


def repair(text: str) -> str:
    """Collapse newlines and drop trailing commas before a closing bracket."""
    text = re.sub(r"[\r\n]+", " ", text)
    return _TRAILING_COMMA.sub(r"\1", text)


def _parse(text: str) -> Any:
    try:
        return json.loads(text)
    except ValueError:
        # “curly” double quotes are the other usual defect
        return json.loads(text.translate(_SMART_QUOTES))


def _fail(message: str, raw: str) -> ExtractionFailure:
    log.warning("%s; raw model text: %r", message, raw[:_LOG_PREVIEW])
    return ExtractionFailure(message, raw_text=raw)


def extract_payload(raw: str) -> List[Any]:
    """
    Return the list of candidate day entries embedded in `raw`.

    Raises ExtractionFailure when no bracketed region exists, when the repaired
    region is not valid JSON, or when the value is neither a list nor an object
    wrapping a list under one of WRAPPER_KEYS.
    """
    region = find_payload(raw or "")
    if region is None:
        raise _fail("No bracketed payload found in model output", raw or "")

    try:
        value = _parse(repair(region))
    except (ValueError, RecursionError) as exc:
        # ValueError covers JSONDecodeError and over-long integer literals
        raise _fail(f"Payload is not valid JSON ({type(exc).__name__}: {exc})", raw) from exc

    if isinstance(value, list):
        return value
    if isinstance(value, dict):
        for key in WRAPPER_KEYS:
            if isinstance(value.get(key), list):
                return value[key]
    raise _fail("Payload is neither a list nor a wrapped list", raw)
