# core/normalizer.py
"""
Turn the loosely-typed day entries recovered from the model text into
validated ItineraryDay objects.

Validation is all-or-nothing: one structurally invalid day rejects the whole
itinerary with ValidationFailure. Individual fields, on the other hand, are
coerced to safe defaults (unknown time -> Morning, unreadable cost -> 0).
"""

from __future__ import annotations

import math
import re
from typing import Any, Iterable, List, Optional

from core.errors import ValidationFailure
from core.models import Activity, Itinerary, ItineraryDay, TimeOfDay

_NUMBER = re.compile(r"-?\d+(?:\.\d+)?")
_CURRENCY_PREFIX = re.compile(r"^(?:₹|rs\.?|inr)\s*", re.IGNORECASE)


def _number(value: Any) -> Optional[float]:
    """Read `value` as a finite number, or None. Accepts strings like "₹1,200"."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        text = _CURRENCY_PREFIX.sub("", value.replace(",", "").strip())
        if not _NUMBER.fullmatch(text):
            return None
        number = float(text)
    else:
        return None
    return number if math.isfinite(number) else None


def _round(number: float) -> int:
    # half-up, not banker's rounding
    return int(math.floor(number + 0.5))


def coerce_cost(value: Any) -> int:
    number = _number(value)
    if number is None or number < 0:
        return 0
    return _round(number)


def coerce_time(value: Any) -> TimeOfDay:
    if isinstance(value, str):
        text = value.strip().lower()
        for slot in TimeOfDay:
            if text == slot.value.lower():
                return slot
        for slot in TimeOfDay:
            if slot.value.lower() in text:
                return slot
    return TimeOfDay.MORNING


def normalize_activity(entry: Any) -> Activity:
    if not isinstance(entry, dict):
        raise ValidationFailure(f"Activity entry is not an object: {entry!r}")

    name = entry.get("name", "")
    description = entry.get("description")
    return Activity(
        name=name if isinstance(name, str) else str(name),
        time_of_day=coerce_time(entry.get("time", entry.get("timeOfDay"))),
        description=None if description is None else str(description),
        estimated_cost=coerce_cost(entry.get("estimatedCost", entry.get("cost"))),
    )


def normalize_day(entry: Any, position: int) -> ItineraryDay:
    """Normalize one day entry. `position` (1-based) numbers days that lack a valid `day`."""
    if not isinstance(entry, dict):
        raise ValidationFailure(f"Day entry #{position} is not an object.")
    raw_activities = entry.get("activities")
    if not isinstance(raw_activities, list):
        raise ValidationFailure(f"Day entry #{position} has no activities list.")

    activities = [normalize_activity(a) for a in raw_activities]

    declared = _number(entry.get("dayTotal"))
    if declared is not None and declared >= 0:
        day_total = _round(declared)
    else:
        day_total = sum(a.estimated_cost for a in activities)

    day = entry.get("day")
    if isinstance(day, bool) or not isinstance(day, int) or day < 1:
        day = position

    return ItineraryDay(day=day, activities=activities, day_total=day_total)


def normalize_days(candidates: Iterable[Any]) -> List[ItineraryDay]:
    days = [normalize_day(entry, i) for i, entry in enumerate(candidates, start=1)]
    if not days:
        raise ValidationFailure("Payload contains no days.")

    numbers = [d.day for d in days]
    if len(set(numbers)) != len(numbers):
        raise ValidationFailure(f"Duplicate day numbers in payload: {numbers}")
    return sorted(days, key=lambda d: d.day)


def normalize_itinerary(candidates: Iterable[Any]) -> Itinerary:
    return Itinerary(days=normalize_days(candidates))
