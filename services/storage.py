# services/storage.py
"""
Local durable storage for trip preferences and saved plans, plus JSON export.

Storage is a key → text mapping: one JSON file per key under the data
directory. Reading a missing or corrupt key never raises; it yields the
documented default and a LoadOutcome saying so.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from dataclasses import dataclass
from typing import Any, List, Optional

from core import config
from core.errors import PlannerError, StorageUnavailable
from core.models import Itinerary, TripPreferences
from core.normalizer import normalize_itinerary

log = logging.getLogger(__name__)

PREFERENCES_KEY = "trip_preferences"
SAVED_PLANS_KEY = "saved_plans"


def default_preferences() -> TripPreferences:
    return TripPreferences()


@dataclass
class LoadOutcome:
    value: Any
    source: str                 # "stored" | "default"
    error: Optional[str] = None


def export_plan(itinerary: Itinerary) -> str:
    """Pretty-printed JSON document of exactly the canonical itinerary."""
    return json.dumps(itinerary.to_list(), indent=2, ensure_ascii=False)


class PlanStore:
    def __init__(self, data_dir: Optional[str] = None):
        self.data_dir = data_dir or config.PLANNER_DATA_DIR
        self._lock = threading.Lock()

    # ── raw key/text access ───────────────────────────────────────────────────
    def _path(self, key: str) -> str:
        return os.path.join(self.data_dir, f"{key}.json")

    def read(self, key: str) -> str:
        try:
            with open(self._path(key), "r", encoding="utf-8") as f:
                return f.read()
        except OSError as exc:
            raise StorageUnavailable(f"cannot read '{key}': {exc}") from exc

    def _backup_path(self, key: str) -> str:
        """First free name among <key>.json.bak, <key>.json.bak.1, <key>.json.bak.2, ..."""
        path = f"{self._path(key)}.bak"
        n = 0
        while os.path.exists(path if n == 0 else f"{path}.{n}"):
            n += 1
        return path if n == 0 else f"{path}.{n}"

    def write(self, key: str, text: str) -> None:
        os.makedirs(self.data_dir, exist_ok=True)
        path = self._path(key)
        tmp = f"{path}.tmp"
        with open(tmp, "w", encoding="utf-8") as f:
            f.write(text)
        os.replace(tmp, path)

    def _load(self, key: str, decode, default) -> LoadOutcome:
        try:
            value = decode(json.loads(self.read(key)))
        except (StorageUnavailable, ValueError, KeyError, TypeError, OverflowError,
                RecursionError, PlannerError) as exc:
            if os.path.exists(self._path(key)):
                log.warning("Stored '%s' is unreadable, using defaults: %s", key, exc)
            return LoadOutcome(value=default(), source="default", error=str(exc))
        return LoadOutcome(value=value, source="stored")

    # ── preferences ───────────────────────────────────────────────────────────
    def load_preferences_outcome(self) -> LoadOutcome:
        return self._load(PREFERENCES_KEY, TripPreferences.from_dict, default_preferences)

    def load_preferences(self) -> TripPreferences:
        return self.load_preferences_outcome().value

    def save_preferences(self, prefs: TripPreferences) -> None:
        with self._lock:
            self.write(PREFERENCES_KEY, json.dumps(prefs.to_dict(), ensure_ascii=False))

    # ── saved plans (append-only) ─────────────────────────────────────────────
    @staticmethod
    def _decode_plans(data: Any) -> List[Itinerary]:
        if not isinstance(data, list):
            raise ValueError("saved plans must be a list")
        return [normalize_itinerary(snapshot) for snapshot in data]

    def load_saved_plans_outcome(self) -> LoadOutcome:
        return self._load(SAVED_PLANS_KEY, self._decode_plans, list)

    def load_saved_plans(self) -> List[Itinerary]:
        return self.load_saved_plans_outcome().value

    def append_saved_plan(self, itinerary: Itinerary) -> int:
        """Append a snapshot and persist the whole collection. Returns the new count."""
        with self._lock:
            outcome = self.load_saved_plans_outcome()
            if outcome.error and os.path.exists(self._path(SAVED_PLANS_KEY)):
                # keep the unreadable file aside rather than overwrite it
                os.replace(self._path(SAVED_PLANS_KEY), self._backup_path(SAVED_PLANS_KEY))
            plans = [p.to_list() for p in outcome.value] + [itinerary.to_list()]
            self.write(SAVED_PLANS_KEY, json.dumps(plans, ensure_ascii=False))
        return len(plans)
