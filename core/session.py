# core/session.py
"""
PlannerSession: the single owner of the in-memory itinerary slot.

A generation cycle is begin() → (model call) → complete()/fail(). Every
begin() hands out a new token; only the holder of the current token can
publish a result, so a response that arrives after clear(), cancel() or a
newer request is dropped.
"""

from __future__ import annotations

import itertools
import logging
import threading
from typing import Optional

from core.errors import GenerationFailed, GenerationInProgress
from core.models import Itinerary, TripPreferences

log = logging.getLogger(__name__)


class PlannerSession:
    def __init__(self, preferences: Optional[TripPreferences] = None):
        self.preferences = preferences or TripPreferences()
        self.itinerary: Optional[Itinerary] = None
        self.error_message = ""
        self._tokens = itertools.count(1)
        self._current: Optional[int] = None
        self._lock = threading.Lock()

    @property
    def busy(self) -> bool:
        return self._current is not None

    def begin(self) -> int:
        with self._lock:
            if self._current is not None:
                raise GenerationInProgress("A generation request is already in flight.")
            self._current = next(self._tokens)
            self.error_message = ""
            return self._current

    def complete(self, token: int, itinerary: Itinerary) -> bool:
        """Publish `itinerary` if `token` is still current. Returns False for stale results."""
        with self._lock:
            if token != self._current:
                log.info("Discarding stale generation result (token %s)", token)
                return False
            self.itinerary = itinerary
            self._current = None
            return True

    def fail(self, token: int, error: GenerationFailed) -> bool:
        """Record a failed cycle; the previous itinerary stays in place."""
        with self._lock:
            if token != self._current:
                return False
            self.error_message = error.user_message
            self._current = None
            return True

    def cancel(self) -> None:
        with self._lock:
            self._current = None

    def clear(self) -> None:
        """Drop the current itinerary and any result still in flight."""
        with self._lock:
            self._current = None
            self.itinerary = None
            self.error_message = ""
