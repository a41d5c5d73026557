# services/rates.py
"""
Exchange-rate cache for display conversion.

The table starts from core.config.FALLBACK_RATES and is refreshed once per
session from RATES_API_URL (an open.er-api.com style body:
{"result": "success", "rates": {"USD": 0.012, ...}}). Whatever happens during
the fetch, every supported code keeps resolving to a positive rate.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

import requests

from core import config
from core.errors import RateUnavailable

log = logging.getLogger(__name__)


@dataclass
class RateFetchOutcome:
    source: str                                   # "live" | "fallback"
    updated: list[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def live(self) -> bool:
        return self.source == "live"


def fetch_rates(url: str) -> dict[str, float]:
    """Fetch live BASE→CODE multipliers. Raises RateUnavailable on any failure."""
    try:
        r = requests.get(url, timeout=config.RATES_TIMEOUT)
        r.raise_for_status()
        body = r.json()
    except (requests.RequestException, ValueError) as exc:
        raise RateUnavailable(f"rate fetch failed: {exc}") from exc

    rates = body.get("rates") if isinstance(body, dict) else None
    if not isinstance(rates, dict):
        raise RateUnavailable("rate response has no 'rates' mapping")
    return rates


class RateCache:
    def __init__(self, fallback: Optional[dict[str, float]] = None, url: Optional[str] = None):
        self._fallback = dict(fallback or config.FALLBACK_RATES)
        self._rates = dict(self._fallback)
        self._url = url or config.RATES_API_URL
        self.outcome: Optional[RateFetchOutcome] = None

    @property
    def codes(self) -> tuple[str, ...]:
        return tuple(self._rates)

    def refresh(self) -> RateFetchOutcome:
        """Fetch live rates once; later calls return the first outcome."""
        if self.outcome is not None:
            return self.outcome

        try:
            live = fetch_rates(self._url)
        except RateUnavailable as exc:
            log.info("Using fallback exchange rates (%s)", exc)
            self.outcome = RateFetchOutcome(source="fallback", error=str(exc))
            return self.outcome

        updated = []
        for code in self._fallback:
            value = live.get(code)
            if isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0:
                self._rates[code] = float(value)
                updated.append(code)

        if updated:
            self.outcome = RateFetchOutcome(source="live", updated=updated)
        else:
            self.outcome = RateFetchOutcome(source="fallback", error="no usable codes in response")
        log.info("Exchange rates ready (%s, %d live codes)", self.outcome.source, len(updated))
        return self.outcome

    def lookup(self, code: str) -> float:
        code = code.upper()
        if code not in self._rates:
            raise ValueError(f"Unsupported currency: {code}")
        return self._rates[code]

    def table(self) -> dict[str, float]:
        return dict(self._rates)
