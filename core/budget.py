# core/budget.py

from __future__ import annotations

from dataclasses import dataclass

from core.models import Itinerary


@dataclass(frozen=True)
class BudgetSummary:
    trip_total: int
    budget: float
    remaining: float      # negative when over budget
    percent_used: int     # clamped to 0..100 for progress bars

    @property
    def over_budget(self) -> bool:
        return self.remaining < 0


def summarize(itinerary: Itinerary, budget: float) -> BudgetSummary:
    """Trip total, remaining budget and percentage used, all in base currency."""
    trip_total = sum(d.day_total for d in itinerary.days)
    ratio = trip_total / max(1, budget) * 100
    percent = min(100, max(0, int(ratio + 0.5)))
    return BudgetSummary(
        trip_total=trip_total,
        budget=budget,
        remaining=budget - trip_total,
        percent_used=percent,
    )
