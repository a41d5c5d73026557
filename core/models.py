# core/models.py

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class TimeOfDay(str, Enum):
    MORNING = "Morning"
    AFTERNOON = "Afternoon"
    EVENING = "Evening"


@dataclass
class TripPreferences:
    duration: int = 3
    interests: set[str] = field(default_factory=set)
    budget: float = 10000
    group_size: int = 2
    start_location: str = "Ranchi"
    custom_stops: List[str] = field(default_factory=list)

    def __post_init__(self):
        if self.duration < 1:
            raise ValueError("duration must be a positive number of days.")
        if self.group_size < 1:
            raise ValueError("group_size must be at least 1.")
        if self.budget < 0:
            raise ValueError("budget cannot be negative.")
        self.interests = set(self.interests)
        self.custom_stops = list(self.custom_stops)

    def to_dict(self) -> dict:
        return {
            "duration": self.duration,
            "interests": sorted(self.interests),
            "budget": self.budget,
            "groupSize": self.group_size,
            "startLocation": self.start_location,
            "customStops": list(self.custom_stops),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TripPreferences":
        return cls(
            duration=int(data["duration"]),
            interests=set(data.get("interests") or []),
            budget=data["budget"],
            group_size=int(data["groupSize"]),
            start_location=data.get("startLocation", ""),
            custom_stops=list(data.get("customStops") or []),
        )


@dataclass
class Activity:
    name: str
    time_of_day: TimeOfDay = TimeOfDay.MORNING
    description: Optional[str] = None
    estimated_cost: int = 0

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "time": self.time_of_day.value,
            "description": self.description,
            "estimatedCost": self.estimated_cost,
        }


@dataclass
class ItineraryDay:
    day: int
    activities: List[Activity] = field(default_factory=list)
    day_total: int = 0

    def to_dict(self) -> dict:
        return {
            "day": self.day,
            "dayTotal": self.day_total,
            "activities": [a.to_dict() for a in self.activities],
        }


@dataclass
class Itinerary:
    days: List[ItineraryDay] = field(default_factory=list)

    @property
    def trip_total(self) -> int:
        return sum(d.day_total for d in self.days)

    def to_list(self) -> list[dict]:
        """Canonical JSON form: an array of day objects."""
        return [d.to_dict() for d in self.days]
