"""Domain models for meal plans and workouts."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class MealEntry:
    """A meal logged on a calendar day."""

    id: str
    name: str
    calories: float
    timestamp: datetime


@dataclass(frozen=True)
class WorkoutEntry:
    """A workout logged on a calendar day."""

    id: str
    date: str
    type: str
    duration: float
    calories_burned: float
    completed_at: datetime


@dataclass(frozen=True)
class DailySummary:
    """Calories eaten and burned on a day against the profile BMR."""

    day: str
    calories_consumed: float
    calories_burned: float
    bmr: int | None

    @property
    def net_calories(self) -> float:
        return self.calories_consumed - self.calories_burned
