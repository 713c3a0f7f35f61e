"""Workout log service."""

from dataclasses import dataclass
from typing import Protocol
from uuid import uuid4

from fasting_tracker.domain.meals import WorkoutEntry
from fasting_tracker.services.clock import Clock, utc_now
from fasting_tracker.services.metrics import today_date


class WorkoutRepository(Protocol):
    """Persistence interface for per-day workout lists."""

    def get_workouts(self, email: str, day: str) -> list[WorkoutEntry]:
        """Return the workouts stored for a day, in insertion order."""

    def add_workout(self, email: str, workout: WorkoutEntry) -> None:
        """Append a workout to the list for its date."""


@dataclass
class WorkoutService:
    """Appends workouts and reports what was burned."""

    repository: WorkoutRepository
    clock: Clock = utc_now

    def list_workouts(self, email: str, day: str) -> list[WorkoutEntry]:
        return self.repository.get_workouts(email, day)

    def log_workout(  # noqa: PLR0913
        self,
        email: str,
        workout_type: str,
        duration: float,
        calories_burned: float,
        day: str | None = None,
    ) -> WorkoutEntry:
        """Record a workout, on today's date unless ``day`` is given."""
        now = self.clock()
        workout = WorkoutEntry(
            id=uuid4().hex,
            date=day or today_date(now),
            type=workout_type,
            duration=duration,
            calories_burned=calories_burned,
            completed_at=now,
        )
        self.repository.add_workout(email, workout)
        return workout

    def total_burned(self, email: str, day: str) -> float:
        return sum(
            workout.calories_burned
            for workout in self.repository.get_workouts(email, day)
        )
