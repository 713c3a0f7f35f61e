"""Meal plan service."""

from dataclasses import dataclass
from typing import Protocol
from uuid import uuid4

from fasting_tracker.domain.errors import ErrorKind, Result
from fasting_tracker.domain.meals import MealEntry
from fasting_tracker.services.clock import Clock, utc_now


class MealPlanRepository(Protocol):
    """Persistence interface for per-day meal lists."""

    def get_meals(self, email: str, day: str) -> list[MealEntry]:
        """Return the meals stored for a day, in insertion order."""

    def save_meals(self, email: str, day: str, meals: list[MealEntry]) -> None:
        """Replace the meal list for a day."""


@dataclass
class MealPlanService:
    """Reads and edits a user's meal list for one calendar day."""

    repository: MealPlanRepository
    clock: Clock = utc_now

    def list_meals(self, email: str, day: str) -> list[MealEntry]:
        """Return the day's meals."""
        return self.repository.get_meals(email, day)

    def add_meal(
        self, email: str, day: str, name: str, calories: float
    ) -> MealEntry:
        """Append a meal to the day's list and return it."""
        meals = self.repository.get_meals(email, day)
        entry = MealEntry(
            id=uuid4().hex,
            name=name.strip(),
            calories=calories,
            timestamp=self.clock(),
        )
        meals.append(entry)
        self.repository.save_meals(email, day, meals)
        return entry

    def remove_meal(self, email: str, day: str, meal_id: str) -> bool:
        """Drop a meal by id; returns False when it was not there."""
        meals = self.repository.get_meals(email, day)
        kept = [meal for meal in meals if meal.id != meal_id]
        if len(kept) == len(meals):
            return False
        self.repository.save_meals(email, day, kept)
        return True

    def replace_meals(
        self, email: str, day: str, meals: list[MealEntry]
    ) -> Result[list[MealEntry]]:
        """Overwrite the day's list, refusing lists with repeated ids."""
        ids = [meal.id for meal in meals]
        if len(set(ids)) != len(ids):
            return Result.failure(ErrorKind.DUPLICATE_ENTRY_ID)
        self.repository.save_meals(email, day, list(meals))
        return Result.success(list(meals))

    def total_calories(self, email: str, day: str) -> float:
        """Return the calories eaten on a day."""
        return sum(meal.calories for meal in self.repository.get_meals(email, day))
