"""Body-metrics profile service."""

from dataclasses import dataclass
from datetime import date
from typing import Protocol

from fasting_tracker.domain.errors import ErrorKind, Result
from fasting_tracker.domain.profiles import Gender, Profile
from fasting_tracker.services.clock import Clock, utc_now
from fasting_tracker.services.metrics import calculate_age, calculate_bmr


class ProfileRepository(Protocol):
    """Persistence interface for profiles."""

    def get_profile(self, email: str) -> Profile | None:
        """Return the stored profile for a user, if present."""

    def save_profile(self, email: str, profile: Profile) -> None:
        """Replace the stored profile for a user."""


@dataclass
class ProfileService:
    """Saves profiles with their age and BMR snapshots."""

    repository: ProfileRepository
    clock: Clock = utc_now

    def get_profile(self, email: str) -> Profile | None:
        """Return the user's profile, if one was saved."""
        return self.repository.get_profile(email)

    def save_profile(  # noqa: PLR0913
        self,
        email: str,
        name: str,
        gender: Gender | str,
        birth_date: date,
        weight_kg: float,
        height_cm: float,
    ) -> Result[Profile]:
        """Compute derived values and overwrite the user's profile."""
        if not name.strip():
            return Result.failure(ErrorKind.MISSING_NAME)
        now = self.clock()
        if birth_date > now.date():
            return Result.failure(ErrorKind.INVALID_BIRTH_DATE)
        age = calculate_age(birth_date, now.date())

        gender = Gender(gender)
        profile = Profile(
            name=name.strip(),
            gender=gender,
            birth_date=birth_date,
            weight=weight_kg,
            height=height_cm,
            bmr=calculate_bmr(gender, weight_kg, height_cm, age),
            age=age,
            completed_at=now,
        )
        self.repository.save_profile(email, profile)
        return Result.success(profile)
