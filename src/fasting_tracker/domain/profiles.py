"""Domain models for body-metrics profiles."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum


class Gender(StrEnum):
    """Gender codes used by the BMR formulas."""

    MALE = "L"
    FEMALE = "P"


@dataclass(frozen=True)
class Profile:
    """Body-metrics profile with cached derived values."""

    name: str
    gender: Gender
    birth_date: date
    weight: float
    height: float
    bmr: int
    age: int
    completed_at: datetime
