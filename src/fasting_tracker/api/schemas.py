"""Pydantic models for HTTP request payloads."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from fasting_tracker.domain.profiles import Gender


class _Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class RegisterRequest(_Payload):
    """Email/password registration form."""

    email: str
    password: str
    name: str


class LoginRequest(_Payload):
    """Email/password login form."""

    email: str
    password: str


class GoogleLoginRequest(_Payload):
    """Credential returned by the Google Sign-In widget."""

    credential: str


class ProfileRequest(_Payload):
    """Body-metrics form."""

    name: str
    gender: Gender
    birth_date: date = Field(alias="birthDate")
    weight: float = Field(gt=0)
    height: float = Field(gt=0)


class StartFastingRequest(_Payload):
    """Fasting method label and planned length in minutes."""

    method: str
    duration: float = Field(gt=0)


class MealRequest(_Payload):
    """A meal to add to a day."""

    name: str = Field(min_length=1)
    calories: float = Field(ge=0)


class WorkoutRequest(_Payload):
    """A workout to log on a day."""

    type: str = Field(min_length=1)
    duration: float = Field(ge=0)
    calories_burned: float = Field(ge=0, alias="caloriesBurned")
