"""Typed record access over a key-value store."""

import logging
from dataclasses import dataclass
from typing import TypeVar

from fasting_tracker.domain.errors import CorruptRecordError
from fasting_tracker.domain.fasting import FastingSession
from fasting_tracker.domain.meals import MealEntry, WorkoutEntry
from fasting_tracker.domain.models import LoginState, User
from fasting_tracker.domain.profiles import Profile
from fasting_tracker.services.codec import (
    FASTING_SESSION_CODEC,
    LOGIN_STATE_CODEC,
    MEAL_ENTRY_CODEC,
    PROFILE_CODEC,
    USER_CODEC,
    WORKOUT_ENTRY_CODEC,
    EntityCodec,
)
from fasting_tracker.services.store import KeyValueStore

_logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT")

DEFAULT_KEY_PREFIX = "ifjourney"


@dataclass
class RecordRepository:
    """CRUD for users, profiles, fasting sessions, meals and workouts.

    Every write replaces the whole value stored under its key. Values that fail
    to decode are logged and read back as absent (single records) or empty
    (lists).
    """

    store: KeyValueStore
    prefix: str = DEFAULT_KEY_PREFIX

    # Key construction

    def users_key(self) -> str:
        return f"{self.prefix}_users"

    def login_key(self) -> str:
        return f"{self.prefix}_session"

    def profile_key(self, email: str) -> str:
        return f"{self.prefix}_profile_{email}"

    def fasting_key(self, email: str) -> str:
        return f"{self.prefix}_fasting_{email}"

    def meals_key(self, email: str, day: str) -> str:
        return f"{self.prefix}_meal_{email}_{day}"

    def workouts_key(self, email: str, day: str) -> str:
        return f"{self.prefix}_workout_{email}_{day}"

    # Generic operations

    def get_all(self, key: str, codec: EntityCodec[EntityT]) -> list[EntityT]:
        """Return the list stored under a key, or an empty list."""
        raw = self.store.get(key)
        if raw is None:
            return []
        try:
            return codec.decode_many(raw)
        except CorruptRecordError:
            _logger.warning("Ignoring corrupt record list: key=%s", key)
            return []

    def save_all(
        self, key: str, codec: EntityCodec[EntityT], entities: list[EntityT]
    ) -> None:
        """Overwrite the list stored under a key."""
        self.store.set(key, codec.encode_many(list(entities)))

    def get_one(self, key: str, codec: EntityCodec[EntityT]) -> EntityT | None:
        """Return the record stored under a key, if present and readable."""
        raw = self.store.get(key)
        if raw is None:
            return None
        try:
            return codec.decode(raw)
        except CorruptRecordError:
            _logger.warning("Ignoring corrupt record: key=%s", key)
            return None

    def save_one(self, key: str, codec: EntityCodec[EntityT], entity: EntityT) -> None:
        """Overwrite the record stored under a key."""
        self.store.set(key, codec.encode(entity))

    def delete(self, key: str) -> None:
        """Remove whatever is stored under a key."""
        self.store.delete(key)

    # Users

    def list_users(self) -> list[User]:
        return self.get_all(self.users_key(), USER_CODEC)

    def find_user(self, email: str) -> User | None:
        """Return the user whose email matches case-insensitively."""
        wanted = email.strip().lower()
        for user in self.list_users():
            if user.email.lower() == wanted:
                return user
        return None

    def add_user(self, user: User) -> None:
        """Append a user to the global user list."""
        users = self.list_users()
        users.append(user)
        self.save_all(self.users_key(), USER_CODEC, users)

    # Login marker

    def get_login_state(self) -> LoginState | None:
        return self.get_one(self.login_key(), LOGIN_STATE_CODEC)

    def save_login_state(self, state: LoginState) -> None:
        self.save_one(self.login_key(), LOGIN_STATE_CODEC, state)

    def clear_login_state(self) -> None:
        self.delete(self.login_key())

    # Profiles

    def get_profile(self, email: str) -> Profile | None:
        return self.get_one(self.profile_key(email), PROFILE_CODEC)

    def save_profile(self, email: str, profile: Profile) -> None:
        self.save_one(self.profile_key(email), PROFILE_CODEC, profile)

    # Fasting sessions

    def get_fasting_session(self, email: str) -> FastingSession | None:
        return self.get_one(self.fasting_key(email), FASTING_SESSION_CODEC)

    def save_fasting_session(
        self, email: str, session: FastingSession | None
    ) -> None:
        """Store a session, or delete the slot when ``session`` is None."""
        if session is None:
            self.delete(self.fasting_key(email))
            return
        self.save_one(self.fasting_key(email), FASTING_SESSION_CODEC, session)

    # Meals

    def get_meals(self, email: str, day: str) -> list[MealEntry]:
        return self.get_all(self.meals_key(email, day), MEAL_ENTRY_CODEC)

    def save_meals(self, email: str, day: str, meals: list[MealEntry]) -> None:
        self.save_all(self.meals_key(email, day), MEAL_ENTRY_CODEC, meals)

    # Workouts

    def get_workouts(self, email: str, day: str) -> list[WorkoutEntry]:
        return self.get_all(self.workouts_key(email, day), WORKOUT_ENTRY_CODEC)

    def add_workout(self, email: str, workout: WorkoutEntry) -> None:
        """Append a workout to the list for its own date."""
        workouts = self.get_workouts(email, workout.date)
        workouts.append(workout)
        self.save_all(
            self.workouts_key(email, workout.date), WORKOUT_ENTRY_CODEC, workouts
        )
