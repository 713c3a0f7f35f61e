"""Shared test fixtures."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import pytest

from fasting_tracker.config import Settings
from fasting_tracker.containers import AppContainer, build_container
from fasting_tracker.services.repository import RecordRepository
from fasting_tracker.services.store import InMemoryKeyValueStore

START = datetime(2024, 6, 14, 8, 0, tzinfo=UTC)


@dataclass
class FakeClock:
    """Clock that only moves when a test advances it."""

    now: datetime = START

    def __call__(self) -> datetime:
        return self.now

    def advance(self, minutes: float) -> None:
        self.now = self.now + timedelta(minutes=minutes)


class RecordingStore(InMemoryKeyValueStore):
    """In-memory store that remembers every write."""

    def __init__(self) -> None:
        super().__init__()
        self.writes: list[tuple[str, str | None]] = []

    def set(self, key: str, value: str) -> None:
        self.writes.append((key, value))
        super().set(key, value)

    def delete(self, key: str) -> None:
        self.writes.append((key, None))
        super().delete(key)


@pytest.fixture
def settings() -> Settings:
    return Settings(storage_backend="memory", key_prefix="ifjourney")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture
def repository(store: RecordingStore) -> RecordRepository:
    return RecordRepository(store)


@pytest.fixture
def container(
    settings: Settings, store: RecordingStore, clock: FakeClock
) -> AppContainer:
    return build_container(settings, store=store, clock=clock)
