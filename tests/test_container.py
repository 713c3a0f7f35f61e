"""Tests for container wiring."""

import pytest

from fasting_tracker.config import Settings
from fasting_tracker.containers import build_container, build_store
from fasting_tracker.services.store import InMemoryKeyValueStore


def test_build_container_creates_services(settings: Settings) -> None:
    container = build_container(settings)

    assert isinstance(container.store, InMemoryKeyValueStore)
    assert container.repository.prefix == "ifjourney"
    assert container.fasting_service.repository is container.repository
    assert container.auth_gate.repository is container.repository


def test_services_share_the_injected_clock(settings: Settings, clock) -> None:
    container = build_container(settings, clock=clock)

    assert container.fasting_service.clock is clock
    assert container.workout_service.clock is clock


def test_build_store_requires_supabase_credentials() -> None:
    with pytest.raises(ValueError):
        build_store(Settings(storage_backend="supabase"))


def test_build_store_rejects_unknown_backend() -> None:
    with pytest.raises(ValueError):
        build_store(Settings(storage_backend="floppy"))
