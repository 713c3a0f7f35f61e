"""Tests for the fasting session state machine."""

from datetime import timedelta

import pytest

from fasting_tracker.domain.errors import ErrorKind
from fasting_tracker.domain.fasting import FastingStatus
from fasting_tracker.services.fasting import FastingService
from fasting_tracker.services.metrics import remaining_minutes
from fasting_tracker.services.repository import RecordRepository
from tests.conftest import FakeClock, RecordingStore

EMAIL = "a@x.com"


@pytest.fixture
def service(repository: RecordRepository, clock: FakeClock) -> FastingService:
    return FastingService(repository, clock=clock)


def test_full_lifecycle_ends_completed(service: FastingService) -> None:
    assert service.start(EMAIL, "16:8", 960).ok
    assert service.pause(EMAIL).ok
    assert service.resume(EMAIL).ok
    result = service.complete(EMAIL)

    assert result.ok
    assert result.value.status is FastingStatus.COMPLETED
    stored = service.get_session(EMAIL)
    assert stored is not None
    assert stored.status is FastingStatus.COMPLETED
    assert stored.paused_time is None


def test_start_creates_active_session_at_now(
    service: FastingService, clock: FakeClock
) -> None:
    result = service.start(EMAIL, "16:8", 960)

    session = result.value
    assert session.status is FastingStatus.ACTIVE
    assert session.start_time == clock.now
    assert session.duration == 960
    assert session.paused_time is None


def test_start_replaces_existing_session(
    service: FastingService, clock: FakeClock
) -> None:
    service.start(EMAIL, "16:8", 960)
    clock.advance(30)
    service.pause(EMAIL)
    clock.advance(5)

    service.start(EMAIL, "20:4", 1200)

    session = service.get_session(EMAIL)
    assert session.method == "20:4"
    assert session.status is FastingStatus.ACTIVE
    assert session.paused_time is None
    assert session.start_time == clock.now


@pytest.mark.parametrize("operation", ["pause", "resume", "complete"])
def test_transitions_on_absent_session_report_no_active_session(
    service: FastingService, operation: str
) -> None:
    result = getattr(service, operation)(EMAIL)

    assert not result.ok
    assert result.error is ErrorKind.NO_ACTIVE_SESSION
    assert service.get_session(EMAIL) is None


def test_resume_on_active_session_is_invalid(service: FastingService) -> None:
    started = service.start(EMAIL, "16:8", 960).value

    result = service.resume(EMAIL)

    assert result.error is ErrorKind.INVALID_TRANSITION
    assert service.get_session(EMAIL) == started


def test_pause_twice_is_invalid_and_keeps_frozen_time(
    service: FastingService, clock: FakeClock
) -> None:
    service.start(EMAIL, "16:8", 60)
    clock.advance(10)
    paused = service.pause(EMAIL).value
    clock.advance(10)

    result = service.pause(EMAIL)

    assert result.error is ErrorKind.INVALID_TRANSITION
    assert service.get_session(EMAIL) == paused
    assert paused.paused_time == 50


def test_completed_session_rejects_further_transitions(
    service: FastingService,
) -> None:
    service.start(EMAIL, "16:8", 60)
    service.complete(EMAIL)

    assert service.pause(EMAIL).error is ErrorKind.INVALID_TRANSITION
    assert service.resume(EMAIL).error is ErrorKind.INVALID_TRANSITION
    assert service.complete(EMAIL).error is ErrorKind.INVALID_TRANSITION


def test_pause_clamps_remaining_time_at_zero(
    service: FastingService, clock: FakeClock
) -> None:
    service.start(EMAIL, "16:8", 60)
    clock.advance(90)

    paused = service.pause(EMAIL).value

    assert paused.paused_time == 0


def test_pause_resume_keeps_elapsed_time_continuous(
    service: FastingService, clock: FakeClock
) -> None:
    service.start(EMAIL, "16:8", 60)
    clock.advance(10)
    service.pause(EMAIL)
    clock.advance(240)

    resumed = service.resume(EMAIL).value

    assert resumed.start_time == clock.now - timedelta(minutes=10)
    assert remaining_minutes(resumed, clock.now) == 50
    clock.advance(49)
    assert service.progress(EMAIL).remaining_minutes == 1
    clock.advance(1)
    assert service.progress(EMAIL).remaining_minutes == 0
    assert service.progress(EMAIL).is_finished
    assert service.complete(EMAIL).ok


def test_complete_from_paused_clears_paused_time(
    service: FastingService, clock: FakeClock
) -> None:
    service.start(EMAIL, "16:8", 60)
    clock.advance(5)
    service.pause(EMAIL)

    completed = service.complete(EMAIL).value

    assert completed.status is FastingStatus.COMPLETED
    assert completed.paused_time is None


def test_clear_deletes_session_in_any_state(service: FastingService) -> None:
    assert service.clear(EMAIL).ok
    service.start(EMAIL, "16:8", 60)

    assert service.clear(EMAIL).ok
    assert service.get_session(EMAIL) is None
    assert service.progress(EMAIL) is None


def test_sessions_are_scoped_per_user(service: FastingService) -> None:
    service.start(EMAIL, "16:8", 60)

    assert service.pause("b@x.com").error is ErrorKind.NO_ACTIVE_SESSION
    assert service.get_session(EMAIL).status is FastingStatus.ACTIVE


def test_session_survives_service_restart(
    repository: RecordRepository, clock: FakeClock
) -> None:
    FastingService(repository, clock=clock).start(EMAIL, "16:8", 60)
    clock.advance(20)

    restarted = FastingService(repository, clock=clock)

    assert restarted.progress(EMAIL).remaining_minutes == 40


def test_session_stored_without_offset_counts_as_absent(
    service: FastingService, store: RecordingStore, repository: RecordRepository
) -> None:
    store.set(
        repository.fasting_key(EMAIL),
        '{"method": "16:8", "startTime": "2024-06-14T08:00:00", '
        '"duration": 960, "status": "active"}',
    )

    assert service.pause(EMAIL).error is ErrorKind.NO_ACTIVE_SESSION
    assert service.progress(EMAIL) is None
