"""Fasting session state machine."""

import logging
from dataclasses import dataclass, replace
from datetime import timedelta
from typing import Protocol

from fasting_tracker.domain.errors import ErrorKind, Result
from fasting_tracker.domain.fasting import (
    FastingProgress,
    FastingSession,
    FastingStatus,
)
from fasting_tracker.services.clock import Clock, utc_now
from fasting_tracker.services.metrics import fasting_progress, remaining_minutes

_logger = logging.getLogger(__name__)


class FastingSessionRepository(Protocol):
    """Persistence interface for the per-user fasting session."""

    def get_fasting_session(self, email: str) -> FastingSession | None:
        """Return the stored session for a user, if present."""

    def save_fasting_session(
        self, email: str, session: FastingSession | None
    ) -> None:
        """Store the session for a user, deleting it when None."""


@dataclass
class FastingService:
    """Drives a user's fasting session through active, paused and completed.

    Transitions:

    - ``start``: any state -> active (replaces an existing session)
    - ``pause``: active -> paused
    - ``resume``: paused -> active
    - ``complete``: active | paused -> completed
    - ``clear``: any state -> no session

    Rejected transitions leave the stored record untouched.
    """

    repository: FastingSessionRepository
    clock: Clock = utc_now

    def get_session(self, email: str) -> FastingSession | None:
        """Return the user's current or last session."""
        return self.repository.get_fasting_session(email)

    def start(
        self, email: str, method: str, duration_minutes: float
    ) -> Result[FastingSession]:
        """Start a new active session, replacing any existing one."""
        existing = self.repository.get_fasting_session(email)
        if existing is not None:
            _logger.info(
                "Replacing fasting session: email=%s previous_status=%s",
                email,
                existing.status,
            )
        session = FastingSession(
            method=method,
            start_time=self.clock(),
            duration=duration_minutes,
            status=FastingStatus.ACTIVE,
        )
        self.repository.save_fasting_session(email, session)
        return Result.success(session)

    def pause(self, email: str) -> Result[FastingSession]:
        """Freeze the remaining time of an active session."""
        session = self.repository.get_fasting_session(email)
        if session is None:
            return Result.failure(ErrorKind.NO_ACTIVE_SESSION)
        if session.status is not FastingStatus.ACTIVE:
            return Result.failure(ErrorKind.INVALID_TRANSITION)
        paused = replace(
            session,
            status=FastingStatus.PAUSED,
            paused_time=remaining_minutes(session, self.clock()),
        )
        self.repository.save_fasting_session(email, paused)
        return Result.success(paused)

    def resume(self, email: str) -> Result[FastingSession]:
        """Restart a paused session where it left off."""
        session = self.repository.get_fasting_session(email)
        if session is None:
            return Result.failure(ErrorKind.NO_ACTIVE_SESSION)
        if session.status is not FastingStatus.PAUSED:
            return Result.failure(ErrorKind.INVALID_TRANSITION)
        already_elapsed = session.duration - (session.paused_time or 0.0)
        resumed = replace(
            session,
            status=FastingStatus.ACTIVE,
            start_time=self.clock() - timedelta(minutes=already_elapsed),
            paused_time=None,
        )
        self.repository.save_fasting_session(email, resumed)
        return Result.success(resumed)

    def complete(self, email: str) -> Result[FastingSession]:
        """Mark an active or paused session as completed and keep it."""
        session = self.repository.get_fasting_session(email)
        if session is None:
            return Result.failure(ErrorKind.NO_ACTIVE_SESSION)
        if session.status is FastingStatus.COMPLETED:
            return Result.failure(ErrorKind.INVALID_TRANSITION)
        completed = replace(session, status=FastingStatus.COMPLETED, paused_time=None)
        self.repository.save_fasting_session(email, completed)
        return Result.success(completed)

    def clear(self, email: str) -> Result[None]:
        """Delete the user's session whatever its state."""
        self.repository.save_fasting_session(email, None)
        return Result.success()

    def progress(self, email: str) -> FastingProgress | None:
        """Return timer values for the user's session at the current instant."""
        session = self.repository.get_fasting_session(email)
        if session is None:
            return None
        return fasting_progress(session, self.clock())
