"""Domain models for fasting sessions."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class FastingStatus(StrEnum):
    """Lifecycle states of a fasting session."""

    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"


@dataclass(frozen=True)
class FastingSession:
    """The single fasting session stored for a user.

    ``paused_time`` holds the minutes that were remaining when the session was
    paused and is only set while the status is ``paused``.
    """

    method: str
    start_time: datetime
    duration: float
    status: FastingStatus
    paused_time: float | None = None


@dataclass(frozen=True)
class FastingProgress:
    """Timer values derived from a session at a given instant."""

    session: FastingSession
    elapsed_minutes: float
    remaining_minutes: float
    percent_complete: float
    planned_end: datetime | None

    @property
    def is_finished(self) -> bool:
        return self.remaining_minutes <= 0
