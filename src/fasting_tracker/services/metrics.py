"""Pure calculators for body metrics and fasting timers."""

import math
from datetime import date, datetime, timedelta

from fasting_tracker.domain.fasting import (
    FastingProgress,
    FastingSession,
    FastingStatus,
)
from fasting_tracker.domain.profiles import Gender

_MS_PER_MINUTE = 60_000


def _round_half_up(value: float) -> int:
    """Round like JavaScript's Math.round (halves go towards +infinity)."""
    return math.floor(value + 0.5)


def calculate_bmr(
    gender: Gender | str, weight_kg: float, height_cm: float, age: int
) -> int:
    """Return the Harris-Benedict basal metabolic rate in kcal/day.

    Inputs are not validated; callers are expected to pass sane values.
    """
    if Gender(gender) is Gender.MALE:
        value = 88.362 + (13.397 * weight_kg) + (4.799 * height_cm) - (5.677 * age)
    else:
        value = 447.593 + (9.247 * weight_kg) + (3.098 * height_cm) - (4.330 * age)
    return _round_half_up(value)


def calculate_age(birth_date: date | str, today: date) -> int:
    """Return completed years between ``birth_date`` and ``today``.

    A birth date after ``today`` yields a negative number.
    """
    born = date.fromisoformat(birth_date) if isinstance(birth_date, str) else birth_date
    age = today.year - born.year
    if (today.month, today.day) < (born.month, born.day):
        age -= 1
    return age


def elapsed_minutes(start_time: datetime, now: datetime) -> float:
    """Return minutes between ``start_time`` and ``now`` on the caller's clock."""
    delta = now - start_time
    return (delta / timedelta(milliseconds=1)) / _MS_PER_MINUTE


def remaining_minutes(session: FastingSession, now: datetime) -> float:
    """Return the minutes left in a session.

    Active sessions count down from their start time, paused sessions stay
    frozen at ``paused_time``, completed sessions have nothing left.
    """
    if session.status is FastingStatus.COMPLETED:
        return 0.0
    if session.status is FastingStatus.PAUSED:
        return max(0.0, float(session.paused_time or 0.0))
    return max(0.0, session.duration - elapsed_minutes(session.start_time, now))


def progress_percent(session: FastingSession, now: datetime) -> float:
    """Return how much of the planned duration has passed, 0-100."""
    if session.status is FastingStatus.COMPLETED:
        return 100.0
    if session.duration <= 0:
        return 100.0
    done = session.duration - remaining_minutes(session, now)
    return min(100.0, max(0.0, done / session.duration * 100))


def fasting_progress(session: FastingSession, now: datetime) -> FastingProgress:
    """Bundle the timer values for a session at ``now``."""
    remaining = remaining_minutes(session, now)
    if session.status is FastingStatus.ACTIVE:
        elapsed = elapsed_minutes(session.start_time, now)
        planned_end = session.start_time + timedelta(minutes=session.duration)
    else:
        elapsed = session.duration - remaining
        planned_end = None
    return FastingProgress(
        session=session,
        elapsed_minutes=elapsed,
        remaining_minutes=remaining,
        percent_complete=progress_percent(session, now),
        planned_end=planned_end,
    )


def today_date(now: datetime) -> str:
    """Return the ISO calendar date used to partition meals and workouts."""
    return now.date().isoformat()
