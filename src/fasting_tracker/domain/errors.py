"""Error taxonomy and result values returned by the core services."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorKind(StrEnum):
    """Kinds of failure a service call can report to its caller."""

    DUPLICATE_EMAIL = "duplicate_email"
    WEAK_PASSWORD = "weak_password"
    MISSING_NAME = "missing_name"
    INVALID_CREDENTIALS = "invalid_credentials"
    INVALID_IDENTITY_CLAIM = "invalid_identity_claim"
    NO_ACTIVE_SESSION = "no_active_session"
    INVALID_TRANSITION = "invalid_transition"
    CORRUPT_RECORD = "corrupt_record"
    INVALID_BIRTH_DATE = "invalid_birth_date"
    DUPLICATE_ENTRY_ID = "duplicate_entry_id"


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of an operation: either a value or an error kind."""

    value: T | None = None
    error: ErrorKind | None = None

    @property
    def ok(self) -> bool:
        """Return True when the operation succeeded."""
        return self.error is None

    @classmethod
    def success(cls, value: T | None = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: ErrorKind) -> "Result[T]":
        return cls(error=error)


class CorruptRecordError(ValueError):
    """Raised by the codec when a stored value cannot be decoded."""


class InvalidIdentityClaimError(ValueError):
    """Raised when an identity token cannot be decoded into a claim."""
